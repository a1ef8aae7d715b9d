import logging
import time
from typing import List, Optional

import requests
from requests.structures import CaseInsensitiveDict

from .errors import TransportError
from .models import Request, Response, split_header


def build_headers(raw_headers: List[str]) -> CaseInsensitiveDict:
    """Turn raw header lines into the mapping requests expects.

    Lines without a colon are skipped; repeated keys are folded into one
    comma-separated value, in order.
    """
    out = CaseInsensitiveDict()
    for raw in raw_headers:
        pair = split_header(raw)
        if pair is None:
            logging.warning("Skipping header without a colon: %r", raw)
            continue
        key, value = pair[0].strip(), pair[1]
        if key in out:
            out[key] = f"{out[key]}, {value}"
        else:
            out[key] = value
    return out


def _trace(resp: requests.Response) -> List[str]:
    lines = []
    for hop in list(resp.history) + [resp]:
        sent = hop.request
        if sent is not None:
            lines.append(f"> {sent.method} {sent.url}")
            lines += [f"> {k}: {v}" for k, v in sent.headers.items()]
        lines.append(f"< {hop.status_code} {hop.reason or ''}".rstrip())
        lines += [f"< {k}: {v}" for k, v in hop.headers.items()]
    return lines


def execute(req: Request, session: Optional[requests.Session] = None) -> Response:
    """Send ``req`` once and buffer the whole response.

    Anything that keeps an HTTP response from arriving is returned as a
    Response carrying a TransportError rather than raised.
    """
    own_session = session is None
    sess = session or requests.Session()
    data = req.body.encode("utf-8") if req.body else None
    logging.info("Sending %s %s", req.method, req.url)
    t0 = time.time()
    try:
        resp = sess.request(
            req.method,
            req.url,
            headers=build_headers(req.headers),
            data=data,
            allow_redirects=req.follow_redirects,
            timeout=req.timeout or None,
        )
        elapsed_ms = (time.time() - t0) * 1000
    except requests.exceptions.RequestException as e:
        elapsed_ms = (time.time() - t0) * 1000
        logging.info("Request %s %s failed after %.2fms: %s", req.method, req.url, elapsed_ms, e)
        return Response(elapsed_ms=elapsed_ms, transport_error=TransportError.from_exception(e))
    finally:
        if own_session:
            sess.close()

    logging.info("%s %s -> %s in %.2fms", req.method, req.url, resp.status_code, elapsed_ms)
    return Response(
        status_code=resp.status_code,
        body_text=resp.text or "",
        elapsed_ms=elapsed_ms,
        reason=resp.reason or "",
        headers=dict(resp.headers),
        size_bytes=len(resp.content or b""),
        trace=_trace(resp) if req.verbose else [],
    )
