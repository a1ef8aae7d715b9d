from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .errors import TransportError

DEFAULT_METHOD = "GET"
JSON_CONTENT_TYPE = "Content-Type: application/json"


def split_header(raw: str) -> Optional[Tuple[str, str]]:
    """Split a raw ``Key: Value`` header at the first colon.

    Leading spaces are trimmed from the value only. Returns None when the
    string has no colon; every consumer that needs key/value pairs goes
    through here so they all agree on what an unparseable header is.
    """
    key, sep, value = raw.partition(":")
    if not sep:
        return None
    return key, value.lstrip(" ")


@dataclass
class Request:
    url: str = ""
    method: str = DEFAULT_METHOD
    headers: List[str] = field(default_factory=list)
    body: str = ""
    follow_redirects: bool = True
    timeout: int = 0
    verbose: bool = False

    def __post_init__(self):
        self.method = (self.method or DEFAULT_METHOD).strip().upper() or DEFAULT_METHOD
        if self.timeout < 0:
            raise ValueError("timeout must be >= 0")

    @property
    def is_configured(self) -> bool:
        return bool(self.url)

    def header_pairs(self) -> List[Tuple[str, str]]:
        pairs = []
        for raw in self.headers:
            pair = split_header(raw)
            if pair is not None:
                pairs.append(pair)
        return pairs

    def has_header(self, name: str) -> bool:
        name = name.lower()
        return any(k.strip().lower() == name for k, _ in self.header_pairs())


@dataclass
class Response:
    status_code: int = 0
    body_text: str = ""
    elapsed_ms: float = 0.0
    transport_error: Optional[TransportError] = None
    reason: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    size_bytes: int = 0
    trace: List[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.transport_error is not None

    @property
    def is_success(self) -> bool:
        return not self.failed and 200 <= self.status_code < 300
