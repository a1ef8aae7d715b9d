import copy
import logging
from typing import Callable, List, Optional

from . import APP_NAME, __version__
from .codegen import Language, render_all, render_section
from .errors import SettingsError
from .json_format import format_json, looks_like_json
from .models import DEFAULT_METHOD, JSON_CONTENT_TYPE, Request, Response
from .presenter import Presenter
from .settings import DEFAULT_SETTINGS, load_settings, save_settings, settings_path, setup_logging
from .transport import execute

BODY_TERMINATOR = "@@@"
NO_BODY_METHODS = ("GET", "DELETE")

MAIN_OPTIONS = ["New Request", "View Last Request", "Generate Code", "Help", "Exit"]
CODE_OPTIONS = ["cURL", "JavaScript (Fetch)", "Python (requests)", "Rust (reqwest)",
                "Java (HttpClient)", "All Languages"]

HELP_SECTIONS = [
    ("Features", [
        "• Support for all HTTP methods (GET, POST, PUT, DELETE, PATCH, etc.)",
        "• Custom headers support",
        "• Multiline JSON/body input",
        "• Follow redirects",
        "• Request timeout",
        "• Verbose mode showing the request/response exchange",
        "• Code generation for multiple languages",
        "• Colored and formatted output",
        "• Response time measurement",
    ]),
    ("Usage", [
        "1. Select 'New Request' from the menu",
        "2. Enter request details (URL, method, headers, body)",
        f"3. For JSON body: Type or paste (multiline supported), end with {BODY_TERMINATOR} on new line",
        "4. View the response",
        "5. Generate code snippets in various languages",
    ]),
    ("Tips", [
        "• A body starting with { or [ gets Content-Type: application/json unless you set one",
        f"• Use {BODY_TERMINATOR} on a new line to finish multiline body input",
        "• Defaults and limits can be changed in ~/.mini_postman_cli.json",
    ]),
]


class Shell:
    def __init__(self, presenter: Optional[Presenter] = None, settings: Optional[dict] = None,
                 input_func: Callable[[], str] = input,
                 transport: Callable[[Request], Response] = execute):
        self.presenter = presenter or Presenter()
        self.settings = settings or copy.deepcopy(DEFAULT_SETTINGS)
        self.defaults = self.settings["defaults"]
        self.limits = self.settings["limits"]
        self.input_func = input_func
        self.transport = transport
        self.last_request = Request(
            follow_redirects=self.defaults["follow_redirects"],
            timeout=self.defaults["timeout"],
            verbose=self.defaults["verbose"],
        )

    # ---------- input helpers ----------
    def _ask(self, prompt: str) -> str:
        self.presenter.prompt(prompt)
        return self.input_func().rstrip("\r\n")

    def _yes_no(self, prompt: str, default: bool) -> bool:
        answer = self._ask(f"{prompt} (y/n) [{'y' if default else 'n'}]: ").strip()
        if not answer:
            return default
        if default:
            return answer[0] not in "nN"
        return answer[0] in "yY"

    def _pause(self):
        self._ask("\nPress Enter to continue...")

    # ---------- main loop ----------
    def run(self) -> int:
        p = self.presenter
        p.banner(APP_NAME, __version__)
        actions = {
            1: self.new_request,
            2: self.view_last_request,
            3: self.generate_code,
            4: self.show_help,
        }
        try:
            while True:
                p.menu("Main Menu", MAIN_OPTIONS)
                raw = self._ask("Select option: ").strip()
                try:
                    choice = int(raw)
                except ValueError:
                    choice = None
                if choice == 5:
                    p.success(f"Thanks for using {APP_NAME}!")
                    p.line()
                    return 0
                action = actions.get(choice)
                if action is None:
                    p.warning("Invalid option")
                else:
                    try:
                        action()
                    except EOFError:
                        raise
                    except Exception as e:
                        logging.exception("Unexpected error while handling menu option %s", choice)
                        p.error(f"Unexpected error: {e}")
                self._pause()
        except (EOFError, KeyboardInterrupt):
            p.line()
            p.success(f"Thanks for using {APP_NAME}!")
            return 0

    # ---------- 1. new request ----------
    def new_request(self):
        req = self.configure_request()
        self.last_request = req
        self.send(req)

    def configure_request(self) -> Request:
        p = self.presenter
        p.heading("Configure Request")
        p.line()
        url = self._read_url()
        method = self._ask(f"Enter Method (GET/POST/PUT/DELETE/PATCH) [{DEFAULT_METHOD}]: ").strip().upper()
        method = method or DEFAULT_METHOD

        headers = self._read_headers() if self._yes_no("\nAdd headers?", False) else []

        body = ""
        if method not in NO_BODY_METHODS and self._yes_no("\nAdd request body?", False):
            body = self._read_body()

        req = Request(url=url, method=method, headers=headers, body=body)
        if looks_like_json(body.lstrip()) and not req.has_header("Content-Type"):
            if len(req.headers) < self.limits["max_headers"]:
                req.headers.append(JSON_CONTENT_TYPE)
                p.info(f"Auto-added {JSON_CONTENT_TYPE} header")

        req.follow_redirects = self._yes_no("\nFollow redirects?", self.defaults["follow_redirects"])
        req.timeout = self._read_timeout()
        req.verbose = self._yes_no("Verbose mode?", self.defaults["verbose"])
        return req

    def _read_url(self) -> str:
        max_len = self.limits["max_url_len"]
        while True:
            url = self._ask("Enter URL: ").strip()
            if not url:
                self.presenter.warning("URL cannot be empty")
            elif len(url) > max_len:
                self.presenter.warning(f"URL is longer than {max_len} characters")
            else:
                return url

    def _read_headers(self) -> List[str]:
        p = self.presenter
        max_headers, max_len = self.limits["max_headers"], self.limits["max_header_len"]
        p.line("Enter headers (format: Key: Value, empty line to finish):")
        headers = []
        while len(headers) < max_headers:
            line = self._ask(f"  Header {len(headers) + 1}: ")
            if not line.strip():
                return headers
            if len(line) > max_len:
                p.warning(f"Header is longer than {max_len} characters; skipped")
                continue
            headers.append(line)
        p.info(f"Header limit of {max_headers} reached")
        return headers

    def _read_body(self) -> str:
        max_len = self.limits["max_body_len"]
        self.presenter.line(f"\nEnter request body (multiline supported, end with {BODY_TERMINATOR} on new line):")
        lines = []
        while True:
            line = self._ask("")
            if line == BODY_TERMINATOR:
                break
            lines.append(line)
        body = "\n".join(lines)
        if len(body) > max_len:
            self.presenter.warning(f"Body is longer than {max_len} characters; truncated")
            body = body[:max_len]
        return body

    def _read_timeout(self) -> int:
        default = self.defaults["timeout"]
        while True:
            raw = self._ask(f"Timeout in seconds (0 for none) [{default}]: ").strip()
            if not raw:
                return default
            try:
                value = int(raw)
            except ValueError:
                value = -1
            if value >= 0:
                return value
            self.presenter.warning("Timeout must be a whole number of seconds (0 or more)")

    def send(self, req: Request) -> Response:
        self.presenter.progress(f"Sending {req.method} request to {req.url}...")
        resp = self.transport(req)
        self.show_response(resp)
        return resp

    def show_response(self, resp: Response):
        p = self.presenter
        if resp.failed:
            p.error(f"Request failed: {resp.transport_error}")
            return
        p.success(f"Response received in {resp.elapsed_ms:.2f}ms")
        p.status(resp.status_code, resp.reason)
        p.info(f"Size: {resp.size_bytes} bytes")
        if resp.trace:
            p.separator("Verbose")
            p.trace(resp.trace)
        p.separator("Response Body")
        if looks_like_json(resp.body_text):
            p.body(format_json(resp.body_text))
        else:
            p.body(resp.body_text)
        p.separator()

    # ---------- 2. view last ----------
    def view_last_request(self):
        p = self.presenter
        req = self.last_request
        if not req.is_configured:
            p.warning("No request made yet")
            return
        p.heading("Last Request")
        p.field("URL", req.url)
        p.field("Method", req.method)
        if req.headers:
            p.field("Headers")
            for h in req.headers:
                p.line(f"  {h}")
        if req.body:
            p.field("Body")
            p.body(req.body)
        p.field("Follow Redirects", "Yes" if req.follow_redirects else "No")
        p.field("Timeout", f"{req.timeout} seconds")
        p.field("Verbose", "Yes" if req.verbose else "No")

    # ---------- 3. generate code ----------
    def generate_code(self):
        p = self.presenter
        req = self.last_request
        if not req.is_configured:
            p.warning("No request to generate code from")
            return
        p.line()
        p.menu("Generate Code", CODE_OPTIONS, style="magenta")
        raw = self._ask("\nSelect language: ").strip()
        try:
            choice = int(raw)
        except ValueError:
            choice = 0
        if choice == len(CODE_OPTIONS):
            p.code(render_all(req))
            return
        lang = Language.from_choice(choice)
        if lang is None:
            p.warning("Invalid choice")
            return
        p.code(render_section(req, lang))

    # ---------- 4. help ----------
    def show_help(self):
        p = self.presenter
        p.heading(f"{APP_NAME} Help")
        for title, items in HELP_SECTIONS:
            p.line()
            p.line(f"{title}:", style="bold")
            for item in items:
                p.line(f"  {item}")


def main() -> int:
    path = settings_path()
    settings = load_settings(path)
    setup_logging(settings)
    shell = Shell(Presenter(color=settings["color"]), settings)
    if not path.exists():
        try:
            save_settings(settings, path)
        except SettingsError as e:
            shell.presenter.warning(str(e))
    return shell.run()
