from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

BANNER_PATTERN = r"(?m)^=== .+ ===$"


def status_style(code: int) -> str:
    if 200 <= code < 300:
        return "green"
    if 300 <= code < 400:
        return "blue"
    if 400 <= code < 500:
        return "yellow"
    return "red"


class Presenter:
    """All terminal output goes through here.

    Nothing printed is interpreted as rich markup: response bodies and
    generated code are full of square brackets.
    """

    def __init__(self, console: Optional[Console] = None, color: bool = True):
        if console is None:
            console = Console(highlight=False, emoji=False, no_color=not color)
        self.console = console

    def _print(self, text, style: Optional[str] = None, end: str = "\n"):
        self.console.print(text, style=style, end=end, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def line(self, text: str = "", style: Optional[str] = None):
        self._print(text, style=style)

    def prompt(self, text: str):
        self._print(text, end="")

    def banner(self, name: str, version: str):
        title = Text.assemble((name, "bold"), f" - Simple HTTP Client CLI v{version}")
        self.console.print()
        self.console.print(Panel(title, border_style="cyan", expand=False, padding=(0, 6)))
        self.console.print()

    def menu(self, title: str, options: Iterable[str], style: str = "blue"):
        body = Text("\n".join(f"{i}. {opt}" for i, opt in enumerate(options, 1)))
        self.console.print(Panel(body, title=title, title_align="left", border_style=style, expand=False))

    def heading(self, text: str):
        self._print(f"\n=== {text} ===", style="cyan")

    def field(self, label: str, value: str = ""):
        self.console.print(Text.assemble((f"{label}:", "bold"), f" {value}" if value else ""), soft_wrap=True)

    def info(self, msg: str):
        self._print(f"[i] {msg}", style="yellow")

    def progress(self, msg: str):
        self._print(f"[→] {msg}", style="yellow")

    def success(self, msg: str):
        self._print(f"[✓] {msg}", style="green")

    def warning(self, msg: str):
        self._print(f"[!] {msg}", style="red")

    def error(self, msg: str):
        self._print(f"[✗] {msg}", style="red")

    def status(self, code: int, reason: str = ""):
        label = f"{code} {reason}".rstrip()
        self._print(f"[i] Status Code: {label}", style=status_style(code))

    def separator(self, title: Optional[str] = None):
        self._print(f"--- {title} ---" if title else "-" * 21, style="cyan")

    def trace(self, lines: Iterable[str]):
        for ln in lines:
            self._print(ln, style="dim")

    def code(self, source: str):
        text = Text(source.rstrip("\n"))
        text.highlight_regex(BANNER_PATTERN, style="green")
        self.console.print(text, soft_wrap=True)
        self.console.print()

    def body(self, text: str):
        self._print(text.rstrip("\n"))
