"""Interactive command-line HTTP client with code generation."""

__version__ = "1.0.0"
APP_NAME = "Mini Postman"

from .codegen import Language, render, render_all  # noqa: E402
from .json_format import format_json  # noqa: E402
from .models import Request, Response, split_header  # noqa: E402
