from typing import Optional


class MiniPostmanError(Exception):
    """Base exception for the CLI."""
    pass


class TransportError(MiniPostmanError):
    """Raised when a request never produced an HTTP response (DNS, refused, TLS, timeout)."""
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    @classmethod
    def from_exception(cls, exc: BaseException) -> "TransportError":
        return cls(f"{type(exc).__name__}: {exc}", cause=exc)


class SettingsError(MiniPostmanError):
    """Raised when the settings file cannot be written."""
    pass
