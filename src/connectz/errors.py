"""ConnectZ exception hierarchy.

Shared across validation, forms, security, and the service glue so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class ConnectzError(Exception):
    """Base for all connectz-specific errors."""


class ConfigurationError(ConnectzError):
    """Raised when the library or a form is set up incorrectly.

    Typically raised at import or bind time, never during evaluation.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(ConnectzError):
    """An error that maps directly to an HTTP status code.

    Raised by the service glue. Whatever serves the JSON endpoints turns
    these into ``{"error": detail}`` responses with ``status``.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)

    def to_payload(self) -> dict[str, str]:
        """The JSON body for this error."""
        return {"error": self.detail}


class BadRequest(HTTPError):  # noqa: N818
    """400: the caller sent missing or malformed input."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class IntegrationError(ConnectzError):
    """Raised when a third-party API returns an error response."""

    def __init__(self, service: str, status: int, detail: str) -> None:
        self.service = service
        self.status = status
        self.detail = detail
        super().__init__(f"{service} returned {status}: {detail}")


class WebhookSignatureError(ConnectzError):
    """Raised when a webhook signature header is missing, malformed, or wrong."""
