"""Exception hierarchy for Graph API calls.

Every failure is terminal for the call that raised it; nothing is retried.
"""

from typing import Any


class GraphError(Exception):
    """Generic client library error."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"message": self.message}
        if self.cause is not None:
            data["cause"] = repr(self.cause)
        return data


class ValidationError(GraphError):
    """Malformed call arguments, reported before any network activity."""


class TransportError(GraphError):
    """The HTTP layer failed (connection, DNS, TLS, timeout...)."""


class ParseError(GraphError):
    """A JSON-shaped response body could not be decoded."""


class GraphAPIError(GraphError):
    """The Graph API answered with an embedded ``error`` payload.

    ``error`` keeps the payload exactly as the API sent it.
    """

    def __init__(self, error: Any):
        self.error = error
        details = error if isinstance(error, dict) else {}
        self.type = details.get("type")
        self.code = details.get("code")
        super().__init__(str(details.get("message", error)))
