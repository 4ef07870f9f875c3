"""Error taxonomy for the case search core.

Errors carry a stable ``code`` so the handler layer can map them to HTTP
responses without inspecting messages.
"""

from enum import Enum
from typing import Any


class UpstreamErrorKind(str, Enum):
    """Why the upstream corpus fetch could not be completed."""

    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"
    BAD_RESPONSE = "bad_response"
    MALFORMED_PAYLOAD = "malformed_payload"


class CaseSearchError(Exception):
    """Base exception for all case search errors.

    Attributes:
        message: Human-readable error message (safe for end users)
        code: Stable error code for programmatic handling
        details: Optional additional context (logged, not exposed)
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(CaseSearchError):
    """Raised when caller input is malformed. Never retried."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", details)


class UpstreamError(CaseSearchError):
    """Raised when the record corpus cannot be fetched or parsed."""

    def __init__(
        self,
        kind: UpstreamErrorKind,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, kind.value, details)
        self.kind = kind
