from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ApiError, TransportError
from .validation import ClientValidationError

GENERIC_FAILURE = "Something went wrong. Please try again."
TRANSPORT_FAILURE = "Could not reach the server. Check your connection and try again."


@dataclass(frozen=True)
class UserFacingError:
    message: str
    details: str | None = None
    trace_id: str | None = None

    @property
    def technical_details(self) -> str | None:
        if self.details:
            return self.details
        return None


def to_user_facing_error(exc: Exception, fallback: str = GENERIC_FAILURE) -> UserFacingError:
    """Collapse any client or API failure into one banner string."""
    if isinstance(exc, TransportError):
        return UserFacingError(message=TRANSPORT_FAILURE, details=f"{exc.code}: {exc.message}", trace_id=exc.trace_id)
    if isinstance(exc, ApiError):
        primary = exc.message.strip() if exc.message and exc.message != "Request failed" else fallback
        details = f"{exc.code} (HTTP {exc.status_code})"
        if exc.details:
            details = f"{details}: {exc.details}"
        return UserFacingError(message=primary, details=details, trace_id=exc.trace_id)
    if isinstance(exc, ClientValidationError):
        return UserFacingError(message=str(exc), details="CLIENT_VALIDATION")
    return UserFacingError(message=fallback, details=str(exc) or type(exc).__name__)
