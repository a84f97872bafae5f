from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TypeVar

from optidist_sdk import ApiSession, to_user_facing_error
from optidist_sdk.exceptions import UnauthorizedError
from optidist_sdk.ui_errors import GENERIC_FAILURE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceError(RuntimeError):
    message: str
    details: str | None = None
    trace_id: str | None = None
    session_expired: bool = False

    def __str__(self) -> str:
        return self.message


E = TypeVar("E", bound=ServiceError)


def normalize_error(
    exc: Exception,
    session: ApiSession,
    error_type: type[E],
    fallback: str = GENERIC_FAILURE,
) -> E:
    """Reduce a client failure to the service's error type.

    A rejected token ends the session, so the caller can send the user back
    to the login screen.
    """
    if isinstance(exc, error_type):
        return exc
    expired = isinstance(exc, UnauthorizedError) and session.token is not None
    if expired:
        logger.warning("session_expired", extra={"trace_id": exc.trace_id})
        session.clear()
    user_facing = to_user_facing_error(exc, fallback=fallback)
    return error_type(
        message=user_facing.message,
        details=user_facing.technical_details,
        trace_id=user_facing.trace_id,
        session_expired=expired,
    )
