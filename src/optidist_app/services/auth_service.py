from __future__ import annotations

import logging

from optidist_sdk import ApiSession
from optidist_sdk.clients import AuthClient
from optidist_sdk.exceptions import UnauthorizedError, UnknownRoleError
from optidist_sdk.models import UserProfile

from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)

UNKNOWN_ROLE_MESSAGE = "Unknown user role. Please contact administrator."
INVALID_CREDENTIALS_MESSAGE = "Invalid username or password."
LOGIN_FAILURE_MESSAGE = "Login failed. Please try again."


class AuthServiceError(ServiceError):
    pass


class AuthService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def has_active_session(self) -> bool:
        return self.session.is_authenticated

    def login(self, username: str, password: str) -> UserProfile:
        """Issue a token, load the profile, and only then store the session."""
        logger.info("login_attempt", extra={"username": username})
        try:
            token = self.session.auth_client().login(username, password)
            profile = AuthClient(http=self.session.http, access_token=token.access).user_info()
            if profile.known_role is None:
                raise UnknownRoleError(
                    code="UNKNOWN_ROLE",
                    message=UNKNOWN_ROLE_MESSAGE,
                    details={"role": profile.role},
                    trace_id=self.session.trace.trace_id if self.session.trace else None,
                    status_code=200,
                )
        except Exception as exc:
            logger.warning("login_failure", extra={"username": username, "error": type(exc).__name__})
            if isinstance(exc, UnauthorizedError) and not isinstance(exc, UnknownRoleError):
                raise AuthServiceError(
                    message=INVALID_CREDENTIALS_MESSAGE,
                    details=exc.message,
                    trace_id=exc.trace_id,
                ) from exc
            raise normalize_error(exc, self.session, AuthServiceError, fallback=LOGIN_FAILURE_MESSAGE) from exc
        self.session.establish(token=token, user=profile)
        logger.info("login_success", extra={"username": username, "role": profile.role})
        return profile

    def logout(self) -> None:
        logger.info("logout")
        self.session.clear()
