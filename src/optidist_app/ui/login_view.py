from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..app.navigation import ROLE_HOMES
from ..services.auth_service import AuthService, AuthServiceError


@dataclass
class LoginView:
    service: AuthService
    error_message: str | None = None
    trace_id: str | None = None
    is_submitting: bool = False

    def submit(self, username: str, password: str) -> dict[str, Any]:
        if self.is_submitting:
            return {"ok": False, "error": "Login already in progress"}
        if not username.strip() or not password:
            self.error_message = "Please enter username and password"
            return {"ok": False, "error": self.error_message}
        self.is_submitting = True
        try:
            profile = self.service.login(username.strip(), password)
        except AuthServiceError as exc:
            self.error_message = exc.message
            self.trace_id = exc.trace_id
            return {"ok": False, "error": exc.message, "trace_id": exc.trace_id}
        finally:
            self.is_submitting = False
        self.error_message = None
        return {"ok": True, "route": ROLE_HOMES[profile.known_role], "user": profile}
