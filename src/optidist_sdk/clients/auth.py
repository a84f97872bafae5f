from __future__ import annotations

from dataclasses import dataclass

from ..models import TokenResponse, UserProfile
from .base import BaseClient, expect_object


@dataclass
class AuthClient(BaseClient):
    module: str = "auth"

    def login(self, username: str, password: str) -> TokenResponse:
        payload = {"username": username, "password": password}
        data = self.http.request("POST", "/token/", json_body=payload, module=self.module, operation="login")
        return TokenResponse.model_validate(expect_object(data, "token"))

    def user_info(self) -> UserProfile:
        data = self._request("GET", "/user-info/", operation="user_info")
        return UserProfile.model_validate(expect_object(data, "user-info"))
