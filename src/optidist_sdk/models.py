from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserRole(str, Enum):
    DISTRIBUTOR = "DISTRIBUTOR"
    SHOP_OWNER = "SHOP_OWNER"


class TokenResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    access: str
    refresh: str | None = None


class UserProfile(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    username: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None
    shop_id: int | None = None
    shop_name: str | None = None

    @property
    def known_role(self) -> UserRole | None:
        try:
            return UserRole(self.role) if self.role else None
        except ValueError:
            return None


class SessionData(BaseModel):
    access_token: str
    user_info: Optional[UserProfile] = None
    env_name: str | None = None
