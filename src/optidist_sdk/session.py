from __future__ import annotations

import logging
from dataclasses import dataclass

from .auth_store import AuthStore
from .clients.analytics_client import AnalyticsClient
from .clients.auth import AuthClient
from .clients.distribution_client import DistributionClient
from .clients.frames_client import FramesClient
from .clients.sales_client import SalesClient
from .clients.shops_client import ShopsClient
from .config import ClientConfig
from .http_client import HttpClient
from .models import SessionData, TokenResponse, UserProfile, UserRole
from .tracing import TraceContext

logger = logging.getLogger(__name__)


@dataclass
class ApiSession:
    """Session context: bearer token and user profile, persisted via ``AuthStore``.

    Written once at login (``establish``), read by every client factory, and
    wiped by ``clear`` on logout or when the backend rejects the token.
    """

    config: ClientConfig
    auth_store: AuthStore | None = None
    trace: TraceContext | None = None
    http: HttpClient | None = None
    token: str | None = None
    user: UserProfile | None = None

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore()
        self.trace = self.trace or TraceContext()
        self.http = self.http or HttpClient(config=self.config, trace=self.trace)
        stored = self.auth_store.load()
        if stored and not self.token:
            self.token = stored.access_token
            self.user = stored.user_info

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token and self.user)

    @property
    def role(self) -> UserRole | None:
        return self.user.known_role if self.user else None

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http, access_token=self.token)

    def shops_client(self) -> ShopsClient:
        return ShopsClient(http=self.http, access_token=self.token)

    def frames_client(self) -> FramesClient:
        return FramesClient(http=self.http, access_token=self.token)

    def distribution_client(self) -> DistributionClient:
        return DistributionClient(http=self.http, access_token=self.token)

    def sales_client(self) -> SalesClient:
        return SalesClient(http=self.http, access_token=self.token)

    def analytics_client(self, *, shop_scope: bool | None = None) -> AnalyticsClient:
        if shop_scope is None:
            shop_scope = self.role is UserRole.SHOP_OWNER
        return AnalyticsClient(http=self.http, access_token=self.token, shop_scope=shop_scope)

    def establish(self, token: TokenResponse, user: UserProfile | None) -> None:
        self.token = token.access
        self.user = user
        self.auth_store.save(SessionData(access_token=self.token, user_info=self.user, env_name=self.config.env_name))
        logger.info("session_established", extra={"role": user.role if user else None})

    def clear(self) -> None:
        self.token = None
        self.user = None
        if self.auth_store:
            self.auth_store.clear()
        logger.info("session_cleared")
