from __future__ import annotations

import logging
from dataclasses import dataclass

from optidist_sdk import ApiSession, ClientConfig, load_config

from ..services.analytics_service import AnalyticsService
from ..services.auth_service import AuthService, AuthServiceError
from ..services.catalog_service import CatalogService
from ..services.distribution_service import DistributionService
from ..services.sales_service import SalesService
from ..services.shops_service import ShopsService
from .navigation import RouteSpec, initial_route, menu_for, resolve_route
from .state import AppState, Route

logger = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    route: Route
    error_message: str | None = None


class OptiDistBootstrap:
    """Wires config, session and services, and owns the current route."""

    def __init__(self, config: ClientConfig | None = None, session: ApiSession | None = None) -> None:
        self.config = config or load_config()
        self.session = session or ApiSession(self.config)
        self.state = AppState()
        self.auth_service = AuthService(self.session)
        self.shops_service = ShopsService(self.session)
        self.catalog_service = CatalogService(self.session)
        self.distribution_service = DistributionService(self.session)
        self.sales_service = SalesService(self.session)
        self.analytics_service = AnalyticsService(self.session)

    def start(self) -> BootstrapResult:
        route = initial_route(self.session)
        self.state.user = self.session.user
        self._navigate(route, "Ready" if route is not Route.LOGIN else "Login required")
        return BootstrapResult(route=self.state.route)

    def login(self, username: str, password: str) -> BootstrapResult:
        try:
            profile = self.auth_service.login(username, password)
        except AuthServiceError as exc:
            self.state.error_message = exc.message
            self.state.trace_id = exc.trace_id
            self._navigate(Route.LOGIN, "Authentication failed")
            return BootstrapResult(route=self.state.route, error_message=exc.message)
        self.state.user = profile
        self.state.error_message = None
        return self.navigate(initial_route(self.session))

    def logout(self) -> BootstrapResult:
        self.auth_service.logout()
        self.state.user = None
        self._navigate(Route.LOGIN, "Session cleared")
        return BootstrapResult(route=self.state.route)

    def navigate(self, requested: Route, **params: object) -> BootstrapResult:
        route = resolve_route(requested, self.session)
        if route is not requested:
            params = {}
        self.state.route_params = dict(params)
        self._navigate(route, "Ready")
        return BootstrapResult(route=route)

    def visible_navigation(self) -> list[RouteSpec]:
        return menu_for(self.session.role)

    def _navigate(self, route: Route, status_message: str) -> None:
        logger.info("navigation", extra={"route": route.value})
        self.state.route = route
        self.state.status_message = status_message
