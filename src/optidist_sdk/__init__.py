from .auth_store import AuthStore
from .config import ClientConfig, ConfigError, load_config
from .distribution_state import (
    BuilderStateError,
    DistributionBuilder,
    DistributionLineItem,
    LineItemStatus,
    ShopDistributionBatch,
)
from .distribution_validation import build_bulk_distribution, build_stock_in
from .exceptions import (
    ApiError,
    AuthError,
    ForbiddenError,
    NotFoundError,
    TransportError,
    UnauthorizedError,
    UnknownRoleError,
    ValidationError,
)
from .frame_search import search_frames
from .http_client import HttpClient
from .models import SessionData, TokenResponse, UserProfile, UserRole
from .models_catalog import Frame
from .session import ApiSession
from .tracing import TraceContext
from .ui_errors import UserFacingError, to_user_facing_error
from .validation import ClientValidationError, ValidationIssue

__all__ = [
    "ApiError",
    "ApiSession",
    "AuthError",
    "AuthStore",
    "BuilderStateError",
    "ClientConfig",
    "ClientValidationError",
    "ConfigError",
    "DistributionBuilder",
    "DistributionLineItem",
    "ForbiddenError",
    "Frame",
    "HttpClient",
    "LineItemStatus",
    "NotFoundError",
    "SessionData",
    "ShopDistributionBatch",
    "TokenResponse",
    "TraceContext",
    "TransportError",
    "UnauthorizedError",
    "UnknownRoleError",
    "UserFacingError",
    "UserProfile",
    "UserRole",
    "ValidationError",
    "ValidationIssue",
    "build_bulk_distribution",
    "build_stock_in",
    "load_config",
    "search_frames",
    "to_user_facing_error",
]
