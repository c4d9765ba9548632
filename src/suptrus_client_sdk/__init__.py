from .broker import CredentialBroker, Identity, LocalKeyBroker, LoginOptions
from .clients import SupplyChainClient
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    AuthenticationDeniedError,
    NotAuthenticatedError,
    ProviderUnavailableError,
    RemoteCallFailedError,
    RemoteRejectedError,
    SupTrusError,
)
from .identity_store import IdentityStore
from .models import (
    AnalyticsData,
    CanisterStatus,
    EventStatus,
    Partner,
    PartnerRegistration,
    PartnerType,
    Product,
    ProductRegistration,
    ProductSearchQuery,
    ProductStatus,
    ProductWithHistory,
    SessionData,
    SupplyChainEvent,
    SupplyChainEventInput,
    SupplyChainStage,
    User,
    UserPermissions,
    UserRegistration,
    UserRole,
)
from .session import RemoteHandle, Session, SessionState, SessionStatus
from .ui_errors import UserFacingError, to_user_facing_error

__version__ = "0.3.0"

__all__ = [
    "AnalyticsData",
    "AuthenticationDeniedError",
    "CanisterStatus",
    "ClientConfig",
    "ConfigError",
    "CredentialBroker",
    "EventStatus",
    "Identity",
    "IdentityStore",
    "LocalKeyBroker",
    "LoginOptions",
    "NotAuthenticatedError",
    "Partner",
    "PartnerRegistration",
    "PartnerType",
    "Product",
    "ProductRegistration",
    "ProductSearchQuery",
    "ProductStatus",
    "ProductWithHistory",
    "ProviderUnavailableError",
    "RemoteCallFailedError",
    "RemoteHandle",
    "RemoteRejectedError",
    "Session",
    "SessionData",
    "SessionState",
    "SessionStatus",
    "SupTrusError",
    "SupplyChainClient",
    "SupplyChainEvent",
    "SupplyChainEventInput",
    "SupplyChainStage",
    "User",
    "UserFacingError",
    "UserPermissions",
    "UserRegistration",
    "UserRole",
    "load_config",
    "to_user_facing_error",
]
