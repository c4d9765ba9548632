from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from .agent import AgentFactory, ReplicaAgent
from .broker import CredentialBroker, Identity, LocalKeyBroker, LoginOptions
from .clients.events import EventsClient
from .clients.partners import PartnersClient
from .clients.products import ProductsClient
from .clients.status import StatusClient
from .clients.supply_chain import SupplyChainClient
from .clients.users import UsersClient
from .config import ClientConfig
from .error_mapper import map_transport_error
from .exceptions import AuthenticationDeniedError, SupTrusError, not_authenticated
from .replica import fetch_root_key

logger = logging.getLogger(__name__)

RootKeyFetcher = Callable[[str, float], bytes]
StateListener = Callable[["SessionState"], None]


class SessionStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    CHECKING = "checking"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(frozen=True)
class SessionState:
    status: SessionStatus = SessionStatus.UNINITIALIZED
    identity: Identity | None = None
    error: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.status is SessionStatus.AUTHENTICATED

    @property
    def is_error(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class RemoteHandle:
    identity: Identity
    canister_id: str
    host: str
    agent: ReplicaAgent
    root_key: bytes | None = None


def build_remote_handle(
    config: ClientConfig,
    identity: Identity,
    agent_factory: AgentFactory,
    root_key_fetcher: RootKeyFetcher = fetch_root_key,
) -> RemoteHandle:
    root_key = None
    if config.should_fetch_root_key:
        try:
            root_key = root_key_fetcher(config.host, config.status_timeout_seconds)
        except SupTrusError as exc:
            # Calls may still succeed against a replica that serves the mainnet key.
            logger.warning("root_key_fetch_failed", extra={"host": config.host, "error": exc.message})
    try:
        agent = agent_factory(config.host, config.canister_id, identity.signer, root_key)
    except (TypeError, ValueError) as exc:
        raise map_transport_error("connect", exc) from exc
    logger.info(
        "remote_handle_ready",
        extra={"canister_id": config.canister_id, "host": config.host, "principal": identity.principal},
    )
    return RemoteHandle(
        identity=identity,
        canister_id=config.canister_id,
        host=config.host,
        agent=agent,
        root_key=root_key,
    )


@dataclass
class Session:
    """Authentication lifecycle for one client instance.

    One Session per process is a caller convention; create it once and pass it
    to every component that needs remote access.
    """

    config: ClientConfig
    broker: CredentialBroker | None = None
    agent_factory: AgentFactory | None = None
    root_key_fetcher: RootKeyFetcher = fetch_root_key
    _state: SessionState = field(default_factory=SessionState, init=False, repr=False)
    _handle: RemoteHandle | None = field(default=None, init=False, repr=False)
    _listeners: list[StateListener] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.broker = self.broker or LocalKeyBroker(self.config)
        if self.agent_factory is None:
            from .ic_agent import ic_agent_factory

            self.agent_factory = ic_agent_factory

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def handle(self) -> RemoteHandle | None:
        return self._handle

    def add_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def initialize(self) -> SessionState:
        if self._state.status is not SessionStatus.UNINITIALIZED:
            return self._state
        self._set_state(SessionState(status=SessionStatus.CHECKING))
        try:
            identity = self.broker.restore()
            if identity is None:
                logger.info("session_restore_empty", extra={"network": self.config.network})
                self._drop(None)
            else:
                self._establish(identity)
                logger.info("session_restored", extra={"principal": identity.principal})
        except SupTrusError as exc:
            logger.warning("session_initialize_failed", extra={"code": exc.code, "error": exc.message})
            self._drop(exc.message)
        except Exception as exc:
            logger.exception("session_initialize_failed", extra={"error": str(exc)})
            self._drop(str(exc) or type(exc).__name__)
        return self._state

    def login(self) -> bool:
        self.initialize()
        options = LoginOptions.from_config(self.config)
        try:
            identity = self.broker.authenticate(options)
            self._establish(identity)
        except AuthenticationDeniedError as exc:
            logger.info("login_denied", extra={"error": exc.message})
            self._drop(exc.message)
            return False
        except SupTrusError as exc:
            logger.warning("login_failed", extra={"code": exc.code, "error": exc.message})
            self._drop(exc.message)
            return False
        except Exception as exc:
            logger.exception("login_failed", extra={"error": str(exc)})
            self._drop(str(exc) or type(exc).__name__)
            return False
        logger.info("login_success", extra={"principal": identity.principal})
        return True

    def logout(self) -> None:
        try:
            self.broker.sign_out()
        except SupTrusError as exc:
            logger.warning("logout_provider_failed", extra={"code": exc.code, "error": exc.message})
        except Exception as exc:
            logger.exception("logout_provider_failed", extra={"error": str(exc)})
        finally:
            self._drop(None)
        logger.info("logout")

    def current_identity(self) -> Identity | None:
        return self._state.identity

    def is_authenticated(self) -> bool:
        try:
            authenticated = self.broker.is_authenticated()
        except SupTrusError as exc:
            logger.warning("auth_status_failed", extra={"code": exc.code, "error": exc.message})
            self._drop(exc.message)
            return False
        except Exception as exc:
            logger.exception("auth_status_failed", extra={"error": str(exc)})
            self._drop(str(exc) or type(exc).__name__)
            return False
        if not authenticated and self._state.is_authenticated:
            logger.info("session_credential_expired", extra={"principal": self._state.identity.principal})
            self._drop("Credential expired")
        return authenticated

    def require_handle(self, method: str | None = None) -> RemoteHandle:
        if not self._state.is_authenticated or self._handle is None:
            raise not_authenticated(method)
        return self._handle

    def supply_chain_client(self) -> SupplyChainClient:
        return SupplyChainClient(session=self)

    def users_client(self) -> UsersClient:
        return UsersClient(session=self)

    def products_client(self) -> ProductsClient:
        return ProductsClient(session=self)

    def events_client(self) -> EventsClient:
        return EventsClient(session=self)

    def partners_client(self) -> PartnersClient:
        return PartnersClient(session=self)

    def status_client(self) -> StatusClient:
        return StatusClient(session=self)

    def _establish(self, identity: Identity) -> None:
        # The previous handle is invalid from here on, whether or not the new one builds.
        self._handle = None
        handle = build_remote_handle(self.config, identity, self.agent_factory, self.root_key_fetcher)
        self._handle = handle
        self._set_state(SessionState(status=SessionStatus.AUTHENTICATED, identity=identity))

    def _drop(self, error: str | None) -> None:
        self._handle = None
        self._set_state(SessionState(status=SessionStatus.UNAUTHENTICATED, error=error))

    def _set_state(self, state: SessionState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)


def describe_state(state: SessionState) -> dict[str, Any]:
    return {
        "status": state.status.value,
        "principal": state.identity.principal if state.identity else None,
        "expires_at": state.identity.expires_at.isoformat() if state.identity and state.identity.expires_at else None,
        "error": state.error,
    }
