from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Protocol

from .config import ClientConfig
from .exceptions import AuthenticationDeniedError, ProviderUnavailableError
from .identity_store import IdentityStore
from .models import SessionData

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_FEATURES = "toolbar=0,location=0,menubar=0,width=500,height=500,left=100,top=100"


@dataclass(frozen=True)
class Identity:
    principal: str
    signer: Any = field(default=None, compare=False, repr=False)
    expires_at: datetime | None = None


@dataclass(frozen=True)
class LoginOptions:
    identity_provider: str
    max_time_to_live_ns: int
    window_features: str = DEFAULT_WINDOW_FEATURES

    @classmethod
    def from_config(cls, config: ClientConfig) -> "LoginOptions":
        return cls(identity_provider=config.identity_provider, max_time_to_live_ns=config.max_ttl_ns)


class CredentialBroker(Protocol):
    def restore(self) -> Identity | None:
        ...

    def authenticate(self, options: LoginOptions) -> Identity:
        ...

    def is_authenticated(self) -> bool:
        ...

    def sign_out(self) -> None:
        ...


class SignerKeys(Protocol):
    key_type: str

    def new(self) -> Any:
        ...

    def load(self, private_key: str) -> Any:
        ...

    def principal(self, signer: Any) -> str:
        ...

    def private_key(self, signer: Any) -> str:
        ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _provider_unavailable(message: str) -> ProviderUnavailableError:
    return ProviderUnavailableError(code="PROVIDER_UNAVAILABLE", message=message)


@dataclass
class LocalKeyBroker:
    """Credential broker that mints and persists a local Ed25519 key per network.

    Each network gets its own credential file, so signing out on one network
    leaves the others in place.

    ``approve`` stands in for the provider's interactive window: it receives
    the login options and returns False when the user cancels.
    """

    config: ClientConfig
    store: IdentityStore | None = None
    approve: Callable[[LoginOptions], bool] | None = None
    keys: SignerKeys | None = None
    clock: Callable[[], datetime] = _utcnow

    def __post_init__(self) -> None:
        if self.store is None:
            self.store = IdentityStore.for_network(self.config.network)
        if self.keys is None:
            from .ic_agent import IcSignerKeys

            self.keys = IcSignerKeys()

    def restore(self) -> Identity | None:
        data = self._load()
        if data is None:
            return None
        try:
            signer = self.keys.load(data.private_key)
        except (TypeError, ValueError) as exc:
            self._clear()
            raise _provider_unavailable(f"Stored credential is unreadable: {exc}") from exc
        return Identity(principal=data.principal, signer=signer, expires_at=data.expires_at)

    def authenticate(self, options: LoginOptions) -> Identity:
        logger.info(
            "identity_provider_open",
            extra={"identity_provider": options.identity_provider, "window_features": options.window_features},
        )
        if self.approve is not None and not self.approve(options):
            raise AuthenticationDeniedError(code="AUTHENTICATION_DENIED", message="UserInterrupt")
        signer = self.keys.new()
        expires_at = self.clock() + timedelta(microseconds=options.max_time_to_live_ns // 1000)
        data = SessionData(
            principal=self.keys.principal(signer),
            private_key=self.keys.private_key(signer),
            key_type=self.keys.key_type,
            identity_provider=options.identity_provider,
            network=self.config.network,
            expires_at=expires_at,
        )
        try:
            self.store.save(data)
        except OSError as exc:
            raise _provider_unavailable(f"Could not persist credential: {exc}") from exc
        return Identity(principal=data.principal, signer=signer, expires_at=expires_at)

    def is_authenticated(self) -> bool:
        return self._load() is not None

    def sign_out(self) -> None:
        self._clear()

    def _load(self) -> SessionData | None:
        try:
            data = self.store.load()
        except OSError as exc:
            raise _provider_unavailable(f"Could not read credential store: {exc}") from exc
        if data is None:
            return None
        if data.network != self.config.network or data.identity_provider != self.config.identity_provider:
            logger.info("stored_credential_other_provider", extra={"network": data.network})
            return None
        if data.is_expired(self.clock()):
            logger.info("stored_credential_expired", extra={"principal": data.principal})
            self._clear()
            return None
        return data

    def _clear(self) -> None:
        try:
            self.store.clear()
        except OSError as exc:
            raise _provider_unavailable(f"Could not clear credential store: {exc}") from exc
