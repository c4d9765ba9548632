from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from suptrus_client_sdk.broker import Identity, LoginOptions
from suptrus_client_sdk.config import ClientConfig
from suptrus_client_sdk.exceptions import AuthenticationDeniedError, ProviderUnavailableError
from suptrus_client_sdk.session import Session

from records import PRINCIPAL_A


@dataclass
class FakeBroker:
    stored: Identity | None = None
    next_identities: list[Identity] = field(default_factory=list)
    deny: bool = False
    unavailable: bool = False
    fail_sign_out: bool = False
    crash: Exception | None = None
    restore_calls: int = 0
    authenticate_calls: list[LoginOptions] = field(default_factory=list)

    def restore(self) -> Identity | None:
        self.restore_calls += 1
        self._maybe_crash()
        if self.unavailable:
            raise ProviderUnavailableError(code="PROVIDER_UNAVAILABLE", message="provider offline")
        return self.stored

    def authenticate(self, options: LoginOptions) -> Identity:
        self.authenticate_calls.append(options)
        self._maybe_crash()
        if self.unavailable:
            raise ProviderUnavailableError(code="PROVIDER_UNAVAILABLE", message="provider offline")
        if self.deny:
            raise AuthenticationDeniedError(code="AUTHENTICATION_DENIED", message="UserInterrupt")
        identity = self.next_identities.pop(0) if self.next_identities else Identity(principal=PRINCIPAL_A)
        self.stored = identity
        return identity

    def is_authenticated(self) -> bool:
        self._maybe_crash()
        if self.unavailable:
            raise ProviderUnavailableError(code="PROVIDER_UNAVAILABLE", message="provider offline")
        return self.stored is not None

    def sign_out(self) -> None:
        self.stored = None
        self._maybe_crash()
        if self.fail_sign_out:
            raise ProviderUnavailableError(code="PROVIDER_UNAVAILABLE", message="logout failed")

    def _maybe_crash(self) -> None:
        if self.crash is not None:
            raise self.crash


@dataclass
class FakeAgent:
    replies: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, Exception] = field(default_factory=dict)
    calls: list[tuple[str, str, list[Any]]] = field(default_factory=list)

    def query(self, method: str, args: list[Any]) -> Any:
        return self._reply("query", method, args)

    def update(self, method: str, args: list[Any]) -> Any:
        return self._reply("update", method, args)

    def _reply(self, mode: str, method: str, args: list[Any]) -> Any:
        self.calls.append((mode, method, args))
        if method in self.errors:
            raise self.errors[method]
        return self.replies[method]


@dataclass
class AgentFactoryRecorder:
    agent: FakeAgent = field(default_factory=FakeAgent)
    built: list[tuple[str, str, Any, bytes | None]] = field(default_factory=list)

    def __call__(self, host: str, canister_id: str, signer: Any, root_key: bytes | None) -> FakeAgent:
        self.built.append((host, canister_id, signer, root_key))
        return self.agent


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        network="ic",
        host="https://ic0.app",
        canister_id="rdmx6-jaaaa-aaaaa-aaadq-cai",
        identity_provider="https://identity.ic0.app",
        internet_identity_canister_id="rdmx6-jaaaa-aaaaa-aaadq-cai",
    )


@pytest.fixture
def local_config() -> ClientConfig:
    return ClientConfig(
        network="local",
        host="http://localhost:4943",
        canister_id="bkyz2-fmaaa-aaaaa-qaaaq-cai",
        identity_provider="http://be2us-64aaa-aaaaa-qaabq-cai.localhost:4943",
        internet_identity_canister_id="be2us-64aaa-aaaaa-qaabq-cai",
    )


@pytest.fixture
def broker() -> FakeBroker:
    return FakeBroker()


@pytest.fixture
def factory() -> AgentFactoryRecorder:
    return AgentFactoryRecorder()


@pytest.fixture
def agent(factory: AgentFactoryRecorder) -> FakeAgent:
    return factory.agent


@pytest.fixture
def session(config: ClientConfig, broker: FakeBroker, factory: AgentFactoryRecorder) -> Session:
    return Session(config, broker=broker, agent_factory=factory)


@pytest.fixture
def logged_in(session: Session) -> Session:
    assert session.login() is True
    return session
