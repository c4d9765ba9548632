from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

LOCAL_NETWORK = "local"
MAINNET_NETWORK = "ic"
SUPPORTED_NETWORKS = (LOCAL_NETWORK, MAINNET_NETWORK)

DEFAULT_HOSTS = {
    LOCAL_NETWORK: "http://localhost:4943",
    MAINNET_NETWORK: "https://ic0.app",
}
DEFAULT_INTERNET_IDENTITY_CANISTER_IDS = {
    LOCAL_NETWORK: "be2us-64aaa-aaaaa-qaabq-cai",
    MAINNET_NETWORK: "rdmx6-jaaaa-aaaaa-aaadq-cai",
}
MAINNET_IDENTITY_PROVIDER = "https://identity.ic0.app"
DEFAULT_CANISTER_ID = "rdmx6-jaaaa-aaaaa-aaadq-cai"
DEFAULT_MAX_TTL_SECONDS = 7 * 24 * 60 * 60


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    network: str
    host: str
    canister_id: str
    identity_provider: str
    internet_identity_canister_id: str
    fetch_root_key: bool = True
    max_ttl_seconds: int = DEFAULT_MAX_TTL_SECONDS
    status_timeout_seconds: float = 5.0

    @property
    def is_local(self) -> bool:
        return self.network == LOCAL_NETWORK

    @property
    def should_fetch_root_key(self) -> bool:
        # Mainnet's root key is well known; only a local replica needs the bootstrap.
        return self.is_local and self.fetch_root_key

    @property
    def max_ttl_ns(self) -> int:
        return self.max_ttl_seconds * 1_000_000_000


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def _read_text(name: str) -> str:
    return (os.getenv(name) or "").strip()


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    network = (_read_text("SUPTRUS_NETWORK") or LOCAL_NETWORK).lower()
    _validate(
        network in SUPPORTED_NETWORKS,
        f"Invalid SUPTRUS_NETWORK: expected one of {', '.join(SUPPORTED_NETWORKS)}, got {network!r}",
    )
    net_key = network.upper()

    host = (
        _read_text(f"SUPTRUS_HOST_{net_key}")
        or _read_text("SUPTRUS_HOST")
        or DEFAULT_HOSTS[network]
    )
    _validate(
        host.startswith(("http://", "https://")),
        f"Invalid SUPTRUS_HOST: expected an http(s) URL, got {host!r}",
    )

    canister_id = _read_text("SUPTRUS_CANISTER_ID") or DEFAULT_CANISTER_ID

    if network == MAINNET_NETWORK:
        # Mainnet always talks to the canonical Internet Identity deployment.
        ii_canister_id = DEFAULT_INTERNET_IDENTITY_CANISTER_IDS[network]
        identity_provider = MAINNET_IDENTITY_PROVIDER
    else:
        ii_canister_id = (
            _read_text("SUPTRUS_INTERNET_IDENTITY_CANISTER_ID")
            or DEFAULT_INTERNET_IDENTITY_CANISTER_IDS[network]
        )
        identity_provider = _read_text("SUPTRUS_IDENTITY_PROVIDER") or f"http://{ii_canister_id}.localhost:4943"

    max_ttl_seconds = _read_int("SUPTRUS_MAX_TTL_SECONDS", str(DEFAULT_MAX_TTL_SECONDS))
    _validate(
        max_ttl_seconds > 0,
        f"Invalid SUPTRUS_MAX_TTL_SECONDS: expected > 0, got {max_ttl_seconds}",
    )

    status_timeout_seconds = _read_float("SUPTRUS_STATUS_TIMEOUT_SECONDS", "5")
    _validate(
        status_timeout_seconds > 0,
        f"Invalid SUPTRUS_STATUS_TIMEOUT_SECONDS: expected > 0, got {status_timeout_seconds}",
    )

    fetch_root_key = _coerce_bool(os.getenv("SUPTRUS_FETCH_ROOT_KEY"), True)

    return ClientConfig(
        network=network,
        host=host.rstrip("/"),
        canister_id=canister_id,
        identity_provider=identity_provider.rstrip("/"),
        internet_identity_canister_id=ii_canister_id,
        fetch_root_key=fetch_root_key,
        max_ttl_seconds=max_ttl_seconds,
        status_timeout_seconds=status_timeout_seconds,
    )
