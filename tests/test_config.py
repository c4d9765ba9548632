from __future__ import annotations

import os

import pytest

from suptrus_client_sdk.config import ConfigError, load_config

_VARS = (
    "SUPTRUS_NETWORK",
    "SUPTRUS_HOST",
    "SUPTRUS_HOST_LOCAL",
    "SUPTRUS_HOST_IC",
    "SUPTRUS_CANISTER_ID",
    "SUPTRUS_IDENTITY_PROVIDER",
    "SUPTRUS_INTERNET_IDENTITY_CANISTER_ID",
    "SUPTRUS_FETCH_ROOT_KEY",
    "SUPTRUS_MAX_TTL_SECONDS",
    "SUPTRUS_STATUS_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    # load_dotenv writes straight into os.environ
    for name in _VARS:
        os.environ.pop(name, None)


def test_load_config_local_defaults() -> None:
    cfg = load_config()

    assert cfg.network == "local"
    assert cfg.host == "http://localhost:4943"
    assert cfg.canister_id == "rdmx6-jaaaa-aaaaa-aaadq-cai"
    assert cfg.internet_identity_canister_id == "be2us-64aaa-aaaaa-qaabq-cai"
    assert cfg.identity_provider == "http://be2us-64aaa-aaaaa-qaabq-cai.localhost:4943"
    assert cfg.should_fetch_root_key is True
    assert cfg.max_ttl_ns == 7 * 24 * 60 * 60 * 1_000_000_000


def test_load_config_mainnet(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPTRUS_NETWORK", "IC")
    monkeypatch.setenv("SUPTRUS_FETCH_ROOT_KEY", "true")
    monkeypatch.setenv("SUPTRUS_IDENTITY_PROVIDER", "http://ignored.localhost:4943")

    cfg = load_config()

    assert cfg.network == "ic"
    assert cfg.host == "https://ic0.app"
    assert cfg.identity_provider == "https://identity.ic0.app"
    assert cfg.internet_identity_canister_id == "rdmx6-jaaaa-aaaaa-aaadq-cai"
    assert cfg.should_fetch_root_key is False


def test_load_config_network_specific_host(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPTRUS_HOST", "http://127.0.0.1:8000")
    monkeypatch.setenv("SUPTRUS_HOST_LOCAL", "http://127.0.0.1:4943/")
    monkeypatch.setenv("SUPTRUS_CANISTER_ID", "bkyz2-fmaaa-aaaaa-qaaaq-cai")
    monkeypatch.setenv("SUPTRUS_FETCH_ROOT_KEY", "off")

    cfg = load_config()

    assert cfg.host == "http://127.0.0.1:4943"
    assert cfg.canister_id == "bkyz2-fmaaa-aaaaa-qaaaq-cai"
    assert cfg.should_fetch_root_key is False


def test_load_config_reads_env_file(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("SUPTRUS_INTERNET_IDENTITY_CANISTER_ID=br5f7-7uaaa-aaaaa-qaaca-cai\n")

    cfg = load_config(str(env_file))

    assert cfg.identity_provider == "http://br5f7-7uaaa-aaaaa-qaaca-cai.localhost:4943"


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("SUPTRUS_NETWORK", "testnet"),
        ("SUPTRUS_HOST", "localhost:4943"),
        ("SUPTRUS_MAX_TTL_SECONDS", "0"),
        ("SUPTRUS_MAX_TTL_SECONDS", "abc"),
        ("SUPTRUS_STATUS_TIMEOUT_SECONDS", "-1"),
        ("SUPTRUS_STATUS_TIMEOUT_SECONDS", "abc"),
    ],
)
def test_load_config_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)

    with pytest.raises(ConfigError, match=key):
        load_config()
