from __future__ import annotations

import json
import platform
from datetime import datetime
from time import perf_counter
from typing import Any, Callable

from .exceptions import SupTrusError
from .replica import ReplicaStatus, fetch_status
from .session import Session, describe_state

SENSITIVE_KEY_MARKERS = ("private_key", "secret", "password", "token", "signer")

StatusFetcher = Callable[[str, float], ReplicaStatus]


def _replica_payload(session: Session, status_fetcher: StatusFetcher) -> dict[str, Any]:
    config = session.config
    if not config.is_local:
        return {"status": "skipped", "reason": "mainnet"}
    started = perf_counter()
    try:
        status = status_fetcher(config.host, config.status_timeout_seconds)
    except SupTrusError as exc:
        return {"status": "Not running", "error": exc.message}
    return {
        "status": "Running",
        "latency_ms": int((perf_counter() - started) * 1000),
        "impl_version": status.impl_version,
        "replica_health_status": status.replica_health_status,
        "root_key_present": status.root_key is not None,
    }


def collect_diagnostics(session: Session, status_fetcher: StatusFetcher = fetch_status) -> dict[str, Any]:
    """Snapshot of the connection path: config, replica, identity provider, canister."""
    config = session.config
    report: dict[str, Any] = {
        "timestamp": datetime.now().astimezone().isoformat(),
        "os": platform.platform(),
        "environment": {
            "network": config.network,
            "host": config.host,
            "canister_id": config.canister_id,
            "internet_identity_canister_id": config.internet_identity_canister_id,
            "identity_provider": config.identity_provider,
            "fetch_root_key": config.should_fetch_root_key,
        },
        "replica": _replica_payload(session, status_fetcher),
    }

    session.initialize()
    report["auth_status"] = session.is_authenticated()
    report["session"] = describe_state(session.state)

    if session.state.is_authenticated:
        client = session.status_client()
        report["canister_test"] = client.test_connection()
        if report["canister_test"]:
            try:
                report["canister_status"] = client.get_canister_status().model_dump()
            except SupTrusError as exc:
                report["canister_error"] = exc.message
    return sanitize_report(report)


def sanitize_report(payload: Any) -> Any:
    if isinstance(payload, dict):
        sanitized: dict[str, Any] = {}
        for key, value in payload.items():
            if any(marker in key.lower() for marker in SENSITIVE_KEY_MARKERS):
                sanitized[key] = "<REDACTED>"
            else:
                sanitized[key] = sanitize_report(value)
        return sanitized
    if isinstance(payload, list):
        return [sanitize_report(item) for item in payload]
    return payload


def report_to_text(report: dict[str, Any]) -> str:
    lines = ["SupTrus - connection diagnostics"]
    for key, value in report.items():
        serialized = json.dumps(value, default=str) if isinstance(value, (dict, list)) else str(value)
        lines.append(f"{key}: {serialized}")
    return "\n".join(lines)
