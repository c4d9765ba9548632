from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import cbor2
import requests

from .exceptions import RemoteCallFailedError

STATUS_PATH = "/api/v2/status"
SELF_DESCRIBE_TAG = 55799


@dataclass(frozen=True)
class ReplicaStatus:
    ic_api_version: str | None
    impl_version: str | None
    replica_health_status: str | None
    root_key: bytes | None


def _unwrap_tag(value: Any) -> Any:
    while isinstance(value, cbor2.CBORTag) and value.tag == SELF_DESCRIBE_TAG:
        value = value.value
    return value


def _failure(host: str, message: str, exc: BaseException | None = None) -> RemoteCallFailedError:
    return RemoteCallFailedError(
        code="REPLICA_STATUS_FAILED",
        message=message,
        method="status",
        details={"host": host},
        cause=exc,
    )


def fetch_status(host: str, timeout: float = 5.0, session: requests.Session | None = None) -> ReplicaStatus:
    url = host.rstrip("/") + STATUS_PATH
    http = session or requests.Session()
    try:
        response = http.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise _failure(host, str(exc), exc) from exc
    if not response.ok:
        raise _failure(host, f"Replica status returned HTTP {response.status_code}")
    try:
        payload = _unwrap_tag(cbor2.loads(response.content))
    except (cbor2.CBORDecodeError, ValueError) as exc:
        raise _failure(host, f"Replica status is not valid CBOR: {exc}", exc) from exc
    if not isinstance(payload, dict):
        raise _failure(host, "Replica status payload is not a map")
    root_key = payload.get("root_key")
    return ReplicaStatus(
        ic_api_version=payload.get("ic_api_version"),
        impl_version=payload.get("impl_version"),
        replica_health_status=payload.get("replica_health_status"),
        root_key=bytes(root_key) if root_key is not None else None,
    )


def fetch_root_key(host: str, timeout: float = 5.0, session: requests.Session | None = None) -> bytes:
    status = fetch_status(host, timeout=timeout, session=session)
    if not status.root_key:
        raise _failure(host, "Replica status did not include a root key")
    return status.root_key
