from __future__ import annotations

from typing import Any, Callable, Mapping, TypeVar

from .exceptions import RemoteCallFailedError, RemoteRejectedError

T = TypeVar("T")

DECODE_ERRORS = (KeyError, TypeError, ValueError)


def map_transport_error(method: str, exc: BaseException) -> RemoteCallFailedError:
    return RemoteCallFailedError(
        code="REMOTE_CALL_FAILED",
        message=str(exc) or type(exc).__name__,
        method=method,
        details={"type": type(exc).__name__},
        cause=exc,
    )


def map_decode_error(method: str, exc: BaseException) -> RemoteCallFailedError:
    return RemoteCallFailedError(
        code="REMOTE_CALL_FAILED",
        message=f"Unexpected reply shape: {exc}",
        method=method,
        details={"type": "serialization_mismatch"},
        cause=exc,
    )


def unwrap_result(method: str, reply: Any, decode: Callable[[Any], T]) -> T:
    """Unwrap an Ok/Err reply, raising RemoteRejectedError for Err payloads."""
    if not isinstance(reply, Mapping) or len(reply) != 1:
        raise map_decode_error(method, ValueError(f"expected Ok/Err variant, got {reply!r}"))
    tag, payload = next(iter(reply.items()))
    if tag == "Err":
        reason = payload if isinstance(payload, str) else str(payload)
        raise RemoteRejectedError(code="REMOTE_REJECTED", message=reason, method=method)
    if tag != "Ok":
        raise map_decode_error(method, ValueError(f"unknown result tag {tag!r}"))
    return decode_reply(method, payload, decode)


def decode_reply(method: str, payload: Any, decode: Callable[[Any], T]) -> T:
    try:
        return decode(payload)
    except DECODE_ERRORS as exc:
        raise map_decode_error(method, exc) from exc
