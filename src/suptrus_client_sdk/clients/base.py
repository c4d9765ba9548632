from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Mapping, TypeVar

from pydantic import BaseModel

from ..error_mapper import decode_reply, unwrap_result
from ..exceptions import SupTrusError

if TYPE_CHECKING:
    from ..session import Session

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str


@dataclass
class BaseClient:
    session: "Session"
    last_operation: LastOperation | None = None

    module = "supply_chain"

    def _query(self, method: str, args: list[Any] | None = None) -> Any:
        return self._call(method, args or [], update=False)

    def _update(self, method: str, args: list[Any] | None = None) -> Any:
        return self._call(method, args or [], update=True)

    def _call(self, method: str, args: list[Any], *, update: bool) -> Any:
        handle = self.session.require_handle(method)
        started = time.monotonic()
        try:
            if update:
                reply = handle.agent.update(method, args)
            else:
                reply = handle.agent.query(method, args)
        except SupTrusError as exc:
            self._record(method, started, "error")
            logger.warning("remote_call_failed", extra={"method": method, "code": exc.code, "error": exc.message})
            raise
        self._record(method, started, "success")
        logger.debug(
            "remote_call",
            extra={"method": method, "principal": handle.identity.principal, "duration_ms": self.last_operation.duration_ms},
        )
        return reply

    def _result(self, method: str, reply: Any, decode: Callable[[Any], T]) -> T:
        return unwrap_result(method, reply, decode)

    def _plain(self, method: str, reply: Any, decode: Callable[[Any], T]) -> T:
        return decode_reply(method, reply, decode)

    def _record(self, operation: str, started: float, result: str) -> None:
        self.last_operation = LastOperation(
            module=self.module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
        )


def coerce_model(payload: M | Mapping[str, Any], model: type[M]) -> M:
    if isinstance(payload, model):
        return payload
    return model.model_validate(payload)
