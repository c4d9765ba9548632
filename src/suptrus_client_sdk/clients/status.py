from __future__ import annotations

import logging
from dataclasses import dataclass

from .. import wire
from ..exceptions import SupTrusError
from ..models import AnalyticsData, CanisterStatus
from .base import BaseClient

logger = logging.getLogger(__name__)


@dataclass
class StatusClient(BaseClient):
    module = "status"

    def get_analytics(self) -> AnalyticsData:
        reply = self._query("get_analytics")
        return self._plain("get_analytics", reply, wire.decode_analytics)

    def get_canister_status(self) -> CanisterStatus:
        reply = self._query("get_canister_status")
        return self._plain("get_canister_status", reply, wire.decode_canister_status)

    def test_connection(self) -> bool:
        """Report whether the canister answers a status query; details only go to the log."""
        try:
            status = self.get_canister_status()
        except SupTrusError as exc:
            logger.warning("connection_test_failed", extra={"code": exc.code, "error": exc.message})
            return False
        logger.info("connection_test_ok", extra={"version": status.version, "uptime": status.uptime})
        return True
