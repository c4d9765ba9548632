from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .. import wire
from ..models import SupplyChainEvent, SupplyChainEventInput
from .base import BaseClient, coerce_model


@dataclass
class EventsClient(BaseClient):
    module = "events"

    def add_supply_chain_event(self, payload: SupplyChainEventInput | Mapping[str, Any]) -> str:
        request = coerce_model(payload, SupplyChainEventInput)
        reply = self._update("add_supply_chain_event", [wire.encode_event_input(request)])
        return self._result("add_supply_chain_event", reply, wire.decode_text)

    def get_supply_chain_events(self, product_id: str) -> list[SupplyChainEvent]:
        reply = self._query("get_supply_chain_events", [product_id])
        return self._result("get_supply_chain_events", reply, wire.decode_events)
