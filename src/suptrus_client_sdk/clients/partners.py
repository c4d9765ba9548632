from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .. import wire
from ..models import Partner, PartnerRegistration
from .base import BaseClient, coerce_model


@dataclass
class PartnersClient(BaseClient):
    module = "partners"

    def register_partner(self, payload: PartnerRegistration | Mapping[str, Any]) -> None:
        request = coerce_model(payload, PartnerRegistration)
        reply = self._update("register_partner", [wire.encode_partner_registration(request)])
        self._result("register_partner", reply, wire.decode_null)

    def get_partners(self) -> list[Partner]:
        reply = self._query("get_partners")
        return self._plain("get_partners", reply, wire.decode_partners)
