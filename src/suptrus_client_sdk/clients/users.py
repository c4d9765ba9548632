from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .. import wire
from ..models import User, UserRegistration
from .base import BaseClient, coerce_model


@dataclass
class UsersClient(BaseClient):
    module = "users"

    def register_user(self, payload: UserRegistration | Mapping[str, Any]) -> User:
        request = coerce_model(payload, UserRegistration)
        reply = self._update("register_user", [wire.encode_user_registration(request)])
        return self._result("register_user", reply, wire.decode_user)

    def get_user(self) -> User:
        reply = self._query("get_user")
        return self._result("get_user", reply, wire.decode_user)

    def update_user_verification(self, user_id: str, verified: bool) -> None:
        reply = self._update("update_user_verification", [user_id, bool(verified)])
        self._result("update_user_verification", reply, wire.decode_null)
