from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ic.agent import Agent
from ic.candid import encode
from ic.client import Client
from ic.identity import Identity as IcIdentity

from . import idl
from .agent import ReplicaAgent
from .error_mapper import map_transport_error

logger = logging.getLogger(__name__)


class IcSignerKeys:
    """Ed25519 signers from ic-py."""

    key_type = "ed25519"

    def new(self) -> IcIdentity:
        return IcIdentity(type=self.key_type)

    def load(self, private_key: str) -> IcIdentity:
        return IcIdentity(privkey=private_key, type=self.key_type)

    def principal(self, signer: IcIdentity) -> str:
        return signer.sender().to_str()

    def private_key(self, signer: IcIdentity) -> str:
        return signer.privkey


def _first_value(decoded: Any) -> Any:
    if isinstance(decoded, list):
        if not decoded:
            return None
        decoded = decoded[0]
    if isinstance(decoded, dict) and "value" in decoded and "type" in decoded:
        return decoded["value"]
    return decoded


@dataclass
class IcAgent:
    """ReplicaAgent backed by ic-py, bound to one canister and one signer."""

    host: str
    canister_id: str
    signer: IcIdentity
    root_key: bytes | None = None
    _agent: Agent | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self._agent is None:
            if self.root_key is not None:
                self._agent = Agent(self.signer, Client(url=self.host), root_key=self.root_key)
            else:
                self._agent = Agent(self.signer, Client(url=self.host))

    def query(self, method: str, args: list[Any]) -> Any:
        return self._invoke(method, args, idl.QUERY)

    def update(self, method: str, args: list[Any]) -> Any:
        return self._invoke(method, args, idl.UPDATE)

    def _invoke(self, method: str, args: list[Any], mode: str) -> Any:
        signature = idl.SERVICE[method]
        if signature.mode != mode:
            raise ValueError(f"{method} is a {signature.mode} method, not {mode}")
        try:
            payload = encode(idl.encode_args(method, args))
            if mode == idl.QUERY:
                decoded = self._agent.query_raw(self.canister_id, method, payload, list(signature.returns))
            else:
                decoded = self._agent.update_raw(self.canister_id, method, payload, list(signature.returns))
        except Exception as exc:
            # ic-py reports rejects, HTTP failures and decoding problems as plain exceptions.
            logger.debug("replica_call_failed", extra={"method": method, "canister_id": self.canister_id})
            raise map_transport_error(method, exc) from exc
        return _first_value(decoded)


def ic_agent_factory(host: str, canister_id: str, signer: Any, root_key: bytes | None) -> ReplicaAgent:
    return IcAgent(host=host, canister_id=canister_id, signer=signer, root_key=root_key)
