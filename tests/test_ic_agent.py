from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest
from ic.candid import decode

from suptrus_client_sdk.exceptions import RemoteCallFailedError
from suptrus_client_sdk.ic_agent import IcAgent, IcSignerKeys, _first_value
from suptrus_client_sdk.idl import SERVICE

from records import canister_status_record

CANISTER_ID = "bkyz2-fmaaa-aaaaa-qaaaq-cai"


@dataclass
class StubReplica:
    reply: Any = None
    error: Exception | None = None
    calls: list[tuple[str, str, str, bytes, list[Any]]] = field(default_factory=list)

    def query_raw(self, canister_id: str, method: str, arg: bytes, return_types: list[Any]) -> Any:
        return self._record("query", canister_id, method, arg, return_types)

    def update_raw(self, canister_id: str, method: str, arg: bytes, return_types: list[Any]) -> Any:
        return self._record("update", canister_id, method, arg, return_types)

    def _record(self, mode: str, canister_id: str, method: str, arg: bytes, return_types: list[Any]) -> Any:
        self.calls.append((mode, canister_id, method, arg, return_types))
        if self.error is not None:
            raise self.error
        return self.reply


def _agent(replica: StubReplica) -> IcAgent:
    return IcAgent(host="http://localhost:4943", canister_id=CANISTER_ID, signer=None, _agent=replica)


def test_query_goes_through_query_raw() -> None:
    replica = StubReplica(reply=[{"type": "rec", "value": canister_status_record()}])

    result = _agent(replica).query("get_canister_status", [])

    assert result == canister_status_record()
    mode, canister_id, method, arg, return_types = replica.calls[0]
    assert (mode, canister_id, method) == ("query", CANISTER_ID, "get_canister_status")
    assert arg.startswith(b"DIDL")
    assert return_types == list(SERVICE["get_canister_status"].returns)


def test_update_goes_through_update_raw() -> None:
    replica = StubReplica(reply=[{"type": "variant", "value": {"Ok": None}}])
    registration = {
        "company_name": "FastFreight",
        "partner_type": {"LogisticsProvider": None},
        "contact_email": "desk@fastfreight.example",
        "contact_person": "Lee Park",
        "certifications": [],
    }

    result = _agent(replica).update("register_partner", [registration])

    assert result == {"Ok": None}
    assert replica.calls[0][0] == "update"
    assert replica.calls[0][2] == "register_partner"


def test_arguments_are_candid_encoded() -> None:
    replica = StubReplica(reply=[])

    _agent(replica).query("get_product", ["CT-2024-001234"])

    arg = replica.calls[0][3]
    assert decode(arg, list(SERVICE["get_product"].args))[0]["value"] == "CT-2024-001234"


def test_mode_mismatch_is_rejected_before_calling() -> None:
    replica = StubReplica()

    with pytest.raises(ValueError, match="update method"):
        _agent(replica).query("register_partner", [{}])

    assert replica.calls == []


def test_replica_errors_become_call_failures() -> None:
    cause = RuntimeError("Canister rejected the message")
    replica = StubReplica(error=cause)

    with pytest.raises(RemoteCallFailedError) as excinfo:
        _agent(replica).query("get_canister_status", [])

    assert excinfo.value.method == "get_canister_status"
    assert excinfo.value.cause is cause
    assert excinfo.value.details == {"type": "RuntimeError"}


def test_unencodable_arguments_become_call_failures() -> None:
    replica = StubReplica()

    with pytest.raises(RemoteCallFailedError):
        _agent(replica).query("get_product", [42])

    assert replica.calls == []


def test_first_value_unwraps_decoded_replies() -> None:
    assert _first_value([{"type": "text", "value": "EVT-7"}]) == "EVT-7"
    assert _first_value([]) is None
    assert _first_value({"Ok": None}) == {"Ok": None}


def test_local_root_key_reaches_the_agent() -> None:
    signer = IcSignerKeys().new()

    agent = IcAgent(host="http://localhost:4943", canister_id=CANISTER_ID, signer=signer, root_key=b"LOCALKEY")

    assert agent._agent.root_key == b"LOCALKEY"


def test_mainnet_agent_keeps_the_builtin_root_key() -> None:
    signer = IcSignerKeys().new()

    agent = IcAgent(host="https://ic0.app", canister_id=CANISTER_ID, signer=signer)

    assert agent._agent.root_key != b"LOCALKEY"
    assert agent._agent.root_key


def test_signer_keys_reload_to_the_same_principal() -> None:
    keys = IcSignerKeys()
    signer = keys.new()

    reloaded = keys.load(keys.private_key(signer))

    assert keys.principal(reloaded) == keys.principal(signer)
    assert keys.principal(keys.new()) != keys.principal(signer)
