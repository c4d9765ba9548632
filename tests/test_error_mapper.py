from __future__ import annotations

import pytest

from suptrus_client_sdk.error_mapper import map_transport_error, unwrap_result
from suptrus_client_sdk.exceptions import RemoteCallFailedError, RemoteRejectedError


def test_unwrap_ok_runs_decoder() -> None:
    assert unwrap_result("register_product", {"Ok": "CT-1"}, str.lower) == "ct-1"


def test_unwrap_err_raises_rejection() -> None:
    with pytest.raises(RemoteRejectedError) as excinfo:
        unwrap_result("register_product", {"Err": "validation failed"}, str)

    assert excinfo.value.reason == "validation failed"
    assert excinfo.value.code == "REMOTE_REJECTED"
    assert str(excinfo.value) == "REMOTE_REJECTED: validation failed method=register_product"


@pytest.mark.parametrize("reply", [None, "CT-1", {"Maybe": 1}, {"Ok": 1, "Err": "x"}])
def test_unwrap_malformed_envelope(reply) -> None:
    with pytest.raises(RemoteCallFailedError):
        unwrap_result("register_product", reply, str)


def test_decoder_errors_become_call_failures() -> None:
    def decode(_payload):
        raise KeyError("version")

    with pytest.raises(RemoteCallFailedError) as excinfo:
        unwrap_result("get_canister_status", {"Ok": {}}, decode)

    assert isinstance(excinfo.value.cause, KeyError)


def test_map_transport_error_keeps_cause() -> None:
    cause = ConnectionError("replica unreachable")

    err = map_transport_error("get_product", cause)

    assert err.code == "REMOTE_CALL_FAILED"
    assert err.cause is cause
    assert err.details == {"type": "ConnectionError"}
    assert "replica unreachable" in str(err)
