from __future__ import annotations

from typing import Any, Callable, Protocol


class ReplicaAgent(Protocol):
    """Issues calls to one canister on behalf of one identity.

    Arguments and results are Candid values in the shapes described in
    ``suptrus_client_sdk.wire``. Failures surface as ``RemoteCallFailedError``.
    """

    def query(self, method: str, args: list[Any]) -> Any:
        ...

    def update(self, method: str, args: list[Any]) -> Any:
        ...


# (host, canister_id, signer, root_key) -> agent
AgentFactory = Callable[[str, str, Any, "bytes | None"], ReplicaAgent]
