from __future__ import annotations

from dataclasses import dataclass

from .events import EventsClient
from .partners import PartnersClient
from .products import ProductsClient
from .status import StatusClient
from .users import UsersClient


@dataclass
class SupplyChainClient(UsersClient, ProductsClient, EventsClient, PartnersClient, StatusClient):
    """Every canister operation on one client."""

    module = "supply_chain"
