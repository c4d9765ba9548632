from .base import BaseClient, LastOperation
from .events import EventsClient
from .partners import PartnersClient
from .products import ProductsClient
from .status import StatusClient
from .supply_chain import SupplyChainClient
from .users import UsersClient

__all__ = [
    "BaseClient",
    "EventsClient",
    "LastOperation",
    "PartnersClient",
    "ProductsClient",
    "StatusClient",
    "SupplyChainClient",
    "UsersClient",
]
