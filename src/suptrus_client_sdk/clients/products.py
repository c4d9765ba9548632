from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .. import wire
from ..models import Product, ProductRegistration, ProductSearchQuery, ProductWithHistory
from .base import BaseClient, coerce_model


@dataclass
class ProductsClient(BaseClient):
    module = "products"

    def register_product(self, payload: ProductRegistration | Mapping[str, Any]) -> str:
        """Register a product and return the id the canister assigned to it."""
        request = coerce_model(payload, ProductRegistration)
        reply = self._update("register_product", [wire.encode_product_registration(request)])
        return self._result("register_product", reply, wire.decode_text)

    def get_product(self, product_id: str) -> ProductWithHistory:
        reply = self._query("get_product", [product_id])
        return self._result("get_product", reply, wire.decode_product_with_history)

    def search_products(self, query: ProductSearchQuery | Mapping[str, Any] | None = None) -> list[Product]:
        request = coerce_model(query or {}, ProductSearchQuery)
        reply = self._query("search_products", [wire.encode_product_search_query(request)])
        return self._plain("search_products", reply, wire.decode_products)
