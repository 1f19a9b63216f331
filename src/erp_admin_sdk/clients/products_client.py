from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models_products import Product, ProductPayload
from ..validation import payload_body
from .collection_client import CollectionClient

PRODUCTS_PATH = "/products"
PRODUCTS_SEARCH_PATH = "/products/search"


@dataclass
class ProductsClient(CollectionClient):
    collection_path: str = PRODUCTS_PATH
    module: str = "products"

    def get_product(self, product_id: int) -> Product:
        return Product.model_validate(self.get(product_id))

    def create_product(self, payload: ProductPayload | Mapping[str, Any]) -> Product:
        return Product.model_validate(self.create(payload_body(payload, ProductPayload)))

    def update_product(self, product_id: int, payload: ProductPayload | Mapping[str, Any]) -> Product:
        return Product.model_validate(self.update(product_id, payload_body(payload, ProductPayload)))
