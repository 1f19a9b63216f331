from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models_sales import Sale, SalePayload
from ..validation import payload_body
from .collection_client import CollectionClient

SALES_PATH = "/sales"
SALES_DATE_RANGE_PATH = "/sales/date-range"
CANCEL_ACTION = "cancel"


@dataclass
class SalesClient(CollectionClient):
    collection_path: str = SALES_PATH
    module: str = "sales"

    def get_sale(self, sale_id: int) -> Sale:
        return Sale.model_validate(self.get(sale_id))

    def get_sale_by_number(self, sale_number: str) -> Sale:
        data = self._entity("GET", f"{SALES_PATH}/number/{sale_number}", operation="get_by_number")
        return Sale.model_validate(data)

    def create_sale(self, payload: SalePayload | Mapping[str, Any]) -> Sale:
        return Sale.model_validate(self.create(payload_body(payload, SalePayload)))

    def cancel_sale(self, sale_id: int) -> Sale:
        return Sale.model_validate(self.action(sale_id, CANCEL_ACTION))
