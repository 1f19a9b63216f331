from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import MalformedResponseError
from ..models_reports import SalesSummary, SummaryFilter
from ..validation import coerce_payload
from .base import BaseClient

SALES_SUMMARY_PATH = "/reports/sales/summary"


@dataclass
class ReportsClient(BaseClient):
    module: str = "reports"

    def sales_summary(self, filters: SummaryFilter | Mapping[str, Any]) -> SalesSummary:
        summary_filter = coerce_payload(filters, SummaryFilter)
        params = summary_filter.model_dump(by_alias=True, mode="json")
        data = self._envelope_data("GET", SALES_SUMMARY_PATH, params=params, operation="sales_summary")
        if not isinstance(data, dict):
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message="Expected a sales summary object",
                status_code=200,
                raw_payload=data,
            )
        try:
            return SalesSummary.model_validate(data)
        except PydanticValidationError as exc:
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message="Sales summary payload is malformed",
                details=exc.errors(include_url=False),
                status_code=200,
                raw_payload=data,
            ) from exc
