from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from erp_admin_sdk.clients.reports_client import ReportsClient
from erp_admin_sdk.exceptions import ApiError
from erp_admin_sdk.models_reports import SalesSummary, SummaryFilter
from erp_admin_sdk.ui_errors import to_user_facing_error
from erp_admin_sdk.validation import coerce_payload

from ..shared.notification_center import NotificationCenter
from ..shared.retry_panel import RetryPanel
from ..shared.telemetry import TelemetryLogger, build_event
from ..shared.telemetry.logger import disabled_telemetry
from ..shared.view_state import resolve_state
from ..table.columns import render_money


@dataclass
class SalesSummaryView:
    """Revenue totals and breakdowns for a closed date range."""

    client: ReportsClient
    telemetry: TelemetryLogger = field(default_factory=disabled_telemetry)
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    filters: SummaryFilter | None = None
    summary: SalesSummary | None = None
    is_loading: bool = False
    error_message: str | None = None
    trace_id: str | None = None

    async def load(self, start: date | None, end: date | None) -> bool:
        self.filters = coerce_payload({"startDate": start, "endDate": end}, SummaryFilter)
        self.is_loading = True
        self.error_message = None
        try:
            self.summary = await asyncio.to_thread(self.client.sales_summary, self.filters)
        except ApiError as exc:
            error = to_user_facing_error(exc)
            self.error_message = error.message
            self.trace_id = error.trace_id
            self.notifications.push_error("Could not load sales summary", error)
            self._emit(success=False, error_code=exc.code)
            return False
        finally:
            self.is_loading = False
        self._emit(success=True)
        return True

    async def retry(self) -> bool:
        if self.filters is None:
            return False
        return await self.load(self.filters.start_date, self.filters.end_date)

    def _emit(self, *, success: bool, error_code: str | None = None) -> None:
        self.telemetry.emit(
            build_event(
                category="api_call_result",
                name="api_call_result",
                module="reports",
                action="sales_summary.load",
                success=success,
                error_code=error_code,
                trace_id=self.trace_id,
            )
        )

    def render(self) -> dict[str, Any]:
        state = resolve_state(
            started=self.filters is not None,
            is_loading=self.is_loading,
            error=self.error_message,
            has_data=self.summary is not None,
            has_rows=bool(self.summary and self.summary.total_sales),
            trace_id=self.trace_id,
        )
        return {
            "filters": self.filters.model_dump(by_alias=True, mode="json") if self.filters else None,
            "view_state": state.render(),
            "totals": self._totals(),
            "daily": [
                {"date": day.date.isoformat(), "sales": day.sales_count, "revenue": render_money(day.revenue, {})}
                for day in (self.summary.daily_summary if self.summary else [])
            ],
            "top_products": [
                {
                    "product": product.product_name or product.product_id,
                    "quantity": product.quantity_sold,
                    "revenue": render_money(product.revenue, {}),
                }
                for product in (self.summary.top_products if self.summary else [])
            ],
            "payment_methods": [
                {"method": entry.payment_method, "count": entry.count, "amount": render_money(entry.amount, {})}
                for entry in (self.summary.payment_method_breakdown if self.summary else [])
            ],
            "retry": RetryPanel(operation="sales_summary.load", is_mutation=False, has_error=bool(self.error_message)).render(),
            "notifications": self.notifications.render(),
        }

    def _totals(self) -> dict[str, Any] | None:
        if self.summary is None:
            return None
        return {
            "sales": self.summary.total_sales,
            "revenue": render_money(self.summary.total_revenue, {}),
            "tax": render_money(self.summary.total_tax, {}),
            "discount": render_money(self.summary.total_discount, {}),
            "average": render_money(self.summary.average_sale_amount, {}),
        }
