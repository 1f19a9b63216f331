from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from erp_admin_sdk.clients.sales_client import CANCEL_ACTION, SalesClient
from erp_admin_sdk.exceptions import ApiError, ValidationError
from erp_admin_sdk.models_sales import Sale
from erp_admin_sdk.ui_errors import to_user_facing_error

from ..shared.notification_center import NotificationCenter
from ..shared.retry_panel import RetryPanel
from ..table.controller import TableController
from ..table.result_cache import FetchStatus


@dataclass
class SalesHistoryView:
    controller: TableController
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    date_range: tuple[date, date] | None = None
    detail: Sale | None = None

    @property
    def client(self) -> SalesClient:
        return self.controller.client

    async def load(self) -> bool:
        status = await self.controller.refresh()
        return not status.is_error

    async def retry(self) -> bool:
        return await self.load()

    async def set_date_range(self, start: date | None, end: date | None) -> FetchStatus:
        if start is None or end is None:
            raise ValidationError.single("dateRange", "Both start and end dates are required")
        if start > end:
            raise ValidationError.single("dateRange", "Start date must be on or before end date")
        self.date_range = (start, end)
        return await self.controller.set_extra_filters({"startDate": start, "endDate": end})

    async def clear_date_range(self) -> FetchStatus:
        self.date_range = None
        return await self.controller.set_extra_filters(None)

    async def cancel_sale(self, sale_id: int) -> bool:
        try:
            await self.controller.mutate.action(sale_id, CANCEL_ACTION)
        except (ValidationError, ApiError) as exc:
            self.notifications.push_error("Could not cancel sale", to_user_facing_error(exc))
            return False
        self.notifications.push(level="success", title="Sale cancelled", message=f"Sale {sale_id} was cancelled.")
        return True

    async def sale_detail(self, sale_id: int) -> Sale | None:
        try:
            self.detail = await asyncio.to_thread(self.client.get_sale, sale_id)
        except ApiError as exc:
            self.detail = None
            self.notifications.push_error("Could not load sale", to_user_facing_error(exc))
        return self.detail

    def render(self) -> dict[str, Any]:
        payload = self.controller.render()
        status = self.controller.fetch_status
        payload["date_range"] = (
            {"startDate": self.date_range[0].isoformat(), "endDate": self.date_range[1].isoformat()}
            if self.date_range
            else None
        )
        payload["detail"] = self.detail.model_dump(by_alias=True, mode="json") if self.detail else None
        payload["retry"] = RetryPanel(operation="sales_history.load", is_mutation=False, has_error=status.is_error).render()
        payload["notifications"] = self.notifications.render()
        return payload
