from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Mapping

from erp_admin_sdk.clients.products_client import ProductsClient
from erp_admin_sdk.exceptions import ApiError, ValidationError
from erp_admin_sdk.models_products import Product
from erp_admin_sdk.ui_errors import to_user_facing_error

from ..shared.notification_center import NotificationCenter
from ..shared.retry_panel import RetryPanel
from ..shared.telemetry import build_event
from ..table.controller import TableController
from ..table.mutation_coordinator import DeleteIntent


@dataclass
class ProductsListView:
    controller: TableController
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    form_errors: dict[str, str] = field(default_factory=dict)
    last_saved: dict[str, Any] | None = None
    editing: Product | None = None

    @property
    def client(self) -> ProductsClient:
        return self.controller.client

    async def load(self) -> bool:
        status = await self.controller.refresh()
        if status.is_error and self.controller.page_result is not None:
            self.notifications.push(
                level="warning",
                title="Products could not be refreshed",
                message="Showing the last loaded page.",
                details={"trace_id": status.trace_id},
            )
        self.controller.telemetry.emit(
            build_event(
                category="navigation",
                name="screen_view",
                module="products",
                action="products_list.load",
                success=not status.is_error,
                trace_id=status.trace_id,
                error_code=status.error_code,
            )
        )
        return not status.is_error

    async def retry(self) -> bool:
        return await self.load()

    async def load_for_edit(self, product_id: int) -> Product | None:
        try:
            self.editing = await asyncio.to_thread(self.client.get_product, product_id)
        except ApiError as exc:
            self.editing = None
            self.notifications.push_error("Could not load product", to_user_facing_error(exc))
        return self.editing

    async def save(self, form: Mapping[str, Any], product_id: int | None = None) -> bool:
        self.form_errors = {}
        try:
            if product_id is None:
                result = await self.controller.mutate.create(form)
            else:
                result = await self.controller.mutate.update(product_id, form)
        except (ValidationError, ApiError) as exc:
            error = to_user_facing_error(exc)
            self.form_errors = dict(error.field_errors or {})
            self.notifications.push_error("Could not save product", error)
            return False
        self.last_saved = result.entity
        self.editing = None
        verb = "created" if product_id is None else "updated"
        self.notifications.push(level="success", title="Product saved", message=f"Product {verb} successfully.")
        return True

    async def delete(self, intent: DeleteIntent) -> bool:
        try:
            await self.controller.mutate.delete(intent)
        except (ValidationError, ApiError) as exc:
            self.notifications.push_error("Could not delete product", to_user_facing_error(exc))
            return False
        self.notifications.push(level="success", title="Product deleted", message=f"{intent.label or 'Product'} deleted.")
        return True

    def render(self) -> dict[str, Any]:
        payload = self.controller.render()
        status = self.controller.fetch_status
        payload["retry"] = RetryPanel(operation="products_list.load", is_mutation=False, has_error=status.is_error).render()
        payload["notifications"] = self.notifications.render()
        payload["form_errors"] = dict(self.form_errors)
        payload["editing"] = self.editing.model_dump(by_alias=True, mode="json") if self.editing else None
        return payload
