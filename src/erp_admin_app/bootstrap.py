from __future__ import annotations

from erp_admin_sdk import ApiSession, ClientConfig, load_config

from .collections import PRODUCTS, SALES
from .config import AppConfig, load_app_config
from .shared.telemetry import TelemetryLogger
from .table.controller import TableController
from .views.products_view import ProductsListView
from .views.sales_history_view import SalesHistoryView
from .views.sales_summary_view import SalesSummaryView


class AdminConsoleBootstrap:
    """Wires SDK clients, table controllers and views for one signed-in session."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        app_config: AppConfig | None = None,
        session: ApiSession | None = None,
        token: str | None = None,
        env_file: str | None = None,
    ) -> None:
        self.config = config or load_config(env_file)
        self.app_config = app_config or load_app_config(env_file)
        self.session = session or ApiSession(self.config, token=token)
        self.telemetry = TelemetryLogger(
            app_name="erp_admin",
            enabled=self.app_config.telemetry_enabled,
            log_file=self.app_config.telemetry_log_file,
        )

    def products_view(self) -> ProductsListView:
        controller = TableController(
            PRODUCTS, self.session.products_client(), config=self.app_config, telemetry=self.telemetry
        )
        return ProductsListView(controller)

    def sales_history_view(self) -> SalesHistoryView:
        controller = TableController(SALES, self.session.sales_client(), config=self.app_config, telemetry=self.telemetry)
        return SalesHistoryView(controller)

    def sales_summary_view(self) -> SalesSummaryView:
        return SalesSummaryView(self.session.reports_client(), telemetry=self.telemetry)

    def close(self) -> None:
        self.session.close()
