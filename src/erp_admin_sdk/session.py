from __future__ import annotations

from dataclasses import dataclass, field

from .clients.products_client import ProductsClient
from .clients.reports_client import ReportsClient
from .clients.sales_client import SalesClient
from .config import ClientConfig
from .http_client import HttpClient
from .tracing import TraceContext


@dataclass
class ApiSession:
    """Builds resource clients that share one pooled HTTP transport.

    The bearer token is supplied by the caller; acquiring or refreshing it
    happens elsewhere.
    """

    config: ClientConfig
    token: str | None = None
    trace: TraceContext = field(default_factory=TraceContext)
    _shared_http: HttpClient | None = None

    def _http(self) -> HttpClient:
        if self._shared_http is None:
            self._shared_http = HttpClient(config=self.config, trace=self.trace)
        return self._shared_http

    def products_client(self) -> ProductsClient:
        return ProductsClient(http=self._http(), access_token=self.token)

    def sales_client(self) -> SalesClient:
        return SalesClient(http=self._http(), access_token=self.token)

    def reports_client(self) -> ReportsClient:
        return ReportsClient(http=self._http(), access_token=self.token)

    def close(self) -> None:
        if self._shared_http is not None:
            self._shared_http.close()
            self._shared_http = None
