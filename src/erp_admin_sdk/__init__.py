from .clients import CollectionClient, ProductsClient, ReportsClient, SalesClient
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    ApplicationError,
    ConflictError,
    DuplicateSubmissionError,
    ForbiddenError,
    MalformedResponseError,
    NotFoundError,
    ServerError,
    TransportError,
    UnauthorizedError,
    ValidationError,
    ValidationIssue,
)
from .http_client import HttpClient
from .models import ApiEnvelope, PageData, PageQuery
from .models_products import PRODUCT_SORTABLE_FIELDS, Product, ProductPayload
from .models_reports import SalesSummary, SummaryFilter
from .models_sales import SALE_SORTABLE_FIELDS, Sale, SaleItem, SaleItemPayload, SalePayload
from .session import ApiSession
from .tracing import TraceContext
from .ui_errors import UserFacingError, to_user_facing_error
from .validation import coerce_payload, payload_body

__version__ = "0.1.0"

__all__ = [
    "ApiEnvelope",
    "ApiError",
    "ApiSession",
    "ApplicationError",
    "ClientConfig",
    "CollectionClient",
    "ConfigError",
    "ConflictError",
    "DuplicateSubmissionError",
    "ForbiddenError",
    "HttpClient",
    "MalformedResponseError",
    "NotFoundError",
    "PRODUCT_SORTABLE_FIELDS",
    "PageData",
    "PageQuery",
    "Product",
    "ProductPayload",
    "ProductsClient",
    "ReportsClient",
    "SALE_SORTABLE_FIELDS",
    "Sale",
    "SaleItem",
    "SaleItemPayload",
    "SalePayload",
    "SalesClient",
    "SalesSummary",
    "ServerError",
    "SummaryFilter",
    "TraceContext",
    "TransportError",
    "UnauthorizedError",
    "UserFacingError",
    "ValidationError",
    "ValidationIssue",
    "coerce_payload",
    "load_config",
    "payload_body",
    "to_user_facing_error",
]
