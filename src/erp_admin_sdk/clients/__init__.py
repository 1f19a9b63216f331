from .base import BaseClient
from .collection_client import CollectionClient
from .products_client import PRODUCTS_PATH, PRODUCTS_SEARCH_PATH, ProductsClient
from .reports_client import SALES_SUMMARY_PATH, ReportsClient
from .sales_client import SALES_DATE_RANGE_PATH, SALES_PATH, SalesClient

__all__ = [
    "BaseClient",
    "CollectionClient",
    "PRODUCTS_PATH",
    "PRODUCTS_SEARCH_PATH",
    "ProductsClient",
    "ReportsClient",
    "SALES_DATE_RANGE_PATH",
    "SALES_PATH",
    "SALES_SUMMARY_PATH",
    "SalesClient",
]
