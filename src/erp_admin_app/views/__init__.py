from .products_view import ProductsListView
from .sales_history_view import SalesHistoryView
from .sales_summary_view import SalesSummaryView

__all__ = ["ProductsListView", "SalesHistoryView", "SalesSummaryView"]
