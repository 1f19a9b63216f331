from .columns import CollectionSpec, ColumnDescriptor, Route, normalize_value
from .controller import TableController
from .fetch_orchestrator import FetchOrchestrator, StaleResultDiscarded
from .mutation_coordinator import DeleteIntent, MutationCoordinator, MutationResult
from .pagination import PaginationControls, page_window
from .query_state import QueryState, SortDirection
from .result_cache import FetchState, FetchStatus, PageResult, ResultCache
from .view_projection import ViewProjection

__all__ = [
    "CollectionSpec",
    "ColumnDescriptor",
    "DeleteIntent",
    "FetchOrchestrator",
    "FetchState",
    "FetchStatus",
    "MutationCoordinator",
    "MutationResult",
    "PageResult",
    "PaginationControls",
    "QueryState",
    "ResultCache",
    "Route",
    "SortDirection",
    "StaleResultDiscarded",
    "TableController",
    "ViewProjection",
    "normalize_value",
    "page_window",
]
