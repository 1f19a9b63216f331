from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping

from erp_admin_sdk.exceptions import ValidationError

if TYPE_CHECKING:
    from .columns import CollectionSpec


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


def _normalize_filters(filters: Mapping[str, Any] | None) -> tuple[tuple[str, str], ...]:
    if not filters:
        return ()
    kept = {}
    for key, value in filters.items():
        if value is None:
            continue
        text = value.isoformat() if hasattr(value, "isoformat") else str(value)
        if text.strip():
            kept[str(key)] = text.strip()
    return tuple(sorted(kept.items()))


@dataclass(frozen=True)
class QueryState:
    """What the user currently wants to see.

    Every transition returns a new instance. Changing anything but the page
    index sends the user back to the first page.
    """

    page_index: int = 0
    page_size: int = 10
    sort_field: str | None = None
    sort_direction: SortDirection = SortDirection.ASC
    filter_text: str = ""
    extra_filters: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.page_index, bool) or not isinstance(self.page_index, int) or self.page_index < 0:
            raise ValidationError.single("page_index", "must be an integer >= 0")
        if isinstance(self.page_size, bool) or not isinstance(self.page_size, int) or self.page_size <= 0:
            raise ValidationError.single("page_size", "must be an integer > 0")

    @classmethod
    def initial(cls, collection: "CollectionSpec", *, page_size: int = 10) -> "QueryState":
        return cls(page_size=page_size, sort_direction=SortDirection(collection.default_sort_direction))

    @property
    def filters(self) -> dict[str, str]:
        return dict(self.extra_filters)

    def set_sort(self, field: str) -> "QueryState":
        if field == self.sort_field:
            return replace(self, sort_direction=self.sort_direction.flipped(), page_index=0)
        return replace(self, sort_field=field, sort_direction=SortDirection.ASC, page_index=0)

    def set_filter_text(self, text: str | None) -> "QueryState":
        return replace(self, filter_text=text or "", page_index=0)

    def set_page_index(self, page_index: int) -> "QueryState":
        return replace(self, page_index=page_index)

    def set_page_size(self, page_size: int) -> "QueryState":
        return replace(self, page_size=page_size, page_index=0)

    def set_extra_filters(self, filters: Mapping[str, Any] | None) -> "QueryState":
        return replace(self, extra_filters=_normalize_filters(filters), page_index=0)

    def clamped(self, total_pages: int) -> "QueryState":
        if total_pages <= 0 or self.page_index <= total_pages - 1:
            return self
        return replace(self, page_index=total_pages - 1)

    def fetch_key(self, *, include_filter_text: bool) -> tuple[Any, ...]:
        """The parts of the state that change the server request."""
        text = self.filter_text.strip() if include_filter_text else None
        return (
            self.page_index,
            self.page_size,
            self.sort_field,
            self.sort_direction,
            text,
            self.extra_filters,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "page_index": self.page_index,
            "page_size": self.page_size,
            "sort_field": self.sort_field,
            "sort_direction": self.sort_direction.value,
            "filter_text": self.filter_text,
            "extra_filters": self.filters,
        }
