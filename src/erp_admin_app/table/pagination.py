from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

ELLIPSIS = "…"
WINDOW_FULL_LIMIT = 7


def page_window(current_page: int, total_pages: int) -> list[int | None]:
    """Compressed 1-based page list; ``None`` marks an ellipsis gap."""
    if total_pages <= 0:
        return [1]
    last = total_pages
    if total_pages <= WINDOW_FULL_LIMIT:
        return list(range(1, last + 1))
    if current_page <= 3:
        return [1, 2, 3, 4, None, last]
    if current_page >= last - 2:
        return [1, None, last - 3, last - 2, last - 1, last]
    return [1, None, current_page - 1, current_page, current_page + 1, None, last]


@dataclass(frozen=True)
class PageItem:
    number: int | None
    current: bool = False

    @property
    def interactive(self) -> bool:
        return self.number is not None and not self.current

    @property
    def label(self) -> str:
        return ELLIPSIS if self.number is None else str(self.number)

    def render(self) -> dict[str, Any]:
        return {"label": self.label, "page_index": None if self.number is None else self.number - 1, "current": self.current, "interactive": self.interactive}


@dataclass(frozen=True)
class PaginationControls:
    page_index: int
    total_pages: int
    page_size: int
    page_size_options: tuple[int, ...]
    previous_enabled: bool
    next_enabled: bool

    @classmethod
    def build(
        cls,
        *,
        page_index: int,
        page_size: int,
        total_pages: int,
        is_first: bool,
        is_last: bool,
        page_size_options: Sequence[int] = (),
    ) -> "PaginationControls":
        return cls(
            page_index=page_index,
            total_pages=total_pages,
            page_size=page_size,
            page_size_options=tuple(page_size_options),
            previous_enabled=not is_first,
            next_enabled=not is_last,
        )

    @property
    def label(self) -> str:
        return f"Page {self.page_index + 1} of {max(self.total_pages, 1)}"

    def items(self) -> list[PageItem]:
        current = self.page_index + 1
        return [PageItem(number=number, current=number == current) for number in page_window(current, self.total_pages)]

    def render(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "previous_enabled": self.previous_enabled,
            "next_enabled": self.next_enabled,
            "pages": [item.render() for item in self.items()],
            "page_size": self.page_size,
            "page_size_options": list(self.page_size_options),
        }
