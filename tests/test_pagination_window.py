from __future__ import annotations

import pytest

from erp_admin_app.table.pagination import ELLIPSIS, PaginationControls, page_window


@pytest.mark.parametrize(
    ("current", "total", "expected"),
    [
        (1, 0, [1]),
        (1, 1, [1]),
        (1, 3, [1, 2, 3]),
        (5, 7, [1, 2, 3, 4, 5, 6, 7]),
        (1, 10, [1, 2, 3, 4, None, 10]),
        (3, 10, [1, 2, 3, 4, None, 10]),
        (4, 10, [1, None, 3, 4, 5, None, 10]),
        (8, 10, [1, None, 7, 8, 9, 10]),
        (10, 10, [1, None, 7, 8, 9, 10]),
    ],
)
def test_page_window(current: int, total: int, expected: list[int | None]) -> None:
    assert page_window(current, total) == expected


def test_first_of_three_pages() -> None:
    controls = PaginationControls.build(page_index=0, page_size=10, total_pages=3, is_first=True, is_last=False)
    rendered = controls.render()
    assert [page["label"] for page in rendered["pages"]] == ["1", "2", "3"]
    assert rendered["previous_enabled"] is False
    assert rendered["next_enabled"] is True
    assert rendered["label"] == "Page 1 of 3"


def test_ellipsis_is_not_interactive() -> None:
    controls = PaginationControls.build(page_index=5, page_size=10, total_pages=20, is_first=False, is_last=False)
    items = controls.items()
    gaps = [item for item in items if item.number is None]
    assert len(gaps) == 2
    assert all(item.label == ELLIPSIS and not item.interactive for item in gaps)
    current = [item for item in items if item.current]
    assert [item.number for item in current] == [6]
    assert not current[0].interactive


def test_empty_collection_shows_single_page() -> None:
    controls = PaginationControls.build(page_index=0, page_size=10, total_pages=0, is_first=True, is_last=True)
    assert controls.render()["pages"] == [{"label": "1", "page_index": 0, "current": True, "interactive": False}]
    assert controls.label == "Page 1 of 1"
