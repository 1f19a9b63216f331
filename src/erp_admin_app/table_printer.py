from __future__ import annotations

import sys
from typing import Any, TextIO


def print_table(title: str, table: dict[str, Any], stream: TextIO | None = None) -> None:
    """Plain-text dump of a projected table payload."""
    out = stream or sys.stdout
    out.write(f"\n{title}\n")
    columns = table["columns"]
    rows = table["rows"]
    if not rows:
        out.write("(no results)\n")
    else:
        widths = []
        for column in columns:
            max_cell = max(len(row["cells"][column["id"]]) for row in rows)
            widths.append(max(len(column["label"]), max_cell))
        out.write(" | ".join(column["label"].ljust(widths[idx]) for idx, column in enumerate(columns)) + "\n")
        out.write("-+-".join("-" * width for width in widths) + "\n")
        for row in rows:
            out.write(" | ".join(row["cells"][column["id"]].ljust(widths[idx]) for idx, column in enumerate(columns)) + "\n")
    summary = table["summary"]
    pagination = table["pagination"]
    out.write(f"{summary['page_text']}; {summary['total_text']}; {pagination['label']}\n")
