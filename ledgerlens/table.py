"""
table.py - Boxed console tables

render_table() turns a list of flat rows into a box-drawn table with an
(index) column followed by one column per key, in first-seen order.
"""

from __future__ import annotations
from typing import Any, Dict, List, Sequence

from .core import MAX_CELL_WIDTH


INDEX_HEADER = "(index)"


def _fit(text: str, width: int) -> str:
    """Truncate text to width characters, marking the cut with '...'."""
    if len(text) > width:
        return text[:width - 3] + "..."
    return text


def format_cell(value: Any) -> str:
    """Render one cell value; None is an empty cell."""
    match value:
        case None:
            return ""
        case list() | tuple():
            if not value:
                return "[]"
            return "[ " + ", ".join(f"'{item}'" for item in value) + " ]"
        case _:
            return str(value)


def _columns(rows: Sequence[Dict[str, Any]]) -> List[str]:
    columns: List[str] = []
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)
    return columns


def render_table(rows: Sequence[Dict[str, Any]]) -> str:
    """
    Render rows as a table.

    Example:
        render_table([{"Contract": "Counter", "Contract Balance": "0.05"}])

        ┌─────────┬──────────┬──────────────────┐
        │ (index) │ Contract │ Contract Balance │
        ├─────────┼──────────┼──────────────────┤
        │ 0       │ Counter  │ 0.05             │
        └─────────┴──────────┴──────────────────┘
    """
    columns = _columns(rows)
    header = [INDEX_HEADER] + columns
    body = [
        [str(i)] + [_fit(format_cell(row.get(col)), MAX_CELL_WIDTH) for col in columns]
        for i, row in enumerate(rows)
    ]

    widths = [len(h) + 2 for h in header]
    for cells in body:
        for i, cell in enumerate(cells):
            widths[i] = max(widths[i], len(cell) + 2)

    def bar(left: str, mid: str, right: str) -> str:
        return left + mid.join("─" * w for w in widths) + right

    def line(cells: Sequence[str]) -> str:
        return "│" + "│".join((" " + c).ljust(w) for c, w in zip(cells, widths)) + "│"

    lines = [bar("┌", "┬", "┐"), line(header), bar("├", "┼", "┤")]
    lines.extend(line(cells) for cells in body)
    lines.append(bar("└", "┴", "┘"))
    return "\n".join(lines)
