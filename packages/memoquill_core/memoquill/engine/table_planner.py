"""Table planner - turns a ``<table>`` element into a rectangular grid."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..parser.nodes import Element
from ..parser.sanitizer import SPAN_LIMITS, parse_span
from .direction import resolve_flow
from .inline_composer import compose_runs
from .layout_primitives import Emphasis, TableBlock, TableCell, TableRow, TextStyle

logger = logging.getLogger(__name__)

CELL_TAGS = ("td", "th")


def collect_rows(table: Element) -> List[Tuple[Element, bool]]:
    """
    Collect ``(tr, inside_thead)`` pairs in document order.

    Rows are looked up as ``thead > tr``, ``tbody > tr`` and bare ``tr``
    children of the table.
    """
    rows: List[Tuple[Element, bool]] = []
    for child in table.element_children():
        if child.tag == "tr":
            rows.append((child, False))
        elif child.tag in ("thead", "tbody"):
            in_head = child.tag == "thead"
            rows.extend((row, in_head) for row in child.element_children() if row.tag == "tr")
    return rows


def row_cells(row: Element) -> List[Element]:
    return [child for child in row.element_children() if child.tag in CELL_TAGS]


def plan_table(
    table: Element,
    base_style: TextStyle,
    arabic_style: TextStyle,
) -> Optional[TableBlock]:
    """
    Plan a table block.

    Returns:
        ``TableBlock`` whose rows are padded on the right to ``columns``
        cells, or None when the table has no rows or no cells
    """
    rows = collect_rows(table)
    if not rows:
        logger.debug("Skipping table without rows")
        return None

    columns = max(len(row_cells(row)) for row, _ in rows)
    if columns == 0:
        logger.debug("Skipping table without cells")
        return None

    header_rows: List[TableRow] = []
    body_rows: List[TableRow] = []
    order: List[Tuple[str, int]] = []

    for row, in_head in rows:
        cells = row_cells(row)
        is_header = in_head or any(cell.tag == "th" for cell in cells)

        planned = [_plan_cell(cell, is_header, base_style, arabic_style) for cell in cells]
        planned.extend(TableCell(is_header=is_header) for _ in range(columns - len(cells)))
        table_row = TableRow(cells=tuple(planned), is_header=is_header)

        if is_header:
            order.append(("header", len(header_rows)))
            header_rows.append(table_row)
        else:
            order.append(("body", len(body_rows)))
            body_rows.append(table_row)

    return TableBlock(
        columns=columns,
        header_rows=tuple(header_rows),
        body_rows=tuple(body_rows),
        row_order=tuple(order),
    )


def _plan_cell(
    cell: Element,
    is_header: bool,
    base_style: TextStyle,
    arabic_style: TextStyle,
) -> TableCell:
    direction, alignment = resolve_flow(cell)
    emphasis = Emphasis(bold=True) if is_header else Emphasis()
    colspan = parse_span(cell.get("colspan"), *SPAN_LIMITS["colspan"]) or 1
    rowspan = parse_span(cell.get("rowspan"), *SPAN_LIMITS["rowspan"]) or 1
    return TableCell(
        runs=tuple(compose_runs(cell, base_style, arabic_style, emphasis)),
        is_header=is_header,
        alignment=alignment,
        direction=direction,
        colspan=colspan,
        rowspan=rowspan,
    )
