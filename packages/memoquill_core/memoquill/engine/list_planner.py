"""List planner - one marker/content row per ``<li>``."""

from __future__ import annotations

from typing import List, Optional

from ..parser.nodes import Element
from .direction import resolve_flow
from .inline_composer import compose_runs
from .layout_primitives import ListBlock, ListItem, TextStyle

BULLET = "•"


def list_marker(ordered: bool, index: int, bullet: str = BULLET) -> str:
    """Marker text for item ``index`` (1-based)."""
    return f"{index}. " if ordered else f"{bullet} "


def plan_list(
    element: Element,
    base_style: TextStyle,
    arabic_style: TextStyle,
    bullet: str = BULLET,
    marker_width: float = 18.0,
) -> Optional[ListBlock]:
    """
    Plan an ``<ol>``/``<ul>`` element.

    Direction and alignment are resolved per item, so a list may mix RTL
    and LTR rows. Returns None when the list has no ``<li>`` children.
    """
    ordered = element.tag == "ol"
    items: List[ListItem] = []

    for li in element.element_children():
        if li.tag != "li":
            continue
        index = len(items) + 1
        direction, alignment = resolve_flow(li)
        items.append(
            ListItem(
                marker=list_marker(ordered, index, bullet),
                alignment=alignment,
                direction=direction,
                runs=tuple(compose_runs(li, base_style, arabic_style)),
                index=index if ordered else None,
            )
        )

    if not items:
        return None
    return ListBlock(ordered=ordered, items=tuple(items), marker_width=marker_width)
