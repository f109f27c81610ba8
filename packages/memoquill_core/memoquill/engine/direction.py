"""
Direction and alignment resolution for block-level nodes.

Direction precedence:
1. explicit ``dir`` attribute
2. ``direction`` declaration in the inline style
3. Arabic characters anywhere in the node's text
4. left-to-right

Alignment precedence:
1. ``text-align`` declaration in the inline style
2. legacy ``align`` attribute
3. ``right`` for RTL blocks, ``left`` otherwise
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..parser.nodes import Element
from ..parser.style_parser import parse_style
from ..utils.enums import Alignment, Direction
from .script import contains_rtl_script

ZERO_WIDTH_SPACE = "\u200b"
NBSP = "\u00a0"

# Markup that makes an otherwise text-less block meaningful
_STRUCTURAL_TAGS = frozenset({"table", "ol", "ul", "li"})


def resolve_direction(node: Element) -> Direction:
    """Resolve the writing direction of ``node``."""
    explicit = node.get("dir").strip().lower()
    if explicit == "rtl":
        return Direction.RTL
    if explicit == "ltr":
        return Direction.LTR

    styled = parse_style(node.get("style")).direction
    if styled is not None:
        return styled

    if contains_rtl_script(node.text_content()):
        return Direction.RTL
    return Direction.LTR


def read_text_align(node: Element) -> Optional[Alignment]:
    """Return the explicit alignment of ``node`` or None."""
    styled = parse_style(node.get("style")).text_align
    if styled is not None:
        return styled
    return Alignment.parse(node.get("align"))


def resolve_alignment(node: Element, direction: Optional[Direction] = None) -> Alignment:
    """Resolve alignment, defaulting from ``direction`` when nothing is explicit."""
    explicit = read_text_align(node)
    if explicit is not None:
        return explicit
    if direction is None:
        direction = resolve_direction(node)
    return direction.default_alignment


def resolve_flow(node: Element) -> Tuple[Direction, Alignment]:
    """Resolve ``(direction, alignment)`` for ``node`` in one call."""
    direction = resolve_direction(node)
    return direction, resolve_alignment(node, direction)


def visible_text(text: str) -> str:
    """Strip zero-width spaces and NBSPs, then surrounding whitespace."""
    return text.replace(ZERO_WIDTH_SPACE, "").replace(NBSP, " ").strip()


def is_blank_block(node: Element) -> bool:
    """
    Return True for blocks that only encode an empty line.

    ``<p></p>``, ``<p>&nbsp;</p>`` and the editor's ``<p><br></p>`` are
    blank; a block holding a list/table or more than one break is not.
    """
    if visible_text(node.text_content()):
        return False

    breaks = 0
    for element in node.iter_elements():
        if element.tag in _STRUCTURAL_TAGS:
            return False
        if element.tag == "br":
            breaks += 1
    return breaks <= 1
