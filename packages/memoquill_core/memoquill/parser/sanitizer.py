"""
Sanitizer - reduces untrusted editor HTML to the tag/attribute allow-list.

Rules:
- Allowed tags survive; any other element is unwrapped (its children take
  its place in the parent, order preserved)
- Comments are deleted
- Attributes are dropped, except:
    * ``style`` reduced to a single ``text-align`` declaration when its value
      is left/right/center/justify
    * ``colspan`` (2..50) and ``rowspan`` (2..200) on ``td``/``th`` when the
      value is purely numeric
- Adjacent text nodes produced by unwrapping are merged

Sanitizing an already sanitized tree returns an equal tree.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Union

from .html_parser import ROOT_TAG, parse_html
from .nodes import Comment, Element, Node, Text
from .style_parser import parse_style

logger = logging.getLogger(__name__)

ALLOWED_TAGS = frozenset({
    "p", "br",
    "b", "strong", "i", "em", "u",
    "ol", "ul", "li",
    "div", "span",
    "table", "thead", "tbody", "tr", "th", "td",
})

CELL_TAGS = frozenset({"td", "th"})

# Inclusive bounds for span attributes kept on table cells
SPAN_LIMITS: Dict[str, tuple] = {
    "colspan": (2, 50),
    "rowspan": (2, 200),
}


def sanitize(source: Union[str, Element, None]) -> Element:
    """
    Sanitize raw HTML text or an already parsed tree.

    Args:
        source: HTML text, or a root element (the root tag itself is kept)

    Returns:
        New cleaned root element; the input tree is not modified
    """
    if isinstance(source, Element):
        root = source
    else:
        root = parse_html(source)
    return Element(root.tag or ROOT_TAG, {}, _clean_children(root.children))


def _clean_children(children: List[Node]) -> List[Node]:
    cleaned: List[Node] = []
    for child in children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, Text):
            _append_text(cleaned, child.value)
            continue

        inner = _clean_children(child.children)
        if child.tag not in ALLOWED_TAGS:
            logger.debug("Unwrapping disallowed element <%s>", child.tag)
            for node in inner:
                if isinstance(node, Text):
                    _append_text(cleaned, node.value)
                else:
                    cleaned.append(node)
            continue

        cleaned.append(Element(child.tag, clean_attributes(child), inner))
    return cleaned


def _append_text(nodes: List[Node], value: str) -> None:
    if not value:
        return
    if nodes and isinstance(nodes[-1], Text):
        nodes[-1] = Text(nodes[-1].value + value)
    else:
        nodes.append(Text(value))


def clean_attributes(element: Element) -> Dict[str, str]:
    """Return the allow-listed attributes of ``element`` in canonical form."""
    attributes: Dict[str, str] = {}

    alignment = parse_style(element.get("style")).text_align
    if alignment is not None:
        attributes["style"] = f"text-align: {alignment.value}"

    if element.tag in CELL_TAGS:
        for name, (low, high) in SPAN_LIMITS.items():
            span = parse_span(element.get(name), low, high)
            if span is not None:
                attributes[name] = str(span)

    return attributes


def parse_span(value: Optional[str], low: int, high: int) -> Optional[int]:
    """Return the span value when it is all digits and within ``[low, high]``."""
    token = (value or "").strip()
    if not token or not (token.isascii() and token.isdigit()):
        return None
    span = int(token)
    if low <= span <= high:
        return span
    return None
