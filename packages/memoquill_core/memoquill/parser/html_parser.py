"""
HTML Parser - builds a node tree from editor HTML.

Handles:
- Start/end tags with lower-cased names and attributes
- Void elements (``<br>``, ``<img>`` ...) that never take children
- Stray end tags (ignored) and unclosed elements (closed at end of input)
- Entity decoding (``&nbsp;``, ``&amp;`` ...) through ``convert_charrefs``

No implicit closing rules are applied: a tree serialized with
``nodes.serialize`` parses back to the same tree. Markup that leaves
end tags out therefore nests: ``<tr><td>1<td>2</tr>`` yields one cell
containing another, and ``<li>a<li>b`` one item inside the other.
"""

from __future__ import annotations

import logging
from html.parser import HTMLParser
from typing import List, Optional

from ..exceptions import ParsingError
from .nodes import VOID_TAGS, Comment, Element, Text

logger = logging.getLogger(__name__)

ROOT_TAG = "body"


class TreeBuilder(HTMLParser):
    """Parser HTML that collects nodes under a synthetic ``body`` root."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.root = Element(ROOT_TAG)
        self._stack: List[Element] = [self.root]

    @property
    def current(self) -> Element:
        return self._stack[-1]

    def handle_starttag(self, tag: str, attrs: list) -> None:
        tag_lower = tag.lower()
        attributes = {}
        for attr_name, attr_value in attrs:
            # First occurrence wins, as in browsers
            attributes.setdefault(attr_name.lower(), attr_value or "")

        element = Element(tag_lower, attributes)
        self.current.children.append(element)
        if tag_lower not in VOID_TAGS:
            self._stack.append(element)

    def handle_startendtag(self, tag: str, attrs: list) -> None:
        # <br/>, <p/> ... are treated as empty elements
        self.handle_starttag(tag, attrs)
        tag_lower = tag.lower()
        if tag_lower not in VOID_TAGS and self.current.tag == tag_lower:
            self._stack.pop()

    def handle_endtag(self, tag: str) -> None:
        tag_lower = tag.lower()
        for depth in range(len(self._stack) - 1, 0, -1):
            if self._stack[depth].tag == tag_lower:
                del self._stack[depth:]
                return
        logger.debug("Ignoring stray end tag </%s>", tag_lower)

    def handle_data(self, data: str) -> None:
        if not data:
            return
        children = self.current.children
        if children and isinstance(children[-1], Text):
            children[-1] = Text(children[-1].value + data)
        else:
            children.append(Text(data))

    def handle_comment(self, data: str) -> None:
        self.current.children.append(Comment(data))


def parse_html(html_content: Optional[str]) -> Element:
    """
    Parse HTML text into a node tree.

    Args:
        html_content: HTML fragment or full document

    Returns:
        Synthetic ``body`` element holding the parsed nodes

    Raises:
        ParsingError: If the underlying parser gives up on the input
    """
    builder = TreeBuilder()
    try:
        builder.feed(html_content or "")
        builder.close()
    except Exception as exc:
        raise ParsingError("Failed to parse HTML", details=str(exc)) from exc
    return builder.root
