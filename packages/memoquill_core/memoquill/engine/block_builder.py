"""

BlockLayoutBuilder - classifies the top-level body elements into blocks.

Mapping:
- ``<p>``, ``<div>`` and unknown tags -> paragraph (or spacer when blank)
- text and inline elements directly under the root, such as the content of
  unwrapped headings, are grouped into one paragraph per consecutive run
- ``<br>`` -> spacer
- ``<ul>``, ``<ol>`` -> list
- ``<table>`` -> table

Bodies without markup take the plain-text path: one paragraph per line,
aligned right for Arabic lines and left otherwise.

"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from ..exceptions import ParsingError
from ..parser.nodes import Element, Node, Text
from ..parser.sanitizer import sanitize
from ..utils.enums import Alignment, Direction
from .direction import is_blank_block, resolve_flow
from .inline_composer import compose_runs
from .layout_primitives import BlankSpacer, Block, ParagraphBlock, TextStyle
from .list_planner import BULLET, plan_list
from .script import contains_rtl_script
from .table_planner import plan_table

logger = logging.getLogger(__name__)

_TAG_PATTERN = re.compile(r"<[^>]*>")

# Root children of these tags join the surrounding text in an implicit paragraph
INLINE_TAGS = frozenset({"b", "strong", "i", "em", "u", "span"})


def is_plain_text(body: Optional[str]) -> bool:
    """True when the body has no markup to interpret."""
    return not body or not body.strip() or "<" not in body


class BlockLayoutBuilder:
    """Builds the ordered block sequence of a memo body."""

    def __init__(
        self,
        base_style: TextStyle,
        arabic_style: TextStyle,
        spacer_height: float = 12.0,
        bullet: str = BULLET,
        marker_width: float = 18.0,
    ):
        self.base_style = base_style
        self.arabic_style = arabic_style
        self.spacer_height = spacer_height
        self.bullet = bullet
        self.marker_width = marker_width

    def build_body(self, body: Optional[str]) -> List[Block]:
        """
        Build blocks from raw body text.

        Never raises for any body value: markup the parser rejects is
        stripped and rendered through the plain-text path.
        """
        if is_plain_text(body):
            return self.build_plain_text(body or "")

        try:
            return self.build(sanitize(body))
        except (ParsingError, RecursionError) as exc:
            # RecursionError: nesting deeper than the interpreter stack
            logger.warning("Body markup could not be laid out, using plain text: %s", exc)
            return self.build_plain_text(_TAG_PATTERN.sub("", body))

    def build(self, root: Element) -> List[Block]:
        """Classify the direct children of a sanitized root."""
        blocks: List[Block] = []
        pending: List[Node] = []
        for node in root.children:
            if isinstance(node, Text) or (isinstance(node, Element) and node.tag in INLINE_TAGS):
                pending.append(node)
                continue
            self._flush_inline(pending, blocks)
            if not isinstance(node, Element):
                continue
            block = self.build_block(node)
            if block is not None:
                blocks.append(block)
        self._flush_inline(pending, blocks)
        logger.debug("Built %d blocks from %d top-level nodes", len(blocks), len(root.children))
        return blocks

    def _flush_inline(self, pending: List[Node], blocks: List[Block]) -> None:
        if not pending:
            return
        group = Element("p", {}, list(pending))
        pending.clear()
        # whitespace between blocks
        if all(isinstance(node, Text) and not node.value.strip() for node in group.children):
            return
        blocks.append(self.build_paragraph(group))

    def build_block(self, node: Element) -> Optional[Block]:
        tag = node.tag
        if tag == "br":
            return self.spacer()
        if tag in ("ul", "ol"):
            return plan_list(
                node,
                self.base_style,
                self.arabic_style,
                bullet=self.bullet,
                marker_width=self.marker_width,
            )
        if tag == "table":
            return plan_table(node, self.base_style, self.arabic_style)
        return self.build_paragraph(node)

    def build_paragraph(self, node: Element) -> Block:
        if is_blank_block(node):
            return self.spacer()
        direction, alignment = resolve_flow(node)
        return ParagraphBlock(
            alignment=alignment,
            direction=direction,
            runs=tuple(compose_runs(node, self.base_style, self.arabic_style)),
            line_height=self.base_style.line_height,
        )

    def build_plain_text(self, body: str) -> List[Block]:
        """One paragraph per non-blank line, one spacer per blank line."""
        if not body.strip():
            return []

        blocks: List[Block] = []
        for line in body.replace("\r\n", "\n").split("\n"):
            if not line.strip():
                blocks.append(self.spacer())
                continue
            rtl = contains_rtl_script(line)
            blocks.append(
                ParagraphBlock(
                    alignment=Alignment.RIGHT if rtl else Alignment.LEFT,
                    direction=Direction.RTL if rtl else Direction.LTR,
                    runs=tuple(compose_runs(Text(line), self.base_style, self.arabic_style)),
                    line_height=self.base_style.line_height,
                )
            )
        return blocks

    def spacer(self) -> BlankSpacer:
        return BlankSpacer(height=self.spacer_height)


def build_blocks(
    body: Optional[str],
    base_style: Optional[TextStyle] = None,
    arabic_style: Optional[TextStyle] = None,
) -> List[Block]:
    """Convenience wrapper: build body blocks with default styles."""
    base_style = base_style or TextStyle()
    builder = BlockLayoutBuilder(base_style, arabic_style or base_style)
    return builder.build_body(body)
