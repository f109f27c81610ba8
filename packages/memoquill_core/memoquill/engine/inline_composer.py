"""
Inline run composer - turns inline markup into styled runs.

Supports ``<b>``/``<strong>`` (bold), ``<i>``/``<em>`` (italic), ``<u>``
(underline) and ``<br>`` (line break). Bold and italic accumulate down the
tree; underline marks only the text nodes directly inside the ``<u>``
element. Every run is classified as Latin or Arabic and takes the font of
the matching style.
"""

from __future__ import annotations

import re
from typing import List, Optional

from ..parser.nodes import Element, Node, Text
from ..utils.enums import ScriptClass
from .layout_primitives import Emphasis, Inline, LineBreak, StyledRun, TextStyle
from .script import classify_script

# HTML whitespace collapses to one space; NBSP is content and is kept
_COLLAPSIBLE_WHITESPACE = re.compile(r"[ \t\r\n\f]+")

LINE_BREAK = LineBreak()


def compose_runs(
    node: Node,
    base_style: TextStyle,
    arabic_style: TextStyle,
    emphasis: Optional[Emphasis] = None,
) -> List[Inline]:
    """
    Decompose the inline content of ``node`` into runs and line breaks.

    Args:
        node: Container element (paragraph, list item, cell) or a text node
        base_style: Style for Latin runs
        arabic_style: Style for runs holding Arabic characters
        emphasis: Emphasis already in effect (e.g. bold for header cells)

    Returns:
        New list of ``StyledRun`` / ``LineBreak`` in document order
    """
    runs: List[Inline] = []
    emphasis = emphasis or Emphasis()
    if isinstance(node, Text):
        _emit_text(runs, node.value, emphasis, False, base_style, arabic_style)
    elif isinstance(node, Element):
        _compose_element(runs, node, emphasis, base_style, arabic_style)
    return runs


def _compose_element(
    runs: List[Inline],
    element: Element,
    emphasis: Emphasis,
    base_style: TextStyle,
    arabic_style: TextStyle,
) -> None:
    child_emphasis = emphasis.with_tag(element.tag)
    underline = element.tag == "u"

    for child in element.children:
        if isinstance(child, Text):
            _emit_text(runs, child.value, child_emphasis, underline, base_style, arabic_style)
        elif isinstance(child, Element):
            if child.tag == "br":
                runs.append(LINE_BREAK)
            else:
                _compose_element(runs, child, child_emphasis, base_style, arabic_style)


def _emit_text(
    runs: List[Inline],
    raw: str,
    emphasis: Emphasis,
    underline: bool,
    base_style: TextStyle,
    arabic_style: TextStyle,
) -> None:
    if not raw or not raw.strip():
        return
    text = _COLLAPSIBLE_WHITESPACE.sub(" ", raw)
    script = classify_script(text)
    style = arabic_style if script is ScriptClass.ARABIC else base_style
    runs.append(
        StyledRun(
            text=text,
            bold=emphasis.bold,
            italic=emphasis.italic,
            underline=underline,
            script=script,
            font_family=style.font_family,
            font_size=style.font_size,
            color=style.color,
        )
    )
