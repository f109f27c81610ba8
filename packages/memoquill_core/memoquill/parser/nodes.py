"""
Node model for the rich-text body.

A tree is built from three node kinds:

- ``Text``: character data (entities already decoded)
- ``Element``: tag name, attribute mapping and ordered children
- ``Comment``: kept only until sanitization drops it

Trees are plain dataclasses so two trees can be compared with ``==``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from typing import Dict, Iterator, List, Union

# Elements that never carry children in HTML
VOID_TAGS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})


@dataclass
class Text:
    """Character data."""

    value: str


@dataclass
class Comment:
    """HTML comment."""

    value: str


@dataclass
class Element:
    """Element with lower-cased tag name."""

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)

    def get(self, name: str, default: str = "") -> str:
        """Return attribute ``name`` or ``default``."""
        return self.attributes.get(name, default)

    def element_children(self) -> List["Element"]:
        return [child for child in self.children if isinstance(child, Element)]

    def text_content(self) -> str:
        """Concatenate all descendant text in document order."""
        return "".join(_iter_text(self))

    def iter_elements(self) -> Iterator["Element"]:
        """Yield descendant elements depth-first, pre-order (self excluded)."""
        for child in self.children:
            if isinstance(child, Element):
                yield child
                yield from child.iter_elements()


Node = Union[Text, Element, Comment]


def _iter_text(node: Node) -> Iterator[str]:
    if isinstance(node, Text):
        yield node.value
    elif isinstance(node, Element):
        for child in node.children:
            yield from _iter_text(child)


def serialize(node: Node) -> str:
    """
    Serialize a node tree back to HTML text.

    The root element's own tag is written as well; use ``serialize_children``
    to get the inner markup of a container.
    """
    if isinstance(node, Text):
        return escape(node.value, quote=False)
    if isinstance(node, Comment):
        return f"<!--{node.value}-->"

    attrs = "".join(
        f' {name}="{escape(value, quote=True)}"' for name, value in node.attributes.items()
    )
    if node.tag in VOID_TAGS:
        return f"<{node.tag}{attrs}>"
    return f"<{node.tag}{attrs}>{serialize_children(node)}</{node.tag}>"


def serialize_children(node: Element) -> str:
    """Serialize the children of ``node`` without the enclosing tag."""
    return "".join(serialize(child) for child in node.children)
