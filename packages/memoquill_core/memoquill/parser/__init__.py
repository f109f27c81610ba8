"""Parsing layer: node model, HTML tree builder, style parser and sanitizer."""

from .html_parser import parse_html
from .nodes import Comment, Element, Node, Text, serialize, serialize_children
from .sanitizer import sanitize
from .style_parser import StyleDeclarations, parse_style

__all__ = [
    "Comment",
    "Element",
    "Node",
    "StyleDeclarations",
    "Text",
    "parse_html",
    "parse_style",
    "sanitize",
    "serialize",
    "serialize_children",
]
