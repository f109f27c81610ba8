"""
Layout engine: script/direction resolution, inline runs and block planning.

The document assembler lives in ``memoquill.engine.assembler`` and is not
imported here to keep ``memoquill.config`` importable from the primitives.
"""

from .block_builder import BlockLayoutBuilder, build_blocks, is_plain_text
from .direction import is_blank_block, resolve_alignment, resolve_direction, resolve_flow
from .inline_composer import compose_runs
from .layout_primitives import (
    BlankSpacer,
    Block,
    Emphasis,
    Inline,
    LineBreak,
    ListBlock,
    ListItem,
    ParagraphBlock,
    StyledRun,
    TableBlock,
    TableCell,
    TableRow,
    TextStyle,
)
from .list_planner import plan_list
from .script import classify_script, contains_rtl_script
from .table_planner import plan_table

__all__ = [
    "BlankSpacer",
    "Block",
    "BlockLayoutBuilder",
    "Emphasis",
    "Inline",
    "LineBreak",
    "ListBlock",
    "ListItem",
    "ParagraphBlock",
    "StyledRun",
    "TableBlock",
    "TableCell",
    "TableRow",
    "TextStyle",
    "build_blocks",
    "classify_script",
    "compose_runs",
    "contains_rtl_script",
    "is_blank_block",
    "is_plain_text",
    "plan_list",
    "plan_table",
    "resolve_alignment",
    "resolve_direction",
    "resolve_flow",
]
