"""

Standardized data structures describing the layout plan of a memo body.

Every block handed to the renderer is one of the types below, fully
resolved: paragraphs and list items always carry a direction and an
alignment, tables are rectangular. The renderer does not need to look at
the source markup again.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from ..utils.enums import Alignment, Direction, ScriptClass

###############################################################################
# Text styles
###############################################################################


@dataclass(frozen=True, slots=True)
class TextStyle:
    """Font settings for one script class."""

    font_family: str = "Tajawal"
    font_size: float = 11.0
    color: str = "#000000"
    line_height: float = 1.35


@dataclass(frozen=True, slots=True)
class Emphasis:
    """Emphasis accumulated while walking down inline markup."""

    bold: bool = False
    italic: bool = False

    def with_tag(self, tag: str) -> "Emphasis":
        if tag in ("b", "strong") and not self.bold:
            return Emphasis(True, self.italic)
        if tag in ("i", "em") and not self.italic:
            return Emphasis(self.bold, True)
        return self


###############################################################################
# Inline items
###############################################################################


@dataclass(frozen=True, slots=True)
class StyledRun:
    """Contiguous text sharing one visual style."""

    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    script: ScriptClass = ScriptClass.LATIN
    font_family: str = "Tajawal"
    font_size: float = 11.0
    color: str = "#000000"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "run",
            "text": self.text,
            "bold": self.bold,
            "italic": self.italic,
            "underline": self.underline,
            "script": self.script.value,
            "font_family": self.font_family,
        }


@dataclass(frozen=True, slots=True)
class LineBreak:
    """Explicit line break inside a paragraph, cell or list item."""

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "line_break"}


Inline = Union[StyledRun, LineBreak]


def runs_to_dicts(runs: Tuple[Inline, ...]) -> list:
    return [run.to_dict() for run in runs]


###############################################################################
# Blocks
###############################################################################


@dataclass(frozen=True, slots=True)
class BlankSpacer:
    """Fixed vertical gap (empty editor line)."""

    height: float = 12.0

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "spacer", "height": self.height}


@dataclass(frozen=True, slots=True)
class ParagraphBlock:
    """Paragraph with resolved alignment and direction."""

    alignment: Alignment
    direction: Direction
    runs: Tuple[Inline, ...] = ()
    line_height: float = 1.35

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "paragraph",
            "alignment": self.alignment.value,
            "direction": self.direction.value,
            "runs": runs_to_dicts(self.runs),
        }


@dataclass(frozen=True, slots=True)
class ListItem:
    """Single list row: marker column plus content column."""

    marker: str
    alignment: Alignment
    direction: Direction
    runs: Tuple[Inline, ...] = ()
    index: Optional[int] = None  # 1-based, ordered lists only

    @property
    def marker_alignment(self) -> Alignment:
        if self.alignment in (Alignment.CENTER, Alignment.RIGHT):
            return self.alignment
        return Alignment.LEFT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "marker": self.marker,
            "alignment": self.alignment.value,
            "direction": self.direction.value,
            "runs": runs_to_dicts(self.runs),
        }


@dataclass(frozen=True, slots=True)
class ListBlock:
    """Ordered or unordered list."""

    ordered: bool
    items: Tuple[ListItem, ...] = ()
    marker_width: float = 18.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "list",
            "ordered": self.ordered,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True, slots=True)
class TableCell:
    """Table cell; padding cells have no runs."""

    runs: Tuple[Inline, ...] = ()
    is_header: bool = False
    alignment: Alignment = Alignment.LEFT
    direction: Direction = Direction.LTR
    colspan: int = 1
    rowspan: int = 1

    @property
    def is_empty(self) -> bool:
        return not self.runs

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "is_header": self.is_header,
            "alignment": self.alignment.value,
            "direction": self.direction.value,
            "runs": runs_to_dicts(self.runs),
        }
        if self.colspan > 1:
            data["colspan"] = self.colspan
        if self.rowspan > 1:
            data["rowspan"] = self.rowspan
        return data


@dataclass(frozen=True, slots=True)
class TableRow:
    """Ordered cells of one table row."""

    cells: Tuple[TableCell, ...] = ()
    is_header: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"is_header": self.is_header, "cells": [cell.to_dict() for cell in self.cells]}


@dataclass(frozen=True, slots=True)
class TableBlock:
    """Rectangular table: every row holds exactly ``columns`` cells."""

    columns: int
    header_rows: Tuple[TableRow, ...] = ()
    body_rows: Tuple[TableRow, ...] = ()
    # Position of each row in document order, header and body rows interleaved
    row_order: Tuple[Tuple[str, int], ...] = field(default=())

    @property
    def rows(self) -> Tuple[TableRow, ...]:
        """All rows in document order."""
        if not self.row_order:
            return self.header_rows + self.body_rows
        groups = {"header": self.header_rows, "body": self.body_rows}
        return tuple(groups[group][position] for group, position in self.row_order)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "table",
            "columns": self.columns,
            "header_rows": [row.to_dict() for row in self.header_rows],
            "body_rows": [row.to_dict() for row in self.body_rows],
        }


Block = Union[BlankSpacer, ParagraphBlock, ListBlock, TableBlock]
