"""Common enumerations used across the layout engine."""

from __future__ import annotations

from enum import Enum


class Alignment(str, Enum):
    """Horizontal text alignment of a block."""

    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"
    JUSTIFY = "justify"

    @classmethod
    def parse(cls, value: object) -> "Alignment | None":
        """Return the alignment named by ``value`` or None if it is not one."""
        token = str(value or "").strip().lower()
        for member in cls:
            if member.value == token:
                return member
        return None


class Direction(str, Enum):
    """Writing direction resolved once per block."""

    LTR = "ltr"
    RTL = "rtl"

    @property
    def default_alignment(self) -> Alignment:
        return Alignment.RIGHT if self is Direction.RTL else Alignment.LEFT


class ScriptClass(str, Enum):
    """Script of a text run, used to pick the font family."""

    LATIN = "latin"
    ARABIC = "arabic"
