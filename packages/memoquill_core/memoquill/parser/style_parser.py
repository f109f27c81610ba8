"""Small parser for inline ``style`` attributes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from ..utils.enums import Alignment, Direction


def _parse_direction(value: Optional[str]) -> Optional[Direction]:
    value = (value or "").strip().lower()
    if value == "rtl":
        return Direction.RTL
    if value == "ltr":
        return Direction.LTR
    return None


# Properties with a closed value set; invalid values are ignored, as in CSS
_VALIDATORS: Dict[str, Callable[[str], object]] = {
    "text-align": Alignment.parse,
    "direction": _parse_direction,
}


@dataclass(frozen=True)
class StyleDeclarations:
    """Typed view over the declarations of one ``style`` attribute."""

    declarations: Dict[str, str] = field(default_factory=dict)

    @property
    def text_align(self) -> Optional[Alignment]:
        return Alignment.parse(self.declarations.get("text-align"))

    @property
    def direction(self) -> Optional[Direction]:
        return _parse_direction(self.declarations.get("direction"))


def parse_style(style: Optional[str]) -> StyleDeclarations:
    """
    Split ``"a: b; c: d"`` into declarations.

    Property names are lower-cased, values are trimmed. A property declared
    twice keeps its last valid value: an unrecognized ``text-align`` or
    ``direction`` value does not replace an earlier one. Malformed parts
    without ``:`` are skipped.
    """
    declarations: Dict[str, str] = {}
    for part in (style or "").split(";"):
        name, sep, value = part.partition(":")
        if not sep:
            continue
        name = name.strip().lower()
        value = value.strip()
        validator = _VALIDATORS.get(name)
        if validator is not None and validator(value) is None:
            continue
        if name:
            declarations[name] = value
    return StyleDeclarations(declarations)
