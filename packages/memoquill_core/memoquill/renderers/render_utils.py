"""Utility helpers shared across renderer components."""

from __future__ import annotations

from typing import Iterable, List, Tuple
from xml.sax.saxutils import escape

from bidi.algorithm import get_display
from reportlab.lib.colors import Color, HexColor
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4, LETTER

from ..engine.layout_primitives import Inline, LineBreak, StyledRun
from ..engine.script import classify_script
from ..engine.utils.font_registry import resolve_font_name
from ..utils.enums import Alignment, Direction, ScriptClass

PAGE_SIZES = {
    "A4": A4,
    "LETTER": LETTER,
}

ALIGNMENTS = {
    Alignment.LEFT: TA_LEFT,
    Alignment.RIGHT: TA_RIGHT,
    Alignment.CENTER: TA_CENTER,
    Alignment.JUSTIFY: TA_JUSTIFY,
}


def ensure_page_size(page_size: str) -> Tuple[float, float]:
    preset = PAGE_SIZES.get((page_size or "").upper())
    if preset is None:
        raise ValueError(f"Unsupported page size preset: {page_size}")
    return float(preset[0]), float(preset[1])


def to_color(value: object, fallback: str = "#000000") -> Color:
    token = str(value or "").strip()
    if token and not token.startswith("#") and len(token) in {3, 6} and all(
        ch in "0123456789abcdefABCDEF" for ch in token
    ):
        token = f"#{token}"
    try:
        return HexColor(token or fallback)
    except (ValueError, TypeError):
        return HexColor(fallback)


def visual_text(text: str, script: ScriptClass) -> str:
    """Return ``text`` in display order; Arabic runs are reordered right-to-left."""
    if script is ScriptClass.ARABIC:
        return get_display(text, base_dir="R")
    return text


def run_markup(run: StyledRun, color_override: str = "") -> str:
    """ReportLab paragraph markup for one run."""
    face = resolve_font_name(run.font_family, run.bold, run.italic)
    text = escape(visual_text(run.text, run.script))
    if run.underline:
        text = f"<u>{text}</u>"
    color = color_override or run.color
    return f'<font face="{face}" size="{run.font_size:g}" color="{color}">{text}</font>'


def runs_markup(runs: Iterable[Inline], direction: Direction = Direction.LTR) -> str:
    """
    Join runs into paragraph markup.

    RTL blocks emit each line's runs in reverse order so the first logical
    run ends up on the right.
    """
    lines: List[List[str]] = [[]]
    for run in runs:
        if isinstance(run, LineBreak):
            lines.append([])
        elif isinstance(run, StyledRun):
            lines[-1].append(run_markup(run))

    if direction is Direction.RTL:
        lines = [list(reversed(line)) for line in lines]
    return "<br/>".join("".join(line) for line in lines)


def label_markup(text: str, family: str, size: float, color: str, bold: bool = True) -> str:
    """Markup for a chrome label (memo number, field labels, footer)."""
    face = resolve_font_name(family, bold=bold)
    script = classify_script(text)
    return f'<font face="{face}" size="{size:g}" color="{color}">{escape(visual_text(text, script))}</font>'
