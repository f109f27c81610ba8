"""Layout configuration for memo generation."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from .exceptions import ConfigurationError
from .engine.layout_primitives import TextStyle

logger = logging.getLogger(__name__)

# Through is drawn this much narrower than the other fields
THROUGH_INSET = 40.0

_LENGTH_TYPES = ("float", float, "Optional[float]")


@dataclass(frozen=True)
class MemoLayoutConfig:
    """
    Page geometry, colors and fonts of a memo.

    All lengths are in PDF points.

    Attributes:
        page_size: Page size preset understood by the renderer ("A4", "LETTER").
        page_margin: Margin applied on all four sides.
        footer_reserve: Space kept free above the bottom margin for footer art.
        field_width: Width of the To/From/Subject field blocks and of the body.
        through_width: Width of the Through field block; None derives it as
            ``field_width`` less ``THROUGH_INSET``.
        blank_spacer_height: Height of a blank editor line.
    """

    page_size: str = "A4"
    page_margin: float = 36.0
    footer_reserve: float = 84.0
    banner_padding_top: float = 3.0

    field_width: float = 420.0
    through_width: Optional[float] = None
    memo_width: float = 220.0
    date_width: float = 260.0
    line_thickness: float = 0.8

    top_cluster_spacing: float = 2.0
    field_line_height: float = 1.28
    gap_after_subject: float = 20.0
    blank_spacer_height: float = 12.0
    body_line_height: float = 1.35

    font_size: float = 11.0
    memo_font_size: float = 10.0
    latin_font: str = "Tajawal"
    arabic_font: str = "Tajawal"
    fonts_dir: Optional[Path] = None

    label_color_en: str = "#1CA76A"
    label_color_ar: str = "#137B3C"
    underline_color: str = "#137B3C"
    body_color: str = "#000000"

    list_marker_width: float = 18.0
    bullet: str = "•"
    classification_placeholder: str = "—"

    def __post_init__(self):
        for item in dataclasses.fields(self):
            if item.type in _LENGTH_TYPES:
                value = getattr(self, item.name)
                if value is None and item.type == "Optional[float]":
                    continue
                if not isinstance(value, (int, float)) or isinstance(value, bool) or value < 0:
                    raise ConfigurationError(
                        f"Invalid value for {item.name}", details=repr(value)
                    )

    @property
    def through_field_width(self) -> float:
        """Width of the Through block, narrower than the other fields unless set."""
        if self.through_width is not None:
            return self.through_width
        return max(self.field_width - THROUGH_INSET, 0.0)

    @property
    def base_style(self) -> TextStyle:
        return TextStyle(
            font_family=self.latin_font,
            font_size=self.font_size,
            color=self.body_color,
            line_height=self.body_line_height,
        )

    @property
    def arabic_style(self) -> TextStyle:
        return TextStyle(
            font_family=self.arabic_font,
            font_size=self.font_size,
            color=self.body_color,
            line_height=self.body_line_height,
        )

    def with_overrides(self, **overrides: Any) -> "MemoLayoutConfig":
        """Return a copy with the given fields replaced; None values are ignored."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        unknown = set(changes) - {item.name for item in dataclasses.fields(self)}
        if unknown:
            raise ConfigurationError("Unknown configuration keys", details=", ".join(sorted(unknown)))
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "MemoLayoutConfig":
        """
        Build a config from a JSON-style mapping.

        Unknown keys are logged and ignored; numeric strings are accepted for
        length fields.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError("Configuration must be a mapping", details=type(data).__name__)

        known = {item.name: item for item in dataclasses.fields(cls)}
        values = {}
        for key, value in data.items():
            item = known.get(key)
            if item is None:
                logger.debug("Ignoring unknown configuration key %s", key)
                continue
            if item.type in _LENGTH_TYPES and isinstance(value, str):
                try:
                    value = float(value)
                except ValueError as exc:
                    raise ConfigurationError(f"Invalid value for {key}", details=value) from exc
            if key == "fonts_dir" and value is not None:
                value = Path(value)
            values[key] = value
        return cls(**values)
