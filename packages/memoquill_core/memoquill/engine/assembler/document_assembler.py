"""

DocumentAssembler - composes the page chrome and the body blocks of a memo
into a single ``DocumentPlan``.

Plan layout, top to bottom:
- banner image (first page only)
- memo number block (left) and date block (centered, underlined)
- To / Through / From / Subject field blocks (bilingual label row over a
  value line; Through has no underline and is narrower)
- fixed gap, then the body blocks
- footer line ``(Classification: ...)`` on every page, footer art behind it

The chrome labels are always English on the leading side and Arabic on the
trailing side, whatever direction the body resolves to.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple

from ...config import MemoLayoutConfig
from ...exceptions import ConfigurationError
from ..block_builder import BlockLayoutBuilder
from ..layout_primitives import Block, TextStyle

logger = logging.getLogger(__name__)

FIELD_LABELS: Tuple[Tuple[str, str, str], ...] = (
    ("to", "To", "إلى"),
    ("through", "Through", "بواسطة"),
    ("from", "From", "من"),
    ("subject", "Subject", "الموضوع"),
)

MEMO_NUMBER_LABEL = "Memo No."
DATE_LABEL_EN = "Date"
DATE_LABEL_AR = "التاريخ"
CLASSIFICATION_LABEL = "Classification"


###############################################################################
# Input
###############################################################################


def _clean_text(value: Optional[str]) -> Optional[str]:
    """Trim ``value``; blank strings become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class MemoInput:
    """Form values of one generation request."""

    to: Optional[str] = None
    from_: Optional[str] = None
    subject: Optional[str] = None
    body: Optional[str] = None
    through: Optional[str] = None
    classification: Optional[str] = None
    memo_number: Optional[str] = None
    date_text: Optional[str] = None
    banner_image: Optional[bytes] = None
    footer_image: Optional[bytes] = None
    use_default_images: bool = True
    page_margin: Optional[float] = None
    underline_color: Optional[str] = None
    latin_font: Optional[str] = None
    arabic_font: Optional[str] = None

    _TEXT_KEYS = (
        "to", "through", "from", "subject", "body", "classification",
        "memo_number", "date_text", "underline_color", "latin_font", "arabic_font",
    )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MemoInput":
        """
        Build an input from a form-style mapping (``"from"`` key included).

        A blank ``through`` is normalized to None so no Through block is
        planned.

        Raises:
            ConfigurationError: For values of the wrong type
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError("Memo input must be a mapping", details=type(data).__name__)

        values: Dict[str, Any] = {}
        for key in cls._TEXT_KEYS:
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ConfigurationError(f"Field '{key}' must be text", details=type(value).__name__)
            values["from_" if key == "from" else key] = value
        values["through"] = _clean_text(values["through"])

        for key in ("banner_image", "footer_image"):
            value = data.get(key)
            if value is not None and not isinstance(value, (bytes, bytearray, memoryview)):
                raise ConfigurationError(f"Field '{key}' must be bytes", details=type(value).__name__)
            values[key] = bytes(value) if value else None

        margin = data.get("page_margin")
        if margin is not None:
            try:
                margin = float(margin)
            except (TypeError, ValueError) as exc:
                raise ConfigurationError("Field 'page_margin' must be numeric", details=repr(margin)) from exc
        values["page_margin"] = margin
        values["use_default_images"] = bool(data.get("use_default_images", True))
        return cls(**values)


###############################################################################
# Plan
###############################################################################


@dataclass(frozen=True)
class PageSetup:
    size: str
    margin: float
    footer_reserve: float
    banner_padding_top: float = 3.0


@dataclass(frozen=True)
class Palette:
    label_en: str
    label_ar: str
    underline: str
    body: str


@dataclass(frozen=True)
class FieldBlock:
    """Bilingual label row over a value line."""

    key: str
    label_en: str
    label_ar: str
    value: str
    underlined: bool
    width: float
    line_height: float = 1.28

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "label_en": self.label_en,
            "label_ar": self.label_ar,
            "value": self.value,
            "underlined": self.underlined,
            "width": self.width,
        }


@dataclass(frozen=True)
class HeaderCluster:
    """Memo number (left, no underline) and date (centered, underlined)."""

    memo_number: str
    date_text: str
    memo_width: float
    date_width: float
    memo_font_size: float
    spacing: float
    memo_label: str = MEMO_NUMBER_LABEL
    date_label_en: str = DATE_LABEL_EN
    date_label_ar: str = DATE_LABEL_AR


@dataclass(frozen=True)
class FooterLine:
    """Footer text, always shown: ``(label: value)``."""

    label: str
    value: str

    @property
    def text(self) -> str:
        return f"({self.label}: {self.value})"


@dataclass(frozen=True)
class DocumentPlan:
    """Fully resolved memo layout handed to a renderer."""

    page: PageSetup
    palette: Palette
    header: HeaderCluster
    fields: Tuple[FieldBlock, ...]
    body: Tuple[Block, ...]
    footer: FooterLine
    base_style: TextStyle
    arabic_style: TextStyle
    body_width: float
    body_gap: float
    line_thickness: float
    classification: str = ""
    banner_image: Optional[bytes] = field(default=None, repr=False)
    footer_image: Optional[bytes] = field(default=None, repr=False)

    @property
    def memo_number(self) -> str:
        return self.header.memo_number

    @property
    def date_text(self) -> str:
        return self.header.date_text

    def get_field(self, key: str) -> Optional[FieldBlock]:
        for item in self.fields:
            if item.key == key:
                return item
        return None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable description; images are reported by size."""
        return {
            "page": {
                "size": self.page.size,
                "margin": self.page.margin,
                "footer_reserve": self.page.footer_reserve,
            },
            "memo_number": self.memo_number,
            "date": self.date_text,
            "classification": self.classification,
            "banner_image": {"bytes": len(self.banner_image)} if self.banner_image else None,
            "footer_image": {"bytes": len(self.footer_image)} if self.footer_image else None,
            "fields": [item.to_dict() for item in self.fields],
            "body": [block.to_dict() for block in self.body],
            "footer": self.footer.text,
        }


###############################################################################
# Assembly
###############################################################################


def auto_memo_number(now: datetime) -> str:
    return f"M-{now:%Y%m%d-%H%M%S}"


def ordinal_date(now: datetime) -> str:
    """Format ``now`` as ``"October 18th 2026"``."""
    day = now.day
    if day % 10 == 1 and day != 11:
        suffix = "st"
    elif day % 10 == 2 and day != 12:
        suffix = "nd"
    elif day % 10 == 3 and day != 13:
        suffix = "rd"
    else:
        suffix = "th"
    return f"{now:%B} {day}{suffix} {now:%Y}"


def effective_config(memo: MemoInput, config: MemoLayoutConfig) -> MemoLayoutConfig:
    """Apply the per-request overrides carried by ``memo``."""
    return config.with_overrides(
        page_margin=memo.page_margin,
        underline_color=_clean_text(memo.underline_color),
        latin_font=_clean_text(memo.latin_font),
        arabic_font=_clean_text(memo.arabic_font),
    )


class DocumentAssembler:
    """Builds ``DocumentPlan`` objects from memo input."""

    def __init__(self, config: Optional[MemoLayoutConfig] = None):
        self.config = config or MemoLayoutConfig()

    def assemble(self, memo: MemoInput, now: Optional[datetime] = None) -> DocumentPlan:
        """
        Assemble the plan for one memo.

        Args:
            memo: Form values and optional image buffers
            now: Generation time used for the memo number/date defaults (UTC)

        Returns:
            Immutable document plan
        """
        now = now or datetime.now(timezone.utc)
        config = effective_config(memo, self.config)
        base_style = config.base_style
        arabic_style = config.arabic_style

        builder = BlockLayoutBuilder(
            base_style,
            arabic_style,
            spacer_height=config.blank_spacer_height,
            bullet=config.bullet,
            marker_width=config.list_marker_width,
        )
        body = tuple(builder.build_body(memo.body))

        classification = (memo.classification or "").strip()
        banner = memo.banner_image if memo.use_default_images and memo.banner_image else None
        footer = memo.footer_image if memo.use_default_images and memo.footer_image else None

        plan = DocumentPlan(
            page=PageSetup(
                size=config.page_size,
                margin=config.page_margin,
                footer_reserve=config.footer_reserve,
                banner_padding_top=config.banner_padding_top,
            ),
            palette=Palette(
                label_en=config.label_color_en,
                label_ar=config.label_color_ar,
                underline=config.underline_color,
                body=config.body_color,
            ),
            header=HeaderCluster(
                memo_number=_clean_text(memo.memo_number) or auto_memo_number(now),
                date_text=_clean_text(memo.date_text) or ordinal_date(now),
                memo_width=config.memo_width,
                date_width=config.date_width,
                memo_font_size=config.memo_font_size,
                spacing=config.top_cluster_spacing,
            ),
            fields=self._fields(memo, config),
            body=body,
            footer=FooterLine(
                label=CLASSIFICATION_LABEL,
                value=classification or config.classification_placeholder,
            ),
            base_style=base_style,
            arabic_style=arabic_style,
            body_width=config.field_width,
            body_gap=config.gap_after_subject,
            line_thickness=config.line_thickness,
            classification=classification,
            banner_image=banner,
            footer_image=footer,
        )
        logger.debug(
            "Assembled plan %s: %d fields, %d body blocks",
            plan.memo_number, len(plan.fields), len(plan.body),
        )
        return plan

    @staticmethod
    def _fields(memo: MemoInput, config: MemoLayoutConfig) -> Tuple[FieldBlock, ...]:
        values = {
            "to": memo.to,
            "through": memo.through,
            "from": memo.from_,
            "subject": memo.subject,
        }
        fields = []
        for key, label_en, label_ar in FIELD_LABELS:
            value = values[key]
            if key == "through":
                value = _clean_text(value)
                if value is None:
                    continue
                fields.append(FieldBlock(
                    key, label_en, label_ar, value,
                    underlined=False,
                    width=config.through_field_width,
                    line_height=config.field_line_height,
                ))
                continue
            fields.append(FieldBlock(
                key, label_en, label_ar, value or "",
                underlined=True,
                width=config.field_width,
                line_height=config.field_line_height,
            ))
        return tuple(fields)


def assemble_document(
    memo: MemoInput,
    config: Optional[MemoLayoutConfig] = None,
    now: Optional[datetime] = None,
) -> DocumentPlan:
    """Assemble a plan with a one-off ``DocumentAssembler``."""
    return DocumentAssembler(config).assemble(memo, now=now)
