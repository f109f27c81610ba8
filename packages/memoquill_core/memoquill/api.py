"""

Simple high-level API for memoquill.

Usage example:
>>> from memoquill import generate_memo
>>>
>>> result = generate_memo({
...     "to": "Finance Department",
...     "from": "Operations",
...     "subject": "Quarterly review",
...     "body": "<p>Hello <strong>World</strong></p>",
... })
>>> result.file_name
'Memo_20261018_0930.pdf'
>>> Path(result.file_name).write_bytes(result.content)

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .config import MemoLayoutConfig
from .engine.assembler.document_assembler import DocumentAssembler, DocumentPlan, MemoInput
from .exceptions import AssetError
from .renderers.base_renderer import DocumentRenderer
from .renderers.pdf_renderer import PdfMemoRenderer

logger = logging.getLogger(__name__)

__all__ = [
    "GeneratedMemo",
    "build_plan",
    "generate_memo",
    "load_asset",
    "suggested_file_name",
]


@dataclass(frozen=True)
class GeneratedMemo:
    """Rendered memo plus the name it should be saved under."""

    content: bytes = field(repr=False)
    file_name: str
    plan: DocumentPlan = field(repr=False)
    media_type: str = "application/pdf"

    @property
    def size(self) -> int:
        return len(self.content)


def suggested_file_name(now: datetime, extension: str = ".pdf") -> str:
    """``Memo_YYYYMMDD_HHMM.pdf`` for the generation timestamp."""
    return f"Memo_{now:%Y%m%d_%H%M}{extension}"


def load_asset(path: Union[str, Path]) -> bytes:
    """
    Read an image asset into memory before generation.

    Raises:
        AssetError: If the file cannot be read
    """
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise AssetError("Could not read image asset", details=f"{path}: {exc.strerror or exc}") from exc


def _coerce_input(memo: Union[MemoInput, Mapping[str, Any]]) -> MemoInput:
    if isinstance(memo, MemoInput):
        return memo
    return MemoInput.from_mapping(memo)


def build_plan(
    memo: Union[MemoInput, Mapping[str, Any]],
    config: Optional[MemoLayoutConfig] = None,
    now: Optional[datetime] = None,
) -> DocumentPlan:
    """Assemble the document plan without rendering it."""
    return DocumentAssembler(config).assemble(_coerce_input(memo), now=now)


def generate_memo(
    memo: Union[MemoInput, Mapping[str, Any]],
    config: Optional[MemoLayoutConfig] = None,
    renderer: Optional[DocumentRenderer] = None,
    now: Optional[datetime] = None,
) -> GeneratedMemo:
    """
    Assemble and render one memo.

    Args:
        memo: ``MemoInput`` or a form-style mapping (see ``MemoInput.from_mapping``)
        config: Layout configuration (defaults to ``MemoLayoutConfig()``)
        renderer: Renderer to use (defaults to ``PdfMemoRenderer``)
        now: Generation timestamp (defaults to the current UTC time)

    Returns:
        GeneratedMemo with the document bytes and the suggested file name

    Raises:
        ConfigurationError: For structurally invalid input
        MemoQuillError: Renderer failures, propagated unchanged
    """
    config = config or MemoLayoutConfig()
    now = now or datetime.now(timezone.utc)
    memo = _coerce_input(memo)

    plan = DocumentAssembler(config).assemble(memo, now=now)
    if renderer is None:
        renderer = PdfMemoRenderer(fonts_dir=config.fonts_dir)

    content = renderer.render(plan)
    extension = getattr(renderer, "file_extension", ".pdf")
    result = GeneratedMemo(
        content=content,
        file_name=suggested_file_name(now, extension),
        plan=plan,
        media_type=getattr(renderer, "media_type", "application/pdf"),
    )
    logger.info(
        "Generated memo %s: %d body blocks, %d bytes",
        plan.memo_number, len(plan.body), result.size,
    )
    return result
