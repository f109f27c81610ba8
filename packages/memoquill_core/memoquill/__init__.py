"""
memoquill - bilingual (Latin/Arabic) memo PDF generation.

A constrained HTML memo body is sanitized, resolved per block for script,
direction and alignment, and planned into paragraphs, lists and tables.
The plan is combined with the memo chrome (banner, memo number, date,
To/Through/From/Subject fields, classification footer) and rendered to PDF
with ReportLab.

Quick Start:
    from memoquill import generate_memo

    result = generate_memo({
        "to": "Finance",
        "from": "Operations",
        "subject": "Quarterly review",
        "body": "<p dir=\"rtl\">مرحبا</p><p>Hello <strong>World</strong></p>",
        "classification": "Internal",
    })
    open(result.file_name, "wb").write(result.content)
"""

from .version import __version__, __version_info__

from .exceptions import (
    AssetError,
    ConfigurationError,
    FontError,
    MemoQuillError,
    ParsingError,
    RenderingError,
)

from .config import MemoLayoutConfig
from .engine.assembler import DocumentAssembler, DocumentPlan, MemoInput, assemble_document
from .engine.block_builder import BlockLayoutBuilder, build_blocks
from .parser.sanitizer import sanitize
from .renderers import DocumentRenderer, PdfMemoRenderer
from .api import GeneratedMemo, build_plan, generate_memo, load_asset, suggested_file_name

__all__ = [
    # Version
    "__version__",
    "__version_info__",

    # High-level API
    "GeneratedMemo",
    "build_plan",
    "generate_memo",
    "load_asset",
    "suggested_file_name",

    # Core
    "BlockLayoutBuilder",
    "DocumentAssembler",
    "DocumentPlan",
    "MemoInput",
    "MemoLayoutConfig",
    "assemble_document",
    "build_blocks",
    "sanitize",

    # Renderers
    "DocumentRenderer",
    "PdfMemoRenderer",

    # Exceptions
    "MemoQuillError",
    "ConfigurationError",
    "ParsingError",
    "RenderingError",
    "FontError",
    "AssetError",
]
