"""Document assembly: page chrome plus body blocks into a ``DocumentPlan``."""

from .document_assembler import (
    DocumentAssembler,
    DocumentPlan,
    FieldBlock,
    FooterLine,
    HeaderCluster,
    MemoInput,
    PageSetup,
    Palette,
    assemble_document,
    auto_memo_number,
    ordinal_date,
)

__all__ = [
    "DocumentAssembler",
    "DocumentPlan",
    "FieldBlock",
    "FooterLine",
    "HeaderCluster",
    "MemoInput",
    "PageSetup",
    "Palette",
    "assemble_document",
    "auto_memo_number",
    "ordinal_date",
]
