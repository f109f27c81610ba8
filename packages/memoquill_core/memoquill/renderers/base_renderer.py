"""Renderer boundary: anything that turns a ``DocumentPlan`` into bytes."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..engine.assembler.document_assembler import DocumentPlan


@runtime_checkable
class DocumentRenderer(Protocol):
    """Paginated-document renderer consuming a finished plan."""

    media_type: str
    file_extension: str

    def render(self, plan: DocumentPlan) -> bytes:
        """Render ``plan`` and return the output document bytes."""
        ...
