"""Renderers turning a ``DocumentPlan`` into an output document."""

from .base_renderer import DocumentRenderer
from .pdf_renderer import PdfMemoRenderer

__all__ = ["DocumentRenderer", "PdfMemoRenderer"]
