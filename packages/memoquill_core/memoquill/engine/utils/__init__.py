"""Engine utilities."""

from .font_registry import register_default_fonts, resolve_font_name

__all__ = ["register_default_fonts", "resolve_font_name"]
