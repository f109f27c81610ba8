"""Shared helpers for memoquill."""

from .enums import Alignment, Direction, ScriptClass

__all__ = ["Alignment", "Direction", "ScriptClass"]
