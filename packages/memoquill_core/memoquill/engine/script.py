"""Script classification for Latin/Arabic text."""

from __future__ import annotations

from typing import Optional

from ..utils.enums import ScriptClass

# Arabic, Arabic Supplement, Arabic Extended-A
RTL_RANGES = (
    (0x0600, 0x06FF),
    (0x0750, 0x077F),
    (0x08A0, 0x08FF),
)


def contains_rtl_script(text: Optional[str]) -> bool:
    """Return True if any character of ``text`` is in an Arabic block."""
    if not text:
        return False
    for ch in text:
        code = ord(ch)
        for low, high in RTL_RANGES:
            if low <= code <= high:
                return True
    return False


def classify_script(text: Optional[str]) -> ScriptClass:
    return ScriptClass.ARABIC if contains_rtl_script(text) else ScriptClass.LATIN
