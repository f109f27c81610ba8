from __future__ import annotations

import logging
import threading
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from reportlab.pdfbase import pdfmetrics  # type: ignore
from reportlab.pdfbase.ttfonts import TTFont  # type: ignore

from ...exceptions import FontError

logger = logging.getLogger(__name__)

SEARCH_DIRECTORIES: List[Path] = [
    Path("/usr/share/fonts"),
    Path("/usr/share/fonts/truetype"),
    Path("/usr/local/share/fonts"),
    Path.home() / ".fonts",
    Path.home() / ".local/share/fonts",
    # Windows fonts
    Path("C:/Windows/Fonts"),
    # macOS fonts
    Path("/System/Library/Fonts"),
    Path("/Library/Fonts"),
]

# Tajawal ships no italic faces; DejaVuSans covers Arabic as a fallback
FONT_VARIANTS: Dict[str, Dict[str, Iterable[str]]] = {
    "Tajawal": {
        "": ("Tajawal-Regular.ttf", "Tajawal.ttf"),
        "-Bold": ("Tajawal-Bold.ttf",),
    },
    "DejaVuSans": {
        "": ("DejaVuSans.ttf", "DejaVuSans-Regular.ttf"),
        "-Bold": ("DejaVuSans-Bold.ttf",),
        "-Oblique": ("DejaVuSans-Oblique.ttf", "DejaVuSans-Italic.ttf"),
        "-BoldOblique": ("DejaVuSans-BoldOblique.ttf", "DejaVuSans-BoldItalic.ttf"),
    },
}

FALLBACK_FAMILY = "DejaVuSans"

BUILTIN_FACES: Dict[Tuple[bool, bool], str] = {
    (False, False): "Helvetica",
    (True, False): "Helvetica-Bold",
    (False, True): "Helvetica-Oblique",
    (True, True): "Helvetica-BoldOblique",
}

_REGISTERED: set[str] = set()
_SCANNED_DIRECTORIES: set[Path] = set()
_LOCK = threading.Lock()


@lru_cache()
def _build_font_index(extra_dir: Optional[Path] = None) -> Dict[str, Path]:
    index: Dict[str, Path] = {}
    roots = ([extra_dir] if extra_dir else []) + SEARCH_DIRECTORIES
    for root in roots:
        if not root or not root.exists():
            continue
        try:
            for candidate in root.rglob("*.ttf"):
                index.setdefault(candidate.name.lower(), candidate)
        except OSError as exc:
            logger.debug("Could not scan font directory %s: %s", root, exc)
    return index


def _locate_font_file(candidates: Iterable[str], fonts_dir: Optional[Path]) -> Optional[Path]:
    index = _build_font_index(fonts_dir)
    for name in candidates:
        path = index.get(name.lower())
        if path:
            return path
    return None


def register_default_fonts(fonts_dir: Optional[Path] = None) -> List[str]:
    """

    Registers the Tajawal and DejaVuSans faces found in ``fonts_dir`` or the
    system font directories.

    Safe to call many times and from several threads: each face is
    registered once per process, each directory is scanned once.

    Returns:
        Names of all faces registered so far

    Raises:
        FontError: If an explicit ``fonts_dir`` is not a directory

    """
    key = Path(fonts_dir).resolve() if fonts_dir else None
    if key is not None and not key.is_dir():
        raise FontError("Fonts directory not found", details=str(key))
    with _LOCK:
        if key in _SCANNED_DIRECTORIES:
            return sorted(_REGISTERED)

        for family, variants in FONT_VARIANTS.items():
            for suffix, candidate_names in variants.items():
                font_id = f"{family}{suffix}"
                if font_id in _REGISTERED:
                    continue
                font_path = _locate_font_file(candidate_names, key)
                if not font_path:
                    logger.debug("Font file for %s not found (looked for %s)", font_id, candidate_names)
                    continue
                try:
                    pdfmetrics.registerFont(TTFont(font_id, str(font_path)))
                    _REGISTERED.add(font_id)
                    logger.debug("Registered font %s (%s)", font_id, font_path)
                except Exception as exc:  # reportlab raises plain Exception/TTFError
                    logger.warning("Could not register font %s: %s", font_id, exc)

        _SCANNED_DIRECTORIES.add(key)
        return sorted(_REGISTERED)


def is_registered(font_id: str) -> bool:
    return font_id in _REGISTERED


def resolve_font_name(family: str, bold: bool = False, italic: bool = False) -> str:
    """
    Pick the registered face closest to ``family`` with the requested emphasis.

    Order: requested family, DejaVuSans fallback, built-in Helvetica. A
    missing italic face degrades to the upright face of the same family.
    """
    for candidate in (family, FALLBACK_FAMILY):
        if not candidate:
            continue
        for suffix in _suffixes(candidate, bold, italic):
            font_id = f"{candidate}{suffix}"
            if font_id in _REGISTERED:
                return font_id
    return BUILTIN_FACES[(bold, italic)]


def _suffixes(family: str, bold: bool, italic: bool) -> List[str]:
    slant = "-Oblique" if family == "DejaVuSans" else "-Italic"
    if bold and italic:
        return [f"-Bold{slant[1:]}", "-Bold"]
    if bold:
        return ["-Bold"]
    if italic:
        return [slant, ""]
    return [""]
