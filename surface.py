"""
Drawing surface for one PDF document.

An fpdf2 document in millimetres with the association fonts registered and a shared
page header. One surface is owned by one render call and discarded after `output()`.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from fpdf import FPDF

from config import FONT, FONT_FALLBACK, FONT_SIZE, LOGO_MAX_HEIGHT, LOGO_MAX_WIDTH

_APP_DIR = Path(__file__).resolve().parent

# Embedded as the document creation date so two renders give the same bytes
CREATION_DATE = datetime(2023, 12, 7, tzinfo=timezone.utc)

_DEJAVU_DIRS = [
    str(_APP_DIR / "fonts"),
    "/usr/share/fonts/truetype/dejavu",
    "/usr/share/fonts/TTF",
    "/usr/share/fonts/dejavu",
    "/Library/Fonts",
    "~/Library/Fonts",
]
_DEJAVU_FILES = {
    "": "DejaVuSans.ttf",
    "B": "DejaVuSans-Bold.ttf",
    "I": "DejaVuSans-Oblique.ttf",
    "BI": "DejaVuSans-BoldOblique.ttf",
}
# Bitstream Vera ships with reportlab; DejaVu is derived from it
_VERA_FILES = {"": "Vera.ttf", "B": "VeraBd.ttf", "I": "VeraIt.ttf", "BI": "VeraBI.ttf"}

_font_files: Optional[Dict[str, str]] = None


def _find_font_file(filename: str) -> Optional[str]:
    for d in _DEJAVU_DIRS:
        p = os.path.join(os.path.expanduser(d), filename)
        if os.path.exists(p):
            return p
    return None


def _vera_dir() -> Path:
    import reportlab

    return Path(reportlab.__file__).resolve().parent / "fonts"


def unicode_font_files() -> Dict[str, str]:
    """
    TrueType files for the card font, one per style ('', 'B', 'I', 'BI').
    DejaVu Sans when installed, else reportlab's bundled Vera; empty when neither
    is found. Missing styles reuse the regular face. Looked up once per process.
    """
    global _font_files
    if _font_files is not None:
        return _font_files

    files: Dict[str, str] = {}
    regular = _find_font_file(_DEJAVU_FILES[""])
    if regular:
        for style, filename in _DEJAVU_FILES.items():
            files[style] = _find_font_file(filename) or regular
    else:
        vera = _vera_dir()
        if (vera / _VERA_FILES[""]).exists():
            for style, filename in _VERA_FILES.items():
                path = vera / filename
                files[style] = str(path if path.exists() else vera / _VERA_FILES[""])

    _font_files = files
    return files


class PdfSurface(FPDF):
    """A4 portrait fpdf2 document (units: mm) with the card font registered."""

    def __init__(self):
        files = unicode_font_files()
        self._has_unicode_font = bool(files)
        super().__init__("P", "mm", "A4")
        self.set_creation_date(CREATION_DATE)
        for style, path in files.items():
            self.add_font(FONT, style, path)
        self.set_font(FONT, "", FONT_SIZE)

    def set_font(self, family=None, style="", size=0):
        # Core fonts stand in when no TrueType file was found
        if family and family.lower() == FONT.lower() and not self._has_unicode_font:
            family = FONT_FALLBACK
        super().set_font(family, style, size)

    def output(self) -> bytes:
        """Finish the document and return the PDF bytes."""
        if not self.page:
            self.add_page()
        return bytes(super().output())

    def page_header(self, title: Optional[str] = None, heading: str = "", logo_path: Optional[str] = None) -> None:
        """
        Header shared by the association documents: optional logo at the top-left,
        association name, then the document title, both centered.
        """
        family, style, size = self.font_family, self.font_style, self.font_size_pt
        top = self.y
        logo_bottom = top
        if logo_path:
            w, h = _fit_box(image_size(logo_path), LOGO_MAX_WIDTH, LOGO_MAX_HEIGHT)
            self.image(logo_path, self.l_margin, top, w, h)
            logo_bottom = top + h
        if heading:
            self.set_font(family, "B", FONT_SIZE + 4)
            self.cell(0, 6, heading, align="C", new_x="LMARGIN", new_y="NEXT")
        if title:
            self.set_font(family, "B", FONT_SIZE + 2)
            self.cell(0, 6, title, align="C", new_x="LMARGIN", new_y="NEXT")
        if self.y < logo_bottom:
            self.set_y(logo_bottom)
        self.set_font(family, style, size)


def image_size(path: Union[str, Path]) -> Tuple[int, int]:
    from PIL import Image

    with Image.open(path) as img:
        return img.size


def _fit_box(size: Tuple[int, int], max_w: float, max_h: float) -> Tuple[float, float]:
    px_w, px_h = size
    ratio = px_w / px_h
    w, h = max_h * ratio, max_h
    if w > max_w:
        w, h = max_w, max_w / ratio
    return w, h
