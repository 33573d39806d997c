"""Hand-written looking signatures drawn on top of a PDF page."""
from __future__ import annotations

import os
from dataclasses import dataclass
from io import BytesIO
from logging import getLogger

from pypdf import PdfReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen.canvas import Canvas

from paperwork.utils import scale_value

logger = getLogger(__name__)

SIGNATURE_FONT_NAME = "Signature"
FALLBACK_FONT_NAME = "Helvetica-Oblique"

# Not the real max length of a name, but the length that maps to the minimum font size
MAX_TEXT_LENGTH = 60
MIN_FONT_SIZE = 4
MAX_FONT_SIZE = 26


@dataclass(frozen=True)
class SignatureFont:
    """A font registered with reportlab, loaded once per process."""
    name: str
    path: str = ""

    @classmethod
    def load(cls, path: str) -> "SignatureFont":
        if not path or not os.path.exists(path):
            logger.warning("Signature font not found at %s, falling back to %s", path, FALLBACK_FONT_NAME)
            return cls.builtin()
        if SIGNATURE_FONT_NAME not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(TTFont(SIGNATURE_FONT_NAME, path))
        return cls(SIGNATURE_FONT_NAME, path)

    @classmethod
    def builtin(cls) -> "SignatureFont":
        return cls(FALLBACK_FONT_NAME)


def get_signature_size(text: str) -> float:
    """The longer the text, the smaller the font."""
    return scale_value(
        MAX_TEXT_LENGTH - len(text),
        (0, MAX_TEXT_LENGTH),
        (MIN_FONT_SIZE, MAX_FONT_SIZE),
        clamp=True,
    )


def render_signature_overlay(text: str, font: SignatureFont, width: float, height: float,
                             x: float, y: float) -> bytes:
    """A single transparent page of *width* x *height* with *text* drawn at (*x*, *y*)."""
    buffer = BytesIO()
    canvas = Canvas(buffer, pagesize=(width, height))
    canvas.setFont(font.name, get_signature_size(text))
    canvas.drawString(x, y, text)
    canvas.showPage()
    canvas.save()
    return buffer.getvalue()


def add_signature(document, font: SignatureFont, signer_full_name: str,
                  x: float, y: float, page: int = 0) -> None:
    """Draw *signer_full_name* on *page* of a :class:`~paperwork.pdf_fillers.document.TaxFormDocument`."""
    pdf_page = document.get_page(page)
    width, height = float(pdf_page.mediabox.width), float(pdf_page.mediabox.height)
    overlay = PdfReader(BytesIO(render_signature_overlay(signer_full_name, font, width, height, x, y)))
    pdf_page.merge_page(overlay.pages[0])
