from io import BytesIO

import pytest
from pypdf import PdfReader

from conftest import make_pdf_form
from paperwork.pdf_fillers.document import TaxFormDocument
from paperwork.pdf_fillers.signature import (
    FALLBACK_FONT_NAME,
    MAX_FONT_SIZE,
    MIN_FONT_SIZE,
    SignatureFont,
    add_signature,
    get_signature_size,
    render_signature_overlay,
)


@pytest.mark.parametrize('text, size', [
    ('', MAX_FONT_SIZE),
    ('x' * 60, MIN_FONT_SIZE),
    ('x' * 90, MIN_FONT_SIZE),
    ('x' * 30, 15),
])
def test_signature_size(text, size):
    assert get_signature_size(text) == pytest.approx(size)


def test_signature_size_decreases_with_length():
    sizes = [get_signature_size('x' * length) for length in range(0, 70, 5)]
    assert sizes == sorted(sizes, reverse=True)


def test_missing_font_falls_back_to_builtin(tmp_path, caplog):
    font = SignatureFont.load(str(tmp_path / 'nope.ttf'))

    assert font.name == FALLBACK_FONT_NAME
    assert 'Signature font not found' in caplog.text


def test_render_signature_overlay():
    overlay = PdfReader(BytesIO(render_signature_overlay('Ada Lovelace', SignatureFont.builtin(), 300, 200, 10, 10)))

    assert len(overlay.pages) == 1
    assert float(overlay.pages[0].mediabox.width) == 300
    assert 'Ada Lovelace' in overlay.pages[0].extract_text()


def test_add_signature_on_requested_page():
    document = TaxFormDocument.load(make_pdf_form({'name': None}, pages=2))
    add_signature(document, SignatureFont.builtin(), 'Ada Lovelace', x=100, y=100, page=1)

    reader = PdfReader(BytesIO(document.save()))
    assert 'Ada Lovelace' not in reader.pages[0].extract_text()
    assert 'Ada Lovelace' in reader.pages[1].extract_text()
    # the form survives the merge
    assert 'name' in TaxFormDocument.load(document.save()).form
