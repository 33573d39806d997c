import re
from io import BytesIO

import pytest
from reportlab.lib.pagesizes import LETTER
from reportlab.pdfgen.canvas import Canvas

from config import Config
from paperwork import create_app
from paperwork.pdf_fillers.field_definitions import FieldType, as_definition, normalize_field_map

# IRS templates name checkboxes c<page>_<n>[i] and text inputs f<page>_<n>[i]
CHECKBOX_NAME = re.compile(r'(^|\.)c\d+_\d+\[\d+\]$')


def _slots(pagesize):
    width, height = pagesize
    row = 0
    while True:
        for column in range(3):
            yield 20 + column * 195, height - 40 - row * 20
        row += 1


def make_pdf_form(text_fields=None, check_boxes=(), pages=1, pagesize=LETTER):
    """A blank PDF with an AcroForm.

    :param text_fields: ``{name: max_length}`` (``None`` for no max length)
    :param check_boxes: checkbox names
    """
    buffer = BytesIO()
    canvas = Canvas(buffer, pagesize=pagesize)
    form = canvas.acroForm
    slots = _slots(pagesize)
    for name, max_length in (text_fields or {}).items():
        x, y = next(slots)
        form.textfield(name=name, x=x, y=y, width=180, height=16, maxlen=max_length, borderWidth=0)
    for name in check_boxes:
        x, y = next(slots)
        form.checkbox(name=name, x=x, y=y, size=12)
    canvas.showPage()
    for _ in range(pages - 1):
        canvas.drawString(20, 20, 'blank page')
        canvas.showPage()
    canvas.save()
    return buffer.getvalue()


def _collect(definition, text_fields, check_boxes):
    definition = as_definition(definition)
    if definition.kind in (FieldType.SIMPLE, FieldType.ADVANCED):
        if CHECKBOX_NAME.search(definition.form_path):
            check_boxes.append(definition.form_path)
        else:
            text_fields.setdefault(definition.form_path, None)
    elif definition.kind is FieldType.COMBO:
        check_boxes.extend(definition.values.values())
    elif definition.kind is FieldType.SPLIT_TEXT:
        for part in definition.fields:
            text_fields[part.form_path] = part.max_length if isinstance(part.max_length, int) else 9
    elif definition.kind is FieldType.NESTED:
        for nested in definition.fields.values():
            _collect(nested, text_fields, check_boxes)
    elif definition.kind is FieldType.MULTI:
        for sub_definition in definition.fields:
            _collect(sub_definition, text_fields, check_boxes)


def make_template_for(tax_form, max_lengths=None):
    """A fake template holding every field a tax form definition refers to."""
    text_fields, check_boxes = {}, []
    for definitions in normalize_field_map(tax_form.fields).values():
        for definition in definitions:
            _collect(definition, text_fields, check_boxes)
    text_fields.update(max_lengths or {})
    pages = tax_form.signature.page + 1 if tax_form.signature else 1
    return make_pdf_form(text_fields, list(dict.fromkeys(check_boxes)), pages=pages)


@pytest.fixture
def app(tmp_path):
    class TestConfig(Config):
        TESTING = True
        TAX_FORMS_DIR = str(tmp_path)
        SIGNATURE_FONT_PATH = str(tmp_path / 'missing-font.ttf')
        API_URL = 'https://api.example.test/graphql/v2'
        WEBSITE_URL = 'https://example.test'

    return create_app(TestConfig)


@pytest.fixture
def client(app):
    return app.test_client()
