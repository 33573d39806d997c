from io import BytesIO

import pytest
from pypdf import PdfReader, PdfWriter
from pypdf.generic import ArrayObject, DictionaryObject, NameObject, TextStringObject
from reportlab.pdfgen.canvas import Canvas

from conftest import make_pdf_form
from paperwork.pdf_fillers.document import TaxFormDocument
from paperwork.pdf_fillers.pdf_form import (
    FieldNotFoundError,
    FieldTypeMismatchError,
    FormFieldKind,
    MaxLengthExceededError,
    PdfForm,
    PdfTextField,
    TextAlignment,
    describe_fields,
    fill_all_fields_with_path,
    truncate_middle,
)


@pytest.fixture
def document():
    template = make_pdf_form({'name': 20, 'code': 3, 'notes': None}, check_boxes=['agree'])
    return TaxFormDocument.load(template)


def reload(document):
    return TaxFormDocument.load(document.save())


def test_fields_are_indexed_by_name(document):
    form = document.form

    assert len(form) == 4
    assert 'name' in form
    assert 'missing' not in form
    assert form.get_field('name').kind is FormFieldKind.TEXT
    assert form.get_field('agree').kind is FormFieldKind.CHECKBOX


def test_text_field_max_length(document):
    assert document.form.get_text_field('code').max_length == 3
    assert document.form.get_text_field('notes').max_length is None


def test_set_text_is_saved(document):
    field = document.form.get_text_field('name')
    field.set_alignment(TextAlignment.RIGHT)
    field.set_text('Ada Lovelace')

    saved = reload(document).form.get_text_field('name')
    assert saved.text == 'Ada Lovelace'
    assert saved.alignment is TextAlignment.RIGHT


def test_set_text_longer_than_max_length_raises(document):
    field = document.form.get_text_field('code')
    with pytest.raises(MaxLengthExceededError) as excinfo:
        field.set_text('abcd')

    assert excinfo.value.max_length == 3
    assert isinstance(excinfo.value, ValueError)


def test_check_and_uncheck(document):
    checkbox = document.form.get_check_box('agree')
    assert not checkbox.is_checked()

    checkbox.check()
    assert checkbox.is_checked()
    assert reload(document).form.get_check_box('agree').is_checked()

    checkbox.uncheck()
    assert not reload(document).form.get_check_box('agree').is_checked()


def test_unknown_field(document):
    with pytest.raises(FieldNotFoundError) as excinfo:
        document.form.get_field('nope')

    assert isinstance(excinfo.value, KeyError)
    assert str(excinfo.value) == "No form field named 'nope'"


def test_field_type_mismatch(document):
    with pytest.raises(FieldTypeMismatchError):
        document.form.get_check_box('name')
    with pytest.raises(FieldTypeMismatchError):
        document.form.get_text_field('agree')


def test_flatten_draws_values_and_removes_the_form(document):
    document.form.get_text_field('name').set_text('Ada Lovelace')
    document.form.get_check_box('agree').check()
    document.flatten_form()

    assert len(document.form) == 0
    reader = PdfReader(BytesIO(document.save()))
    page = reader.pages[0]
    assert '/AcroForm' not in reader.root_object
    assert not page.get('/Annots')
    assert 'Ada Lovelace' in page.extract_text()
    assert '/Fm_agree' in page['/Resources']['/XObject']
    assert len(TaxFormDocument.load(document.save()).form) == 0


def test_flatten_without_form_is_a_no_op():
    document = TaxFormDocument.load(make_pdf_form({}))
    document.flatten_form()
    assert len(reload(document).form) == 0


def test_field_with_child_fields_and_its_own_widgets():
    writer = PdfWriter()
    writer.add_blank_page(200, 200)
    widget = DictionaryObject({
        NameObject('/Subtype'): NameObject('/Widget'),
        NameObject('/AP'): DictionaryObject(),
    })
    child = DictionaryObject({NameObject('/T'): TextStringObject('child')})
    parent = DictionaryObject({
        NameObject('/T'): TextStringObject('parent'),
        NameObject('/FT'): NameObject('/Tx'),
        NameObject('/Kids'): ArrayObject([child, widget]),
    })
    writer.root_object[NameObject('/AcroForm')] = DictionaryObject({
        NameObject('/Fields'): ArrayObject([parent]),
    })

    form = PdfForm(writer)

    assert sorted(field.name for field in form.get_fields()) == ['parent', 'parent.child']
    assert form.get_field('parent.child').kind is FormFieldKind.TEXT
    form.get_text_field('parent').set_text('Ada')
    assert parent['/V'] == 'Ada'
    assert '/AP' not in widget


def test_form_without_acro_form():
    buffer = BytesIO()
    canvas = Canvas(buffer)
    canvas.drawString(10, 10, 'no form here')
    canvas.save()

    assert len(TaxFormDocument.load(buffer.getvalue()).form) == 0


def test_describe_fields(document):
    assert describe_fields(document.form) == [
        'PdfTextField<Max: 20>: name',
        'PdfTextField<Max: 3>: code',
        'PdfTextField<Max: None>: notes',
        'PdfCheckBox: agree',
    ]


def test_fill_all_fields_with_path(document):
    fill_all_fields_with_path(document.form)

    form = reload(document).form
    assert form.get_text_field('name').text == 'name'
    assert form.get_text_field('code').text == 'c…e'
    assert form.get_text_field('notes').text == 'notes'
    assert not form.get_check_box('agree').is_checked()


@pytest.mark.parametrize('text, limit, expected', [
    ('topmostSubform', None, 'topmostSubform'),
    ('short', 10, 'short'),
    ('abcdefghij', 5, 'ab…ij'),
    ('abcdefghij', 6, 'abc…ij'),
    ('abcdefghij', 1, '…'),
])
def test_truncate_middle(text, limit, expected):
    result = truncate_middle(text, limit)
    assert result == expected
    if limit:
        assert len(result) <= limit


def test_fields_are_text_field_instances(document):
    assert isinstance(document.form.get_field('name'), PdfTextField)
