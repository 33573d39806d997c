"""Typed access to the AcroForm of a PDF opened with pypdf.

Fields are addressed by their fully qualified name (the ``/T`` entries of the
field and its ancestors joined by ``.``), e.g.
``topmostSubform[0].Page1[0].f1_1[0]``. Looking a field up returns a
:class:`PdfFormField`; callers inspect :attr:`PdfFormField.kind` and downcast
with :meth:`~PdfFormField.as_text_field` / :meth:`~PdfFormField.as_check_box`.
"""
from __future__ import annotations

import enum
from logging import getLogger
from typing import Dict, List, Optional, Protocol

from pypdf import PdfWriter
from pypdf.generic import DictionaryObject, NameObject, NumberObject, TextStringObject

logger = getLogger(__name__)

# Field flags (PDF 1.7, tables 221, 226 and 228)
FLAG_READ_ONLY = 1 << 0
BUTTON_FLAG_RADIO = 1 << 15
BUTTON_FLAG_PUSHBUTTON = 1 << 16

INHERITABLE_KEYS = ("/FT", "/Ff", "/MaxLen", "/Q")

OFF_STATE = NameObject("/Off")
DEFAULT_ON_STATE = NameObject("/Yes")


class FormFieldKind(enum.Enum):
    TEXT = "text"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    PUSH_BUTTON = "push-button"
    CHOICE = "choice"
    SIGNATURE = "signature"
    UNKNOWN = "unknown"


class TextAlignment(enum.IntEnum):
    LEFT = 0
    CENTER = 1
    RIGHT = 2


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class FormFieldError(Exception):
    """Base class for errors raised while reading or writing form fields."""


class FieldNotFoundError(FormFieldError, KeyError):
    def __init__(self, path: str):
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"No form field named {self.path!r}"


class FieldTypeMismatchError(FormFieldError, TypeError):
    def __init__(self, path: str, expected: FormFieldKind, actual: FormFieldKind):
        super().__init__(f"Field {path!r} is a {actual.value} field, expected {expected.value}")
        self.path = path
        self.expected = expected
        self.actual = actual


class MaxLengthExceededError(FormFieldError, ValueError):
    def __init__(self, path: str, max_length: int, text: str):
        super().__init__(
            f"Text of length {len(text)} exceeds the max length ({max_length}) of field {path!r}"
        )
        self.path = path
        self.max_length = max_length


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


def _field_kind(field_type: Optional[str], flags: int) -> FormFieldKind:
    if field_type == "/Tx":
        return FormFieldKind.TEXT
    if field_type == "/Btn":
        if flags & BUTTON_FLAG_PUSHBUTTON:
            return FormFieldKind.PUSH_BUTTON
        if flags & BUTTON_FLAG_RADIO:
            return FormFieldKind.RADIO
        return FormFieldKind.CHECKBOX
    if field_type == "/Ch":
        return FormFieldKind.CHOICE
    if field_type == "/Sig":
        return FormFieldKind.SIGNATURE
    return FormFieldKind.UNKNOWN


class PdfFormField:
    """A terminal field of the form together with its widget annotations."""

    def __init__(self, name: str, node: DictionaryObject, widgets: List[DictionaryObject],
                 kind: FormFieldKind, inherited: Dict[str, object]):
        self.name = name
        self.kind = kind
        self._node = node
        self._widgets = widgets
        self._inherited = inherited

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"

    @property
    def flags(self) -> int:
        return int(self._inherited.get("/Ff", 0))

    def is_read_only(self) -> bool:
        return bool(self.flags & FLAG_READ_ONLY)

    def as_text_field(self) -> "PdfTextField":
        raise FieldTypeMismatchError(self.name, FormFieldKind.TEXT, self.kind)

    def as_check_box(self) -> "PdfCheckBox":
        raise FieldTypeMismatchError(self.name, FormFieldKind.CHECKBOX, self.kind)


class PdfTextField(PdfFormField):

    def as_text_field(self) -> "PdfTextField":
        return self

    @property
    def max_length(self) -> Optional[int]:
        value = self._inherited.get("/MaxLen")
        return int(value) if value is not None else None

    @property
    def text(self) -> str:
        value = self._node.get("/V")
        return str(value.get_object()) if value is not None else ""

    @property
    def alignment(self) -> TextAlignment:
        return TextAlignment(int(self._inherited.get("/Q", 0)))

    def set_alignment(self, alignment: TextAlignment) -> None:
        self._node[NameObject("/Q")] = NumberObject(int(alignment))
        self._inherited["/Q"] = int(alignment)

    def set_text(self, text: str) -> None:
        max_length = self.max_length
        if max_length is not None and len(text) > max_length:
            raise MaxLengthExceededError(self.name, max_length, text)
        self._node[NameObject("/V")] = TextStringObject(text)
        # clear stale appearance so the viewer redraws (NeedAppearances is on)
        for widget in self._widgets:
            if "/AP" in widget:
                del widget["/AP"]


class PdfCheckBox(PdfFormField):

    def as_check_box(self) -> "PdfCheckBox":
        return self

    def _states(self, widget: DictionaryObject) -> List[str]:
        if "/AP" not in widget:
            return []
        appearance = widget["/AP"]
        if "/N" not in appearance:
            return []
        return list(appearance["/N"].keys())

    @property
    def on_value(self) -> NameObject:
        for widget in self._widgets:
            for state in self._states(widget):
                if state != OFF_STATE:
                    return NameObject(state)
        return DEFAULT_ON_STATE

    def is_checked(self) -> bool:
        return self._node.get("/V") == self.on_value

    def check(self) -> None:
        on_value = self.on_value
        self._node[NameObject("/V")] = on_value
        for widget in self._widgets:
            states = self._states(widget)
            widget[NameObject("/AS")] = on_value if not states or on_value in states else OFF_STATE

    def uncheck(self) -> None:
        self._node[NameObject("/V")] = OFF_STATE
        for widget in self._widgets:
            widget[NameObject("/AS")] = OFF_STATE


FIELD_CLASSES = {
    FormFieldKind.TEXT: PdfTextField,
    FormFieldKind.CHECKBOX: PdfCheckBox,
}


# ---------------------------------------------------------------------------
# Form
# ---------------------------------------------------------------------------


class Form(Protocol):
    """What the form-filling engine needs from a form."""

    def get_field(self, path: str) -> PdfFormField: ...

    def get_text_field(self, path: str) -> PdfTextField: ...

    def get_check_box(self, path: str) -> PdfCheckBox: ...


class PdfForm:
    """The AcroForm of a :class:`pypdf.PdfWriter`, indexed by qualified field name."""

    def __init__(self, writer: PdfWriter):
        self._writer = writer
        self._fields: Dict[str, PdfFormField] = {}

        root = writer.root_object
        if "/AcroForm" not in root:
            return
        acro_form = root["/AcroForm"]
        if "/Fields" in acro_form:
            self._walk(acro_form["/Fields"], "", {})
        writer.set_need_appearances_writer(True)

    def _walk(self, refs, parent_name: str, inherited: Dict[str, object]) -> None:
        for ref in refs:
            node = ref.get_object()
            partial = str(node["/T"]) if "/T" in node else ""
            if parent_name and partial:
                name = f"{parent_name}.{partial}"
            else:
                name = partial or parent_name

            attributes = dict(inherited)
            for key in INHERITABLE_KEYS:
                if key in node:
                    attributes[key] = node[key]

            kids = [kid.get_object() for kid in node["/Kids"]] if "/Kids" in node else []
            named_kids = [kid for kid in kids if "/T" in kid]
            widgets = [kid for kid in kids if "/T" not in kid]
            if named_kids:
                self._walk(named_kids, name, attributes)
            # a node may hold both child fields and its own widgets
            if name and (widgets or not named_kids):
                self._register(name, node, widgets or [node], attributes)

    def _register(self, name: str, node: DictionaryObject, widgets: List[DictionaryObject],
                  attributes: Dict[str, object]) -> None:
        field_type = attributes.get("/FT")
        flags = int(attributes.get("/Ff", 0))
        kind = _field_kind(str(field_type) if field_type is not None else None, flags)
        field_class = FIELD_CLASSES.get(kind, PdfFormField)
        if name in self._fields:
            logger.warning("Duplicate form field name %s, keeping the first one", name)
            return
        self._fields[name] = field_class(name, node, widgets, kind, attributes)

    def __contains__(self, path: str) -> bool:
        return path in self._fields

    def __len__(self) -> int:
        return len(self._fields)

    def get_fields(self) -> List[PdfFormField]:
        return list(self._fields.values())

    def get_field(self, path: str) -> PdfFormField:
        try:
            return self._fields[path]
        except KeyError:
            raise FieldNotFoundError(path) from None

    def get_text_field(self, path: str) -> PdfTextField:
        return self.get_field(path).as_text_field()

    def get_check_box(self, path: str) -> PdfCheckBox:
        return self.get_field(path).as_check_box()

    def flatten(self) -> None:
        """Draw the text fields and checkboxes into the pages, then drop the form.

        Appearance streams are generated from the current values and added to
        the page content. Widgets and the ``/AcroForm`` dictionary are removed,
        so the result can no longer be edited.
        """
        values = {}
        for field in self._fields.values():
            if field.kind is FormFieldKind.TEXT:
                values[field.name] = field.as_text_field().text
            elif field.kind is FormFieldKind.CHECKBOX:
                check_box = field.as_check_box()
                if not all(check_box._states(widget) for widget in check_box._widgets):
                    logger.warning("Check box %s has no appearance, dropping it", field.name)
                    continue
                values[field.name] = check_box.on_value if check_box.is_checked() else OFF_STATE

        root = self._writer.root_object
        if "/AcroForm" not in root:
            return
        if values and "/Fields" in root["/AcroForm"]:
            self._writer.update_page_form_field_values(None, values, auto_regenerate=False, flatten=True)
        self._writer.remove_annotations(subtypes=("/Widget",))
        del root["/AcroForm"]
        self._fields = {}


# ---------------------------------------------------------------------------
# Development helpers
# ---------------------------------------------------------------------------


def describe_fields(form: PdfForm) -> List[str]:
    lines = []
    for field in form.get_fields():
        if field.kind is FormFieldKind.TEXT:
            lines.append(f"{type(field).__name__}<Max: {field.as_text_field().max_length}>: {field.name}")
        else:
            lines.append(f"{type(field).__name__}: {field.name}")
    return lines


def log_all_fields(form: PdfForm) -> None:
    for line in describe_fields(form):
        logger.info(line)


def truncate_middle(text: str, limit: Optional[int]) -> str:
    if not limit or len(text) <= limit:
        return text
    limit -= 1  # ellipsis
    front_chars = (limit + 1) // 2
    back_chars = limit // 2
    back = text[-back_chars:] if back_chars else ""
    return f"{text[:front_chars]}…{back}"


def fill_all_fields_with_path(form: PdfForm) -> None:
    """Fill every text field with its own name, handy to map a new template."""
    for field in form.get_fields():
        if field.kind is FormFieldKind.TEXT:
            text_field = field.as_text_field()
            text_field.set_text(truncate_middle(field.name, text_field.max_length))
