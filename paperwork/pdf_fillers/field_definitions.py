"""Declarative mapping of application values onto PDF form fields.

A form definition is a ``{key: definition}`` map (or ``{key: [definitions]}``).
Each definition says how the value found at ``values[key]`` ends up in the
PDF:

* :class:`SimpleField` - the path of a text field or checkbox
* :class:`AdvancedField` - same, with an optional predicate and transform
* :class:`ComboField` - one checkbox per possible value, only one gets checked
* :class:`SplitTextField` - one long value spread over consecutive boxes
  (SSN, EIN, dates...)
* :class:`NestedField` - recurse into a sub-object
* :class:`MultiField` - several definitions for the same value

Predicates (``if_``) and transforms receive ``(value, all_values)``.
"""
from __future__ import annotations

import enum
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from paperwork.pdf_fillers.pdf_form import Form, FormFieldKind, TextAlignment
from paperwork.utils import resolve_path

Predicate = Callable[[Any, Mapping[str, Any]], bool]
Transform = Callable[[Any, Mapping[str, Any]], Any]

AUTO = "auto"


class FieldType(enum.Enum):
    SIMPLE = "simple"
    ADVANCED = "advanced"
    COMBO = "combo"
    SPLIT_TEXT = "split-text"
    NESTED = "nested"
    MULTI = "multi"


@dataclass(frozen=True)
class SimpleField:
    """Works with text inputs and checkboxes."""
    form_path: str
    if_ = None
    kind = FieldType.SIMPLE


@dataclass(frozen=True)
class AdvancedField:
    form_path: str
    if_: Optional[Predicate] = None
    transform: Optional[Transform] = None
    kind = FieldType.ADVANCED


@dataclass(frozen=True)
class ComboField:
    """For multi-checkboxes where only one should be checked."""
    values: Mapping[Any, str]
    if_: Optional[Predicate] = None
    transform: Optional[Transform] = None
    kind = FieldType.COMBO


@dataclass(frozen=True)
class SplitTextPart:
    form_path: str
    max_length: Union[int, str] = AUTO


@dataclass(frozen=True)
class SplitTextField:
    fields: Sequence[SplitTextPart]
    if_: Optional[Predicate] = None
    transform: Optional[Transform] = None
    kind = FieldType.SPLIT_TEXT


@dataclass(frozen=True)
class NestedField:
    fields: Mapping[str, "FieldDefinition"]
    if_: Optional[Predicate] = None
    kind = FieldType.NESTED


@dataclass(frozen=True)
class MultiField:
    fields: Sequence["FieldDefinition"] = field(default_factory=list)
    if_: Optional[Predicate] = None
    kind = FieldType.MULTI


FieldDefinition = Union[SimpleField, AdvancedField, ComboField, SplitTextField, NestedField, MultiField]
FieldMap = Mapping[str, Union[str, FieldDefinition, Sequence[Union[str, FieldDefinition]]]]


def as_definition(definition: Union[str, FieldDefinition]) -> FieldDefinition:
    """A bare string is the path of a :class:`SimpleField`."""
    if isinstance(definition, str):
        return SimpleField(definition)
    return definition


def normalize_field_map(fields: FieldMap) -> Dict[str, List[FieldDefinition]]:
    normalized = {}
    for key, definitions in fields.items():
        if isinstance(definitions, (str, SimpleField, AdvancedField, ComboField,
                                    SplitTextField, NestedField, MultiField)):
            definitions = [definitions]
        normalized[key] = [as_definition(definition) for definition in definitions]
    return normalized


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _identity(value, all_values):
    return value


def _is_empty(value) -> bool:
    return value is None or value == ""


def _write_value(form: Form, form_path: str, value: Any) -> None:
    form_field = form.get_field(form_path)
    if form_field.kind is FormFieldKind.TEXT:
        if value:
            text_field = form_field.as_text_field()
            text_field.set_alignment(TextAlignment.LEFT)
            text_field.set_text(str(value).strip())
    elif form_field.kind is FormFieldKind.CHECKBOX:
        if value:
            form_field.as_check_box().check()


def _fill_simple(form: Form, definition: SimpleField, value, all_values) -> None:
    _write_value(form, definition.form_path, value)


def _fill_advanced(form: Form, definition: AdvancedField, value, all_values) -> None:
    transform = definition.transform or _identity
    _write_value(form, definition.form_path, transform(value, all_values))


def _fill_combo(form: Form, definition: ComboField, value, all_values) -> None:
    transform = definition.transform or _identity
    choice = transform(value, all_values)
    if not isinstance(choice, Hashable):
        return
    checkbox = definition.values.get(choice)
    if checkbox:
        form.get_check_box(checkbox).check()


def _fill_split_text(form: Form, definition: SplitTextField, value, all_values) -> None:
    transform = definition.transform or _identity
    transformed = transform(value, all_values)
    if _is_empty(transformed):
        return

    text = str(transformed)
    start = 0
    for part in definition.fields:
        sub_field = form.get_text_field(part.form_path)
        length = sub_field.max_length if part.max_length == AUTO else part.max_length
        end = len(text) if length is None else start + length
        chunk = text[start:end].strip()
        if chunk:
            sub_field.set_text(chunk)
        start = end


def _fill_nested(form: Form, definition: NestedField, value, all_values) -> None:
    for key, nested in definition.fields.items():
        fill_value_for_field(form, as_definition(nested), resolve_path(value, key), all_values)


def _fill_multi(form: Form, definition: MultiField, value, all_values) -> None:
    for sub_definition in definition.fields:
        fill_value_for_field(form, as_definition(sub_definition), value, all_values)


RENDERERS = {
    FieldType.SIMPLE: _fill_simple,
    FieldType.ADVANCED: _fill_advanced,
    FieldType.COMBO: _fill_combo,
    FieldType.SPLIT_TEXT: _fill_split_text,
    FieldType.NESTED: _fill_nested,
    FieldType.MULTI: _fill_multi,
}


def fill_value_for_field(form: Form, definition: FieldDefinition, value: Any,
                         all_values: Mapping[str, Any]) -> None:
    if definition.if_ is not None and not definition.if_(value, all_values):
        return
    RENDERERS[definition.kind](form, definition, value, all_values)


def fill_pdf_form_from_values(form: Form, values: Mapping[str, Any], fields: FieldMap) -> None:
    """Write *values* into *form* following the *fields* definitions.

    Missing values and unmapped combo choices leave the PDF field untouched.
    A definition pointing to a field that doesn't exist in the form raises
    :class:`~paperwork.pdf_fillers.pdf_form.FieldNotFoundError`.
    """
    for key, definitions in normalize_field_map(fields).items():
        value = values.get(key)
        for definition in definitions:
            fill_value_for_field(form, definition, value, values)
