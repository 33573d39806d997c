"""PDF filler subpackage.

* :mod:`.pdf_form` - typed access to the AcroForm fields of a PDF
* :mod:`.field_definitions` - declarative value -> field mapping engine
* :mod:`.signature` - signature rendering
* :mod:`.document` - load / stamp / save a tax-form PDF
"""

from .field_definitions import (
    AdvancedField,
    ComboField,
    MultiField,
    NestedField,
    SimpleField,
    SplitTextField,
    SplitTextPart,
    fill_pdf_form_from_values,
)
from .pdf_form import (
    FieldNotFoundError,
    FieldTypeMismatchError,
    FormFieldError,
    FormFieldKind,
    MaxLengthExceededError,
    PdfForm,
    TextAlignment,
)

__all__ = [
    "AdvancedField",
    "ComboField",
    "FieldNotFoundError",
    "FieldTypeMismatchError",
    "FormFieldError",
    "FormFieldKind",
    "MaxLengthExceededError",
    "MultiField",
    "NestedField",
    "PdfForm",
    "SimpleField",
    "SplitTextField",
    "SplitTextPart",
    "TextAlignment",
    "fill_pdf_form_from_values",
]
