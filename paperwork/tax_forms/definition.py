from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Mapping, Optional

from paperwork.pdf_fillers.field_definitions import FieldMap, fill_pdf_form_from_values
from paperwork.pdf_fillers.signature import SignatureFont, add_signature
from paperwork.tax_forms.utils import SIGNED_ON, get_full_name


@dataclass(frozen=True)
class SignaturePosition:
    x: float
    y: float
    page: int = 0


@dataclass(frozen=True)
class TaxFormDefinition:
    form_type: str
    template_name: str
    fields: FieldMap
    signature: Optional[SignaturePosition] = None

    def template_path(self, directory) -> Path:
        return Path(directory) / self.template_name

    def load_template(self, directory) -> bytes:
        return self.template_path(directory).read_bytes()

    def fill(self, document, values: Mapping[str, Any], font: SignatureFont,
             signed_on: Optional[date] = None) -> None:
        form_values = {**values, SIGNED_ON: signed_on or date.today()}
        fill_pdf_form_from_values(document.form, form_values, self.fields)
        signer_full_name = get_full_name(values.get('signer'))
        if self.signature and signer_full_name:
            add_signature(document, font, signer_full_name,
                          x=self.signature.x, y=self.signature.y, page=self.signature.page)
