"""Supported tax forms and the end-to-end generation of a filled PDF."""
from __future__ import annotations

import base64
import json
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from paperwork.pdf_fillers.document import TaxFormDocument
from paperwork.pdf_fillers.signature import SignatureFont
from paperwork.tax_forms.definition import SignaturePosition, TaxFormDefinition
from paperwork.tax_forms.utils import get_full_name
from paperwork.tax_forms.w8_ben import W8_BEN
from paperwork.tax_forms.w8_ben_e import W8_BEN_E
from paperwork.tax_forms.w9 import W9

TAX_FORMS = {
    definition.form_type: definition
    for definition in (W9, W8_BEN, W8_BEN_E)
}


def is_valid_tax_form_type(form_type: Optional[str]) -> bool:
    return form_type in TAX_FORMS


def generate_tax_form(definition: TaxFormDefinition,
                      values: Mapping[str, Any],
                      template: bytes,
                      signature_font: SignatureFont,
                      is_final: bool = False,
                      creator: str = 'Open Collective',
                      now: Optional[datetime] = None) -> bytes:
    """Fill *template* with *values* and return the resulting PDF bytes.

    Final documents are flattened (values drawn into the pages, form removed)
    and carry the raw values as an embedded ``raw-data.json`` file.
    """
    form_type = definition.form_type
    document = TaxFormDocument.load(template)

    signer_full_name = get_full_name(values.get('signer'))
    entity_name = values.get('businessName') or signer_full_name
    now = now or datetime.now(timezone.utc)
    document.set_metadata(
        title=f'{form_type} Form - {entity_name}',
        subject=f'{form_type} Form',
        author=signer_full_name or '',
        creator=creator,
        keywords=[form_type],
        created=now,
        modified=now,
    )

    definition.fill(document, values, signature_font, signed_on=now.date())

    if is_final:
        document.flatten_form()
        raw_data = base64.b64encode(json.dumps(values).encode('utf-8'))
        document.attach(raw_data, 'raw-data.json', mime_type='application/json', description='Raw form data')

    return document.save()


__all__ = [
    'TAX_FORMS',
    'SignaturePosition',
    'TaxFormDefinition',
    'generate_tax_form',
    'is_valid_tax_form_type',
]
