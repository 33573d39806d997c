"""Form W-8BEN-E (Rev. October 2021): foreign status of beneficial owner (entities).

Only Part I (identification), the most common chapter 4 statuses and the
certification (Part XXX) are mapped.
"""
from paperwork.pdf_fillers.field_definitions import AdvancedField, ComboField, MultiField, NestedField
from paperwork.tax_forms.definition import SignaturePosition, TaxFormDefinition
from paperwork.tax_forms.utils import (
    format_city_state_zip,
    format_street,
    get_full_name,
    is_signed,
    signature_date,
)

PAGE_1 = 'topmostSubform[0].Page1[0].'
PAGE_2 = 'topmostSubform[0].Page2[0].'
PAGE_8 = 'topmostSubform[0].Page8[0].'

CHAPTER_3_STATUSES = {
    'Corporation': 'c1_1[0]',
    'Partnership': 'c1_1[1]',
    'SimpleTrust': 'c1_1[2]',
    'TaxExemptOrganization': 'c1_1[3]',
    'ComplexTrust': 'c1_1[4]',
    'ForeignGovernmentControlledEntity': 'c1_1[5]',
    'CentralBankOfIssue': 'c1_1[6]',
    'PrivateFoundation': 'c1_1[7]',
    'Estate': 'c1_1[8]',
    'ForeignGovernmentIntegralPart': 'c1_1[9]',
    'GrantorTrust': 'c1_1[10]',
    'DisregardedEntity': 'c1_1[11]',
    'InternationalOrganization': 'c1_1[12]',
}

CHAPTER_4_STATUSES = {
    'NonparticipatingFFI': 'c1_3[0]',
    'ParticipatingFFI': 'c1_3[1]',
    'ExemptRetirementPlans': 'c1_3[13]',
    'ActiveNFFE': 'c1_3[23]',
    'PassiveNFFE': 'c1_3[24]',
    'DirectReportingNFFE': 'c1_3[30]',
}


def is_treaty_claim(value, values):
    return values.get('chapter3Status') in ('Partnership', 'SimpleTrust', 'GrantorTrust', 'DisregardedEntity') \
        and value is not None


W8_BEN_E_FIELDS = {
    # Part I
    'businessName': PAGE_1 + 'f1_1[0]',
    'businessCountryOfIncorporationOrOrganization': PAGE_1 + 'f1_2[0]',
    'disregardedBusinessName': PAGE_1 + 'f1_3[0]',
    'chapter3Status': ComboField(values={key: PAGE_1 + path for key, path in CHAPTER_3_STATUSES.items()}),
    'isHybridEntityMakingTreatyClaim': ComboField(
        if_=is_treaty_claim,
        transform=lambda value, values: 'Yes' if value else 'No',
        values={'Yes': PAGE_1 + 'c1_2[0]', 'No': PAGE_1 + 'c1_2[1]'},
    ),
    'nffeStatus': ComboField(values={key: PAGE_1 + path for key, path in CHAPTER_4_STATUSES.items()}),
    'businessAddress': MultiField([
        AdvancedField(PAGE_1 + 'f1_4[0]', transform=lambda location, values: format_street(location)),
        AdvancedField(PAGE_1 + 'f1_5[0]', transform=lambda location, values: format_city_state_zip(location)),
        NestedField({'country': PAGE_1 + 'f1_6[0]'}),
    ]),
    'businessMailingAddress': MultiField([
        AdvancedField(PAGE_1 + 'f1_7[0]', transform=lambda location, values: format_street(location)),
        AdvancedField(PAGE_1 + 'f1_8[0]', transform=lambda location, values: format_city_state_zip(location)),
        NestedField({'country': PAGE_1 + 'f1_9[0]'}),
    ]),
    'usTaxIdNumber': PAGE_2 + 'f2_1[0]',
    'giin': PAGE_2 + 'f2_2[0]',
    'foreignTaxIdNumber': PAGE_2 + 'f2_3[0]',
    'referenceNumber': PAGE_2 + 'f2_4[0]',
    # Part XXX
    'signer': MultiField([
        AdvancedField(PAGE_8 + 'f8_31[0]', transform=lambda signer, values: get_full_name(signer)),
        AdvancedField(PAGE_8 + 'f8_32[0]', if_=is_signed, transform=signature_date),
    ]),
    'certifiesCapacityToSign': PAGE_8 + 'c8_3[0]',
}

W8_BEN_E = TaxFormDefinition(
    form_type='W8_BEN_E',
    template_name='fw8bene.pdf',
    fields=W8_BEN_E_FIELDS,
    signature=SignaturePosition(x=110, y=150, page=7),
)
