"""Form W-9 (Rev. October 2018): Request for Taxpayer Identification Number."""
from paperwork.pdf_fillers.field_definitions import (
    AdvancedField,
    ComboField,
    MultiField,
    SplitTextField,
    SplitTextPart,
)
from paperwork.tax_forms.definition import SignaturePosition, TaxFormDefinition
from paperwork.tax_forms.utils import format_city_state_zip, format_street, get_full_name, only_digits

PAGE_1 = 'topmostSubform[0].Page1[0].'
CLASSIFICATION = PAGE_1 + 'FederalClassification[0].'
EXEMPTIONS = PAGE_1 + 'Exemptions[0].'
ADDRESS = PAGE_1 + 'Address[0].'


def is_individual(value, values):
    return values.get('submitterType') != 'Business'


def is_business(value, values):
    return values.get('submitterType') == 'Business'


def has_tax_id_type(tax_id_type):
    def predicate(value, values):
        return values.get('taxIdNumberType') == tax_id_type
    return predicate


def has_classification(classification):
    def predicate(value, values):
        return values.get('federalTaxClassification') == classification
    return predicate


W9_FIELDS = {
    # Line 1: name as shown on the income tax return
    'signer': AdvancedField(
        PAGE_1 + 'f1_1[0]',
        if_=is_individual,
        transform=lambda signer, values: get_full_name(signer),
    ),
    'businessName': [
        AdvancedField(PAGE_1 + 'f1_1[0]', if_=is_business),
    ],
    # Line 2: business name / disregarded entity name
    'businessDBA': PAGE_1 + 'f1_2[0]',
    # Line 3
    'federalTaxClassification': ComboField(
        values={
            'Individual': CLASSIFICATION + 'c1_1[0]',
            'C_Corporation': CLASSIFICATION + 'c1_1[1]',
            'S_Corporation': CLASSIFICATION + 'c1_1[2]',
            'Partnership': CLASSIFICATION + 'c1_1[3]',
            'TrustEstate': CLASSIFICATION + 'c1_1[4]',
            'LimitedLiabilityCompany': CLASSIFICATION + 'c1_1[5]',
            'Other': CLASSIFICATION + 'c1_1[6]',
        },
    ),
    'federalTaxClassificationDetails': MultiField([
        AdvancedField(CLASSIFICATION + 'f1_3[0]', if_=has_classification('LimitedLiabilityCompany')),
        AdvancedField(CLASSIFICATION + 'f1_4[0]', if_=has_classification('Other')),
    ]),
    # Line 4
    'exemptPayeeCode': EXEMPTIONS + 'f1_5[0]',
    'fatcaExemptionCode': EXEMPTIONS + 'f1_6[0]',
    # Lines 5 & 6
    'location': MultiField([
        AdvancedField(ADDRESS + 'f1_7[0]', transform=lambda location, values: format_street(location)),
        AdvancedField(ADDRESS + 'f1_8[0]', transform=lambda location, values: format_city_state_zip(location)),
    ]),
    'requesterNameAndAddress': PAGE_1 + 'f1_9[0]',
    # Line 7
    'accountNumbers': PAGE_1 + 'f1_10[0]',
    # Part I
    'taxIdNumber': [
        SplitTextField(
            if_=has_tax_id_type('SSN'),
            transform=lambda value, values: only_digits(value),
            fields=[
                SplitTextPart(PAGE_1 + 'SSN[0].f1_11[0]', 3),
                SplitTextPart(PAGE_1 + 'SSN[0].f1_12[0]', 2),
                SplitTextPart(PAGE_1 + 'SSN[0].f1_13[0]', 4),
            ],
        ),
        SplitTextField(
            if_=has_tax_id_type('EIN'),
            transform=lambda value, values: only_digits(value),
            fields=[
                SplitTextPart(PAGE_1 + 'EmployerID[0].f1_14[0]', 2),
                SplitTextPart(PAGE_1 + 'EmployerID[0].f1_15[0]', 7),
            ],
        ),
    ],
}

W9 = TaxFormDefinition(
    form_type='W9',
    template_name='fw9.pdf',
    fields=W9_FIELDS,
    signature=SignaturePosition(x=140, y=228),
)
