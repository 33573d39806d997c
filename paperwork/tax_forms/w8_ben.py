"""Form W-8BEN (Rev. October 2021): foreign status of beneficial owner (individuals)."""
from paperwork.pdf_fillers.field_definitions import AdvancedField, MultiField, NestedField
from paperwork.tax_forms.definition import SignaturePosition, TaxFormDefinition
from paperwork.tax_forms.utils import (
    format_city_state_zip,
    format_date,
    format_street,
    get_full_name,
    is_signed,
    signature_date,
)

PAGE_1 = 'topmostSubform[0].Page1[0].'


def claims_treaty_benefits(value, values):
    return bool(values.get('claimsSpecialRatesAndConditions'))


def address_fields(street_path, city_path, country_path):
    return MultiField([
        AdvancedField(street_path, transform=lambda location, values: format_street(location)),
        AdvancedField(city_path, transform=lambda location, values: format_city_state_zip(location)),
        NestedField({'country': country_path}),
    ])


W8_BEN_FIELDS = {
    'signer': MultiField([
        # Part I, line 1
        AdvancedField(PAGE_1 + 'f_1[0]', transform=lambda signer, values: get_full_name(signer)),
        # Part III
        AdvancedField(PAGE_1 + 'f_21[0]', transform=lambda signer, values: get_full_name(signer)),
        AdvancedField(PAGE_1 + 'f_20[0]', if_=is_signed, transform=signature_date),
    ]),
    'countryOfCitizenship': PAGE_1 + 'f_2[0]',
    'residenceAddress': address_fields(PAGE_1 + 'f_3[0]', PAGE_1 + 'f_4[0]', PAGE_1 + 'f_5[0]'),
    'mailingAddress': address_fields(PAGE_1 + 'f_6[0]', PAGE_1 + 'f_7[0]', PAGE_1 + 'f_8[0]'),
    'usTaxIdNumber': PAGE_1 + 'f_9[0]',
    'foreignTaxIdNumber': PAGE_1 + 'f_10[0]',
    'isForeignTaxIdNotRequired': PAGE_1 + 'c1_01[0]',
    'referenceNumber': PAGE_1 + 'f_11[0]',
    'dateOfBirth': AdvancedField(PAGE_1 + 'f_12[0]', transform=lambda value, values: format_date(value)),
    # Part II: claim of tax treaty benefits
    'treatyCountry': AdvancedField(PAGE_1 + 'f_13[0]', if_=claims_treaty_benefits),
    'treatyArticle': AdvancedField(PAGE_1 + 'f_14[0]', if_=claims_treaty_benefits),
    'treatyWithholdingRate': AdvancedField(PAGE_1 + 'f_15[0]', if_=claims_treaty_benefits),
    'treatyIncomeType': AdvancedField(PAGE_1 + 'f_16[0]', if_=claims_treaty_benefits),
    'treatyAdditionalConditions': AdvancedField(PAGE_1 + 'f_17[0]', if_=claims_treaty_benefits),
    'hasCapacityToSign': PAGE_1 + 'c1_02[0]',
}

W8_BEN = TaxFormDefinition(
    form_type='W8_BEN',
    template_name='fw8ben.pdf',
    fields=W8_BEN_FIELDS,
    signature=SignaturePosition(x=110, y=82),
)
