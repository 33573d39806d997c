import re
from datetime import date, datetime
from typing import Any, Mapping, Optional

# Set by the server when filling a form, never taken from the submitted values
SIGNED_ON = 'signedOn'


def _strip(value: Any) -> str:
    return str(value).strip() if value else ''


def get_full_name(signer: Optional[Mapping[str, Any]]) -> str:
    """First, middle and last name joined by a single space"""
    if not isinstance(signer, Mapping):
        return ''
    parts = (signer.get('firstName'), signer.get('middleName'), signer.get('lastName'))
    return ' '.join(part for part in map(_strip, parts) if part)


def is_signed(signer: Any, values: Mapping[str, Any]) -> bool:
    return bool(get_full_name(signer))


def only_digits(value: Any) -> str:
    if value is None:
        return ''
    return re.sub(r'\D', '', str(value))


def format_street(location: Optional[Mapping[str, Any]]) -> str:
    if not isinstance(location, Mapping):
        return ''
    parts = (location.get('address1'), location.get('address2'))
    return ', '.join(part for part in map(_strip, parts) if part)


def format_city_state_zip(location: Optional[Mapping[str, Any]]) -> str:
    """``City, ST 12345``"""
    if not isinstance(location, Mapping):
        return ''
    city = _strip(location.get('city'))
    state_zip = ' '.join(part for part in map(_strip, (location.get('state'), location.get('postalCode'))) if part)
    return ', '.join(part for part in (city, state_zip) if part)


def format_date(value: Any, fmt: str = '%m-%d-%Y') -> str:
    """Dates are received as ISO strings (``YYYY-MM-DD``).

    Raises ``ValueError`` when the value is not a date.
    """
    if not value:
        return ''
    if isinstance(value, (date, datetime)):
        return value.strftime(fmt)
    if not isinstance(value, str):
        raise ValueError(f'Invalid date: {value!r}')
    return date.fromisoformat(value[:10]).strftime(fmt)


def signature_date(signer: Any, values: Mapping[str, Any]) -> str:
    return format_date(values.get(SIGNED_ON) or date.today())
