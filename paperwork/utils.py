from collections.abc import Mapping, Sequence
from typing import Any, Tuple

CURRENCY_SYMBOLS = {
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
    'JPY': '¥',
    'INR': '₹',
    'ILS': '₪',
}

# Currencies without a minor unit: amounts are still stored in cents
ZERO_DECIMAL_CURRENCIES = {'JPY', 'KRW'}


def scale_value(value: float,
                from_range: Tuple[float, float],
                to_range: Tuple[float, float],
                clamp: bool = False) -> float:
    """
    Linear interpolation of *value* from *from_range* onto *to_range*

    :param clamp: keep the result inside *to_range*
    """
    (from_min, from_max), (to_min, to_max) = from_range, to_range
    ratio = (value - from_min) / (from_max - from_min)
    result = to_min + ratio * (to_max - to_min)
    if clamp:
        low, high = min(to_min, to_max), max(to_min, to_max)
        result = max(low, min(high, result))
    return result


def resolve_path(obj: Any, path: str, default: Any = None) -> Any:
    """
    Safe nested lookup, ``resolve_path({'a': {'b': 1}}, 'a.b') == 1``

    Mappings are looked up by key, sequences by integer index. Anything that
    can't be traversed resolves to *default*.
    """
    current = obj
    for part in str(path).split('.'):
        if isinstance(current, Mapping):
            if part not in current:
                return default
            current = current[part]
        elif isinstance(current, Sequence) and not isinstance(current, str) and part.isdigit():
            index = int(part)
            if index >= len(current):
                return default
            current = current[index]
        else:
            return default
    return current


def format_currency(amount_in_cents: int, currency: str) -> str:
    """Format an amount stored in cents, e.g. ``format_currency(123456, 'USD') == '$1,234.56'``"""
    currency = (currency or '').upper()
    amount = (amount_in_cents or 0) / 100
    sign = '-' if amount < 0 else ''
    decimals = 0 if currency in ZERO_DECIMAL_CURRENCIES else 2
    number = format(abs(amount), f',.{decimals}f')
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol:
        return f'{sign}{symbol}{number}'
    return f'{sign}{number} {currency}'.strip()
