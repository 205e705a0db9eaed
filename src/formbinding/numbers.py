"""
Invariant parsing and culture-aware rendering of numbers.

Field values are stored as strings in invariant notation ('-1234.5'); read-only
rendering applies the separators of the current FormSettings.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Optional, Tuple, Union

from formconf import get_current_settings

_INTEGER_PATTERN = re.compile(r'^[+-]?\d+$')
_DECIMAL_PATTERN = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$')

Number = Union[int, Decimal]


def parse_int(text: Optional[str]) -> Optional[int]:
    """Parse an invariant integer, returning None if text is not one."""
    if text is None:
        return None
    text = text.strip()
    if not _INTEGER_PATTERN.match(text):
        return None
    return int(text)


def parse_decimal(text: Optional[str]) -> Optional[Decimal]:
    """Parse an invariant decimal, returning None if text is not one."""
    if text is None:
        return None
    text = text.strip()
    if not _DECIMAL_PATTERN.match(text):
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def parse_number(text: Optional[str]) -> Optional[Number]:
    """Parse as int when possible, otherwise as Decimal."""
    value = parse_int(text)
    if value is None:
        value = parse_decimal(text)
    return value


def to_invariant_string(value: Number) -> str:
    """Render a number canonically: no exponent, no grouping, '.' as decimal mark."""
    if isinstance(value, Decimal):
        return format(value, 'f')
    return str(value)


def decimal_places_of(step: Decimal) -> int:
    """Number of digits after the decimal mark in step, e.g. 2 for 0.01."""
    exponent = step.as_tuple().exponent
    if not isinstance(exponent, int) or exponent >= 0:
        return 0
    return -exponent


def format_number(value: Number, decimal_places: Optional[int] = None,
                  has_thousands_separators: bool = True) -> str:
    """Render a number for read-only display.

    Args:
        value: The number
        decimal_places: Fixed count of decimals, or None to render every
            significant decimal without trailing zeros
        has_thousands_separators: Whether to group the integral digits

    Returns:
        The rendered number using the separators of the current settings
    """
    settings = get_current_settings()
    number = Decimal(value)
    if decimal_places is None:
        text = format(number, 'f')
        if '.' in text:
            text = text.rstrip('0').rstrip('.')
    else:
        quantum = Decimal(1).scaleb(-decimal_places)
        with localcontext() as context:
            # quantize needs a digit for every integral and fractional place
            context.prec = max(context.prec, number.adjusted() + decimal_places + 2)
            text = format(number.quantize(quantum, rounding=ROUND_HALF_UP), 'f')
    sign = ''
    if text.startswith('-'):
        sign, text = '-', text[1:]
        if text.strip('0.') == '':
            sign = ''
    integral, _, fraction = text.partition('.')
    if has_thousands_separators:
        groups = []
        while len(integral) > 3:
            groups.insert(0, integral[-3:])
            integral = integral[:-3]
        groups.insert(0, integral)
        integral = settings.thousands_separator.join(groups)
    if fraction:
        return f"{sign}{integral}{settings.decimal_separator}{fraction}"
    return f"{sign}{integral}"


def parse_formatted_number(text: Optional[str]) -> Optional[Number]:
    """Inverse of format_number under the current settings."""
    if not text:
        return None
    settings = get_current_settings()
    normalized = text.strip()
    if settings.thousands_separator:
        normalized = normalized.replace(settings.thousands_separator, '')
    if settings.decimal_separator != '.':
        normalized = normalized.replace(settings.decimal_separator, '.')
    return parse_number(normalized)


@dataclass(frozen=True)
class NumberWithUnit:
    """A number together with a unit, e.g. 12.5 kg.

    The unit is free text or, for fields offering a unit choice, the key of
    an option. The string form is '<invariant number> <unit>'.
    """
    number: Optional[Decimal] = None
    unit: Optional[str] = None

    @property
    def has_value(self) -> bool:
        return self.number is not None and bool(self.unit)

    @property
    def number_as_string(self) -> str:
        return '' if self.number is None else to_invariant_string(self.number)

    def __str__(self) -> str:
        if not self.unit:
            return self.number_as_string
        return f"{self.number_as_string} {self.unit}".strip()

    @staticmethod
    def split(text: Optional[str]) -> Tuple[str, str]:
        """Split text at its first space into number text and unit."""
        if not text:
            return '', ''
        number_text, _, unit = text.strip().partition(' ')
        return number_text, unit

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional['NumberWithUnit']:
        """Parse '<number> <unit>'; None unless both parts are present and valid."""
        number_text, unit = cls.split(text)
        number = parse_decimal(number_text)
        if number is None or not unit:
            return None
        return cls(number, unit)
