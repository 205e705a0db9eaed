"""
Form settings: the culture-like knobs every formatter and validator reads.

FormSettings is a frozen dataclass so a single instance can be shared across
threads and layered with dataclasses.replace() by settings_context().
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping


DEFAULT_DATE_TIME_FORMATS: Dict[str, str] = {
    'DATE': '%Y-%m-%d',
    'DATE_AND_TIME': '%Y-%m-%d %H:%M',
    'LOCAL_DATE_AND_TIME': '%Y-%m-%d %H:%M',
    'MONTH': '%B %Y',
    'TIME': '%H:%M',
    'WEEK': '%G-W%V',
}

DEFAULT_VALUE_SEPARATORS: Dict[str, str] = {
    'NONE': '',
    'COMMA': ', ',
    'SEMICOLON': '; ',
    'SPACE': ' ',
    'LINE_BREAK': '\n',
}


@dataclass(frozen=True)
class FormSettings:
    """Settings used when rendering and validating form values.

    Attributes:
        locale: Name of the message catalog used for error and info messages.
        thousands_separator: Group separator for read-only number rendering.
        decimal_separator: Decimal mark for read-only number rendering.
        date_time_formats: strftime patterns keyed by DateTimeType name.
        value_separators: Joiners keyed by ValueSeparator name.
        max_file_size: Default upper bound in bytes for file fields.
    """
    locale: str = 'en'
    thousands_separator: str = ','
    decimal_separator: str = '.'
    date_time_formats: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_DATE_TIME_FORMATS))
    value_separators: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_VALUE_SEPARATORS))
    max_file_size: int = 2000000000

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FormSettings':
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown form settings: {sorted(unknown)}")
        return cls(**dict(data))

    def with_overrides(self, **overrides: Any) -> 'FormSettings':
        """Return a copy with the given non-None overrides applied."""
        values = {name: value for name, value in overrides.items() if value is not None}
        if not values:
            return self
        known = {f.name for f in fields(self)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown form settings: {sorted(unknown)}")
        return replace(self, **values)
