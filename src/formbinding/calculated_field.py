"""
Calculated presentable fields.

The value of a calculated field is produced by a zero-argument function the
first time it is read and cached afterwards. An optional pass-through function
receives writes; without one the field is read-only and writing raises
CalculatedFieldError.

The cache is an explicit cell holding either UNCOMPUTED or Computed(value), so
a computed None is distinguishable from "not computed yet".
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar, Union, TYPE_CHECKING

from formbinding import date_time, numbers
from formbinding.errors import CalculatedFieldError
from formbinding.option_data import User, UserValueComparer
from formbinding.presentable_field import PresentableFieldForCollection, PresentableFieldForElement, find_user_for

if TYPE_CHECKING:
    from formbinding.presentable_object import PresentableObject

logger = logging.getLogger(__name__)

T = TypeVar('T')


class _Uncomputed:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'UNCOMPUTED'


UNCOMPUTED = _Uncomputed()


@dataclass(frozen=True)
class Computed(Generic[T]):
    value: T


CachedValue = Union[_Uncomputed, Computed]


def _is_write_protected(parent: Optional['PresentableObject']) -> bool:
    return bool(getattr(parent, 'is_write_protected', False))


def _is_durable(parent: Optional['PresentableObject']) -> bool:
    return bool(getattr(parent, 'is_durable', False))


def _to_normalized_string(value: Any) -> str:
    """Render a calculated value, normalizing numbers to invariant notation."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, Decimal)):
        return numbers.to_invariant_string(value)
    if isinstance(value, datetime):
        return date_time.to_iso(value)
    text = str(value)
    parsed = numbers.parse_number(text)
    if parsed is not None:
        return numbers.to_invariant_string(parsed)
    return text


class PresentableFieldForCalculatedValue(PresentableFieldForElement):
    """Element field whose value comes from a function.

    Args:
        parent: Owning presentable object
        key: Field name
        calculate: Zero-argument function computing the value
        pass_through: Optional function receiving written values
        value_type: Type used to parse strings written through
            value_as_string; str when omitted
    """

    def __init__(self, parent: Optional['PresentableObject'], key: str,
                 calculate: Callable[[], Any],
                 pass_through: Optional[Callable[[Any], None]] = None,
                 value_type: type = str):
        super().__init__(parent, key)
        self._calculate = calculate
        self._pass_through = pass_through
        self.value_type = value_type
        self._cache: CachedValue = UNCOMPUTED

    @property
    def content_base_type(self) -> type:
        return self.value_type

    @property
    def is_read_only(self) -> bool:
        return self._pass_through is None or _is_write_protected(self.parent)

    @is_read_only.setter
    def is_read_only(self, value: bool) -> None:
        raise CalculatedFieldError(f"Read-only state of calculated field '{self.key}' is derived, not settable")

    @property
    def value(self) -> Any:
        if isinstance(self._cache, Computed):
            return self._cache.value
        value = self._calculate()
        if value is not None or _is_durable(self.parent):
            self._cache = Computed(value)
        else:
            logger.debug(f"Calculated field '{self.key}' yielded None, not caching")
        return value

    @value.setter
    def value(self, value: Any) -> None:
        if self._pass_through is None:
            raise CalculatedFieldError(
                f"Setting values is not allowed for calculated field '{self.key}' without a pass-through function"
            )
        self._pass_through(value)
        self._cache = Computed(value)

    def invalidate(self) -> None:
        """Drop the cached value so the next read recomputes it."""
        self._cache = UNCOMPUTED

    @property
    def value_as_string(self) -> str:
        return _to_normalized_string(self.value)

    @value_as_string.setter
    def value_as_string(self, text: str) -> None:
        if not self.try_set_value_as_string(text):
            raise ValueError(f"Value '{text}' cannot be set to calculated field '{self.key}'")

    def try_set_value_as_string(self, text: Optional[str]) -> bool:
        if self.is_read_only:
            return False
        is_parsed, value = self._parse_typed(text)
        if is_parsed:
            self.value = value
        return is_parsed

    def _parse_typed(self, text: Optional[str]):
        if self.value_type is str:
            return True, text
        if not text:
            return True, None
        if self.value_type is bool:
            lowered = text.strip().lower()
            if lowered in ('true', 'false'):
                return True, lowered == 'true'
            return False, None
        if self.value_type is int:
            value = numbers.parse_int(text)
        elif self.value_type is Decimal:
            value = numbers.parse_decimal(text)
        elif self.value_type is datetime:
            value = date_time.parse_iso(text)
        else:
            return False, None
        return value is not None, value

    def new_item_as_object(self) -> Any:
        return self.value_type()


class PresentableFieldForCalculatedValueCollection(PresentableFieldForCollection):
    """Collection field whose values come from a function.

    Args:
        parent: Owning presentable object
        key: Field name
        calculate: Zero-argument function returning an iterable of values
            (None counts as empty)
        pass_through: Optional function receiving the complete list of values
            after every mutation
    """

    def __init__(self, parent: Optional['PresentableObject'], key: str,
                 calculate: Callable[[], Optional[Iterable[Any]]],
                 pass_through: Optional[Callable[[List[Any]], None]] = None,
                 item_factory: Optional[Callable[[], Any]] = None):
        super().__init__(parent, key)
        self._calculate = calculate
        self._pass_through = pass_through
        self.item_factory = item_factory
        self._cache: CachedValue = UNCOMPUTED

    @property
    def is_read_only(self) -> bool:
        return self._pass_through is None or _is_write_protected(self.parent)

    @is_read_only.setter
    def is_read_only(self, value: bool) -> None:
        raise CalculatedFieldError(f"Read-only state of calculated field '{self.key}' is derived, not settable")

    def _read_values(self) -> List[Any]:
        if not isinstance(self._cache, Computed):
            calculated = self._calculate()
            self._cache = Computed(list(calculated) if calculated is not None else [])
        # mutations work on a copy so a rejected write leaves the cache intact
        return list(self._cache.value)

    def _write_values(self, values: List[Any]) -> None:
        if self._pass_through is None:
            raise CalculatedFieldError(
                f"Setting values is not allowed for calculated field '{self.key}' without a pass-through function"
            )
        self._pass_through(list(values))
        self._cache = Computed(list(values))

    def invalidate(self) -> None:
        self._cache = UNCOMPUTED

    def get_values_as_string(self) -> List[str]:
        return [_to_normalized_string(value) for value in self._read_values()]

    def try_add_string(self, text: Optional[str]) -> bool:
        if self.is_read_only:
            return False
        self.add(text)
        return True

    def new_item_as_object(self) -> Any:
        if self.item_factory is not None:
            return self.item_factory()
        return None


class PresentableFieldForCalculatedUser(PresentableFieldForCalculatedValue):
    """Calculated field holding a User, rendered as its user name.

    Attributes:
        user_directory: Resolves user names written as strings
    """

    def __init__(self, parent: Optional['PresentableObject'], key: str,
                 calculate: Callable[[], Optional[User]],
                 pass_through: Optional[Callable[[Optional[User]], None]] = None,
                 user_directory: Any = None):
        super().__init__(parent, key, calculate, pass_through, value_type=User)
        self.user_directory = user_directory

    @property
    def value_as_string(self) -> str:
        user = self.value
        return '' if user is None else user.user_name

    @value_as_string.setter
    def value_as_string(self, text: str) -> None:
        if not self.try_set_value_as_string(text):
            raise ValueError(f"Value '{text}' cannot be set to calculated field '{self.key}'")

    def try_set_value_as_string(self, text: Optional[str]) -> bool:
        if self.is_read_only:
            return False
        if not text:
            self.value = None
            return True
        user = find_user_for(self, text)
        if user is None:
            return False
        self.value = user
        return True

    def new_item_as_object(self) -> Any:
        return None


class PresentableFieldForCalculatedUserCollection(PresentableFieldForCalculatedValueCollection):
    """Calculated collection of users.

    Attributes:
        user_directory: Resolves user names added as strings
    """

    def __init__(self, parent: Optional['PresentableObject'], key: str,
                 calculate: Callable[[], Optional[Iterable[User]]],
                 pass_through: Optional[Callable[[List[User]], None]] = None,
                 user_directory: Any = None):
        super().__init__(parent, key, calculate, pass_through)
        self.user_directory = user_directory

    @property
    def content_base_type(self) -> type:
        return User

    def get_values_as_string(self) -> List[str]:
        return ['' if user is None else user.user_name for user in self._read_values()]

    def sort_by_field(self, field_key: str) -> None:
        """Sort users by the User attribute named field_key."""
        self.sort(comparison=UserValueComparer(field_key))

    def try_add_string(self, text: Optional[str]) -> bool:
        if self.is_read_only:
            return False
        user = find_user_for(self, text) if text else None
        if text and user is None:
            return False
        self.add(user)
        return True
