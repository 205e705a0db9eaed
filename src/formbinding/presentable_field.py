"""
Presentable fields: runtime handles to the values of one presentable object.

Element fields hold a single typed value, collection fields an ordered list of
typed values. Both expose their values natively, as plain objects and as
strings. Strings use invariant notation so they round-trip: parsing '1.50'
into a decimal field and reading value_as_string back yields '1.50'.

Conversion between values and strings is defined once per element type by the
format_value()/parse_value() static methods; collection fields reuse the
conversion of their element type through element_field_type.
"""

import functools
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple, TYPE_CHECKING

from formbinding import date_time, numbers
from formbinding.errors import PresentationError
from formbinding.option_data import FilterScope, User, UserValueComparer
from formbinding.text import remove_tags

if TYPE_CHECKING:
    from formbinding.presentable_object import PresentableObject

logger = logging.getLogger(__name__)


class PresentableField:
    """Common base of element and collection fields.

    Attributes:
        parent: The presentable object owning this field
        key: Name of the field, unique among the parent's direct fields
        is_for_single_element: True for element fields, False for collections
    """

    is_for_single_element: bool = True
    content_base_type: type = object

    def __init__(self, parent: Optional['PresentableObject'], key: str, is_read_only: bool = False):
        self.parent = parent
        self.key = key
        self._is_read_only = is_read_only

    @property
    def is_read_only(self) -> bool:
        return self._is_read_only

    @is_read_only.setter
    def is_read_only(self, value: bool) -> None:
        self._is_read_only = value

    def get_versioned_field(self, moment: Optional[datetime]) -> Optional['PresentableField']:
        """Historical snapshot of this field; versioning is not tracked here."""
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key!r})"


# ---------------------------------------------------------------------------
# Element fields
# ---------------------------------------------------------------------------

class PresentableFieldForElement(PresentableField):
    """Field holding one value."""

    is_for_single_element = True

    def __init__(self, parent: Optional['PresentableObject'], key: str, value: Any = None,
                 is_read_only: bool = False):
        super().__init__(parent, key, is_read_only)
        self._value = value

    @staticmethod
    def format_value(value: Any) -> str:
        return '' if value is None else str(value)

    @staticmethod
    def parse_value(text: Optional[str]) -> Tuple[bool, Any]:
        return True, text

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        self._value = value

    @property
    def value_as_object(self) -> Any:
        return self.value

    @value_as_object.setter
    def value_as_object(self, value: Any) -> None:
        self.value = value

    @property
    def value_as_string(self) -> str:
        return self.format_value(self.value)

    @value_as_string.setter
    def value_as_string(self, text: str) -> None:
        if not self.try_set_value_as_string(text):
            raise ValueError(f"Value '{text}' cannot be set to presentable field '{self.key}'")

    def try_set_value_as_string(self, text: Optional[str]) -> bool:
        """Parse text and store it as value.

        Returns:
            True if text could be parsed, False otherwise (value is unchanged)
        """
        is_parsed, value = self.parse_value(text)
        if is_parsed:
            self.value = value
        return is_parsed

    @property
    def sortable_value(self) -> str:
        return self.value_as_string

    def get_value_as_plain_text(self) -> str:
        return self.value_as_string

    def new_item_as_object(self) -> Any:
        """Create a fresh value of this field's content type."""
        return self.content_base_type()


class PresentableFieldForString(PresentableFieldForElement):
    content_base_type = str

    def get_value_as_plain_text(self) -> str:
        return remove_tags(self.value_as_string)


class PresentableFieldForInt(PresentableFieldForElement):
    """Nullable integer; an empty string clears the value."""

    content_base_type = int

    @staticmethod
    def format_value(value: Any) -> str:
        return '' if value is None else str(int(value))

    @staticmethod
    def parse_value(text: Optional[str]) -> Tuple[bool, Any]:
        if not text:
            return True, None
        value = numbers.parse_int(text)
        return value is not None, value

    @property
    def sortable_value(self) -> str:
        return '' if self.value is None else f"{self.value:+021d}"


class PresentableFieldForDecimal(PresentableFieldForElement):
    """Nullable decimal; an empty string clears the value."""

    content_base_type = Decimal

    @staticmethod
    def format_value(value: Any) -> str:
        return '' if value is None else numbers.to_invariant_string(Decimal(value))

    @staticmethod
    def parse_value(text: Optional[str]) -> Tuple[bool, Any]:
        if not text:
            return True, None
        value = numbers.parse_decimal(text)
        return value is not None, value


class PresentableFieldForBool(PresentableFieldForElement):
    content_base_type = bool

    def __init__(self, parent: Optional['PresentableObject'], key: str, value: bool = False,
                 is_read_only: bool = False):
        super().__init__(parent, key, value, is_read_only)

    @staticmethod
    def format_value(value: Any) -> str:
        return 'true' if value else 'false'

    @staticmethod
    def parse_value(text: Optional[str]) -> Tuple[bool, Any]:
        if not text:
            return True, False
        lowered = text.strip().lower()
        if lowered in ('true', '1'):
            return True, True
        if lowered in ('false', '0'):
            return True, False
        return False, None


class PresentableFieldForDateTime(PresentableFieldForElement):
    """Nullable date/time stored and parsed as ISO 8601."""

    content_base_type = datetime

    @staticmethod
    def format_value(value: Any) -> str:
        return '' if value is None else date_time.to_iso(value)

    @staticmethod
    def parse_value(text: Optional[str]) -> Tuple[bool, Any]:
        if not text:
            return True, None
        value = date_time.parse_iso(text)
        return value is not None, value

    def new_item_as_object(self) -> Any:
        return datetime.min


class PresentableFieldForObject(PresentableFieldForElement):
    """Field holding an arbitrary object; strings cannot be parsed into it."""

    @staticmethod
    def parse_value(text: Optional[str]) -> Tuple[bool, Any]:
        if not text:
            return True, None
        return False, None

    def new_item_as_object(self) -> Any:
        return None


class PresentableFieldForPresentableObject(PresentableFieldForElement):
    """Field holding a nested presentable object.

    Key chains resolve through fields of this type into the held object.

    Args:
        item_factory: Creates a new nested object for new_item_as_object()
    """

    def __init__(self, parent: Optional['PresentableObject'], key: str, value: Any = None,
                 is_read_only: bool = False, item_factory: Optional[Callable[[], Any]] = None):
        super().__init__(parent, key, value, is_read_only)
        self.item_factory = item_factory

    @staticmethod
    def format_value(value: Any) -> str:
        return '' if value is None else str(getattr(value, 'id', value))

    @staticmethod
    def parse_value(text: Optional[str]) -> Tuple[bool, Any]:
        if not text:
            return True, None
        return False, None

    def new_item_as_object(self) -> Any:
        if self.item_factory is not None:
            return self.item_factory()
        from formbinding.presentable_object import PresentableObject
        return PresentableObject()


class PresentableFieldForNumberWithUnit(PresentableFieldForElement):
    """Nullable number with unit; strings read '<invariant number> <unit>'.

    String writes also accept a number without a unit.
    """

    content_base_type = numbers.NumberWithUnit

    @staticmethod
    def format_value(value: Any) -> str:
        return '' if value is None else str(value)

    @staticmethod
    def parse_value(text: Optional[str]) -> Tuple[bool, Any]:
        if not text or not text.strip():
            return True, None
        number_text, unit = numbers.NumberWithUnit.split(text)
        number = numbers.parse_decimal(number_text)
        if number is None:
            return False, None
        return True, numbers.NumberWithUnit(number, unit or None)


def find_user_for(presentable_field: PresentableField, user_name: str) -> Optional[User]:
    """Resolve a vague user name through the user directory of a field."""
    if presentable_field.user_directory is None:
        message = f"User directory of presentable field '{presentable_field.key}' is not set."
        logger.error(message)
        raise PresentationError(message)
    return presentable_field.user_directory.find_one_by_vague_term(user_name, FilterScope.USER_NAME)


class PresentableFieldForUser(PresentableFieldForElement):
    """Field holding a User, rendered as its user name.

    Attributes:
        user_directory: Resolves user names written as strings
    """

    content_base_type = User

    def __init__(self, parent: Optional['PresentableObject'], key: str, value: Optional[User] = None,
                 is_read_only: bool = False, user_directory: Any = None):
        super().__init__(parent, key, value, is_read_only)
        self.user_directory = user_directory

    @staticmethod
    def format_value(value: Any) -> str:
        return '' if value is None else value.user_name

    def try_set_value_as_string(self, text: Optional[str]) -> bool:
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


# ---------------------------------------------------------------------------
# Collection fields
# ---------------------------------------------------------------------------

class PresentableFieldForCollection(PresentableField):
    """Field holding an ordered, mutable list of values.

    Mutations read the current values through _read_values() and store them
    back through _write_values(), so variants backed by something other than
    a plain list only override those two hooks.
    """

    is_for_single_element = False
    element_field_type = PresentableFieldForElement

    def __init__(self, parent: Optional['PresentableObject'], key: str,
                 values: Optional[Iterable[Any]] = None, is_read_only: bool = False):
        super().__init__(parent, key, is_read_only)
        self._values: List[Any] = list(values) if values is not None else []

    @property
    def content_base_type(self) -> type:
        return self.element_field_type.content_base_type

    def _read_values(self) -> List[Any]:
        return self._values

    def _write_values(self, values: List[Any]) -> None:
        self._values = values

    # Sequence protocol

    def __len__(self) -> int:
        return len(self._read_values())

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._read_values()))

    def __getitem__(self, index: int) -> Any:
        return self._read_values()[index]

    def __setitem__(self, index: int, value: Any) -> None:
        values = self._read_values()
        values[index] = value
        self._write_values(values)

    def __contains__(self, item: Any) -> bool:
        return self.contains(item)

    @property
    def count(self) -> int:
        return len(self)

    # Mutation

    def add(self, item: Any) -> None:
        values = self._read_values()
        values.append(item)
        self._write_values(values)

    def add_object(self, item: Any) -> None:
        self.add(item)

    def add_range(self, items: Iterable[Any]) -> None:
        values = self._read_values()
        values.extend(items)
        self._write_values(values)

    def add_string(self, text: str) -> None:
        if not self.try_add_string(text):
            raise ValueError(f"Value '{text}' cannot be added to presentable field '{self.key}'")

    def try_add_string(self, text: Optional[str]) -> bool:
        """Parse text as one element and append it.

        Returns:
            True if text could be parsed and was added, False otherwise
        """
        is_parsed, value = self.element_field_type.parse_value(text)
        if is_parsed:
            self.add(value)
        return is_parsed

    def clear(self) -> None:
        values = self._read_values()
        values.clear()
        self._write_values(values)

    def contains(self, item: Any) -> bool:
        return item in self._read_values()

    def remove(self, item: Any) -> bool:
        values = self._read_values()
        if item not in values:
            return False
        values.remove(item)
        self._write_values(values)
        return True

    def swap(self, first_index: int, second_index: int) -> None:
        values = self._read_values()
        values[first_index], values[second_index] = values[second_index], values[first_index]
        self._write_values(values)

    def sort(self, comparison: Optional[Callable[[Any, Any], int]] = None,
             key: Optional[Callable[[Any], Any]] = None) -> None:
        """Sort values in place.

        Args:
            comparison: Optional cmp-style function returning <0, 0 or >0
            key: Optional key function; ignored when comparison is given
        """
        values = self._read_values()
        if comparison is not None:
            values.sort(key=functools.cmp_to_key(comparison))
        else:
            values.sort(key=key)
        self._write_values(values)

    def sort_objects(self, comparison: Callable[[Any, Any], int]) -> None:
        self.sort(comparison=comparison)

    # Views

    def get_values_as_object(self) -> List[Any]:
        return list(self._read_values())

    def get_values_as_string(self) -> List[str]:
        return [self.element_field_type.format_value(value) for value in self._read_values()]

    def get_values_as_plain_text(self) -> List[str]:
        return self.get_values_as_string()

    def get_sortable_values(self) -> List[str]:
        return self.get_values_as_string()

    def new_item_as_object(self) -> Any:
        return self.element_field_type.content_base_type()


class PresentableFieldForStringCollection(PresentableFieldForCollection):
    element_field_type = PresentableFieldForString

    def get_values_as_plain_text(self) -> List[str]:
        return [remove_tags(value) for value in self.get_values_as_string()]


class PresentableFieldForIntCollection(PresentableFieldForCollection):
    element_field_type = PresentableFieldForInt


class PresentableFieldForDecimalCollection(PresentableFieldForCollection):
    element_field_type = PresentableFieldForDecimal


class PresentableFieldForDateTimeCollection(PresentableFieldForCollection):
    element_field_type = PresentableFieldForDateTime


class PresentableFieldForObjectCollection(PresentableFieldForCollection):
    element_field_type = PresentableFieldForObject

    def new_item_as_object(self) -> Any:
        return None


class PresentableFieldForPresentableObjectCollection(PresentableFieldForCollection):
    """Collection of nested presentable objects, e.g. the rows of a table pane."""

    element_field_type = PresentableFieldForPresentableObject

    def __init__(self, parent: Optional['PresentableObject'], key: str,
                 values: Optional[Iterable[Any]] = None, is_read_only: bool = False,
                 item_factory: Optional[Callable[[], Any]] = None):
        super().__init__(parent, key, values, is_read_only)
        self.item_factory = item_factory

    def new_item_as_object(self) -> Any:
        if self.item_factory is not None:
            return self.item_factory()
        from formbinding.presentable_object import PresentableObject
        return PresentableObject()


class PresentableFieldForUserCollection(PresentableFieldForCollection):
    """Collection of users; users are matched by id on removal.

    Attributes:
        user_directory: Resolves user names added as strings
    """

    element_field_type = PresentableFieldForUser

    def __init__(self, parent: Optional['PresentableObject'], key: str,
                 values: Optional[Iterable[Any]] = None, is_read_only: bool = False,
                 user_directory: Any = None):
        super().__init__(parent, key, values, is_read_only)
        self.user_directory = user_directory

    def remove(self, item: Any) -> bool:
        if item is None:
            return False
        values = self._read_values()
        remaining = [user for user in values if user is None or user.id != item.id]
        if len(remaining) == len(values):
            return False
        self._write_values(remaining)
        return True

    def sort_by_field(self, field_key: str) -> None:
        """Sort users by the User attribute named field_key."""
        self.sort(comparison=UserValueComparer(field_key))

    def try_add_string(self, text: Optional[str]) -> bool:
        user = find_user_for(self, text) if text else None
        if text and user is None:
            return False
        self.add(user)
        return True

    def new_item_as_object(self) -> Any:
        return None
