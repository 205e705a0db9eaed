"""
Lookup providers resolve keys against large or external value sets.

Unlike option providers, lookups do not enumerate all values up front: they
search by vague term while a user types and convert between a typed key and
its display value on demand. find_value_for_key() and find_key_for_value()
are implemented per key type; contains_key() and the vague-term helpers are
layered on top.
"""

import functools
import logging
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Tuple, TypeVar

from formbinding.errors import PresentationError
from formbinding.option_data import FilterCriteria, FilterScope, OptionDataProvider

logger = logging.getLogger(__name__)

K = TypeVar('K')


def _compare(a: str, b: str) -> int:
    return (a > b) - (a < b)


class LookupProvider:
    """Key-type independent part of lookup providers."""

    def find_values_by_vague_term(self, vague_term: str, presentable_object: Any,
                                  option_data: Optional[OptionDataProvider]) -> Iterable[str]:
        """Enumerate display values matching a search term."""
        return ()

    def find_unique_value_by_vague_term(self, vague_term: Optional[str], presentable_object: Any,
                                        option_data: Optional[OptionDataProvider]) -> Optional[str]:
        """Find the one display value a vague term stands for.

        If the term matches several values, the value equal to the term wins;
        if there is none, the term is ambiguous and None is returned.
        """
        if not vague_term:
            return None
        values = list(self.find_values_by_vague_term(vague_term, presentable_object, option_data))
        if len(values) == 1:
            return values[0]
        if not values:
            return None
        for value in values:
            if value == vague_term:
                return value
        logger.debug(f"Vague term '{vague_term}' is ambiguous among {len(values)} values")
        return None

    @staticmethod
    def get_comparison_for(vague_term: str) -> Callable[[str, str], int]:
        """cmp-style comparison ranking values that start with vague_term first."""
        def compare(a: str, b: str) -> int:
            a_starts = a.startswith(vague_term)
            b_starts = b.startswith(vague_term)
            if a_starts and not b_starts:
                return -1
            if b_starts and not a_starts:
                return 1
            return _compare(a, b)
        return compare

    @classmethod
    def sort_values_for(cls, vague_term: str, values: Iterable[str]) -> List[str]:
        return sorted(values, key=functools.cmp_to_key(cls.get_comparison_for(vague_term)))

    @staticmethod
    def try_split_value_with_parenthesis(value: Optional[str]) -> Tuple[bool, Optional[str], Optional[str]]:
        """Split 'Ada Lovelace (ada)' into ('Ada Lovelace', 'ada').

        Returns:
            (success, text left of the parenthesis, text in the parenthesis)
        """
        if not value or not value.endswith(')'):
            return False, None, None
        left_parenthesis = value.rfind('(')
        if left_parenthesis < 1:
            return False, None, None
        left = value[:left_parenthesis].strip()
        inner = value[left_parenthesis + 1:-1].strip()
        if not left or not inner:
            return False, None, None
        return True, left, inner


class TypedLookupProvider(LookupProvider, Generic[K]):
    """Lookup provider for keys of type K."""

    def find_key_for_value(self, value: Optional[str], presentable_object: Any,
                           option_data: Optional[OptionDataProvider]) -> Optional[K]:
        raise NotImplementedError(f"{type(self).__name__} must implement find_key_for_value()")

    def find_value_for_key(self, key: Optional[K], presentable_object: Any,
                           option_data: Optional[OptionDataProvider]) -> Optional[str]:
        raise NotImplementedError(f"{type(self).__name__} must implement find_value_for_key()")

    def contains_key(self, key: Optional[K], presentable_object: Any,
                     option_data: Optional[OptionDataProvider]) -> bool:
        """Check whether a key resolves to a display value.

        Raises:
            PresentationError: If the provider resolves the key to an empty string
        """
        value = self.find_value_for_key(key, presentable_object, option_data)
        if value == '':
            raise PresentationError(f"Empty string is not a valid value for lookup provider {type(self).__name__}.")
        return value is not None


class StringLookupProvider(TypedLookupProvider[str]):
    """Lookup provider with string keys."""


class StaticStringLookupProvider(StringLookupProvider):
    """String lookup over a fixed mapping of key to display value."""

    def __init__(self, values: Any = ()):
        if isinstance(values, dict):
            values = values.items()
        self.values: Dict[str, str] = {key: value for key, value in values}

    def find_values_by_vague_term(self, vague_term: str, presentable_object: Any,
                                  option_data: Optional[OptionDataProvider]) -> List[str]:
        term = (vague_term or '').lower()
        matches = [value for value in self.values.values() if term in value.lower()]
        return self.sort_values_for(vague_term, matches)

    def find_key_for_value(self, value: Optional[str], presentable_object: Any,
                           option_data: Optional[OptionDataProvider]) -> Optional[str]:
        for key, candidate in self.values.items():
            if candidate == value:
                return key
        return None

    def find_value_for_key(self, key: Optional[str], presentable_object: Any,
                           option_data: Optional[OptionDataProvider]) -> Optional[str]:
        if not key:
            return None
        return self.values.get(key)


class PresentableObjectLookupProvider(TypedLookupProvider[Any]):
    """Lookup over presentable objects displayed through one of their fields.

    Args:
        objects: The presentable objects to choose from
        display_key: Key chain of the field used as display value
    """

    def __init__(self, objects: Iterable[Any] = (), display_key: str = 'name'):
        self.objects: List[Any] = list(objects)
        self.display_key = display_key

    def _display_value_of(self, presentable_object: Any) -> Optional[str]:
        field = presentable_object.find_presentable_field(self.display_key)
        if field is None:
            return None
        return field.value_as_string

    def find_values_by_vague_term(self, vague_term: str, presentable_object: Any,
                                  option_data: Optional[OptionDataProvider]) -> List[str]:
        term = (vague_term or '').lower()
        values = [self._display_value_of(candidate) for candidate in self.objects]
        matches = [value for value in values if value and term in value.lower()]
        return self.sort_values_for(vague_term, matches)

    def find_key_for_value(self, value: Optional[str], presentable_object: Any,
                           option_data: Optional[OptionDataProvider]) -> Optional[Any]:
        if not value:
            return None
        for candidate in self.objects:
            if self._display_value_of(candidate) == value:
                return candidate
        return None

    def find_value_for_key(self, key: Optional[Any], presentable_object: Any,
                           option_data: Optional[OptionDataProvider]) -> Optional[str]:
        if key is None:
            return None
        for candidate in self.objects:
            if candidate is key or candidate.id == getattr(key, 'id', key):
                return self._display_value_of(candidate)
        return None


class PersonLookupProvider(StringLookupProvider):
    """Lookup of people by user name, displayed as 'Display Name (user_name)'."""

    @staticmethod
    def _display_value(user: Any) -> str:
        return f"{user.display_name} ({user.user_name})"

    @staticmethod
    def _directory(option_data: Optional[OptionDataProvider]):
        if option_data is None or option_data.user_directory is None:
            raise PresentationError("Person lookups require an option data provider with a user directory.")
        return option_data.user_directory

    def find_values_by_vague_term(self, vague_term: str, presentable_object: Any,
                                  option_data: Optional[OptionDataProvider]) -> List[str]:
        users = self._directory(option_data).find_by_vague_term(vague_term, FilterScope.USER_NAME_AND_DISPLAY_NAME)
        return [self._display_value(user) for user in users if user is not None]

    def find_key_for_value(self, value: Optional[str], presentable_object: Any,
                           option_data: Optional[OptionDataProvider]) -> Optional[str]:
        is_split, _, user_name = self.try_split_value_with_parenthesis(value)
        if not is_split:
            return None
        user = self._directory(option_data).find_one(FilterCriteria.equals('user_name', user_name), ())
        return user.user_name if user is not None else None

    def find_value_for_key(self, key: Optional[str], presentable_object: Any,
                           option_data: Optional[OptionDataProvider]) -> Optional[str]:
        if not key:
            return None
        user = self._directory(option_data).find_one(FilterCriteria.equals('user_name', key), ())
        if user is None:
            return None
        return self._display_value(user)
