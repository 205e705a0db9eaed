"""
Data-access context handed to option and lookup providers.

The form engine never inspects an OptionDataProvider; it only passes it
through to providers, which may use its user directory to resolve people.
InMemoryUserDirectory is a complete directory implementation for embedding
and tests.
"""

import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class User:
    """A person known to a user directory."""
    user_name: str
    display_name: str
    id: Optional[str] = None
    email: Optional[str] = None


class UserValueComparer:
    """cmp-style comparison of users by one attribute, None sorting first.

    Args:
        field_key: Name of the User attribute to compare, e.g. 'display_name'
    """

    def __init__(self, field_key: str):
        if field_key not in {user_field.name for user_field in fields(User)}:
            raise ValueError(f"Comparing users by field with key '{field_key}' is not supported.")
        self.field_key = field_key

    def __call__(self, x: Optional[User], y: Optional[User]) -> int:
        if x is None or y is None:
            return (x is not None) - (y is not None)
        x_value = getattr(x, self.field_key) or ''
        y_value = getattr(y, self.field_key) or ''
        return (x_value > y_value) - (x_value < y_value)


class RelationalOperator(Enum):
    IS_EQUAL_TO = "is_equal_to"
    IS_NOT_EQUAL_TO = "is_not_equal_to"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"


class FilterScope(Enum):
    """Which user attributes a vague term is matched against."""
    USER_NAME = "user_name"
    DISPLAY_NAME = "display_name"
    USER_NAME_AND_DISPLAY_NAME = "user_name_and_display_name"


@dataclass(frozen=True)
class FilterCriterion:
    field_name: str
    operator: RelationalOperator
    value: Any

    def matches(self, item: Any) -> bool:
        actual = getattr(item, self.field_name, None)
        if self.operator is RelationalOperator.IS_EQUAL_TO:
            return actual == self.value
        if self.operator is RelationalOperator.IS_NOT_EQUAL_TO:
            return actual != self.value
        if actual is None:
            return False
        if self.operator is RelationalOperator.CONTAINS:
            return str(self.value).lower() in str(actual).lower()
        return str(actual).lower().startswith(str(self.value).lower())


@dataclass(frozen=True)
class FilterCriteria:
    """Conjunction of filter criteria; empty criteria match everything."""
    criteria: Tuple[FilterCriterion, ...] = ()

    @classmethod
    def equals(cls, field_name: str, value: Any) -> 'FilterCriteria':
        return cls((FilterCriterion(field_name, RelationalOperator.IS_EQUAL_TO, value),))

    def matches(self, item: Any) -> bool:
        return all(criterion.matches(item) for criterion in self.criteria)


@dataclass(frozen=True)
class SortCriterion:
    field_name: str
    descending: bool = False


def _sorted(items: List[Any], sort_criteria: Iterable[SortCriterion]) -> List[Any]:
    # stable sorts applied from the least to the most significant criterion
    for criterion in reversed(list(sort_criteria)):
        items = sorted(items, key=lambda item: str(getattr(item, criterion.field_name, '') or ''),
                       reverse=criterion.descending)
    return items


class UserDirectory:
    """Lookup of users by criteria or by vague search terms."""

    def find(self, filter_criteria: FilterCriteria, sort_criteria: Iterable[SortCriterion] = ()) -> List[User]:
        raise NotImplementedError(f"{type(self).__name__} must implement find()")

    def find_one(self, filter_criteria: FilterCriteria, sort_criteria: Iterable[SortCriterion] = ()) -> Optional[User]:
        matches = self.find(filter_criteria, sort_criteria)
        return matches[0] if matches else None

    def find_by_vague_term(self, vague_term: str,
                           filter_scope: FilterScope = FilterScope.USER_NAME_AND_DISPLAY_NAME) -> List[User]:
        raise NotImplementedError(f"{type(self).__name__} must implement find_by_vague_term()")

    def find_one_by_vague_term(self, vague_term: str,
                               filter_scope: FilterScope = FilterScope.USER_NAME_AND_DISPLAY_NAME) -> Optional[User]:
        """Find the single user matching a vague term.

        If several users match, the one whose user name or display name equals
        the term exactly wins; otherwise the term is ambiguous and None is returned.
        """
        matches = self.find_by_vague_term(vague_term, filter_scope)
        if len(matches) == 1:
            return matches[0]
        for user in matches:
            if vague_term in (user.user_name, user.display_name):
                return user
        if matches:
            logger.debug(f"Vague term '{vague_term}' matches {len(matches)} users")
        return None


class InMemoryUserDirectory(UserDirectory):
    """User directory backed by a list."""

    def __init__(self, users: Optional[Iterable[User]] = None):
        self.users: List[User] = list(users or [])

    def add(self, user: User) -> None:
        self.users.append(user)

    def find(self, filter_criteria: FilterCriteria, sort_criteria: Iterable[SortCriterion] = ()) -> List[User]:
        matches = [user for user in self.users if filter_criteria.matches(user)]
        return _sorted(matches, sort_criteria)

    def find_by_vague_term(self, vague_term: str,
                           filter_scope: FilterScope = FilterScope.USER_NAME_AND_DISPLAY_NAME) -> List[User]:
        if not vague_term:
            return []
        term = vague_term.lower()
        matches = []
        for user in self.users:
            candidates = []
            if filter_scope is not FilterScope.DISPLAY_NAME:
                candidates.append(user.user_name)
            if filter_scope is not FilterScope.USER_NAME:
                candidates.append(user.display_name)
            if any(term in (candidate or '').lower() for candidate in candidates):
                matches.append(user)
        return _sorted(matches, [SortCriterion('display_name')])


@dataclass
class OptionDataProvider:
    """Opaque context passed through to option and lookup providers."""
    user_directory: Optional[UserDirectory] = None
    extras: dict = field(default_factory=dict)


@dataclass(frozen=True)
class UploadedFile:
    """An uploaded file as seen by file fields.

    Width and height are set for images whose dimensions the receiving
    layer could determine, and stay None otherwise.
    """
    file_name: str
    content_type: str
    content_length: int
    width: Optional[int] = None
    height: Optional[int] = None

    @property
    def has_dimensions(self) -> bool:
        return self.width is not None and self.height is not None
