"""
Option providers resolve option keys to display values.

A provider only has to enumerate its options through get_options(); every
other query is derived from that enumeration. find_read_only_value_for_key()
additionally goes through the _find_read_only_value_for_key() hook so that a
provider can resolve keys missing from its current options, e.g. people who
were removed from a selection list but are still referenced by old values.

All queries take the parent object of the field, the topmost bound object and
the option data context, since options may depend on any of them.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from formbinding.option_data import FilterCriteria, OptionDataProvider, User

logger = logging.getLogger(__name__)

Option = Tuple[str, str]


class OptionProvider:
    """Base option provider without any options."""

    def get_options(self, parent: Any, topmost: Any, option_data: Optional[OptionDataProvider]) -> Iterable[Option]:
        """Enumerate (key, display value) pairs."""
        return ()

    def _options(self, parent: Any, topmost: Any, option_data: Optional[OptionDataProvider]) -> List[Option]:
        options = self.get_options(parent, topmost, option_data)
        if options is None:
            logger.warning(f"{type(self).__name__}.get_options() returned None, treating as no options")
            return []
        return list(options)

    def contains_key(self, key: Optional[str], parent: Any, topmost: Any,
                     option_data: Optional[OptionDataProvider]) -> bool:
        return self.find_value_for_key(key, parent, topmost, option_data) is not None

    def count_key(self, key: Optional[str], parent: Any, topmost: Any,
                  option_data: Optional[OptionDataProvider]) -> int:
        """Count the distinct display values offered for a key.

        Options repeating both key and value count once; only a key offered
        with different values counts as ambiguous.
        """
        values: List[str] = []
        for option_key, option_value in self._options(parent, topmost, option_data):
            if option_key == key and option_value not in values:
                values.append(option_value)
        return len(values)

    def find_key_for_value(self, value: Optional[str], parent: Any, topmost: Any,
                           option_data: Optional[OptionDataProvider]) -> Optional[str]:
        for option_key, option_value in self._options(parent, topmost, option_data):
            if option_value == value:
                return option_key
        return None

    def find_value_for_key(self, key: Optional[str], parent: Any, topmost: Any,
                           option_data: Optional[OptionDataProvider]) -> Optional[str]:
        if not key:
            return None
        for option_key, option_value in self._options(parent, topmost, option_data):
            if option_key == key:
                return option_value
        return None

    def find_read_only_options_for_keys(self, keys: Iterable[str], parent: Any, topmost: Any,
                                        option_data: Optional[OptionDataProvider]) -> Iterator[Option]:
        """Yield (key, read-only value) for every non-empty key that resolves."""
        options = self._options(parent, topmost, option_data)
        for key in keys:
            if not key:
                continue
            value = self._find_read_only_value_for_key(key, options, option_data)
            if value:
                yield key, value

    def find_read_only_value_for_key(self, key: Optional[str], parent: Any, topmost: Any,
                                     option_data: Optional[OptionDataProvider]) -> Optional[str]:
        for _, value in self.find_read_only_options_for_keys([key], parent, topmost, option_data):
            return value
        return None

    def _find_read_only_value_for_key(self, key: str, options: Sequence[Option],
                                      option_data: Optional[OptionDataProvider]) -> Optional[str]:
        for option_key, option_value in options:
            if option_key == key:
                return option_value
        return None

    def get_display_value_for_null(self) -> str:
        return ''

    def get_icon_urls(self, presentable_object: Any) -> Iterable[Option]:
        """Enumerate (key, icon URL) pairs."""
        return ()

    def get_icon_url_for(self, key: str, presentable_object: Any) -> Optional[str]:
        for icon_key, icon_url in self.get_icon_urls(presentable_object):
            if icon_key == key:
                return icon_url
        return None

    def get_option_dictionary(self, parent: Any, topmost: Any,
                              option_data: Optional[OptionDataProvider]) -> Dict[str, str]:
        """Materialize the options; later duplicates of a key win."""
        return {key: value for key, value in self._options(parent, topmost, option_data)}

    def has_options(self, parent: Any, topmost: Any, option_data: Optional[OptionDataProvider]) -> bool:
        options = self.get_options(parent, topmost, option_data)
        return options is not None and any(True for _ in options)


class StaticOptionProvider(OptionProvider):
    """Option provider over a fixed, ordered list of options.

    Args:
        options: (key, value) pairs or a mapping of key to value
        icon_urls: Optional mapping of key to icon URL
    """

    def __init__(self, options: Any = (), icon_urls: Optional[Dict[str, str]] = None):
        if isinstance(options, dict):
            options = options.items()
        self.options: List[Option] = [(key, value) for key, value in options]
        self.icon_urls: Dict[str, str] = dict(icon_urls or {})

    def get_options(self, parent: Any, topmost: Any, option_data: Optional[OptionDataProvider]) -> Iterable[Option]:
        return list(self.options)

    def get_icon_urls(self, presentable_object: Any) -> Iterable[Option]:
        return list(self.icon_urls.items())


class GroupedOptionProvider(OptionProvider):
    """Concatenation of the options and icons of several providers."""

    def __init__(self, option_providers: Optional[Iterable[Optional[OptionProvider]]] = None):
        self.option_providers: List[Optional[OptionProvider]] = list(option_providers or [])

    def get_option_providers(self) -> Iterable[Optional[OptionProvider]]:
        return self.option_providers

    def get_options(self, parent: Any, topmost: Any, option_data: Optional[OptionDataProvider]) -> Iterator[Option]:
        for provider in self.get_option_providers():
            if provider is not None:
                yield from provider._options(parent, topmost, option_data)

    def get_icon_urls(self, presentable_object: Any) -> Iterator[Option]:
        for provider in self.get_option_providers():
            if provider is not None:
                yield from provider.get_icon_urls(presentable_object)


class PersonOptionProvider(OptionProvider):
    """Options for people, keyed by user name.

    Subclasses implement get_person_options(). When
    is_resolving_missing_users_in_read_only_mode is set, read-only rendering of
    a user name missing from the options falls back to the user directory.
    """

    def __init__(self, is_resolving_missing_users_in_read_only_mode: bool = False):
        self.is_resolving_missing_users_in_read_only_mode = is_resolving_missing_users_in_read_only_mode

    def get_person_options(self, parent: Any, topmost: Any,
                           option_data: Optional[OptionDataProvider]) -> Iterable[Tuple[Optional[User], str]]:
        raise NotImplementedError(f"{type(self).__name__} must implement get_person_options()")

    def get_options(self, parent: Any, topmost: Any, option_data: Optional[OptionDataProvider]) -> Iterator[Option]:
        for user, value in self.get_person_options(parent, topmost, option_data):
            yield (user.user_name if user is not None else None), value

    def _find_read_only_value_for_key(self, key: str, options: Sequence[Option],
                                      option_data: Optional[OptionDataProvider]) -> Optional[str]:
        value = super()._find_read_only_value_for_key(key, options, option_data)
        if not value and self.is_resolving_missing_users_in_read_only_mode:
            directory = option_data.user_directory if option_data is not None else None
            if directory is None:
                logger.debug(f"Cannot resolve missing user '{key}' without a user directory")
                return value
            user = directory.find_one(FilterCriteria.equals('user_name', key), ())
            value = user.display_name if user is not None else None
            logger.debug(f"Resolved missing user '{key}' via directory: {value!r}")
        return value


class StaticPersonOptionProvider(PersonOptionProvider):
    """Person options over a fixed list of users, displayed by display name."""

    def __init__(self, users: Iterable[User] = (), is_resolving_missing_users_in_read_only_mode: bool = False):
        super().__init__(is_resolving_missing_users_in_read_only_mode)
        self.users: List[User] = list(users)

    def get_person_options(self, parent: Any, topmost: Any,
                           option_data: Optional[OptionDataProvider]) -> Iterable[Tuple[Optional[User], str]]:
        return [(user, user.display_name) for user in self.users]
