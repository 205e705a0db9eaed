"""
Lookup view fields.

Lookups resolve their stored key through a lookup provider. A key is valid
when the provider contains it; string lookups may additionally allow fill-in,
in which case any non-empty text is accepted and rendered verbatim.
"""

import logging
from typing import Any, List, Optional

from formconf import get_message
from formbinding import key_chain as kc
from formbinding.enums import FieldRenderMode, Mandatoriness, ValidityCheck, ValueSeparator
from formbinding.errors import PresentationError
from formbinding.lookup_provider import (
    LookupProvider,
    StringLookupProvider,
)
from formbinding.option_data import OptionDataProvider
from formbinding.presentable_field import (
    PresentableFieldForCollection,
    PresentableFieldForElement,
    PresentableFieldForObject,
    PresentableFieldForString,
)
from formbinding.view_field import ViewFieldForCollectionWithPlaceholder, ViewFieldForElementWithPlaceholder

logger = logging.getLogger(__name__)


def _require_lookup_provider(view_field: Any) -> Any:
    if view_field.lookup_provider is None:
        message = f"Lookup provider of view field '{view_field.key}' is not set."
        logger.error(message)
        raise PresentationError(message)
    return view_field.lookup_provider


class ViewFieldForLookup(ViewFieldForElementWithPlaceholder):
    """Base of single-value lookups.

    Attributes:
        lookup_provider: Resolves stored keys to display values; validating
            or rendering a value without one raises PresentationError
        min_search_length: Characters to type before suggestions are searched
    """

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 lookup_provider: Optional[LookupProvider] = None,
                 min_search_length: int = 1, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.lookup_provider = lookup_provider
        self.min_search_length = min_search_length

    def get_default_error_message(self) -> str:
        return self._with_info(get_message('select_valid_value'))

    def get_is_fill_in_allowed(self) -> bool:
        return False

    def get_lookup_provider(self) -> LookupProvider:
        return _require_lookup_provider(self)


class ViewFieldForStringLookup(ViewFieldForLookup):
    """Lookup storing a string key."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 lookup_provider: Optional[StringLookupProvider] = None,
                 is_fill_in_allowed: bool = False, **kwargs: Any):
        super().__init__(title, key, mandatoriness, lookup_provider=lookup_provider, **kwargs)
        self.is_fill_in_allowed = is_fill_in_allowed

    def create_presentable_field(self, parent: Any) -> PresentableFieldForElement:
        return PresentableFieldForString(parent, self.key)

    def get_is_fill_in_allowed(self) -> bool:
        return self.is_fill_in_allowed

    def get_read_only_value_for(self, presentable_field: PresentableFieldForElement, topmost: Any,
                                option_data: Optional[OptionDataProvider]) -> str:
        read_only_value = self.get_lookup_provider().find_value_for_key(presentable_field.value_as_string,
                                                                        topmost, option_data)
        if not read_only_value and self.is_fill_in_allowed:
            read_only_value = presentable_field.value_as_string
        return read_only_value or ''

    def parse_read_only_value(self, read_only_value: Optional[str],
                              option_data: Optional[OptionDataProvider]) -> Optional[str]:
        from formbinding.presentable_object import PresentableObject

        value = self.get_lookup_provider().find_key_for_value(read_only_value, PresentableObject(), option_data)
        if not value and self.is_fill_in_allowed:
            value = read_only_value
        return value

    def validate(self, presentable_field: PresentableFieldForElement, validity_check: ValidityCheck,
                 topmost: Any, option_data: Optional[OptionDataProvider]) -> Optional[str]:
        error_message = super().validate(presentable_field, validity_check, topmost, option_data)
        key = presentable_field.value_as_string
        if error_message or not key or self.is_fill_in_allowed:
            return error_message
        if not self.get_lookup_provider().contains_key(key, topmost, option_data):
            return self.get_default_error_message()
        return None


class ViewFieldForPresentableObjectLookup(ViewFieldForLookup):
    """Lookup storing a presentable object."""

    def create_presentable_field(self, parent: Any) -> PresentableFieldForElement:
        return PresentableFieldForObject(parent, self.key)

    def get_read_only_value_for(self, presentable_field: PresentableFieldForElement, topmost: Any,
                                option_data: Optional[OptionDataProvider]) -> str:
        read_only_value = self.get_lookup_provider().find_value_for_key(presentable_field.value_as_object,
                                                                        topmost, option_data)
        return read_only_value or ''

    def parse_read_only_value(self, read_only_value: Optional[str],
                              option_data: Optional[OptionDataProvider]) -> Any:
        from formbinding.presentable_object import PresentableObject

        return self.get_lookup_provider().find_key_for_value(read_only_value, PresentableObject(), option_data)

    def validate(self, presentable_field: PresentableFieldForElement, validity_check: ValidityCheck,
                 topmost: Any, option_data: Optional[OptionDataProvider]) -> Optional[str]:
        error_message = super().validate(presentable_field, validity_check, topmost, option_data)
        key = presentable_field.value_as_object
        if error_message or key is None:
            return error_message
        if not self.get_lookup_provider().contains_key(key, topmost, option_data):
            return self.get_default_error_message()
        return None


class ViewFieldForMultipleLookups(ViewFieldForCollectionWithPlaceholder):
    """Base of multi-value lookups."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 lookup_provider: Optional[LookupProvider] = None,
                 min_search_length: int = 1, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.lookup_provider = lookup_provider
        self.min_search_length = min_search_length

    def get_default_error_message(self) -> str:
        return self._with_info(self._with_limit(get_message('select_valid_value'),
                                                get_message('select_valid_values')))

    def get_is_fill_in_allowed(self) -> bool:
        return False

    def get_lookup_provider(self) -> LookupProvider:
        return _require_lookup_provider(self)

    def get_value_separator(self, render_mode: FieldRenderMode) -> ValueSeparator:
        if render_mode is FieldRenderMode.FORM:
            return ValueSeparator.LINE_BREAK
        return ValueSeparator.COMMA


class ViewFieldForMultipleStringLookups(ViewFieldForMultipleLookups):

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 lookup_provider: Optional[StringLookupProvider] = None,
                 is_fill_in_allowed: bool = False, **kwargs: Any):
        super().__init__(title, key, mandatoriness, lookup_provider=lookup_provider, **kwargs)
        self.is_fill_in_allowed = is_fill_in_allowed

    def get_is_fill_in_allowed(self) -> bool:
        return self.is_fill_in_allowed

    def get_read_only_values_for(self, presentable_field: PresentableFieldForCollection, topmost: Any,
                                 option_data: Optional[OptionDataProvider]) -> List[str]:
        lookup_provider = self.get_lookup_provider()
        read_only_values = []
        for key in presentable_field.get_values_as_string():
            read_only_value = lookup_provider.find_value_for_key(key, topmost, option_data)
            if not read_only_value and self.is_fill_in_allowed:
                read_only_value = key
            read_only_values.append(read_only_value)
        return read_only_values

    def create_element_view_field(self) -> ViewFieldForStringLookup:
        element = ViewFieldForStringLookup(
            self.title, self.key, Mandatoriness.OPTIONAL,
            lookup_provider=self.lookup_provider,
            is_fill_in_allowed=self.is_fill_in_allowed,
            placeholder=self.placeholder,
        )
        return self._copy_description_to(element)


class ViewFieldForMultiplePresentableObjectLookups(ViewFieldForMultipleLookups):

    def get_read_only_values_for(self, presentable_field: PresentableFieldForCollection, topmost: Any,
                                 option_data: Optional[OptionDataProvider]) -> List[str]:
        lookup_provider = self.get_lookup_provider()
        return [lookup_provider.find_value_for_key(key, topmost, option_data)
                for key in presentable_field.get_values_as_object()]

    def create_element_view_field(self) -> ViewFieldForPresentableObjectLookup:
        element = ViewFieldForPresentableObjectLookup(
            self.title, self.key, Mandatoriness.OPTIONAL,
            lookup_provider=self.lookup_provider,
            placeholder=self.placeholder,
        )
        return self._copy_description_to(element)
