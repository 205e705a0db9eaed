"""
View fields: instance-independent presentation and validation descriptors.

A view field describes how a presentable field is titled, rendered read-only
and validated. It never holds a value itself; every operation receives the
presentable field to work on, the topmost bound object and the option data
context.

Hierarchy:
    ViewField
    └── ViewFieldForEditableValue       key chain, mandatoriness, read-only flag
        ├── ViewFieldForElement         single values
        └── ViewFieldForCollection      lists of values, limit, separators

Validation never raises for bad input: it returns None when the value is
valid, otherwise exactly one error message followed by the mandatoriness hint.
"""

import copy
import functools
import logging
from typing import Any, Iterable, List, Optional, TYPE_CHECKING

from formconf import get_current_settings, get_message
from formbinding import key_chain as kc
from formbinding.enums import FieldRenderMode, Mandatoriness, ValidityCheck, ValueSeparator
from formbinding.presentable_field import (
    PresentableField,
    PresentableFieldForCollection,
    PresentableFieldForElement,
)

if TYPE_CHECKING:
    from formbinding.option_data import OptionDataProvider

logger = logging.getLogger(__name__)


class ViewField:
    """Base of all view fields: a title and a visibility flag."""

    def __init__(self, title: Optional[str] = None, is_visible: bool = True):
        self.title = title
        self.is_visible = is_visible

    def get_title(self) -> Optional[str]:
        return self.title

    def get_read_only_value_for(self, presentable_field: PresentableField, topmost: Any,
                                option_data: Optional['OptionDataProvider']) -> str:
        raise NotImplementedError(f"get_read_only_value_for() has to be implemented by {type(self).__name__}")

    def clone(self) -> 'ViewField':
        """Copy this view field.

        Referenced providers are shared with the copy; owned lists are copied
        so that changes to the copy never reach the original.
        """
        duplicate = copy.copy(self)
        for name, value in vars(self).items():
            if isinstance(value, (list, dict, set)):
                setattr(duplicate, name, copy.copy(value))
        return duplicate

    @staticmethod
    def sort_by_key_chain(view_fields: List['ViewField']) -> None:
        """Sort in place: fields without a key first, then by key."""
        def compare(a: ViewField, b: ViewField) -> int:
            a_key = a.key if isinstance(a, ViewFieldForEditableValue) else None
            b_key = b.key if isinstance(b, ViewFieldForEditableValue) else None
            if a_key is None and b_key is None:
                return 0
            if a_key is None:
                return -1
            if b_key is None:
                return 1
            return (a_key > b_key) - (a_key < b_key)
        view_fields.sort(key=functools.cmp_to_key(compare))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(title={self.title!r})"


class ViewFieldForEditableValue(ViewField):
    """View field bound to a presentable field through a key chain.

    Args:
        title: Label of the field
        key: Serialized key or key chain of the bound presentable field
        mandatoriness: How strongly a value is asked for
    """

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 is_read_only: bool = False, is_visible: bool = True, is_autofocused: bool = False,
                 description_for_edit_mode: Optional[str] = None,
                 description_for_view_mode: Optional[str] = None):
        super().__init__(title, is_visible)
        self.key = kc.to_key(kc.as_key_chain(key))
        self.mandatoriness = mandatoriness
        self.is_read_only = is_read_only
        self.is_autofocused = is_autofocused
        self.description_for_edit_mode = description_for_edit_mode
        self.description_for_view_mode = description_for_view_mode

    @property
    def key_chain(self) -> kc.KeyChain:
        return kc.from_key(self.key)

    @key_chain.setter
    def key_chain(self, value: Iterable[str]) -> None:
        self.key = kc.to_key(value)

    def is_mandatory_for(self, validity_check: ValidityCheck) -> bool:
        """Whether an empty value is an error under the given strictness."""
        return (self.mandatoriness is Mandatoriness.REQUIRED
                or (self.mandatoriness is Mandatoriness.DESIRED and validity_check is ValidityCheck.STRICT))

    def get_info_message_about_mandatoriness(self) -> str:
        if self.mandatoriness is Mandatoriness.REQUIRED:
            return get_message('this_is_a_mandatory_field')
        if self.mandatoriness is Mandatoriness.DESIRED:
            return get_message('alternatively_leave_blank_for_now')
        return get_message('alternatively_leave_blank')

    def _with_info(self, error_message: str) -> str:
        return f"{error_message} {self.get_info_message_about_mandatoriness()}"

    def get_default_error_message(self) -> str:
        return self._with_info(get_message('enter_valid_value'))

    def _copy_description_to(self, other: 'ViewFieldForEditableValue') -> 'ViewFieldForEditableValue':
        other.description_for_edit_mode = self.description_for_edit_mode
        other.description_for_view_mode = self.description_for_view_mode
        return other

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key!r}, mandatoriness={self.mandatoriness.name})"


class ViewFieldForElement(ViewFieldForEditableValue):
    """View field for a single value."""

    def create_presentable_field(self, parent: Any) -> PresentableFieldForElement:
        """Create a presentable field suitable for this view field on parent."""
        raise NotImplementedError(f"create_presentable_field() has to be implemented by {type(self).__name__}")

    def get_read_only_value_for(self, presentable_field: PresentableFieldForElement, topmost: Any,
                                option_data: Optional['OptionDataProvider']) -> str:
        return presentable_field.value_as_string

    def parse_read_only_value(self, read_only_value: Optional[str],
                              option_data: Optional['OptionDataProvider']) -> Any:
        """Best-effort inverse of get_read_only_value_for(); None if unparsable."""
        from formbinding.presentable_object import PresentableObject

        presentable_field = self.create_presentable_field(PresentableObject())
        presentable_field.try_set_value_as_string(read_only_value)
        return presentable_field.value_as_object

    def validate(self, presentable_field: PresentableFieldForElement, validity_check: ValidityCheck,
                 topmost: Any, option_data: Optional['OptionDataProvider']) -> Optional[str]:
        """Validate the value of presentable_field.

        Args:
            presentable_field: Field holding the value to check
            validity_check: LOOSE or STRICT
            topmost: Topmost bound presentable object
            option_data: Context for option and lookup providers

        Returns:
            None if valid, else the error message
        """
        if self.is_mandatory_for(validity_check) and not presentable_field.value_as_string:
            return self.get_default_error_message()
        return None


class ViewFieldForElementWithPlaceholder(ViewFieldForElement):
    """Element view field showing a placeholder text while empty."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 placeholder: Optional[str] = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.placeholder = placeholder


class _CollectionElementField(PresentableFieldForElement):
    """Throwaway element field presenting one value of a collection field."""

    def __init__(self, collection: PresentableFieldForCollection, value: Any, text: str):
        super().__init__(collection.parent, collection.key, value, collection.is_read_only)
        self._text = text

    @property
    def value_as_string(self) -> str:
        return self._text or ''


class ViewFieldForCollection(ViewFieldForEditableValue):
    """View field for a list of values.

    Attributes:
        limit: Maximum number of values, None for no limit
    """

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 limit: Optional[int] = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.limit = limit

    def _with_limit(self, single_message: str, plural_message: str) -> str:
        if self.limit is not None and self.limit < 2:
            return single_message
        if self.limit is not None:
            return f"{plural_message} {get_message('up_to_values_allowed', self.limit)}"
        return plural_message

    def get_default_error_message(self) -> str:
        return self._with_info(self._with_limit(get_message('enter_valid_value'), get_message('enter_valid_values')))

    def get_value_separator(self, render_mode: FieldRenderMode) -> ValueSeparator:
        raise NotImplementedError(f"get_value_separator() has to be implemented by {type(self).__name__}")

    @staticmethod
    def get_value_separator_text(value_separator: ValueSeparator) -> str:
        return get_current_settings().value_separators[value_separator.name]

    def get_read_only_values_for(self, presentable_field: PresentableFieldForCollection, topmost: Any,
                                 option_data: Optional['OptionDataProvider']) -> List[str]:
        return presentable_field.get_values_as_string()

    def get_read_only_value_for(self, presentable_field: PresentableFieldForCollection, topmost: Any,
                                option_data: Optional['OptionDataProvider']) -> str:
        separator = self.get_value_separator_text(self.get_value_separator(FieldRenderMode.LIST_TABLE))
        values = self.get_read_only_values_for(presentable_field, topmost, option_data)
        return separator.join(value for value in values if value is not None)

    def create_element_view_field(self) -> Optional[ViewFieldForElement]:
        """Optional element view field every single value is validated with."""
        return None

    def _validate_count(self, presentable_field: PresentableFieldForCollection,
                        validity_check: ValidityCheck) -> Optional[str]:
        error_message = None
        if self.is_mandatory_for(validity_check) and len(presentable_field) == 0:
            error_message = self.get_default_error_message()
        if self.limit is not None and len(presentable_field) > self.limit:
            error_message = self.get_default_error_message()
        return error_message

    def validate(self, presentable_field: PresentableFieldForCollection, validity_check: ValidityCheck,
                 topmost: Any, option_data: Optional['OptionDataProvider']) -> Optional[str]:
        """Validate the count of values, then each value with the element view field."""
        error_message = self._validate_count(presentable_field, validity_check)
        if error_message:
            return error_message
        element_view_field = self.create_element_view_field()
        if element_view_field is None:
            return None
        values = presentable_field.get_values_as_object()
        texts = presentable_field.get_values_as_string()
        for value, text in zip(values, texts):
            element_field = _CollectionElementField(presentable_field, value, text)
            error_message = element_view_field.validate(element_field, validity_check, topmost, option_data)
            if error_message:
                return error_message
        return None


class ViewFieldForCollectionWithPlaceholder(ViewFieldForCollection):

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 placeholder: Optional[str] = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.placeholder = placeholder
