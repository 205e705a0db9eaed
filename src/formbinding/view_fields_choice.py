"""
Choice view fields.

A choice stores an option key. The key is valid only if the option provider
offers exactly one display value for it: no value reports the default error,
several values report that the key is not unique.
"""

import logging
from typing import Any, List, Optional

from formconf import get_message
from formbinding import key_chain as kc
from formbinding.enums import (
    FieldRenderMode,
    Mandatoriness,
    OptionControlType,
    OptionDisplayStyle,
    ValidityCheck,
    ValueSeparator,
)
from formbinding.option_data import FilterScope, OptionDataProvider
from formbinding.option_provider import OptionProvider
from formbinding.presentable_field import (
    PresentableFieldForBool,
    PresentableFieldForCollection,
    PresentableFieldForElement,
    PresentableFieldForPresentableObject,
    PresentableFieldForString,
)
from formbinding.view_field import ViewFieldForCollection, ViewFieldForElement

logger = logging.getLogger(__name__)


class ViewFieldForChoice(ViewFieldForElement):
    """Single selection among the options of an option provider."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 option_provider: Optional[OptionProvider] = None,
                 option_control_type: OptionControlType = OptionControlType.AUTOMATIC,
                 option_display_style: OptionDisplayStyle = OptionDisplayStyle.ICON_WITH_TEXT_FALLBACK,
                 **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.option_provider = option_provider if option_provider is not None else OptionProvider()
        self.option_control_type = option_control_type
        self.option_display_style = option_display_style

    def get_default_error_message(self) -> str:
        return self._with_info(get_message('select_valid_value'))

    def get_read_only_value_for(self, presentable_field: PresentableFieldForElement, topmost: Any,
                                option_data: Optional[OptionDataProvider]) -> str:
        return self.get_read_only_value_for_key(presentable_field, topmost, option_data,
                                                presentable_field.value_as_string)

    def get_read_only_value_for_key(self, presentable_field: PresentableFieldForElement, topmost: Any,
                                    option_data: Optional[OptionDataProvider], selected_key: str) -> str:
        value = self.option_provider.find_read_only_value_for_key(
            selected_key, presentable_field.parent, topmost, option_data)
        return value or ''

    def parse_read_only_value(self, read_only_value: Optional[str],
                              option_data: Optional[OptionDataProvider]) -> Any:
        from formbinding.presentable_object import PresentableObject

        return self.option_provider.find_key_for_value(read_only_value, PresentableObject(),
                                                       PresentableObject(), option_data)

    def validate(self, presentable_field: PresentableFieldForElement, validity_check: ValidityCheck,
                 topmost: Any, option_data: Optional[OptionDataProvider]) -> Optional[str]:
        error_message = super().validate(presentable_field, validity_check, topmost, option_data)
        key = presentable_field.value_as_string
        if error_message or not key:
            return error_message
        key_count = self.option_provider.count_key(key, presentable_field.parent, topmost, option_data)
        if key_count < 1:
            return self.get_default_error_message()
        if key_count > 1:
            logger.debug(f"Key '{key}' of field '{self.key}' resolves to {key_count} values")
            return f"{get_message('selected_value_not_unique')} {self.get_default_error_message()}"
        return None


class ViewFieldForStringChoice(ViewFieldForChoice):

    def create_presentable_field(self, parent: Any) -> PresentableFieldForElement:
        return PresentableFieldForString(parent, self.key)


class ViewFieldForPresentableObjectChoice(ViewFieldForChoice):
    """Choice among presentable objects, keyed by object id."""

    def create_presentable_field(self, parent: Any) -> PresentableFieldForElement:
        return PresentableFieldForPresentableObject(parent, self.key)


class ViewFieldForPersonChoice(ViewFieldForChoice):
    """Choice of a person; the stored key is the user name."""

    def create_presentable_field(self, parent: Any) -> PresentableFieldForElement:
        return PresentableFieldForString(parent, self.key)

    def get_default_error_message(self) -> str:
        return self._with_info(get_message('select_valid_person'))

    def get_read_only_value_for(self, presentable_field: PresentableFieldForElement, topmost: Any,
                                option_data: Optional[OptionDataProvider]) -> str:
        return presentable_field.value_as_string

    def parse_read_only_value(self, read_only_value: Optional[str],
                              option_data: Optional[OptionDataProvider]) -> Any:
        if not read_only_value or option_data is None or option_data.user_directory is None:
            return None
        user = option_data.user_directory.find_one_by_vague_term(read_only_value,
                                                                 FilterScope.USER_NAME_AND_DISPLAY_NAME)
        if user is None:
            return None
        return user.id if user.id is not None else user.user_name


class ViewFieldForMultipleChoices(ViewFieldForCollection):
    """Multiple selection among the options of an option provider."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 option_provider: Optional[OptionProvider] = None,
                 option_display_style: OptionDisplayStyle = OptionDisplayStyle.ICON_WITH_TEXT_FALLBACK,
                 is_auto_selection_enabled: bool = False, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.option_provider = option_provider if option_provider is not None else OptionProvider()
        self.option_display_style = option_display_style
        self.is_auto_selection_enabled = is_auto_selection_enabled

    def get_default_error_message(self) -> str:
        return self._with_info(self._with_limit(get_message('select_valid_value'),
                                                get_message('select_valid_values')))

    def get_read_only_values_for(self, presentable_field: PresentableFieldForCollection, topmost: Any,
                                 option_data: Optional[OptionDataProvider]) -> List[str]:
        options = self.option_provider.find_read_only_options_for_keys(
            presentable_field.get_values_as_string(), presentable_field.parent, topmost, option_data)
        return [value for _, value in options]

    def get_value_separator(self, render_mode: FieldRenderMode) -> ValueSeparator:
        # editable values are posted back comma separated
        if render_mode is FieldRenderMode.FORM and self.is_read_only:
            return ValueSeparator.LINE_BREAK
        return ValueSeparator.COMMA

    def _element_options(self) -> dict:
        return dict(
            option_provider=self.option_provider,
            option_display_style=self.option_display_style,
        )


class ViewFieldForMultipleStringChoices(ViewFieldForMultipleChoices):

    def create_element_view_field(self) -> ViewFieldForStringChoice:
        element = ViewFieldForStringChoice(self.title, self.key, Mandatoriness.OPTIONAL, **self._element_options())
        return self._copy_description_to(element)


class ViewFieldForMultiplePresentableObjectChoices(ViewFieldForMultipleChoices):

    def create_element_view_field(self) -> ViewFieldForPresentableObjectChoice:
        element = ViewFieldForPresentableObjectChoice(self.title, self.key, Mandatoriness.OPTIONAL,
                                                      **self._element_options())
        return self._copy_description_to(element)


class _BoolOptionProvider(OptionProvider):

    def get_options(self, parent: Any, topmost: Any, option_data: Optional[OptionDataProvider]):
        return [('true', get_message('yes')), ('false', get_message('no'))]


class ViewFieldForBoolChoice(ViewFieldForChoice):
    """Yes/no choice bound to a boolean field."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, **kwargs: Any):
        kwargs.setdefault('option_provider', _BoolOptionProvider())
        super().__init__(title, key, mandatoriness, **kwargs)

    def create_presentable_field(self, parent: Any) -> PresentableFieldForElement:
        return PresentableFieldForBool(parent, self.key)
