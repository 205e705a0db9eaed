"""Text view fields: single-line, multiline, rich text, passwords and phone numbers."""

import logging
import re
from typing import Any, Optional

from formconf import get_message
from formbinding import key_chain as kc
from formbinding.enums import FieldRenderMode, Mandatoriness, ValidityCheck, ValueSeparator
from formbinding.option_provider import OptionProvider
from formbinding.presentable_field import PresentableFieldForElement, PresentableFieldForString
from formbinding.view_field import (
    ViewFieldForCollectionWithPlaceholder,
    ViewFieldForElement,
    ViewFieldForElementWithPlaceholder,
)

logger = logging.getLogger(__name__)

PHONE_NUMBER_PATTERN = r'^\+?[0-9 ()/.\-]*[0-9][0-9 ()/.\-]*$'


def _at_most_message(max_length: int) -> str:
    if max_length == 1:
        return get_message('enter_valid_value_at_most_one_character')
    return get_message('enter_valid_value_at_most_characters', max_length)


class ViewFieldForSingleLineTextBase(ViewFieldForElementWithPlaceholder):
    """Single-line text with optional length bounds and a validation pattern.

    Attributes:
        min_length: Minimum number of characters (0 for none)
        max_length: Maximum number of characters, None for no limit
        validation_pattern: Regular expression a non-empty value must match
    """

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 min_length: int = 0, max_length: Optional[int] = None,
                 validation_pattern: Optional[str] = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.min_length = min_length
        self.max_length = max_length
        self.validation_pattern = validation_pattern

    def create_presentable_field(self, parent: Any) -> PresentableFieldForElement:
        return PresentableFieldForString(parent, self.key)

    def get_default_error_message(self) -> str:
        if self.min_length == 0 and self.max_length is None:
            return super().get_default_error_message()
        if self.min_length == 0:
            message = _at_most_message(self.max_length)
        elif self.max_length is None:
            if self.min_length == 1:
                message = get_message('enter_valid_value_at_least_one_character')
            else:
                message = get_message('enter_valid_value_at_least_characters', self.min_length)
        else:
            message = get_message('enter_valid_value_between_characters', self.min_length, self.max_length)
        return self._with_info(message)

    def validate(self, presentable_field: PresentableFieldForElement, validity_check: ValidityCheck,
                 topmost: Any, option_data: Any) -> Optional[str]:
        error_message = super().validate(presentable_field, validity_check, topmost, option_data)
        value = presentable_field.value_as_string
        if error_message or not value:
            return error_message
        if self.max_length is not None and len(value) > self.max_length:
            return self.get_default_error_message()
        if len(value) < self.min_length:
            return self.get_default_error_message()
        if self.validation_pattern and not re.search(self.validation_pattern, value):
            return self.get_default_error_message()
        return None


class ViewFieldForSingleLineText(ViewFieldForSingleLineTextBase):
    """Single-line text, optionally offering suggestions from an option provider."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 option_provider: Optional[OptionProvider] = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.option_provider = option_provider


class ViewFieldForPhoneNumber(ViewFieldForSingleLineText):
    """Phone number: digits with an optional leading plus and common separators.

    A custom validation_pattern replaces PHONE_NUMBER_PATTERN.
    """

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 validation_pattern: Optional[str] = None, **kwargs: Any):
        if validation_pattern is None:
            validation_pattern = PHONE_NUMBER_PATTERN
        super().__init__(title, key, mandatoriness, validation_pattern=validation_pattern, **kwargs)


class ViewFieldForPassword(ViewFieldForSingleLineTextBase):
    """Password input; read-only rendering only reveals whether one is set."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 is_character_variance_required: bool = False, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.is_character_variance_required = is_character_variance_required

    def get_read_only_value_for(self, presentable_field: PresentableFieldForElement, topmost: Any,
                                option_data: Any) -> str:
        return get_message('yes') if presentable_field.value_as_string else get_message('no')

    def parse_read_only_value(self, read_only_value: Optional[str], option_data: Any) -> Any:
        raise ValueError("Passwords must not be parsed.")

    def validate(self, presentable_field: PresentableFieldForElement, validity_check: ValidityCheck,
                 topmost: Any, option_data: Any) -> Optional[str]:
        error_message = super().validate(presentable_field, validity_check, topmost, option_data)
        value = presentable_field.value_as_string
        if error_message or not value or not self.is_character_variance_required:
            return error_message
        has_upper = any('A' <= c <= 'Z' for c in value)
        has_lower = any('a' <= c <= 'z' for c in value)
        has_digit = any('0' <= c <= '9' for c in value)
        has_other = any(not (c.isascii() and c.isalnum()) for c in value)
        if not (has_upper and has_lower and has_digit and has_other):
            return self._with_info(get_message('password_character_variance'))
        return None


class ViewFieldForMultilineText(ViewFieldForElementWithPlaceholder):
    """Multiline plain text with an optional maximum length."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 max_length: Optional[int] = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.max_length = max_length

    def create_presentable_field(self, parent: Any) -> PresentableFieldForElement:
        return PresentableFieldForString(parent, self.key)

    def get_default_error_message(self) -> str:
        if self.max_length is None:
            return super().get_default_error_message()
        return self._with_info(_at_most_message(self.max_length))

    def validate(self, presentable_field: PresentableFieldForElement, validity_check: ValidityCheck,
                 topmost: Any, option_data: Any) -> Optional[str]:
        error_message = super().validate(presentable_field, validity_check, topmost, option_data)
        value = presentable_field.value_as_string
        if not error_message and value and self.max_length is not None and len(value) > self.max_length:
            error_message = self.get_default_error_message()
        return error_message


class ViewFieldForMultilineRichText(ViewFieldForElement):
    """Multiline HTML text; plain text is available for indexing via the field."""

    def create_presentable_field(self, parent: Any) -> PresentableFieldForElement:
        return PresentableFieldForString(parent, self.key)


class ViewFieldForMultipleSingleLineTexts(ViewFieldForCollectionWithPlaceholder):
    """List of single-line texts, each checked like a ViewFieldForSingleLineText."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 max_length: Optional[int] = None, validation_pattern: Optional[str] = None,
                 option_provider: Optional[OptionProvider] = None,
                 value_separator: ValueSeparator = ValueSeparator.LINE_BREAK, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.max_length = max_length
        self.validation_pattern = validation_pattern
        self.option_provider = option_provider
        self.value_separator = value_separator

    def get_default_error_message(self) -> str:
        if self.max_length is None:
            return super().get_default_error_message()
        if self.limit is not None and self.limit < 2:
            message = _at_most_message(self.max_length)
        else:
            if self.max_length == 1:
                message = get_message('enter_valid_values_at_most_one_character')
            else:
                message = get_message('enter_valid_values_at_most_characters', self.max_length)
            if self.limit is not None:
                message = f"{message} {get_message('up_to_values_allowed', self.limit)}"
        return self._with_info(message)

    def get_value_separator(self, render_mode: FieldRenderMode) -> ValueSeparator:
        if render_mode is not FieldRenderMode.FORM:
            return ValueSeparator.COMMA
        if self.option_provider is not None and (self.limit is None or self.limit > 1):
            return ValueSeparator.LINE_BREAK
        return self.value_separator

    def create_element_view_field(self) -> ViewFieldForSingleLineText:
        element = ViewFieldForSingleLineText(
            self.title, self.key, Mandatoriness.OPTIONAL,
            max_length=self.max_length,
            validation_pattern=self.validation_pattern,
            option_provider=self.option_provider,
            placeholder=self.placeholder,
        )
        return self._copy_description_to(element)


class ViewFieldForMultiplePhoneNumbers(ViewFieldForMultipleSingleLineTexts):
    """Comma-separated list of phone numbers."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, **kwargs: Any):
        kwargs.setdefault('value_separator', ValueSeparator.COMMA)
        super().__init__(title, key, mandatoriness, **kwargs)

    def create_element_view_field(self) -> ViewFieldForPhoneNumber:
        element = ViewFieldForPhoneNumber(
            self.title, self.key, Mandatoriness.OPTIONAL,
            max_length=self.max_length,
            validation_pattern=self.validation_pattern,
            option_provider=self.option_provider,
            placeholder=self.placeholder,
        )
        return self._copy_description_to(element)
