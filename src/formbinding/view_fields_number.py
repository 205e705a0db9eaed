"""
Numeric view fields.

Values are stored in invariant notation and validated against optional
bounds and a step: with step > 0 a value is valid only if its distance from
the step base (min_value, or 0 without lower bound) is a multiple of step.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from formconf import get_message
from formbinding import key_chain as kc
from formbinding import numbers
from formbinding.enums import FieldRenderMode, Mandatoriness, ValidityCheck, ValueSeparator
from formbinding.errors import FieldNotFoundError
from formbinding.option_provider import OptionProvider
from formbinding.presentable_field import (
    PresentableFieldForCollection,
    PresentableFieldForDecimal,
    PresentableFieldForElement,
    PresentableFieldForNumberWithUnit,
    PresentableFieldForString,
)
from formbinding.view_field import ViewFieldForCollectionWithPlaceholder, ViewFieldForElementWithPlaceholder

logger = logging.getLogger(__name__)

_NUMERIC_UNIT_CHARACTERS = frozenset('0123456789., ')


def _to_decimal(value: Any) -> Optional[Decimal]:
    return None if value is None else Decimal(value)


def _out_of_bounds_message(min_value: Optional[Decimal], max_value: Optional[Decimal], plural: bool = False,
                           suffix: str = '') -> str:
    prefix = 'enter_valid_values' if plural else 'enter_valid_value'
    if min_value is None:
        return get_message(f'{prefix}_less_than{suffix}', max_value)
    if max_value is None:
        return get_message(f'{prefix}_greater_than{suffix}', min_value)
    return get_message(f'{prefix}_between{suffix}', min_value, max_value)


class _NumberRules:
    """Bounds, step and formatting shared by single and multiple number fields."""

    def _init_number_rules(self, step: Any, min_value: Any, max_value: Any, has_thousands_separators: bool,
                           is_range: bool, option_provider: Optional[OptionProvider]) -> None:
        self.step = step
        self.min_value = _to_decimal(min_value)
        self.max_value = _to_decimal(max_value)
        self.has_thousands_separators = has_thousands_separators
        self.is_range = is_range
        self.option_provider = option_provider

    @property
    def step(self) -> Decimal:
        return self._step

    @step.setter
    def step(self, value: Any) -> None:
        value = Decimal(value)
        if value < 0:
            raise ValueError("Step may not be < 0.")
        self._step = value

    @property
    def is_unbounded(self) -> bool:
        return self.min_value is None and self.max_value is None

    @property
    def decimal_places(self) -> Optional[int]:
        """Decimals shown in read-only mode; None shows every significant one."""
        if self._step == 0:
            return None
        return numbers.decimal_places_of(self._step)

    def format(self, value: Any) -> str:
        return numbers.format_number(value, self.decimal_places, self.has_thousands_separators)

    def format_invariant(self, text: Optional[str]) -> str:
        value = numbers.parse_number(text)
        if value is None:
            return ''
        return self.format(value)

    def is_value_in_rules(self, value: Decimal) -> bool:
        if self.min_value is not None and value < self.min_value:
            return False
        if self.max_value is not None and value > self.max_value:
            return False
        if self._step > 0:
            step_base = self.min_value if self.min_value is not None else Decimal(0)
            if (step_base - value) % self._step != 0:
                return False
        return True


class ViewFieldForNumberWithoutUnit(_NumberRules, ViewFieldForElementWithPlaceholder):
    """Number input with bounds and step but without a unit.

    Args:
        step: Granularity of valid values, 0 for any value
        min_value: Lower bound, None for no lower bound
        max_value: Upper bound, None for no upper bound
    """

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, step: Any = 0, *,
                 min_value: Any = Decimal(0), max_value: Any = None,
                 has_thousands_separators: bool = True, is_range: bool = False,
                 option_provider: Optional[OptionProvider] = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self._init_number_rules(step, min_value, max_value, has_thousands_separators, is_range, option_provider)

    def create_presentable_field(self, parent: Any) -> PresentableFieldForElement:
        return PresentableFieldForDecimal(parent, self.key)

    def get_error_message_for_value_out_of_bounds(self, min_value: Optional[Decimal],
                                                  max_value: Optional[Decimal]) -> str:
        return _out_of_bounds_message(min_value, max_value)

    def get_default_error_message(self) -> str:
        if self.is_unbounded:
            return super().get_default_error_message()
        return self._with_info(self.get_error_message_for_value_out_of_bounds(self.min_value, self.max_value))

    def validate(self, presentable_field: PresentableFieldForElement, validity_check: ValidityCheck,
                 topmost: Any, option_data: Any) -> Optional[str]:
        error_message = super().validate(presentable_field, validity_check, topmost, option_data)
        value = presentable_field.value_as_string
        if error_message or not value:
            return error_message
        value_as_number = numbers.parse_decimal(value)
        if value_as_number is None:
            return self.get_default_error_message()
        try:
            if not self.is_value_in_rules(value_as_number):
                return self.get_default_error_message()
        except InvalidOperation:
            logger.debug(f"Step check of {value} overflowed for field '{self.key}'")
            return self.get_default_error_message()
        return None


class ViewFieldForNumber(ViewFieldForNumberWithoutUnit):
    """Number input with an optional unit appended in read-only mode."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, step: Any = 0, *,
                 unit: Optional[str] = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, step, **kwargs)
        self.unit = unit

    def get_read_only_value_for(self, presentable_field: PresentableFieldForElement, topmost: Any,
                                option_data: Any) -> str:
        read_only_value = self.format_invariant(presentable_field.value_as_string)
        if read_only_value and self.unit:
            read_only_value = f"{read_only_value} {self.unit}"
        return read_only_value

    def parse_read_only_value(self, read_only_value: Optional[str], option_data: Any) -> Any:
        suffix = f" {self.unit}" if self.unit else ''
        if not read_only_value or not read_only_value.endswith(suffix):
            return None
        return numbers.parse_formatted_number(read_only_value[:len(read_only_value) - len(suffix)])


class ViewFieldForNumberWithUnit(ViewFieldForNumberWithoutUnit):
    """Number followed by a free-text unit, e.g. '12.5 kg'.

    A unit is needed whenever a number is given or the field is mandatory.
    Text made up of digits, separators and spaces only does not count as a unit.
    """

    bounds_message_suffix = '_and_unit'

    def create_presentable_field(self, parent: Any) -> PresentableFieldForElement:
        return PresentableFieldForNumberWithUnit(parent, self.key)

    def get_error_message_for_value_out_of_bounds(self, min_value: Optional[Decimal],
                                                  max_value: Optional[Decimal]) -> str:
        return _out_of_bounds_message(min_value, max_value, suffix=self.bounds_message_suffix)

    def get_read_only_unit(self, unit: str, presentable_field: PresentableFieldForElement, topmost: Any,
                           option_data: Any) -> Optional[str]:
        return unit

    def get_read_only_value_for(self, presentable_field: PresentableFieldForElement, topmost: Any,
                                option_data: Any) -> str:
        value = presentable_field.value_as_object
        if not isinstance(value, numbers.NumberWithUnit) or value.number is None:
            return ''
        read_only_value = self.format(value.number)
        unit = self.get_read_only_unit(value.unit, presentable_field, topmost, option_data)
        if unit:
            read_only_value = f"{read_only_value} {unit}"
        return read_only_value

    def parse_unit(self, unit: str, option_data: Any) -> Optional[str]:
        return unit

    def parse_read_only_value(self, read_only_value: Optional[str],
                              option_data: Any) -> Optional[numbers.NumberWithUnit]:
        number_text, unit = numbers.NumberWithUnit.split(read_only_value)
        number = numbers.parse_formatted_number(number_text)
        if number is None or not unit:
            return None
        return numbers.NumberWithUnit(Decimal(number), self.parse_unit(unit, option_data))

    def is_valid_unit(self, unit: Optional[str], presentable_field: PresentableFieldForElement, topmost: Any,
                      option_data: Any) -> bool:
        return any(character not in _NUMERIC_UNIT_CHARACTERS for character in unit)

    def validate(self, presentable_field: PresentableFieldForElement, validity_check: ValidityCheck,
                 topmost: Any, option_data: Any) -> Optional[str]:
        value = presentable_field.value_as_object
        if value is None:
            value = numbers.NumberWithUnit()
        elif not isinstance(value, numbers.NumberWithUnit):
            return self.get_default_error_message()
        number_field = PresentableFieldForString(presentable_field.parent, presentable_field.key,
                                                 value.number_as_string, presentable_field.is_read_only)
        error_message = super().validate(number_field, validity_check, topmost, option_data)
        if error_message:
            return error_message
        if not value.unit:
            if self.is_mandatory_for(validity_check) or value.number is not None:
                return self.get_default_error_message()
            return None
        if not self.is_valid_unit(value.unit, presentable_field, topmost, option_data):
            return self.get_default_error_message()
        return None


class ViewFieldForNumberWithUnitChoice(ViewFieldForNumberWithUnit):
    """Number followed by a unit selected from an option provider.

    The stored unit is an option key; read-only rendering shows its value.
    """

    bounds_message_suffix = '_and_select_unit'

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, step: Any = 0, *,
                 unit_option_provider: Optional[OptionProvider] = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, step, **kwargs)
        self.unit_option_provider = unit_option_provider if unit_option_provider is not None else OptionProvider()

    def get_read_only_unit(self, unit: str, presentable_field: PresentableFieldForElement, topmost: Any,
                           option_data: Any) -> Optional[str]:
        return self.unit_option_provider.find_read_only_value_for_key(unit, presentable_field.parent, topmost,
                                                                      option_data)

    def parse_unit(self, unit: str, option_data: Any) -> Optional[str]:
        from formbinding.presentable_object import PresentableObject

        return self.unit_option_provider.find_key_for_value(unit, PresentableObject(), PresentableObject(),
                                                            option_data)

    def is_valid_unit(self, unit: Optional[str], presentable_field: PresentableFieldForElement, topmost: Any,
                      option_data: Any) -> bool:
        return self.unit_option_provider.contains_key(unit, presentable_field.parent, topmost, option_data)


class ViewFieldForSubsequentNumber(ViewFieldForNumber):
    """Number that must not be less than the value of a previous field.

    The previous field is looked up relative to the parent object of the
    validated field first, then relative to the topmost object.
    """

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, step: Any = 0,
                 previous_field_key: kc.KeyOrChain = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, step, **kwargs)
        self.previous_field_key = kc.to_key(kc.as_key_chain(previous_field_key))

    @property
    def previous_field_key_chain(self) -> kc.KeyChain:
        return kc.from_key(self.previous_field_key)

    @previous_field_key_chain.setter
    def previous_field_key_chain(self, value) -> None:
        self.previous_field_key = kc.to_key(value)

    def _find_previous_field(self, presentable_field: PresentableFieldForElement,
                             topmost: Any) -> PresentableFieldForElement:
        previous_field = None
        if presentable_field.parent is not None:
            previous_field = presentable_field.parent.find_presentable_field(self.previous_field_key_chain)
        if not isinstance(previous_field, PresentableFieldForElement) and topmost is not None:
            previous_field = topmost.find_presentable_field(self.previous_field_key_chain)
        if not isinstance(previous_field, PresentableFieldForElement):
            logger.error(f"Previous field '{self.previous_field_key}' of field '{self.key}' is missing")
            raise FieldNotFoundError(f'Presentable field with key "{self.previous_field_key}" cannot be found.')
        return previous_field

    def validate(self, presentable_field: PresentableFieldForElement, validity_check: ValidityCheck,
                 topmost: Any, option_data: Any) -> Optional[str]:
        error_message = super().validate(presentable_field, validity_check, topmost, option_data)
        previous_value = self._find_previous_field(presentable_field, topmost).value_as_string
        subsequent_value = presentable_field.value_as_string
        if error_message or not subsequent_value or not previous_value:
            return error_message
        subsequent = numbers.parse_decimal(subsequent_value)
        previous = numbers.parse_decimal(previous_value)
        if subsequent is None or previous is None:
            return self.get_default_error_message()
        if subsequent < previous:
            return self._with_info(self.get_error_message_for_value_out_of_bounds(previous, self.max_value))
        return None


class ViewFieldForMultipleNumbers(_NumberRules, ViewFieldForCollectionWithPlaceholder):
    """List of numbers sharing bounds, step and format."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, step: Any = 0, *,
                 min_value: Any = Decimal(0), max_value: Any = None,
                 has_thousands_separators: bool = True, is_range: bool = False,
                 option_provider: Optional[OptionProvider] = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self._init_number_rules(step, min_value, max_value, has_thousands_separators, is_range, option_provider)

    def get_default_error_message(self) -> str:
        if self.is_unbounded:
            return super().get_default_error_message()
        return self._with_info(self._with_limit(
            _out_of_bounds_message(self.min_value, self.max_value),
            _out_of_bounds_message(self.min_value, self.max_value, plural=True),
        ))

    def get_read_only_values_for(self, presentable_field: PresentableFieldForCollection, topmost: Any,
                                 option_data: Any) -> List[str]:
        values = (self.format_invariant(value) for value in presentable_field.get_values_as_string())
        return [value for value in values if value]

    def get_value_separator(self, render_mode: FieldRenderMode) -> ValueSeparator:
        return ValueSeparator.SEMICOLON

    def create_element_view_field(self) -> ViewFieldForNumber:
        element = ViewFieldForNumber(
            self.title, self.key, Mandatoriness.OPTIONAL, self.step,
            min_value=self.min_value,
            max_value=self.max_value,
            is_range=self.is_range,
            option_provider=self.option_provider,
            placeholder=self.placeholder,
        )
        return self._copy_description_to(element)
