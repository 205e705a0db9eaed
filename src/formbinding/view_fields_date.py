"""Date and time view fields."""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional

from formconf import get_message
from formbinding import date_time
from formbinding import key_chain as kc
from formbinding.enums import DateTimeType, Mandatoriness, ValidityCheck
from formbinding.errors import FieldNotFoundError
from formbinding.option_provider import OptionProvider
from formbinding.presentable_field import PresentableFieldForDateTime, PresentableFieldForElement
from formbinding.view_field import ViewFieldForElement

logger = logging.getLogger(__name__)

_MESSAGE_NAMES = {
    DateTimeType.DATE: 'enter_valid_date',
    DateTimeType.DATE_AND_TIME: 'enter_valid_date_and_time',
    DateTimeType.LOCAL_DATE_AND_TIME: 'enter_valid_date_and_time',
    DateTimeType.MONTH: 'enter_valid_month',
    DateTimeType.TIME: 'enter_valid_time',
    DateTimeType.WEEK: 'enter_valid_week',
}


class ViewFieldForDateTime(ViewFieldForElement):
    """Date, time, month or week input.

    Args:
        step: Granularity of valid values as timedelta, zero for any value
        date_time_type: What part of the value is edited and displayed
        min_value: Earliest valid value, None for no lower bound
        max_value: Latest valid value, None for no upper bound
    """

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, step: timedelta = timedelta(0),
                 date_time_type: DateTimeType = DateTimeType.DATE, *,
                 min_value: Optional[datetime] = None, max_value: Optional[datetime] = None,
                 option_provider: Optional[OptionProvider] = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.date_time_type = date_time_type
        self.step = step
        self.min_value = min_value
        self.max_value = max_value
        self.option_provider = option_provider

    @property
    def step(self) -> timedelta:
        return self._step

    @step.setter
    def step(self, value: timedelta) -> None:
        if value < timedelta(0):
            raise ValueError("Step may not be < 0.")
        self._step = value

    def _message_name(self) -> str:
        try:
            return _MESSAGE_NAMES[self.date_time_type]
        except KeyError:
            raise ValueError(f'DateTimeType "{self.date_time_type}" is not known.') from None

    def get_error_message_for_value_out_of_bounds(self, min_value: Optional[datetime],
                                                  max_value: Optional[datetime]) -> str:
        lower = date_time.format_read_only(min_value or datetime.min, self.date_time_type)
        upper = date_time.format_read_only(max_value or datetime.max, self.date_time_type)
        return get_message(f'{self._message_name()}_between', lower, upper)

    def get_default_error_message(self) -> str:
        if self.min_value is None and self.max_value is None:
            message = get_message(self._message_name())
        else:
            message = self.get_error_message_for_value_out_of_bounds(self.min_value, self.max_value)
        return self._with_info(message)

    def create_presentable_field(self, parent: Any) -> PresentableFieldForElement:
        return PresentableFieldForDateTime(parent, self.key)

    def get_read_only_value_for(self, presentable_field: PresentableFieldForElement, topmost: Any,
                                option_data: Any) -> str:
        value = presentable_field.value_as_object
        if value is None:
            return ''
        return date_time.format_read_only(value, self.date_time_type)

    def parse_read_only_value(self, read_only_value: Optional[str], option_data: Any) -> Optional[datetime]:
        return date_time.parse_read_only(read_only_value, self.date_time_type)

    def is_value_in_rules(self, value: datetime) -> bool:
        ticks = date_time.ticks_of(value)
        if self.min_value is not None and ticks < date_time.ticks_of(self.min_value):
            return False
        if self.max_value is not None and ticks > date_time.ticks_of(self.max_value):
            return False
        if self._step > timedelta(0):
            step_base = date_time.ticks_of(self.min_value) if self.min_value is not None else 0
            if (step_base - ticks) % (self._step // date_time.MICROSECOND) != 0:
                return False
        return True

    def validate(self, presentable_field: PresentableFieldForElement, validity_check: ValidityCheck,
                 topmost: Any, option_data: Any) -> Optional[str]:
        error_message = super().validate(presentable_field, validity_check, topmost, option_data)
        value = presentable_field.value_as_string
        if error_message or not value:
            return error_message
        value_as_date_time = date_time.parse_iso(value)
        if value_as_date_time is None or not self.is_value_in_rules(value_as_date_time):
            return self.get_default_error_message()
        return None


class ViewFieldForSubsequentDateTime(ViewFieldForDateTime):
    """Date/time that must not be earlier than the value of a previous field."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, step: timedelta = timedelta(0),
                 date_time_type: DateTimeType = DateTimeType.DATE,
                 previous_field_key: kc.KeyOrChain = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, step, date_time_type, **kwargs)
        self.previous_field_key = kc.to_key(kc.as_key_chain(previous_field_key))

    @property
    def previous_field_key_chain(self) -> kc.KeyChain:
        return kc.from_key(self.previous_field_key)

    @previous_field_key_chain.setter
    def previous_field_key_chain(self, value) -> None:
        self.previous_field_key = kc.to_key(value)

    def validate(self, presentable_field: PresentableFieldForElement, validity_check: ValidityCheck,
                 topmost: Any, option_data: Any) -> Optional[str]:
        error_message = super().validate(presentable_field, validity_check, topmost, option_data)
        chain = self.previous_field_key_chain
        previous_field = None
        if presentable_field.parent is not None:
            previous_field = presentable_field.parent.find_presentable_field(chain)
        if not isinstance(previous_field, PresentableFieldForElement) and topmost is not None:
            previous_field = topmost.find_presentable_field(chain)
        if not isinstance(previous_field, PresentableFieldForElement):
            logger.error(f"Previous field '{self.previous_field_key}' of field '{self.key}' is missing")
            raise FieldNotFoundError(f'Presentable field with key "{self.previous_field_key}" cannot be found.')
        previous_value = previous_field.value_as_string
        subsequent_value = presentable_field.value_as_string
        if error_message or not subsequent_value or not previous_value:
            return error_message
        subsequent = date_time.parse_iso(subsequent_value)
        previous = date_time.parse_iso(previous_value)
        if subsequent is None or previous is None:
            return self.get_default_error_message()
        if date_time.ticks_of(subsequent) < date_time.ticks_of(previous):
            return self._with_info(self.get_error_message_for_value_out_of_bounds(previous, self.max_value))
        return None
