"""
Message catalogs for validation errors and field info strings.

Every user-facing string is looked up by symbolic name and formatted with
str.format() positional arguments. The catalog is chosen by the locale of the
currently effective FormSettings; names missing from that catalog fall back to
the English catalog and finally to the symbolic name itself.
"""

import logging
from typing import Any, Dict, Mapping

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = 'en'

ENGLISH_MESSAGES: Dict[str, str] = {
    # Mandatoriness info
    'this_is_a_mandatory_field': "This is a mandatory field.",
    'alternatively_leave_blank_for_now': "Alternatively you can leave this field blank for now.",
    'alternatively_leave_blank': "Alternatively you can leave this field blank.",

    # Generic values
    'enter_valid_value': "Please enter a valid value for this field.",
    'enter_valid_values': "Please enter valid values for this field.",
    'select_valid_value': "Please select a valid value for this field.",
    'select_valid_values': "Please select one or more valid values for this field.",
    'select_valid_person': "Please select a valid person for this field.",
    'selected_value_not_unique': "The selected value does not have a unique key.",
    'up_to_values_allowed': "Up to {0} values are allowed.",
    'up_to_files_allowed': "Up to {0} files are allowed.",

    # Numbers
    'enter_valid_value_less_than': "Please enter a valid value less than {0} for this field.",
    'enter_valid_value_greater_than': "Please enter a valid value greater than {0} for this field.",
    'enter_valid_value_between': "Please enter a valid value between {0} and {1} for this field.",
    'enter_valid_values_less_than': "Please enter valid values less than {0} for this field.",
    'enter_valid_values_greater_than': "Please enter valid values greater than {0} for this field.",
    'enter_valid_values_between': "Please enter valid values between {0} and {1} for this field.",
    'enter_valid_value_less_than_and_unit': "Please enter a valid value less than {0} and a unit for this field.",
    'enter_valid_value_greater_than_and_unit': "Please enter a valid value greater than {0} and a unit for this field.",
    'enter_valid_value_between_and_unit': "Please enter a valid value between {0} and {1} and a unit for this field.",
    'enter_valid_value_less_than_and_select_unit': "Please enter a valid value less than {0} and select a unit for this field.",
    'enter_valid_value_greater_than_and_select_unit': "Please enter a valid value greater than {0} and select a unit for this field.",
    'enter_valid_value_between_and_select_unit': "Please enter a valid value between {0} and {1} and select a unit for this field.",

    # Dates and times
    'enter_valid_date': "Please enter a valid date for this field.",
    'enter_valid_date_between': "Please enter a valid date between {0} and {1} for this field.",
    'enter_valid_date_and_time': "Please enter a valid date and time for this field.",
    'enter_valid_date_and_time_between': "Please enter a valid date and time between {0} and {1} for this field.",
    'enter_valid_month': "Please enter a valid month for this field.",
    'enter_valid_month_between': "Please enter a valid month between {0} and {1} for this field.",
    'enter_valid_time': "Please enter a valid time for this field.",
    'enter_valid_time_between': "Please enter a valid time between {0} and {1} for this field.",
    'enter_valid_week': "Please enter a valid week for this field.",
    'enter_valid_week_between': "Please enter a valid week between {0} and {1} for this field.",

    # Text lengths
    'enter_valid_value_at_most_one_character': "Please enter a valid value with at most one character for this field.",
    'enter_valid_value_at_most_characters': "Please enter a valid value with at most {0} characters for this field.",
    'enter_valid_value_at_least_one_character': "Please enter a valid value with at least one character for this field.",
    'enter_valid_value_at_least_characters': "Please enter a valid value with at least {0} characters for this field.",
    'enter_valid_value_between_characters': "Please enter a valid value with at least {0} and at most {1} characters for this field.",
    'enter_valid_values_at_most_one_character': "Please enter valid values with at most one character for this field.",
    'enter_valid_values_at_most_characters': "Please enter valid values with at most {0} characters for this field.",
    'password_character_variance': "Please make sure the value contains at least an upper case character, a lower case character, a numeric character and a special character.",

    # Files
    'select_file_max_size': "Please select a file with a maximum file size of {0} MB.",
    'select_allowed_file_max_size': "Please select a file of an allowed type with a maximum file size of {0} MB.",
    'select_files_max_size': "Please select files with a maximum file size of {0} MB.",
    'select_allowed_files_max_size': "Please select files of allowed types with a maximum file size of {0} MB.",
    'file_name_forbidden_characters': "Please make sure file names do not contain any of the following characters: {0}",
    'image_min_side_length': "The minimum image side length of the longer side must be {0} pixels.",
    'image_min_resolution': "The minimum image resolution must be {0}x{1} pixels.",

    # Collection panes
    'confirm_delete_tab': "Would you really like to delete the tab?",
    'confirm_delete_row': "Would you really like to delete the row?",

    # Read-only rendering
    'yes': "Yes",
    'no': "No",
}

_catalogs: Dict[str, Dict[str, str]] = {DEFAULT_LOCALE: dict(ENGLISH_MESSAGES)}


def register_catalog(locale: str, messages: Mapping[str, str]) -> None:
    """Register (or extend) the message catalog for a locale."""
    catalog = _catalogs.setdefault(locale, {})
    catalog.update(messages)
    logger.debug(f"Registered {len(messages)} messages for locale '{locale}'")


def unregister_catalog(locale: str) -> None:
    """Remove a registered catalog. The default catalog cannot be removed."""
    if locale == DEFAULT_LOCALE:
        raise ValueError(f"The default catalog '{DEFAULT_LOCALE}' cannot be unregistered")
    _catalogs.pop(locale, None)


def get_message(name: str, *args: Any) -> str:
    """Look up a message by symbolic name in the current locale and format it.

    Args:
        name: Symbolic message name, e.g. 'enter_valid_value'
        *args: Positional format arguments for the template

    Returns:
        The formatted message
    """
    from formconf.context_manager import get_current_settings

    locale = get_current_settings().locale
    template = _catalogs.get(locale, {}).get(name)
    if template is None:
        template = _catalogs[DEFAULT_LOCALE].get(name)
        if template is None:
            logger.debug(f"No message registered for '{name}'")
            return name
    return template.format(*args) if args else template
