"""Enumerations shared by presentable fields, view fields and panes."""

from enum import Enum


class Mandatoriness(Enum):
    """How strongly a field asks for a value."""
    OPTIONAL = "optional"
    DESIRED = "desired"
    REQUIRED = "required"


class ValidityCheck(Enum):
    """Strictness of a validation pass. STRICT treats DESIRED fields as mandatory."""
    LOOSE = "loose"
    STRICT = "strict"


class DateTimeType(Enum):
    DATE = "date"
    DATE_AND_TIME = "date_and_time"
    LOCAL_DATE_AND_TIME = "local_date_and_time"
    MONTH = "month"
    TIME = "time"
    WEEK = "week"


class ValueSeparator(Enum):
    """Joiner used when rendering collection values as one read-only string."""
    NONE = "none"
    COMMA = "comma"
    SEMICOLON = "semicolon"
    SPACE = "space"
    LINE_BREAK = "line_break"


class FieldRenderMode(Enum):
    FORM = "form"
    LIST_TABLE = "list_table"


class SectionGroupType(Enum):
    """Layout of the sections of collection and grouped panes."""
    TABS = "tabs"
    TABLE = "table"


class OptionControlType(Enum):
    AUTOMATIC = "automatic"
    DROP_DOWN_LIST = "drop_down_list"
    RADIO_BUTTONS = "radio_buttons"


class OptionDisplayStyle(Enum):
    NONE = "none"
    TEXT_ONLY = "text_only"
    ICON_ONLY = "icon_only"
    TEXT_WITH_ICON_FALLBACK = "text_with_icon_fallback"
    ICON_WITH_TEXT_FALLBACK = "icon_with_text_fallback"
