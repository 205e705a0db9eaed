"""
Color view fields.

A color is stored as its HTML notation: a hex value such as '#1e90ff' or
'#fff', or one of the CSS named colors. Case is not significant.
"""

import logging
import re
from typing import Any, Optional

from formbinding import key_chain as kc
from formbinding.enums import FieldRenderMode, Mandatoriness, ValidityCheck, ValueSeparator
from formbinding.option_provider import OptionProvider
from formbinding.presentable_field import PresentableFieldForElement, PresentableFieldForString
from formbinding.view_field import ViewFieldForCollection, ViewFieldForElement

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r'^#(?:[0-9a-f]{3}|[0-9a-f]{6})$', re.IGNORECASE)

NAMED_COLORS = frozenset((
    'aliceblue', 'antiquewhite', 'aqua', 'aquamarine', 'azure', 'beige', 'bisque', 'black',
    'blanchedalmond', 'blue', 'blueviolet', 'brown', 'burlywood', 'cadetblue', 'chartreuse',
    'chocolate', 'coral', 'cornflowerblue', 'cornsilk', 'crimson', 'cyan', 'darkblue', 'darkcyan',
    'darkgoldenrod', 'darkgray', 'darkgreen', 'darkgrey', 'darkkhaki', 'darkmagenta',
    'darkolivegreen', 'darkorange', 'darkorchid', 'darkred', 'darksalmon', 'darkseagreen',
    'darkslateblue', 'darkslategray', 'darkslategrey', 'darkturquoise', 'darkviolet', 'deeppink',
    'deepskyblue', 'dimgray', 'dimgrey', 'dodgerblue', 'firebrick', 'floralwhite', 'forestgreen',
    'fuchsia', 'gainsboro', 'ghostwhite', 'gold', 'goldenrod', 'gray', 'green', 'greenyellow', 'grey',
    'honeydew', 'hotpink', 'indianred', 'indigo', 'ivory', 'khaki', 'lavender', 'lavenderblush',
    'lawngreen', 'lemonchiffon', 'lightblue', 'lightcoral', 'lightcyan', 'lightgoldenrodyellow',
    'lightgray', 'lightgreen', 'lightgrey', 'lightpink', 'lightsalmon', 'lightseagreen',
    'lightskyblue', 'lightslategray', 'lightslategrey', 'lightsteelblue', 'lightyellow', 'lime',
    'limegreen', 'linen', 'magenta', 'maroon', 'mediumaquamarine', 'mediumblue', 'mediumorchid',
    'mediumpurple', 'mediumseagreen', 'mediumslateblue', 'mediumspringgreen', 'mediumturquoise',
    'mediumvioletred', 'midnightblue', 'mintcream', 'mistyrose', 'moccasin', 'navajowhite', 'navy',
    'oldlace', 'olive', 'olivedrab', 'orange', 'orangered', 'orchid', 'palegoldenrod', 'palegreen',
    'paleturquoise', 'palevioletred', 'papayawhip', 'peachpuff', 'peru', 'pink', 'plum',
    'powderblue', 'purple', 'rebeccapurple', 'red', 'rosybrown', 'royalblue', 'saddlebrown', 'salmon',
    'sandybrown', 'seagreen', 'seashell', 'sienna', 'silver', 'skyblue', 'slateblue', 'slategray',
    'slategrey', 'snow', 'springgreen', 'steelblue', 'tan', 'teal', 'thistle', 'tomato',
    'transparent', 'turquoise', 'violet', 'wheat', 'white', 'whitesmoke', 'yellow', 'yellowgreen',
))


def is_html_color(text: Optional[str]) -> bool:
    """Whether text is a hex color or a CSS color name."""
    if not text:
        return False
    text = text.strip()
    return bool(_HEX_COLOR.match(text)) or text.lower() in NAMED_COLORS


class ViewFieldForColor(ViewFieldForElement):
    """Single color, optionally offering suggestions from an option provider."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 option_provider: Optional[OptionProvider] = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.option_provider = option_provider

    def create_presentable_field(self, parent: Any) -> PresentableFieldForElement:
        return PresentableFieldForString(parent, self.key)

    def validate(self, presentable_field: PresentableFieldForElement, validity_check: ValidityCheck,
                 topmost: Any, option_data: Any) -> Optional[str]:
        error_message = super().validate(presentable_field, validity_check, topmost, option_data)
        value = presentable_field.value_as_string
        if error_message or not value:
            return error_message
        if not is_html_color(value):
            logger.debug(f"'{value}' is no color for field '{self.key}'")
            return self.get_default_error_message()
        return None


class ViewFieldForMultipleColors(ViewFieldForCollection):
    """Comma-separated list of colors, each checked like a ViewFieldForColor."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 mandatoriness: Mandatoriness = Mandatoriness.OPTIONAL, *,
                 option_provider: Optional[OptionProvider] = None, **kwargs: Any):
        super().__init__(title, key, mandatoriness, **kwargs)
        self.option_provider = option_provider

    def get_value_separator(self, render_mode: FieldRenderMode) -> ValueSeparator:
        return ValueSeparator.COMMA

    def create_element_view_field(self) -> ViewFieldForColor:
        element = ViewFieldForColor(self.title, self.key, Mandatoriness.OPTIONAL,
                                    option_provider=self.option_provider)
        return self._copy_description_to(element)
