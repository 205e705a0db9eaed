"""
Ambient configuration for form binding.

- settings: FormSettings, the frozen dataclass read by formatters and validators
- global_config: thread-local global settings
- context_manager: settings_context(), contextvars-scoped overrides
- messages: localized message catalogs looked up by symbolic name
"""

from formconf.settings import FormSettings
from formconf.global_config import (
    set_global_settings,
    get_global_settings,
    clear_global_settings,
)
from formconf.context_manager import (
    settings_context,
    get_current_settings,
)
from formconf.messages import (
    register_catalog,
    unregister_catalog,
    get_message,
)

__all__ = [
    # Settings
    'FormSettings',

    # Global settings
    'set_global_settings',
    'get_global_settings',
    'clear_global_settings',

    # Context management
    'settings_context',
    'get_current_settings',

    # Messages
    'register_catalog',
    'unregister_catalog',
    'get_message',
]
