"""
Thread-local storage for the global form settings.

Global settings are the base layer for settings resolution; settings_context()
layers per-context overrides on top of whatever is stored here for the current
thread. Each settings type gets its own thread-local slot so applications may
subclass FormSettings without clobbering the library default.
"""

import threading
from typing import Dict, Optional, Type

from formconf.settings import FormSettings


_global_settings_contexts: Dict[Type, threading.local] = {}


def set_global_settings(settings: FormSettings, settings_type: Optional[Type] = None) -> None:
    """Set the global settings for the current thread.

    Args:
        settings: The settings instance to store
        settings_type: Slot to store it under (defaults to FormSettings)
    """
    settings_type = settings_type or FormSettings
    if settings_type not in _global_settings_contexts:
        _global_settings_contexts[settings_type] = threading.local()
    _global_settings_contexts[settings_type].value = settings


def get_global_settings(settings_type: Optional[Type] = None) -> Optional[FormSettings]:
    """Get the global settings for the current thread, or None if never set."""
    context = _global_settings_contexts.get(settings_type or FormSettings)
    return getattr(context, 'value', None) if context else None


def clear_global_settings(settings_type: Optional[Type] = None) -> None:
    """Forget the global settings stored for the current thread."""
    context = _global_settings_contexts.get(settings_type or FormSettings)
    if context is not None and hasattr(context, 'value'):
        del context.value
