"""
Contextvars-based scoping for form settings.

Resolution order for get_current_settings():
1. The innermost settings_context() active in the current execution context
2. The thread-local global settings (set_global_settings)
3. Static FormSettings() defaults

Usage:
    with settings_context(locale='de', thousands_separator='.'):
        view_field.get_read_only_value_for(field, root, data)
"""

import contextvars
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from formconf.global_config import get_global_settings
from formconf.settings import FormSettings

logger = logging.getLogger(__name__)

current_settings: contextvars.ContextVar[Optional[FormSettings]] = contextvars.ContextVar(
    'current_settings', default=None
)


def get_current_settings() -> FormSettings:
    """Resolve the settings in effect for the current context."""
    settings = current_settings.get()
    if settings is not None:
        return settings
    settings = get_global_settings()
    if settings is not None:
        return settings
    return FormSettings()


@contextmanager
def settings_context(settings: Optional[FormSettings] = None, **overrides: Any) -> Iterator[FormSettings]:
    """Create a new settings scope.

    Args:
        settings: Complete settings to use as the base of the new scope. When
            omitted, the currently effective settings are the base.
        **overrides: Individual FormSettings fields to override; None values
            are ignored so callers can pass optional arguments through.

    Yields:
        The settings in effect inside the scope.
    """
    base = settings if settings is not None else get_current_settings()
    merged = base.with_overrides(**overrides)
    logger.debug(f"Entering settings context: locale={merged.locale}")
    token = current_settings.set(merged)
    try:
        yield merged
    finally:
        current_settings.reset(token)
