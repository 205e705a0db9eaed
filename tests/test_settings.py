"""Tests for form settings, settings scopes and message catalogs."""
import threading

import pytest

from formconf import (
    FormSettings,
    clear_global_settings,
    get_current_settings,
    get_global_settings,
    get_message,
    register_catalog,
    set_global_settings,
    settings_context,
    unregister_catalog,
)


class TestFormSettings:
    """Test the settings dataclass."""

    def test_defaults(self):
        settings = FormSettings()
        assert settings.locale == 'en'
        assert settings.thousands_separator == ','
        assert settings.value_separators['LINE_BREAK'] == '\n'

    def test_dict_round_trip(self):
        settings = FormSettings(locale='de', thousands_separator='.', decimal_separator=',')
        assert FormSettings.from_dict(settings.to_dict()) == settings

    def test_from_dict_rejects_unknown_names(self):
        with pytest.raises(ValueError, match='Unknown form settings'):
            FormSettings.from_dict({'colour': 'blue'})

    def test_with_overrides_ignores_none(self):
        settings = FormSettings()
        assert settings.with_overrides(locale=None) is settings
        assert settings.with_overrides(locale='fr').locale == 'fr'

    def test_with_overrides_rejects_unknown_names(self):
        with pytest.raises(ValueError):
            FormSettings().with_overrides(colour='blue')


class TestSettingsResolution:
    """Test context, global and default resolution order."""

    def test_static_defaults_without_anything_set(self):
        assert get_global_settings() is None
        assert get_current_settings() == FormSettings()

    def test_global_settings_are_used(self):
        set_global_settings(FormSettings(locale='de'))
        assert get_current_settings().locale == 'de'
        clear_global_settings()
        assert get_current_settings().locale == 'en'

    def test_global_settings_are_thread_local(self):
        set_global_settings(FormSettings(locale='de'))
        seen = []
        thread = threading.Thread(target=lambda: seen.append(get_global_settings()))
        thread.start()
        thread.join()
        assert seen == [None]

    def test_context_overrides_global(self):
        set_global_settings(FormSettings(locale='de', decimal_separator=','))
        with settings_context(locale='fr') as settings:
            assert settings.locale == 'fr'
            assert get_current_settings().decimal_separator == ','
        assert get_current_settings().locale == 'de'

    def test_nested_contexts_layer(self):
        with settings_context(thousands_separator="'"):
            with settings_context(decimal_separator=','):
                current = get_current_settings()
                assert current.thousands_separator == "'"
                assert current.decimal_separator == ','
            assert get_current_settings().decimal_separator == '.'
        assert get_current_settings().thousands_separator == ','

    def test_context_with_complete_settings(self):
        with settings_context(FormSettings(locale='nl'), max_file_size=10) as settings:
            assert settings.locale == 'nl'
            assert settings.max_file_size == 10


class TestMessages:
    """Test message lookup and catalogs."""

    def test_formats_arguments(self):
        assert get_message('up_to_values_allowed', 3) == "Up to 3 values are allowed."

    def test_unknown_name_returns_name(self):
        assert get_message('no_such_message') == 'no_such_message'

    def test_registered_catalog_with_fallback(self):
        register_catalog('de', {'yes': 'Ja'})
        with settings_context(locale='de'):
            assert get_message('yes') == 'Ja'
            assert get_message('no') == 'No'
        assert get_message('yes') == 'Yes'

    def test_unregister_catalog(self):
        register_catalog('de', {'yes': 'Ja'})
        unregister_catalog('de')
        with settings_context(locale='de'):
            assert get_message('yes') == 'Yes'

    def test_default_catalog_cannot_be_unregistered(self):
        with pytest.raises(ValueError):
            unregister_catalog('en')
