"""Tests for option providers and user directories."""
import pytest

from formbinding import (
    FilterCriteria,
    FilterScope,
    GroupedOptionProvider,
    OptionDataProvider,
    OptionProvider,
    SortCriterion,
    StaticOptionProvider,
    StaticPersonOptionProvider,
)


@pytest.fixture
def colors():
    return StaticOptionProvider([('r', 'Red'), ('g', 'Green')], icon_urls={'r': '/icons/red.png'})


class TestOptionProvider:
    """Test queries derived from the option enumeration."""

    def test_key_and_value_lookup(self, colors):
        assert colors.find_value_for_key('r', None, None, None) == 'Red'
        assert colors.find_key_for_value('Green', None, None, None) == 'g'
        assert colors.find_value_for_key('', None, None, None) is None
        assert colors.find_key_for_value('Blue', None, None, None) is None

    def test_contains_key(self, colors):
        assert colors.contains_key('g', None, None, None)
        assert not colors.contains_key('b', None, None, None)

    def test_count_key_counts_distinct_values(self):
        repeated = StaticOptionProvider([('r', 'Red'), ('r', 'Red')])
        ambiguous = StaticOptionProvider([('r', 'Red'), ('r', 'Rot')])
        assert repeated.count_key('r', None, None, None) == 1
        assert ambiguous.count_key('r', None, None, None) == 2
        assert ambiguous.count_key('x', None, None, None) == 0

    def test_read_only_options_skip_empty_and_unknown_keys(self, colors):
        options = list(colors.find_read_only_options_for_keys(['r', '', 'x', 'g'], None, None, None))
        assert options == [('r', 'Red'), ('g', 'Green')]
        assert colors.find_read_only_value_for_key('x', None, None, None) is None

    def test_option_dictionary_last_duplicate_wins(self):
        provider = StaticOptionProvider([('r', 'Red'), ('r', 'Rot')])
        assert provider.get_option_dictionary(None, None, None) == {'r': 'Rot'}

    def test_mapping_options(self):
        provider = StaticOptionProvider({'a': 'Alpha'})
        assert provider.options == [('a', 'Alpha')]

    def test_icons(self, colors):
        assert colors.get_icon_url_for('r', None) == '/icons/red.png'
        assert colors.get_icon_url_for('g', None) is None

    def test_has_options(self, colors):
        assert colors.has_options(None, None, None)
        assert not OptionProvider().has_options(None, None, None)
        assert OptionProvider().get_display_value_for_null() == ''

    def test_none_options_are_treated_as_empty(self):
        class BrokenProvider(OptionProvider):
            def get_options(self, parent, topmost, option_data):
                return None

        provider = BrokenProvider()
        assert provider.find_value_for_key('a', None, None, None) is None
        assert not provider.has_options(None, None, None)

    def test_grouped_provider_concatenates(self, colors):
        grouped = GroupedOptionProvider([colors, None, StaticOptionProvider([('b', 'Blue')], {'b': '/b.png'})])
        assert grouped.get_option_dictionary(None, None, None) == {'r': 'Red', 'g': 'Green', 'b': 'Blue'}
        assert grouped.get_icon_url_for('b', None) == '/b.png'


class TestPersonOptionProvider:
    """Test person options and resolution of missing users."""

    def test_options_are_keyed_by_user_name(self, ada):
        provider = StaticPersonOptionProvider([ada])
        assert provider.get_option_dictionary(None, None, None) == {'ada': 'Ada Lovelace'}

    def test_missing_user_resolved_from_directory(self, ada, option_data):
        provider = StaticPersonOptionProvider([ada], is_resolving_missing_users_in_read_only_mode=True)
        assert provider.find_read_only_value_for_key('alan', None, None, option_data) == 'Alan Turing'
        assert provider.find_read_only_value_for_key('grace', None, None, option_data) is None

    def test_missing_user_not_resolved_by_default(self, ada, option_data):
        provider = StaticPersonOptionProvider([ada])
        assert provider.find_read_only_value_for_key('alan', None, None, option_data) is None

    def test_missing_user_without_directory(self, ada):
        provider = StaticPersonOptionProvider([ada], is_resolving_missing_users_in_read_only_mode=True)
        assert provider.find_read_only_value_for_key('alan', None, None, OptionDataProvider()) is None


class TestUserDirectory:
    """Test the in-memory user directory."""

    def test_find_with_criteria(self, user_directory, alan):
        assert user_directory.find(FilterCriteria.equals('user_name', 'alan')) == [alan]
        assert user_directory.find_one(FilterCriteria.equals('user_name', 'grace')) is None

    def test_find_sorted_descending(self, user_directory, ada, alan):
        users = user_directory.find(FilterCriteria(), [SortCriterion('display_name', descending=True)])
        assert users == [alan, ada]

    def test_vague_term(self, user_directory, ada, alan):
        assert user_directory.find_by_vague_term('a') == [ada, alan]
        assert user_directory.find_one_by_vague_term('Turing') == alan
        assert user_directory.find_by_vague_term('') == []

    def test_ambiguous_vague_term(self, user_directory, ada):
        assert user_directory.find_one_by_vague_term('a') is None
        assert user_directory.find_one_by_vague_term('ada') == ada

    def test_vague_term_scope(self, user_directory):
        assert user_directory.find_by_vague_term('lovelace', FilterScope.USER_NAME) == []
        assert len(user_directory.find_by_vague_term('lovelace', FilterScope.DISPLAY_NAME)) == 1
