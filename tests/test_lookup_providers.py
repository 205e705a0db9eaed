"""Tests for lookup providers."""
import pytest

from formbinding import (
    LookupProvider,
    OptionDataProvider,
    PersonLookupProvider,
    PresentableFieldForString,
    PresentableObject,
    PresentableObjectLookupProvider,
    PresentationError,
    StaticStringLookupProvider,
)


@pytest.fixture
def countries():
    return StaticStringLookupProvider({'de': 'Germany', 'dk': 'Denmark', 'ge': 'Georgia'})


def make_named(name):
    obj = PresentableObject()
    obj.add_presentable_field(PresentableFieldForString(obj, 'name', name))
    return obj


class TestVagueTerms:
    """Test searching and ranking by vague terms."""

    def test_values_starting_with_term_rank_first(self):
        assert LookupProvider.sort_values_for('an', ['Banana', 'Anton', 'and']) == ['and', 'Anton', 'Banana']

    def test_find_values(self, countries):
        assert countries.find_values_by_vague_term('G', None, None) == ['Georgia', 'Germany']

    def test_unique_value(self, countries):
        assert countries.find_unique_value_by_vague_term('man', None, None) == 'Germany'
        assert countries.find_unique_value_by_vague_term('Denmark', None, None) == 'Denmark'

    def test_ambiguous_or_empty_term(self, countries):
        assert countries.find_unique_value_by_vague_term('e', None, None) is None
        assert countries.find_unique_value_by_vague_term('', None, None) is None
        assert countries.find_unique_value_by_vague_term('xyz', None, None) is None

    @pytest.mark.parametrize('value, expected', [
        ('Ada Lovelace (ada)', (True, 'Ada Lovelace', 'ada')),
        ('Ada Lovelace', (False, None, None)),
        ('(ada)', (False, None, None)),
        ('Ada ()', (False, None, None)),
        (None, (False, None, None)),
    ])
    def test_split_value_with_parenthesis(self, value, expected):
        assert LookupProvider.try_split_value_with_parenthesis(value) == expected


class TestStringLookupProvider:
    """Test key/value conversion of string lookups."""

    def test_conversion(self, countries):
        assert countries.find_value_for_key('de', None, None) == 'Germany'
        assert countries.find_key_for_value('Denmark', None, None) == 'dk'
        assert countries.find_value_for_key('', None, None) is None

    def test_contains_key(self, countries):
        assert countries.contains_key('ge', None, None)
        assert not countries.contains_key('fr', None, None)

    def test_empty_display_value_is_a_configuration_error(self):
        provider = StaticStringLookupProvider({'x': ''})
        with pytest.raises(PresentationError, match='Empty string'):
            provider.contains_key('x', None, None)


class TestPresentableObjectLookupProvider:
    """Test lookups over presentable objects."""

    def test_conversion(self):
        bob, eve = make_named('Bob'), make_named('Eve')
        provider = PresentableObjectLookupProvider([bob, eve])
        assert provider.find_value_for_key(eve, None, None) == 'Eve'
        assert provider.find_key_for_value('Bob', None, None) is bob
        assert provider.find_values_by_vague_term('e', None, None) == ['Eve']
        assert not provider.contains_key(make_named('Mallory'), None, None)


class TestPersonLookupProvider:
    """Test person lookups against a user directory."""

    def test_display_value_includes_user_name(self, option_data):
        provider = PersonLookupProvider()
        assert provider.find_value_for_key('ada', None, option_data) == 'Ada Lovelace (ada)'
        assert provider.find_value_for_key('grace', None, option_data) is None

    def test_key_from_display_value(self, option_data):
        provider = PersonLookupProvider()
        assert provider.find_key_for_value('Ada Lovelace (ada)', None, option_data) == 'ada'
        assert provider.find_key_for_value('Ada Lovelace', None, option_data) is None

    def test_vague_term(self, option_data):
        provider = PersonLookupProvider()
        assert provider.find_values_by_vague_term('lov', None, option_data) == ['Ada Lovelace (ada)']

    def test_requires_user_directory(self):
        with pytest.raises(PresentationError):
            PersonLookupProvider().find_value_for_key('ada', None, OptionDataProvider())
