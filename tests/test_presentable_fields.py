"""Tests for presentable fields and key chain resolution on presentable objects."""
from datetime import datetime
from decimal import Decimal

import pytest

from formbinding import (
    KeyChainError,
    NumberWithUnit,
    PresentableFieldForBool,
    PresentableFieldForDateTime,
    PresentableFieldForDecimal,
    PresentableFieldForDecimalCollection,
    PresentableFieldForInt,
    PresentableFieldForIntCollection,
    PresentableFieldForObject,
    PresentableFieldForPresentableObjectCollection,
    PresentableFieldForString,
    PresentableFieldForStringCollection,
    PresentableFieldForUser,
    PresentableFieldForUserCollection,
    PresentableObject,
    PresentationError,
    User,
    UserValueComparer,
)


class TestElementFields:
    """Test string round-tripping of element fields."""

    def test_empty_string_field(self):
        field = PresentableFieldForString(None, 'name')
        assert field.value_as_string == ''

    def test_int_parsing(self):
        field = PresentableFieldForInt(None, 'count', 3)
        assert field.try_set_value_as_string('12')
        assert field.value == 12
        assert not field.try_set_value_as_string('twelve')
        assert field.value == 12
        assert field.try_set_value_as_string('')
        assert field.value is None

    def test_decimal_keeps_trailing_zeros(self):
        field = PresentableFieldForDecimal(None, 'price')
        field.value_as_string = '1.50'
        assert field.value == Decimal('1.50')
        assert field.value_as_string == '1.50'

    def test_unparsable_string_setter_raises(self):
        field = PresentableFieldForDecimal(None, 'price')
        with pytest.raises(ValueError):
            field.value_as_string = 'abc'

    def test_bool_parsing(self):
        field = PresentableFieldForBool(None, 'active')
        assert field.value_as_string == 'false'
        assert field.try_set_value_as_string('TRUE')
        assert field.value is True
        assert field.try_set_value_as_string('')
        assert field.value is False
        assert not field.try_set_value_as_string('maybe')

    def test_date_time_iso(self):
        field = PresentableFieldForDateTime(None, 'due')
        field.value_as_string = '2024-03-01'
        assert field.value == datetime(2024, 3, 1)
        assert field.value_as_string == '2024-03-01T00:00:00'

    def test_object_field_rejects_strings(self):
        field = PresentableFieldForObject(None, 'attachment', object())
        assert not field.try_set_value_as_string('x')
        assert field.try_set_value_as_string('')
        assert field.value is None

    def test_plain_text_strips_markup(self):
        field = PresentableFieldForString(None, 'text', '<p>Fish &amp; Chips</p><p>Tea</p>')
        assert field.get_value_as_plain_text() == 'Fish & Chips Tea'

    def test_new_items(self):
        assert PresentableFieldForInt(None, 'count').new_item_as_object() == 0
        assert PresentableFieldForDateTime(None, 'due').new_item_as_object() == datetime.min


class TestCollectionFields:
    """Test mutation and views of collection fields."""

    def test_mutation(self):
        field = PresentableFieldForStringCollection(None, 'tags', ['b', 'a'])
        field.add('c')
        assert len(field) == 3
        assert 'c' in field
        assert field.remove('a')
        assert not field.remove('missing')
        field.swap(0, 1)
        assert list(field) == ['c', 'b']
        field.clear()
        assert field.count == 0

    def test_sort_with_comparison(self):
        field = PresentableFieldForIntCollection(None, 'numbers', [3, 1, 2])
        field.sort(comparison=lambda a, b: b - a)
        assert field.get_values_as_object() == [3, 2, 1]
        field.sort()
        assert field.get_values_as_object() == [1, 2, 3]

    def test_try_add_string_parses_elements(self):
        field = PresentableFieldForIntCollection(None, 'numbers')
        assert field.try_add_string('3')
        assert not field.try_add_string('three')
        assert field.get_values_as_object() == [3]
        with pytest.raises(ValueError):
            field.add_string('three')

    def test_values_as_string_use_element_format(self):
        field = PresentableFieldForDecimalCollection(None, 'amounts', [Decimal('1.50'), Decimal('2')])
        assert field.get_values_as_string() == ['1.50', '2']

    def test_plain_text_values(self):
        field = PresentableFieldForStringCollection(None, 'notes', ['<b>bold</b>'])
        assert field.get_values_as_plain_text() == ['bold']

    def test_item_factory(self):
        field = PresentableFieldForPresentableObjectCollection(None, 'rows', item_factory=lambda: 'row')
        assert field.new_item_as_object() == 'row'
        assert isinstance(PresentableFieldForPresentableObjectCollection(None, 'rows').new_item_as_object(),
                          PresentableObject)


class TestPresentableObject:
    """Test field registration and key chain resolution."""

    def test_add_sets_parent(self):
        obj = PresentableObject()
        field = obj.add_presentable_field(PresentableFieldForString(None, 'name'))
        assert field.parent is obj
        assert obj.keys == ['name']

    def test_duplicate_key_raises(self):
        obj = PresentableObject([PresentableFieldForString(None, 'name')])
        with pytest.raises(KeyChainError):
            obj.add_presentable_field(PresentableFieldForString(None, 'name'))

    def test_add_or_update_replaces(self):
        obj = PresentableObject([PresentableFieldForString(None, 'name', 'old')])
        obj.add_or_update_presentable_field(PresentableFieldForString(None, 'name', 'new'))
        assert obj.find_presentable_field('name').value == 'new'

    def test_find_through_nested_object(self, order):
        field = order.find_presentable_field('customer.name')
        assert field.value == 'Ada'
        assert order.presentable_fields.contains('customer.name')

    def test_find_missing_returns_none(self, order):
        assert order.find_presentable_field('missing') is None
        assert order.find_presentable_field('customer.missing') is None
        assert order.find_presentable_field('title.length') is None
        assert order.find_presentable_field(()) is None

    def test_find_with_index(self, order):
        field = order.find_presentable_field('items[1].description')
        assert field.value == 'Paper'

    def test_find_through_collection_without_index_raises(self, order):
        with pytest.raises(KeyChainError):
            order.find_presentable_field('items.description')

    def test_index_out_of_bounds_raises(self, order):
        with pytest.raises(KeyChainError, match='out of bounds'):
            order.find_presentable_field('items[5].description')

    def test_index_on_element_raises(self, order):
        with pytest.raises(KeyChainError):
            order.find_presentable_field('customer[0].name')

    def test_find_all_fans_out(self, order):
        fields = order.find_presentable_fields('items.description')
        assert [field.value for field in fields] == ['Pens', 'Paper']
        assert len(order.find_presentable_fields('items[0].description')) == 1
        assert order.find_presentable_fields('missing.name') == []


class TestUserFields:
    """Test fields holding users resolved through a user directory."""

    def test_user_name_round_trip(self, user_directory, ada):
        field = PresentableFieldForUser(None, 'owner', user_directory=user_directory)
        field.value_as_string = 'ada'
        assert field.value is ada
        assert field.value_as_string == 'ada'
        assert field.content_base_type is User

    def test_unknown_user_keeps_value(self, user_directory, ada):
        field = PresentableFieldForUser(None, 'owner', ada, user_directory=user_directory)
        assert not field.try_set_value_as_string('grace')
        assert field.value is ada
        assert field.try_set_value_as_string('')
        assert field.value is None

    def test_missing_user_directory(self):
        field = PresentableFieldForUser(None, 'owner')
        with pytest.raises(PresentationError, match="User directory of presentable field 'owner' is not set."):
            field.try_set_value_as_string('ada')

    def test_new_item_is_none(self):
        assert PresentableFieldForUser(None, 'owner').new_item_as_object() is None
        assert PresentableFieldForUserCollection(None, 'owners').new_item_as_object() is None

    def test_collection_add_string(self, user_directory, alan):
        field = PresentableFieldForUserCollection(None, 'owners', user_directory=user_directory)
        assert field.try_add_string('alan')
        assert not field.try_add_string('grace')
        assert field.get_values_as_string() == ['alan']
        assert field[0] is alan

    def test_collection_removes_by_id(self, ada, alan):
        field = PresentableFieldForUserCollection(None, 'owners', [ada, alan])
        assert field.remove(User('ada.lovelace', 'Ada', id='1'))
        assert field.get_values_as_string() == ['alan']
        assert not field.remove(ada)
        assert not field.remove(None)

    def test_collection_sort_by_field(self, ada, alan):
        field = PresentableFieldForUserCollection(None, 'owners', [alan, None, ada])
        field.sort_by_field('display_name')
        assert field.get_values_as_object() == [None, ada, alan]
        field.sort_by_field('id')
        assert field.get_values_as_object() == [None, ada, alan]

    def test_comparer_rejects_unknown_field(self):
        with pytest.raises(ValueError, match="Comparing users by field with key 'age' is not supported."):
            UserValueComparer('age')


class TestNumberWithUnit:
    """Test parsing and rendering of numbers with units."""

    def test_string_form(self):
        assert str(NumberWithUnit(Decimal('12.50'), 'kg')) == '12.50 kg'
        assert str(NumberWithUnit(Decimal('12'))) == '12'
        assert str(NumberWithUnit()) == ''

    def test_parse(self):
        assert NumberWithUnit.parse(' 3.5 square meters ') == NumberWithUnit(Decimal('3.5'), 'square meters')
        assert NumberWithUnit.parse('3.5') is None
        assert NumberWithUnit.parse('three kg') is None
        assert NumberWithUnit.parse(None) is None

    def test_has_value(self):
        assert NumberWithUnit(Decimal('1'), 'kg').has_value
        assert not NumberWithUnit(Decimal('1')).has_value
        assert not NumberWithUnit(None, 'kg').has_value
