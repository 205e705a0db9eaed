"""Pytest configuration and shared fixtures."""
import pytest
from decimal import Decimal

import formconf.global_config as global_config_module
import formconf.messages as messages_module
from formconf import clear_global_settings
from formbinding import (
    InMemoryUserDirectory,
    OptionDataProvider,
    PresentableFieldForDecimal,
    PresentableFieldForPresentableObject,
    PresentableFieldForPresentableObjectCollection,
    PresentableFieldForString,
    PresentableObject,
    User,
)


def build_item(description: str = '', quantity=None) -> PresentableObject:
    """Order item with a description and a quantity."""
    item = PresentableObject()
    item.add_presentable_field(PresentableFieldForString(item, 'description', description))
    item.add_presentable_field(PresentableFieldForDecimal(item, 'quantity', quantity))
    return item


def build_order(title: str = '', items=()) -> PresentableObject:
    """Order with a title, a nested customer, items and a read-only note."""
    order = PresentableObject()
    order.add_presentable_field(PresentableFieldForString(order, 'title', title))

    customer = PresentableObject()
    customer.add_presentable_field(PresentableFieldForString(customer, 'name', 'Ada'))
    customer.add_presentable_field(PresentableFieldForDecimal(customer, 'credit', Decimal('50')))
    order.add_presentable_field(PresentableFieldForPresentableObject(order, 'customer', customer))

    order.add_presentable_field(PresentableFieldForPresentableObjectCollection(
        order, 'items', list(items), item_factory=build_item))
    order.add_presentable_field(PresentableFieldForString(order, 'notes', 'fixed', is_read_only=True))
    order.add_presentable_field(PresentableFieldForDecimal(order, 'limit', Decimal('100')))
    return order


@pytest.fixture(autouse=True)
def reset_form_settings():
    """Restore global settings and message catalogs after each test."""
    original_contexts = dict(global_config_module._global_settings_contexts)
    original_catalogs = {locale: dict(catalog) for locale, catalog in messages_module._catalogs.items()}

    yield

    clear_global_settings()
    global_config_module._global_settings_contexts.clear()
    global_config_module._global_settings_contexts.update(original_contexts)
    messages_module._catalogs.clear()
    messages_module._catalogs.update(original_catalogs)


@pytest.fixture
def order():
    """Order with two items."""
    return build_order('Office supplies', [build_item('Pens', Decimal('10')), build_item('Paper', Decimal('2'))])


@pytest.fixture
def make_item():
    return build_item


@pytest.fixture
def make_order():
    return build_order


@pytest.fixture
def ada():
    return User('ada', 'Ada Lovelace', id='1', email='ada@example.org')


@pytest.fixture
def alan():
    return User('alan', 'Alan Turing', id='2')


@pytest.fixture
def user_directory(ada, alan):
    return InMemoryUserDirectory([ada, alan])


@pytest.fixture
def option_data(user_directory):
    return OptionDataProvider(user_directory=user_directory)
