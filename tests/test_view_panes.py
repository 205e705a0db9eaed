"""Tests for pane composition: flattening, read-only and validity aggregation."""
import pytest

from formbinding import (
    Mandatoriness,
    PresentationError,
    SectionGroupType,
    StaticOptionProvider,
    ValidityCheck,
    ViewCollectionPaneForFields,
    ViewCollectionPaneForPanes,
    ViewFieldForNumber,
    ViewFieldForSingleLineText,
    ViewFieldForStringChoice,
    ViewGroupedPane,
    ViewPaneForFields,
    ViewPaneForPanes,
)

LOOSE = ValidityCheck.LOOSE


def customer_pane(**kwargs):
    return ViewPaneForFields('Customer', 'customer', [ViewFieldForSingleLineText('Name', 'name')], **kwargs)


def general_pane():
    return ViewPaneForFields('General', None, [
        ViewFieldForSingleLineText('Title', 'title', Mandatoriness.REQUIRED),
        ViewFieldForSingleLineText('Notes', 'notes'),
    ])


def items_pane(**kwargs):
    return ViewCollectionPaneForFields('description', 'items', view_fields=[
        ViewFieldForSingleLineText('Description', 'description', Mandatoriness.REQUIRED),
        ViewFieldForNumber('Quantity', 'quantity'),
    ], **kwargs)


class TestFlattening:
    """Test get_view_fields_cascadedly()."""

    def test_keys_are_prefixed_with_pane_keys(self):
        pane = ViewPaneForPanes('Order', None, [customer_pane(), general_pane(), items_pane()])
        keys = [view_field.key for view_field in pane.get_view_fields_cascadedly()]
        assert keys == ['customer.name', 'title', 'notes', 'items.description', 'items.quantity']

    def test_original_fields_are_unchanged(self):
        pane = customer_pane()
        flattened = pane.get_view_fields_cascadedly(('order',))
        assert flattened[0].key == 'order.customer.name'
        assert pane.view_fields[0].key == 'name'
        assert flattened[0] is not pane.view_fields[0]

    def test_hidden_pane_hides_its_fields(self):
        pane = ViewPaneForPanes('Order', None, [customer_pane(is_visible=False), general_pane()])
        visibility = [view_field.is_visible for view_field in pane.get_view_fields_cascadedly()]
        assert visibility == [False, True, True]

    def test_hidden_parent_hides_everything(self):
        pane = ViewPaneForPanes('Order', None, [customer_pane(), general_pane()], is_visible=False)
        assert not any(view_field.is_visible for view_field in pane.get_view_fields_cascadedly())

    def test_grouped_pane_sections(self):
        pane = ViewGroupedPane('customer', [ViewPaneForFields('Main', None, [ViewFieldForSingleLineText('Name', 'name')])])
        assert [view_field.key for view_field in pane.get_view_fields_cascadedly()] == ['customer.name']


class TestFindViewFields:
    """Test finding view field definitions by key chain."""

    def test_find_through_keyed_pane(self):
        pane = ViewPaneForPanes('Order', None, [customer_pane(), general_pane()])
        assert pane.find_one_view_field('customer.name').title == 'Name'
        assert pane.find_one_view_field('title').title == 'Title'
        assert pane.find_one_view_field('name') is None
        assert pane.find_view_fields('') == []


class TestReadOnly:
    """Test is_read_only_for()."""

    def test_writable_field_makes_pane_editable(self, order):
        assert not general_pane().is_read_only_for(order)

    def test_read_only_presentable_fields(self, order):
        pane = ViewPaneForFields('Notes', None, [ViewFieldForSingleLineText('Notes', 'notes')])
        assert pane.is_read_only_for(order)

    def test_read_only_view_fields(self, order):
        pane = ViewPaneForFields('General', None, [ViewFieldForSingleLineText('Title', 'title', is_read_only=True)])
        assert pane.is_read_only_for(order)

    def test_empty_panes(self, order):
        assert ViewPaneForFields('Empty', None, []).is_read_only_for(order)
        assert ViewPaneForPanes('Empty', None, []).is_read_only_for(order)

    def test_missing_fields_and_objects(self, order):
        assert ViewPaneForFields('Missing', None, [ViewFieldForSingleLineText('X', 'missing')]).is_read_only_for(order)
        assert ViewPaneForFields('Missing', 'missing', [ViewFieldForSingleLineText('X', 'title')]).is_read_only_for(order)

    def test_nested_panes(self, order):
        pane = ViewPaneForPanes('Order', None, [customer_pane()])
        assert not pane.is_read_only_for(order)

    def test_collection_pane_with_adding_allowed(self, make_order):
        empty_order = make_order('Empty')
        assert not items_pane(has_buttons_for_adding_and_removing_objects=True).is_read_only_for(empty_order)
        assert items_pane().is_read_only_for(empty_order)


class TestValidity:
    """Test is_valid_value() and iter_errors()."""

    def test_valid_object(self, order):
        pane = ViewPaneForPanes('Order', None, [general_pane(), items_pane()])
        assert pane.is_valid_value(order, LOOSE, order)

    def test_errors_are_keyed_relative_to_topmost(self, order):
        order.find_presentable_field('title').value = ''
        order.find_presentable_field('items[1].description').value = ''
        pane = ViewPaneForPanes('Order', None, [general_pane(), items_pane()])
        errors = list(pane.iter_errors(order, LOOSE, order))
        assert [key_chain for key_chain, _ in errors] == [('title',), ('items[1]', 'description')]
        assert not pane.is_valid_value(order, LOOSE, order)

    def test_error_keys_resolve(self, order):
        order.find_presentable_field('items[0].description').value = ''
        key_chain, _ = next(items_pane().iter_errors(order, LOOSE, order))
        assert order.find_presentable_field(key_chain).key == 'description'

    def test_read_only_fields_are_not_validated(self, order):
        pane = ViewPaneForFields('Notes', None, [ViewFieldForSingleLineText('Notes', 'notes', max_length=1)])
        assert pane.is_valid_value(order, LOOSE, order)

    def test_element_view_field_on_collection_raises(self, order):
        provider = StaticOptionProvider([('x', 'X')])
        pane = ViewPaneForFields('Wrong', None, [ViewFieldForStringChoice('Items', 'items', option_provider=provider)])
        with pytest.raises(PresentationError, match='not suitable'):
            pane.is_valid_value(order, LOOSE, order)

    def test_nested_collection_panes(self, order):
        order.find_presentable_field('items[1].quantity').value_as_string = '-1'
        pane = ViewCollectionPaneForPanes('description', 'items', view_panes=[
            ViewPaneForFields('Amount', None, [ViewFieldForNumber('Quantity', 'quantity')]),
        ])
        errors = list(pane.iter_errors(order, LOOSE, order))
        assert [key_chain for key_chain, _ in errors] == [('items[1]', 'quantity')]


class TestLocking:
    """Test set_mandatoriness() and set_read_only()."""

    def test_set_mandatoriness_keeps_optional_fields(self):
        general = general_pane()
        pane = ViewPaneForPanes('Order', None, [general, items_pane()])
        pane.set_mandatoriness(Mandatoriness.DESIRED)
        title, notes = general.view_fields
        assert title.mandatoriness is Mandatoriness.DESIRED
        assert notes.mandatoriness is Mandatoriness.OPTIONAL

    def test_set_read_only(self, order):
        pane = ViewGroupedPane(None, [general_pane(), customer_pane()])
        pane.set_read_only()
        assert pane.is_read_only_for(order)


class TestCollectionPanes:
    """Test collection pane settings."""

    def test_tabs(self, order):
        pane = items_pane(has_buttons_for_adding_and_removing_objects=True)
        assert pane.is_sortable
        assert pane.auto_add_first_section
        assert pane.has_button_for_adding_new_objects
        assert pane.confirmation_message_for_removal == "Would you really like to delete the tab?"
        item = order.find_presentable_field('items').get_values_as_object()[0]
        assert pane.get_title_for(item) == 'Pens'

    def test_table(self):
        pane = items_pane(section_group_type=SectionGroupType.TABLE)
        assert not pane.is_sortable
        assert pane.confirmation_message_for_removal == "Would you really like to delete the row?"

    def test_to_view_pane_with_title(self):
        pane = items_pane()
        section = pane.to_view_pane_with_title()
        assert section.key == ''
        assert section.view_fields == pane.view_fields


class TestClone:
    """Test deep copies of panes."""

    def test_clone_is_independent(self):
        general = general_pane()
        pane = ViewPaneForPanes('Order', None, [general])
        duplicate = pane.clone()
        duplicate.set_read_only()
        assert not general.view_fields[0].is_read_only
        assert duplicate.view_panes[0] is not general

    def test_clone_shares_providers(self):
        provider = StaticOptionProvider([('x', 'X')])
        pane = ViewPaneForFields('Choice', None, [ViewFieldForStringChoice('Choice', 'choice', option_provider=provider)])
        assert pane.clone().view_fields[0].option_provider is provider

    def test_clone_grouped_pane(self):
        pane = ViewGroupedPane(None, [general_pane()])
        duplicate = pane.clone()
        assert duplicate.sections[0] is not pane.sections[0]
