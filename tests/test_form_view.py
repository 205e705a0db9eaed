"""Tests for FormView."""
from decimal import Decimal

from formbinding import (
    FormView,
    Mandatoriness,
    ValidityCheck,
    ViewCollectionPaneForFields,
    ViewFieldForNumber,
    ViewFieldForSingleLineText,
    ViewFieldForSubsequentNumber,
    ViewPaneForFields,
)

LOOSE = ValidityCheck.LOOSE
STRICT = ValidityCheck.STRICT


def order_form():
    return FormView([
        ViewPaneForFields('General', None, [
            ViewFieldForSingleLineText('Title', 'title', Mandatoriness.REQUIRED),
            ViewFieldForNumber('Limit', 'limit', Mandatoriness.DESIRED),
        ]),
        ViewPaneForFields('Customer', 'customer', [
            ViewFieldForSingleLineText('Name', 'name', Mandatoriness.DESIRED),
            ViewFieldForSubsequentNumber('Credit', 'credit', previous_field_key='limit'),
        ]),
        ViewCollectionPaneForFields('description', 'items', view_fields=[
            ViewFieldForSingleLineText('Description', 'description', Mandatoriness.REQUIRED),
        ]),
    ], description_for_edit_mode='Edit the order')


class TestFormView:
    """Test operations applied to all panes of a form."""

    def test_find_view_fields(self):
        form = order_form()
        assert form.find_one_view_field('customer.name').title == 'Name'
        assert form.find_one_view_field('items.description').title == 'Description'
        assert form.find_one_view_field('missing') is None

    def test_flattened_fields(self):
        keys = [view_field.key for view_field in order_form().get_view_fields_cascadedly()]
        assert keys == ['title', 'limit', 'customer.name', 'customer.credit', 'items.description']

    def test_read_only(self, order):
        form = order_form()
        assert not form.is_read_only_for(order)
        form.set_read_only()
        assert form.is_read_only_for(order)

    def test_valid_order(self, order):
        """Credit of the customer is looked up against the limit of the order."""
        order.find_presentable_field('customer.credit').value = Decimal('150')
        form = order_form()
        assert form.is_valid_value(order, STRICT)
        assert form.validate(order, STRICT) == {}

    def test_validate_maps_keys_to_messages(self, order):
        order.find_presentable_field('title').value = ''
        order.find_presentable_field('items[1].description').value = ''
        errors = order_form().validate(order, LOOSE)
        assert set(errors) == {'title', 'customer.credit', 'items[1].description'}
        assert errors['title'] == "Please enter a valid value for this field. This is a mandatory field."
        assert errors['customer.credit'] == (
            "Please enter a valid value greater than 100 for this field. "
            "Alternatively you can leave this field blank.")

    def test_strictness(self, order):
        order.find_presentable_field('customer.credit').value = None
        order.find_presentable_field('customer.name').value = ''
        form = order_form()
        assert form.is_valid_value(order, LOOSE)
        assert set(form.validate(order, STRICT)) == {'customer.name'}

    def test_set_mandatoriness(self, order):
        order.find_presentable_field('title').value = ''
        order.find_presentable_field('customer.credit').value = None
        form = order_form()
        form.set_mandatoriness(Mandatoriness.DESIRED)
        assert form.is_valid_value(order, LOOSE)
        assert not form.is_valid_value(order, STRICT)

    def test_copy_is_deep(self, order):
        form = order_form()
        duplicate = form.copy()
        duplicate.set_read_only()
        assert duplicate.description_for_edit_mode == 'Edit the order'
        assert duplicate.is_read_only_for(order)
        assert not form.is_read_only_for(order)

    def test_copy_from(self):
        source = order_form()
        target = FormView(has_modification_info=False)
        target.copy_from(source)
        assert len(target.view_panes) == 3
        assert target.has_modification_info
        assert target.view_panes[0] is not source.view_panes[0]
