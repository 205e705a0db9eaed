"""
Collection panes: one section per object of a collection field.

The key chain of a collection pane addresses a collection of presentable
objects; every child field or pane is applied to each object in turn.
Read-only checks include a potential new object when objects may be added,
so a pane that only allows adding stays editable. Validation covers existing
objects only.
"""

import logging
from typing import Any, Iterable, Iterator, List, Optional

from formconf import get_message
from formbinding import key_chain as kc
from formbinding.enums import SectionGroupType, ValidityCheck
from formbinding.presentable_field import PresentableFieldForElement
from formbinding.view_field import ViewField
from formbinding.view_pane import (
    FieldError,
    FieldsPaneMixin,
    PanesPaneMixin,
    ViewPane,
    ViewPaneForFields,
    ViewPaneForPanes,
    ViewPaneWithTitle,
)

logger = logging.getLogger(__name__)


class ViewCollectionPane(ViewPane):
    """Base of panes repeating their content for every object of a collection.

    Args:
        title_field: Key chain, relative to each object, of the section title
        key: Key chain of the collection field
        has_buttons_for_adding_and_removing_objects: Initial value of the
            adding, removing and auto-add-first-section flags
    """

    def __init__(self, title_field: kc.KeyOrChain = None, key: kc.KeyOrChain = None,
                 has_buttons_for_adding_and_removing_objects: bool = False, *,
                 is_sortable: bool = True, placeholder: Optional[str] = None, is_visible: bool = True):
        super().__init__(key, is_visible)
        self.title_field = kc.to_key(kc.as_key_chain(title_field))
        self.is_sortable = is_sortable
        self.placeholder = placeholder
        self.auto_add_first_section = has_buttons_for_adding_and_removing_objects
        self.confirmation_message_for_removal = get_message('confirm_delete_tab')
        self.has_button_for_adding_new_objects = has_buttons_for_adding_and_removing_objects
        self.has_buttons_for_removing_objects = has_buttons_for_adding_and_removing_objects

    @property
    def title_field_chain(self) -> kc.KeyChain:
        return kc.from_key(self.title_field)

    @title_field_chain.setter
    def title_field_chain(self, value: Iterable[str]) -> None:
        self.title_field = kc.to_key(value)

    def get_title_for(self, presentable_object: Any) -> Optional[str]:
        """Title of the section showing presentable_object, None without title field."""
        if not self.title_field or presentable_object is None:
            return None
        presentable_field = presentable_object.find_presentable_field(self.title_field_chain)
        if not isinstance(presentable_field, PresentableFieldForElement):
            return None
        return presentable_field.get_value_as_plain_text()

    def to_view_pane_with_title(self) -> ViewPaneWithTitle:
        """Untitled, unkeyed pane showing the content of one section."""
        raise NotImplementedError(f"to_view_pane_with_title() has to be implemented by {type(self).__name__}")

    def _is_read_only_for_children(self, presentable_object: Any) -> bool:
        raise NotImplementedError

    def _iter_errors_for_children(self, presentable_object: Any, validity_check: ValidityCheck, topmost: Any,
                                  option_data: Any, key_chain_path: kc.KeyChain) -> Iterator[FieldError]:
        raise NotImplementedError

    def is_read_only_for(self, presentable_object: Any) -> bool:
        for child in self.find_presentable_child_objects(presentable_object, self.has_button_for_adding_new_objects):
            if not self._is_read_only_for_children(child):
                return False
        return True

    def iter_errors(self, presentable_object: Any, validity_check: ValidityCheck, topmost: Any,
                    option_data: Any = None, key_chain_path: kc.KeyOrChain = ()) -> Iterator[FieldError]:
        path = kc.as_key_chain(key_chain_path)
        pane_chain = self.key_chain
        for index, child in enumerate(self.find_presentable_child_objects(presentable_object, False)):
            indexed_link = f"{pane_chain[-1]}[{index}]"
            item_path = kc.concat(path, pane_chain[:-1], indexed_link)
            yield from self._iter_errors_for_children(child, validity_check, topmost, option_data, item_path)


class ViewCollectionPaneForFields(FieldsPaneMixin, ViewCollectionPane):
    """Repeats view fields per object, as tabs or as table rows."""

    def __init__(self, title_field: kc.KeyOrChain = None, key: kc.KeyOrChain = None,
                 section_group_type: SectionGroupType = SectionGroupType.TABS,
                 has_buttons_for_adding_and_removing_objects: bool = False,
                 view_fields: Optional[Iterable[ViewField]] = None, **kwargs: Any):
        super().__init__(title_field, key, has_buttons_for_adding_and_removing_objects, **kwargs)
        self.view_fields: List[ViewField] = list(view_fields or [])
        self.section_group_type = section_group_type
        if section_group_type is SectionGroupType.TABLE:
            self.confirmation_message_for_removal = get_message('confirm_delete_row')

    @property
    def section_group_type(self) -> SectionGroupType:
        return self._section_group_type

    @section_group_type.setter
    def section_group_type(self, value: SectionGroupType) -> None:
        self._section_group_type = value
        # rows of a table cannot be reordered
        if value is SectionGroupType.TABLE:
            self.is_sortable = False

    def _is_read_only_for_children(self, presentable_object: Any) -> bool:
        return self._is_read_only_for_fields(presentable_object, self.view_fields)

    def _iter_errors_for_children(self, presentable_object: Any, validity_check: ValidityCheck, topmost: Any,
                                  option_data: Any, key_chain_path: kc.KeyChain) -> Iterator[FieldError]:
        return self._iter_errors_for_fields(presentable_object, self.view_fields, validity_check, topmost,
                                            option_data, key_chain_path)

    def to_view_pane_with_title(self) -> ViewPaneForFields:
        return ViewPaneForFields(None, None, self.view_fields)


class ViewCollectionPaneForPanes(PanesPaneMixin, ViewCollectionPane):
    """Repeats nested panes per object, as tabs."""

    def __init__(self, title_field: kc.KeyOrChain = None, key: kc.KeyOrChain = None,
                 has_buttons_for_adding_and_removing_objects: bool = False,
                 view_panes: Optional[Iterable[ViewPane]] = None, **kwargs: Any):
        super().__init__(title_field, key, has_buttons_for_adding_and_removing_objects, **kwargs)
        self.view_panes: List[ViewPane] = list(view_panes or [])

    def _is_read_only_for_children(self, presentable_object: Any) -> bool:
        return self._is_read_only_for_panes(presentable_object, self.view_panes)

    def _iter_errors_for_children(self, presentable_object: Any, validity_check: ValidityCheck, topmost: Any,
                                  option_data: Any, key_chain_path: kc.KeyChain) -> Iterator[FieldError]:
        return self._iter_errors_for_panes(presentable_object, self.view_panes, validity_check, topmost,
                                           option_data, key_chain_path)

    def to_view_pane_with_title(self) -> ViewPaneForPanes:
        return ViewPaneForPanes(None, None, self.view_panes)
