"""
View panes: the composition tree of a form.

A pane holds either view fields or child panes and is optionally addressed
into a sub-object of the bound presentable object by its key chain. An empty
key chain makes a pane transparent: it works on the object it is given.

The generic operations are implemented once as static helpers over "the
fields" or "the panes" of a pane, and every concrete pane passes in its own
children:

    flatten            get_view_fields_cascadedly()
    read-only check    is_read_only_for()
    validity check     is_valid_value() / iter_errors()
    locking            set_mandatoriness() / set_read_only()
"""

import copy
import logging
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from formbinding import key_chain as kc
from formbinding.enums import Mandatoriness, SectionGroupType, ValidityCheck
from formbinding.errors import PresentationError
from formbinding.presentable_field import PresentableFieldForCollection, PresentableFieldForElement
from formbinding.presentable_object import PresentableObject
from formbinding.view_field import (
    ViewField,
    ViewFieldForCollection,
    ViewFieldForEditableValue,
    ViewFieldForElement,
)

logger = logging.getLogger(__name__)

FieldError = Tuple[kc.KeyChain, str]


def validate_view_field(view_field: ViewFieldForEditableValue, presentable_field: Any, validity_check: ValidityCheck,
                        topmost: Any, option_data: Any) -> Optional[str]:
    """Validate a presentable field with the view field of matching cardinality.

    Raises:
        PresentationError: If the cardinalities of both fields differ
    """
    if presentable_field.is_for_single_element:
        expected_type, cardinality = ViewFieldForElement, 'a single element'
    else:
        expected_type, cardinality = ViewFieldForCollection, 'a collection'
    if not isinstance(view_field, expected_type):
        message = f"View field for key '{view_field.key}' is not suitable for {cardinality} field."
        logger.error(message)
        raise PresentationError(message)
    return view_field.validate(presentable_field, validity_check, topmost, option_data)


class ViewPane:
    """Base of all panes.

    Args:
        key: Serialized key chain into the bound object, empty for none
        is_visible: Whether the pane and everything below it is shown
    """

    def __init__(self, key: kc.KeyOrChain = None, is_visible: bool = True):
        self.key = kc.to_key(kc.as_key_chain(key))
        self.is_visible = is_visible

    @property
    def key_chain(self) -> kc.KeyChain:
        return kc.from_key(self.key)

    @key_chain.setter
    def key_chain(self, value: Iterable[str]) -> None:
        self.key = kc.to_key(value)

    # Finding view field definitions

    def find_one_view_field(self, key_or_chain: kc.KeyOrChain) -> Optional[ViewFieldForEditableValue]:
        view_fields = self.find_view_fields(key_or_chain)
        return view_fields[0] if view_fields else None

    def find_view_fields(self, key_or_chain: kc.KeyOrChain) -> List[ViewFieldForEditableValue]:
        """Find editable view field definitions by key chain relative to this pane's parent object."""
        raise NotImplementedError(f"find_view_fields() has to be implemented by {type(self).__name__}")

    @staticmethod
    def _find_view_fields_in_fields(key_or_chain: kc.KeyOrChain,
                                    view_fields: Iterable[ViewField]) -> List[ViewFieldForEditableValue]:
        chain = kc.as_key_chain(key_or_chain)
        if not chain:
            return []
        key = kc.to_key(chain)
        return [view_field for view_field in view_fields
                if isinstance(view_field, ViewFieldForEditableValue) and view_field.key == key]

    @staticmethod
    def _find_view_fields_in_panes(key_or_chain: kc.KeyOrChain,
                                   view_panes: Iterable['ViewPane']) -> List[ViewFieldForEditableValue]:
        chain = kc.as_key_chain(key_or_chain)
        matches: List[ViewFieldForEditableValue] = []
        if not chain:
            return matches
        for view_pane in view_panes:
            pane_chain = view_pane.key_chain
            if not pane_chain:
                matches.extend(view_pane.find_view_fields(chain))
            elif kc.starts_with(chain, pane_chain):
                matches.extend(view_pane.find_view_fields(kc.remove_leading_links(chain, len(pane_chain))))
        return matches

    # Resolving bound objects

    def find_presentable_child_object(self, presentable_object: Any) -> Optional[PresentableObject]:
        """Resolve the object this pane works on, or None if there is none."""
        chain = self.key_chain
        if not chain:
            return presentable_object
        if presentable_object is None:
            return None
        presentable_field = presentable_object.find_presentable_field(chain)
        if not isinstance(presentable_field, PresentableFieldForElement):
            return None
        child = presentable_field.value_as_object
        return child if isinstance(child, PresentableObject) else None

    def find_presentable_child_objects(self, presentable_object: Any,
                                       create_potential_new_objects: bool) -> Iterator[PresentableObject]:
        """Resolve the objects of a collection this pane works on.

        Args:
            presentable_object: Object to resolve the key chain against
            create_potential_new_objects: Whether to yield a fresh object first
                when the collection field is writable
        """
        chain = self.key_chain
        if not chain or presentable_object is None:
            return
        presentable_field = presentable_object.find_presentable_field(chain)
        if not isinstance(presentable_field, PresentableFieldForCollection):
            return
        if create_potential_new_objects and not presentable_field.is_read_only:
            yield presentable_field.new_item_as_object()
        for child in presentable_field.get_values_as_object():
            if isinstance(child, PresentableObject):
                yield child

    # Flattening

    def get_view_fields_cascadedly(self, key_chain_path: kc.KeyOrChain = (),
                                   is_parent_visible: bool = True) -> List[ViewField]:
        """Copies of all view fields below this pane, keyed relative to the topmost object."""
        raise NotImplementedError(f"get_view_fields_cascadedly() has to be implemented by {type(self).__name__}")

    def _child_key_chain_path(self, key_chain_path: kc.KeyOrChain) -> kc.KeyChain:
        key_chain_path = kc.as_key_chain(key_chain_path)
        if not self.key:
            return key_chain_path
        return kc.concat(key_chain_path, self.key_chain)

    def _cascade_fields(self, key_chain_path: kc.KeyOrChain, is_parent_visible: bool,
                        view_fields: Iterable[ViewField]) -> List[ViewField]:
        child_path = self._child_key_chain_path(key_chain_path)
        is_visible = self.is_visible and is_parent_visible
        copied_view_fields = []
        for view_field in view_fields:
            copied_view_field = view_field.clone()
            copied_view_field.is_visible = copied_view_field.is_visible and is_visible
            if isinstance(copied_view_field, ViewFieldForEditableValue):
                copied_view_field.key_chain = kc.concat(child_path, copied_view_field.key_chain)
            copied_view_fields.append(copied_view_field)
        return copied_view_fields

    def _cascade_panes(self, key_chain_path: kc.KeyOrChain, is_parent_visible: bool,
                       view_panes: Iterable['ViewPane']) -> List[ViewField]:
        child_path = self._child_key_chain_path(key_chain_path)
        is_visible = self.is_visible and is_parent_visible
        view_fields: List[ViewField] = []
        for view_pane in view_panes:
            view_fields.extend(view_pane.get_view_fields_cascadedly(child_path, is_visible))
        return view_fields

    # Read-only check

    def is_read_only_for(self, presentable_object: Any) -> bool:
        """True unless some field below this pane is writable for the object."""
        raise NotImplementedError(f"is_read_only_for() has to be implemented by {type(self).__name__}")

    @staticmethod
    def _is_read_only_for_fields(presentable_object: Any, view_fields: Iterable[ViewField]) -> bool:
        if presentable_object is None:
            return True
        for view_field in view_fields:
            if isinstance(view_field, ViewFieldForEditableValue) and not view_field.is_read_only:
                presentable_field = presentable_object.find_presentable_field(view_field.key_chain)
                if presentable_field is not None and not presentable_field.is_read_only:
                    return False
        return True

    @staticmethod
    def _is_read_only_for_panes(presentable_object: Any, view_panes: Iterable['ViewPane']) -> bool:
        if presentable_object is None:
            return True
        for view_pane in view_panes:
            if view_pane is not None and not view_pane.is_read_only_for(presentable_object):
                return False
        return True

    # Validity check

    def is_valid_value(self, presentable_object: Any, validity_check: ValidityCheck, topmost: Any,
                       option_data: Any = None) -> bool:
        """Check all writable fields below this pane; stops at the first error."""
        first_error = next(self.iter_errors(presentable_object, validity_check, topmost, option_data), None)
        return first_error is None

    def iter_errors(self, presentable_object: Any, validity_check: ValidityCheck, topmost: Any,
                    option_data: Any = None, key_chain_path: kc.KeyOrChain = ()) -> Iterator[FieldError]:
        """Lazily yield (key chain relative to topmost, error message) for invalid fields.

        Objects of collection panes are addressed by indexed links such as
        'items[2]', so every yielded key chain resolves with
        PresentableObject.find_presentable_field().
        """
        raise NotImplementedError(f"iter_errors() has to be implemented by {type(self).__name__}")

    @staticmethod
    def _iter_errors_for_fields(presentable_object: Any, view_fields: Iterable[ViewField],
                                validity_check: ValidityCheck, topmost: Any, option_data: Any,
                                key_chain_path: kc.KeyChain) -> Iterator[FieldError]:
        if presentable_object is None:
            return
        for view_field in view_fields:
            if not isinstance(view_field, ViewFieldForEditableValue) or view_field.is_read_only:
                continue
            presentable_field = presentable_object.find_presentable_field(view_field.key_chain)
            if presentable_field is None or presentable_field.is_read_only:
                continue
            error_message = validate_view_field(view_field, presentable_field, validity_check, topmost, option_data)
            if error_message:
                logger.debug(f"Field '{view_field.key}' is invalid: {error_message}")
                yield kc.concat(key_chain_path, view_field.key_chain), error_message

    @staticmethod
    def _iter_errors_for_panes(presentable_object: Any, view_panes: Iterable['ViewPane'],
                               validity_check: ValidityCheck, topmost: Any, option_data: Any,
                               key_chain_path: kc.KeyChain) -> Iterator[FieldError]:
        if presentable_object is None:
            return
        for view_pane in view_panes:
            if view_pane is not None:
                yield from view_pane.iter_errors(presentable_object, validity_check, topmost, option_data,
                                                 key_chain_path)

    # Locking

    def set_mandatoriness(self, mandatoriness: Mandatoriness) -> None:
        raise NotImplementedError(f"set_mandatoriness() has to be implemented by {type(self).__name__}")

    def set_read_only(self) -> None:
        raise NotImplementedError(f"set_read_only() has to be implemented by {type(self).__name__}")

    @staticmethod
    def _set_mandatoriness_for_fields(mandatoriness: Mandatoriness, view_fields: Iterable[ViewField]) -> None:
        # optional fields stay optional
        for view_field in view_fields:
            if isinstance(view_field, ViewFieldForEditableValue) \
                    and view_field.mandatoriness is not Mandatoriness.OPTIONAL:
                view_field.mandatoriness = mandatoriness

    @staticmethod
    def _set_read_only_for_fields(view_fields: Iterable[ViewField]) -> None:
        for view_field in view_fields:
            if isinstance(view_field, ViewFieldForEditableValue):
                view_field.is_read_only = True

    # Copying

    def clone(self) -> 'ViewPane':
        """Deep copy of this pane and its children; providers stay shared."""
        raise NotImplementedError(f"clone() has to be implemented by {type(self).__name__}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key!r})"


class FieldsPaneMixin:
    """Children are view fields."""

    view_fields: List[ViewField]

    def find_view_fields(self, key_or_chain: kc.KeyOrChain) -> List[ViewFieldForEditableValue]:
        return ViewPane._find_view_fields_in_fields(key_or_chain, self.view_fields)

    def get_view_fields_cascadedly(self, key_chain_path: kc.KeyOrChain = (),
                                   is_parent_visible: bool = True) -> List[ViewField]:
        return self._cascade_fields(key_chain_path, is_parent_visible, self.view_fields)

    def set_mandatoriness(self, mandatoriness: Mandatoriness) -> None:
        ViewPane._set_mandatoriness_for_fields(mandatoriness, self.view_fields)

    def set_read_only(self) -> None:
        ViewPane._set_read_only_for_fields(self.view_fields)

    def clone(self):
        duplicate = copy.copy(self)
        duplicate.view_fields = [view_field.clone() for view_field in self.view_fields]
        return duplicate


class PanesPaneMixin:
    """Children are view panes, held in the attribute named by _children_attribute."""

    _children_attribute = 'view_panes'

    def _children(self) -> List[ViewPane]:
        return getattr(self, self._children_attribute)

    def find_view_fields(self, key_or_chain: kc.KeyOrChain) -> List[ViewFieldForEditableValue]:
        return ViewPane._find_view_fields_in_panes(key_or_chain, self._children())

    def get_view_fields_cascadedly(self, key_chain_path: kc.KeyOrChain = (),
                                   is_parent_visible: bool = True) -> List[ViewField]:
        return self._cascade_panes(key_chain_path, is_parent_visible, self._children())

    def set_mandatoriness(self, mandatoriness: Mandatoriness) -> None:
        for view_pane in self._children():
            view_pane.set_mandatoriness(mandatoriness)

    def set_read_only(self) -> None:
        for view_pane in self._children():
            view_pane.set_read_only()

    def clone(self):
        duplicate = copy.copy(self)
        setattr(duplicate, self._children_attribute, [view_pane.clone() for view_pane in self._children()])
        return duplicate


class ViewPaneWithTitle(ViewPane):
    """Pane with a title, usable as section of a grouped pane."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None, is_visible: bool = True):
        super().__init__(key, is_visible)
        self.title = title


class ViewPaneForFields(FieldsPaneMixin, ViewPaneWithTitle):
    """Titled pane showing view fields of one object."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 view_fields: Optional[Iterable[ViewField]] = None, *,
                 has_two_columns_in_wide_windows: bool = False, is_visible: bool = True):
        super().__init__(title, key, is_visible)
        self.view_fields: List[ViewField] = list(view_fields or [])
        self.has_two_columns_in_wide_windows = has_two_columns_in_wide_windows

    def is_read_only_for(self, presentable_object: Any) -> bool:
        return self._is_read_only_for_fields(self.find_presentable_child_object(presentable_object),
                                             self.view_fields)

    def iter_errors(self, presentable_object: Any, validity_check: ValidityCheck, topmost: Any,
                    option_data: Any = None, key_chain_path: kc.KeyOrChain = ()) -> Iterator[FieldError]:
        return self._iter_errors_for_fields(self.find_presentable_child_object(presentable_object), self.view_fields,
                                            validity_check, topmost, option_data,
                                            self._child_key_chain_path(key_chain_path))


class ViewPaneForPanes(PanesPaneMixin, ViewPaneWithTitle):
    """Titled pane nesting further panes."""

    def __init__(self, title: Optional[str] = None, key: kc.KeyOrChain = None,
                 view_panes: Optional[Iterable[ViewPane]] = None, *, is_visible: bool = True):
        super().__init__(title, key, is_visible)
        self.view_panes: List[ViewPane] = list(view_panes or [])

    def is_read_only_for(self, presentable_object: Any) -> bool:
        return self._is_read_only_for_panes(self.find_presentable_child_object(presentable_object),
                                            self.view_panes)

    def iter_errors(self, presentable_object: Any, validity_check: ValidityCheck, topmost: Any,
                    option_data: Any = None, key_chain_path: kc.KeyOrChain = ()) -> Iterator[FieldError]:
        return self._iter_errors_for_panes(self.find_presentable_child_object(presentable_object), self.view_panes,
                                           validity_check, topmost, option_data,
                                           self._child_key_chain_path(key_chain_path))


class ViewGroupedPane(PanesPaneMixin, ViewPane):
    """Titled sections shown as tabs or as a table."""

    _children_attribute = 'sections'

    def __init__(self, key: kc.KeyOrChain = None, sections: Optional[Iterable[ViewPaneWithTitle]] = None,
                 section_group_type: SectionGroupType = SectionGroupType.TABS, *, is_visible: bool = True):
        super().__init__(key, is_visible)
        self.sections: List[ViewPaneWithTitle] = list(sections or [])
        self.section_group_type = section_group_type

    def is_read_only_for(self, presentable_object: Any) -> bool:
        return self._is_read_only_for_panes(self.find_presentable_child_object(presentable_object),
                                            self.sections)

    def iter_errors(self, presentable_object: Any, validity_check: ValidityCheck, topmost: Any,
                    option_data: Any = None, key_chain_path: kc.KeyOrChain = ()) -> Iterator[FieldError]:
        return self._iter_errors_for_panes(self.find_presentable_child_object(presentable_object), self.sections,
                                           validity_check, topmost, option_data,
                                           self._child_key_chain_path(key_chain_path))
