"""
FormView: the root of a form definition.

A form view owns the top-level panes and applies every pane operation to all
of them, with the bound object acting as topmost object.
"""

import copy
import logging
from typing import Any, Dict, Iterable, List, Optional

from formbinding import key_chain as kc
from formbinding.enums import Mandatoriness, ValidityCheck
from formbinding.view_field import ViewField, ViewFieldForEditableValue
from formbinding.view_pane import ViewPane

logger = logging.getLogger(__name__)


class FormView:
    """Form definition made of view panes.

    Args:
        view_panes: Top-level panes
        description_for_edit_mode: Text shown above the form while editing
        description_for_view_mode: Text shown above the form while viewing
        has_autocompletion_enabled: Whether browsers may autocomplete inputs
        has_modification_info: Whether creation and modification info is shown
    """

    def __init__(self, view_panes: Optional[Iterable[ViewPane]] = None,
                 description_for_edit_mode: Optional[str] = None,
                 description_for_view_mode: Optional[str] = None,
                 has_autocompletion_enabled: bool = False,
                 has_modification_info: bool = True):
        self.view_panes: List[ViewPane] = list(view_panes or [])
        self.description_for_edit_mode = description_for_edit_mode
        self.description_for_view_mode = description_for_view_mode
        self.has_autocompletion_enabled = has_autocompletion_enabled
        self.has_modification_info = has_modification_info

    def find_one_view_field(self, key_or_chain: kc.KeyOrChain) -> Optional[ViewFieldForEditableValue]:
        view_fields = self.find_view_fields(key_or_chain)
        return view_fields[0] if view_fields else None

    def find_view_fields(self, key_or_chain: kc.KeyOrChain) -> List[ViewFieldForEditableValue]:
        return ViewPane._find_view_fields_in_panes(key_or_chain, self.view_panes)

    def get_view_fields_cascadedly(self) -> List[ViewField]:
        """Copies of all view fields of the form, keyed relative to the bound object."""
        view_fields: List[ViewField] = []
        for view_pane in self.view_panes:
            view_fields.extend(view_pane.get_view_fields_cascadedly((), True))
        return view_fields

    def is_read_only_for(self, presentable_object: Any) -> bool:
        return all(view_pane.is_read_only_for(presentable_object) for view_pane in self.view_panes)

    def is_valid_value(self, presentable_object: Any, validity_check: ValidityCheck,
                       option_data: Any = None) -> bool:
        return all(view_pane.is_valid_value(presentable_object, validity_check, presentable_object, option_data)
                   for view_pane in self.view_panes)

    def validate(self, presentable_object: Any, validity_check: ValidityCheck,
                 option_data: Any = None) -> Dict[str, str]:
        """Validate every writable field of the form.

        Returns:
            Mapping of serialized key chain (relative to presentable_object,
            with indexed links for objects of collections) to error message;
            empty if the object is valid
        """
        errors: Dict[str, str] = {}
        for view_pane in self.view_panes:
            for key_chain, error_message in view_pane.iter_errors(presentable_object, validity_check,
                                                                  presentable_object, option_data):
                errors.setdefault(kc.to_key(key_chain), error_message)
        if errors:
            logger.debug(f"Form validation found {len(errors)} invalid fields")
        return errors

    def set_mandatoriness(self, mandatoriness: Mandatoriness) -> None:
        for view_pane in self.view_panes:
            view_pane.set_mandatoriness(mandatoriness)

    def set_read_only(self) -> None:
        for view_pane in self.view_panes:
            view_pane.set_read_only()

    def copy_from(self, source: 'FormView') -> None:
        """Take over the settings and a deep copy of the panes of source."""
        self.view_panes = [view_pane.clone() for view_pane in source.view_panes]
        self.description_for_edit_mode = source.description_for_edit_mode
        self.description_for_view_mode = source.description_for_view_mode
        self.has_autocompletion_enabled = source.has_autocompletion_enabled
        self.has_modification_info = source.has_modification_info

    def copy(self) -> 'FormView':
        duplicate = copy.copy(self)
        duplicate.copy_from(self)
        return duplicate

    def __repr__(self) -> str:
        return f"{type(self).__name__}(view_panes={len(self.view_panes)})"
