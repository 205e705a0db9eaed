"""
Presentable objects and key-chain resolution.

A PresentableObject owns a PresentableFieldCollection. Key chains resolve link
by link: the first link selects a direct field; while links remain, the field
must be an element holding another presentable object, into which resolution
recurses. A link may index into a collection of presentable objects
('rows[1].amount'); an un-indexed link cannot be traversed through a
collection by find_presentable_field(), which raises KeyChainError for it.

find_presentable_fields() is the browsing variant: it fans out over every
element of an un-indexed collection and returns all matches.
"""

import logging
import uuid
from typing import Any, Dict, Iterable, Iterator, List, Optional

from formbinding import key_chain as kc
from formbinding.errors import KeyChainError
from formbinding.presentable_field import PresentableField

logger = logging.getLogger(__name__)


def _child_at(field: PresentableField, index: int, link: str) -> Any:
    if field.is_for_single_element:
        raise KeyChainError(f'Index in key chain at "{link}" addresses a field that is not a collection.')
    values = field.get_values_as_object()
    if index >= len(values):
        raise KeyChainError(f'Index is out of bounds in key chain at "{link}".')
    return values[index]


class PresentableFieldCollection:
    """Ordered, keyed container of the fields of one presentable object."""

    def __init__(self, fields: Optional[Iterable[PresentableField]] = None):
        self._fields: Dict[str, PresentableField] = {}
        if fields is not None:
            self.add_range(fields)

    def __iter__(self) -> Iterator[PresentableField]:
        return iter(list(self._fields.values()))

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, key: str) -> PresentableField:
        return self._fields[key]

    @property
    def keys(self) -> List[str]:
        return list(self._fields)

    def add(self, field: PresentableField) -> None:
        if field.key in self._fields:
            raise KeyChainError(f"Presentable field '{field.key}' is already contained")
        self._fields[field.key] = field

    def add_range(self, fields: Iterable[PresentableField]) -> None:
        for field in fields:
            self.add(field)

    def add_or_update(self, field: PresentableField) -> None:
        if field.key in self._fields:
            logger.warning(f"Replacing presentable field '{field.key}'")
        self._fields[field.key] = field

    def remove(self, key: str) -> bool:
        return self._fields.pop(key, None) is not None

    def contains(self, key_or_chain: kc.KeyOrChain) -> bool:
        chain = kc.as_key_chain(key_or_chain)
        if len(chain) < 2:
            return (chain[0] if chain else '') in self._fields
        return self.find(chain) is not None

    def find(self, key_or_chain: kc.KeyOrChain) -> Optional[PresentableField]:
        """Resolve a key chain to exactly one field, or None if nothing matches.

        Raises:
            KeyChainError: If the chain passes through a collection without an
                index, or an index is out of bounds
        """
        chain = kc.as_key_chain(key_or_chain)
        if not chain:
            return None
        link = chain[0]
        key, index = kc.split_key(link)
        field = self._fields.get(key)
        if field is None:
            return None
        remaining = chain[1:]
        if not remaining:
            return field
        if index > -1:
            child = _child_at(field, index, link)
        elif field.is_for_single_element:
            child = field.value_as_object
        else:
            raise KeyChainError(f"Presentable field {kc.to_key(chain)} for collection cannot be resolved.")
        if not isinstance(child, PresentableObject):
            logger.debug(f"Key chain '{kc.to_key(chain)}' ends at '{link}' which holds no presentable object")
            return None
        return child.find_presentable_field(remaining)

    def find_all(self, key_or_chain: kc.KeyOrChain) -> List[PresentableField]:
        """Resolve a key chain to every matching field, fanning out over collections."""
        chain = kc.as_key_chain(key_or_chain)
        if not chain:
            return []
        link = chain[0]
        key, index = kc.split_key(link)
        field = self._fields.get(key)
        if field is None:
            return []
        remaining = chain[1:]
        if not remaining:
            return [field]
        if index > -1:
            children = [_child_at(field, index, link)]
        elif field.is_for_single_element:
            children = [field.value_as_object]
        else:
            children = field.get_values_as_object()
        matches: List[PresentableField] = []
        for child in children:
            if isinstance(child, PresentableObject):
                matches.extend(child.find_presentable_fields(remaining))
        return matches


class PresentableObject:
    """An object whose values are exposed as presentable fields.

    Attributes:
        id: Identity of the object
        is_durable: Whether the object is backed by durable storage. Calculated
            fields of durable objects cache computed None values.
        is_write_protected: Whether writes are locked; calculated fields of a
            write-protected object are read-only.
    """

    is_durable = False

    def __init__(self, fields: Optional[Iterable[PresentableField]] = None, object_id: Optional[uuid.UUID] = None):
        self.id = object_id or uuid.uuid4()
        self.is_write_protected = False
        self.presentable_fields = PresentableFieldCollection()
        for field in fields or ():
            self.add_presentable_field(field)

    @property
    def keys(self) -> List[str]:
        return self.presentable_fields.keys

    def add_presentable_field(self, field: PresentableField) -> PresentableField:
        if field.parent is None:
            field.parent = self
        self.presentable_fields.add(field)
        return field

    def add_or_update_presentable_field(self, field: PresentableField) -> PresentableField:
        if field.parent is None:
            field.parent = self
        self.presentable_fields.add_or_update(field)
        return field

    def find_presentable_field(self, key_or_chain: kc.KeyOrChain) -> Optional[PresentableField]:
        """Find the single field addressed by a key or key chain.

        Returns:
            The field, or None if no field matches

        Raises:
            KeyChainError: If the chain cannot be traversed
        """
        return self.presentable_fields.find(key_or_chain)

    def find_presentable_fields(self, key_or_chain: kc.KeyOrChain) -> List[PresentableField]:
        """Find all fields addressed by a key chain, including every element of un-indexed collections."""
        return self.presentable_fields.find_all(key_or_chain)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id})"


class DurablePresentableObject(PresentableObject):
    """Presentable object backed by durable storage."""

    is_durable = True
