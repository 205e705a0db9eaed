"""
Key chains: flat, serializable addresses of fields in nested object graphs.

A key chain is a tuple of link strings; the empty tuple addresses the object
itself. The serialized form joins links with '.', so 'address.city' addresses
the field 'city' of the object held by the field 'address'. A link may carry an
element index into a collection field: 'items[2].title'.
"""

import logging
from typing import Iterable, Optional, Sequence, Tuple, Union

from formbinding.errors import KeyChainError

logger = logging.getLogger(__name__)

DELIMITER = '.'

KeyChain = Tuple[str, ...]
KeyOrChain = Union[str, Sequence[str], None]


def from_key(key: Optional[str]) -> KeyChain:
    """Split a serialized key into its links. None and '' map to ().

    Raises:
        KeyChainError: If a link is empty, as in 'a..b' or 'a.'
    """
    if not key:
        return ()
    links = tuple(key.split(DELIMITER))
    if '' in links:
        raise KeyChainError(f'Syntax error in key chain at "{key}": links must not be empty.')
    return links


def to_key(key_chain: Iterable[str]) -> str:
    """Join links into a serialized key."""
    return DELIMITER.join(key_chain)


def as_key_chain(key_or_chain: KeyOrChain) -> KeyChain:
    """Normalize a serialized key or a sequence of links to a key chain."""
    if key_or_chain is None or isinstance(key_or_chain, str):
        return from_key(key_or_chain)
    return tuple(key_or_chain)


def concat(*parts: Union[str, Sequence[str]]) -> KeyChain:
    """Concatenate links and key chains into one key chain.

    A str part is a single link (it is not split at delimiters), any other
    sequence is a key chain. Concatenation is associative.
    """
    links = []
    for part in parts:
        if isinstance(part, str):
            links.append(part)
        else:
            links.extend(part)
    return tuple(links)


def concat_to_key(key1: str, key2: str) -> str:
    return key1 + DELIMITER + key2


def is_contained_in(key_chains: Iterable[Sequence[str]], key_chain: Sequence[str]) -> bool:
    """Check whether a key chain equals any of the given key chains."""
    key_chain = tuple(key_chain)
    return any(tuple(current) == key_chain for current in key_chains)


def starts_with(long_key_chain: Sequence[str], short_key_chain: Sequence[str]) -> bool:
    """Check whether long_key_chain begins with every link of short_key_chain."""
    if len(short_key_chain) > len(long_key_chain):
        return False
    return tuple(long_key_chain[:len(short_key_chain)]) == tuple(short_key_chain)


def remove_leading_links(key_chain: Sequence[str], count: int) -> KeyChain:
    if count < 0 or count > len(key_chain):
        raise KeyChainError(f"Cannot remove {count} leading links from key chain '{to_key(key_chain)}'")
    return tuple(key_chain[count:])


def remove_trailing_links(key_chain: Sequence[str], count: int) -> KeyChain:
    if count < 0 or count > len(key_chain):
        raise KeyChainError(f"Cannot remove {count} trailing links from key chain '{to_key(key_chain)}'")
    return tuple(key_chain[:len(key_chain) - count])


def remove_first_link(key_chain: Sequence[str]) -> KeyChain:
    return remove_leading_links(key_chain, 1)


def remove_last_link(key_chain: Sequence[str]) -> KeyChain:
    return remove_trailing_links(key_chain, 1)


def remove_indexes_from(key: str) -> str:
    """Strip '_suffix' indexes from every link of a serialized key.

    'items_3.title_0' becomes 'items.title'.
    """
    links = []
    for link in from_key(key):
        underscore = link.find('_')
        links.append(link[:underscore] if underscore > -1 else link)
    return to_key(links)


def split_key(link: str) -> Tuple[str, int]:
    """Split an indexed link like 'items[2]' into ('items', 2).

    Links without an index yield an index of -1.

    Raises:
        KeyChainError: If the brackets are malformed or the index is not an integer
    """
    if not link.endswith(']'):
        return link, -1
    bracket = link.rfind('[')
    if bracket < 0:
        raise KeyChainError(f'Syntax error in key chain at "{link}".')
    index_text = link[bracket + 1:-1]
    try:
        index = int(index_text)
    except ValueError:
        raise KeyChainError(f'Syntax error in key chain at "{link}".') from None
    return link[:bracket], index
