"""
Exceptions raised for malformed form definitions.

Bad user input never raises: validators return an error message string and
string coercion exposes try_* variants. The exceptions below signal programming
or configuration errors and derive from the matching builtin so callers may
catch either.
"""


class PresentationError(Exception):
    """Base class for form binding configuration errors."""


class KeyChainError(PresentationError, ValueError):
    """A key chain is malformed, ambiguous or cannot be traversed."""


class FieldNotFoundError(PresentationError, KeyError):
    """A field referenced by a form definition cannot be found."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain diagnostic instead
        return str(self.args[0]) if self.args else ''


class CalculatedFieldError(PresentationError, RuntimeError):
    """A calculated field was written without a pass-through setter."""
