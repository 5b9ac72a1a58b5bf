"""Validated glyph and anchor names.

Names follow the UFO identifier convention used for glyph and anchor names:
a name must not be empty and must not contain control characters
(Unicode category ``Cc``, i.e. U+0000 to U+001F and U+007F to U+009F).
"""

import unicodedata

from glyphdraw.exceptions import NameValidationError


class Name(str):
    """A string that is known to satisfy identifier restrictions.

    ``Name`` is a ``str`` subclass, so it compares equal to (and hashes like)
    the plain string it was built from. Instances can only be obtained
    through :meth:`validate`, or by calling ``Name(value)`` which validates
    the same way.

    Example:
        >>> Name.validate("acutecomb")
        'acutecomb'
        >>> Name.validate("")
        Traceback (most recent call last):
        ...
        glyphdraw.exceptions.NameValidationError: Invalid name '': name is empty
    """

    __slots__ = ()

    def __new__(cls, value: str) -> "Name":
        if isinstance(value, Name):
            return value
        reason = _find_violation(value)
        if reason is not None:
            raise NameValidationError(value, reason)
        return super().__new__(cls, value)

    @classmethod
    def validate(cls, value: str) -> "Name":
        """Validate a raw string and return it as a Name.

        Args:
            value: Candidate glyph or anchor name

        Returns:
            The validated Name

        Raises:
            NameValidationError: If the string is empty, is not a string, or
                contains a control character
        """
        return cls(value)

    def __repr__(self) -> str:
        return str.__repr__(self)


def is_valid_name(value: object) -> bool:
    """Return True if ``value`` would be accepted by :meth:`Name.validate`."""
    return _find_violation(value) is None


def _find_violation(value: object) -> str | None:
    if not isinstance(value, str):
        return f"expected a string, got {type(value).__name__}"
    if not value:
        return "name is empty"
    for index, char in enumerate(value):
        if unicodedata.category(char) == "Cc":
            return f"control character U+{ord(char):04X} at index {index}"
    return None
