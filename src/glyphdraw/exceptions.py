"""Exception hierarchy for glyphdraw.

Two families are kept apart on purpose:

- ``GlyphDrawError`` and its subclasses report bad external data (for
  example an ill-formed glyph name) and are meant to be caught.
- ``PenProtocolError`` reports misuse of the point pen protocol. It derives
  from ``AssertionError`` so that ``except GlyphDrawError`` handlers never
  catch it.
"""


class GlyphDrawError(Exception):
    """Base exception for all recoverable glyphdraw errors."""

    pass


class NameValidationError(GlyphDrawError, ValueError):
    """A glyph or anchor name violates identifier restrictions."""

    def __init__(self, name: object, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid name {name!r}: {reason}")


class PenProtocolError(AssertionError):
    """The point pen protocol was driven out of order."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DrawingBorrowedError(PenProtocolError):
    """A drawing was accessed while a point pen session holds it."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            f"Cannot {operation}: drawing is borrowed by an open point pen session"
        )
