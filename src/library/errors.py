"""Exception types raised by the library core.

Malformed input raises; a well-formed query that matches nothing returns
``None`` or an empty list instead.
"""


class LibraryError(Exception):
    """Base class for all library errors."""


class CoordinateError(LibraryError, ValueError):
    """Raised when coordinate text does not match the coordinate grammar."""


class InvalidIdentifierError(CoordinateError):
    """Raised when a SHA-group coordinate carries a non SHA-1 artifact id."""


class RecordValidationError(LibraryError, ValueError):
    """Raised when a data record fails its construction-time field checks."""
