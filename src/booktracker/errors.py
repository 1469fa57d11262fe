# ABOUTME: Exception hierarchy shared by the Booktracker stores and services.
# ABOUTME: Every fault an operation can surface to a caller derives from BooktrackerError.


class BooktrackerError(Exception):
    """Base class for all faults surfaced by Booktracker operations."""


class InvalidAttributeError(BooktrackerError):
    """Raised when a name, owner id, tag, or progress value fails validation."""


class NotFoundError(BooktrackerError):
    """Raised when a requested record does not exist."""


class BooklistNotFoundError(NotFoundError):
    """Raised when a booklist id does not resolve to a stored booklist."""


class BookNotFoundError(NotFoundError):
    """Raised when an asin does not resolve to a catalog book or list entry."""


class UnauthorizedError(BooktrackerError):
    """Raised when the requester does not own the booklist being mutated."""


class NoSearchResultError(BooktrackerError):
    """Raised when a free-text catalog lookup yields nothing."""


class StaleBooklistError(BooktrackerError):
    """Raised when a booklist was modified by someone else since it was loaded."""


class SchemaVersionError(BooktrackerError):
    """Raised when the database was written by a newer Booktracker schema."""
