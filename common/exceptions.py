"""Domain-specific exceptions for the expense tracker core services."""

class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class RecordNotFoundError(LookupError):
    """Raised when an expense record cannot be located."""


class PersistenceError(IOError):
    """Raised when the persistence layer encounters unrecoverable issues."""


class PersistenceReadError(PersistenceError):
    """Raised when the stored blob cannot be read or decoded."""


class PersistenceWriteError(PersistenceError):
    """Raised when the store rejects a write (I/O failure or quota exceeded)."""
