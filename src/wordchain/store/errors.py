"""Store error hierarchy."""

from wordchain.errors import WordchainError


class DataError(WordchainError):
    """Base for all wordchain.store errors."""


class DriverNotInstalledError(DataError):
    """Raised when the required database driver is not installed."""


class QueryError(DataError):
    """Raised when a SQL statement fails."""


class IntegrityError(QueryError):
    """Raised when a statement violates a uniqueness or key constraint."""
