"""Custom exception classes for the Review Hub data store.

This module defines application-specific exceptions following Google Python
Style Guide.
"""


class ReviewHubError(Exception):
    """Base exception for all Review Hub data store errors."""

    pass


class StorageUnavailableError(ReviewHubError):
    """Raised when the underlying database cannot be reached or fails."""

    pass


class NotConnectedError(StorageUnavailableError):
    """Raised when an operation runs on a store that is not connected."""

    def __init__(self):
        super().__init__("Data store is not connected; call connect() first")


class DuplicateKeyError(ReviewHubError):
    """Raised when an insert violates a unique constraint."""

    def __init__(self, table: str, key: str):
        """Initialize the exception.

        Args:
            table: Name of the table the insert targeted.
            key: The duplicated key value.
        """
        self.table = table
        self.key = key
        super().__init__(f"Duplicate key '{key}' in table '{table}'")
