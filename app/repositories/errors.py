"""Repository errors - raised from the write path only."""


class RepositoryError(Exception):
    """Base class for repository errors."""


class RecordNotFoundError(RepositoryError):
    """No record with the given identifier."""


class InvalidRowIndexError(RepositoryError):
    """Row index points at or above the header row."""


class StaleRowError(RepositoryError):
    """The addressed row no longer holds the record the caller resolved."""
