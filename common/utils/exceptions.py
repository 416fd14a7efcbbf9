from typing import Optional


class CatalogError(Exception):
    """Base class for errors raised by the catalog storage layer."""


class DatabaseConnectionError(CatalogError):
    """The backend could not be reached (pool open or ping failed)."""


class QueryError(CatalogError):
    """A backend query failed. Never retried.

    ``operation`` names the storage operation that failed; the underlying
    driver error is kept as ``__cause__``.
    """

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message or "unable to execute query"
        super().__init__(f"{operation}: {self.message}")


class ValidationError(CatalogError):
    """Rejected before any query was issued."""
