"""
Custom exception hierarchy for the catalog search library.

Only configuration loading and invalid caller arguments raise; the
search path itself tolerates any query or record shape.
"""


class CatalogSearchError(Exception):
    """Base exception for all catalog search errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(CatalogSearchError):
    """Raised when configuration or a correction table is invalid or missing."""
    pass


class SearchError(CatalogSearchError):
    """Raised when a search is requested with invalid arguments."""

    def __init__(self, message: str, query: str = None, details: dict = None):
        """
        Initialize search error.

        Args:
            message: Error description.
            query: The query being searched when the error occurred.
            details: Additional context.
        """
        super().__init__(message, details)
        self.query = query


if __name__ == "__main__":
    try:
        raise ConfigurationError("Correction table not found", {"path": "/config/corrections.json"})
    except CatalogSearchError as e:
        print(f"Caught: {e.__class__.__name__}: {e.message}")
        print(f"Details: {e.details}")

    try:
        raise SearchError("Unknown sort order", query="betoneira", details={"sort": "size-asc"})
    except SearchError as e:
        print(f"Search failed for: {e.query}")
