"""
Tests for custom exception classes.

Tests exception creation, message formatting, and details handling.
"""

import pytest

from catalog_search.core.exceptions import (
    CatalogSearchError,
    ConfigurationError,
    SearchError
)


class TestCatalogSearchError:
    """Tests for base CatalogSearchError."""

    def test_basic_creation(self):
        """Test creating exception with just a message."""
        error = CatalogSearchError("Something went wrong")

        assert error.message == "Something went wrong"
        assert error.details == {}
        assert str(error) == "Something went wrong"

    def test_creation_with_details(self):
        """Test creating exception with details dict."""
        error = CatalogSearchError(
            "Table error",
            {"path": "corrections.json", "entries": 30}
        )

        assert error.message == "Table error"
        assert error.details["path"] == "corrections.json"
        assert error.details["entries"] == 30


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_is_subclass_of_base(self):
        """Test that ConfigurationError inherits from CatalogSearchError."""
        error = ConfigurationError("Config missing")

        assert isinstance(error, CatalogSearchError)

    def test_can_be_caught_as_base(self):
        """Test that ConfigurationError can be caught as CatalogSearchError."""
        with pytest.raises(CatalogSearchError):
            raise ConfigurationError("Test error")


class TestSearchError:
    """Tests for SearchError."""

    def test_search_error_with_query(self):
        """Test SearchError with query parameter."""
        error = SearchError(
            "Unknown sort order",
            query="betoneira"
        )

        assert error.query == "betoneira"
        assert error.message == "Unknown sort order"

    def test_search_error_with_details(self):
        """Test SearchError with query and details."""
        error = SearchError(
            "Unknown sort order",
            query="serra",
            details={"sort": "size-asc"}
        )

        assert error.query == "serra"
        assert error.details["sort"] == "size-asc"
        assert isinstance(error, CatalogSearchError)
