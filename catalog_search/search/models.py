"""
Data models for search functionality.

Defines the match kinds, match results, catalog records, sort orders and
search statistics used throughout the search module.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from ..core.exceptions import SearchError


class MatchKind(Enum):
    """How a query matched a field, strongest first."""
    EXACT = "exact"
    PREFIX = "prefix"
    SUBSTRING = "substring"
    TOKEN_PREFIX = "token_prefix"
    TOKEN_SUBSTRING = "token_substring"
    FUZZY = "fuzzy"
    STEM = "stem"
    PHONETIC = "phonetic"
    NONE = "none"


class SortOrder(Enum):
    """Orderings offered by the catalog page."""
    RELEVANCE = "relevance"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    RATING_ASC = "rating-asc"
    RATING_DESC = "rating-desc"

    @property
    def key(self) -> str:
        """Sort key name ("name", "price", "rating" or "relevance")."""
        return self.value.split("-")[0]

    @property
    def descending(self) -> bool:
        """Whether the ordering runs from highest to lowest."""
        return self.value.endswith("-desc")

    @classmethod
    def from_value(cls, value: Union[str, "SortOrder"]) -> "SortOrder":
        """
        Parse a sort order from its string form.

        Args:
            value: A SortOrder or one of its string values.

        Returns:
            The matching SortOrder.

        Raises:
            SearchError: If the value names no known ordering.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise SearchError(
                f"Unknown sort order: {value}",
                details={"allowed": [order.value for order in cls]}
            )


@dataclass(frozen=True)
class FieldMatch:
    """
    Result of matching a query against a single field.

    Attributes:
        field: Name of the field that matched.
        kind: Weakest match kind needed to explain the match.
        score: Unweighted match score (0 means no match).
    """
    field: str
    kind: MatchKind
    score: float


@dataclass(frozen=True)
class MatchResult:
    """
    A record paired with its relevance score.

    Attributes:
        record: The original catalog record, never copied.
        score: Weighted relevance score, always positive.
        field: Field that produced the best score.
        kind: Match kind of that field.
        position: Index of the record in the input sequence.
    """
    record: Any
    score: float
    field: str
    kind: MatchKind
    position: int

    @property
    def record_id(self) -> Any:
        """Stable identifier of the underlying record, if it has one."""
        return get_field_value(self.record, "id")


@dataclass
class CatalogRecord:
    """
    An equipment listing as served by the catalog backend.

    Attributes:
        id: Stable identifier.
        name: Display name, e.g. "Betoneira 400L".
        description: Free-text description.
        category: Category name.
        daily_rate: Daily rental price.
        average_rating: Mean review rating (0 when unrated).
    """
    id: Any
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    daily_rate: Optional[float] = None
    average_rating: float = 0.0


@dataclass
class SearchStats:
    """
    Statistics about a search execution.

    Attributes:
        query: The original query text.
        corrected_query: Normalized query after typo correction.
        suggestion: Correction to show the user, None when nothing changed.
        total_results: Number of records that passed the filter.
        execution_time_ms: Execution time in milliseconds.
        sort: Ordering that was actually applied.
        page: Current page number (1-indexed).
        total_pages: Total number of pages.
    """
    query: str
    corrected_query: str
    suggestion: Optional[str]
    total_results: int
    execution_time_ms: float
    sort: SortOrder = SortOrder.RELEVANCE
    page: int = 1
    total_pages: int = 1


def get_field_value(record: Any, field_name: str) -> Any:
    """
    Read a named field from a mapping or an attribute object.

    Missing fields read as None.
    """
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(field_name)
    return getattr(record, field_name, None)


if __name__ == "__main__":
    record = CatalogRecord(id=1, name="Betoneira 400L", daily_rate=89.9, average_rating=4.7)
    print(f"Record: {record}")

    result = MatchResult(
        record=record,
        score=90.0,
        field="name",
        kind=MatchKind.PREFIX,
        position=0
    )
    print(f"Result: id={result.record_id} score={result.score} kind={result.kind.value}")

    order = SortOrder.from_value("price-desc")
    print(f"Sort: key={order.key} descending={order.descending}")
