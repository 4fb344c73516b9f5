"""
Catalog search entry point.

Composes typo correction, fuzzy filtering, relevance ranking, secondary
orderings and pagination into the single call the catalog page makes.
"""

import math
import time
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

from ..core import get_config, get_logger, Config, ConfigurationError, SearchError
from ..core.config_loader import SearchConfig
from ..utils.text_utils import normalize_text
from .corrections import CorrectionTable, TypoCorrector
from .fuzzy_matcher import FuzzyMatcher
from .models import SearchStats, SortOrder
from .relevance_ranker import RelevanceRanker
from .sorting import sort_records

logger = get_logger(__name__)


class SearchEngine:
    """
    Search an in-memory equipment catalog.

    With an active query, relevance ordering applies unless the caller
    explicitly asks for a secondary ordering, in which case matching
    records are filtered and then sorted by that ordering. Without a
    query every record is kept and the default ordering applies.
    """

    def __init__(
        self,
        corrector: TypoCorrector,
        ranker: Optional[RelevanceRanker] = None,
        search_config: Optional[SearchConfig] = None
    ):
        """
        Initialize the catalog search.

        Args:
            corrector: Typo corrector applied to every query.
            ranker: Relevance ranker; its matcher also filters records for
                   secondary orderings. Defaults to RelevanceRanker().
            search_config: Default fields, ordering and page sizes.
        """
        self.corrector = corrector
        self.ranker = ranker or RelevanceRanker()
        self.matcher = self.ranker.matcher
        self.config = search_config or SearchConfig()

        try:
            self.default_sort = SortOrder.from_value(self.config.default_sort)
        except SearchError as e:
            raise ConfigurationError(
                f"Invalid search.default_sort: {self.config.default_sort}",
                e.details
            )

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> "SearchEngine":
        """
        Build a catalog search from configuration.

        Loads the correction table from `paths.corrections_path` when set,
        otherwise uses the table shipped with the library.

        Raises:
            ConfigurationError: If the correction table or settings are invalid.
        """
        config = config or get_config()

        if config.paths.corrections_path:
            table = CorrectionTable.from_file(config.paths.corrections_path)
        else:
            table = CorrectionTable.default()

        matcher = FuzzyMatcher(config.matching, config.ranking.match_scores)
        ranker = RelevanceRanker(matcher, config.ranking)

        return cls(TypoCorrector(table), ranker, config.search)

    def search(
        self,
        records: Iterable[Any],
        query: Optional[str],
        fields: Optional[Sequence[str]] = None,
        sort: Optional[Union[str, SortOrder]] = None,
        page: int = 1,
        page_size: Optional[int] = None
    ) -> Tuple[List[Any], SearchStats]:
        """
        Search the catalog and return one page of results.

        Args:
            records: Catalog records, left untouched.
            query: Raw user query; blank means "everything".
            fields: Fields to search; defaults to `search.default_fields`.
            sort: Ordering requested by the caller, None for the default.
            page: 1-indexed page number, clamped to the available pages.
            page_size: Results per page, clamped to `search.max_page_size`.

        Returns:
            Tuple of (records on the requested page, SearchStats).

        Raises:
            SearchError: If `sort` names no known ordering.
        """
        start_time = time.time()

        try:
            requested = SortOrder.from_value(sort) if sort is not None else None
        except SearchError as e:
            raise SearchError(e.message, query=query, details=e.details)

        records = list(records)
        fields = list(fields) if fields else list(self.config.default_fields)

        corrected = self.corrector.correct(query)
        suggestion = corrected if corrected != normalize_text(query) else None

        if corrected:
            if requested is None or requested is SortOrder.RELEVANCE:
                applied = SortOrder.RELEVANCE
                results = self.ranker.rank(records, corrected, fields)
            else:
                applied = requested
                results = sort_records(
                    self.matcher.filter(records, corrected, fields),
                    applied,
                    self.config.sort_fields
                )
        else:
            applied = requested or self.default_sort
            results = sort_records(records, applied, self.config.sort_fields)

        page_items, page, total_pages = self._paginate(results, page, page_size)

        stats = SearchStats(
            query=query or "",
            corrected_query=corrected,
            suggestion=suggestion,
            total_results=len(results),
            execution_time_ms=round((time.time() - start_time) * 1000, 2),
            sort=applied,
            page=page,
            total_pages=total_pages
        )

        logger.debug(
            f"Catalog search '{query}' -> '{corrected}' ({applied.value}): "
            f"{stats.total_results} of {len(records)} records in {stats.execution_time_ms:.1f}ms"
        )

        return page_items, stats

    def _paginate(
        self,
        results: List[Any],
        page: int,
        page_size: Optional[int]
    ) -> Tuple[List[Any], int, int]:
        """Slice one page; returns (items, clamped page, total pages)."""
        size = page_size or self.config.default_page_size
        size = max(1, min(size, self.config.max_page_size))

        total_pages = max(1, math.ceil(len(results) / size))
        page = max(1, min(page or 1, total_pages))

        offset = (page - 1) * size
        return results[offset:offset + size], page, total_pages


if __name__ == "__main__":
    engine = SearchEngine(TypoCorrector(CorrectionTable.default()))
    catalog = [
        {"id": 1, "name": "Betoneira 400L", "description": "Motor monofásico", "daily_rate": 89.9},
        {"id": 2, "name": "Andaime Fachadeiro", "description": None, "daily_rate": 15},
        {"id": 3, "name": "Serra Circular", "description": "Disco de 7 1/4", "daily_rate": 45},
    ]

    for text, order in [("betorneira", None), ("cerra circular", None), ("", "price-asc"), ("a", "name-desc")]:
        items, stats = engine.search(catalog, text, sort=order)
        print(f"  {text!r:<18} sort={stats.sort.value:<10} suggestion={stats.suggestion!r:<18} "
              f"ids={[item['id'] for item in items]}")
