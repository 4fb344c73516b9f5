"""
Search module for catalog search with fuzzy matching and relevance ranking.

Provides typo correction, typo-tolerant field matching, relevance ranking,
secondary orderings and the search engine that composes them.
"""

from .models import (
    MatchKind,
    SortOrder,
    FieldMatch,
    MatchResult,
    CatalogRecord,
    SearchStats,
    get_field_value
)
from .corrections import CorrectionTable, TypoCorrector, DEFAULT_CORRECTIONS
from .fuzzy_matcher import FuzzyMatcher, PreparedQuery
from .relevance_ranker import RelevanceRanker
from .sorting import sort_records
from .search_engine import SearchEngine

__all__ = [
    "MatchKind",
    "SortOrder",
    "FieldMatch",
    "MatchResult",
    "CatalogRecord",
    "SearchStats",
    "get_field_value",
    "CorrectionTable",
    "TypoCorrector",
    "DEFAULT_CORRECTIONS",
    "FuzzyMatcher",
    "PreparedQuery",
    "RelevanceRanker",
    "sort_records",
    "SearchEngine"
]
