"""
Relevance ranking for catalog search results.

Orders records by their best weighted field score. Records that do not
match are dropped, ties keep their input order.
"""

from typing import Any, Iterable, List, Optional, Sequence

from ..core.config_loader import RankingConfig
from .fuzzy_matcher import FuzzyMatcher, PreparedQuery
from .models import MatchResult


class RelevanceRanker:
    """
    Rank records by match quality.

    Each record scores the maximum over its fields of the matcher's field
    score times the field weight. Taking the maximum rather than the sum
    keeps a term repeated across name and description from counting twice.
    """

    def __init__(
        self,
        matcher: Optional[FuzzyMatcher] = None,
        ranking: Optional[RankingConfig] = None
    ):
        """
        Initialize the ranker.

        Args:
            matcher: Matcher used for field scores; built from the
                    `ranking` score table when omitted.
            ranking: Field weights and score table; defaults to RankingConfig().

        Raises:
            ConfigurationError: If the weights let a weaker match kind
                               outrank a stronger one.
        """
        self.ranking = ranking or RankingConfig()
        self.ranking.validate()
        self.matcher = matcher or FuzzyMatcher(scores=self.ranking.match_scores)

    def rank(self, records: Iterable[Any], query: str, fields: Sequence[str]) -> List[Any]:
        """
        Order records by relevance to the query.

        Args:
            records: Catalog records, left untouched.
            query: Typo-corrected query.
            fields: Field names to search.

        Returns:
            New list of matching records, best first. With an empty query
            every record is returned in input order.
        """
        records = list(records)
        prepared = self.matcher.prepare(query)
        if prepared is None:
            return records
        return [result.record for result in self._score_all(records, prepared, fields)]

    def rank_with_scores(
        self,
        records: Iterable[Any],
        query: str,
        fields: Sequence[str]
    ) -> List[MatchResult]:
        """
        Rank records and keep the explanation of each score.

        Returns:
            MatchResult per matching record, best first; empty for an
            empty query since no score is defined.
        """
        prepared = self.matcher.prepare(query)
        if prepared is None:
            return []
        return self._score_all(list(records), prepared, fields)

    def _score_all(
        self,
        records: List[Any],
        prepared: PreparedQuery,
        fields: Sequence[str]
    ) -> List[MatchResult]:
        """Score each record, drop misses and sort best first."""
        results = []

        for position, record in enumerate(records):
            best = None
            for field_match in self.matcher.match_fields(record, prepared, fields):
                weighted = field_match.score * self.ranking.weight_for(field_match.field)
                if best is None or weighted > best.score:
                    best = MatchResult(
                        record=record,
                        score=weighted,
                        field=field_match.field,
                        kind=field_match.kind,
                        position=position
                    )
            if best is not None and best.score > 0:
                results.append(best)

        # sorted() is stable: equal scores keep input order
        return sorted(results, key=lambda result: -result.score)


if __name__ == "__main__":
    ranker = RelevanceRanker()
    catalog = [
        {"id": 1, "name": "Serra Mármore", "description": "Corte de pisos e betoneira"},
        {"id": 2, "name": "Betoneira 400L", "description": "Motor monofásico"},
        {"id": 3, "name": "Betoneira", "description": None},
        {"id": 4, "name": "Andaime Fachadeiro", "description": "Andaime tubular"},
    ]

    for result in ranker.rank_with_scores(catalog, "betoneira", ["name", "description"]):
        print(f"  #{result.record_id} {result.score:6.2f} {result.field}:{result.kind.value}")
