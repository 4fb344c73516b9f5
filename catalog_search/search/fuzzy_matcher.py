"""
Fuzzy matching engine for catalog search.

Decides whether a catalog record matches a query across a set of named
fields, tolerating accents, case and small typos, and scores how tight
the match is. Matching is a linear scan with bounded edit distance, so
each call runs in time proportional to query length times field length.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

from rapidfuzz.distance import Levenshtein

from ..core.config_loader import MatchingConfig, MatchScores
from ..utils.text_utils import normalize_text, phonetic_code, stem_word
from .models import FieldMatch, MatchKind, get_field_value

_KIND_ORDER = list(MatchKind)


@dataclass(frozen=True)
class PreparedQuery:
    """Normalized query with per-token data computed once per call."""
    text: str
    tokens: Tuple[str, ...]
    tolerances: Tuple[int, ...]
    stems: Tuple[str, ...]
    phonetics: Tuple[str, ...]


QueryLike = Union[str, PreparedQuery]


@dataclass
class _FieldTokens:
    """Tokens of one field with stems and phonetic keys computed on demand."""
    tokens: List[str]
    _stems: Optional[List[str]] = None
    _phonetics: Optional[List[str]] = None

    @property
    def stems(self) -> List[str]:
        if self._stems is None:
            self._stems = [stem_word(token) for token in self.tokens]
        return self._stems

    @property
    def phonetics(self) -> List[str]:
        if self._phonetics is None:
            self._phonetics = [phonetic_code(token) for token in self.tokens]
        return self._phonetics


class FuzzyMatcher:
    """
    Typo-tolerant matcher for catalog records.

    Match kinds, strongest first:
    - exact: the whole field equals the query
    - prefix: the field starts with the query
    - substring: the field contains the query
    - token_prefix / token_substring: query tokens start / occur in field tokens
    - fuzzy: query token within bounded Levenshtein distance of a field token
    - stem / phonetic: a field token's Portuguese stem / sound-alike key
      starts with the query token's ("concreto" finds "concretagem")

    Token-level scores are averaged over the query tokens, so a field that
    explains more of the query scores higher.
    """

    def __init__(
        self,
        matching: Optional[MatchingConfig] = None,
        scores: Optional[MatchScores] = None
    ):
        """
        Initialize fuzzy matcher.

        Args:
            matching: Tolerances; defaults to MatchingConfig().
            scores: Score per match kind; defaults to MatchScores().
        """
        self.matching = matching or MatchingConfig()
        self.scores = scores or MatchScores()

    def tolerance(self, token: str) -> int:
        """
        Edit budget for a query token.

        Short tokens must match exactly; longer ones allow one edit per
        `chars_per_edit` characters, capped at `max_edit_distance`.
        """
        if len(token) < self.matching.min_fuzzy_token_length:
            return 0
        return min(
            self.matching.max_edit_distance,
            len(token) // self.matching.chars_per_edit
        )

    def matches(self, record: Any, query: QueryLike, fields: Sequence[str]) -> bool:
        """
        Check whether a record matches the query on at least one field.

        An empty query matches every record.
        """
        prepared = self.prepare(query)
        if prepared is None:
            return True
        return bool(self._match_fields(record, prepared, fields))

    def score(self, record: Any, query: QueryLike, fields: Sequence[str]) -> Optional[float]:
        """
        Best unweighted field score of a record.

        Args:
            record: Mapping or object exposing the fields.
            query: Query text (normalized here, not corrected).
            fields: Field names to search.

        Returns:
            Score >= 0 (0 means no match), or None for an empty query.
        """
        prepared = self.prepare(query)
        if prepared is None:
            return None

        field_matches = self._match_fields(record, prepared, fields)
        return max((match.score for match in field_matches), default=0.0)

    def match_fields(self, record: Any, query: QueryLike, fields: Sequence[str]) -> List[FieldMatch]:
        """
        Explain which fields of a record match the query.

        Returns:
            FieldMatch per matching field, in `fields` order; empty when
            nothing matches or the query is empty.
        """
        prepared = self.prepare(query)
        if prepared is None:
            return []
        return self._match_fields(record, prepared, fields)

    def filter(self, records: Iterable[Any], query: QueryLike, fields: Sequence[str]) -> List[Any]:
        """
        Keep the records that match, in their input order.

        An empty query keeps every record.
        """
        prepared = self.prepare(query)
        if prepared is None:
            return list(records)
        return [
            record for record in records
            if self._match_fields(record, prepared, fields)
        ]

    def match_text(self, text: Any, query: QueryLike) -> Tuple[MatchKind, float]:
        """
        Match a query against a single field value.

        Returns:
            Tuple of (match kind, unweighted score).
        """
        prepared = self.prepare(query)
        if prepared is None:
            return (MatchKind.NONE, 0.0)
        return self._match_value(text, prepared)

    def prepare(self, query: QueryLike) -> Optional[PreparedQuery]:
        """
        Normalize and bound a query once so it can be reused per record.

        Queries longer than `max_query_length` are truncated rather than
        rejected. Already prepared queries are returned unchanged.

        Returns:
            PreparedQuery, or None when the query is blank.
        """
        if isinstance(query, PreparedQuery):
            return query

        text = normalize_text(query)[:self.matching.max_query_length].strip()
        if not text:
            return None

        tokens = tuple(text.split(" "))
        return PreparedQuery(
            text=text,
            tokens=tokens,
            tolerances=tuple(self.tolerance(token) for token in tokens),
            stems=tuple(stem_word(token) for token in tokens),
            phonetics=tuple(
                phonetic_code(token)
                if len(token) >= self.matching.min_phonetic_length else ""
                for token in tokens
            )
        )

    def _match_fields(
        self,
        record: Any,
        prepared: PreparedQuery,
        fields: Sequence[str]
    ) -> List[FieldMatch]:
        """Match every requested field and keep the non-zero ones."""
        results = []
        for field_name in fields or ():
            kind, score = self._match_value(get_field_value(record, field_name), prepared)
            if score > 0:
                results.append(FieldMatch(field=field_name, kind=kind, score=score))
        return results

    def _match_value(self, value: Any, prepared: PreparedQuery) -> Tuple[MatchKind, float]:
        """Score one field value against the prepared query."""
        text = self._field_text(value)
        if not text:
            return (MatchKind.NONE, 0.0)

        query = prepared.text

        if text == query:
            return (MatchKind.EXACT, self.scores.exact)
        if text.startswith(query):
            return (MatchKind.PREFIX, self.scores.prefix)
        if query in text:
            return (MatchKind.SUBSTRING, self.scores.substring)

        return self._match_tokens(_FieldTokens(tokens=text.split(" ")), prepared)

    def _match_tokens(
        self,
        field_tokens: _FieldTokens,
        prepared: PreparedQuery
    ) -> Tuple[MatchKind, float]:
        """Average the best per-token score over all query tokens."""
        total = 0.0
        weakest = None

        for index, token in enumerate(prepared.tokens):
            kind, score = self._match_token(index, token, field_tokens, prepared)
            if score <= 0:
                continue
            total += score
            if weakest is None or _KIND_ORDER.index(kind) > _KIND_ORDER.index(weakest):
                weakest = kind

        if weakest is None:
            return (MatchKind.NONE, 0.0)

        return (weakest, total / len(prepared.tokens))

    def _match_token(
        self,
        index: int,
        token: str,
        field_tokens: _FieldTokens,
        prepared: PreparedQuery
    ) -> Tuple[MatchKind, float]:
        """Best match of a single query token against the field tokens."""
        best = (MatchKind.NONE, 0.0)

        if any(candidate.startswith(token) for candidate in field_tokens.tokens):
            best = (MatchKind.TOKEN_PREFIX, self.scores.token_prefix)
        elif any(token in candidate for candidate in field_tokens.tokens):
            best = (MatchKind.TOKEN_SUBSTRING, self.scores.token_substring)

        tolerance = prepared.tolerances[index]
        if tolerance and self.scores.fuzzy > best[1]:
            distance = self._bounded_distance(token, field_tokens.tokens, tolerance)
            if distance <= tolerance:
                fuzzy_score = self.scores.fuzzy * (1 - distance / (tolerance + 1))
                if fuzzy_score > best[1]:
                    best = (MatchKind.FUZZY, fuzzy_score)

        if self.matching.use_stemming and self.scores.stem > best[1]:
            stem = prepared.stems[index]
            if stem and any(candidate.startswith(stem) for candidate in field_tokens.stems):
                best = (MatchKind.STEM, self.scores.stem)

        if self.matching.use_phonetic and self.scores.phonetic > best[1]:
            code = prepared.phonetics[index]
            if code and any(candidate.startswith(code) for candidate in field_tokens.phonetics):
                best = (MatchKind.PHONETIC, self.scores.phonetic)

        return best

    @staticmethod
    def _bounded_distance(token: str, candidates: List[str], tolerance: int) -> int:
        """
        Smallest edit distance to any candidate, capped at tolerance + 1.

        Candidates whose length differs by more than the tolerance are
        skipped without computing a distance.
        """
        best = tolerance + 1
        for candidate in candidates:
            if abs(len(candidate) - len(token)) > tolerance:
                continue
            distance = Levenshtein.distance(token, candidate, score_cutoff=best - 1)
            if distance < best:
                best = distance
                if best == 0:
                    break
        return best

    @staticmethod
    def _field_text(value: Any) -> str:
        """Normalized text of a field; non-text values read as empty."""
        if value is None or isinstance(value, bool):
            return ""
        if isinstance(value, (str, int, float)):
            return normalize_text(str(value))
        return ""


if __name__ == "__main__":
    matcher = FuzzyMatcher()
    catalog = [
        {"id": 1, "name": "Betoneira 400L", "description": "Motor monofásico"},
        {"id": 2, "name": "Andaime Fachadeiro", "description": None},
    ]

    for query in ["betoneira", "betoneria", "andaime fachadeiro", "motor", "guindaste"]:
        for record in catalog:
            match = matcher.match_fields(record, query, ["name", "description"])
            print(f"  {query!r} vs {record['name']!r}: {match}")
