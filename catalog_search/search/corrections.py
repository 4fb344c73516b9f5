"""
Typo correction for equipment search queries.

Maps known misspellings of equipment names and jargon to their canonical
spelling using a static correction table. Only whole tokens or known
multi-word phrases are replaced; approximate matching belongs to the
fuzzy matcher.
"""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from ..core import get_logger, ConfigurationError
from ..utils.text_utils import normalize_text

logger = get_logger(__name__)


# Misspellings observed in storefront searches, keyed by the typed form
DEFAULT_CORRECTIONS: Dict[str, str] = {
    "betorneira": "betoneira",
    "betuneira": "betoneira",
    "batuneira": "betoneira",
    "andaine": "andaime",
    "andames": "andaimes",
    "andaimis": "andaimes",
    "andaime tubolar": "andaime tubular",
    "furaderia": "furadeira",
    "furadeira de impato": "furadeira de impacto",
    "marteleti": "martelete",
    "esmerilhaderia": "esmerilhadeira",
    "esmerilhadera": "esmerilhadeira",
    "compaqtador": "compactador",
    "mareta": "marreta",
    "parafuzadeira": "parafusadeira",
    "parafuzadera": "parafusadeira",
    "serote": "serrote",
    "politris": "politriz",
    "politrix": "politriz",
    "policorts": "policorte",
    "plikort": "policorte",
    "comprensor": "compressor",
    "jerador": "gerador",
    "lixadera": "lixadeira",
    "praina": "plaina",
    "cerra circular": "serra circular",
    "praca": "placa",
    "fibrador": "vibrador",
    "iscora": "escora",
}


def _phrases(text: str) -> Iterator[str]:
    """Every contiguous run of tokens in a normalized text."""
    tokens = text.split(" ")
    for start in range(len(tokens)):
        for end in range(start + 1, len(tokens) + 1):
            yield " ".join(tokens[start:end])


class CorrectionTable:
    """
    Immutable, validated mapping from misspelling to canonical form.

    Keys and values are stored normalized. Entries whose key equals its
    value are dropped. A canonical form that contains a key (as a whole or
    as any run of its tokens) is rejected, so corrected text never holds
    a misspelling the table itself introduced.
    """

    def __init__(self, corrections: Mapping[str, str]):
        """
        Build and validate a correction table.

        Args:
            corrections: Mapping of misspelling to canonical form, in any
                        case or accentuation.

        Raises:
            ConfigurationError: If an entry is empty, conflicting or chained.
        """
        entries: Dict[str, str] = {}

        for raw_key, raw_value in corrections.items():
            key = normalize_text(raw_key)
            value = normalize_text(raw_value)

            if not key or not value:
                raise ConfigurationError(
                    "Correction entries cannot be empty",
                    {"key": raw_key, "value": raw_value}
                )

            if key == value:
                logger.debug(f"Dropping identity correction '{raw_key}'")
                continue

            existing = entries.get(key)
            if existing is not None and existing != value:
                raise ConfigurationError(
                    f"Conflicting corrections for '{key}'",
                    {"key": key, "values": [existing, value]}
                )

            entries[key] = value

        chained = sorted({
            phrase
            for value in entries.values()
            for phrase in _phrases(value)
            if phrase in entries
        })
        if chained:
            raise ConfigurationError(
                "Canonical forms cannot also be corrected",
                {"chained": chained}
            )

        self._entries = MappingProxyType(entries)
        self.max_phrase_length = max(
            (len(key.split(" ")) for key in entries),
            default=0
        )

    @classmethod
    def default(cls) -> "CorrectionTable":
        """Build the table shipped with the library."""
        return cls(DEFAULT_CORRECTIONS)

    @classmethod
    def from_file(cls, path: Path) -> "CorrectionTable":
        """
        Load a correction table from a JSON object file.

        Args:
            path: Path to a JSON file mapping misspelling to canonical form.

        Returns:
            Validated CorrectionTable.

        Raises:
            ConfigurationError: If the file is missing or malformed.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(
                f"Correction table not found: {path}",
                {"path": str(path)}
            )

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in correction table: {e}",
                {"path": str(path)}
            )

        if not isinstance(data, dict) or not all(
            isinstance(key, str) and isinstance(value, str)
            for key, value in data.items()
        ):
            raise ConfigurationError(
                "Correction table must be a JSON object of strings",
                {"path": str(path)}
            )

        table = cls(data)
        logger.info(f"Loaded {len(table)} corrections from {path}")
        return table

    def get(self, key: str) -> Optional[str]:
        """Return the canonical form of a normalized token or phrase."""
        return self._entries.get(key)

    def items(self) -> List[Tuple[str, str]]:
        """Entries in table order."""
        return list(self._entries.items())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"CorrectionTable({len(self)} entries)"


class TypoCorrector:
    """
    Replaces known misspellings in a query with their canonical spelling.

    The table is injected so that each instance can be tested against its
    own table variant. Correction never reorders or drops tokens.
    """

    def __init__(self, table: CorrectionTable):
        """
        Initialize the corrector.

        Args:
            table: Correction table to apply.
        """
        self.table = table

    def correct(self, text: str) -> str:
        """
        Normalize text and correct known misspellings.

        At each position the longest known phrase wins; unknown tokens
        are kept as they are. A correction can complete a longer phrase
        ("andaine tubolar" -> "andaime tubolar" -> "andaime tubular"), so
        passes repeat until the text no longer changes.

        Args:
            text: Raw query text.

        Returns:
            Normalized, corrected text.
        """
        corrected = normalize_text(text)
        if not corrected or not len(self.table):
            return corrected

        # Repeat until settled, at most once per token
        for _ in range(len(corrected.split(" ")) + 1):
            updated = self._correct_once(corrected)
            if updated == corrected:
                break
            corrected = updated

        return corrected

    def _correct_once(self, normalized: str) -> str:
        """Single left-to-right replacement pass over normalized text."""
        tokens = normalized.split(" ")
        corrected = []
        position = 0

        while position < len(tokens):
            longest = min(self.table.max_phrase_length, len(tokens) - position)

            for size in range(longest, 0, -1):
                phrase = " ".join(tokens[position:position + size])
                replacement = self.table.get(phrase)
                if replacement is not None:
                    corrected.append(replacement)
                    position += size
                    break
            else:
                corrected.append(tokens[position])
                position += 1

        return " ".join(corrected)

    def suggest(self, text: str) -> Optional[str]:
        """
        Return a "did you mean" suggestion for a query.

        Args:
            text: Raw query text.

        Returns:
            The corrected query, or None when correction changes nothing.
        """
        corrected = self.correct(text)
        if corrected == normalize_text(text):
            return None
        return corrected


if __name__ == "__main__":
    corrector = TypoCorrector(CorrectionTable.default())

    for query in ["Betorneira 400L", "andaime tubolar", "Cerra Circular Makita", "gerador"]:
        print(f"  {query!r} -> {corrector.correct(query)!r} (suggest: {corrector.suggest(query)!r})")
