"""
Text utility functions for catalog search.

Provides accent and case folding, tokenization, light Portuguese stemming
and a coarse phonetic key used to compare user queries with catalog text.
"""

import re
import unicodedata
from typing import List


# Longest suffix first so "zinho" wins over "inho"
_STEM_SUFFIXES = sorted({
    "zinho", "zinha", "inho", "inha",
    "amente", "mente", "mentos", "mento",
    "adores", "adora", "ador",
    "eiros", "eiras", "eiro", "eira",
    "ancia", "coes", "cao", "soes", "sao",
    "adas", "ada", "ados", "ado",
    "idas", "ida", "idos", "ido",
    "ores", "or", "oso", "osa", "eis", "el",
    "ando", "endo", "indo",
    "amos", "emos", "imos",
    "avamos", "avam", "aremos", "ariamos",
    "es", "s",
}, key=lambda suffix: (-len(suffix), suffix))

# Minimum stem length that must remain after removing a suffix
_MIN_STEM_LENGTH = 4

_PHONETIC_RULES = [
    (re.compile(r"ch"), "x"),
    (re.compile(r"sh"), "x"),
    (re.compile(r"c(?=[ei])"), "s"),
    (re.compile(r"qu(?=[ei])"), "k"),
    (re.compile(r"[cq]"), "k"),
    (re.compile(r"lh"), "l"),
    (re.compile(r"nh"), "n"),
    (re.compile(r"ph"), "f"),
    (re.compile(r"th"), "t"),
    (re.compile(r"w"), "v"),
    (re.compile(r"y"), "i"),
    (re.compile(r"z$"), "s"),
    (re.compile(r"h"), ""),
    (re.compile(r"([b-df-hj-np-tv-z])\1+"), r"\1"),
    (re.compile(r"[aeiou]+"), "a"),
    (re.compile(r"[^a-z]"), ""),
]


def strip_diacritics(text: str) -> str:
    """
    Remove combining diacritical marks from text.

    Decomposes characters (NFD) and drops nonspacing marks, so "ação"
    becomes "acao". Case is left untouched.

    Args:
        text: Input text.

    Returns:
        Text without diacritics.
    """
    if not text:
        return ""

    decomposed = unicodedata.normalize("NFD", text)
    return "".join(
        char for char in decomposed
        if unicodedata.category(char) != "Mn"
    )


def normalize_text(text: str) -> str:
    """
    Canonicalize text for case and accent insensitive comparison.

    Lower-cases, strips diacritics, collapses whitespace runs to a single
    space and trims the ends. Lower-casing happens first because some
    characters gain combining marks when lowered ("İ" -> "i̇"); doing it
    before the strip keeps the function idempotent.

    Args:
        text: Raw text, may be None or empty.

    Returns:
        Normalized text, empty string for empty input.
    """
    if not text:
        return ""

    if not isinstance(text, str):
        text = str(text)

    folded = strip_diacritics(text.lower())

    return " ".join(folded.split())


def tokenize(text: str) -> List[str]:
    """
    Split text into normalized, space-delimited tokens.

    Args:
        text: Raw or normalized text.

    Returns:
        List of tokens, empty for blank input.
    """
    normalized = normalize_text(text)
    if not normalized:
        return []
    return normalized.split(" ")


def stem_word(word: str) -> str:
    """
    Reduce a Portuguese word to an approximate stem.

    Removes at most one common suffix (diminutives, agent and adverb
    endings, plurals) and only when at least four characters remain.

    Args:
        word: Single word, raw or normalized.

    Returns:
        Stemmed, normalized word.
    """
    normalized = normalize_text(word)

    for suffix in _STEM_SUFFIXES:
        if len(normalized) > len(suffix) + _MIN_STEM_LENGTH - 1 and normalized.endswith(suffix):
            return normalized[:-len(suffix)]

    return normalized


def phonetic_code(word: str) -> str:
    """
    Compute a coarse Brazilian Portuguese sound-alike key.

    Words that are commonly confused when typed by ear ("cerra" and
    "serra", "compaqtador" and "compactador") share the same key.

    Args:
        word: Single word, raw or normalized.

    Returns:
        Phonetic key made of lowercase ASCII letters.
    """
    code = normalize_text(word)

    for pattern, replacement in _PHONETIC_RULES:
        code = pattern.sub(replacement, code)

    return code


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate text to maximum length with ellipsis.

    Args:
        text: Text to truncate.
        max_length: Maximum length including suffix.
        suffix: String to append when truncated.

    Returns:
        Truncated text or original if within limit.
    """
    if not text or len(text) <= max_length:
        return text

    truncate_at = max_length - len(suffix)
    if truncate_at <= 0:
        return suffix[:max_length]

    # Try to break at word boundary
    truncated = text[:truncate_at]
    last_space = truncated.rfind(" ")

    if last_space > truncate_at * 0.7:
        truncated = truncated[:last_space]

    return truncated + suffix


if __name__ == "__main__":
    print("=== normalize_text ===")
    for sample in ["À Vácuo", "  Betoneira   400L ", "Serra  Mármore\tElétrica"]:
        print(f"  {sample!r} -> {normalize_text(sample)!r}")

    print("\n=== stem_word ===")
    for sample in ["andaimes", "furadeira", "compactadores", "martelinho"]:
        print(f"  {sample} -> {stem_word(sample)}")

    print("\n=== phonetic_code ===")
    for sample in ["cerra", "serra", "compaqtador", "compactador"]:
        print(f"  {sample} -> {phonetic_code(sample)}")

    print("\n=== truncate_text ===")
    long_text = "Betoneira 400 litros com motor monofásico e reservatório em aço"
    print(f"  {truncate_text(long_text, 30)}")
