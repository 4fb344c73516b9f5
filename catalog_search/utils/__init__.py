"""
Utility module providing shared text helpers.

Contains the normalizer and the word-level helpers used across the
search module. Depends on nothing else in the package.
"""

from .text_utils import (
    strip_diacritics,
    normalize_text,
    tokenize,
    stem_word,
    phonetic_code,
    truncate_text
)

__all__ = [
    "strip_diacritics",
    "normalize_text",
    "tokenize",
    "stem_word",
    "phonetic_code",
    "truncate_text"
]
