"""
Tests for text utility functions.

Tests normalization, tokenization, stemming, phonetic keys and truncation.
"""

import pytest

from catalog_search.utils.text_utils import (
    normalize_text,
    phonetic_code,
    stem_word,
    strip_diacritics,
    tokenize,
    truncate_text
)


class TestNormalizeText:
    """Tests for normalize_text function."""

    def test_accent_and_case_insensitive(self):
        """Test that accented and unaccented forms normalize equally."""
        assert normalize_text("À Vácuo") == normalize_text("a vacuo")
        assert normalize_text("À Vácuo") == "a vacuo"

    def test_collapses_whitespace(self):
        """Test that whitespace runs collapse and ends are trimmed."""
        assert normalize_text("  Betoneira \t  400L \n") == "betoneira 400l"

    @pytest.mark.parametrize("text", [
        "Serra Mármore Elétrica",
        "  FURADEIRA   de  Impacto ",
        "Compactador de Solo à Gasolina",
        "İstanbul",
    ])
    def test_idempotent(self, text):
        """Test that normalizing twice gives the same result."""
        once = normalize_text(text)

        assert normalize_text(once) == once

    def test_empty_and_none_return_empty_string(self):
        """Test that empty input never raises."""
        assert normalize_text("") == ""
        assert normalize_text(None) == ""
        assert normalize_text("   ") == ""

    def test_non_string_input_is_converted(self):
        """Test that numbers are normalized through their text form."""
        assert normalize_text(400) == "400"


class TestStripDiacritics:
    """Tests for strip_diacritics function."""

    def test_keeps_case(self):
        """Test that only marks are removed."""
        assert strip_diacritics("Ação Ótima") == "Acao Otima"

    def test_cedilla_removed(self):
        """Test that the cedilla is treated as a diacritic."""
        assert strip_diacritics("aço") == "aco"


class TestTokenize:
    """Tests for tokenize function."""

    def test_splits_normalized_tokens(self):
        """Test that tokens are normalized and split on whitespace."""
        assert tokenize("  Serra  Mármore ") == ["serra", "marmore"]

    def test_blank_input_has_no_tokens(self):
        """Test that blank input returns an empty list."""
        assert tokenize("") == []
        assert tokenize("   ") == []


class TestStemWord:
    """Tests for stem_word function."""

    def test_plural_and_singular_share_stem(self):
        """Test that plural endings are removed."""
        assert stem_word("furadeiras") == stem_word("furadeira")

    def test_removes_plural_suffix(self):
        """Test stemming of a plain plural."""
        assert stem_word("andaimes") == "andaim"

    def test_short_words_untouched(self):
        """Test that no suffix is removed when too little would remain."""
        assert stem_word("luz") == "luz"
        assert stem_word("ado") == "ado"

    def test_input_is_normalized(self):
        """Test that stemming works on raw input."""
        assert stem_word("FURADEIRAS") == stem_word("furadeira")


class TestPhoneticCode:
    """Tests for phonetic_code function."""

    def test_soft_c_matches_s(self):
        """Test that 'cerra' sounds like 'serra'."""
        assert phonetic_code("cerra") == phonetic_code("serra")

    def test_q_matches_c(self):
        """Test that 'compaqtador' sounds like 'compactador'."""
        assert phonetic_code("compaqtador") == phonetic_code("compactador")

    def test_different_words_differ(self):
        """Test that unrelated words get different keys."""
        assert phonetic_code("betoneira") != phonetic_code("andaime")

    def test_only_ascii_letters(self):
        """Test that digits and accents never reach the key."""
        code = phonetic_code("Módulo 400")

        assert code.isalpha()
        assert code.isascii()


class TestTruncateText:
    """Tests for truncate_text function."""

    def test_short_text_unchanged(self):
        """Test that short text is not truncated."""
        text = "Betoneira"

        result = truncate_text(text, 20)

        assert result == text

    def test_long_text_truncated_at_word_boundary(self):
        """Test that long text breaks at a space when one is close."""
        text = "Betoneira 400 litros com motor monofásico"

        result = truncate_text(text, 30)

        assert result == "Betoneira 400 litros com..."
        assert len(result) <= 30

    def test_custom_suffix(self):
        """Test truncation with custom suffix."""
        text = "This is a long text that needs truncating"

        result = truncate_text(text, 20, suffix="…")

        assert result.endswith("…")

    def test_empty_text(self):
        """Test handling of empty text."""
        assert truncate_text("", 10) == ""
