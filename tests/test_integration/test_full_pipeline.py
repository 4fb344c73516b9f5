"""
Integration tests for the full search pipeline.

Loads configuration and corrections from disk, builds the engine and runs
searches the way the catalog page does.
"""

import pytest
from pathlib import Path

from catalog_search.core.config_loader import get_config
from catalog_search.search.models import MatchKind, SortOrder
from catalog_search.search.search_engine import SearchEngine


@pytest.fixture
def configured_engine(temp_config: Path, reset_config_singleton) -> SearchEngine:
    """Engine built from the temporary config and correction table."""
    return SearchEngine.from_config(get_config(temp_config))


class TestFullPipeline:
    """End-to-end tests from config file to result page."""

    def test_correction_from_file(self, configured_engine, sample_catalog):
        """Test that the file table corrects the query before matching."""
        items, stats = configured_engine.search(sample_catalog, "Jerador")

        assert [record.id for record in items] == ["eq-4"]
        assert stats.suggestion == "gerador"

    def test_default_sort_and_page_size(self, configured_engine, sample_catalog):
        """Test that the configured listing defaults apply without a query."""
        items, stats = configured_engine.search(sample_catalog, "")

        assert [record.id for record in items] == ["eq-2", "eq-1", "eq-5", "eq-4", "eq-3"]
        assert stats.sort is SortOrder.NAME_ASC
        assert stats.total_pages == 1

    def test_configured_tolerance(self, configured_engine, sample_catalog):
        """Test that a two-edit typo is found with max_edit_distance 2."""
        items, _ = configured_engine.search(sample_catalog, "furadiera")

        assert [record.id for record in items] == ["eq-5"]

    def test_configured_scores_and_weights(self, configured_engine, two_records):
        """Test that ranking uses the configured fuzzy score."""
        results = configured_engine.ranker.rank_with_scores(two_records, "betoneria", ["name"])

        assert len(results) == 1
        assert results[0].kind is MatchKind.FUZZY
        assert results[0].score == pytest.approx(30.0 / 3)

    def test_exact_outranks_fuzzy(self, configured_engine):
        """Test that an exact name outranks a typo-only name."""
        records = [
            {"id": "typo", "name": "Betoneria"},
            {"id": "exact", "name": "Betoneira"},
        ]

        items, _ = configured_engine.search(records, "betoneira")

        assert [record["id"] for record in items] == ["exact", "typo"]

    def test_long_query_bounded(self, configured_engine, sample_catalog):
        """Test that an overlong query neither raises nor matches everything."""
        items, stats = configured_engine.search(sample_catalog, "circular " * 100)

        assert stats.total_results == len(items)
        assert [record.id for record in items] == ["eq-3"]
