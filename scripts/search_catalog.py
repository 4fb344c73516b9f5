"""
CLI script to run catalog searches against a JSON catalog export.

Prints each result with its relevance score and match kind, which is how
the matching thresholds and field weights are checked against real queries.

Usage:
    python scripts/search_catalog.py catalog.json "betoneira"
    python scripts/search_catalog.py catalog.json "serra" --sort price-asc
    python scripts/search_catalog.py catalog.json "andaime" --fields name category
    python scripts/search_catalog.py catalog.json "furadeira" --config path/to/config.json
    python scripts/search_catalog.py catalog.json "betorneira" --verbose
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog_search.core import get_config, setup_logging, ConfigurationError, SearchError
from catalog_search.core.config_loader import reload_config
from catalog_search.search import SearchEngine, SortOrder
from catalog_search.utils import truncate_text


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Search a JSON catalog export and explain the ranking"
    )

    parser.add_argument(
        "catalog",
        type=str,
        help="Path to a JSON file holding a list of catalog records"
    )

    parser.add_argument(
        "query",
        type=str,
        nargs="?",
        default="",
        help="Search query (empty lists the whole catalog)"
    )

    parser.add_argument(
        "--fields",
        nargs="+",
        help="Record fields to search (default: search.default_fields)"
    )

    parser.add_argument(
        "--sort",
        type=str,
        choices=[order.value for order in SortOrder],
        help="Ordering to apply instead of the default"
    )

    parser.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Number of results to print (default: 20)"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log corrections and timings at DEBUG level"
    )

    return parser.parse_args()


def load_catalog(path: Path) -> list:
    """Load the catalog export, exiting on unreadable files."""
    if not path.exists():
        print(f"Error: Catalog file not found: {path}")
        sys.exit(1)

    try:
        with open(path, "r", encoding="utf-8") as f:
            records = json.load(f)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in catalog file: {e}")
        sys.exit(1)

    if not isinstance(records, list):
        print("Error: Catalog file must contain a JSON list of records")
        sys.exit(1)

    return records


def main():
    """Main entry point for the search CLI."""
    args = parse_args()

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            sys.exit(1)
        reload_config(config_path)

    try:
        config = get_config()
        if args.verbose:
            setup_logging(
                log_level="DEBUG",
                log_format=config.logging.format,
                logs_directory=config.paths.logs_directory,
                force=True
            )
        engine = SearchEngine.from_config(config)
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    records = load_catalog(Path(args.catalog))
    fields = args.fields or config.search.default_fields

    try:
        results, stats = engine.search(
            records,
            args.query,
            fields=fields,
            sort=args.sort,
            page_size=max(1, min(args.limit, config.search.max_page_size))
        )
    except SearchError as e:
        print(f"Search error: {e.message}")
        sys.exit(1)

    explanations = {}
    if stats.sort is SortOrder.RELEVANCE and stats.corrected_query:
        for match in engine.ranker.rank_with_scores(records, stats.corrected_query, fields):
            explanations[match.position] = match

    print("=" * 60)
    print("Catalog Search")
    print("=" * 60)
    print(f"Query:           {stats.query!r}")
    print(f"Corrected query: {stats.corrected_query!r}")
    if stats.suggestion:
        print(f"Did you mean:    {stats.suggestion}")
    print(f"Fields:          {', '.join(fields)}")
    print(f"Ordering:        {stats.sort.value}")
    print(f"Results:         {stats.total_results:,} of {len(records):,} records")
    print(f"Time:            {stats.execution_time_ms:.1f}ms")
    print("=" * 60)

    positions = {id(record): index for index, record in enumerate(records)}

    for rank, record in enumerate(results, 1):
        match = explanations.get(positions.get(id(record)))
        name = record.get("name", "") if isinstance(record, dict) else getattr(record, "name", "")
        line = f"{rank:3d}. {truncate_text(str(name or ''), 40):<40}"
        if match is not None:
            line += f" {match.score:7.2f}  {match.field}:{match.kind.value}"
        print(line)

    if stats.total_results > len(results):
        print(f"  ... and {stats.total_results - len(results)} more results")


if __name__ == "__main__":
    main()
