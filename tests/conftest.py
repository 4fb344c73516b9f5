"""
Pytest fixtures and configuration for the test suite.

Provides temporary directories, configuration files, sample catalogs and
singleton resets so tests stay isolated.
"""

import json
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator

import sys
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from catalog_search.search.corrections import CorrectionTable, TypoCorrector
from catalog_search.search.models import CatalogRecord


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory, cleaned up after test.
    """
    tmp = tempfile.mkdtemp(prefix="catalog_search_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_corrections(temp_dir: Path) -> Path:
    """
    Create a small correction table file.

    Returns:
        Path to the JSON correction table.
    """
    config_dir = temp_dir / "config"
    config_dir.mkdir(exist_ok=True)

    corrections_path = config_dir / "corrections.json"
    corrections_path.write_text(json.dumps({
        "betorneira": "betoneira",
        "cerra circular": "serra circular",
        "jerador": "gerador"
    }), encoding="utf-8")

    return corrections_path


@pytest.fixture
def temp_config(temp_dir: Path, temp_corrections: Path) -> Generator[Path, None, None]:
    """
    Create a temporary config.json for testing.

    Args:
        temp_dir: Temporary directory fixture.
        temp_corrections: Correction table fixture.

    Yields:
        Path to temporary config file.
    """
    config_dir = temp_dir / "config"
    config_dir.mkdir(exist_ok=True)

    logs_dir = temp_dir / "output" / "logs"
    logs_dir.mkdir(parents=True)

    config_data = {
        "paths": {
            "logs_directory": str(logs_dir),
            "corrections_path": "config/corrections.json"
        },
        "matching": {
            "max_query_length": 50,
            "min_fuzzy_token_length": 5,
            "chars_per_edit": 4,
            "max_edit_distance": 2
        },
        "ranking": {
            "field_weights": {
                "name": 1.0,
                "description": 0.5
            },
            "match_scores": {
                "exact": 100,
                "fuzzy": 30
            }
        },
        "search": {
            "default_fields": ["name", "description"],
            "default_sort": "name-asc",
            "default_page_size": 5,
            "max_page_size": 10
        },
        "logging": {
            "level": "DEBUG",
            "format": "%(levelname)s - %(message)s",
            "max_file_size_mb": 1,
            "backup_count": 1
        }
    }

    config_path = config_dir / "config.json"
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_data, f)

    yield config_path


@pytest.fixture
def reset_config_singleton():
    """
    Reset the config singleton between tests.

    This ensures each test gets a fresh config instance.
    """
    from catalog_search.core import config_loader
    config_loader._config_instance = None
    yield
    config_loader._config_instance = None


@pytest.fixture
def reset_logger_singleton():
    """
    Reset the logger initialization flag and drop package handlers.

    Closes any handler a test attached so log files can be removed.
    """
    import logging
    from catalog_search.core import logger

    def _clear():
        package_logger = logging.getLogger(logger.PACKAGE_LOGGER)
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()
        logger._logger_initialized = False

    _clear()
    yield
    _clear()


@pytest.fixture
def corrector() -> TypoCorrector:
    """Typo corrector over the table shipped with the library."""
    return TypoCorrector(CorrectionTable.default())


@pytest.fixture
def two_records() -> list:
    """The two-record catalog used by the pipeline scenarios."""
    return [
        {"id": 1, "name": "Betoneira 400L"},
        {"id": 2, "name": "Andaime Fachadeiro"},
    ]


@pytest.fixture
def sample_catalog() -> list:
    """
    A small equipment catalog mixing complete and sparse records.

    Returns:
        List of CatalogRecord instances.
    """
    return [
        CatalogRecord(
            id="eq-1",
            name="Betoneira 400L",
            description="Betoneira com motor monofásico e reservatório de aço",
            category="Concretagem",
            daily_rate=89.9,
            average_rating=4.6
        ),
        CatalogRecord(
            id="eq-2",
            name="Andaime Fachadeiro",
            description="Andaime tubular para fachadas",
            category="Acesso",
            daily_rate=15.0,
            average_rating=4.8
        ),
        CatalogRecord(
            id="eq-3",
            name="Serra Circular",
            description="Serra elétrica com disco de 7 1/4",
            category="Corte",
            daily_rate=45.0,
            average_rating=4.2
        ),
        CatalogRecord(
            id="eq-4",
            name="Gerador 5kVA",
            description=None,
            category="Energia",
            daily_rate=None,
            average_rating=0.0
        ),
        CatalogRecord(
            id="eq-5",
            name="Furadeira de Impacto",
            description="Furadeira para concreto e alvenaria",
            category="Perfuração",
            daily_rate="32.50",
            average_rating=4.9
        ),
    ]
