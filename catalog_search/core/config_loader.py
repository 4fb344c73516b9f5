"""
Configuration loader for the catalog search library.

Loads settings from config.json and provides typed access via dataclasses.
Supports singleton pattern for global access and runtime reload capability.
The matching, ranking and search sections carry their own defaults so the
search components can also be built without any configuration file.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .exceptions import ConfigurationError


@dataclass
class PathsConfig:
    """Configuration for file system paths."""
    logs_directory: Optional[Path]
    corrections_path: Optional[Path]


@dataclass
class MatchingConfig:
    """Tolerances used by the fuzzy matcher."""
    max_query_length: int = 100
    min_fuzzy_token_length: int = 5
    chars_per_edit: int = 4
    max_edit_distance: int = 3
    use_stemming: bool = True
    use_phonetic: bool = True
    min_phonetic_length: int = 4


# Score table fields, strongest match kind first
SCORE_TIERS = (
    "exact", "prefix", "substring", "token_prefix",
    "token_substring", "fuzzy", "stem", "phonetic",
)


@dataclass
class MatchScores:
    """Score awarded to each match kind, strongest first."""
    exact: float = 100.0
    prefix: float = 90.0
    substring: float = 80.0
    token_prefix: float = 60.0
    token_substring: float = 50.0
    fuzzy: float = 40.0
    stem: float = 20.0
    phonetic: float = 10.0


@dataclass
class RankingConfig:
    """Field weights and score table used by the relevance ranker."""
    field_weights: Dict[str, float] = field(default_factory=lambda: {
        "name": 1.0,
        "category": 0.8,
        "description": 0.6,
    })
    default_field_weight: float = 1.0
    match_scores: MatchScores = field(default_factory=MatchScores)

    def weight_for(self, field_name: str) -> float:
        """Return the weight of a field, falling back to the default weight."""
        return self.field_weights.get(field_name, self.default_field_weight)

    def validate(self) -> None:
        """
        Reject weights and score tables under which a weaker match kind
        could outrank a stronger one.

        Weights must be positive, tiers must not increase from exact down
        to phonetic, and an exact match on the lightest field must still
        beat a fuzzy match on the heaviest one.
        """
        weights = dict(self.field_weights)
        weights["<default>"] = self.default_field_weight
        invalid = {name: w for name, w in weights.items() if w <= 0}
        if invalid:
            raise ConfigurationError(
                "Field weights must be positive",
                {"invalid_weights": invalid}
            )

        tiers = [(name, getattr(self.match_scores, name)) for name in SCORE_TIERS]
        for (stronger, high), (weaker, low) in zip(tiers, tiers[1:]):
            if low > high:
                raise ConfigurationError(
                    f"ranking.match_scores.{weaker} ({low}) cannot exceed {stronger} ({high})",
                    {"match_scores": dict(tiers)}
                )
        if tiers[-1][1] < 0:
            raise ConfigurationError(
                "ranking.match_scores cannot be negative",
                {"match_scores": dict(tiers)}
            )

        lightest = min(weights.values())
        heaviest = max(weights.values())
        scores = self.match_scores
        if scores.exact * lightest <= scores.fuzzy * heaviest:
            raise ConfigurationError(
                "Field weights let a fuzzy match outrank an exact match",
                {
                    "exact_on_lightest": scores.exact * lightest,
                    "fuzzy_on_heaviest": scores.fuzzy * heaviest
                }
            )


@dataclass
class SearchConfig:
    """Configuration for the catalog search entry point."""
    default_fields: List[str] = field(default_factory=lambda: ["name", "description"])
    default_sort: str = "relevance"
    default_page_size: int = 12
    max_page_size: int = 100
    sort_fields: Dict[str, str] = field(default_factory=lambda: {
        "name": "name",
        "price": "daily_rate",
        "rating": "average_rating",
    })


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str
    format: str
    max_file_size_mb: int
    backup_count: int


@dataclass
class Config:
    """
    Main configuration container holding all config sections.

    Provides singleton access via get_config() function.
    """
    paths: PathsConfig
    matching: MatchingConfig
    ranking: RankingConfig
    search: SearchConfig
    logging: LoggingConfig
    project_root: Path = field(default_factory=Path)

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the config.json file.

        Returns:
            Populated Config instance.

        Raises:
            ConfigurationError: If file is missing or invalid.
        """
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path)}
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a JSON object",
                {"path": str(config_path)}
            )

        project_root = config_path.parent.parent

        return cls._parse_config(data, project_root)

    @classmethod
    def _parse_config(cls, data: dict, project_root: Path) -> "Config":
        """Parse raw config dict into typed Config object."""
        paths_data = data.get("paths", {})
        paths = PathsConfig(
            logs_directory=cls._resolve_path(paths_data.get("logs_directory"), project_root),
            corrections_path=cls._resolve_path(paths_data.get("corrections_path"), project_root)
        )

        match_defaults = MatchingConfig()
        match_data = data.get("matching", {})
        matching = MatchingConfig(
            max_query_length=match_data.get("max_query_length", match_defaults.max_query_length),
            min_fuzzy_token_length=match_data.get(
                "min_fuzzy_token_length", match_defaults.min_fuzzy_token_length
            ),
            chars_per_edit=match_data.get("chars_per_edit", match_defaults.chars_per_edit),
            max_edit_distance=match_data.get("max_edit_distance", match_defaults.max_edit_distance),
            use_stemming=match_data.get("use_stemming", match_defaults.use_stemming),
            use_phonetic=match_data.get("use_phonetic", match_defaults.use_phonetic),
            min_phonetic_length=match_data.get(
                "min_phonetic_length", match_defaults.min_phonetic_length
            )
        )
        cls._validate_matching(matching)

        rank_defaults = RankingConfig()
        rank_data = data.get("ranking", {})
        scores_data = rank_data.get("match_scores", {})
        score_defaults = MatchScores()
        ranking = RankingConfig(
            field_weights=rank_data.get("field_weights", rank_defaults.field_weights),
            default_field_weight=rank_data.get(
                "default_field_weight", rank_defaults.default_field_weight
            ),
            match_scores=MatchScores(
                exact=scores_data.get("exact", score_defaults.exact),
                prefix=scores_data.get("prefix", score_defaults.prefix),
                substring=scores_data.get("substring", score_defaults.substring),
                token_prefix=scores_data.get("token_prefix", score_defaults.token_prefix),
                token_substring=scores_data.get("token_substring", score_defaults.token_substring),
                fuzzy=scores_data.get("fuzzy", score_defaults.fuzzy),
                stem=scores_data.get("stem", score_defaults.stem),
                phonetic=scores_data.get("phonetic", score_defaults.phonetic)
            )
        )
        ranking.validate()

        search_defaults = SearchConfig()
        search_data = data.get("search", {})
        search = SearchConfig(
            default_fields=search_data.get("default_fields", search_defaults.default_fields),
            default_sort=search_data.get("default_sort", search_defaults.default_sort),
            default_page_size=search_data.get("default_page_size", search_defaults.default_page_size),
            max_page_size=search_data.get("max_page_size", search_defaults.max_page_size),
            sort_fields={**search_defaults.sort_fields, **search_data.get("sort_fields", {})}
        )

        log_data = data.get("logging", {})
        logging_cfg = LoggingConfig(
            level=log_data.get("level", "INFO"),
            format=log_data.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            max_file_size_mb=log_data.get("max_file_size_mb", 10),
            backup_count=log_data.get("backup_count", 5)
        )

        return cls(
            paths=paths,
            matching=matching,
            ranking=ranking,
            search=search,
            logging=logging_cfg,
            project_root=project_root
        )

    @staticmethod
    def _validate_matching(matching: MatchingConfig) -> None:
        """Reject tolerances that would disable or break fuzzy matching."""
        if matching.max_query_length < 1:
            raise ConfigurationError(
                "matching.max_query_length must be positive",
                {"max_query_length": matching.max_query_length}
            )
        if matching.chars_per_edit < 1:
            raise ConfigurationError(
                "matching.chars_per_edit must be positive",
                {"chars_per_edit": matching.chars_per_edit}
            )
        if matching.max_edit_distance < 0:
            raise ConfigurationError(
                "matching.max_edit_distance cannot be negative",
                {"max_edit_distance": matching.max_edit_distance}
            )

    @staticmethod
    def _resolve_path(path_str: Optional[str], project_root: Path) -> Optional[Path]:
        """Resolve a path string, making relative paths absolute."""
        if not path_str:
            return None
        path = Path(path_str)
        if path.is_absolute():
            return path
        return project_root / path


_config_instance: Optional[Config] = None


def get_config(config_path: Path = None) -> Config:
    """
    Get the singleton Config instance.

    Args:
        config_path: Optional path to config file. If not provided,
                    searches upward from current directory.

    Returns:
        The global Config instance.

    Raises:
        ConfigurationError: If config cannot be loaded.
    """
    global _config_instance

    if _config_instance is None or config_path is not None:
        if config_path is None:
            config_path = _find_config_file()
        _config_instance = Config.from_file(config_path)

    return _config_instance


def _find_config_file() -> Path:
    """Search upward from current directory to find config/config.json."""
    current = Path.cwd()

    for _ in range(10):
        config_path = current / "config" / "config.json"
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    raise ConfigurationError(
        "Could not find config/config.json in current directory or parents"
    )


def reload_config(config_path: Path = None) -> Config:
    """
    Force reload of configuration.

    Args:
        config_path: Optional path to config file.

    Returns:
        Fresh Config instance.
    """
    global _config_instance
    _config_instance = None
    return get_config(config_path)


if __name__ == "__main__":
    try:
        config = get_config()
        print(f"Project root: {config.project_root}")
        print(f"Corrections: {config.paths.corrections_path}")
        print(f"Max edit distance: {config.matching.max_edit_distance}")
        print(f"Field weights: {config.ranking.field_weights}")
        print(f"Default sort: {config.search.default_sort}")
    except ConfigurationError as e:
        print(f"Config error: {e.message}")
