"""Configuration loading and management for Puzzle Galaxy.

Configuration sources are merged in priority order:
    1. Defaults (defined in GalaxyConfig)
    2. Global config (~/.puzzle-galaxy.toml)
    3. Project config (./puzzle-galaxy.toml)
    4. Explicit config file
    5. Environment variables (GALAXY_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(reconnect_delay_seconds=1.0)
    >>> config.reconnect_delay_seconds
    1.0
    >>> config.similarity.min_similarity
    0.3
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]


@dataclass(frozen=True)
class SimilarityWeights:
    """Tuning constants for the client-side similarity fallback.

    The weights are arbitrary tuning constants, not a scoring theory. A pair
    carrying only the family bonus stays below ``min_similarity`` so that a
    single shared family never connects two puzzles on its own.

    Attributes:
        same_difficulty: Bonus when both puzzles share a difficulty tier
        close_rating: Bonus when SE ratings differ by less than close_rating_delta
        near_rating: Bonus when SE ratings differ by less than near_rating_delta
        same_family: Bonus when both puzzles share a primary family
        close_rating_delta: Rating gap (exclusive) for the close bonus
        near_rating_delta: Rating gap (exclusive) for the near bonus
        min_similarity: Minimum score for an edge to be emitted
    """

    same_difficulty: float = 0.5
    close_rating: float = 0.3
    near_rating: float = 0.15
    same_family: float = 0.2

    close_rating_delta: float = 1.0
    near_rating_delta: float = 3.0

    min_similarity: float = 0.3

    def __post_init__(self) -> None:
        for field_name in ("same_difficulty", "close_rating", "near_rating", "same_family"):
            value = getattr(self, field_name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{field_name} must be between 0.0 and 1.0")

        if self.close_rating_delta <= 0:
            raise ValueError("close_rating_delta must be positive")
        if self.near_rating_delta < self.close_rating_delta:
            raise ValueError("near_rating_delta must be >= close_rating_delta")

        if not 0.0 < self.min_similarity <= 1.0:
            raise ValueError("min_similarity must be in (0.0, 1.0]")


DEFAULT_WEIGHTS = SimilarityWeights()


@dataclass(frozen=True)
class GalaxyConfig:
    """Configuration for loading and maintaining the puzzle galaxy.

    Attributes:
        Data source:
            base_url: Root URL of the puzzle API
            live_path: Path of the live update stream
            request_timeout_seconds: Per-request HTTP timeout

        Retry policy:
            fetch_retries: Attempts per initial fetch before giving up
            fetch_backoff_seconds: Backoff unit; attempt n waits n * unit
            reconnect_delay_seconds: Delay before re-opening a closed live stream

        Geometry:
            hull_padding: Distance each hull vertex is pushed from the centroid
            hull_min_members: Minimum positioned members for a family hull

        Output control:
            verbosity: Logging verbosity level
    """

    base_url: str = "http://127.0.0.1:8080"
    live_path: str = "/api/v1/ws/galaxy"
    request_timeout_seconds: float = 10.0

    fetch_retries: int = 3
    fetch_backoff_seconds: float = 0.5
    reconnect_delay_seconds: float = 5.0

    hull_padding: float = 20.0
    hull_min_members: int = 3

    verbosity: Verbosity = "normal"

    similarity: SimilarityWeights = field(default_factory=SimilarityWeights)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if not self.live_path.startswith("/"):
            raise ValueError("live_path must start with '/'")
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive")

        if self.fetch_retries < 1:
            raise ValueError("fetch_retries must be at least 1")
        if self.fetch_backoff_seconds < 0:
            raise ValueError("fetch_backoff_seconds must be non-negative")
        if self.reconnect_delay_seconds < 0:
            raise ValueError("reconnect_delay_seconds must be non-negative")

        if self.hull_padding < 0:
            raise ValueError("hull_padding must be non-negative")
        if self.hull_min_members < 3:
            raise ValueError("hull_min_members must be at least 3")

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of quiet, normal, verbose")

    @property
    def live_url(self) -> str:
        """Absolute URL of the live update stream."""
        return self.base_url.rstrip("/") + self.live_path


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> GalaxyConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated GalaxyConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
        InvalidConfigError: If a merged value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".puzzle-galaxy.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "puzzle-galaxy.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    # Verbosity flags arrive from the CLI as booleans
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    similarity = merged.pop("similarity", None)
    if similarity is not None:
        if isinstance(similarity, dict):
            try:
                merged["similarity"] = SimilarityWeights(**similarity)
            except TypeError as e:
                raise ConfigurationError(f"Invalid [similarity] config: {e}")
            except ValueError as e:
                raise InvalidConfigError("similarity", similarity, str(e))
        elif isinstance(similarity, SimilarityWeights):
            merged["similarity"] = similarity
        else:
            raise InvalidConfigError("similarity", similarity, "expected a table")

    try:
        return GalaxyConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")
    except ValueError as e:
        raise InvalidConfigError("config", merged, str(e))


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from GALAXY_* environment variables.

    Supported environment variables:
        GALAXY_BASE_URL: str
        GALAXY_LIVE_PATH: str
        GALAXY_REQUEST_TIMEOUT_SECONDS: float
        GALAXY_FETCH_RETRIES: int
        GALAXY_FETCH_BACKOFF_SECONDS: float
        GALAXY_RECONNECT_DELAY_SECONDS: float
        GALAXY_HULL_PADDING: float
        GALAXY_HULL_MIN_MEMBERS: int
        GALAXY_VERBOSITY: quiet/normal/verbose
    """
    type_hints = get_type_hints(GalaxyConfig)

    result: dict[str, Any] = {}

    for field_name in GalaxyConfig.__dataclass_fields__:
        env_key = f"GALAXY_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the field's type.

    Returns None for types that cannot come from the environment
    (the nested similarity table).
    """
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
