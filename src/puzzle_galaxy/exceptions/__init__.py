"""Exception hierarchy for Puzzle Galaxy."""

from .base import GalaxyError
from .config import ConfigurationError, InvalidConfigError
from .data import (
    DataError,
    MalformedMessageError,
    MalformedRecordError,
    TaxonomyError,
)

__all__ = [
    "GalaxyError",
    "ConfigurationError",
    "InvalidConfigError",
    "DataError",
    "TaxonomyError",
    "MalformedRecordError",
    "MalformedMessageError",
]
