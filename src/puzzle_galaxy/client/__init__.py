"""HTTP data source for the initial galaxy dataset."""

from .http import OVERVIEW_PATH, STATS_PATH, GalaxyClient, parse_overview
from .loader import load_dataset

__all__ = ["GalaxyClient", "OVERVIEW_PATH", "STATS_PATH", "load_dataset", "parse_overview"]
