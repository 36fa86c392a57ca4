"""Find meeting times for a group from whitelist/blacklist availability."""

__version__ = "0.1.0"

from .aggregator import Aggregator, aggregate
from .intervals import invert

__all__ = ["Aggregator", "aggregate", "invert", "__version__"]
