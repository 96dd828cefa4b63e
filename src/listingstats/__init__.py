"""ListingStats - aggregate and report on scraped listings."""

__version__ = "1.0.0"

from .core.models import *
from .core.config import settings
from .core.aggregation import aggregate, measure_stats, partition_by_id
from .core.report import Column, render_table

__all__ = [
    "settings",
    "aggregate",
    "measure_stats",
    "partition_by_id",
    "Column",
    "render_table",
]
