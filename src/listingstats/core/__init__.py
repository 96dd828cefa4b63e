"""Core modules for ListingStats."""

from .models import *
from .config import settings

__all__ = [
    "settings",
    "RawRecord",
    "YearMonth",
    "SalaryRange",
    "NormalizedRecord",
    "Vacancy",
    "Article",
    "Talk",
    "GroupSummary",
    "MeasureStats",
    "SetPartition",
    "Page",
]
