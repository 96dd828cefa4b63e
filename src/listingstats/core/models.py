"""Data models for ListingStats."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, NamedTuple, Optional

from .constants import SentinelConstants

# Unvalidated item as produced by a source
RawRecord = Dict[str, Any]


class YearMonth(NamedTuple):
    """Month granularity used when grouping by date."""
    year: int
    month: int

    def __str__(self) -> str:
        return f"{self.year}-{self.month:02d}"


@dataclass(frozen=True)
class SalaryRange:
    """Salary fork with independent, optional bounds."""
    lower: Optional[int] = None
    upper: Optional[int] = None

    @property
    def midpoint(self) -> Optional[float]:
        """Average of both bounds, the single present bound, or None."""
        if self.lower is not None and self.upper is not None:
            return (self.lower + self.upper) / 2
        if self.lower is not None:
            return float(self.lower)
        if self.upper is not None:
            return float(self.upper)
        return None

    @property
    def low(self) -> Optional[int]:
        return self.lower if self.lower is not None else self.upper

    @property
    def high(self) -> Optional[int]:
        return self.upper if self.upper is not None else self.lower


@dataclass(frozen=True)
class NormalizedRecord:
    """Fields shared by every normalized listing."""
    id: Optional[str]
    title: str


@dataclass(frozen=True)
class Vacancy(NormalizedRecord):
    """A job posting."""
    employer: str = SentinelConstants.NOT_SPECIFIED
    city: str = SentinelConstants.NOT_SPECIFIED
    salary: Optional[SalaryRange] = None
    currency: Optional[str] = None
    published: Optional[date] = None

    @property
    def salary_mid(self) -> Optional[float]:
        return self.salary.midpoint if self.salary else None


@dataclass(frozen=True)
class Article(NormalizedRecord):
    """A technical article from a topic hub."""
    link: Optional[str] = None
    author: str = SentinelConstants.NOT_SPECIFIED
    published: Optional[date] = None
    rating: int = 0
    views: int = 0
    comments: int = 0

    @property
    def year_month(self) -> Optional[YearMonth]:
        if self.published is None:
            return None
        return YearMonth(self.published.year, self.published.month)


@dataclass(frozen=True)
class Talk(NormalizedRecord):
    """A conference talk."""
    company: str = SentinelConstants.NO_COMPANY
    speaker: str = SentinelConstants.NO_SPEAKER


@dataclass
class GroupSummary:
    """Per-key aggregate: member count and per-measure averages."""
    key: Any
    count: int
    averages: Dict[str, float] = field(default_factory=dict)

    def average(self, measure: str) -> float:
        return self.averages.get(measure, 0.0)


@dataclass
class MeasureStats:
    """Global statistics of one optional measure."""
    present: int = 0
    minimum: float = 0
    maximum: float = 0
    average: float = 0.0
    total: float = 0


@dataclass
class SetPartition:
    """Records of two collections split by identifier."""
    only_a: List[NormalizedRecord] = field(default_factory=list)
    common: List[NormalizedRecord] = field(default_factory=list)
    only_b: List[NormalizedRecord] = field(default_factory=list)

    @property
    def union_size(self) -> int:
        return len(self.only_a) + len(self.common) + len(self.only_b)


@dataclass
class Page:
    """One page returned by a source."""
    items: List[RawRecord]
    total_pages: Optional[int] = None
    container_found: bool = True
