"""Field extraction: raw source records to typed listings."""

import logging
import math
import re
from datetime import date, datetime
from typing import Any, Callable, Iterable, List, Optional, TypeVar

from .constants import SentinelConstants
from .models import Article, RawRecord, SalaryRange, Talk, Vacancy

logger = logging.getLogger(__name__)

T = TypeVar("T")

COMPACT_RE = re.compile(r"^([+-]?\d+(?:\.\d+)?)([KM]?)$")
MULTIPLIERS = {"": 1, "K": 1_000, "M": 1_000_000}


def parse_compact_number(value: Any) -> int:
    """
    Parse counters such as "150", "12K", "3.4M", "+15" or "1,234".

    Missing or unparsable values count as 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    text = re.sub(r"[\s,]", "", str(value)).upper()
    # Cyrillic K/M as rendered by Russian-language pages
    text = text.replace("К", "K").replace("М", "M")
    match = COMPACT_RE.match(text)
    if not match:
        return 0
    number, suffix = match.groups()
    return int(round(float(number) * MULTIPLIERS[suffix]))


def _optional_int(value: Any) -> Optional[int]:
    """Integer value of a JSON field, or None when absent or malformed."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def parse_salary(raw: Any) -> Optional[SalaryRange]:
    """Salary object -> SalaryRange, or None when no bound is present."""
    if not isinstance(raw, dict):
        return None
    salary = SalaryRange(_optional_int(raw.get("from")), _optional_int(raw.get("to")))
    if salary.midpoint is None:
        return None
    return salary


def parse_date(value: Any) -> Optional[date]:
    """ISO-8601 timestamp -> date; anything else -> None."""
    if not value or not isinstance(value, str):
        return None
    text = value.strip().replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in ("%Y-%m-%dT%H:%M:%S%z", "%Y-%m-%dT%H:%M:%S.%f%z", "%Y-%m-%d"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def text_or(value: Any, default: str) -> str:
    """Stripped string value, or the default when missing or blank."""
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _nested_name(raw: RawRecord, key: str) -> Optional[str]:
    nested = raw.get(key)
    if isinstance(nested, dict):
        name = nested.get("name")
        if name is not None and str(name).strip():
            return str(name).strip()
    return None


def normalize_vacancy(raw: RawRecord) -> Vacancy:
    """HeadHunter vacancy JSON -> Vacancy."""
    salary_raw = raw.get("salary")
    return Vacancy(
        id=text_or(raw.get("id"), "") or None,
        title=text_or(raw.get("name"), SentinelConstants.NO_TITLE),
        employer=_nested_name(raw, "employer") or SentinelConstants.NOT_SPECIFIED,
        city=_nested_name(raw, "area") or SentinelConstants.NOT_SPECIFIED,
        salary=parse_salary(salary_raw),
        currency=salary_raw.get("currency") if isinstance(salary_raw, dict) else None,
        published=parse_date(raw.get("published_at")),
    )


def normalize_article(raw: RawRecord) -> Article:
    """Article fields scraped from a hub page -> Article."""
    return Article(
        id=text_or(raw.get("id"), "") or None,
        title=text_or(raw.get("title"), SentinelConstants.NO_TITLE),
        link=text_or(raw.get("link"), "") or None,
        author=text_or(raw.get("author"), SentinelConstants.NOT_SPECIFIED),
        published=parse_date(raw.get("published")),
        rating=parse_compact_number(raw.get("rating")),
        views=parse_compact_number(raw.get("views")),
        comments=parse_compact_number(raw.get("comments")),
    )


def normalize_talk(raw: RawRecord) -> Talk:
    """Talk card fields scraped from a schedule -> Talk."""
    return Talk(
        id=text_or(raw.get("id"), "") or None,
        title=text_or(raw.get("title"), SentinelConstants.NO_TITLE),
        company=text_or(raw.get("company"), SentinelConstants.NO_COMPANY),
        speaker=text_or(raw.get("speaker"), SentinelConstants.NO_SPEAKER),
    )


def normalize_all(raws: Iterable[RawRecord], normalize: Callable[[RawRecord], T]) -> List[T]:
    """Normalize every raw record, skipping the ones that cannot be read."""
    records = []
    for raw in raws:
        try:
            records.append(normalize(raw))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed record: {e}")
    return records
