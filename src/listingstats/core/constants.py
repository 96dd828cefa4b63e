"""Constants and configuration values for ListingStats."""

# Field Defaults
class SentinelConstants:
    """Placeholder values used when a categorical field is missing."""

    NOT_SPECIFIED = "not specified"  # employer, author
    NO_COMPANY = "-"  # talk company
    NO_SPEAKER = "speaker not specified"
    NO_TITLE = "untitled"

# Scraping Selectors
class SelectorConstants:
    """CSS selectors for the HTML sources. Override per source instance."""

    HABR = {
        "item": "article.tm-articles-list__item",
        "title": "a.tm-title__link",
        "author": "a.tm-user-info__username",
        "date": "time",
        "rating": "span.tm-votes-meter__value",
        "views": "span.tm-icon-counter__value",
        "comments": "span.tm-article-comments-counter-link__value",
    }

    DOTNEXT = {
        "item": "div.talkCard__main",
        "company": "p.speakerCard__company",
        "speaker": "a.speakerCard__link",
        "title": "h3.talkCard__heading",
    }

# Report Layout
class ReportConstants:
    """Sizes and column widths of the printed reports."""

    TOP_EMPLOYERS = 10
    TOP_CITIES = 10
    TOP_ARTICLES = 5
    TOP_AUTHORS = 5

    NAME_WIDTH = 40
    CITY_WIDTH = 30
    COUNT_WIDTH = 20
    SALARY_WIDTH = 16
    SPEAKER_WIDTH = 35
    TALK_TITLE_WIDTH = 98
    ARTICLE_TITLE_WIDTH = 80
    AUTHOR_WIDTH = 25
    MEASURE_WIDTH = 10
    MONTH_WIDTH = 10

# Cache Constants
class CacheConstants:
    """Constants for caching behavior."""

    BLOB_SUFFIX = ".json"  # one item per file
    CACHE_KEY_LENGTH = 12  # length of derived ids and cache keys for logging

# File and Path Constants
class FileConstants:
    """Constants for file operations."""

    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
