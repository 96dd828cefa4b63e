"""Command-line interface for ListingStats."""

import argparse
import logging
import sys

from .core.config import settings
from .core.constants import FileConstants
from .core.extract import normalize_article, normalize_talk, normalize_vacancy
from .core.reports import article_report, comparison_report, talk_report, vacancy_report
from .services.collection_manager import CollectionManager, CollectionRequest, make_store
from .services.dotnext_client import DotNextScheduleSource
from .services.habr_client import HabrArticleSource
from .services.hh_client import HHVacancySource
from .services.http_client import HttpClient, open_page_cache

logger = logging.getLogger(__name__)


def setup_logging():
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=FileConstants.LOG_FORMAT,
    )


def _http(args) -> HttpClient:
    return HttpClient(cache=open_page_cache(args.page_cache or None))


def _habr_request(args, hub: str) -> CollectionRequest:
    source = HabrArticleSource(http=_http(args))
    store = make_store(source, args.offline, max_pages=args.pages)
    return CollectionRequest(f"habr-{hub}", store, normalize_article, query=hub)


def cmd_vacancies(args):
    """Vacancies command."""
    source = HHVacancySource(http=_http(args))
    store = make_store(source, args.offline, page_size=args.page_size, max_pages=args.pages)
    request = CollectionRequest(args.collection, store, normalize_vacancy, query=args.query)

    print(f"Collecting vacancies for '{args.query}'...")
    vacancies = CollectionManager().run([request])[request.collection]
    print()
    print(vacancy_report(vacancies))


def cmd_articles(args):
    """Articles command."""
    request = _habr_request(args, args.hub)
    articles = CollectionManager().run([request])[request.collection]
    print(article_report(articles, title=f"HUB STATISTICS: {args.hub}"))


def cmd_talks(args):
    """Talks command."""
    source = DotNextScheduleSource(http=_http(args))
    store = make_store(source, args.offline, max_pages=1)
    request = CollectionRequest(args.collection, store, normalize_talk, query=args.url)

    talks = CollectionManager().run([request])[request.collection]
    print(talk_report(talks, source=args.url))


def cmd_compare(args):
    """Compare command."""
    if args.hub_a == args.hub_b:
        print("Pick two different hubs to compare")
        return

    request_a = _habr_request(args, args.hub_a)
    request_b = _habr_request(args, args.hub_b)
    collections = CollectionManager().run([request_a, request_b])
    print(comparison_report(
        args.hub_a, collections[request_a.collection],
        args.hub_b, collections[request_b.collection],
    ))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ListingStats - statistics over scraped listings")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--offline', action='store_true', help='Replay cached items instead of fetching')
    common.add_argument('--page-cache', action='store_true', help='Reuse fetched pages from the page cache')

    # Vacancies command
    vacancies_parser = subparsers.add_parser('vacancies', parents=[common], help='Vacancy statistics')
    vacancies_parser.add_argument('--query', default=settings.hh_search_text, help='Search text')
    vacancies_parser.add_argument('--collection', default='hh-vacancies', help='Cache collection name')
    vacancies_parser.add_argument('--pages', type=int, default=settings.hh_max_pages, help='Maximum pages')
    vacancies_parser.add_argument('--page-size', type=int, default=settings.hh_page_size, help='Items per page')

    # Articles command
    articles_parser = subparsers.add_parser('articles', parents=[common], help='Hub article statistics')
    articles_parser.add_argument('--hub', default=settings.habr_hub, help='Hub slug')
    articles_parser.add_argument('--pages', type=int, default=settings.habr_max_pages, help='Maximum pages')

    # Talks command
    talks_parser = subparsers.add_parser('talks', parents=[common], help='Conference talk statistics')
    talks_parser.add_argument('--url', default=settings.dotnext_schedule_url, help='Schedule page URL')
    talks_parser.add_argument('--collection', default='dotnext', help='Cache collection name')

    # Compare command
    compare_parser = subparsers.add_parser('compare', parents=[common], help='Compare two hubs')
    compare_parser.add_argument('hub_a', help='First hub slug')
    compare_parser.add_argument('hub_b', help='Second hub slug')
    compare_parser.add_argument('--pages', type=int, default=settings.habr_max_pages, help='Maximum pages per hub')

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    setup_logging()

    try:
        if args.command == 'vacancies':
            cmd_vacancies(args)
        elif args.command == 'articles':
            cmd_articles(args)
        elif args.command == 'talks':
            cmd_talks(args)
        elif args.command == 'compare':
            cmd_compare(args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
