"""Report builders for vacancies, articles, talks and hub comparisons."""

import logging
from typing import List, Sequence

from .aggregation import aggregate, measure_stats, partition_by_id, top_by
from .constants import ReportConstants as RC
from .constants import SentinelConstants
from .models import Article, Talk, Vacancy
from .report import Column, format_int, render_table

logger = logging.getLogger(__name__)

SALARY = {"salary": lambda v: v.salary_mid}


def _banner(title: str) -> List[str]:
    rule = "=" * 46
    return [rule, title, rule, ""]


def _group_columns(name: str, name_width: int, count_header: str) -> List[Column]:
    return [
        Column(name, name_width, lambda s: s.key),
        Column(count_header, RC.COUNT_WIDTH, lambda s: s.count),
    ]


def vacancy_report(vacancies: Sequence[Vacancy], title: str = "VACANCY STATISTICS") -> str:
    """Salary overview plus top employers and cities."""
    salary = measure_stats(
        vacancies,
        lambda v: v.salary_mid,
        low=lambda v: v.salary.low,
        high=lambda v: v.salary.high,
    )
    lines = _banner(title)
    lines += [
        f"Total vacancies: {len(vacancies)}",
        f"Vacancies with salary: {salary.present}",
        f"Average salary: {format_int(salary.average)}",
        f"Minimum salary: {format_int(salary.minimum)}",
        f"Maximum salary: {format_int(salary.maximum)}",
    ]

    salary_column = Column("Average salary", RC.SALARY_WIDTH, lambda s: s.average("salary"),
                           blank_zero=True, fmt=format_int)

    employers = aggregate(vacancies, key=lambda v: v.employer, measures=SALARY, primary="salary")
    lines += ["", f"TOP-{RC.TOP_EMPLOYERS} EMPLOYERS:"]
    lines.append(render_table(
        employers,
        _group_columns("Employer", RC.NAME_WIDTH, "Vacancies") + [salary_column],
        "employers",
        limit=RC.TOP_EMPLOYERS,
    ))

    # vacancies without an area are left out of the city breakdown
    located = [v for v in vacancies if v.city != SentinelConstants.NOT_SPECIFIED]
    cities = aggregate(located, key=lambda v: v.city, measures=SALARY, primary="salary")
    lines += ["", f"TOP-{RC.TOP_CITIES} CITIES:"]
    lines.append(render_table(
        cities,
        _group_columns("City", RC.CITY_WIDTH, "Vacancies") + [salary_column],
        "cities",
        limit=RC.TOP_CITIES,
    ))
    return "\n".join(lines)


def _article_columns(measure_header: str, measure) -> List[Column]:
    return [
        Column("Title", RC.ARTICLE_TITLE_WIDTH, lambda a: a.title),
        Column("Author", RC.AUTHOR_WIDTH, lambda a: a.author),
        Column(measure_header, RC.MEASURE_WIDTH, measure, align="right"),
    ]


def _article_details(label: str, article: Article) -> List[str]:
    return [
        "",
        f"{label}:",
        f"   - Title: {article.title}",
        f"   - Author: {article.author}",
        f"   - Rating: {article.rating}",
        f"   - Link: {article.link or ''}",
    ]


def article_report(articles: Sequence[Article], title: str = "HUB STATISTICS") -> str:
    """Top articles, top authors, monthly counts and overall averages."""
    if not articles:
        return "No articles collected. Check the connection or the site layout."

    lines = _banner(title)
    lines.append(f"Total articles: {len(articles)}")

    for header, measure in (("Rating", lambda a: a.rating),
                            ("Comments", lambda a: a.comments),
                            ("Views", lambda a: a.views)):
        lines += ["", f"TOP-{RC.TOP_ARTICLES} BY {header.upper()}:"]
        lines.append(render_table(
            top_by(articles, measure), _article_columns(header, measure), "articles",
            limit=RC.TOP_ARTICLES,
        ))

    authors = aggregate(articles, key=lambda a: a.author)
    lines += ["", f"TOP-{RC.TOP_AUTHORS} AUTHORS:"]
    lines.append(render_table(
        authors, _group_columns("Author", RC.AUTHOR_WIDTH, "Articles"), "authors",
        limit=RC.TOP_AUTHORS,
    ))

    dated = [a for a in articles if a.year_month is not None]
    months = sorted(aggregate(dated, key=lambda a: a.year_month), key=lambda s: s.key)
    lines += ["", "ARTICLES BY MONTH:"]
    lines.append(render_table(
        months,
        [Column("Month", RC.MONTH_WIDTH, lambda s: str(s.key)),
         Column("Articles", RC.COUNT_WIDTH, lambda s: s.count)],
        "months",
    ))

    rating = measure_stats(articles, lambda a: a.rating)
    views = measure_stats(articles, lambda a: a.views)
    comments = measure_stats(articles, lambda a: a.comments)
    lines += [
        "",
        "AVERAGES:",
        f"   - Average rating: {rating.average:.2f}",
        f"   - Average views: {views.average:.0f}",
        f"   - Average comments: {comments.average:.0f}",
        "",
        "TOTALS:",
        f"   - Total views: {views.total}",
        f"   - Total comments: {comments.total}",
    ]

    best = top_by(articles, lambda a: a.rating, 1)[0]
    worst = sorted(articles, key=lambda a: (a.rating, a.title))[0]
    lines += _article_details("HIGHEST RATED ARTICLE", best)
    lines += _article_details("LOWEST RATED ARTICLE", worst)
    return "\n".join(lines)


def talk_report(talks: Sequence[Talk], source: str = "") -> str:
    """Talk list and talks-per-company table."""
    listed = [t for t in talks if t.speaker != SentinelConstants.NO_SPEAKER]
    if len(listed) < len(talks):
        logger.info(f"Left out {len(talks) - len(listed)} talks without a speaker")

    lines = [f"Conference statistics: {source}".rstrip(), ""]
    ordered = sorted(listed, key=lambda t: (t.company, t.speaker, t.title))
    lines.append(render_table(
        ordered,
        [Column("Company", RC.NAME_WIDTH, lambda t: t.company),
         Column("Speaker", RC.SPEAKER_WIDTH, lambda t: t.speaker),
         Column("Talk", RC.TALK_TITLE_WIDTH, lambda t: t.title)],
        "talks",
    ))

    companies = aggregate(listed, key=lambda t: t.company)
    lines += ["", ""]
    lines.append(render_table(
        companies, _group_columns("Company", RC.NAME_WIDTH, "Talks"), "companies",
    ))
    return "\n".join(lines)


def comparison_report(hub_a: str, a: Sequence[Article], hub_b: str, b: Sequence[Article]) -> str:
    """Articles exclusive to each hub and shared between them."""
    partition = partition_by_id(a, b)
    lines = _banner(f"HUB OVERLAP: {hub_a} vs {hub_b}")
    lines += [
        f"Only in {hub_a}: {len(partition.only_a)}",
        f"In both: {len(partition.common)}",
        f"Only in {hub_b}: {len(partition.only_b)}",
        f"Union: {partition.union_size}",
    ]

    columns = [Column("Title", RC.ARTICLE_TITLE_WIDTH, lambda r: r.title),
               Column("Author", RC.AUTHOR_WIDTH, lambda r: r.author)]
    for hub, exclusive in ((hub_a, partition.only_a), (hub_b, partition.only_b)):
        lines += ["", f"ONLY IN {hub.upper()}:"]
        lines.append(render_table(exclusive, columns, "articles"))
    return "\n".join(lines)
