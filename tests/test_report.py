"""Tests for table rendering and report builders."""

from datetime import date

from listingstats.core.aggregation import aggregate
from listingstats.core.models import Article, SalaryRange, Talk, Vacancy
from listingstats.core.report import Column, format_int, render_table
from listingstats.core.reports import article_report, comparison_report, talk_report, vacancy_report


class TestRenderTable:

    def setup_method(self):
        self.columns = [
            Column("Name", 6, lambda row: row[0]),
            Column("Avg", 5, lambda row: row[1], blank_zero=True, fmt=format_int),
        ]

    def test_layout(self):
        text = render_table([("abc", 12.7), ("de", 3)], self.columns, "rows")
        lines = text.splitlines()
        assert lines[0] == "|Name  |Avg  |"
        assert lines[1] == "|------|-----|"
        assert lines[2] == "|abc   |12   |"
        assert lines[3] == "|de    |3    |"
        assert lines[-1] == "Total: 2 rows"

    def test_zero_average_renders_empty(self):
        text = render_table([("abc", 0)], self.columns, "rows")
        assert text.splitlines()[2] == "|abc   |     |"

    def test_limit_keeps_full_total(self):
        rows = [(str(i), i) for i in range(5)]
        lines = render_table(rows, self.columns, "rows", limit=2).splitlines()
        assert len([line for line in lines if line.startswith("|")]) == 4
        assert lines[-1] == "Total: 5 rows"

    def test_right_alignment(self):
        column = Column("N", 4, lambda row: row, align="right")
        assert render_table([7], [column], "items").splitlines()[2] == "|   7|"

    def test_group_summaries(self):
        groups = aggregate(["x", "y", "x"], key=lambda v: v)
        columns = [Column("Key", 3, lambda s: s.key), Column("Count", 5, lambda s: s.count)]
        assert render_table(groups, columns, "groups").splitlines()[2] == "|x  |2    |"


class TestReports:

    def test_vacancy_report_blank_salary_and_city_filter(self):
        vacancies = [
            Vacancy(id="1", title="a", employer="Acme", city="Moscow", salary=SalaryRange(100, 200)),
            Vacancy(id="2", title="b", employer="NoPay"),
        ]
        text = vacancy_report(vacancies)
        assert "Total vacancies: 2" in text
        assert "Vacancies with salary: 1" in text
        assert "Average salary: 150" in text
        assert "Minimum salary: 100" in text
        assert "Maximum salary: 200" in text
        nopay = next(line for line in text.splitlines() if line.startswith("|NoPay"))
        assert nopay.rstrip("|").endswith(" " * 16)
        assert "Total: 1 cities" in text
        assert "Total: 2 employers" in text

    def test_article_report(self):
        articles = [
            Article(id="1", title="Async streams", author="alice", rating=10, views=1000,
                    comments=4, published=date(2024, 1, 5), link="https://habr.com/ru/articles/1/"),
            Article(id="2", title="GC internals", author="bob", rating=-2, views=0, comments=0,
                    published=date(2024, 2, 1)),
            Article(id="3", title="Records", author="alice", rating=4, views=500, comments=2),
        ]
        text = article_report(articles)
        assert "Total articles: 3" in text
        assert "|2024-01   |1" in text
        assert "Total: 2 months" in text
        assert "Average rating: 4.00" in text
        assert "Total views: 1500" in text
        assert "   - Title: Async streams" in text
        assert "   - Title: GC internals" in text

    def test_article_report_without_articles(self):
        assert article_report([]).startswith("No articles collected")

    def test_talk_report_filters_missing_speakers(self):
        talks = [
            Talk(id="1", title="Pipelines", company="JetBrains", speaker="Ann"),
            Talk(id="2", title="Keynote", company="-", speaker="speaker not specified"),
            Talk(id="3", title="Spans", company="Acme", speaker="Bo"),
        ]
        text = talk_report(talks, source="https://dotnext.ru/schedule/table/")
        lines = text.splitlines()
        assert lines[0] == "Conference statistics: https://dotnext.ru/schedule/table/"
        assert "Total: 2 talks" in text
        assert "Total: 2 companies" in text
        assert "Keynote" not in text
        rows = [line for line in lines if line.startswith("|Acme") or line.startswith("|JetBrains")]
        assert rows[0].startswith("|Acme")

    def test_comparison_report(self):
        a = [Article(id=str(i), title=f"post {i}") for i in (1, 2, 3)]
        b = [Article(id=str(i), title=f"post {i}") for i in (2, 3, 4)]
        text = comparison_report("net", a, "csharp", b)
        assert "Only in net: 1" in text
        assert "In both: 2" in text
        assert "Only in csharp: 1" in text
        assert "Union: 4" in text
