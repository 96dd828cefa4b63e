"""Basic usage examples for ListingStats."""

from listingstats import aggregate, measure_stats
from listingstats.core.extract import normalize_all, normalize_article, normalize_vacancy
from listingstats.core.reports import comparison_report, vacancy_report
from listingstats.services import CollectionManager, CollectionRequest, make_store
from listingstats.services.habr_client import HabrArticleSource


def example_grouping():
    """Example: group a handful of raw vacancies by employer."""
    print("🔍 Grouping vacancies by employer")

    raw = [
        {"id": "1", "name": "Backend", "employer": {"name": "Acme"}, "salary": {"from": 100, "to": 200}},
        {"id": "2", "name": "Frontend", "employer": {"name": "Acme"}, "salary": None},
        {"id": "3", "name": "DevOps", "employer": {"name": "Globex"}, "salary": {"to": 300}},
        {"id": "4", "name": "QA"},
    ]
    vacancies = normalize_all(raw, normalize_vacancy)

    groups = aggregate(vacancies, key=lambda v: v.employer,
                       measures={"salary": lambda v: v.salary_mid}, primary="salary")
    for group in groups:
        print(f"  {group.key}: {group.count} vacancies, average salary {group.average('salary'):.0f}")

    stats = measure_stats(vacancies, lambda v: v.salary_mid)
    print(f"📊 {stats.present} of {len(vacancies)} vacancies list a salary")
    print()
    print(vacancy_report(vacancies))


def example_hub_overlap():
    """Example: fetch two hubs at once and compare them (hits the network)."""
    print("\n🔍 Comparing the net and csharp hubs")

    requests = [
        CollectionRequest(f"habr-{hub}", make_store(HabrArticleSource(), max_pages=2),
                          normalize_article, query=hub)
        for hub in ("net", "csharp")
    ]
    collections = CollectionManager().run(requests)
    print(comparison_report("net", collections["habr-net"], "csharp", collections["habr-csharp"]))


if __name__ == "__main__":
    example_grouping()
    example_hub_overlap()
