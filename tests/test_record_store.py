"""Tests for blob replay and live pagination."""

import asyncio
import json
from unittest.mock import AsyncMock, patch

import requests

from listingstats.core.aggregation import aggregate
from listingstats.core.extract import normalize_all, normalize_vacancy
from listingstats.core.models import Page
from listingstats.services.blob_store import BlobStore
from listingstats.services.record_store import LiveRecordStore, ReplayRecordStore, Source


def vacancy_item(ident, employer="Acme"):
    return {"id": str(ident), "name": f"job {ident}", "employer": {"name": employer},
            "salary": {"from": 100 * ident, "to": None}}


class FakeSource(Source):
    """Serves canned pages; a page mapped to an exception raises it."""

    name = "fake"

    def __init__(self, pages, total_pages=None):
        self.pages = pages
        self.total_pages = total_pages
        self.requested = []

    def fetch_page(self, query, page, page_size):
        self.requested.append(page)
        result = self.pages.get(page, [])
        if isinstance(result, Exception):
            raise result
        if isinstance(result, Page):
            return result
        return Page(items=result, total_pages=self.total_pages)


def run(coro):
    return asyncio.run(coro)


class TestBlobStore:

    def test_put_overwrites(self, tmp_path):
        blobs = BlobStore(tmp_path)
        blobs.put("hh", "1", {"id": "1", "name": "old"})
        blobs.put("hh", "1", {"id": "1", "name": "new"})
        records = blobs.load_all("hh")
        assert records == [{"id": "1", "name": "new"}]

    def test_unsafe_ids_stay_inside_collection(self, tmp_path):
        path = BlobStore(tmp_path).put("hh", "../evil", {"id": "x"})
        assert path.parent == tmp_path / "hh"

    def test_similar_ids_keep_separate_blobs(self, tmp_path):
        blobs = BlobStore(tmp_path)
        blobs.put("c", "a/b", {"id": "a/b"})
        blobs.put("c", "a_b", {"id": "a_b"})
        blobs.put("c", "..", {"id": ".."})
        assert sorted(r["id"] for r in blobs.load_all("c")) == ["..", "a/b", "a_b"]

    def test_similar_collections_keep_separate_directories(self, tmp_path):
        blobs = BlobStore(tmp_path)
        blobs.put("habr-c#", "1", {"id": "1", "hub": "c#"})
        blobs.put("habr-c_", "1", {"id": "1", "hub": "c_"})
        assert blobs.load_all("habr-c#") == [{"id": "1", "hub": "c#"}]
        assert blobs.load_all("habr-c_") == [{"id": "1", "hub": "c_"}]
        assert BlobStore(tmp_path).collection_dir("..").parent == tmp_path

    def test_missing_collection(self, tmp_path):
        assert BlobStore(tmp_path).load_all("nothing") == []


class TestReplayRecordStore:

    def test_skips_malformed_blobs(self, tmp_path):
        blobs = BlobStore(tmp_path)
        blobs.put("hh", "1", vacancy_item(1))
        blobs.put("hh", "2", vacancy_item(2))
        (tmp_path / "hh" / "3.json").write_text("{broken", encoding="utf-8")
        (tmp_path / "hh" / "4.json").write_text(json.dumps([1, 2]), encoding="utf-8")

        records = run(ReplayRecordStore(blobs).fetch("hh"))
        assert [r["id"] for r in records] == ["1", "2"]

    def test_replay_is_idempotent(self, tmp_path):
        blobs = BlobStore(tmp_path)
        for ident, employer in ((1, "Acme"), (2, "Acme"), (3, "Globex")):
            blobs.put("hh", str(ident), vacancy_item(ident, employer))
        store = ReplayRecordStore(blobs)

        def summarize():
            vacancies = normalize_all(run(store.fetch("hh")), normalize_vacancy)
            return aggregate(vacancies, key=lambda v: v.employer,
                             measures={"salary": lambda v: v.salary_mid}, primary="salary")

        assert summarize() == summarize()


class TestLiveRecordStore:

    def setup_method(self):
        self.sleep = patch("listingstats.services.record_store.asyncio.sleep", new=AsyncMock())
        self.mock_sleep = self.sleep.start()

    def teardown_method(self):
        self.sleep.stop()

    def test_stops_at_empty_page(self):
        source = FakeSource({0: [vacancy_item(1)], 1: [vacancy_item(2)], 2: []})
        items = run(LiveRecordStore(source, max_pages=20).fetch("hh"))
        assert [i["id"] for i in items] == ["1", "2"]
        assert source.requested == [0, 1, 2]

    def test_stops_at_reported_page_count(self):
        pages = {p: [vacancy_item(p + 1)] for p in range(5)}
        source = FakeSource(pages, total_pages=2)
        items = run(LiveRecordStore(source, max_pages=20).fetch("hh"))
        assert len(items) == 2
        assert source.requested == [0, 1]

    def test_respects_max_pages(self):
        pages = {p: [vacancy_item(p + 1)] for p in range(10)}
        items = run(LiveRecordStore(FakeSource(pages), max_pages=3).fetch("hh"))
        assert len(items) == 3

    def test_transport_failure_keeps_earlier_pages(self):
        pages = {p: [vacancy_item(p * 10 + i) for i in range(1, 3)] for p in range(20)}
        pages[2] = requests.ConnectionError("connection reset")
        source = FakeSource(pages, total_pages=20)

        items = run(LiveRecordStore(source, max_pages=20).fetch("hh"))
        assert source.requested == [0, 1, 2]
        vacancies = normalize_all(items, normalize_vacancy)
        groups = aggregate(vacancies, key=lambda v: v.employer)
        assert groups[0].count == 4

    def test_missing_container_moves_to_next_page(self):
        source = FakeSource({
            1: [vacancy_item(1)],
            2: Page(items=[], container_found=False),
            3: [vacancy_item(3)],
        })
        source.first_page = 1
        items = run(LiveRecordStore(source, max_pages=4).fetch("hub"))
        assert [i["id"] for i in items] == ["1", "3"]
        assert source.requested == [1, 2, 3, 4]

    def test_delay_between_pages(self):
        source = FakeSource({0: [vacancy_item(1)], 1: [vacancy_item(2)], 2: []})
        run(LiveRecordStore(source, delay=0.2).fetch("hh"))
        assert self.mock_sleep.await_count == 2
        self.mock_sleep.assert_awaited_with(0.2)

    def test_persists_items_by_id(self, tmp_path):
        blobs = BlobStore(tmp_path)
        source = FakeSource({0: [vacancy_item(1), {"name": "no id"}], 1: []})
        store = LiveRecordStore(source, blobs=blobs)

        run(store.fetch("hh"))
        run(store.fetch("hh"))
        assert sorted(p.name for p in (tmp_path / "hh").iterdir()) == ["1.json"]
        assert run(ReplayRecordStore(blobs).fetch("hh")) == [vacancy_item(1)]
