"""
Choice store tests (JSON file and in-memory).

Run:
    pytest tests/test_server/test_choice_store.py -v
"""

import json

import pytest

from bookscout.server.services import InMemoryChoiceStore, JsonFileChoiceStore
from bookscout.server.services.choice_store import summarize


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryChoiceStore()
    return JsonFileChoiceStore(tmp_path / "choices.json")


class TestChoiceStore:
    """Behavior shared by both implementations."""

    def test_record_returns_event(self, store):
        event = store.record({"id": "1"}, "like", 123)
        assert event == {"book": {"id": "1"}, "action": "like", "timestamp": 123}

    def test_zero_timestamp_kept(self, store):
        assert store.record({"id": "1"}, "like", 0)["timestamp"] == 0

    def test_list_all_in_order(self, store):
        store.record({"id": "1"}, "like", 1)
        store.record({"id": "2"}, "dislike", 2)
        assert [c["book"]["id"] for c in store.list_all()] == ["1", "2"]

    def test_summary_counts(self, store):
        store.record({"id": "1"}, "like", 1)
        store.record({"id": "2"}, "dislike", 2)
        store.record({"id": "3"}, "like", 3)
        summary = store.summary()
        assert (summary["total"], summary["liked"], summary["disliked"]) == (3, 2, 1)
        assert summary["last"][0]["book"]["id"] == "3"


class TestJsonFileChoiceStore:
    """File handling."""

    def test_creates_empty_array_file(self, tmp_path):
        path = tmp_path / "nested" / "choices.json"
        JsonFileChoiceStore(path)
        assert json.loads(path.read_text()) == []

    def test_existing_file_kept(self, tmp_path):
        path = tmp_path / "choices.json"
        path.write_text(json.dumps([{"book": {"id": "a"}, "action": "like", "timestamp": 1}]))
        store = JsonFileChoiceStore(path)
        assert store.summary()["liked"] == 1

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "choices.json"
        path.write_text("{broken")
        store = JsonFileChoiceStore(path)
        assert store.list_all() == []
        assert store.summary()["total"] == 0

    def test_empty_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "choices.json"
        path.write_text("")
        assert JsonFileChoiceStore(path).list_all() == []

    def test_record_after_corruption_starts_fresh(self, tmp_path):
        path = tmp_path / "choices.json"
        path.write_text("not json")
        store = JsonFileChoiceStore(path)
        store.record({"id": "1"}, "like", 1)
        assert json.loads(path.read_text()) == [{"book": {"id": "1"}, "action": "like", "timestamp": 1}]

    def test_external_edits_picked_up(self, tmp_path):
        path = tmp_path / "choices.json"
        store = JsonFileChoiceStore(path)
        path.write_text(json.dumps([{"book": {}, "action": "dislike", "timestamp": 1}]))
        assert store.summary()["disliked"] == 1


class TestSummarize:
    def test_limit(self):
        choices = [{"action": "like", "timestamp": i} for i in range(15)]
        summary = summarize(choices, limit=10)
        assert [c["timestamp"] for c in summary["last"]] == list(range(14, 4, -1))

    def test_unknown_actions_count_in_total_only(self):
        summary = summarize([{"action": "skip"}, {"action": "like"}])
        assert (summary["total"], summary["liked"], summary["disliked"]) == (2, 1, 0)


class TestHandEditedLog:
    """Entries that are not event objects must not break reads."""

    def test_non_object_entries_dropped(self, tmp_path):
        path = tmp_path / "choices.json"
        path.write_text(json.dumps([1, "x", None, {"book": {"id": "a"}, "action": "like", "timestamp": 1}]))
        store = JsonFileChoiceStore(path)
        assert store.list_all() == [{"book": {"id": "a"}, "action": "like", "timestamp": 1}]
        summary = store.summary()
        assert (summary["total"], summary["liked"]) == (1, 1)

    def test_entry_without_action_counts_in_total_only(self, tmp_path):
        path = tmp_path / "choices.json"
        path.write_text(json.dumps([{"book": {"id": "x"}, "timestamp": 1}]))
        summary = JsonFileChoiceStore(path).summary()
        assert (summary["total"], summary["liked"], summary["disliked"]) == (1, 0, 0)
