from __future__ import annotations

import json
from typing import Any, Optional

from pollbooth.models.survey import QuestionCatalog, QuestionStatistics
from pollbooth.services.persistence import PersistenceBridge
from pollbooth.services.store import InMemoryStore


class _FailingStore:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def get(self, key: str) -> Optional[Any]:
        self.calls.append(f"get:{key}")
        raise OSError("disk unavailable")

    def set(self, key: str, value: Any) -> None:
        self.calls.append(f"set:{key}")
        raise OSError("disk full")


def _bridge(store: InMemoryStore | None = None) -> PersistenceBridge:
    return PersistenceBridge(
        store or InMemoryStore(),
        statistics_key="surveyStatistics",
        participants_key="totalParticipants",
    )


def test_load_from_empty_store_yields_defaults(two_question_catalog: QuestionCatalog) -> None:
    statistics, total = _bridge().load_saved_results(two_question_catalog.questions)

    assert total == 0
    assert [stats.counts for stats in statistics] == [{"A": 0, "B": 0}, {"X": 0, "Y": 0}]


def test_save_then_load_round_trip(two_question_catalog: QuestionCatalog) -> None:
    store = InMemoryStore()
    statistics = [
        QuestionStatistics(counts={"A": 4, "B": 1}),
        QuestionStatistics(counts={"X": 0, "Y": 5, "Z": 2}),
    ]

    assert _bridge(store).save_results(statistics, 5) is True
    restored, total = _bridge(store).load_saved_results(two_question_catalog.questions)

    assert total == 5
    assert [stats.counts for stats in restored] == [stats.counts for stats in statistics]


def test_saved_layout_is_json_text_and_plain_integer(two_question_catalog: QuestionCatalog) -> None:
    store = InMemoryStore()

    _bridge(store).save_results([QuestionStatistics(counts={"A": 1})], 1)

    assert json.loads(store.get("surveyStatistics")) == [{"counts": {"A": 1}}]
    assert store.get("totalParticipants") == 1


def test_corrupt_blob_degrades_to_defaults(two_question_catalog: QuestionCatalog) -> None:
    store = InMemoryStore({"surveyStatistics": "{broken", "totalParticipants": 7})

    statistics, total = _bridge(store).load_saved_results(two_question_catalog.questions)

    assert [stats.counts for stats in statistics] == [{"A": 0, "B": 0}, {"X": 0, "Y": 0}]
    assert total == 7


def test_negative_counts_are_treated_as_corrupt(two_question_catalog: QuestionCatalog) -> None:
    store = InMemoryStore({"surveyStatistics": '[{"counts": {"A": -3}}]'})

    statistics, _ = _bridge(store).load_saved_results(two_question_catalog.questions)

    assert statistics[0].counts == {"A": 0, "B": 0}


def test_restore_merges_positionally(two_question_catalog: QuestionCatalog) -> None:
    saved = [{"counts": {"A": 2, "legacy": 1}}]
    store = InMemoryStore({"surveyStatistics": json.dumps(saved)})

    statistics, _ = _bridge(store).load_saved_results(two_question_catalog.questions)

    assert statistics[0].counts == {"A": 2, "B": 0, "legacy": 1}
    assert statistics[1].counts == {"X": 0, "Y": 0}


def test_surplus_saved_entries_are_dropped(two_question_catalog: QuestionCatalog) -> None:
    saved = [{"counts": {"A": 1}}, {"counts": {"Y": 1}}, {"counts": {"gone": 9}}]
    store = InMemoryStore({"surveyStatistics": json.dumps(saved)})

    statistics, _ = _bridge(store).load_saved_results(two_question_catalog.questions)

    assert len(statistics) == 2
    assert statistics[1].counts == {"X": 0, "Y": 1}


def test_already_decoded_blob_is_accepted(two_question_catalog: QuestionCatalog) -> None:
    store = InMemoryStore({"surveyStatistics": [{"counts": {"B": 3}}]})

    statistics, _ = _bridge(store).load_saved_results(two_question_catalog.questions)

    assert statistics[0].counts == {"A": 0, "B": 3}


def test_participant_count_coercion(two_question_catalog: QuestionCatalog) -> None:
    cases = [("12", 12), ("abc", 0), (-4, 0), (True, 0), (2.5, 0), (None, 0)]
    for raw, expected in cases:
        store = InMemoryStore({"totalParticipants": raw})

        _, total = _bridge(store).load_saved_results(two_question_catalog.questions)

        assert total == expected, raw


def test_store_failures_never_escape(two_question_catalog: QuestionCatalog) -> None:
    store = _FailingStore()
    bridge = PersistenceBridge(store, statistics_key="s", participants_key="p")

    assert bridge.save_results([QuestionStatistics(counts={"A": 1})], 1) is False
    statistics, total = bridge.load_saved_results(two_question_catalog.questions)

    assert total == 0
    assert statistics[0].counts == {"A": 0, "B": 0}
    assert store.calls == ["set:s", "get:s", "get:p"]


def test_keys_default_to_settings() -> None:
    bridge = PersistenceBridge(InMemoryStore())

    assert bridge.statistics_key == "surveyStatistics"
    assert bridge.participants_key == "totalParticipants"


def test_read_saved_results_reports_missing_blob(two_question_catalog: QuestionCatalog) -> None:
    store = InMemoryStore({"totalParticipants": 4})

    assert _bridge(store).read_saved_results(two_question_catalog.questions) is None


def test_read_saved_results_returns_merged_aggregate(two_question_catalog: QuestionCatalog) -> None:
    store = InMemoryStore({"surveyStatistics": '[{"counts": {"B": 1}}]', "totalParticipants": 1})

    saved = _bridge(store).read_saved_results(two_question_catalog.questions)

    assert saved is not None
    statistics, total = saved
    assert total == 1
    assert [stats.counts for stats in statistics] == [{"A": 0, "B": 1}, {"X": 0, "Y": 0}]


def test_store_value_errors_never_escape(two_question_catalog: QuestionCatalog) -> None:
    class _UndecodableStore:
        def get(self, key: str) -> Optional[Any]:
            raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

        def set(self, key: str, value: Any) -> None:
            pass

    bridge = PersistenceBridge(_UndecodableStore(), statistics_key="s", participants_key="p")

    statistics, total = bridge.load_saved_results(two_question_catalog.questions)

    assert total == 0
    assert statistics[1].counts == {"X": 0, "Y": 0}
