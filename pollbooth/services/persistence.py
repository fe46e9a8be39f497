"""Save and restore the cross-respondent tally through a key-value store.

Persistence here is best effort: nothing in this module raises to the caller.
A failed save leaves the in-memory aggregate authoritative for the running
process, and a missing or unreadable saved state loads as "no prior data".
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Sequence, Tuple

import structlog
from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from pollbooth.core.config import settings
from pollbooth.models.survey import Question, QuestionStatistics
from pollbooth.services.store import KeyValueStore, get_store

logger = structlog.get_logger(__name__)

_STATISTICS_ADAPTER = TypeAdapter(List[QuestionStatistics])

# Shared by every bridge in the process so each read-fold-write completes in one piece.
_UPDATE_LOCK = threading.RLock()


class PersistenceBridge:
    """Writes the statistics table and participant count under two fixed keys."""

    def __init__(
        self,
        store: KeyValueStore | None = None,
        *,
        statistics_key: str | None = None,
        participants_key: str | None = None,
    ) -> None:
        self._store = store if store is not None else get_store()
        self._statistics_key = statistics_key or settings.statistics_key
        self._participants_key = participants_key or settings.participants_key

    @property
    def statistics_key(self) -> str:
        return self._statistics_key

    @property
    def participants_key(self) -> str:
        return self._participants_key

    def save_results(self, statistics: Sequence[QuestionStatistics], total_participants: int) -> bool:
        """Persist the aggregate; return False when the store was not updated."""

        try:
            blob = _STATISTICS_ADAPTER.dump_json(list(statistics)).decode("utf-8")
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            logger.warning("statistics_encode_failed", error=str(exc))
            return False

        try:
            self._store.set(self._statistics_key, blob)
            self._store.set(self._participants_key, int(total_participants))
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("results_save_failed", error=str(exc), key=self._statistics_key)
            return False

        logger.debug("results_saved", questions=len(statistics), total_participants=total_participants)
        return True

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the process-wide update lock, e.g. around a reload, fold and save."""

        with _UPDATE_LOCK:
            yield

    def load_saved_results(self, questions: Sequence[Question]) -> Tuple[List[QuestionStatistics], int]:
        """Return the saved aggregate for ``questions``, falling back to zeros."""

        saved = self.read_saved_results(questions)
        if saved is not None:
            return saved

        statistics = [QuestionStatistics.initialize(question.options) for question in questions]
        total_participants = self._read_participants()
        logger.info("results_loaded", restored=False, total_participants=total_participants)
        return statistics, total_participants

    def read_saved_results(
        self, questions: Sequence[Question]
    ) -> Optional[Tuple[List[QuestionStatistics], int]]:
        """Return the saved aggregate, or None when no readable statistics are stored."""

        saved = self._read_statistics()
        if saved is None:
            return None

        statistics = [QuestionStatistics.initialize(question.options) for question in questions]
        if len(saved) != len(statistics):
            logger.warning(
                "saved_statistics_length_mismatch",
                saved=len(saved),
                expected=len(statistics),
            )
        for current, restored in zip(statistics, saved):
            current.counts.update(restored.counts)

        total_participants = self._read_participants()
        logger.info("results_loaded", restored=True, total_participants=total_participants)
        return statistics, total_participants

    def _read_statistics(self) -> List[QuestionStatistics] | None:
        try:
            raw = self._store.get(self._statistics_key)
        except (OSError, ValueError) as exc:
            logger.warning("results_read_failed", error=str(exc), key=self._statistics_key)
            return None
        if raw is None:
            return None

        try:
            if isinstance(raw, (str, bytes, bytearray)):
                return _STATISTICS_ADAPTER.validate_json(raw)
            return _STATISTICS_ADAPTER.validate_python(raw)
        except ValidationError as exc:
            logger.warning("saved_statistics_undecodable", errors=exc.error_count())
            return None

    def _read_participants(self) -> int:
        try:
            raw = self._store.get(self._participants_key)
        except (OSError, ValueError) as exc:
            logger.warning("participants_read_failed", error=str(exc), key=self._participants_key)
            return 0
        return _coerce_count(raw)


def _coerce_count(raw: Any) -> int:
    """Return ``raw`` as a non-negative integer, or 0 when it is not one."""

    if isinstance(raw, bool) or raw is None:
        return 0
    if isinstance(raw, int):
        return max(raw, 0)
    if isinstance(raw, str):
        try:
            return max(int(raw.strip()), 0)
        except ValueError:
            return 0
    return 0
