from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import structlog

from pollbooth.models.survey import Question, QuestionCatalog, QuestionStatistics
from pollbooth.services.persistence import PersistenceBridge

logger = structlog.get_logger(__name__)


class SurveySession:
    """Walks one respondent at a time through the catalog and owns the running tally.

    Answering is a two-step protocol: ``submit_answer`` on the last question
    stores the answer but stays put, and the caller must call
    ``finish_survey`` to commit the respondent.
    """

    def __init__(
        self,
        catalog: QuestionCatalog,
        *,
        persistence: PersistenceBridge | None = None,
    ) -> None:
        self._questions: Tuple[Question, ...] = tuple(catalog.questions)
        self._persistence = persistence
        self._is_surveying = False
        self._current_answers: List[Optional[str]] = []
        self._current_index = 0

        if persistence is None:
            self._statistics = [QuestionStatistics.initialize(q.options) for q in self._questions]
            self._total_participants = 0
        else:
            self._statistics, self._total_participants = persistence.load_saved_results(self._questions)

        self.reset_survey()

    @property
    def questions(self) -> Tuple[Question, ...]:
        return self._questions

    @property
    def statistics(self) -> Tuple[QuestionStatistics, ...]:
        return tuple(self._statistics)

    @property
    def current_answers(self) -> Tuple[Optional[str], ...]:
        return tuple(self._current_answers)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_question(self) -> Question:
        return self._questions[self._current_index]

    @property
    def is_surveying(self) -> bool:
        return self._is_surveying

    @property
    def total_participants(self) -> int:
        return self._total_participants

    @property
    def is_last_question(self) -> bool:
        return self._current_index == len(self._questions) - 1

    def start(self) -> None:
        """Begin a fresh pass for the next respondent."""

        self.reset_survey()
        self._is_surveying = True

    def submit_answer(self, answer: str) -> None:
        """Store ``answer`` for the current question and move on unless it was the last one."""

        self._current_answers[self._current_index] = answer
        if not self.is_last_question:
            self._current_index += 1

    def finish_survey(self) -> None:
        """Fold the respondent's answers into the tally, persist it and reset the pass.

        With persistence attached, the saved aggregate is re-read first so
        respondents committed by other sessions on the same store are kept.
        """

        if self._persistence is None:
            self._commit_answers()
        else:
            with self._persistence.locked():
                self.refresh_results()
                self._commit_answers()
                self._persistence.save_results(self._statistics, self._total_participants)

        self.reset_survey()
        self._is_surveying = False

    def refresh_results(self) -> None:
        """Replace the in-memory aggregate with the saved one, when the store holds one."""

        if self._persistence is None:
            return
        saved = self._persistence.read_saved_results(self._questions)
        if saved is not None:
            self._statistics, self._total_participants = saved

    def _commit_answers(self) -> None:
        for index, answer in enumerate(self._current_answers):
            if answer is not None:
                self._statistics[index].record_answer(answer)

        self._total_participants += 1
        logger.info(
            "survey_finished",
            answered=answered_count(self._current_answers),
            total_participants=self._total_participants,
        )

    def reset_survey(self) -> None:
        """Drop any partial answers and rewind to the first question."""

        self._current_answers = [None] * len(self._questions)
        self._current_index = 0


def answered_count(answers: Sequence[Optional[str]]) -> int:
    """Return how many slots hold an answer."""

    return sum(answer is not None for answer in answers)
