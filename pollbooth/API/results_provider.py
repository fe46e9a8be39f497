from __future__ import annotations

from typing import List

from pollbooth.models.results import QuestionResult, ResultsSnapshot
from pollbooth.services.survey_session import SurveySession


class ResultsProvider:
    """Expose the running tally of a survey session as plain snapshots."""

    def __init__(self, session: SurveySession) -> None:
        if session is None:
            raise ValueError("session must be provided")
        self._session = session

    def get_results_snapshot(self) -> ResultsSnapshot:
        """Return counts for every question, options in catalog order."""

        results: List[QuestionResult] = []
        for index, (question, stats) in enumerate(zip(self._session.questions, self._session.statistics)):
            options = list(question.options)
            counts = {option: stats.count_for(option) for option in options}
            unlisted = {label: count for label, count in stats.counts.items() if label not in counts}
            results.append(
                QuestionResult(
                    index=index,
                    question=question.text,
                    options=options,
                    counts=counts,
                    unlisted_counts=unlisted,
                )
            )

        return ResultsSnapshot(
            total_participants=self._session.total_participants,
            questions=results,
        )
