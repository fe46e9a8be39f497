from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from pollbooth.API.results_provider import ResultsProvider
from pollbooth.models.results import QuestionResult


@dataclass(frozen=True)
class ChartData:
    """Structured payload describing a bar chart for the UI layer."""

    labels: Tuple[str, ...]
    values: Tuple[int, ...]
    title: str
    question_index: int | None = None
    question_text: str | None = None
    metadata: dict[str, int | str] = field(default_factory=dict)

    def as_dict(self) -> dict[str, int]:
        """Return data as a simple label -> value mapping."""

        return {label: value for label, value in zip(self.labels, self.values)}


class ResultsChartBuilder:
    """Prepare chart-ready option counts from the survey tally."""

    def __init__(self, provider: ResultsProvider, *, include_unlisted: bool = True) -> None:
        if provider is None:
            raise ValueError("provider must be provided")
        self._provider = provider
        self._include_unlisted = include_unlisted

    def all_question_charts(self) -> List[ChartData]:
        """Return chart data for every question in catalog order."""

        snapshot = self._provider.get_results_snapshot()
        return [self._build(result) for result in snapshot.questions]

    def _build(self, result: QuestionResult) -> ChartData:
        labels = list(result.counts)
        values = list(result.counts.values())
        if self._include_unlisted:
            labels.extend(result.unlisted_counts)
            values.extend(result.unlisted_counts.values())

        return ChartData(
            labels=tuple(labels),
            values=tuple(values),
            title=f"{result.index + 1}. {result.question}",
            question_index=result.index,
            question_text=result.question,
            metadata={"total_votes": result.total_votes},
        )


__all__ = [
    "ChartData",
    "ResultsChartBuilder",
]
