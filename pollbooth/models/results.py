from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field


class QuestionResult(BaseModel):
    """Aggregated counts for one catalog question."""

    index: int
    question: str
    options: List[str] = Field(default_factory=list)
    counts: Dict[str, int] = Field(default_factory=dict)
    unlisted_counts: Dict[str, int] = Field(default_factory=dict)

    model_config = {"extra": "forbid"}

    @property
    def total_votes(self) -> int:
        """Return the number of recorded answers, unlisted labels included."""

        return sum(self.counts.values()) + sum(self.unlisted_counts.values())

    @property
    def has_votes(self) -> bool:
        return self.total_votes > 0


class ResultsSnapshot(BaseModel):
    """Read-only view of the overall tally for the results screen."""

    total_participants: int = 0
    questions: List[QuestionResult] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @property
    def total_questions(self) -> int:
        return len(self.questions)
