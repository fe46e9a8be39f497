from __future__ import annotations

from typing import Dict, Iterable, Iterator, Tuple, Union
from uuid import uuid4

from pydantic import BaseModel, Field, NonNegativeInt, field_validator


class Question(BaseModel):
    """A multiple-choice survey item with its ordered answer options."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    text: str
    options: Tuple[str, ...]

    @field_validator("text")
    @classmethod
    def _require_text(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("question text cannot be empty")
        return cleaned

    @field_validator("options", mode="before")
    @classmethod
    def _stringify_options(cls, value: Iterable[Union[str, int]] | None) -> Tuple[str, ...]:
        if value is None:
            raise ValueError("options must be provided")
        if isinstance(value, str):
            raise ValueError("options must be provided as a sequence, not a single string")
        options = tuple(str(option) for option in value)
        if not options:
            raise ValueError("a question needs at least one option")
        return options

    model_config = {"extra": "forbid", "frozen": True}


class QuestionCatalog(BaseModel):
    """Immutable, ordered set of questions asked to every respondent."""

    questions: Tuple[Question, ...] = Field(min_length=1)

    model_config = {"extra": "forbid", "frozen": True}

    def __len__(self) -> int:
        return len(self.questions)

    def __iter__(self) -> Iterator[Question]:  # type: ignore[override]
        return iter(self.questions)

    def __getitem__(self, index: int) -> Question:
        return self.questions[index]


class QuestionStatistics(BaseModel):
    """Per-question frequency table: how many respondents picked each option."""

    counts: Dict[str, NonNegativeInt] = Field(default_factory=dict)

    @classmethod
    def initialize(cls, options: Iterable[str]) -> "QuestionStatistics":
        """Return a table holding every option at zero."""

        return cls(counts={option: 0 for option in options})

    def record_answer(self, answer: str) -> None:
        """Count one more vote for ``answer``.

        Labels outside the question's options are accepted and start at 1.
        """

        self.counts[answer] = self.counts.get(answer, 0) + 1

    def count_for(self, option: str) -> int:
        return self.counts.get(option, 0)
