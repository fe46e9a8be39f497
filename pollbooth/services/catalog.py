from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from pollbooth.models.survey import Question, QuestionCatalog

DEFAULT_QUESTIONS: Tuple[Tuple[str, Sequence[str]], ...] = (
    ("Geschlecht", ("männlich", "weiblich", "divers", "keine Angabe")),
    (
        "Altersgruppe",
        ("u18", "18-29", "30-39", "40-49", "50-59", "60-69", "70-79", "ü80", "keine Angabe"),
    ),
    (
        "Welchen Kanzlerkandidat würden Sie bevorzugen?",
        (
            "Friedrich Merz (CDU)",
            "Olaf Scholz (SPD)",
            "Robert Habeck (Bündnis 90 / Die Grünen)",
            "Christian Lindner (FDP)",
            "Alice Weidel (AfD)",
            "Sahra Wagenknecht (BSW)",
            "Jan van Aken (Die Linke)",
            "Keinen der aufgeführten",
        ),
    ),
    (
        "Fühlen Sie sich von den aktuellen Parteien repräsentiert?",
        ("trifft zu", "trifft eher zu", "trifft eher nicht zu", "trifft nicht zu"),
    ),
    (
        "Wie zufrieden sind Sie mit der Regierungsarbeit der Ampel?",
        ("zufrieden", "eher zufrieden", "eher unzufrieden", "unzufrieden"),
    ),
    (
        "Ist die Demokratie in Deutschland gefährdet?",
        (
            "Nein",
            "Ja, durch Rechtsextremismus",
            "Ja, durch Linksextremismus",
            "Ja, durch Links- und Rechtsextremismus",
            "Ja",
        ),
    ),
    ("Fühlen Sie sich finanziell sicher?", ("ja", "eher ja", "eher nein", "nein")),
    (
        "Welches Thema ist für Sie am wichtigsten?",
        (
            "Freiheit",
            "Sicherheit",
            "Migration",
            "Außenpolitik (z.B. Kriege)",
            "stabile Wirtschaftslage",
            "Schutz unserer Demokratie",
            "Keines der aufgeführten Themen",
        ),
    ),
    (
        "Engagieren Sie sich politisch?",
        (
            "Ja, in einer Partei",
            "Ja, unabhängig von Parteien",
            "Nein, aber Politik interessiert mich",
            "Nein, denn Politik interessiert mich nicht",
        ),
    ),
    (
        "Bei der Bundestagswahl wählen wir...",
        (
            "... einen Wahlkreiskandidaten und eine Partei.",
            "...nur eine Partei.",
            "... den Bundeskanzler.",
            "... nur einen Wahlkreiskandidaten.",
        ),
    ),
)


def default_catalog() -> QuestionCatalog:
    """Return the built-in questionnaire."""

    return QuestionCatalog(
        questions=tuple(Question(text=text, options=options) for text, options in DEFAULT_QUESTIONS)
    )


class CatalogLoader:
    """Load a question catalog from a simple text file.

    Each non-empty line holds one question, the pipe character ("|") separating
    the question text from a comma-separated list of options:

        Wie zufrieden sind Sie? | zufrieden, eher zufrieden, unzufrieden

    Lines that are blank or begin with "#" are ignored.
    """

    def __init__(self, source: str | Path) -> None:
        self._path = Path(source)
        if not self._path.is_file():
            raise FileNotFoundError(f"Survey catalog not found: {self._path}")

        questions = list(self._load_questions())
        if not questions:
            raise ValueError(f"Survey catalog {self._path} does not define any questions")
        self._catalog = QuestionCatalog(questions=tuple(questions))

    @property
    def catalog(self) -> QuestionCatalog:
        """Return the catalog loaded from the file."""

        return self._catalog

    def _load_questions(self) -> Iterable[Question]:
        with self._path.open("r", encoding="utf-8") as handle:
            for lineno, raw_line in enumerate(handle, start=1):
                line = raw_line.strip()
                if not line or line.startswith("#"):
                    continue

                text, options = self._parse_line(line, lineno)
                yield Question(text=text, options=options)

    def _parse_line(self, line: str, lineno: int) -> tuple[str, List[str]]:
        if "|" not in line:
            raise ValueError(f"Line {lineno}: expected 'question | option, option, ...'")

        question_part, options_part = line.split("|", maxsplit=1)
        text = question_part.strip()
        if not text:
            raise ValueError(f"Line {lineno}: question text cannot be empty")

        options = [option.strip() for option in options_part.split(",") if option.strip()]
        if not options:
            raise ValueError(f"Line {lineno}: question must define at least one option")

        return text, options


def load_catalog(path: str | Path | None = None) -> QuestionCatalog:
    """Return the catalog at ``path``, or the built-in one when no path is given."""

    if path is None:
        return default_catalog()
    return CatalogLoader(path).catalog
