from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

_TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="pollbooth-test-"))

os.environ["SURVEY_STORE_PATH"] = str(_TEST_DATA_DIR / "survey_store.json")
for _name in ("SURVEY_CATALOG_PATH", "SURVEY_STATISTICS_KEY", "SURVEY_PARTICIPANTS_KEY"):
    os.environ.pop(_name, None)

from pollbooth.models.survey import Question, QuestionCatalog  # noqa: E402


@pytest.fixture
def two_question_catalog() -> QuestionCatalog:
    return QuestionCatalog(
        questions=(
            Question(text="First", options=["A", "B"]),
            Question(text="Second", options=["X", "Y"]),
        )
    )
