from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _strip_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


class Settings:

    def __init__(self) -> None:
        store_path = _strip_or_none(os.getenv("SURVEY_STORE_PATH")) or "pollbooth/data/survey_store.json"
        self.survey_store_path = Path(store_path).expanduser().resolve()
        self.survey_store_path.parent.mkdir(parents=True, exist_ok=True)

        catalog_path = _strip_or_none(os.getenv("SURVEY_CATALOG_PATH"))
        self.survey_catalog_path: Optional[Path] = None
        if catalog_path:
            self.survey_catalog_path = Path(catalog_path).expanduser().resolve()
            if not self.survey_catalog_path.is_file():
                raise RuntimeError(f"Survey catalog not found at {self.survey_catalog_path}")

        self.statistics_key = _strip_or_none(os.getenv("SURVEY_STATISTICS_KEY")) or "surveyStatistics"
        self.participants_key = _strip_or_none(os.getenv("SURVEY_PARTICIPANTS_KEY")) or "totalParticipants"

        self.log_level = (_strip_or_none(os.getenv("LOG_LEVEL")) or "INFO").upper()


settings = Settings()
