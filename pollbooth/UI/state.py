from __future__ import annotations

import streamlit as st

from pollbooth.core.config import settings
from pollbooth.services.catalog import load_catalog
from pollbooth.services.persistence import PersistenceBridge
from pollbooth.services.survey_session import SurveySession

SURVEY_SESSION_KEY = "survey_session"
SHOW_RESULTS_KEY = "show_results"
ASK_NEXT_PERSON_KEY = "ask_next_person"


def ensure_defaults() -> None:
    """Ensure the expected session state keys exist with sensible defaults."""

    if SURVEY_SESSION_KEY not in st.session_state:
        catalog = load_catalog(settings.survey_catalog_path)
        st.session_state[SURVEY_SESSION_KEY] = SurveySession(catalog, persistence=PersistenceBridge())
    st.session_state.setdefault(SHOW_RESULTS_KEY, False)
    st.session_state.setdefault(ASK_NEXT_PERSON_KEY, False)


def get_session() -> SurveySession:
    """Return the survey session bound to this browser session."""

    ensure_defaults()
    return st.session_state[SURVEY_SESSION_KEY]


def set_show_results(is_visible: bool) -> None:
    st.session_state[SHOW_RESULTS_KEY] = bool(is_visible)


def is_showing_results() -> bool:
    return bool(st.session_state[SHOW_RESULTS_KEY])


def set_ask_next_person(is_asking: bool) -> None:
    st.session_state[ASK_NEXT_PERSON_KEY] = bool(is_asking)


def is_asking_next_person() -> bool:
    return bool(st.session_state[ASK_NEXT_PERSON_KEY])
