from __future__ import annotations

import streamlit as st

from pollbooth.API.results_provider import ResultsProvider
from pollbooth.core.logging import configure_logging
from pollbooth.services.charts import ResultsChartBuilder

from . import components, state


def run_app() -> None:
    """Entry point for the Streamlit-based survey UI."""

    configure_logging()
    st.set_page_config(page_title="Umfrage", page_icon="🗳️", layout="centered")
    st.title("Umfrage")

    state.ensure_defaults()
    session = state.get_session()

    if state.is_showing_results():
        render_overall_results()
        st.button("Zurück", key="results_back_button", on_click=lambda: state.set_show_results(False))
        return

    if state.is_asking_next_person():
        components.render_next_person_prompt(on_next=_ask_next_person, on_show_results=_show_results)
        return

    if session.is_surveying:
        components.render_question(session, on_answer=_answer)
        return

    components.render_start_page(on_start=_start_survey, on_show_results=_show_results)


def render_overall_results() -> None:
    """Render the cross-respondent tally."""

    session = state.get_session()
    session.refresh_results()
    provider = ResultsProvider(session)
    charts = ResultsChartBuilder(provider, include_unlisted=False).all_question_charts()
    components.render_results(provider.get_results_snapshot(), charts)


def _start_survey() -> None:
    state.get_session().start()


def _answer(option: str) -> None:
    session = state.get_session()
    was_last = session.is_last_question
    session.submit_answer(option)
    if was_last:
        session.finish_survey()
        state.set_ask_next_person(True)


def _ask_next_person() -> None:
    state.set_ask_next_person(False)


def _show_results() -> None:
    state.set_ask_next_person(False)
    state.set_show_results(True)
