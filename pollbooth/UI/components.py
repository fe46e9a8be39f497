from __future__ import annotations

from typing import Callable, List

import streamlit as st

from pollbooth.models.results import ResultsSnapshot
from pollbooth.services.charts import ChartData
from pollbooth.services.survey_session import SurveySession, answered_count


def render_start_page(on_start: Callable[[], None], on_show_results: Callable[[], None]) -> None:
    """Display the screen shown between respondents."""

    st.markdown("## Neue Umfragerunde")
    st.button("Umfrage starten", key="start_survey_button", type="primary", on_click=on_start)
    st.divider()
    st.button("Gesamtergebnisse anzeigen", key="show_results_button", on_click=on_show_results)


def render_question(session: SurveySession, on_answer: Callable[[str], None]) -> None:
    """Render the active question with one button per option."""

    total_questions = len(session.questions)
    current_index = session.current_index
    question = session.current_question

    st.progress((current_index + 1) / total_questions)
    st.markdown(f"### {question.text}")

    for option_index, option in enumerate(question.options):
        st.button(
            option,
            key=f"answer_{current_index}_{option_index}",
            use_container_width=True,
            on_click=on_answer,
            args=(option,),
        )

    st.caption(f"Beantwortet: {answered_count(session.current_answers)} von {total_questions}")


def render_next_person_prompt(on_next: Callable[[], None], on_show_results: Callable[[], None]) -> None:
    """Ask whether to survey another person or show the overall results."""

    st.success("Nächste Person?")
    st.write("Möchtest du eine weitere Person befragen oder die Ergebnisse anzeigen?")
    next_col, results_col = st.columns(2)
    with next_col:
        st.button("Weitere Person", key="next_person_button", type="primary", on_click=on_next)
    with results_col:
        st.button("Ergebnisse anzeigen", key="prompt_results_button", on_click=on_show_results)


def render_results(snapshot: ResultsSnapshot, charts: List[ChartData]) -> None:
    """Display participant count and per-option counts for every question."""

    st.markdown("## Gesamtergebnisse")
    st.markdown(f"**Anzahl der Teilnehmer: {snapshot.total_participants}**")

    for result, chart in zip(snapshot.questions, charts):
        st.markdown(f"#### {result.index + 1}. {result.question}")
        for option, count in result.counts.items():
            st.write(f"{option}: {count}")
        if result.has_votes:
            st.bar_chart({"Stimmen": chart.as_dict()})
        st.divider()
