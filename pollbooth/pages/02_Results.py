from __future__ import annotations

import streamlit as st

from pollbooth.UI import state
from pollbooth.UI.survey_app import render_overall_results

st.set_page_config(page_title="Umfrageergebnisse", page_icon="📊", layout="wide")

state.ensure_defaults()
render_overall_results()
