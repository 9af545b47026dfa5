import streamlit as st
import altair as alt

from ui import client
from ui.aggregator import (
    ViewMode, compute_total, format_total, select_dataset,
    toggle_label, total_heading,
)
from ui.charts import build_chart
from ui.state import AnalyticsView, LOADING_MESSAGE

VIEW_KEY = "analytics_view"
INSIGHT = (
    "Emissions are highest during periods with frequent animal-based "
    "purchases. Shifting even a few meals to plant-based alternatives "
    "can significantly reduce your carbon footprint."
)

st.set_page_config(page_title="Carbon Analytics", layout="centered")

# Altair safety (long daily series)
alt.data_transformers.disable_max_rows()

# Center the metric card like the rest of the page
st.markdown("""
    <style>
        [data-testid="stMetric"] {
            text-align: center;
        }
        [data-testid="stMetricValue"] {
            color: #2ecc71;
        }
    </style>
    """, unsafe_allow_html=True)

st.title("🌍 Carbon Analytics")

# One view per session; the fetch happens once, on first run
if VIEW_KEY not in st.session_state:
    st.session_state[VIEW_KEY] = AnalyticsView()
view: AnalyticsView = st.session_state[VIEW_KEY]

if view.state.is_loading:
    with st.spinner(LOADING_MESSAGE):
        view.load(client.fetch_analytics)

state = view.state
if state.status_message:
    st.info(state.status_message)
    st.stop()

mode = state.mode
records = select_dataset(state.payload, mode)

# -------------------- Total --------------------
with st.container(border=True):
    st.metric(total_heading(mode), format_total(compute_total(records)))

# -------------------- Toggle --------------------
cols = st.columns(len(ViewMode))
for col, m in zip(cols, ViewMode):
    with col:
        st.button(
            toggle_label(m),
            key=f"view-{m.value}",
            type="primary" if m is mode else "secondary",
            width="stretch",
            on_click=view.select,
            args=(m,),
        )

# -------------------- Chart --------------------
st.altair_chart(build_chart(records, mode), width="stretch")

# -------------------- Insight --------------------
with st.container(border=True):
    st.subheader("💡 Insight")
    st.write(INSIGHT)

