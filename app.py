import logging
from contextlib import contextmanager
from typing import Dict, List

import streamlit as st

from catalog.dashboard import ControlChange, Dashboard
from catalog.errors import DashboardError
from catalog.filters import format_filter_summary
from catalog.widgets import Payload

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #111827;}
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def render_filter_chips(chips: List[str]):
    html = "".join([f"<span class='chip'>{txt}</span>" for txt in chips])
    st.markdown(f"<div class='chip-row'>{html}</div>", unsafe_allow_html=True)


@st.dialog("Title details")
def show_title_detail(detail: Dict[str, object]):
    st.subheader(str(detail["title"]))
    st.write(f"**Type:** {detail['type']}")
    st.write(f"**Year:** {detail['release_year']}")
    st.write(f"**IMDb:** {detail['imdb_score']} ({detail['imdb_votes']} votes)")
    st.write(detail["description"] or "No description.")


def draw_payload(payload: Payload, slot):
    # st.empty() holds a single element; drawing into it replaces the previous render.
    with slot.container():
        with card(payload["title"]):
            if payload["empty"]:
                st.info(payload["message"])
                return
            if payload["chart"] is not None:
                st.vega_lite_chart(payload["chart"], use_container_width=True)
                return
            for c in payload["rows"]:
                with st.container(border=True):
                    st.markdown(f"**{c['rank']}. {c['title']}**")
                    st.caption(c["meta"])
                    st.write(c["description"])
                    if st.button("Details", key=f"card_{c['rank']}_{c['id']}"):
                        show_title_detail(c["detail"])


def get_dashboard() -> Dashboard:
    dashboard = st.session_state.get("dashboard")
    if dashboard is not None:
        return dashboard
    dashboard = Dashboard()
    dashboard.start()
    st.session_state["dashboard"] = dashboard
    return dashboard


def on_control_change(control: str, key: str):
    dashboard: Dashboard = st.session_state["dashboard"]
    dashboard.dispatch(ControlChange(control=control, value=st.session_state[key]))  # type: ignore[arg-type]


# ---------- UI setup ----------
st.set_page_config(page_title="Streaming Catalog Ratings", layout="wide")
inject_base_styles()
st.markdown(
    "<div class='app-top-bar'><div class='page-title'>Streaming Catalog Ratings Dashboard</div></div>",
    unsafe_allow_html=True,
)

try:
    dashboard = get_dashboard()
except DashboardError as exc:
    st.error(f"Could not load the titles dataset: {exc}")
    st.stop()

controls = dashboard.controls
state = dashboard.state

# ----- Sidebar: filters -----
with st.sidebar:
    st.markdown("### Filters")
    st.selectbox(
        "Category",
        options=controls.categories,
        index=controls.categories.index(state.category),
        key="filter_category",
        on_change=on_control_change,
        args=("category", "filter_category"),
    )
    st.selectbox(
        "Type",
        options=controls.types,
        index=controls.types.index(state.title_type),
        key="filter_type",
        on_change=on_control_change,
        args=("title_type", "filter_type"),
    )
    st.slider(
        "Minimum release year",
        min_value=controls.year_min,
        max_value=max(controls.year_max, controls.year_min + 1),
        value=state.min_year,
        step=1,
        key="filter_year",
        on_change=on_control_change,
        args=("min_year", "filter_year"),
    )
    st.caption(f"Showing titles from {dashboard.state.min_year} onward")

render_filter_chips(format_filter_summary(dashboard.state, controls))
st.download_button(
    "Export CSV",
    data=dashboard.export_csv(),
    file_name="titles_filtered.csv",
    mime="text/csv",
)

regions = dashboard.last_render
top_row = st.columns(2)
slots = {
    "rating_histogram": top_row[0].empty(),
    "category_chart": top_row[1].empty(),
}
mid_row = st.columns(2)
slots["timeline_chart"] = mid_row[0].empty()
slots["type_comparison"] = mid_row[1].empty()
slots["top_cards"] = st.empty()

for region, slot in slots.items():
    draw_payload(regions[region], slot)
