"""Widget payloads for the five dashboard regions.

Each ``compute_*`` function takes the currently filtered titles and returns a
fresh payload for its region; nothing is carried over from a previous call.
Payloads look like::

    {"region": ..., "title": ..., "empty": bool, "message": str | None,
     "rows": [...], "chart": <Vega-Lite dict> | None}

An empty input (or, for the histogram, no valid scores) yields the "no data"
placeholder and no chart.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

import altair as alt
import pandas as pd

from catalog.aggregates import (
    card_meta_line,
    mean_score_by,
    rating_histogram_bins,
    title_detail,
    top_titles,
    truncate_description,
)
from catalog.charts import SCORE_AXIS_TITLE, to_vega_spec
from catalog.filters import DashboardSettings

NO_DATA_MESSAGE = "No data available for the selected filters."

Payload = Dict[str, Any]
WidgetFn = Callable[[pd.DataFrame, DashboardSettings], Payload]


def _payload(region: str, title: str, rows: List[Dict[str, Any]], chart: Optional[Dict[str, Any]]) -> Payload:
    return {"region": region, "title": title, "empty": False, "message": None, "rows": rows, "chart": chart}


def placeholder(region: str, title: str) -> Payload:
    return {"region": region, "title": title, "empty": True, "message": NO_DATA_MESSAGE, "rows": [], "chart": None}


def compute_rating_histogram(df: pd.DataFrame, settings: DashboardSettings = DashboardSettings()) -> Payload:
    region, title = "rating_histogram", "IMDb Rating Distribution"
    bins = rating_histogram_bins(df, bins=settings.histogram_bins)
    if bins.empty:
        return placeholder(region, title)
    bins = bins.assign(range=[f"{lo:.2f} - {hi:.2f}" for lo, hi in zip(bins["lower"], bins["upper"])])
    chart = (
        alt.Chart(bins)
        .mark_bar()
        .encode(
            x=alt.X("lower:Q", bin="binned", title="IMDb Rating"),
            x2="upper:Q",
            y=alt.Y("count:Q", title="Number of Titles"),
            tooltip=[alt.Tooltip("range:N", title="Range"), alt.Tooltip("count:Q", title="Titles")],
        )
    )
    return _payload(region, title, bins.to_dict(orient="records"), to_vega_spec(chart))


def compute_category_chart(df: pd.DataFrame, settings: DashboardSettings = DashboardSettings()) -> Payload:
    region, title = "category_chart", "Average Rating by Category"
    grouped = mean_score_by(df, "age_certification")
    if grouped.empty:
        return placeholder(region, title)
    chart = (
        alt.Chart(grouped)
        .mark_bar()
        .encode(
            y=alt.Y("age_certification:N", title="Category", sort=grouped["age_certification"].tolist()),
            x=alt.X("mean_score:Q", title=SCORE_AXIS_TITLE),
            tooltip=[
                alt.Tooltip("age_certification:N", title="Category"),
                alt.Tooltip("mean_score:Q", title="Avg score", format=".2f"),
            ],
        )
    )
    return _payload(region, title, grouped.to_dict(orient="records"), to_vega_spec(chart))


def compute_timeline(df: pd.DataFrame, settings: DashboardSettings = DashboardSettings()) -> Payload:
    region, title = "timeline_chart", "Average Rating by Release Year"
    grouped = mean_score_by(df, "release_year")
    if grouped.empty:
        return placeholder(region, title)
    base = alt.Chart(grouped).encode(
        x=alt.X("release_year:Q", title="Release Year", axis=alt.Axis(format="d", tickMinStep=1)),
        y=alt.Y("mean_score:Q", title=SCORE_AXIS_TITLE),
    )
    area = base.mark_area(opacity=0.3)
    line = base.mark_line(point=True).encode(
        tooltip=[
            alt.Tooltip("release_year:Q", title="Year", format="d"),
            alt.Tooltip("mean_score:Q", title="Avg score", format=".2f"),
        ]
    )
    return _payload(region, title, grouped.to_dict(orient="records"), to_vega_spec(area + line))


def compute_type_comparison(df: pd.DataFrame, settings: DashboardSettings = DashboardSettings()) -> Payload:
    region, title = "type_comparison", "Movies vs Shows"
    grouped = mean_score_by(df, "type")
    if grouped.empty:
        return placeholder(region, title)
    chart = (
        alt.Chart(grouped)
        .mark_bar()
        .encode(
            x=alt.X("type:N", title="Type", axis=alt.Axis(labelAngle=0)),
            y=alt.Y("mean_score:Q", title=SCORE_AXIS_TITLE),
            color=alt.Color("type:N", legend=None),
            tooltip=[
                alt.Tooltip("type:N", title="Type"),
                alt.Tooltip("mean_score:Q", title="Avg score", format=".2f"),
            ],
        )
    )
    return _payload(region, title, grouped.to_dict(orient="records"), to_vega_spec(chart))


def compute_top_cards(df: pd.DataFrame, settings: DashboardSettings = DashboardSettings()) -> Payload:
    region, title = "top_cards", f"Top {settings.top_n} Titles"
    top = top_titles(df, n=settings.top_n)
    if top.empty:
        return placeholder(region, title)
    cards = []
    for rank, row in enumerate(top.to_dict(orient="records"), start=1):
        cards.append(
            {
                "rank": rank,
                "id": str(row.get("id", "")),
                "title": str(row.get("title", "")),
                "meta": card_meta_line(row),
                "description": truncate_description(row.get("description"), settings.description_limit),
                "detail": title_detail(row),
            }
        )
    return _payload(region, title, cards, None)


WIDGETS: Dict[str, WidgetFn] = {
    "rating_histogram": compute_rating_histogram,
    "category_chart": compute_category_chart,
    "timeline_chart": compute_timeline,
    "type_comparison": compute_type_comparison,
    "top_cards": compute_top_cards,
}


def render_all(df: pd.DataFrame, settings: DashboardSettings = DashboardSettings()) -> Dict[str, Payload]:
    return {region: fn(df, settings) for region, fn in WIDGETS.items()}
