from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Literal, Optional

import pandas as pd

from catalog.errors import DashboardConfigError

ALL = "All"
TITLE_TYPES = ["MOVIE", "SHOW"]

Control = Literal["category", "title_type", "min_year"]


@dataclass(frozen=True)
class DashboardSettings:
    histogram_bins: int = 15
    top_n: int = 10
    description_limit: int = 140


@dataclass(frozen=True)
class FilterState:
    category: str = ALL
    title_type: str = ALL
    min_year: int = 0


@dataclass(frozen=True)
class FilterControls:
    categories: List[str] = field(default_factory=lambda: [ALL])
    types: List[str] = field(default_factory=lambda: [ALL] + TITLE_TYPES)
    year_min: int = 0
    year_max: int = 0

    @property
    def default_state(self) -> FilterState:
        return FilterState(category=ALL, title_type=ALL, min_year=self.year_min)


def build_filter_controls(df: pd.DataFrame) -> FilterControls:
    """Derive selector options and the year range from the full dataset."""
    if df.empty:
        raise DashboardConfigError("cannot derive filter controls from an empty dataset")
    categories = sorted({str(c) for c in df["age_certification"].tolist()})
    years = df["release_year"]
    return FilterControls(
        categories=[ALL] + categories,
        year_min=int(years.min()),
        year_max=int(years.max()),
    )


def normalize_filters(raw: dict, controls: FilterControls) -> FilterState:
    category = str(raw.get("category") or ALL)
    if category not in controls.categories:
        category = ALL

    title_type = str(raw.get("title_type") or ALL)
    if title_type not in controls.types:
        title_type = ALL

    min_year = raw.get("min_year", controls.year_min)
    try:
        min_year = int(min_year)
    except (TypeError, ValueError):
        min_year = controls.year_min
    min_year = max(controls.year_min, min(controls.year_max, min_year))
    return FilterState(category=category, title_type=title_type, min_year=min_year)


def update_filter_state(state: FilterState, control: Control, value: object) -> FilterState:
    if control == "min_year":
        try:
            return replace(state, min_year=int(value))  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return state
    if control == "category":
        return replace(state, category=str(value))
    if control == "title_type":
        return replace(state, title_type=str(value))
    raise ValueError(f"unknown control: {control!r}")


def apply_filters(df: pd.DataFrame, state: FilterState) -> pd.DataFrame:
    """Rows matching every active predicate, in input order."""
    if df.empty:
        return df.copy()
    mask = df["release_year"] >= state.min_year
    if state.category != ALL:
        mask &= df["age_certification"] == state.category
    if state.title_type != ALL:
        mask &= df["type"] == state.title_type
    return df[mask].copy()


def format_filter_summary(state: FilterState, controls: Optional[FilterControls] = None) -> List[str]:
    year_chip = f"Year: {state.min_year}+"
    if controls is not None and state.min_year <= controls.year_min:
        year_chip = "Year: All"
    return [
        f"Category: {state.category}",
        f"Type: {state.title_type}",
        year_chip,
    ]
