from __future__ import annotations

import pandas as pd
import pytest

from catalog.errors import DashboardConfigError
from catalog.filters import (
    ALL,
    FilterControls,
    FilterState,
    apply_filters,
    build_filter_controls,
    format_filter_summary,
    normalize_filters,
    update_filter_state,
)


def _is_subsequence(subset: pd.DataFrame, full: pd.DataFrame) -> bool:
    positions = [full.index.get_loc(i) for i in subset.index]
    return positions == sorted(positions)


def test_all_all_min_year_returns_full_input(titles):
    controls = build_filter_controls(titles)
    out = apply_filters(titles, FilterState(ALL, ALL, controls.year_min))
    pd.testing.assert_frame_equal(out, titles)


def test_filter_output_is_ordered_subsequence(titles):
    for state in [
        FilterState("R", ALL, 1990),
        FilterState(ALL, "SHOW", 1990),
        FilterState("TV-MA", "SHOW", 2000),
        FilterState(ALL, ALL, 2012),
    ]:
        out = apply_filters(titles, state)
        assert set(out.index) <= set(titles.index)
        assert _is_subsequence(out, titles)


def test_raising_year_threshold_never_grows_result(titles):
    sizes = [len(apply_filters(titles, FilterState(ALL, ALL, year))) for year in range(1985, 2025)]
    assert sizes == sorted(sizes, reverse=True)


def test_year_threshold_is_inclusive(titles):
    out = apply_filters(titles, FilterState(ALL, ALL, 2015))
    assert out["release_year"].tolist() == [2015, 2020]


def test_unknown_category_returns_exactly_defaulted_records(titles):
    controls = build_filter_controls(titles)
    out = apply_filters(titles, FilterState("Unknown", ALL, controls.year_min))
    assert out["title"].tolist() == ["Charlie", "Foxtrot"]


def test_type_and_category_combine(titles):
    out = apply_filters(titles, FilterState("TV-MA", "SHOW", 1990))
    assert out["title"].tolist() == ["Bravo", "Golf"]
    assert apply_filters(titles, FilterState("R", "SHOW", 1990)).empty


def test_filter_on_empty_frame_is_empty(titles):
    out = apply_filters(titles.iloc[0:0], FilterState(ALL, ALL, 0))
    assert out.empty


def test_build_filter_controls(titles):
    controls = build_filter_controls(titles)
    assert controls.categories[0] == ALL
    assert set(controls.categories[1:]) == {"R", "TV-MA", "Unknown"}
    assert controls.types == [ALL, "MOVIE", "SHOW"]
    assert (controls.year_min, controls.year_max) == (1990, 2020)
    assert controls.default_state == FilterState(ALL, ALL, 1990)


def test_build_filter_controls_rejects_empty_dataset(titles):
    with pytest.raises(DashboardConfigError):
        build_filter_controls(titles.iloc[0:0])


def test_update_filter_state_returns_new_value():
    state = FilterState(ALL, ALL, 1990)
    updated = update_filter_state(state, "min_year", "2005")
    assert updated == FilterState(ALL, ALL, 2005)
    assert state.min_year == 1990
    assert update_filter_state(state, "category", "R").category == "R"
    assert update_filter_state(state, "title_type", "SHOW").title_type == "SHOW"
    with pytest.raises(ValueError):
        update_filter_state(state, "genre", "Drama")  # type: ignore[arg-type]


def test_normalize_filters_falls_back_and_clamps():
    controls = FilterControls(categories=[ALL, "R"], year_min=1990, year_max=2020)
    state = normalize_filters({"category": "G", "title_type": "CLIP", "min_year": "1800"}, controls)
    assert state == FilterState(ALL, ALL, 1990)
    state = normalize_filters({"category": "R", "title_type": "SHOW", "min_year": 2050}, controls)
    assert state == FilterState("R", "SHOW", 2020)
    assert normalize_filters({"min_year": "soon"}, controls).min_year == 1990


def test_format_filter_summary():
    controls = FilterControls(year_min=1990, year_max=2020)
    assert format_filter_summary(FilterState(ALL, ALL, 1990), controls) == [
        "Category: All",
        "Type: All",
        "Year: All",
    ]
    assert format_filter_summary(FilterState("R", "MOVIE", 2000))[2] == "Year: 2000+"


def test_update_filter_state_ignores_non_numeric_year():
    state = FilterState(ALL, ALL, 2000)
    assert update_filter_state(state, "min_year", None) is state
    assert update_filter_state(state, "min_year", "soon") is state
