from __future__ import annotations

from typing import Any, Dict, Union

import altair as alt

alt.data_transformers.disable_max_rows()

AnyChart = Union[alt.Chart, alt.LayerChart]

SCORE_AXIS_TITLE = "Mean IMDb Score"


def to_vega_spec(chart: AnyChart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()
