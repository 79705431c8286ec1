# Helpers shared by the catalog tests.
# make_titles builds a cleaned frame from partial rows so each test states only the fields it cares about.

from __future__ import annotations

from typing import Dict, List

import pandas as pd

from catalog.data import clean_titles

BASE_ROW = {
    "id": "x",
    "title": "t",
    "type": "MOVIE",
    "description": "",
    "release_year": "2000",
    "age_certification": "R",
    "runtime": "90",
    "imdb_id": "",
    "imdb_score": "7",
    "imdb_votes": "0",
}


def make_titles(rows: List[Dict[str, object]]) -> pd.DataFrame:
    raw = pd.DataFrame([{**BASE_ROW, **{k: str(v) for k, v in r.items()}} for r in rows], dtype=str)
    df, _ = clean_titles(raw)
    return df
