"""
Shared test configuration.
Fixtures build small title frames and CSV files so tests never touch data/netflix.csv.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd
import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from catalog.data import clean_titles  # noqa: E402

TITLES_CSV = """id,title,type,description,release_year,age_certification,runtime,imdb_id,imdb_score,imdb_votes
tm1,Alpha,MOVIE,First movie,1990,R,100,tt1,7.5,1000
ts2,Bravo,SHOW,First show,1995,TV-MA,45,tt2,8.5,200
tm3,Charlie,MOVIE,No rating category,2000,,90,tt3,6.0,
tm4,Delta,MOVIE,Bad year,N/A,PG,80,tt4,9.9,5000
ts5,Echo,SHOW,Bad score,2005,TV-14,30,tt5,,10
tm6,Foxtrot,MOVIE,Second unknown,2010,,120,tt6,7.0,300
ts7,Golf,SHOW,Second show,2015,TV-MA,50,tt7,9.0,50
tm1,Alpha,MOVIE,Duplicate id,2020,R,100,tt1,5.5,40
"""


@pytest.fixture
def titles_csv(tmp_path: Path) -> Path:
    path = tmp_path / "titles.csv"
    path.write_text(TITLES_CSV, encoding="utf-8")
    return path


@pytest.fixture
def titles(titles_csv: Path) -> pd.DataFrame:
    df, _ = clean_titles(pd.read_csv(titles_csv, dtype=str))
    return df

