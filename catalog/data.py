from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from catalog.errors import DatasetLoadError


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
DATA_PATH = DATA_DIR / "netflix.csv"

TITLE_COLUMNS = [
    "id",
    "title",
    "type",
    "description",
    "release_year",
    "age_certification",
    "runtime",
    "imdb_id",
    "imdb_score",
    "imdb_votes",
]
NUMERIC_COLUMNS = ["release_year", "runtime", "imdb_score", "imdb_votes"]
TEXT_COLUMNS = ["id", "title", "type", "description", "imdb_id"]
REQUIRED_NUMERIC = ["imdb_score", "release_year"]

UNKNOWN_CATEGORY = "Unknown"
INT64_LIMIT = float(2**63)


@dataclass(frozen=True)
class TitleRecord:
    id: str
    title: str
    type: str
    release_year: int
    imdb_score: float
    age_certification: str = UNKNOWN_CATEGORY
    description: str = ""
    runtime: Optional[float] = None
    imdb_id: str = ""
    imdb_votes: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "TitleRecord":
        """Build a record from a cleaned row; required numerics must already be valid."""
        score = _finite_or_none(row.get("imdb_score"))
        year = _finite_or_none(row.get("release_year"))
        if score is None or year is None:
            raise ValueError(f"title {row.get('id')!r} has no valid score/year")
        runtime = _finite_or_none(row.get("runtime"))
        votes = _finite_or_none(row.get("imdb_votes"))
        category = str(row.get("age_certification") or "").strip() or UNKNOWN_CATEGORY
        return cls(
            id=str(row.get("id") or ""),
            title=str(row.get("title") or ""),
            type=str(row.get("type") or ""),
            release_year=int(year),
            imdb_score=float(score),
            age_certification=category,
            description=str(row.get("description") or ""),
            runtime=runtime,
            imdb_id=str(row.get("imdb_id") or ""),
            imdb_votes=int(votes) if votes is not None else 0,
        )


def _finite_or_none(value: object) -> Optional[float]:
    if value is None:
        return None
    try:
        out = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if math.isnan(out) or math.isinf(out):
        return None
    return out


def file_signature(path: Path) -> Tuple[str, float]:
    return (str(path), path.stat().st_mtime)


def numericize(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def coerce_str_safe(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            series = df[col].astype("string").str.strip()
            series = series.replace({"nan": pd.NA, "None": pd.NA, "": pd.NA})
            df[col] = series
    return df


def _castable(series: pd.Series) -> np.ndarray:
    """Finite values that survive a cast to int64."""
    values = series.astype(float).to_numpy()
    with np.errstate(invalid="ignore"):
        return np.isfinite(values) & (np.abs(values) < INT64_LIMIT)


def ensure_title_columns(df: pd.DataFrame) -> pd.DataFrame:
    for col in TITLE_COLUMNS:
        if col not in df.columns:
            df[col] = pd.NA
    return df


def clean_titles(raw: pd.DataFrame) -> Tuple[pd.DataFrame, int]:
    """Coerce types and drop rows whose score or release year is not a number.

    Returns the cleaned frame (file order kept, index reset) and the number of
    dropped rows.
    """
    df = ensure_title_columns(raw.copy())
    df = numericize(df, NUMERIC_COLUMNS)
    df = coerce_str_safe(df, TEXT_COLUMNS + ["age_certification"])

    valid = np.ones(len(df), dtype=bool)
    for col in REQUIRED_NUMERIC:
        valid &= _castable(df[col])
    dropped = int((~valid).sum())
    df = df[valid].copy()

    df["release_year"] = df["release_year"].astype(int)
    df["imdb_score"] = df["imdb_score"].astype(float)
    votes = df["imdb_votes"].astype(float)
    df["imdb_votes"] = votes.where(_castable(votes) & (votes >= 0).to_numpy(), 0).astype("int64")
    df["runtime"] = df["runtime"].astype(float)
    df["age_certification"] = df["age_certification"].fillna(UNKNOWN_CATEGORY).astype(object)
    for col in TEXT_COLUMNS:
        df[col] = df[col].fillna("").astype(object)

    df = df[TITLE_COLUMNS + [c for c in df.columns if c not in TITLE_COLUMNS]]
    return df.reset_index(drop=True), dropped


def load_titles(path: Path | str = DATA_PATH) -> pd.DataFrame:
    """Read and clean the titles file; the dropped-row count lands in ``df.attrs``."""
    path = Path(path)
    try:
        raw = pd.read_csv(path, dtype=str)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise DatasetLoadError(f"could not load titles from {path}: {exc}") from exc
    df, dropped = clean_titles(raw)
    df.attrs["dropped_rows"] = dropped
    logger.info("Loaded %d titles from %s (%d rows dropped)", len(df), path, dropped)
    return df


@lru_cache(maxsize=4)
def _load_dashboard_data_cached(files_sig: Tuple[str, float]) -> Dict[str, object]:
    path = Path(files_sig[0])
    titles = load_titles(path)
    try:
        records = to_records(titles)
    except ValueError as exc:
        raise DatasetLoadError(f"invalid title record in {path}: {exc}") from exc
    return {
        "path": path,
        "titles": titles,
        "records": records,
        "dropped_rows": titles.attrs.get("dropped_rows", 0),
    }


def load_dashboard_data(path: Path | str = DATA_PATH) -> Dict[str, object]:
    path = Path(path)
    try:
        sig = file_signature(path)
    except OSError as exc:
        raise DatasetLoadError(f"could not load titles from {path}: {exc}") from exc
    return _load_dashboard_data_cached(sig)


def to_records(df: pd.DataFrame) -> List[TitleRecord]:
    return [TitleRecord.from_row(row) for row in df.to_dict(orient="records")]
