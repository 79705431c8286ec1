from __future__ import annotations

from typing import Any, Dict, Literal

import numpy as np
import pandas as pd

GroupKey = Literal["age_certification", "type", "release_year"]

ELLIPSIS = "..."


def valid_scores(df: pd.DataFrame) -> np.ndarray:
    if df.empty or "imdb_score" not in df.columns:
        return np.array([], dtype=float)
    scores = pd.to_numeric(df["imdb_score"], errors="coerce").to_numpy(dtype=float)
    return scores[np.isfinite(scores)]


def rating_histogram_bins(df: pd.DataFrame, bins: int = 15) -> pd.DataFrame:
    """Equal-width bins over [min, max] of the valid scores.

    Every valid score falls in exactly one bin (the last bin is closed), so the
    counts sum to the number of valid scores.
    """
    scores = valid_scores(df)
    if scores.size == 0:
        return pd.DataFrame(columns=["lower", "upper", "count"])
    counts, edges = np.histogram(scores, bins=bins, range=(scores.min(), scores.max()))
    return pd.DataFrame({"lower": edges[:-1], "upper": edges[1:], "count": counts.astype(int)})


def mean_score_by(df: pd.DataFrame, key: GroupKey) -> pd.DataFrame:
    if df.empty:
        return pd.DataFrame(columns=[key, "mean_score", "count"])
    grouped = (
        df.groupby(key)["imdb_score"]
        .agg(mean_score="mean", count="size")
        .reset_index()
    )
    if key == "age_certification":
        return grouped.sort_values("mean_score", kind="mergesort").reset_index(drop=True)
    return grouped.sort_values(key, kind="mergesort").reset_index(drop=True)


def top_titles(df: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    """Highest scores first; ties broken by vote count, missing votes count as 0."""
    if df.empty:
        return df.copy()
    ranked = df.assign(_votes=pd.to_numeric(df["imdb_votes"], errors="coerce").fillna(0))
    ranked = ranked.sort_values(["imdb_score", "_votes"], ascending=False, kind="mergesort")
    return ranked.drop(columns=["_votes"]).head(n)


def truncate_description(text: object, limit: int = 140) -> str:
    if text is None or (isinstance(text, float) and np.isnan(text)):
        return ""
    s = str(text)
    if len(s) <= limit:
        return s
    return s[:limit] + ELLIPSIS


def format_number(value: object) -> str:
    """Render a score the way it reads in the file: 8.0 -> "8", 7.25 -> "7.25"."""
    try:
        out = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return "N/A"
    if np.isnan(out):
        return "N/A"
    if out.is_integer():
        return str(int(out))
    return repr(out)


def vote_count(value: object) -> int:
    try:
        out = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0
    return 0 if np.isnan(out) else int(out)


def card_meta_line(row: Dict[str, Any]) -> str:
    return (
        f"{row.get('type', '')} • {int(row['release_year'])} • "
        f"IMDb {format_number(row['imdb_score'])} ({vote_count(row.get('imdb_votes'))} votes)"
    )


def title_detail(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "title": str(row.get("title", "")),
        "type": str(row.get("type", "")),
        "release_year": int(row["release_year"]),
        "imdb_score": float(row["imdb_score"]),
        "imdb_votes": vote_count(row.get("imdb_votes")),
        "description": str(row.get("description", "")),
    }
