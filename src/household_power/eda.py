# file: src/household_power/eda.py
"""
Household Power: exploratory summaries.

Produces the tables a plotting layer would draw (correlation heatmap,
hourly / weekday / monthly profiles). No rendering happens here.
"""

from __future__ import annotations

import logging
from typing import Dict

import pandas as pd

from .features import FEATURE_COLUMNS, encode_features
from .loader import LoadResult

logger = logging.getLogger(__name__)


def summarize_load(result: LoadResult) -> Dict:
    """Counts and target range for the console report"""
    obs = result.observations
    summary = {
        "raw_rows": result.raw_rows,
        "clean_rows": result.n_rows,
        "missing_values": result.missing_values,
        "dropped_rows": result.dropped_rows,
    }
    if obs.empty:
        return summary

    summary.update({
        "ds_min": str(obs["ds"].min()),
        "ds_max": str(obs["ds"].max()),
        "y_min": float(obs["y"].min()),
        "y_mean": float(obs["y"].mean()),
        "y_max": float(obs["y"].max()),
    })
    return summary


def correlation_matrix(featurized: pd.DataFrame, y_col: str = "y") -> pd.DataFrame:
    """
    Pearson correlation between encoded calendar features and the target.

    Constant columns (e.g. a single year) produce NaN rows/cols, as pandas does.
    """
    if y_col not in featurized.columns:
        raise ValueError(f"Missing value column: {y_col}")

    X = encode_features(featurized)
    X[y_col] = featurized[y_col].astype(float)
    return X[FEATURE_COLUMNS + [y_col]].corr(method="pearson")


def profile_by(featurized: pd.DataFrame, key: str, y_col: str = "y") -> pd.DataFrame:
    """Mean / median / count of the target per calendar bucket, in calendar order"""
    if key not in FEATURE_COLUMNS:
        raise ValueError(f"Unknown calendar feature: {key}. Expected one of {FEATURE_COLUMNS}")
    if y_col not in featurized.columns:
        raise ValueError(f"Missing value column: {y_col}")

    profile = (
        featurized.groupby(key, observed=True)[y_col]
        .agg(mean="mean", median="median", count="count")
        .reset_index()
    )
    return profile
