# file: src/household_power/features.py
"""
Household Power: calendar feature helpers (pandas only).

Every feature is a function of the row's own timestamp. No lags, no
rolling windows, nothing that reads a neighbouring row.
"""

from __future__ import annotations

import logging
from typing import List

import pandas as pd

logger = logging.getLogger(__name__)

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

FEATURE_COLUMNS: List[str] = ["day", "month", "year", "hour", "weekday"]
CATEGORICAL_COLUMNS: List[str] = ["month", "weekday"]
NUMERIC_COLUMNS: List[str] = ["day", "year", "hour"]


def derive_calendar_features(df: pd.DataFrame, ds_col: str = "ds") -> pd.DataFrame:
    """
    Add day, month, year, hour, weekday from a datetime column.

    month and weekday are ordered categoricals (Jan..Dec, Mon..Sun) so
    plots and group-bys keep calendar order.
    """
    if ds_col not in df.columns:
        raise ValueError(f"Missing datetime column: {ds_col}")

    features = df.copy()
    ds = pd.to_datetime(features[ds_col], errors="raise")

    features["day"] = ds.dt.day.astype("int64")
    features["month"] = pd.Categorical.from_codes(
        (ds.dt.month - 1).to_numpy(), categories=MONTHS, ordered=True
    )
    features["year"] = ds.dt.year.astype("int64")
    features["hour"] = ds.dt.hour.astype("int64")
    features["weekday"] = pd.Categorical.from_codes(
        ds.dt.dayofweek.to_numpy(), categories=WEEKDAYS, ordered=True
    )
    return features


def encode_features(featurized: pd.DataFrame) -> pd.DataFrame:
    """
    Fixed numeric design matrix shared by every model.

    month -> 0..11 (Jan=0), weekday -> 0..6 (Mon=0); day, year, hour as-is.
    """
    missing = [c for c in FEATURE_COLUMNS if c not in featurized.columns]
    if missing:
        raise ValueError(f"Missing feature columns: {missing}")

    X = pd.DataFrame(index=featurized.index)
    X["day"] = featurized["day"].astype("int64")
    X["month"] = _category_codes(featurized["month"], MONTHS)
    X["year"] = featurized["year"].astype("int64")
    X["hour"] = featurized["hour"].astype("int64")
    X["weekday"] = _category_codes(featurized["weekday"], WEEKDAYS)
    return X[FEATURE_COLUMNS]


def _category_codes(col: pd.Series, categories: List[str]) -> pd.Series:
    codes = pd.Categorical(col, categories=categories, ordered=True).codes
    if (codes < 0).any():
        bad = sorted(set(col[codes < 0].astype(str)))
        raise ValueError(f"Unknown categories {bad}; expected {categories}")
    return pd.Series(codes, index=col.index).astype("int64")
