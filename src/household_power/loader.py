# file: src/household_power/loader.py
"""
Household Power: Load + Clean Observations

Raw file -> canonical columns:
- ds: combined Date + Time (timezone-naive, as recorded)
- y: Global_active_power in kW

Row-level parse failures become missing values and the row is dropped.
Lines with the wrong number of fields are skipped and logged.
Only a file that lacks the required columns is fatal.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from .errors import ParseError

logger = logging.getLogger(__name__)

DATE_COL = "Date"
TIME_COL = "Time"
TARGET_COL = "Global_active_power"
REQUIRED_COLUMNS = (DATE_COL, TIME_COL, TARGET_COL)

TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"


@dataclass(frozen=True)
class LoadResult:
    """Cleaned observations plus the counts reported to the console"""
    observations: pd.DataFrame
    raw_rows: int
    missing_values: int
    dropped_rows: int

    @property
    def n_rows(self) -> int:
        return len(self.observations)


def read_raw(
    path: Union[str, Path],
    sep: str = ";",
    na_token: str = "?",
    nrows: Optional[int] = None,
) -> pd.DataFrame:
    """
    Read the delimited source file with every column as text.

    Parsing is deferred to clean_observations so bad cells are counted,
    not silently coerced by read_csv's type inference.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")

    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", pd.errors.ParserWarning)
            df = pd.read_csv(
                path,
                sep=sep,
                na_values=[na_token, ""],
                keep_default_na=False,
                dtype=str,
                nrows=nrows,
                on_bad_lines="warn",
            )
    except pd.errors.EmptyDataError as e:
        raise ParseError(f"Source file is empty: {path}") from e
    except pd.errors.ParserError as e:
        raise ParseError(f"Cannot tokenize {path}: {e}") from e

    # Rows with the wrong field count are skipped by read_csv and reported here
    bad_lines = 0
    for w in caught:
        if issubclass(w.category, pd.errors.ParserWarning):
            bad_lines += max(1, str(w.message).count("Skipping line"))
        else:
            warnings.warn(w.message, w.category)
    if bad_lines:
        logger.warning("[load] skipped %d malformed lines in %s", bad_lines, path)

    df.columns = [str(c).strip() for c in df.columns]
    logger.info("[load] read %d raw rows from %s", len(df), path)
    return df


def parse_timestamps(date: pd.Series, time: pd.Series) -> pd.Series:
    """Combine DD/MM/YYYY and HH:MM:SS strings; unparseable -> NaT"""
    combined = date.str.strip() + " " + time.str.strip()
    return pd.to_datetime(combined, format=TIMESTAMP_FORMAT, errors="coerce")


def clean_observations(raw: pd.DataFrame) -> LoadResult:
    """
    Select (ds, y), count missing cells, drop incomplete rows.

    Args:
        raw: DataFrame from read_raw (text columns, "?" already NaN)

    Returns:
        LoadResult with observations in source order
    """
    missing_cols = [c for c in REQUIRED_COLUMNS if c not in raw.columns]
    if missing_cols:
        raise ParseError(
            f"Missing required columns: {missing_cols}. Got {raw.columns.tolist()}"
        )

    ds = parse_timestamps(raw[DATE_COL], raw[TIME_COL])
    y = pd.to_numeric(raw[TARGET_COL].str.strip(), errors="coerce")

    df = pd.DataFrame({"ds": ds, "y": y.astype(float)})

    # Unparseable text shows up as extra NaN beyond the "?" cells
    n_bad_ds = int((ds.isna() & raw[DATE_COL].notna() & raw[TIME_COL].notna()).sum())
    n_bad_y = int((y.isna() & raw[TARGET_COL].notna()).sum())
    if n_bad_ds or n_bad_y:
        logger.warning(
            "[load] unparseable cells: ds=%d y=%d (rows dropped)", n_bad_ds, n_bad_y
        )

    missing_values = int(df.isna().sum().sum())
    observations = df.dropna(subset=["ds", "y"]).reset_index(drop=True)
    dropped = len(df) - len(observations)

    logger.info(
        "[load] clean rows=%d missing_values=%d dropped=%d",
        len(observations), missing_values, dropped,
    )

    return LoadResult(
        observations=observations,
        raw_rows=len(raw),
        missing_values=missing_values,
        dropped_rows=dropped,
    )


def load_observations(
    path: Union[str, Path],
    sep: str = ";",
    na_token: str = "?",
    nrows: Optional[int] = None,
) -> LoadResult:
    """Read + clean in one call"""
    raw = read_raw(path, sep=sep, na_token=na_token, nrows=nrows)
    return clean_observations(raw)
