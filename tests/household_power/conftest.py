"""Shared fixtures: synthetic household power files and frames."""

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

HEADER = (
    "Date;Time;Global_active_power;Global_reactive_power;Voltage;"
    "Global_intensity;Sub_metering_1;Sub_metering_2;Sub_metering_3"
)


def _format_row(date: str, time: str, power: str) -> str:
    return f"{date};{time};{power};0.418;234.840;18.400;0.000;1.000;17.000"


@pytest.fixture
def write_power_file(tmp_path):
    """Write (date, time, power) tuples as a UCI-style semicolon file."""

    def _write(rows, name="household_power_consumption.txt") -> Path:
        path = tmp_path / name
        lines = [HEADER] + [_format_row(*row) for row in rows]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def hourly_rows():
    """30 days of hourly readings with a daily + weekday pattern."""
    ds = pd.date_range("2007-01-01", periods=30 * 24, freq="h")
    rng = np.random.default_rng(7)
    hour = ds.hour.to_numpy()
    weekend = ds.dayofweek.to_numpy() >= 5
    y = np.clip(
        1.0
        + 0.8 * np.sin(2 * np.pi * hour / 24)
        + 0.3 * weekend
        + rng.normal(0, 0.05, len(ds)),
        0.05,
        None,
    )
    return [
        (ts.strftime("%d/%m/%Y"), ts.strftime("%H:%M:%S"), f"{val:.3f}")
        for ts, val in zip(ds, y)
    ]


@pytest.fixture
def observations():
    """Cleaned (ds, y) frame as produced by the loader."""
    ds = pd.date_range("2006-12-16 17:24:00", periods=200, freq="37min")
    y = 1.0 + 0.5 * np.cos(2 * np.pi * ds.hour.to_numpy() / 24)
    return pd.DataFrame({"ds": ds, "y": y})
