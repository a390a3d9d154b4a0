# file: src/household_power/evaluation.py
"""
Household Power: Model Evaluation Metrics

MAE, RMSE and R² on the held-out rows.

Fail-loud, no masking: inputs of different length (or empty) raise, and an
R² with zero target variance is reported as NaN rather than a made-up value.
"""

import logging
import math
from dataclasses import asdict, dataclass
from typing import Dict, Iterable

import numpy as np
import pandas as pd

from .errors import DimensionMismatchError, UndefinedMetricError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricReport:
    """Per-model hold-out metrics"""
    model_name: str
    mae: float
    rmse: float
    r2: float
    n_rows: int

    @property
    def r2_defined(self) -> bool:
        return not math.isnan(self.r2)

    def as_dict(self) -> Dict:
        return asdict(self)


class RegressionMetrics:
    """Compute regression evaluation metrics"""

    @staticmethod
    def _check(y_true, y_pred):
        y_true = np.asarray(y_true, dtype=float).ravel()
        y_pred = np.asarray(y_pred, dtype=float).ravel()
        if len(y_true) != len(y_pred):
            raise DimensionMismatchError(
                f"Length mismatch: {len(y_pred)} predictions vs {len(y_true)} ground truth"
            )
        if len(y_true) == 0:
            raise DimensionMismatchError("Cannot evaluate empty predictions")
        return y_true, y_pred

    @staticmethod
    def mae(y_true, y_pred) -> float:
        """Mean Absolute Error: (1/N) * sum |pred - true|"""
        y_true, y_pred = RegressionMetrics._check(y_true, y_pred)
        return float(np.mean(np.abs(y_pred - y_true)))

    @staticmethod
    def rmse(y_true, y_pred) -> float:
        """Root Mean Squared Error: sqrt((1/N) * sum (pred - true)^2)"""
        y_true, y_pred = RegressionMetrics._check(y_true, y_pred)
        return float(np.sqrt(np.mean((y_pred - y_true) ** 2)))

    @staticmethod
    def r2(y_true, y_pred) -> float:
        """
        Coefficient of determination: 1 - SS_res / SS_tot

        Raises UndefinedMetricError when SS_tot == 0 (constant ground truth).
        """
        y_true, y_pred = RegressionMetrics._check(y_true, y_pred)
        ss_res = float(np.sum((y_true - y_pred) ** 2))
        # mean of a constant float array can round, leaving SS_tot tiny but non-zero
        if np.ptp(y_true) == 0.0:
            raise UndefinedMetricError("R² undefined: ground truth has zero variance")
        ss_tot = float(np.sum((y_true - np.mean(y_true)) ** 2))
        return 1.0 - ss_res / ss_tot


def evaluate_predictions(y_pred, y_true, model_name: str = "model") -> MetricReport:
    """
    Compute all metrics for one model.

    Args:
        y_pred: Predictions on the test rows
        y_true: Ground truth for the same rows, same order
        model_name: Label carried on the report

    Returns:
        MetricReport (r2 is NaN when undefined)
    """
    y_true, y_pred = RegressionMetrics._check(y_true, y_pred)

    try:
        r2 = RegressionMetrics.r2(y_true, y_pred)
    except UndefinedMetricError as e:
        logger.warning("[evaluate] %s: %s; reporting NaN", model_name, e)
        r2 = float("nan")

    report = MetricReport(
        model_name=model_name,
        mae=RegressionMetrics.mae(y_true, y_pred),
        rmse=RegressionMetrics.rmse(y_true, y_pred),
        r2=r2,
        n_rows=len(y_true),
    )
    logger.info(
        "[evaluate] %s: mae=%.4f rmse=%.4f r2=%.4f (n=%d)",
        model_name, report.mae, report.rmse, report.r2, report.n_rows,
    )
    return report


def build_leaderboard(reports: Iterable[MetricReport]) -> pd.DataFrame:
    """Rank models by RMSE (lower is better)"""
    rows = [r.as_dict() for r in reports]
    if not rows:
        return pd.DataFrame(columns=["model_name", "mae", "rmse", "r2", "n_rows", "rank"])

    leaderboard = pd.DataFrame(rows).sort_values("rmse").reset_index(drop=True)
    leaderboard["rank"] = leaderboard.index + 1
    return leaderboard
