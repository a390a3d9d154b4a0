from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pandas as pd

from .config import PipelineConfig
from .eda import summarize_load
from .errors import InsufficientDataError
from .evaluation import MetricReport, build_leaderboard, evaluate_predictions
from .features import derive_calendar_features, encode_features
from .io_utils import atomic_write_json
from .loader import LoadResult, load_observations
from .models import ModelFactory, RegressionModel
from .splitting import TrainTestSplit, apply_split, random_split

logger = logging.getLogger(__name__)


def _utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class PipelineResult:
    load_summary: Dict
    split: TrainTestSplit
    reports: Dict[str, MetricReport]
    leaderboard: pd.DataFrame
    models: Dict[str, RegressionModel] = field(default_factory=dict, repr=False)

    def as_dict(self) -> Dict:
        out = dict(self.load_summary)
        out.update({
            "seed": self.split.seed,
            "train_rows": self.split.train_size,
            "test_rows": self.split.test_size,
        })
        return out


def load_data(config: PipelineConfig, path: Optional[Union[str, Path]] = None) -> LoadResult:
    source = Path(path) if path is not None else config.raw_path()
    logger.info("[load] source=%s nrows=%s", source, config.nrows)
    result = load_observations(source, sep=config.sep, na_token=config.na_token, nrows=config.nrows)

    if result.n_rows < 2:
        raise InsufficientDataError(
            f"Only {result.n_rows} usable rows after cleaning {result.raw_rows} raw rows"
        )
    return result


def featurize(observations: pd.DataFrame) -> pd.DataFrame:
    featurized = derive_calendar_features(observations)
    logger.info("[features] derived %d rows", len(featurized))
    return featurized


def split_data(
    featurized: pd.DataFrame,
    config: PipelineConfig,
) -> Tuple[TrainTestSplit, pd.DataFrame, pd.DataFrame]:
    split = random_split(len(featurized), seed=config.seed, train_fraction=config.train_fraction)
    train_df, test_df = apply_split(featurized, split)
    return split, train_df, test_df


def train_models(train_df: pd.DataFrame, config: PipelineConfig) -> Dict[str, RegressionModel]:
    X_train = encode_features(train_df)
    y_train = train_df["y"].to_numpy()

    fitted = {}
    for name in config.models:
        model = ModelFactory.create(name, config)
        fitted[name] = model.fit(X_train, y_train)
    return fitted


def evaluate_models(
    models: Dict[str, RegressionModel],
    test_df: pd.DataFrame,
) -> Dict[str, MetricReport]:
    X_test = encode_features(test_df)
    y_test = test_df["y"].to_numpy()

    return {
        name: evaluate_predictions(model.predict(X_test), y_test, model_name=name)
        for name, model in models.items()
    }


def run_full_pipeline(
    config: PipelineConfig,
    path: Optional[Union[str, Path]] = None,
) -> PipelineResult:
    """
    Load -> features -> split -> train -> evaluate.

    Args:
        config: Pipeline settings (seed, split fraction, hyperparameters)
        path: Source file; defaults to config.raw_path()

    Returns:
        PipelineResult with one MetricReport per configured model
    """
    loaded = load_data(config, path)
    featurized = featurize(loaded.observations)
    split, train_df, test_df = split_data(featurized, config)
    models = train_models(train_df, config)
    reports = evaluate_models(models, test_df)

    return PipelineResult(
        load_summary=summarize_load(loaded),
        split=split,
        reports=reports,
        leaderboard=build_leaderboard(reports.values()),
        models=models,
    )


def save_metrics(result: PipelineResult, config: PipelineConfig) -> str:
    """Write metrics JSON (no model artifacts)"""
    path = config.metrics_path()
    payload: Dict = {
        "written_at": _utc_iso(),
        "summary": result.as_dict(),
        "split": result.split.info,
        "metrics": {name: r.as_dict() for name, r in result.reports.items()},
        "leaderboard": _leaderboard_records(result.leaderboard),
    }
    atomic_write_json(payload, path)
    logger.info("[metrics] wrote %s", path)
    return str(path)


def _leaderboard_records(leaderboard: pd.DataFrame) -> List[Dict]:
    records = leaderboard.to_dict(orient="records")
    return [
        {k: (v.item() if hasattr(v, "item") else v) for k, v in rec.items()}
        for rec in records
    ]
