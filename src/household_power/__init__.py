"""
Household power consumption: calendar-feature regression pipeline.

Modules:
- config: pipeline configuration, hyperparameters and paths
- errors: pipeline exception taxonomy
- ingest: UCI archive download + extraction
- loader: raw semicolon file -> cleaned observations (ds, y)
- features: calendar feature derivation + fixed encoding
- splitting: seeded 80/20 train/test partition
- models: decision tree + neural network regressors
- evaluation: MAE / RMSE / R² reports and leaderboard
- eda: summaries, correlations and profiles for plotting consumers
- tasks: end-to-end orchestration
"""

from .config import NNParams, PipelineConfig, TreeParams, load_config
from .errors import (DimensionMismatchError, EmptyTrainingSetError,
                     InsufficientDataError, ParseError, PipelineError,
                     TrainingError, UndefinedMetricError)
from .evaluation import MetricReport, RegressionMetrics, evaluate_predictions
from .features import derive_calendar_features, encode_features
from .loader import LoadResult, load_observations
from .models import DecisionTreeModel, ModelFactory, NeuralNetModel
from .splitting import TrainTestSplit, apply_split, random_split
from .tasks import PipelineResult, run_full_pipeline

__all__ = [
    # Config
    "PipelineConfig",
    "TreeParams",
    "NNParams",
    "load_config",
    # Errors
    "PipelineError",
    "ParseError",
    "InsufficientDataError",
    "TrainingError",
    "EmptyTrainingSetError",
    "DimensionMismatchError",
    "UndefinedMetricError",
    # Loading + features
    "LoadResult",
    "load_observations",
    "derive_calendar_features",
    "encode_features",
    # Splitting
    "TrainTestSplit",
    "random_split",
    "apply_split",
    # Models
    "DecisionTreeModel",
    "NeuralNetModel",
    "ModelFactory",
    # Evaluation
    "MetricReport",
    "RegressionMetrics",
    "evaluate_predictions",
    # Orchestration
    "PipelineResult",
    "run_full_pipeline",
]
