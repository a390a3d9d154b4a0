# file: src/household_power/errors.py
"""
Pipeline exception taxonomy.

Every error also subclasses ValueError, so callers that already catch
ValueError around data-quality gates keep working.
"""


class PipelineError(ValueError):
    """Base class for fatal pipeline failures"""


class ParseError(PipelineError):
    """Source file cannot be interpreted (missing required columns, empty file)"""


class InsufficientDataError(PipelineError):
    """Too few rows to form non-empty train and test subsets"""


class TrainingError(PipelineError):
    """Model cannot be fit (bad target values, shape mismatch, unfitted predict)"""


class EmptyTrainingSetError(TrainingError, InsufficientDataError):
    """Training subset has no rows"""


class DimensionMismatchError(PipelineError):
    """Predictions and ground truth differ in length, or are empty"""


class UndefinedMetricError(PipelineError):
    """Metric has no defined value for the given inputs (e.g. R² with zero variance)"""
