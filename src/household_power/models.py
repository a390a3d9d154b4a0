# file: src/household_power/models.py
"""
Household Power: Model Implementations

Two regressors over the same encoded calendar features:
1. Decision tree (CART, rpart-style complexity controls)
2. Feed-forward neural network (one hidden layer)
"""

import logging
import warnings
from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np
import pandas as pd
from sklearn.compose import ColumnTransformer, TransformedTargetRegressor
from sklearn.exceptions import ConvergenceWarning
from sklearn.neural_network import MLPRegressor
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder, StandardScaler
from sklearn.tree import DecisionTreeRegressor

from .config import NNParams, PipelineConfig, TreeParams
from .errors import EmptyTrainingSetError, TrainingError
from .features import FEATURE_COLUMNS, MONTHS, NUMERIC_COLUMNS, WEEKDAYS

logger = logging.getLogger(__name__)


class RegressionModel(ABC):
    """Base class for active-power regressors"""

    def __init__(self):
        self.model = None

    @abstractmethod
    def _build(self, y: np.ndarray):
        """Return an unfitted sklearn estimator for this training target"""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Model name"""
        pass

    @property
    def is_fitted(self) -> bool:
        return self.model is not None

    def fit(self, X: pd.DataFrame, y) -> "RegressionModel":
        """Fit on encoded features (see features.encode_features)"""
        X, y = _validate_training_data(X, y, self.get_name())
        estimator = self._build(y)
        estimator.fit(X, y)
        self.model = estimator
        logger.info("[train] %s fit on %d rows", self.get_name(), len(y))
        return self

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        """Predict active power (kW) for encoded features"""
        if self.model is None:
            raise TrainingError(f"{self.get_name()} must be fit before predict")
        X = _select_features(X)
        return np.asarray(self.model.predict(X), dtype=float).ravel()


class DecisionTreeModel(RegressionModel):
    """
    Regression tree with rpart semantics mapped onto sklearn.

    cp: a split must reduce total SSE by at least cp * root SSE. sklearn's
    min_impurity_decrease is the weighted MSE decrease, i.e. delta_SSE / N,
    so the equivalent threshold is cp * var(y_train).
    """

    def __init__(self, params: Optional[TreeParams] = None, seed: int = 0):
        super().__init__()
        self.params = params or TreeParams()
        self.seed = seed

    def _build(self, y: np.ndarray) -> DecisionTreeRegressor:
        return DecisionTreeRegressor(
            criterion="squared_error",
            min_samples_split=max(2, int(self.params.minsplit)),
            min_samples_leaf=self.params.min_samples_leaf(),
            min_impurity_decrease=self.params.cp * float(np.var(y)),
            max_depth=self.params.max_depth,
            random_state=self.seed,
        )

    @property
    def n_leaves(self) -> int:
        if self.model is None:
            return 0
        return int(self.model.get_n_leaves())

    def get_name(self) -> str:
        return "decision_tree"


class NeuralNetModel(RegressionModel):
    """
    Single hidden layer MLP.

    month/weekday are one-hot encoded over the fixed category codes,
    day/year/hour standardized. With scale_target the target is
    standardized for training and predictions are mapped back to kW.
    """

    def __init__(self, params: Optional[NNParams] = None, seed: int = 0):
        super().__init__()
        self.params = params or NNParams()
        self.seed = seed

    def _build(self, y: np.ndarray):
        preprocess = ColumnTransformer(
            transformers=[
                (
                    "calendar",
                    OneHotEncoder(
                        categories=[list(range(len(MONTHS))), list(range(len(WEEKDAYS)))],
                        handle_unknown="ignore",
                        sparse_output=False,
                    ),
                    ["month", "weekday"],
                ),
                ("numeric", StandardScaler(), NUMERIC_COLUMNS),
            ]
        )
        network = Pipeline(
            steps=[
                ("preprocess", preprocess),
                (
                    "mlp",
                    MLPRegressor(
                        hidden_layer_sizes=(self.params.hidden_size,),
                        max_iter=self.params.max_iter,
                        random_state=self.seed,
                    ),
                ),
            ]
        )
        if not self.params.scale_target:
            return network
        return TransformedTargetRegressor(regressor=network, transformer=StandardScaler())

    def fit(self, X: pd.DataFrame, y) -> "NeuralNetModel":
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", ConvergenceWarning)
            super().fit(X, y)

        for w in caught:
            if issubclass(w.category, ConvergenceWarning):
                logger.warning(
                    "[train] %s did not converge in %d iterations",
                    self.get_name(), self.params.max_iter,
                )
            else:
                warnings.warn(w.message, w.category)
        return self

    def get_name(self) -> str:
        return "neural_net"


def _select_features(X: pd.DataFrame) -> pd.DataFrame:
    missing = [c for c in FEATURE_COLUMNS if c not in X.columns]
    if missing:
        raise TrainingError(f"Missing feature columns: {missing}")
    return X[FEATURE_COLUMNS]


def _validate_training_data(X: pd.DataFrame, y, name: str):
    X = _select_features(X)
    y = np.asarray(y, dtype=float).ravel()

    if len(X) == 0 or len(y) == 0:
        raise EmptyTrainingSetError(f"{name}: training subset is empty")

    if len(X) != len(y):
        raise TrainingError(f"{name}: {len(X)} feature rows vs {len(y)} targets")

    n_bad = int((~np.isfinite(y)).sum())
    if n_bad:
        raise TrainingError(f"{name}: {n_bad} non-finite target values")

    return X, y


class ModelFactory:
    """Factory for creating model instances from a PipelineConfig"""

    _models = {
        "decision_tree": DecisionTreeModel,
        "neural_net": NeuralNetModel,
    }

    @classmethod
    def create(cls, model_name: str, config: Optional[PipelineConfig] = None) -> RegressionModel:
        """Create model by name"""
        if model_name not in cls._models:
            raise ValueError(f"Unknown model: {model_name}. Available: {cls.list_models()}")

        config = config or PipelineConfig()
        if model_name == "decision_tree":
            return DecisionTreeModel(params=config.tree, seed=config.seed)
        return NeuralNetModel(params=config.nn, seed=config.seed)

    @classmethod
    def list_models(cls) -> List[str]:
        """List available models"""
        return list(cls._models.keys())
