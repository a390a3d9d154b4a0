# file: src/household_power/config.py
"""
Household Power: Pipeline Configuration

Hyperparameters are pinned here instead of relying on library defaults,
so a run is reproducible from the config alone.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv


@dataclass(frozen=True)
class TreeParams:
    """CART controls, rpart-style"""
    cp: float = 0.01
    minsplit: int = 20
    minbucket: Optional[int] = None  # defaults to round(minsplit / 3)
    max_depth: int = 30

    def min_samples_leaf(self) -> int:
        if self.minbucket is not None:
            return max(1, int(self.minbucket))
        return max(1, int(round(self.minsplit / 3)))


@dataclass(frozen=True)
class NNParams:
    """Single hidden layer feed-forward network"""
    hidden_size: int = 10
    max_iter: int = 200
    scale_target: bool = True


@dataclass(frozen=True)
class PipelineConfig:
    # Source data
    source_url: str = (
        "https://archive.ics.uci.edu/static/public/235/"
        "individual+household+electric+power+consumption.zip"
    )
    archive_name: str = "household_power_consumption.zip"
    raw_name: str = "household_power_consumption.txt"
    sep: str = ";"
    na_token: str = "?"
    nrows: Optional[int] = None

    # IO
    data_dir: str = "data"
    artifacts_dir: str = "artifacts"
    overwrite: bool = False

    # Split
    seed: int = 123
    train_fraction: float = 0.8

    # Models
    models: Tuple[str, ...] = ("decision_tree", "neural_net")
    tree: TreeParams = field(default_factory=TreeParams)
    nn: NNParams = field(default_factory=NNParams)

    def data_path(self) -> Path:
        return Path(self.data_dir)

    def artifacts_path(self) -> Path:
        return Path(self.artifacts_dir)

    def archive_path(self) -> Path:
        return self.data_path() / self.archive_name

    def raw_path(self) -> Path:
        return self.data_path() / self.raw_name

    def metrics_path(self) -> Path:
        return self.artifacts_path() / "metrics.json"


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def load_config(**overrides) -> PipelineConfig:
    """
    Build a PipelineConfig from .env / environment, then explicit overrides.

    Environment variables:
        HPC_DATA_DIR, HPC_ARTIFACTS_DIR, HPC_SEED, HPC_NROWS

    Keyword overrides win over the environment; None overrides are ignored.
    """
    load_dotenv()

    values = {}
    if os.getenv("HPC_DATA_DIR"):
        values["data_dir"] = os.environ["HPC_DATA_DIR"]
    if os.getenv("HPC_ARTIFACTS_DIR"):
        values["artifacts_dir"] = os.environ["HPC_ARTIFACTS_DIR"]

    seed = _env_int("HPC_SEED")
    if seed is not None:
        values["seed"] = seed

    nrows = _env_int("HPC_NROWS")
    if nrows is not None:
        values["nrows"] = nrows

    values.update({k: v for k, v in overrides.items() if v is not None})

    config = replace(PipelineConfig(), **values)

    if not 0.0 < config.train_fraction < 1.0:
        raise ValueError(f"train_fraction must be in (0, 1), got {config.train_fraction}")
    if config.nrows is not None and config.nrows <= 0:
        raise ValueError(f"nrows must be positive, got {config.nrows}")

    return config
