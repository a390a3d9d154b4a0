# file: src/household_power/splitting.py
"""
Household Power: Seeded Train/Test Split

Random (not temporal) hold-out: floor(train_fraction * N) rows drawn
without replacement for training, the rest held out for evaluation.
Same seed + same N => same partition.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np
import pandas as pd

from .errors import InsufficientDataError

logger = logging.getLogger(__name__)


@dataclass
class TrainTestSplit:
    """Disjoint, exhaustive partition of row positions 0..n_rows-1"""
    seed: int
    n_rows: int
    train_indices: np.ndarray
    test_indices: np.ndarray

    def __post_init__(self):
        """Validate partition"""
        overlap = np.intersect1d(self.train_indices, self.test_indices)
        if overlap.size > 0:
            raise ValueError(f"Train/test overlap: {overlap.size} shared rows")

        covered = np.union1d(self.train_indices, self.test_indices)
        if covered.size != self.n_rows or (
            self.n_rows > 0 and (covered[0] != 0 or covered[-1] != self.n_rows - 1)
        ):
            raise ValueError(
                f"Split is not exhaustive: covers {covered.size} of {self.n_rows} rows"
            )

    @property
    def train_size(self) -> int:
        return len(self.train_indices)

    @property
    def test_size(self) -> int:
        return len(self.test_indices)

    @property
    def info(self) -> Dict:
        return {
            "seed": self.seed,
            "n_rows": self.n_rows,
            "train_size": self.train_size,
            "test_size": self.test_size,
        }


def random_split(n_rows: int, seed: int, train_fraction: float = 0.8) -> TrainTestSplit:
    """
    Draw the training rows uniformly at random without replacement.

    Args:
        n_rows: Number of featurized rows
        seed: RNG seed (numpy PCG64)
        train_fraction: Share of rows used for training

    Returns:
        TrainTestSplit with sorted index arrays
    """
    if not 0.0 < train_fraction < 1.0:
        raise ValueError(f"train_fraction must be in (0, 1), got {train_fraction}")

    if n_rows < 2:
        raise InsufficientDataError(
            f"Need at least 2 rows to form train and test subsets, got {n_rows}"
        )

    # epsilon guards products like 0.8 * N landing just under an integer
    n_train = math.floor(train_fraction * n_rows + 1e-9)
    if n_train == 0 or n_train == n_rows:
        raise InsufficientDataError(
            f"train_fraction={train_fraction} on {n_rows} rows leaves an empty subset "
            f"(train={n_train}, test={n_rows - n_train})"
        )

    rng = np.random.default_rng(seed)
    train_idx = np.sort(rng.choice(n_rows, size=n_train, replace=False))

    mask = np.ones(n_rows, dtype=bool)
    mask[train_idx] = False
    test_idx = np.flatnonzero(mask)

    split = TrainTestSplit(
        seed=seed,
        n_rows=n_rows,
        train_indices=train_idx,
        test_indices=test_idx,
    )
    logger.info(
        "[split] seed=%d train=%d test=%d", seed, split.train_size, split.test_size
    )
    return split


def apply_split(
    frame: pd.DataFrame,
    split: TrainTestSplit,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Positional train/test selection; raises if frame length != split.n_rows"""
    if len(frame) != split.n_rows:
        raise ValueError(
            f"Split was drawn for {split.n_rows} rows, frame has {len(frame)}"
        )
    train_df = frame.iloc[split.train_indices].reset_index(drop=True)
    test_df = frame.iloc[split.test_indices].reset_index(drop=True)
    return train_df, test_df
