"""Utilities for preparing stratified train/test splits."""
from __future__ import annotations

import math
from dataclasses import dataclass

import pandas as pd
from sklearn.model_selection import train_test_split

from ..errors import InsufficientData

__all__ = ["Partition", "stratified_split"]


@dataclass(frozen=True)
class Partition:
    """Disjoint train/test frames and the settings that produced them."""

    train: pd.DataFrame
    test: pd.DataFrame
    label: str
    test_size: float
    seed: int

    @property
    def X_train(self) -> pd.DataFrame:
        return self.train.drop(columns=[self.label])

    @property
    def y_train(self) -> pd.Series:
        return self.train[self.label]

    @property
    def X_test(self) -> pd.DataFrame:
        return self.test.drop(columns=[self.label])

    @property
    def y_test(self) -> pd.Series:
        return self.test[self.label]


def stratified_split(
    df: pd.DataFrame,
    label: str,
    test_size: float = 0.2,
    seed: int = 42,
) -> Partition:
    """Split ``df`` into train/test preserving the ``label`` proportions.

    Parameters
    ----------
    df : pd.DataFrame
        Full table, label included.
    label : str
        Column to stratify on.
    test_size : float, default ``0.2``
        Fraction of rows assigned to the test partition.
    seed : int, default ``42``
        Random state; the same seed yields the same row indices.

    Raises
    ------
    InsufficientData
        If either partition would be empty.
    """
    if label not in df.columns:
        raise KeyError(f"label column '{label}' not found")
    n_test = math.ceil(len(df) * test_size)
    if len(df) < 2 or n_test < 1 or n_test >= len(df):
        raise InsufficientData(
            f"Cannot split {len(df)} rows with test_size={test_size}: empty partition"
        )
    train, test = train_test_split(
        df,
        test_size=test_size,
        random_state=seed,
        stratify=df[label],
    )
    return Partition(train=train, test=test, label=label, test_size=test_size, seed=seed)
