"""Checks for train/test leakage through preprocessing statistics."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

import numpy as np
import pandas as pd

from ..data.recode import BINNED_COLUMNS, BinEdges, fit_bin_edges
from ..errors import InsufficientData


@dataclass
class LeakageIssue:
    level: str
    message: str
    locations: List[str]


def check_binning_leakage(
    raw: pd.DataFrame,
    train_index: Iterable,
    edges: BinEdges,
    columns: Iterable[str] = BINNED_COLUMNS,
    rtol: float = 1e-9,
) -> List[LeakageIssue]:
    """Compare ``edges`` with the edges a train-only fit would produce.

    ``edges`` are the boundaries actually used to bin the data (fitted on
    the full table before splitting). Any column whose boundary moves
    when fitted on the training rows alone, or that cannot be fitted on
    them at all, is reported as a warning.
    """
    issues: List[LeakageIssue] = []
    train_raw = raw.loc[list(train_index)]
    for col in [c for c in columns if c in edges.medians]:
        used = edges[col]
        try:
            honest = fit_bin_edges(train_raw, [col])[col]
        except InsufficientData:
            issues.append(
                LeakageIssue(
                    level="warning",
                    message=(
                        f"{col} median {used:g} uses test rows; "
                        "training rows have no positive value, train-only median is undefined"
                    ),
                    locations=[col],
                )
            )
            continue
        if not np.isclose(used, honest, rtol=rtol, atol=0.0):
            issues.append(
                LeakageIssue(
                    level="warning",
                    message=(
                        f"{col} median {used:g} uses test rows; "
                        f"train-only median is {honest:g}"
                    ),
                    locations=[col],
                )
            )
    return issues


def check_partition_overlap(train: pd.DataFrame, test: pd.DataFrame) -> List[LeakageIssue]:
    """Flag rows present in both partitions."""
    shared = train.index.intersection(test.index)
    if len(shared):
        return [
            LeakageIssue(
                level="error",
                message=f"{len(shared)} rows appear in both train and test",
                locations=[str(i) for i in shared[:10]],
            )
        ]
    return []


__all__ = ["check_binning_leakage", "check_partition_overlap", "LeakageIssue"]
