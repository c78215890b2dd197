"""MLflow run tracking for the explanation workflows.

Logging helpers do nothing outside an active run, so the workflows call
them unconditionally and tracking is switched on only by ``tracked_run``.
"""
from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Sequence

import mlflow
import pandas as pd

from ..config.schema import TrackingConfig

__all__ = [
    "tracked_run",
    "log_params",
    "log_metrics",
    "log_explanations",
    "log_artifact",
]

DEFAULT_TRACKING_URI = "sqlite:///mlflow.db"


@contextmanager
def tracked_run(
    tracking: TrackingConfig,
    run_name: Optional[str] = None,
    tags: Optional[Dict[str, str]] = None,
) -> Iterator[Optional[str]]:
    """Open an MLflow run when ``tracking.enabled``; yield its id or ``None``."""
    if not tracking.enabled:
        yield None
        return
    uri = tracking.tracking_uri or os.getenv("MLFLOW_TRACKING_URI", DEFAULT_TRACKING_URI)
    mlflow.set_tracking_uri(uri)
    mlflow.set_experiment(tracking.experiment)
    run = mlflow.start_run(run_name=run_name, tags=tags)
    try:
        yield run.info.run_id
    finally:
        mlflow.end_run()


def log_params(params: Dict[str, object]) -> None:
    if mlflow.active_run() is None:
        return
    mlflow.log_params(params)


def log_metrics(metrics: Dict[str, float], step: Optional[int] = None) -> None:
    if mlflow.active_run() is None:
        return
    mlflow.log_metrics(metrics, step=step)


def log_explanations(results: Sequence, name: str = "explanations.csv") -> None:
    """Store the feature weights of every explained label as one CSV artifact."""
    if mlflow.active_run() is None or not results:
        return
    table = pd.concat([r.as_frame() for r in results], ignore_index=True)
    mlflow.log_text(table.to_csv(index=False), name)


def log_artifact(path: str) -> None:
    if mlflow.active_run() is None:
        return
    mlflow.log_artifact(path)
