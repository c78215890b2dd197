"""Trainers wrapping the external learners.

Every trainer follows the same capability contract: ``fit(X, y)`` returns
a fitted handle exposing ``predict``, ``predict_proba`` and ``classes_``.
Hyperparameters are bound at construction, from the validated config.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Protocol

import numpy as np
import pandas as pd
from lightgbm import LGBMClassifier
from sklearn.compose import ColumnTransformer
from sklearn.model_selection import GridSearchCV, RepeatedStratifiedKFold, StratifiedKFold
from sklearn.neural_network import MLPClassifier
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder, StandardScaler

from ..config.schema import GbmConfig, NnetConfig

__all__ = [
    "Classifier",
    "Trainer",
    "NeuralNetTrainer",
    "TextBoostingTrainer",
    "categorical_columns",
]


class Classifier(Protocol):
    classes_: np.ndarray

    def predict(self, X) -> np.ndarray: ...

    def predict_proba(self, X) -> np.ndarray: ...


class Trainer(Protocol):
    def fit(self, X, y) -> Classifier: ...


def categorical_columns(X: pd.DataFrame) -> List[str]:
    """Columns of ``X`` that are not numeric."""
    return [c for c in X.columns if not pd.api.types.is_numeric_dtype(X[c])]


@dataclass
class NeuralNetTrainer:
    """Single hidden layer network over one-hot categoricals and scaled numerics.

    ``size`` and ``decay`` lists define the tuning grid (hidden width and L2
    penalty). With resampling ``repeatedcv`` or ``cv`` the grid is searched
    by stratified k-fold accuracy and the best setting is refitted on all
    training rows; with ``none`` the first grid point is fitted directly.
    """

    config: NnetConfig = field(default_factory=NnetConfig)
    seed: int = 42
    best_params_: Dict[str, Any] | None = field(default=None, init=False)

    def build(self, X: pd.DataFrame) -> Pipeline:
        cat_cols = categorical_columns(X)
        num_cols = [c for c in X.columns if c not in cat_cols]
        pre = ColumnTransformer(
            [
                ("cat", OneHotEncoder(handle_unknown="ignore"), cat_cols),
                ("num", StandardScaler(), num_cols),
            ]
        )
        mlp = MLPClassifier(
            hidden_layer_sizes=(self.config.size[0],),
            alpha=self.config.decay[0],
            activation="logistic",
            solver="lbfgs",
            max_iter=self.config.max_iter,
            random_state=self.seed,
        )
        return Pipeline([("pre", pre), ("mlp", mlp)])

    def _cv(self):
        rs = self.config.resampling
        if rs.method == "repeatedcv":
            return RepeatedStratifiedKFold(
                n_splits=rs.number, n_repeats=rs.repeats, random_state=self.seed
            )
        return StratifiedKFold(n_splits=rs.number, shuffle=True, random_state=self.seed)

    def fit(self, X: pd.DataFrame, y: pd.Series) -> Pipeline:
        y = np.asarray(y).astype(str)
        pipe = self.build(X)
        if self.config.resampling.method == "none":
            pipe.fit(X, y)
            self.best_params_ = {
                "size": self.config.size[0],
                "decay": self.config.decay[0],
            }
            return pipe

        grid = {
            "mlp__hidden_layer_sizes": [(s,) for s in self.config.size],
            "mlp__alpha": list(self.config.decay),
        }
        search = GridSearchCV(pipe, grid, cv=self._cv(), scoring="accuracy", refit=True)
        search.fit(X, y)
        self.best_params_ = {
            "size": search.best_params_["mlp__hidden_layer_sizes"][0],
            "decay": search.best_params_["mlp__alpha"],
        }
        return search.best_estimator_


@dataclass
class TextBoostingTrainer:
    """LightGBM on a hashed document-term matrix.

    ``dtm`` maps raw texts to the sparse matrix; the returned model is fitted
    on that matrix, so predictions on new texts must go through ``dtm`` too.
    """

    dtm: Callable[[Iterable[str]], Any]
    config: GbmConfig = field(default_factory=GbmConfig)
    seed: int = 42

    def fit(self, texts: Iterable[str], y) -> LGBMClassifier:
        X = self.dtm(texts)
        model = LGBMClassifier(
            n_estimators=self.config.n_estimators,
            learning_rate=self.config.learning_rate,
            num_leaves=self.config.num_leaves,
            max_depth=self.config.max_depth,
            min_child_samples=self.config.min_child_samples,
            random_state=self.seed,
            verbose=-1,
        )
        model.fit(X, np.asarray(y).astype(str))
        return model
