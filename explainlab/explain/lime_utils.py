"""LIME wrappers for tabular and text classifiers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

import numpy as np
import pandas as pd
from lime.lime_tabular import LimeTabularExplainer
from lime.lime_text import LimeTextExplainer

from ..models.trainers import Classifier, categorical_columns

__all__ = [
    "ExplanationResult",
    "TabularCodec",
    "explain_tabular",
    "explain_text",
]


@dataclass(frozen=True)
class ExplanationResult:
    """Local surrogate weights for one instance and one label."""

    instance: int
    label: str
    probability: float
    contributions: Tuple[Tuple[str, float], ...]
    intercept: float
    score: float

    def as_frame(self) -> pd.DataFrame:
        df = pd.DataFrame(self.contributions, columns=["feature", "weight"])
        df["label"] = self.label
        df["instance"] = self.instance
        return df


class TabularCodec:
    """Maps categorical columns to integer codes and back.

    LIME perturbs numeric arrays; categorical columns travel as codes into
    their category list and are decoded before reaching the model.
    """

    def __init__(self, *frames: pd.DataFrame) -> None:
        first = frames[0]
        self.columns: List[str] = list(first.columns)
        self.categorical: List[str] = categorical_columns(first)
        self.categories: Dict[str, List[str]] = {}
        for col in self.categorical:
            if isinstance(first[col].dtype, pd.CategoricalDtype):
                cats = [str(c) for c in first[col].cat.categories]
            else:
                cats = []
            seen = pd.concat([f[col].astype(str) for f in frames]).unique()
            cats += sorted(c for c in seen if c not in cats)
            self.categories[col] = cats

    @property
    def categorical_indices(self) -> List[int]:
        return [self.columns.index(c) for c in self.categorical]

    @property
    def categorical_names(self) -> Dict[int, List[str]]:
        return {self.columns.index(c): self.categories[c] for c in self.categorical}

    def encode(self, X: pd.DataFrame) -> np.ndarray:
        out = np.empty((len(X), len(self.columns)), dtype=float)
        for j, col in enumerate(self.columns):
            if col in self.categories:
                lookup = {c: i for i, c in enumerate(self.categories[col])}
                out[:, j] = X[col].astype(str).map(lookup).to_numpy(dtype=float)
            else:
                out[:, j] = X[col].to_numpy(dtype=float)
        return out

    def decode(self, arr: np.ndarray) -> pd.DataFrame:
        arr = np.atleast_2d(arr)
        data = {}
        for j, col in enumerate(self.columns):
            if col in self.categories:
                codes = np.rint(arr[:, j]).astype(int)
                data[col] = pd.Categorical.from_codes(codes, categories=self.categories[col])
            else:
                data[col] = arr[:, j]
        return pd.DataFrame(data, columns=self.columns)


def _check_index(index: int, n: int) -> None:
    if not 0 <= index < n:
        raise IndexError(f"instance index {index} out of range for {n} test rows")


def _collect(exp, instance: int, class_names: Sequence[str]) -> List[ExplanationResult]:
    results: List[ExplanationResult] = []
    for label in exp.available_labels():
        score = exp.score[label] if isinstance(exp.score, dict) else exp.score
        results.append(
            ExplanationResult(
                instance=instance,
                label=str(class_names[label]),
                probability=float(exp.predict_proba[label]),
                contributions=tuple((str(f), float(w)) for f, w in exp.as_list(label=label)),
                intercept=float(exp.intercept[label]),
                score=float(score),
            )
        )
    return results


def explain_tabular(
    model: Classifier,
    X_train: pd.DataFrame,
    X_test: pd.DataFrame,
    index: int,
    *,
    n_features: int = 5,
    n_labels: int = 1,
    num_samples: int = 5000,
    seed: int = 42,
) -> List[ExplanationResult]:
    """Explain the prediction for row ``index`` (by position) of ``X_test``.

    Parameters
    ----------
    model : fitted classifier accepting a dataframe shaped like ``X_train``.
    X_train : pd.DataFrame
        Reference rows LIME samples perturbations from.
    X_test : pd.DataFrame
        Rows to pick the explained instance from.
    index : int
        Position of the instance in ``X_test``.
    n_features : int, default ``5``
        Number of features kept in each local surrogate.
    n_labels : int, default ``1``
        Number of top predicted labels to explain.

    Returns
    -------
    list of ExplanationResult
        One entry per explained label, most probable first.
    """
    _check_index(index, len(X_test))
    codec = TabularCodec(X_train, X_test)
    class_names = [str(c) for c in model.classes_]
    explainer = LimeTabularExplainer(
        training_data=codec.encode(X_train),
        mode="classification",
        feature_names=codec.columns,
        categorical_features=codec.categorical_indices,
        categorical_names=codec.categorical_names,
        class_names=class_names,
        discretize_continuous=True,
        random_state=seed,
    )
    row = codec.encode(X_test.iloc[[index]])[0]
    exp = explainer.explain_instance(
        row,
        lambda arr: model.predict_proba(codec.decode(arr)),
        num_features=n_features,
        top_labels=n_labels,
        num_samples=num_samples,
    )
    return _collect(exp, index, class_names)


def explain_text(
    model: Classifier,
    dtm: Callable[[Iterable[str]], object],
    texts: Sequence[str],
    index: int,
    *,
    n_features: int = 5,
    n_labels: int = 1,
    num_samples: int = 5000,
    seed: int = 42,
) -> List[ExplanationResult]:
    """Explain the prediction for ``texts[index]``.

    ``dtm`` is the text to document-term-matrix function the model was
    trained on; LIME drops words from the text and re-featurizes each
    perturbed copy through it.
    """
    _check_index(index, len(texts))
    class_names = [str(c) for c in model.classes_]
    explainer = LimeTextExplainer(class_names=class_names, random_state=seed)
    exp = explainer.explain_instance(
        str(texts[index]),
        lambda batch: model.predict_proba(dtm(batch)),
        num_features=n_features,
        top_labels=n_labels,
        num_samples=num_samples,
    )
    return _collect(exp, index, class_names)
