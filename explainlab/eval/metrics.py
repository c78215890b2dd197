"""Hold-out evaluation of a fitted classifier."""
from __future__ import annotations

from typing import Dict

import numpy as np
import pandas as pd
from sklearn.metrics import accuracy_score, confusion_matrix


def evaluate_classifier(model, X: pd.DataFrame, y: pd.Series) -> Dict[str, object]:
    """Accuracy and confusion matrix of ``model`` on ``X``/``y``.

    The confusion matrix is returned as a dataframe indexed by the true
    label with one column per predicted label, in ``model.classes_`` order.
    """
    y_true = np.asarray(y).astype(str)
    y_pred = np.asarray(model.predict(X)).astype(str)
    labels = [str(c) for c in model.classes_]
    cm = confusion_matrix(y_true, y_pred, labels=labels)
    return {
        "accuracy": float(accuracy_score(y_true, y_pred)),
        "n": int(len(y_true)),
        "confusion": pd.DataFrame(cm, index=labels, columns=labels),
    }


__all__ = ["evaluate_classifier"]
