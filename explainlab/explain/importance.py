"""Global variable importance by permutation."""
from __future__ import annotations

import numpy as np
import pandas as pd
from sklearn.inspection import permutation_importance

__all__ = ["variable_importance"]


def variable_importance(
    model,
    X: pd.DataFrame,
    y: pd.Series,
    n_repeats: int = 5,
    seed: int = 42,
) -> pd.DataFrame:
    """Mean accuracy drop when each column of ``X`` is shuffled.

    Returns a dataframe with columns ``feature``, ``importance`` and ``std``
    sorted by decreasing importance.
    """
    result = permutation_importance(
        model,
        X,
        np.asarray(y).astype(str),
        scoring="accuracy",
        n_repeats=n_repeats,
        random_state=seed,
    )
    df = pd.DataFrame(
        {
            "feature": list(X.columns),
            "importance": result.importances_mean,
            "std": result.importances_std,
        }
    )
    return df.sort_values("importance", ascending=False, kind="stable").reset_index(drop=True)
