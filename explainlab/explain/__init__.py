"""Local (LIME) and global (permutation) explanations."""

from .lime_utils import ExplanationResult, explain_tabular, explain_text  # noqa: F401
from .importance import variable_importance  # noqa: F401
from .plot import plot_explanations, save_figure  # noqa: F401
