"""Splitting, evaluation and leakage checks."""

from .prepare_splits import Partition, stratified_split  # noqa: F401
from .metrics import evaluate_classifier  # noqa: F401
from .leakage import LeakageIssue, check_binning_leakage, check_partition_overlap  # noqa: F401
