"""Census and spam data access, contracts and recoding."""

from .contracts import RAW_COLUMNS, CLEAN_COLUMNS, DROPPED_COLUMNS  # noqa: F401
from .loader import read_census, read_spam_archive, fetch_spam  # noqa: F401
from .recode import BinEdges, UnmappedPolicy, dataprep, fit_bin_edges, prepare  # noqa: F401
