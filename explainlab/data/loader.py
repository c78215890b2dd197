"""Readers for the census table and the SMS spam archive."""
from __future__ import annotations

import csv
import shutil
import tempfile
import zipfile
from pathlib import Path
from urllib.request import urlopen

import pandas as pd

from ..errors import SchemaMismatch
from .contracts import RAW_COLUMNS

__all__ = [
    "CENSUS_URL",
    "SPAM_URL",
    "SPAM_MEMBER",
    "SPAM_LABELS",
    "read_census",
    "read_spam_archive",
    "fetch_spam",
]

CENSUS_URL = "http://archive.ics.uci.edu/ml/machine-learning-databases/adult/adult.data"
SPAM_URL = "https://archive.ics.uci.edu/ml/machine-learning-databases/00228/smsspamcollection.zip"
SPAM_MEMBER = "SMSSpamCollection"
SPAM_LABELS = ("ham", "spam")


def read_census(source: str | Path = CENSUS_URL) -> pd.DataFrame:
    """Read ``adult.data`` (no header, comma separated) from a path or URL."""
    df = pd.read_csv(
        source,
        header=None,
        names=list(RAW_COLUMNS),
        sep=",",
        skipinitialspace=True,
    )
    return df


def read_spam_archive(path: str | Path, member: str = SPAM_MEMBER) -> pd.DataFrame:
    """Read the tab separated ``label<TAB>text`` member of a local zip archive."""
    with zipfile.ZipFile(path) as archive:
        if member not in archive.namelist():
            raise SchemaMismatch(
                f"Archive {path} has no member '{member}'", missing=[member]
            )
        with archive.open(member) as fh:
            df = pd.read_csv(
                fh,
                sep="\t",
                header=None,
                names=["label", "text"],
                quoting=csv.QUOTE_NONE,
                encoding="utf-8",
                encoding_errors="replace",
            )
    df = df.dropna(subset=["label", "text"])
    unexpected = sorted(set(df["label"]) - set(SPAM_LABELS))
    if unexpected:
        raise SchemaMismatch(f"Unexpected spam labels: {unexpected}", unexpected=unexpected)
    df["label"] = pd.Categorical(df["label"], categories=list(SPAM_LABELS))
    df["text"] = df["text"].astype(str)
    return df.reset_index(drop=True)


def fetch_spam(
    url: str = SPAM_URL,
    member: str = SPAM_MEMBER,
    tmp_dir: str | Path | None = None,
) -> pd.DataFrame:
    """Download the spam archive to a temporary directory and read it.

    The temporary directory and the archive inside it are removed on every
    exit path, including download or parse failures.
    """
    with tempfile.TemporaryDirectory(dir=tmp_dir) as tmp:
        archive = Path(tmp) / "spam.zip"
        with urlopen(url) as response, open(archive, "wb") as fh:
            shutil.copyfileobj(response, fh)
        return read_spam_archive(archive, member)
