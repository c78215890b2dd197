import zipfile

import pytest

from explainlab.data.contracts import RAW_COLUMNS
from explainlab.data.loader import fetch_spam, read_census, read_spam_archive
from explainlab.errors import SchemaMismatch

CENSUS_LINES = (
    "39, State-gov, 77516, Bachelors, 13, Never-married, Adm-clerical, Not-in-family, "
    "White, Male, 2174, 0, 40, United-States, <=50K\n"
    "54, ?, 180211, Some-college, 10, Married-civ-spouse, ?, Husband, "
    "Asian-Pac-Islander, Male, 0, 0, 60, South, >50K\n"
    "\n"
)


def _write_archive(path, content, member="SMSSpamCollection"):
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr(member, content)
    return path


def test_read_census_strips_leading_blanks(tmp_path):
    src = tmp_path / "adult.data"
    src.write_text(CENSUS_LINES)
    df = read_census(src)
    assert list(df.columns) == list(RAW_COLUMNS)
    assert len(df) == 2
    assert df.loc[0, "type_employer"] == "State-gov"
    assert df.loc[1, "type_employer"] == "?"
    assert df.loc[1, "income"] == ">50K"
    assert df["capital_gain"].tolist() == [2174, 0]


def test_read_spam_archive(tmp_path):
    archive = _write_archive(
        tmp_path / "spam.zip",
        'ham\tGo until jurong point, crazy.. "Available" only\nspam\tWINNER!! claim your prize\n',
    )
    df = read_spam_archive(archive)
    assert list(df.columns) == ["label", "text"]
    assert df["label"].astype(str).tolist() == ["ham", "spam"]
    assert list(df["label"].cat.categories) == ["ham", "spam"]
    assert '"Available"' in df.loc[0, "text"]


def test_read_spam_archive_missing_member(tmp_path):
    archive = _write_archive(tmp_path / "spam.zip", "ham\thi\n", member="other.txt")
    with pytest.raises(SchemaMismatch):
        read_spam_archive(archive)


def test_read_spam_archive_unknown_label(tmp_path):
    archive = _write_archive(tmp_path / "spam.zip", "ham\thi\neggs\tbacon\n")
    with pytest.raises(SchemaMismatch, match="eggs"):
        read_spam_archive(archive)


def test_fetch_spam_removes_download(tmp_path):
    archive = _write_archive(tmp_path / "spam.zip", "ham\thi there\nspam\tfree cash\n")
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    df = fetch_spam(archive.as_uri(), tmp_dir=scratch)
    assert len(df) == 2
    assert list(scratch.iterdir()) == []


def test_fetch_spam_removes_download_on_failure(tmp_path):
    archive = _write_archive(tmp_path / "spam.zip", "ham\thi\n", member="other.txt")
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    with pytest.raises(SchemaMismatch):
        fetch_spam(archive.as_uri(), tmp_dir=scratch)
    assert list(scratch.iterdir()) == []
