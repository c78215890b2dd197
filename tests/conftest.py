import numpy as np
import pandas as pd
import pytest

from explainlab.data.contracts import RAW_COLUMNS

EMPLOYERS = ["Private", "Self-emp-not-inc", "Local-gov", "State-gov", "Federal-gov", "Self-emp-inc"]
EDUCATION = ["Bachelors", "HS-grad", "Some-college", "Masters", "10th", "Assoc-voc", "Doctorate"]
MARITAL = ["Never-married", "Married-civ-spouse", "Divorced", "Widowed", "Separated"]
OCCUPATION = ["Sales", "Exec-managerial", "Craft-repair", "Adm-clerical", "Prof-specialty", "Other-service"]
RELATIONSHIP = ["Husband", "Not-in-family", "Own-child", "Unmarried", "Wife"]
RACE = ["White", "Black", "Asian-Pac-Islander", "Amer-Indian-Eskimo", "Other"]
COUNTRY = ["United-States", "Mexico", "Germany", "India", "Philippines", "Canada"]

DEFAULT_ROW = {
    "age": 39,
    "type_employer": "Private",
    "fnlwgt": 77516,
    "education": "Bachelors",
    "education_num": 13,
    "marital": "Never-married",
    "occupation": "Sales",
    "relationship": "Not-in-family",
    "race": "White",
    "sex": "Male",
    "capital_gain": 0,
    "capital_loss": 0,
    "hr_per_week": 40,
    "country": "United-States",
    "income": "<=50K",
}


def make_raw_census(n: int = 300, seed: int = 0) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    age = rng.integers(17, 80, n)
    hours = rng.integers(10, 70, n)
    gain = np.where(rng.random(n) < 0.3, rng.integers(1, 20000, n), 0)
    loss = np.where(rng.random(n) < 0.2, rng.integers(1, 3000, n), 0)
    education = rng.choice(EDUCATION, n)
    score = (
        (age - 40) / 15
        + (hours - 40) / 15
        + 1.5 * np.isin(education, ["Bachelors", "Masters", "Doctorate"])
        + (gain > 0)
        + rng.normal(0, 0.5, n)
    )
    df = pd.DataFrame(
        {
            "age": age,
            "type_employer": rng.choice(EMPLOYERS, n),
            "fnlwgt": rng.integers(10000, 500000, n),
            "education": education,
            "education_num": rng.integers(1, 17, n),
            "marital": rng.choice(MARITAL, n),
            "occupation": rng.choice(OCCUPATION, n),
            "relationship": rng.choice(RELATIONSHIP, n),
            "race": rng.choice(RACE, n),
            "sex": rng.choice(["Male", "Female"], n),
            "capital_gain": gain,
            "capital_loss": loss,
            "hr_per_week": hours,
            "country": rng.choice(COUNTRY, n),
            "income": np.where(score > 1.0, ">50K", "<=50K"),
        }
    )
    return df[list(RAW_COLUMNS)]


def make_spam_corpus(n: int = 80, seed: int = 0) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    spam_words = ["win", "cash", "prize", "free", "claim", "urgent", "txt"]
    ham_words = ["home", "dinner", "later", "mum", "sorry", "meeting", "tomorrow"]
    rows = []
    for i in range(n):
        is_spam = i % 2 == 0
        vocab = spam_words if is_spam else ham_words
        words = list(rng.choice(vocab, 5)) + list(rng.choice(["ok", "the", "you", "now"], 3))
        rng.shuffle(words)
        rows.append({"label": "spam" if is_spam else "ham", "text": " ".join(words)})
    df = pd.DataFrame(rows)
    df["label"] = pd.Categorical(df["label"], categories=["ham", "spam"])
    return df


@pytest.fixture
def raw_census():
    return make_raw_census()


@pytest.fixture
def spam_corpus():
    return make_spam_corpus()


@pytest.fixture
def census_frame():
    """Build a raw census frame from partial rows over ``DEFAULT_ROW``."""

    def build(*rows: dict) -> pd.DataFrame:
        return pd.DataFrame([{**DEFAULT_ROW, **r} for r in rows])[list(RAW_COLUMNS)]

    return build
