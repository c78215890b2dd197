"""Column contracts for the raw and cleaned census tables."""
from __future__ import annotations

from typing import Iterable

import pandas as pd
import pandera as pa
from pandera import Check, Column, DataFrameSchema

from ..errors import SchemaMismatch

__all__ = [
    "RAW_COLUMNS",
    "DROPPED_COLUMNS",
    "CLEAN_COLUMNS",
    "NUMERIC_COLUMNS",
    "BIN_LABELS",
    "LABEL_CATEGORIES",
    "RawCensusSchema",
    "CleanCensusSchema",
    "require_columns",
    "validate_or_raise",
]

RAW_COLUMNS: tuple[str, ...] = (
    "age",
    "type_employer",
    "fnlwgt",
    "education",
    "education_num",
    "marital",
    "occupation",
    "relationship",
    "race",
    "sex",
    "capital_gain",
    "capital_loss",
    "hr_per_week",
    "country",
    "income",
)

DROPPED_COLUMNS: tuple[str, ...] = ("fnlwgt", "education_num")

CLEAN_COLUMNS: tuple[str, ...] = tuple(c for c in RAW_COLUMNS if c not in DROPPED_COLUMNS)

NUMERIC_COLUMNS: tuple[str, ...] = ("age", "hr_per_week")

BIN_LABELS: tuple[str, ...] = ("None", "Low", "High")

LABEL_CATEGORIES: tuple[str, ...] = ("GreaterThan50K", "LessThan50K")


RawCensusSchema = DataFrameSchema(
    {
        "age": Column(pa.Int64),
        "type_employer": Column(pa.String),
        "fnlwgt": Column(pa.Int64),
        "education": Column(pa.String),
        "education_num": Column(pa.Int64),
        "marital": Column(pa.String),
        "occupation": Column(pa.String),
        "relationship": Column(pa.String),
        "race": Column(pa.String),
        "sex": Column(pa.String),
        "capital_gain": Column(pa.Int64),
        "capital_loss": Column(pa.Int64),
        "hr_per_week": Column(pa.Int64),
        "country": Column(pa.String),
        "income": Column(pa.String),
    },
    strict=True,
    coerce=True,
)


CleanCensusSchema = DataFrameSchema(
    {
        "age": Column(pa.Int64),
        "type_employer": Column(pa.Category),
        "education": Column(pa.Category),
        "marital": Column(pa.Category),
        "occupation": Column(pa.Category),
        "relationship": Column(pa.Category),
        "race": Column(pa.Category),
        "sex": Column(pa.Category),
        "capital_gain": Column(pa.Category, Check.isin(list(BIN_LABELS))),
        "capital_loss": Column(pa.Category, Check.isin(list(BIN_LABELS))),
        "hr_per_week": Column(pa.Int64),
        "country": Column(pa.Category),
        "income": Column(pa.Category, Check.isin(list(LABEL_CATEGORIES))),
    },
    strict=True,
)


def require_columns(df: pd.DataFrame, expected: Iterable[str]) -> None:
    """Raise ``SchemaMismatch`` unless ``df`` has exactly ``expected`` columns."""
    expected = list(expected)
    missing = [c for c in expected if c not in df.columns]
    unexpected = [c for c in df.columns if c not in expected]
    if missing or unexpected:
        raise SchemaMismatch(
            f"Column mismatch: missing={sorted(missing)} unexpected={sorted(map(str, unexpected))}",
            missing=missing,
            unexpected=map(str, unexpected),
        )


def validate_or_raise(df: pd.DataFrame, schema: DataFrameSchema, name: str) -> pd.DataFrame:
    """Validate ``df`` against ``schema``; pandera failures become ``SchemaMismatch``."""
    try:
        return schema.validate(df)
    except (pa.errors.SchemaError, pa.errors.SchemaErrors) as exc:
        raise SchemaMismatch(f"{name} failed validation: {exc}") from exc
