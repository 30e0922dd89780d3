"""Column kinds supported as task features and per-column metadata."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

import pandas as pd
from pandas.api import types as ptypes


class ColumnKind(StrEnum):
    """Closed set of column kinds a task knows how to handle.

    Every feature column is exactly one of these. Validation and the feature
    tally of the task description both dispatch on this value instead of
    inspecting dtypes again.
    """

    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class ColumnInfo:
    """Metadata for a single data column.

    Attributes:
        name: Column name in the DataFrame.
        kind: Supported column kind.
        dtype: Observed pandas dtype as a string.
        ordered: True for ordered categoricals.
        n_missing: Number of missing entries (``NaN``/``NA``/``None``).
    """

    name: str
    kind: ColumnKind
    dtype: str
    ordered: bool = False
    n_missing: int = 0


def is_categorical(series: pd.Series) -> bool:
    """Return True if ``series`` has a pandas categorical dtype."""
    return isinstance(series.dtype, pd.CategoricalDtype)


def is_numeric(series: pd.Series) -> bool:
    """Return True for real-valued numeric dtypes.

    Booleans and complex numbers are numeric for pandas but not valid
    numeric features here.
    """
    dtype = series.dtype
    return (
        ptypes.is_numeric_dtype(dtype)
        and not ptypes.is_bool_dtype(dtype)
        and not ptypes.is_complex_dtype(dtype)
    )


def column_kind(series: pd.Series) -> ColumnKind:
    """Classify a column into a :class:`ColumnKind`."""
    if is_categorical(series):
        return ColumnKind.CATEGORICAL
    if is_numeric(series):
        return ColumnKind.NUMERIC
    return ColumnKind.UNSUPPORTED


def has_empty_levels(series: pd.Series) -> bool:
    """Return True if a categorical column declares a category with zero rows.

    Non-categorical columns never have empty levels.
    """
    if not is_categorical(series):
        return False
    return bool((series.value_counts(dropna=True) == 0).any())


def describe_columns(df: pd.DataFrame, columns: list[str] | None = None) -> list[ColumnInfo]:
    """Collect :class:`ColumnInfo` for the selected columns (all by default)."""
    infos: list[ColumnInfo] = []
    for name in columns if columns is not None else df.columns.to_list():
        series = df[name]
        kind = column_kind(series)
        infos.append(
            ColumnInfo(
                name=name,
                kind=kind,
                dtype=str(series.dtype),
                ordered=bool(kind is ColumnKind.CATEGORICAL and series.cat.ordered),
                n_missing=int(series.isna().sum()),
            ),
        )
    return infos


__all__ = [
    "ColumnInfo",
    "ColumnKind",
    "column_kind",
    "describe_columns",
    "has_empty_levels",
    "is_categorical",
    "is_numeric",
]
