"""Per-column sanity checks for task feature data."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np
import pandas as pd
from pandas.api import types as ptypes

from task_tlbx.errors import (
    EmptyLevelError,
    InfiniteValueError,
    NaNValueError,
    SchemaError,
    UnsupportedTypeError,
)

from .columns import ColumnKind, column_kind, has_empty_levels


logger = logging.getLogger(__name__)


def numeric_values(series: pd.Series) -> np.ndarray:
    """Return the float values of a numeric column with missing entries removed.

    Nullable pandas dtypes (``Int64``, ``Float64``) mark missing values as
    ``pd.NA`` and can still hold a genuine NaN, so only the ``NA`` mask is
    dropped there. For NumPy float columns NaN is the stored value itself and
    is kept.
    """
    if ptypes.is_extension_array_dtype(series.dtype):
        return series.dropna().to_numpy(dtype="float64")
    return series.to_numpy(dtype="float64")


def check_task_data(data: pd.DataFrame, cols: Iterable[str] | None = None) -> None:
    """Check that every selected column is a valid feature column.

    Numeric columns must not contain infinite or NaN values, categorical
    columns must not declare empty levels, all other column kinds are rejected.

    Args:
        data: Data to check (not modified).
        cols: Columns to check (defaults to all columns).

    Raises:
        SchemaError: If a requested column does not exist.
        InfiniteValueError: Numeric column with ``inf``/``-inf``.
        NaNValueError: Numeric column with NaN.
        EmptyLevelError: Categorical column with an unobserved category.
        UnsupportedTypeError: Any other column type.
    """
    cols = data.columns.to_list() if cols is None else list(cols)
    missing = [col for col in cols if col not in data.columns]
    if missing:
        raise SchemaError(f"Columns not found in data: {missing}")

    for col in cols:
        series = data[col]
        match column_kind(series):
            case ColumnKind.NUMERIC:
                values = numeric_values(series)
                if np.isinf(values).any():
                    raise InfiniteValueError(col)
                if np.isnan(values).any():
                    raise NaNValueError(col)
            case ColumnKind.CATEGORICAL:
                if has_empty_levels(series):
                    raise EmptyLevelError(col)
            case ColumnKind.UNSUPPORTED:
                raise UnsupportedTypeError(col, str(series.dtype))

    logger.debug("Checked %d feature column(s)", len(cols))


__all__ = ["check_task_data", "numeric_values"]
