"""Task builder: normalize, validate and assemble a :class:`Task`."""

from __future__ import annotations

import logging
import warnings
from collections.abc import Sequence

import numpy as np
import pandas as pd
from pandas.api import types as ptypes

from task_tlbx.config import get_task_config
from task_tlbx.data.columns import is_categorical
from task_tlbx.data.fixup import FixupPolicy
from task_tlbx.data.fixup import fixup_data as apply_fixup
from task_tlbx.data.validation import check_task_data
from task_tlbx.errors import (
    BlockingError,
    ConflictError,
    SchemaError,
    SpatialConfigError,
    TaskDataWarning,
    WeightsError,
    find_stack_level,
)

from .base_task import SPATIAL_COORDINATES, Task, TaskType


logger = logging.getLogger(__name__)


def as_task_frame(data: object) -> pd.DataFrame:
    """Validate the table structure and return a plain :class:`pandas.DataFrame`.

    DataFrame subclasses are converted with a :class:`TaskDataWarning`, so a task
    never retains the caller's container type.

    Raises:
        SchemaError: If ``data`` is not a DataFrame or has non-string, blank or
            duplicated column names.
    """
    if not isinstance(data, pd.DataFrame):
        raise SchemaError(f"Data must be a pandas DataFrame, got {type(data).__name__}.")
    if type(data) is not pd.DataFrame:
        warnings.warn(
            f"Provided data is not a pure DataFrame but from class {type(data).__name__}, "
            "hence it will be converted.",
            TaskDataWarning,
            stacklevel=find_stack_level(),
        )
        data = pd.DataFrame(data)

    bad = [col for col in data.columns if not isinstance(col, str) or not col.strip()]
    if bad:
        raise SchemaError(f"Column names must be non-empty strings, got: {bad}")
    dupes = data.columns[data.columns.duplicated()].unique().to_list()
    if dupes:
        raise SchemaError(f"Column names must be unique, duplicated: {dupes}")
    return data


def check_weights(weights: object, n_rows: int) -> np.ndarray:
    """Validate observation weights and return them as a read-only float array.

    Raises:
        WeightsError: If weights are not numeric, contain missing or negative
            values, are not one-dimensional or do not have one entry per row.
    """
    if np.ndim(weights) != 1:
        raise WeightsError(f"Weights must be one-dimensional, got {np.ndim(weights)} dimension(s).")
    series = pd.Series(weights) if not isinstance(weights, pd.Series) else weights
    if ptypes.is_bool_dtype(series.dtype) or not ptypes.is_numeric_dtype(series.dtype):
        raise WeightsError(f"Weights must be numeric, got dtype {series.dtype}.")
    if len(series) != n_rows:
        raise WeightsError(f"Weights must have length {n_rows} (number of rows), got {len(series)}.")
    if series.isna().any():
        raise WeightsError("Weights contain missing values.")
    values = series.to_numpy(dtype="float64", copy=True)
    if (values < 0).any():
        raise WeightsError("Weights must be non-negative.")
    values.setflags(write=False)
    return values


def check_blocking(blocking: object, n_rows: int) -> pd.Categorical:
    """Validate a blocking factor and return a copy of it.

    Raises:
        BlockingError: If blocking is not one-dimensional or categorical,
            contains missing values or does not have one entry per row.
    """
    if np.ndim(blocking) != 1:
        raise BlockingError(f"Blocking must be one-dimensional, got {np.ndim(blocking)} dimension(s).")
    if isinstance(blocking, pd.Categorical):
        blocking = pd.Series(blocking)
    if not isinstance(blocking, pd.Series) or not is_categorical(blocking):
        raise BlockingError(f"Blocking must be categorical, got {type(blocking).__name__}.")
    if len(blocking) != n_rows:
        raise BlockingError(
            "Blocking has to be of the same length as number of rows in data! Or pass none at all.",
        )
    if blocking.isna().any():
        raise BlockingError("Blocking contains missing values.")
    return pd.Categorical(blocking.array.copy())


def check_spatial(data: pd.DataFrame) -> None:
    """Ensure both coordinate columns exist.

    Raises:
        SpatialConfigError: Naming the missing coordinate(s).
    """
    missing = [coord for coord in SPATIAL_COORDINATES if coord not in data.columns]
    if missing:
        raise SpatialConfigError(
            f"Spatial task is missing coordinate column(s) {missing}. "
            "Please rename coordinates in data to 'x' and 'y'.",
        )


def make_task(
    type: TaskType | str,  # noqa: A002
    data: pd.DataFrame,
    weights: Sequence[float] | np.ndarray | pd.Series | None = None,
    blocking: pd.Categorical | pd.Series | None = None,
    fixup_data: FixupPolicy | str | None = None,
    check_data: bool | None = None,
    spatial: bool | None = None,
    *,
    target: Sequence[str] = (),
    costs: pd.DataFrame | None = None,
) -> Task:
    """Build a validated, undescribed :class:`Task`.

    Steps: schema checks, fixup of empty factor levels, spatial coordinate
    check, structural checks of weights/blocking/features, assembly.

    Args:
        type: Learning objective.
        data: Input data; it is copied, never modified.
        weights: Optional non-negative observation weights. Not allowed for
            cost-sensitive tasks.
        blocking: Optional categorical grouping; observations sharing a level are
            kept together by resampling. A zero-length blocking counts as none.
        fixup_data: ``"no"``, ``"quiet"`` or ``"warn"`` (default from
            :func:`task_tlbx.config.get_task_config`).
        check_data: Validate weights, blocking and features. You should have good
            reasons to turn this off (one might be speed).
        spatial: Reserve columns ``x`` and ``y`` as coordinates. Coordinates named
            differently are treated as ordinary features.
        target: Target column(s), excluded from the feature check.
        costs: Already validated cost matrix for cost-sensitive tasks.

    Returns:
        Task owning a private copy of the normalized data.

    Raises:
        SchemaError: Malformed table or unknown target column.
        ConflictError: Weights passed for a cost-sensitive task.
        WeightsError: Invalid weights (only with ``check_data``).
        BlockingError: Invalid blocking (only with ``check_data``).
        ColumnCheckError: Invalid feature column (only with ``check_data``).
        SpatialConfigError: ``spatial`` requested without ``x``/``y`` columns.

    Example:
        >>> import pandas as pd
        >>> df = pd.DataFrame({"a": [1.0, 2.0], "c": pd.Categorical(["lo", "lo"], categories=["lo", "hi"])})
        >>> task = make_task("cluster", df, fixup_data="quiet")
        >>> task.data["c"].cat.categories.to_list()
        ['lo']
    """
    cfg = get_task_config()
    task_type = TaskType(type)
    policy = FixupPolicy.parse(cfg.fixup_data if fixup_data is None else fixup_data)
    check_data = cfg.check_data if check_data is None else check_data
    spatial = cfg.spatial if spatial is None else spatial

    data = as_task_frame(data)
    target = tuple(target)
    unknown = [col for col in target if col not in data.columns]
    if unknown:
        raise SchemaError(f"Target column(s) not found in data: {unknown}")

    if task_type is TaskType.COSTSENS and weights is not None:
        raise ConflictError("Weights are not supported for cost-sensitive tasks.")

    logger.debug("Building %s task: %d rows, %d columns, fixup=%s", task_type, *data.shape, policy)
    data = apply_fixup(data, policy)

    n_rows = len(data)
    if blocking is not None and len(blocking) == 0:
        logger.debug("Zero-length blocking treated as no blocking")
        blocking = None

    if spatial:
        check_spatial(data)

    if check_data:
        if weights is not None:
            weights = check_weights(weights, n_rows)
        if blocking is not None:
            blocking = check_blocking(blocking, n_rows)
        exclude = set(target) | (set(SPATIAL_COORDINATES) if spatial else set())
        check_task_data(data, [col for col in data.columns if col not in exclude])
    else:
        if weights is not None:
            weights = np.array(weights)
            weights.setflags(write=False)
        if blocking is not None:
            blocking = pd.Categorical(blocking)

    return Task(
        task_type,
        data.copy(deep=True),
        weights=weights,
        blocking=blocking,
        target=target,
        spatial=spatial,
        costs=costs,
    )


__all__ = ["as_task_frame", "check_blocking", "check_spatial", "check_weights", "make_task"]
