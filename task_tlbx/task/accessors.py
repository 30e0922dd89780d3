"""Read accessors for task data. Every returned frame or array is a copy."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

import numpy as np
import pandas as pd
from pandas.api import types as ptypes
from sklearn.preprocessing import label_binarize

from .base_task import SPATIAL_COORDINATES, Task, TaskType
from .task_desc import describe_task


RecodeTarget = Literal["no", "01", "-1+1", "drop.levels"]
RowSubset = slice | Sequence[int] | Sequence[bool] | np.ndarray | None


def get_task_feature_names(task: Task) -> list[str]:
    """Return feature column names in data order."""
    return task.feature_names


def get_task_target_names(task: Task) -> list[str]:
    """Return target column names (empty for tasks without target)."""
    return list(task.target)


def get_task_size(task: Task) -> int:
    """Return the number of observations."""
    return task.size


def get_task_n_feats(task: Task) -> int:
    """Return the number of features."""
    return len(task.feature_names)


def _row_positions(task: Task, subset: RowSubset) -> np.ndarray:
    """Translate a row subset (slice, positions or boolean mask) into positions."""
    n_rows = task.size
    if subset is None:
        return np.arange(n_rows)
    if isinstance(subset, slice):
        return np.arange(n_rows)[subset]
    positions = np.asarray(subset)
    if positions.size == 0:
        return positions.astype(int)
    if ptypes.is_bool_dtype(positions.dtype):
        if len(positions) != n_rows:
            raise ValueError(f"Boolean subset must have length {n_rows}, got {len(positions)}.")
        return np.flatnonzero(positions)
    if not ptypes.is_integer_dtype(positions.dtype):
        raise TypeError(f"Subset must contain integer positions or booleans, got {positions.dtype}.")
    return positions


def _select_features(task: Task, features: Sequence[str] | None) -> list[str]:
    if features is None:
        return task.feature_names
    features = list(features)
    unknown = [col for col in features if col not in task.feature_names]
    if unknown:
        raise ValueError(f"Unknown features: {unknown}. Available: {task.feature_names}")
    return features


def _recode(task: Task, y: pd.Series, recode_target: RecodeTarget) -> pd.Series:
    """Recode a classification target.

    ``"01"`` and ``"-1+1"`` map the positive class to 1 and the negative class to
    0 or -1 via :func:`sklearn.preprocessing.label_binarize`; ``"drop.levels"``
    removes categories not present in ``y``.
    """
    if recode_target == "no":
        return y
    if recode_target == "drop.levels":
        return y.cat.remove_unused_categories() if isinstance(y.dtype, pd.CategoricalDtype) else y
    if recode_target not in ("01", "-1+1"):
        raise ValueError(f"Invalid recode_target='{recode_target}'. Use 'no', '01', '-1+1' or 'drop.levels'.")

    td = task.task_desc
    if td.type is not TaskType.CLASSIF or td.positive is None:
        raise ValueError(f"recode_target='{recode_target}' requires a binary classification task.")
    codes = label_binarize(
        y.astype(str).to_numpy(),
        classes=[td.negative, td.positive],
        neg_label=0 if recode_target == "01" else -1,
        pos_label=1,
    )
    return pd.Series(codes.ravel(), index=y.index, name=y.name)


def get_task_data(
    task: Task,
    subset: RowSubset = None,
    features: Sequence[str] | None = None,
    target_extra: bool = False,
    recode_target: RecodeTarget = "no",
) -> pd.DataFrame | tuple[pd.DataFrame, pd.Series | pd.DataFrame]:
    """Return a copy of the task data.

    Args:
        task: Task to read from.
        subset: Rows as slice, integer positions or boolean mask (default: all).
        features: Feature columns to keep. ``None`` keeps every column of the data
            (features, targets and coordinates).
        target_extra: Return ``(features, target)`` instead of one frame.
        recode_target: Target recoding for binary classification, see :func:`get_task_targets`.

    Returns:
        DataFrame, or a tuple of feature frame and target (Series for a single
        target, DataFrame for several) if ``target_extra``.
    """
    rows = task._data.iloc[_row_positions(task, subset)]
    selected = _select_features(task, features)

    if target_extra:
        if not task.target:
            raise ValueError("Task has no target; use target_extra=False.")
        return rows.loc[:, selected].copy(), _targets(task, rows, recode_target)

    if features is None:
        frame = rows.copy()
    else:
        keep = set(selected) | set(task.target)
        frame = rows.loc[:, [col for col in rows.columns if col in keep]].copy()
    if recode_target != "no" and task.target:
        for col in task.target:
            frame[col] = _recode(task, frame[col], recode_target)
    return frame


def _targets(task: Task, rows: pd.DataFrame, recode_target: RecodeTarget) -> pd.Series | pd.DataFrame:
    if len(task.target) == 1:
        return _recode(task, rows[task.target[0]].copy(), recode_target)
    return rows.loc[:, list(task.target)].copy()


def get_task_targets(task: Task, subset: RowSubset = None, recode_target: RecodeTarget = "no") -> pd.Series | pd.DataFrame:
    """Return the target values.

    Args:
        task: Task with at least one target column.
        subset: Rows as slice, integer positions or boolean mask.
        recode_target: ``"no"``, ``"drop.levels"``, ``"01"`` or ``"-1+1"``
            (the last two for binary classification only).

    Returns:
        Series for a single target, DataFrame for survival and multilabel tasks.

    Raises:
        ValueError: If the task has no target.
    """
    if not task.target:
        raise ValueError(f"Task of type '{task.type.value}' has no target.")
    rows = task._data.iloc[_row_positions(task, subset)]
    return _targets(task, rows, recode_target)


def _formula_term(name: str) -> str:
    return name if name.isidentifier() else f'Q("{name}")'


def get_task_formula(task: Task) -> str:
    """Return a model formula ``target ~ feature_1 + feature_2 + ...``.

    Survival targets are written as ``Surv(time, event)``, multilabel targets
    are joined with ``+``. Names that are no valid identifiers are quoted with
    ``Q("...")`` as understood by formula front ends such as statsmodels.

    Raises:
        ValueError: If the task has no target.
    """
    if not task.target:
        raise ValueError(f"Task of type '{task.type.value}' has no target, no formula available.")
    terms = [_formula_term(col) for col in task.target]
    lhs = f"Surv({', '.join(terms)})" if task.type is TaskType.SURV else " + ".join(terms)
    rhs = " + ".join(_formula_term(col) for col in task.feature_names) or "1"
    return f"{lhs} ~ {rhs}"


def get_task_coordinates(task: Task, subset: RowSubset = None) -> pd.DataFrame:
    """Return the ``x``/``y`` coordinate columns of a spatial task.

    Raises:
        ValueError: If the task is not spatial.
    """
    if not task.spatial:
        raise ValueError("Task is not spatial; create it with spatial=True to reserve 'x'/'y'.")
    return task._data.iloc[_row_positions(task, subset)].loc[:, list(SPATIAL_COORDINATES)].copy()


def get_task_costs(task: Task, subset: RowSubset = None) -> pd.DataFrame | None:
    """Return the cost matrix rows of a cost-sensitive task (``None`` otherwise)."""
    if task._costs is None:
        return None
    return task._costs.iloc[_row_positions(task, subset)].copy()


def subset_task(task: Task, subset: RowSubset = None, features: Sequence[str] | None = None) -> Task:
    """Return a new task restricted to the given rows and features.

    Weights, blocking and costs are subset alongside the data. Targets and
    reserved coordinates are always kept. A described task yields a described
    task with the same id and class information.
    """
    positions = _row_positions(task, subset)
    keep = set(_select_features(task, features)) | set(task.target)
    if task.spatial:
        keep.update(SPATIAL_COORDINATES)
    data = task._data.iloc[positions].loc[:, [col for col in task.column_names if col in keep]].copy()

    weights = None
    if task._weights is not None:
        weights = task._weights[positions]
        weights.setflags(write=False)

    subtask = Task(
        task.type,
        data,
        weights=weights,
        blocking=None if task._blocking is None else task._blocking[positions],
        target=task.target,
        spatial=task.spatial,
        costs=None if task._costs is None else task._costs.iloc[positions].copy(),
    )
    if not task.is_described:
        return subtask
    td = task.task_desc
    return describe_task(subtask, td.id, class_levels=td.class_levels, positive=td.positive, negative=td.negative)


__all__ = [
    "get_task_coordinates",
    "get_task_costs",
    "get_task_data",
    "get_task_feature_names",
    "get_task_formula",
    "get_task_n_feats",
    "get_task_size",
    "get_task_target_names",
    "get_task_targets",
    "subset_task",
]
