"""Typed task constructors: target handling per learning objective.

Each constructor converts the target where the fixup policy allows it, builds the
task via :func:`task_tlbx.task.builder.make_task`, checks the target(s) and
returns a described :class:`Task`.

Example:
    >>> import pandas as pd
    >>> from task_tlbx.task import make_classif_task
    >>> df = pd.DataFrame({"len": [1.2, 3.4, 2.2, 0.7], "label": ["no", "yes", "yes", "no"]})
    >>> task = make_classif_task(df, target="label", positive="yes", id="toy")
    >>> task.task_desc.class_levels, task.task_desc.negative
    (('no', 'yes'), 'no')
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd
from pandas.api import types as ptypes

from task_tlbx.config import get_task_config
from task_tlbx.data.columns import has_empty_levels, is_categorical, is_numeric
from task_tlbx.data.fixup import FixupPolicy
from task_tlbx.data.validation import numeric_values
from task_tlbx.errors import CostsError, SchemaError, TargetError

from .base_task import Task, TaskType
from .builder import as_task_frame, make_task
from .task_desc import describe_task


def _resolve(fixup_data: FixupPolicy | str | None, check_data: bool | None) -> tuple[FixupPolicy, bool]:
    cfg = get_task_config()
    policy = FixupPolicy.parse(cfg.fixup_data if fixup_data is None else fixup_data)
    return policy, cfg.check_data if check_data is None else check_data


def _require_columns(data: pd.DataFrame, cols: Sequence[str]) -> None:
    unknown = [col for col in cols if col not in data.columns]
    if unknown:
        raise SchemaError(f"Target column(s) not found in data: {unknown}")


def _replace_column(data: pd.DataFrame, col: str, values: pd.Series) -> pd.DataFrame:
    data = data.copy(deep=False)
    data[col] = values
    return data


def _class_levels(y: pd.Series) -> tuple[str, ...]:
    if is_categorical(y):
        return tuple(str(level) for level in y.cat.categories)
    return tuple(str(level) for level in pd.unique(y.dropna()))


def _check_numeric_target(y: pd.Series, name: str, *, lower: float | None = None) -> None:
    if not is_numeric(y):
        raise TargetError(f"Target column '{name}' must be numeric, got {y.dtype}.")
    if y.isna().any():
        raise TargetError(f"Target column '{name}' contains missing values.")
    values = numeric_values(y)
    if not np.isfinite(values).all():
        raise TargetError(f"Target column '{name}' contains non-finite values.")
    if lower is not None and (values < lower).any():
        raise TargetError(f"Target column '{name}' must be >= {lower}.")


def _check_logical_target(y: pd.Series, name: str) -> None:
    if not ptypes.is_bool_dtype(y.dtype):
        raise TargetError(f"Target column '{name}' must be boolean, got {y.dtype}.")
    if y.isna().any():
        raise TargetError(f"Target column '{name}' contains missing values.")


def make_classif_task(
    data: pd.DataFrame,
    target: str,
    *,
    id: str | None = None,  # noqa: A002
    weights: Sequence[float] | np.ndarray | pd.Series | None = None,
    blocking: pd.Categorical | pd.Series | None = None,
    positive: object = None,
    fixup_data: FixupPolicy | str | None = None,
    check_data: bool | None = None,
    spatial: bool | None = None,
) -> Task:
    """Create a classification task.

    With a fixup policy other than ``"no"``, string and boolean targets are
    converted to categoricals first.

    Args:
        data: Features and target.
        target: Name of the categorical target column.
        id: Task identifier (defaults to ``"classif"``).
        weights: Optional non-negative observation weights.
        blocking: Optional blocking factor.
        positive: Positive class for binary problems, defaults to the first level.
            Compared by its string form, so ``1`` or ``True`` match the levels
            of integer or boolean targets. Ignored for more than two classes.
        fixup_data: Cleanup policy for empty factor levels.
        check_data: Validate data and target.
        spatial: Reserve ``x``/``y`` as coordinates.

    Raises:
        TargetError: Target not categorical, with missing values or empty levels,
            or ``positive`` not a class level.
    """
    policy, check = _resolve(fixup_data, check_data)
    data = as_task_frame(data)
    _require_columns(data, [target])

    y = data[target]
    if policy is not FixupPolicy.SKIP and not is_categorical(y):
        if ptypes.is_object_dtype(y.dtype) or ptypes.is_string_dtype(y.dtype) or ptypes.is_bool_dtype(y.dtype):
            data = _replace_column(data, target, y.astype("category"))

    task = make_task(TaskType.CLASSIF, data, weights, blocking, policy, check, spatial, target=(target,))
    y = task._data[target]
    if check:
        if not is_categorical(y):
            raise TargetError(f"Target column '{target}' must be categorical, got {y.dtype}.")
        if y.isna().any():
            raise TargetError(f"Target column '{target}' contains missing values.")
        if has_empty_levels(y):
            raise TargetError(f"Target column '{target}' contains empty factor levels.")

    levels = _class_levels(y)
    negative = None
    if len(levels) == 2:
        if positive is None:
            positive = levels[0]
        elif str(positive) in levels:
            positive = str(positive)
        else:
            raise TargetError(f"Positive class '{positive}' is not a level of '{target}': {list(levels)}")
        negative = levels[1] if positive == levels[0] else levels[0]
    else:
        positive = None
    return describe_task(task, id, class_levels=levels, positive=positive, negative=negative)


def make_regr_task(
    data: pd.DataFrame,
    target: str,
    *,
    id: str | None = None,  # noqa: A002
    weights: Sequence[float] | np.ndarray | pd.Series | None = None,
    blocking: pd.Categorical | pd.Series | None = None,
    fixup_data: FixupPolicy | str | None = None,
    check_data: bool | None = None,
    spatial: bool | None = None,
) -> Task:
    """Create a regression task.

    Integer targets are cast to float unless ``fixup_data="no"``.

    Raises:
        TargetError: Target not numeric, with missing or non-finite values.
    """
    policy, check = _resolve(fixup_data, check_data)
    data = as_task_frame(data)
    _require_columns(data, [target])

    y = data[target]
    if policy is not FixupPolicy.SKIP and ptypes.is_integer_dtype(y.dtype) and not ptypes.is_bool_dtype(y.dtype):
        data = _replace_column(data, target, y.astype("Float64" if ptypes.is_extension_array_dtype(y.dtype) else "float64"))

    task = make_task(TaskType.REGR, data, weights, blocking, policy, check, spatial, target=(target,))
    if check:
        _check_numeric_target(task._data[target], target)
    return describe_task(task, id)


def make_surv_task(
    data: pd.DataFrame,
    target: Sequence[str],
    *,
    id: str | None = None,  # noqa: A002
    weights: Sequence[float] | np.ndarray | pd.Series | None = None,
    blocking: pd.Categorical | pd.Series | None = None,
    fixup_data: FixupPolicy | str | None = None,
    check_data: bool | None = None,
    spatial: bool | None = None,
) -> Task:
    """Create a survival task.

    Args:
        data: Features, survival time and event indicator.
        target: ``(time, event)`` column names. ``time`` must be non-negative and
            finite, ``event`` boolean. A 0/1 integer event column is converted to
            boolean unless ``fixup_data="no"``.

    Raises:
        TargetError: Wrong number of target columns or invalid time/event columns.
    """
    target = tuple(target)
    if len(target) != 2:
        raise TargetError(f"Survival tasks need exactly 2 target columns (time, event), got {list(target)}.")
    policy, check = _resolve(fixup_data, check_data)
    data = as_task_frame(data)
    _require_columns(data, target)

    time_col, event_col = target
    event = data[event_col]
    if (
        policy is not FixupPolicy.SKIP
        and ptypes.is_integer_dtype(event.dtype)
        and not event.isna().any()
        and set(event.unique()) <= {0, 1}
    ):
        data = _replace_column(data, event_col, event.astype(bool))

    task = make_task(TaskType.SURV, data, weights, blocking, policy, check, spatial, target=target)
    if check:
        _check_numeric_target(task._data[time_col], time_col, lower=0)
        _check_logical_target(task._data[event_col], event_col)
    return describe_task(task, id)


def make_cluster_task(
    data: pd.DataFrame,
    *,
    id: str | None = None,  # noqa: A002
    weights: Sequence[float] | np.ndarray | pd.Series | None = None,
    blocking: pd.Categorical | pd.Series | None = None,
    fixup_data: FixupPolicy | str | None = None,
    check_data: bool | None = None,
    spatial: bool | None = None,
) -> Task:
    """Create a cluster task (no target, every non-coordinate column is a feature)."""
    task = make_task(TaskType.CLUSTER, data, weights, blocking, fixup_data, check_data, spatial)
    return describe_task(task, id)


def as_cost_frame(costs: object, n_rows: int, index: pd.Index, *, check: bool = True) -> pd.DataFrame:
    """Convert and validate a cost matrix.

    Unnamed columns (plain arrays or default integer columns) are labelled
    ``y1`` to ``yk``. Entry ``(i, j)`` is the cost of predicting class ``j`` for
    observation ``i``.

    Raises:
        CostsError: Not two-dimensional, no columns, wrong number of rows,
            duplicated names, or (with ``check``) non-numeric, missing or
            non-finite entries.
    """
    if isinstance(costs, pd.DataFrame):
        frame = costs.copy(deep=True)
    elif isinstance(costs, np.ndarray) and costs.ndim == 2:
        frame = pd.DataFrame(costs.copy())
    else:
        raise CostsError(f"Costs must be a DataFrame or a 2-D array, got {type(costs).__name__}.")

    if isinstance(frame.columns, pd.RangeIndex):
        frame.columns = [f"y{i}" for i in range(1, frame.shape[1] + 1)]
    if frame.shape[1] == 0:
        raise CostsError("Costs must have at least one column (class).")
    if len(frame) != n_rows:
        raise CostsError(f"Costs must have {n_rows} rows (number of observations), got {len(frame)}.")
    if not all(isinstance(col, str) and col.strip() for col in frame.columns):
        raise CostsError(f"Cost column names must be non-empty strings, got {frame.columns.to_list()}.")
    if frame.columns.duplicated().any():
        raise CostsError(f"Cost column names must be unique, got {frame.columns.to_list()}.")

    if check:
        non_numeric = [col for col in frame.columns if not is_numeric(frame[col])]
        if non_numeric:
            raise CostsError(f"Cost columns must be numeric: {non_numeric}")
        if frame.isna().any().any():
            raise CostsError("Costs contain missing values.")
        if not np.isfinite(frame.to_numpy(dtype="float64")).all():
            raise CostsError("Costs contain non-finite values.")
    return frame.set_axis(index, axis=0)


def make_costsens_task(
    data: pd.DataFrame,
    costs: pd.DataFrame | np.ndarray,
    *,
    id: str | None = None,  # noqa: A002
    weights: Sequence[float] | np.ndarray | pd.Series | None = None,
    blocking: pd.Categorical | pd.Series | None = None,
    fixup_data: FixupPolicy | str | None = None,
    check_data: bool | None = None,
    spatial: bool | None = None,
) -> Task:
    """Create a cost-sensitive classification task.

    ``weights`` is accepted only to report the conflict: observation weights
    cannot be combined with per-observation costs.

    Raises:
        ConflictError: Weights were passed.
        CostsError: Malformed cost matrix.
    """
    _, check = _resolve(fixup_data, check_data)
    data = as_task_frame(data)
    cost_frame = as_cost_frame(costs, len(data), data.index, check=check) if weights is None else None
    task = make_task(
        TaskType.COSTSENS,
        data,
        weights,
        blocking,
        fixup_data,
        check_data,
        spatial,
        costs=cost_frame,
    )
    return describe_task(task, id, class_levels=tuple(cost_frame.columns))


def make_multilabel_task(
    data: pd.DataFrame,
    target: Sequence[str],
    *,
    id: str | None = None,  # noqa: A002
    weights: Sequence[float] | np.ndarray | pd.Series | None = None,
    blocking: pd.Categorical | pd.Series | None = None,
    fixup_data: FixupPolicy | str | None = None,
    check_data: bool | None = None,
    spatial: bool | None = None,
) -> Task:
    """Create a multilabel classification task.

    The presence of each label is encoded in a boolean column named after the
    label; ``target`` lists these columns.

    Raises:
        TargetError: Fewer than two labels or a label column that is not boolean.
    """
    target = tuple(target)
    if len(target) < 2:
        raise TargetError(f"Multilabel tasks need at least 2 label columns, got {list(target)}.")
    _, check = _resolve(fixup_data, check_data)
    task = make_task(TaskType.MULTILABEL, data, weights, blocking, fixup_data, check_data, spatial, target=target)
    if check:
        for col in target:
            _check_logical_target(task._data[col], col)
    return describe_task(task, id, class_levels=target)


__all__ = [
    "as_cost_frame",
    "make_classif_task",
    "make_cluster_task",
    "make_costsens_task",
    "make_multilabel_task",
    "make_regr_task",
    "make_surv_task",
]
