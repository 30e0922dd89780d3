"""Description record of a task and the collaborator that computes it."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from task_tlbx.data.columns import ColumnKind, describe_columns

from .base_task import Task, TaskType


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskDesc:
    """Read-only summary of a validated task.

    Attributes:
        id: Identifier of the task.
        type: Learning objective.
        target: Target column name(s).
        size: Number of observations.
        n_feat: Feature counts per kind (``numerics``, ``factors``, ``ordered``).
        has_missings: Any missing value in the feature columns.
        has_weights: Observation weights present.
        has_blocking: Blocking factor present.
        is_spatial: ``x``/``y`` reserved as coordinates.
        class_levels: Class labels (classification: target levels, cost-sensitive:
            cost columns, multilabel: target names); empty otherwise.
        positive: Positive class for binary classification.
        negative: Negative class for binary classification.
    """

    id: str
    type: TaskType
    target: tuple[str, ...]
    size: int
    n_feat: Mapping[str, int]
    has_missings: bool
    has_weights: bool
    has_blocking: bool
    is_spatial: bool = False
    class_levels: tuple[str, ...] = field(default_factory=tuple)
    positive: str | None = None
    negative: str | None = None


def count_feature_kinds(task: Task) -> dict[str, int]:
    """Tally feature columns as ``numerics``, ``factors`` (unordered) and ``ordered``."""
    counts = {"numerics": 0, "factors": 0, "ordered": 0}
    for info in describe_columns(task._data, task.feature_names):
        if info.kind is ColumnKind.NUMERIC:
            counts["numerics"] += 1
        elif info.kind is ColumnKind.CATEGORICAL:
            counts["ordered" if info.ordered else "factors"] += 1
    return counts


def make_task_desc(
    task: Task,
    id: str | None = None,  # noqa: A002
    *,
    class_levels: tuple[str, ...] = (),
    positive: str | None = None,
    negative: str | None = None,
) -> TaskDesc:
    """Compute the description record of ``task``.

    Args:
        task: Validated task.
        id: Task identifier (defaults to the task type).
        class_levels: Class labels for classification-like tasks.
        positive: Positive class (binary classification only).
        negative: Negative class (binary classification only).

    Returns:
        Frozen :class:`TaskDesc`.
    """
    features = task.feature_names
    has_missings = bool(task._data[features].isna().any().any()) if features else False
    return TaskDesc(
        id=id or task.type.value,
        type=task.type,
        target=task.target,
        size=task.size,
        n_feat=count_feature_kinds(task),
        has_missings=has_missings,
        has_weights=task.has_weights,
        has_blocking=task.has_blocking,
        is_spatial=task.spatial,
        class_levels=tuple(class_levels),
        positive=positive,
        negative=negative,
    )


def describe_task(task: Task, id: str | None = None, **desc_kwargs: object) -> Task:  # noqa: A002
    """Return a described copy of ``task``.

    Extra keyword arguments are forwarded to :func:`make_task_desc`.
    """
    desc = make_task_desc(task, id, **desc_kwargs)
    logger.debug("Described task '%s': %d observations, features %s", desc.id, desc.size, dict(desc.n_feat))
    return task.with_task_desc(desc)


__all__ = ["TaskDesc", "count_feature_kinds", "describe_task", "make_task_desc"]
