"""Task value object binding a dataset to a learning objective."""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd


if TYPE_CHECKING:
    from .task_desc import TaskDesc


SPATIAL_COORDINATES: tuple[str, str] = ("x", "y")
"""Column names reserved as coordinates in spatial tasks."""


class TaskType(StrEnum):
    """Learning objective a task is built for."""

    CLASSIF = "classif"
    REGR = "regr"
    SURV = "surv"
    COSTSENS = "costsens"
    CLUSTER = "cluster"
    MULTILABEL = "multilabel"


class Task:
    """Validated, immutable binding of a DataFrame to a :class:`TaskType`.

    Instances are created by :func:`task_tlbx.task.builder.make_task` or one of the
    typed constructors in :mod:`task_tlbx.task.task_types`; the constructor here
    performs no validation.

    The task owns a private copy of its data. :attr:`data` hands out a fresh copy
    on every access, so nothing a caller does to a returned frame reaches the task.

    Lifecycle of the description:
        A freshly built task is *undescribed* (:attr:`is_described` is False).
        :func:`task_tlbx.task.task_desc.describe_task` returns a new, *described*
        task that shares the same data. The original task is never mutated.
    """

    __slots__ = ("_blocking", "_costs", "_data", "_spatial", "_target", "_task_desc", "_type", "_weights")

    def __init__(
        self,
        type: TaskType | str,  # noqa: A002
        data: pd.DataFrame,
        *,
        weights: np.ndarray | None = None,
        blocking: pd.Categorical | None = None,
        target: Sequence[str] = (),
        spatial: bool = False,
        costs: pd.DataFrame | None = None,
        task_desc: TaskDesc | None = None,
    ) -> None:
        """Initialize the task.

        Args:
            type: Learning objective.
            data: Owned data. The caller hands it over and must not keep a reference.
            weights: Optional read-only per-observation weights.
            blocking: Optional blocking factor.
            target: Names of the target column(s).
            spatial: Reserve ``x``/``y`` as coordinates.
            costs: Per-observation misclassification costs (cost-sensitive tasks only).
            task_desc: Description record, ``None`` while undescribed.
        """
        self._type = TaskType(type)
        self._data = data
        self._weights = weights
        self._blocking = blocking
        self._target = tuple(target)
        self._spatial = bool(spatial)
        self._costs = costs
        self._task_desc = task_desc

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, "_task_desc"):
            raise AttributeError(f"{type(self).__name__} is immutable; cannot set '{name}'.")
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable; cannot delete '{name}'.")

    @property
    def type(self) -> TaskType:
        """Learning objective of the task."""
        return self._type

    @property
    def data(self) -> pd.DataFrame:
        """Return a copy of the task data."""
        return self._data.copy(deep=True)

    @property
    def weights(self) -> np.ndarray | None:
        """Read-only observation weights, ``None`` meaning equal weights."""
        return self._weights

    @property
    def blocking(self) -> pd.Categorical | None:
        """Copy of the blocking factor, ``None`` if the task has no blocking."""
        return None if self._blocking is None else self._blocking.copy()

    @property
    def costs(self) -> pd.DataFrame | None:
        """Copy of the cost matrix for cost-sensitive tasks."""
        return None if self._costs is None else self._costs.copy(deep=True)

    @property
    def target(self) -> tuple[str, ...]:
        """Names of the target column(s), empty for tasks without target."""
        return self._target

    @property
    def spatial(self) -> bool:
        """True if the ``x``/``y`` columns are reserved as coordinates."""
        return self._spatial

    @property
    def size(self) -> int:
        """Number of observations."""
        return len(self._data)

    @property
    def column_names(self) -> list[str]:
        """All column names in data order."""
        return self._data.columns.to_list()

    @property
    def feature_names(self) -> list[str]:
        """Feature columns: all columns minus targets and reserved coordinates."""
        exclude = set(self._target)
        if self._spatial:
            exclude.update(SPATIAL_COORDINATES)
        return [col for col in self._data.columns if col not in exclude]

    @property
    def has_weights(self) -> bool:
        return self._weights is not None

    @property
    def has_blocking(self) -> bool:
        return self._blocking is not None

    @property
    def is_described(self) -> bool:
        """True once the description collaborator filled :attr:`task_desc`."""
        return self._task_desc is not None

    @property
    def task_desc(self) -> TaskDesc:
        """Get the description record.

        Raises:
            ValueError: If the task has not been described yet.
        """
        if self._task_desc is None:
            raise ValueError("Task not described yet. Use describe_task() to compute the description.")
        return self._task_desc

    def with_task_desc(self, task_desc: TaskDesc) -> Task:
        """Return a described copy of this task sharing the same (immutable) data."""
        return Task(
            self._type,
            self._data,
            weights=self._weights,
            blocking=self._blocking,
            target=self._target,
            spatial=self._spatial,
            costs=self._costs,
            task_desc=task_desc,
        )

    def __repr__(self) -> str:
        desc_id = self._task_desc.id if self._task_desc is not None else None
        return f"Task(type={self._type.value!r}, id={desc_id!r}, size={self.size}, n_features={len(self.feature_names)})"

    def __str__(self) -> str:
        if self._task_desc is None:
            return f"Task (undescribed): type={self._type.value}, observations={self.size}"
        from .display import format_task  # noqa: PLC0415

        return format_task(self)


__all__ = ["SPATIAL_COORDINATES", "Task", "TaskType"]
