"""Exceptions and warnings raised while building learning tasks."""

from __future__ import annotations

import inspect
import os


class TaskError(ValueError):
    """Base class for every task construction failure."""


class SchemaError(TaskError):
    """Input table is not a DataFrame or its column names are malformed."""


class WeightsError(TaskError):
    """Observation weights have the wrong length or contain missing/negative values."""


class BlockingError(TaskError):
    """Blocking factor has the wrong length, type or contains missing values."""


class ConflictError(TaskError):
    """Two task arguments cannot be combined (e.g. weights for cost-sensitive tasks)."""


class SpatialConfigError(TaskError):
    """Spatial task requested but the coordinate columns ``x``/``y`` are missing."""


class TargetError(TaskError):
    """Target column(s) do not satisfy the requirements of the task type."""


class CostsError(TaskError):
    """Cost matrix of a cost-sensitive task is malformed."""


class ColumnCheckError(TaskError):
    """A single feature column failed validation.

    Attributes:
        column: Name of the offending column.
    """

    def __init__(self, column: str, message: str) -> None:
        super().__init__(message)
        self.column = column


class InfiniteValueError(ColumnCheckError):
    """Numeric column contains ``inf`` or ``-inf``."""

    def __init__(self, column: str) -> None:
        super().__init__(column, f"Column '{column}' contains infinite values.")


class NaNValueError(ColumnCheckError):
    """Numeric column contains NaN values."""

    def __init__(self, column: str) -> None:
        super().__init__(column, f"Column '{column}' contains NaN values.")


class EmptyLevelError(ColumnCheckError):
    """Categorical column declares a category that is never observed."""

    def __init__(self, column: str) -> None:
        super().__init__(column, f"Column '{column}' contains empty factor levels.")


class UnsupportedTypeError(ColumnCheckError, SchemaError, TypeError):
    """Column is neither numeric nor categorical.

    Attributes:
        column: Name of the offending column.
        dtype: String representation of the observed dtype.
    """

    def __init__(self, column: str, dtype: str) -> None:
        super().__init__(column, f"Unsupported feature type ({dtype}) in column '{column}'.")
        self.dtype = dtype


class TaskDataWarning(UserWarning):
    """Advisory raised when the input data was modified during task construction."""


def find_stack_level() -> int:
    """Return the ``stacklevel`` that points ``warnings.warn`` at the first caller outside this package."""
    pkg_dir = os.path.dirname(__file__) + os.sep
    frame = inspect.currentframe()
    level = 0
    while frame is not None and frame.f_code.co_filename.startswith(pkg_dir):
        frame = frame.f_back
        level += 1
    return level


__all__ = [
    "BlockingError",
    "ColumnCheckError",
    "ConflictError",
    "CostsError",
    "EmptyLevelError",
    "InfiniteValueError",
    "NaNValueError",
    "SchemaError",
    "SpatialConfigError",
    "TargetError",
    "TaskDataWarning",
    "TaskError",
    "UnsupportedTypeError",
    "WeightsError",
    "find_stack_level",
]
