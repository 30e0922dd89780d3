"""Automatic cleanup of empty factor levels before task validation."""

from __future__ import annotations

import logging
import warnings
from enum import StrEnum

import pandas as pd

from task_tlbx.errors import TaskDataWarning, find_stack_level

from .columns import has_empty_levels


logger = logging.getLogger(__name__)


class FixupPolicy(StrEnum):
    """Strategy for cleaning structural defects in the input data."""

    SKIP = "no"
    QUIET = "quiet"
    WARN = "warn"

    @classmethod
    def parse(cls, value: "FixupPolicy | str") -> "FixupPolicy":
        """Convert a user supplied value into a policy.

        Raises:
            ValueError: If ``value`` is not one of ``"no"``, ``"quiet"``, ``"warn"``.
        """
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(repr(p.value) for p in cls)
            raise ValueError(f"Invalid fixup_data={value!r}. Use one of {allowed}.") from None


def drop_empty_levels(df: pd.DataFrame) -> tuple[pd.DataFrame, list[str]]:
    """Remove unused categories from every categorical column.

    Row values stay the same, only the category universe shrinks.

    Returns:
        Tuple of the cleaned DataFrame (a new object) and the names of the
        columns that were changed, in column order.
    """
    dropped = [col for col in df.columns if has_empty_levels(df[col])]
    if not dropped:
        return df, dropped
    cleaned = df.copy(deep=False)
    for col in dropped:
        cleaned[col] = df[col].cat.remove_unused_categories()
    return cleaned, dropped


def fixup_data(df: pd.DataFrame, policy: FixupPolicy | str = FixupPolicy.WARN) -> pd.DataFrame:
    """Apply a :class:`FixupPolicy` to ``df``.

    With ``"warn"`` a single :class:`TaskDataWarning` lists all affected columns.

    Args:
        df: Input data (not modified).
        policy: Cleanup policy.

    Returns:
        The cleaned DataFrame, or ``df`` itself when nothing had to change.
    """
    policy = FixupPolicy.parse(policy)
    if policy is FixupPolicy.SKIP:
        return df

    cleaned, dropped = drop_empty_levels(df)
    if dropped:
        logger.debug("Dropped empty levels in %d categorical column(s): %s", len(dropped), dropped)
        if policy is FixupPolicy.WARN:
            warnings.warn(
                f"Empty factor levels were dropped for columns: {', '.join(dropped)}",
                TaskDataWarning,
                stacklevel=find_stack_level(),
            )
    return cleaned


__all__ = ["FixupPolicy", "drop_empty_levels", "fixup_data"]
