"""Data module for column kinds, fixup and validation of task data."""

from .columns import ColumnInfo, ColumnKind, column_kind, describe_columns, has_empty_levels
from .fixup import FixupPolicy, drop_empty_levels, fixup_data
from .validation import check_task_data


__all__ = [
    "ColumnInfo",
    "ColumnKind",
    "FixupPolicy",
    "check_task_data",
    "column_kind",
    "describe_columns",
    "drop_empty_levels",
    "fixup_data",
    "has_empty_levels",
]
