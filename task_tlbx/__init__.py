"""Learning task container: bind a DataFrame to a learning objective and validate it."""

from .config import DEFAULT_TASK_CFG, TaskConfig, get_task_config
from .data import FixupPolicy, check_task_data
from .errors import TaskDataWarning, TaskError
from .task import (
    Task,
    TaskDesc,
    TaskType,
    describe_task,
    make_classif_task,
    make_cluster_task,
    make_costsens_task,
    make_multilabel_task,
    make_regr_task,
    make_surv_task,
    make_task,
)


__all__ = [
    "DEFAULT_TASK_CFG",
    "FixupPolicy",
    "Task",
    "TaskConfig",
    "TaskDataWarning",
    "TaskDesc",
    "TaskError",
    "TaskType",
    "check_task_data",
    "describe_task",
    "get_task_config",
    "make_classif_task",
    "make_cluster_task",
    "make_costsens_task",
    "make_multilabel_task",
    "make_regr_task",
    "make_surv_task",
    "make_task",
]
