"""Task module: the Task value, its builder, typed constructors and accessors."""

from .accessors import (
    get_task_coordinates,
    get_task_costs,
    get_task_data,
    get_task_feature_names,
    get_task_formula,
    get_task_n_feats,
    get_task_size,
    get_task_target_names,
    get_task_targets,
    subset_task,
)
from .base_task import SPATIAL_COORDINATES, Task, TaskType
from .builder import make_task
from .display import format_task
from .task_desc import TaskDesc, describe_task, make_task_desc
from .task_types import (
    make_classif_task,
    make_cluster_task,
    make_costsens_task,
    make_multilabel_task,
    make_regr_task,
    make_surv_task,
)


__all__ = [
    "SPATIAL_COORDINATES",
    "Task",
    "TaskDesc",
    "TaskType",
    "describe_task",
    "format_task",
    "get_task_coordinates",
    "get_task_costs",
    "get_task_data",
    "get_task_feature_names",
    "get_task_formula",
    "get_task_n_feats",
    "get_task_size",
    "get_task_target_names",
    "get_task_targets",
    "make_classif_task",
    "make_cluster_task",
    "make_costsens_task",
    "make_multilabel_task",
    "make_regr_task",
    "make_surv_task",
    "make_task",
    "make_task_desc",
    "subset_task",
]
