"""Human-readable rendering of described tasks."""

from __future__ import annotations

import pandas as pd

from .base_task import Task, TaskType


def format_task(task: Task, print_weights: bool = True) -> str:
    """Render the description record of ``task``.

    Args:
        task: Described task.
        print_weights: Include the ``Has weights`` line.

    Returns:
        Multi-line summary (id, type, observations, feature table, missings,
        weights, blocking, coordinates and class information).

    Raises:
        ValueError: If the task has not been described yet.
    """
    td = task.task_desc
    features = pd.DataFrame([dict(td.n_feat)]).to_string(index=False)
    lines = [
        f"Task: {td.id}",
        f"Type: {td.type.value}",
        f"Observations: {td.size}",
        "Features:",
        features,
        f"Missings: {td.has_missings}",
    ]
    if print_weights:
        lines.append(f"Has weights: {td.has_weights}")
    lines.append(f"Has blocking: {td.has_blocking}")
    lines.append(f"Has coordinates: {td.is_spatial}")
    if td.type in (TaskType.CLASSIF, TaskType.COSTSENS, TaskType.MULTILABEL):
        lines.append(f"Classes: {len(td.class_levels)}")
        lines.append(", ".join(td.class_levels))
    if td.positive is not None:
        lines.append(f"Positive class: {td.positive}")
    return "\n".join(lines)


__all__ = ["format_task"]
