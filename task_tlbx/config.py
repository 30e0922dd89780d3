"""Shared task construction defaults (fixup policy, data checks, spatial mode)."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass

from task_tlbx.data.fixup import FixupPolicy


@dataclass(frozen=True)
class TaskConfig:
    """Reusable construction defaults that can be activated for a block of code.

    Attributes:
        fixup_data: How empty factor levels are cleaned before validation.
            ``"no"`` keeps the data untouched, ``"quiet"`` drops them silently and
            ``"warn"`` drops them and emits one aggregated warning.
        check_data: Run the structural checks on weights, blocking and features.
            Turning this off trades safety for speed.
        spatial: Reserve the ``x``/``y`` columns as coordinates.
    """

    fixup_data: FixupPolicy | str = FixupPolicy.WARN
    check_data: bool = True
    spatial: bool = False

    def __post_init__(self) -> None:
        # Normalise strings to the enum so lookups downstream are uniform.
        object.__setattr__(self, "fixup_data", FixupPolicy.parse(self.fixup_data))

    @contextmanager
    def apply(self) -> Generator[None]:
        """Activate this config within a context, restoring the previous one afterwards."""
        global _active_cfg
        prev = _active_cfg
        _active_cfg = self
        try:
            yield
        finally:
            _active_cfg = prev


# Default configuration used by all task constructors
DEFAULT_TASK_CFG = TaskConfig()

_active_cfg: TaskConfig = DEFAULT_TASK_CFG


def get_task_config() -> TaskConfig:
    """Return the currently active construction defaults."""
    return _active_cfg


__all__ = ["DEFAULT_TASK_CFG", "TaskConfig", "get_task_config"]
