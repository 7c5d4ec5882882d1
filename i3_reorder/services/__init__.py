"""Workspace grouping, target resolution, rename sequencing and command driving."""

from .command_driver import CommandDriver, CommandRecord
from .grouping import group
from .rename_sequencer import (
    RenameSequencer,
    WorkspaceLayout,
    plan_collapse,
    plan_shift_for_zero,
    plan_swap,
    scratch_id,
)
from .reorder import ReorderResult, WorkspaceReorderer
from .target_resolver import resolve

__all__ = [
    "CommandDriver",
    "CommandRecord",
    "RenameSequencer",
    "ReorderResult",
    "WorkspaceLayout",
    "WorkspaceReorderer",
    "group",
    "plan_collapse",
    "plan_shift_for_zero",
    "plan_swap",
    "resolve",
    "scratch_id",
]
