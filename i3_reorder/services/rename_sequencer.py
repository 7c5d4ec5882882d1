"""Collision-free workspace renumbering.

i3 and sway refuse to let two workspaces share a number, and the only way to
change a number is a single rename. Every reordering is therefore planned as a
list of RenameStep values that never produces a duplicate id after any prefix
of the list, then executed one command at a time.

Planning is pure: the plan_* functions apply each step to a WorkspaceLayout
(the tracked copy of the remote state) and return the steps. WorkspaceLayout
refuses any step that would collide or that names a missing workspace, so an
unsafe plan fails before a single command is sent.

Concurrent renames by other clients are not guarded against. The scratch id
margin only makes a clash with a freshly created workspace less likely.
"""

import logging
from typing import Dict, List, Optional

from ..core.config import DEFAULT_SCRATCH_MARGIN
from ..errors import CommandError, SequencingError
from ..models import MonitorGroup, RenameStep, SnapshotError, Workspace, WorkspaceSnapshot
from .command_driver import CommandDriver
from .grouping import group

logger = logging.getLogger(__name__)


class WorkspaceLayout:
    """Tracked workspace ids across all outputs.

    Wraps the per-output MonitorGroups and an id -> group index. All id
    changes go through apply(), which keeps both in step.
    """

    def __init__(self, grouping: Dict[str, MonitorGroup]):
        self.groups = grouping
        self._owner: Dict[int, MonitorGroup] = {}

        for monitor in grouping.values():
            for ws in monitor:
                if ws.id in self._owner:
                    raise SnapshotError(f"Duplicate workspace id {ws.id}")
                self._owner[ws.id] = monitor

    @classmethod
    def from_snapshot(cls, snapshot: WorkspaceSnapshot) -> "WorkspaceLayout":
        return cls(group(snapshot))

    @property
    def ids(self) -> List[int]:
        return sorted(self._owner)

    @property
    def max_id(self) -> int:
        return max(self._owner)

    def occupied(self, workspace_id: int) -> bool:
        return workspace_id in self._owner

    def workspace(self, workspace_id: int) -> Workspace:
        monitor = self._owner[workspace_id]
        return monitor[monitor.index_of(workspace_id)]

    def apply(self, step: RenameStep) -> None:
        """Apply one rename to the tracked state.

        Raises:
            SequencingError: If old_id does not exist or new_id is taken
        """
        if step.old_id not in self._owner:
            raise SequencingError(
                f"Cannot rename workspace {step.old_id}: it does not exist",
                step.old_id,
                step.new_id,
            )
        if step.new_id in self._owner:
            raise SequencingError(
                f"Cannot rename workspace {step.old_id} to {step.new_id}: id already in use",
                step.old_id,
                step.new_id,
            )

        monitor = self._owner.pop(step.old_id)
        monitor.renumber(step.old_id, step.new_id)
        self._owner[step.new_id] = monitor

    def track_created(self, workspace_id: int, output: str) -> Workspace:
        """Record a workspace that focus or move brought into existence.

        Raises:
            SequencingError: If the id is already tracked
        """
        if workspace_id in self._owner:
            raise SequencingError(
                f"Cannot create workspace {workspace_id}: id already in use",
                workspace_id,
                workspace_id,
            )

        monitor = self.groups.get(output)
        if monitor is None:
            monitor = self.groups[output] = MonitorGroup(output, [])
        ws = Workspace(id=workspace_id, display_name=str(workspace_id), output=output)
        monitor.add(ws)
        self._owner[workspace_id] = monitor
        return ws

    def to_snapshot(self) -> WorkspaceSnapshot:
        """Snapshot of the tracked state (copies)."""
        return WorkspaceSnapshot(
            workspaces=[ws.model_copy() for monitor in self.groups.values() for ws in monitor]
        )


def scratch_id(layout: WorkspaceLayout, margin: int = DEFAULT_SCRATCH_MARGIN) -> int:
    """Temporary id strictly above every tracked id."""
    if margin < 1:
        raise ValueError(f"Scratch margin must be at least 1, got {margin}")
    return layout.max_id + margin


def plan_swap(
    layout: WorkspaceLayout,
    source: int,
    target: int,
    margin: int = DEFAULT_SCRATCH_MARGIN,
) -> List[RenameStep]:
    """Exchange the ids of workspaces source and target.

    Three renames through a scratch id: target -> scratch, source -> target,
    scratch -> source. When target is unused a single rename moves source
    there. source == target is a no-op.
    """
    if source == target:
        return []

    if layout.occupied(target):
        unique = scratch_id(layout, margin)
        steps = [
            RenameStep(target, unique),
            RenameStep(source, target),
            RenameStep(unique, source),
        ]
    else:
        steps = [RenameStep(source, target)]

    for step in steps:
        layout.apply(step)
    return steps


def plan_shift_for_zero(layout: WorkspaceLayout) -> List[RenameStep]:
    """Free id 0 by moving every workspace of its output up one slot.

    Walks the output holding id 0 from the highest id down. The highest
    workspace moves to the next free id above it; each other workspace moves
    into the id its successor just vacated. Descending order guarantees every
    destination is free when the rename runs.

    Example:
        ids [0, 2, 5] on one output become [2, 5, 6]
    """
    steps: List[RenameStep] = []

    for monitor in layout.groups.values():
        if 0 not in monitor:
            continue

        members = list(monitor)
        next_id = members[-1].id + 1
        # Another output may own the id right above this one
        while layout.occupied(next_id):
            next_id += 1

        for ws in reversed(members):
            old_id = ws.id
            step = RenameStep(old_id, next_id)
            layout.apply(step)
            steps.append(step)
            next_id = old_id

    return steps


def plan_collapse(layout: WorkspaceLayout, margin: int = DEFAULT_SCRATCH_MARGIN) -> List[RenameStep]:
    """Renumber each output densely while keeping relative order per output.

    One counter runs from 0 across all outputs. Members are visited in the
    order captured before the first rename, so a workspace displaced by an
    earlier swap is still visited in its original position.
    """
    steps: List[RenameStep] = []
    visiting_order = [list(monitor) for monitor in layout.groups.values()]

    counter = 0
    for members in visiting_order:
        for ws in members:
            if ws.id != counter:
                steps.extend(plan_swap(layout, ws.id, counter, margin))
            counter += 1

    return steps


class RenameSequencer:
    """Plan renames against a tracked layout and drive them one by one.

    The first failing command aborts the rest. Already applied renames are
    not rolled back and nothing is retried; the error context records how far
    the sequence got.
    """

    def __init__(
        self,
        driver: CommandDriver,
        layout: WorkspaceLayout,
        scratch_margin: int = DEFAULT_SCRATCH_MARGIN,
    ):
        self.driver = driver
        self.layout = layout
        self.scratch_margin = scratch_margin

    def execute(self, steps: List[RenameStep], phase: Optional[str] = None) -> None:
        """Send each rename and wait for it before sending the next."""
        for index, step in enumerate(steps):
            try:
                self.driver.rename(step.old_id, step.new_id)
            except CommandError as e:
                e.context["applied_steps"] = index
                e.context["total_steps"] = len(steps)
                if phase:
                    e.context["phase"] = phase
                logger.error(
                    f"Rename {step} failed after {index}/{len(steps)} steps; "
                    f"workspaces may be partially renumbered"
                )
                raise

    def swap(self, source: int, target: int) -> List[RenameStep]:
        """Exchange the positions of two workspaces."""
        steps = plan_swap(self.layout, source, target, self.scratch_margin)
        logger.debug(f"Swap {source} <-> {target}: {', '.join(str(s) for s in steps) or 'no-op'}")
        self.execute(steps, phase="swap")
        return steps

    def shift_for_zero(self) -> List[RenameStep]:
        """Make id 0 available on the output that currently holds it."""
        steps = plan_shift_for_zero(self.layout)
        logger.info(f"Shifting workspaces up to free id 0 ({len(steps)} renames)")
        self.execute(steps, phase="shift_for_zero")
        return steps

    def collapse(self) -> List[RenameStep]:
        """Renumber all outputs to a dense range starting at 0."""
        steps = plan_collapse(self.layout, self.scratch_margin)
        logger.info(f"Collapsing workspaces ({len(steps)} renames)")
        self.execute(steps, phase="collapse")
        return steps
