"""
Data models for i3-reorder.

Workspace and WorkspaceSnapshot are pydantic models built from i3ipc
GET_WORKSPACES replies. MonitorGroup is an invariant-checked wrapper around
the id-ordered workspaces of one output.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, Optional

from pydantic import BaseModel, Field, model_validator


# Enumerations

class Intent(str, Enum):
    """Navigation/reorder intent selected on the command line."""
    NEXT = "next"
    PREVIOUS = "previous"
    JUMP_TO_START = "start"
    JUMP_TO_END = "end"
    NEAREST_OTHER_MONITOR = "monitor"
    COLLAPSE = "collapse"


class Action(str, Enum):
    """What to do once a target workspace is resolved."""
    FOCUS_ONLY = "focus"
    MOVE_FOCUSED_WINDOW = "window"
    MOVE_WORKSPACE = "workspace"
    MOVE_WORKSPACE_ACROSS_MONITOR = "workspace_across_monitor"


# Core Entities

class Workspace(BaseModel):
    """One i3/sway workspace as reported by GET_WORKSPACES."""

    id: int = Field(..., description="Workspace number, unique at any instant")
    display_name: str = Field(..., description="Workspace name")
    output: str = Field(..., description="Output (monitor) the workspace lives on")
    is_visible: bool = Field(False, description="Shown on its output")
    is_focused: bool = Field(False, description="Holds input focus")

    @classmethod
    def from_i3(cls, reply: Any) -> "Workspace":
        """Build from an i3ipc WorkspaceReply."""
        return cls(
            id=reply.num,
            display_name=reply.name,
            output=reply.output,
            is_visible=bool(reply.visible),
            is_focused=bool(reply.focused),
        )


class SnapshotError(ValueError):
    """Workspace list violates a global invariant."""


class WorkspaceSnapshot(BaseModel):
    """Point-in-time copy of all workspaces, sorted ascending by id."""

    workspaces: List[Workspace] = Field(..., min_length=1)

    @model_validator(mode='after')
    def validate_invariants(self):
        """Sort by id and check uniqueness, focus and visibility invariants."""
        self.workspaces.sort(key=lambda ws: ws.id)

        seen = set()
        for ws in self.workspaces:
            if ws.id in seen:
                raise SnapshotError(f"Duplicate workspace id {ws.id}")
            seen.add(ws.id)

        focused = [ws.id for ws in self.workspaces if ws.is_focused]
        if len(focused) != 1:
            raise SnapshotError(f"Expected exactly one focused workspace, found {len(focused)}")

        visible_outputs = set()
        for ws in self.workspaces:
            if not ws.is_visible:
                continue
            if ws.output in visible_outputs:
                raise SnapshotError(f"More than one visible workspace on output {ws.output}")
            visible_outputs.add(ws.output)

        return self

    @property
    def focused(self) -> Workspace:
        return next(ws for ws in self.workspaces if ws.is_focused)

    @property
    def ids(self) -> List[int]:
        return [ws.id for ws in self.workspaces]

    @property
    def min_id(self) -> int:
        return self.workspaces[0].id

    @property
    def max_id(self) -> int:
        return self.workspaces[-1].id


class MonitorGroup:
    """Workspaces of one output, kept in ascending id order.

    Ids are only changed through renumber(), which restores the ordering
    before anything else can read the group.

    Example:
        group = MonitorGroup("DP-1", [ws3, ws1, ws7])
        group.ids               # [1, 3, 7]
        group.renumber(7, 0)
        group.ids               # [0, 1, 3]
    """

    def __init__(self, output: str, workspaces: List[Workspace]):
        self.output = output
        self._workspaces: List[Workspace] = []

        for ws in workspaces:
            if ws.output != output:
                raise SnapshotError(
                    f"Workspace {ws.id} is on output {ws.output}, not {output}"
                )
            if any(existing.id == ws.id for existing in self._workspaces):
                raise SnapshotError(f"Duplicate workspace id {ws.id} on output {output}")
            self._workspaces.append(ws)

        self._sort()

    def _sort(self) -> None:
        self._workspaces.sort(key=lambda ws: ws.id)

    def __iter__(self) -> Iterator[Workspace]:
        return iter(list(self._workspaces))

    def __len__(self) -> int:
        return len(self._workspaces)

    def __getitem__(self, index: int) -> Workspace:
        return self._workspaces[index]

    def __contains__(self, workspace_id: object) -> bool:
        return any(ws.id == workspace_id for ws in self._workspaces)

    def __repr__(self) -> str:
        return f"MonitorGroup({self.output!r}, ids={self.ids})"

    @property
    def ids(self) -> List[int]:
        return [ws.id for ws in self._workspaces]

    @property
    def first(self) -> Workspace:
        return self._workspaces[0]

    @property
    def last(self) -> Workspace:
        return self._workspaces[-1]

    def index_of(self, workspace_id: int) -> int:
        """Position of workspace_id in ascending order.

        Raises:
            KeyError: If the id is not on this output
        """
        for index, ws in enumerate(self._workspaces):
            if ws.id == workspace_id:
                return index
        raise KeyError(workspace_id)

    def add(self, ws: Workspace) -> None:
        """Insert a workspace created after the group was built.

        Raises:
            SnapshotError: If it belongs to another output or its id is taken
        """
        if ws.output != self.output:
            raise SnapshotError(f"Workspace {ws.id} is on output {ws.output}, not {self.output}")
        if ws.id in self:
            raise SnapshotError(f"Workspace id {ws.id} already used on output {self.output}")
        self._workspaces.append(ws)
        self._sort()

    def renumber(self, old_id: int, new_id: int) -> Workspace:
        """Change a member's id and re-sort.

        Raises:
            KeyError: If old_id is not on this output
            SnapshotError: If new_id is already used on this output
        """
        if old_id == new_id:
            return self._workspaces[self.index_of(old_id)]
        if new_id in self:
            raise SnapshotError(f"Workspace id {new_id} already used on output {self.output}")

        ws = self._workspaces[self.index_of(old_id)]
        ws.id = new_id
        self._sort()
        return ws


@dataclass(frozen=True)
class RenameStep:
    """A single rename command: workspace old_id becomes new_id."""

    old_id: int
    new_id: int

    def __str__(self) -> str:
        return f"{self.old_id} -> {self.new_id}"


@dataclass(frozen=True)
class ReorderRequest:
    """Validated combination of command-line flags.

    Attributes:
        direction: At most one of the directional intents
        monitor: Navigate to the visible workspace of another output
        window: Move the focused window along with the focus
        workspace: Swap the focused workspace with the target
        collapse: Renumber every output densely from 0 afterwards
        dry_run: Plan and report commands without sending them
    """

    direction: Optional[Intent] = None
    monitor: bool = False
    window: bool = False
    workspace: bool = False
    collapse: bool = False
    dry_run: bool = False

    @property
    def intent(self) -> Optional[Intent]:
        """Intent used to resolve the target.

        Jumps take precedence over monitor navigation, which takes precedence
        over next/previous.
        """
        if self.direction in (Intent.JUMP_TO_START, Intent.JUMP_TO_END):
            return self.direction
        if self.monitor:
            return Intent.NEAREST_OTHER_MONITOR
        return self.direction

    @property
    def action(self) -> Action:
        if self.window:
            return Action.MOVE_FOCUSED_WINDOW
        if self.workspace:
            if self.monitor:
                return Action.MOVE_WORKSPACE_ACROSS_MONITOR
            return Action.MOVE_WORKSPACE
        return Action.FOCUS_ONLY
