"""Pytest configuration and fixtures for i3-reorder tests."""

import re
import sys
from pathlib import Path
from typing import Dict, List, Optional
from unittest.mock import Mock

import pytest

# Make the package importable without installation
package_root = Path(__file__).parent.parent
if str(package_root) not in sys.path:
    sys.path.insert(0, str(package_root))

from i3_reorder.errors import CommandError  # noqa: E402
from i3_reorder.models import Workspace, WorkspaceSnapshot  # noqa: E402


FOCUS_RE = re.compile(r'^workspace (-?\d+)$')
MOVE_RE = re.compile(r'^move container to workspace "(-?\d+)"$')
RENAME_RE = re.compile(r'^rename workspace "(-?\d+)" to "(-?\d+)"$')


def build_workspaces(
    outputs: Dict[str, List[int]],
    focused: int,
    visible: Optional[List[int]] = None,
) -> List[Workspace]:
    """Workspaces for an {output: [ids]} layout.

    Unless given, the visible workspaces are the focused one plus the first
    workspace of every other output.
    """
    if visible is None:
        visible = []
        for ids in outputs.values():
            visible.append(focused if focused in ids else ids[0])

    return [
        Workspace(
            id=ws_id,
            display_name=str(ws_id),
            output=output,
            is_visible=ws_id in visible,
            is_focused=ws_id == focused,
        )
        for output, ids in outputs.items()
        for ws_id in ids
    ]


class FakeWindowManager:
    """In-memory i3 stand-in implementing the I3Client interface.

    Rejects renames of missing workspaces and renames onto a taken number,
    just like i3 and sway, and records every command it accepts. fail_at
    makes the n-th command (0-based) fail.
    """

    def __init__(
        self,
        outputs: Dict[str, List[int]],
        focused: int,
        visible: Optional[List[int]] = None,
        fail_at: Optional[int] = None,
    ):
        self.workspaces: Dict[int, Workspace] = {
            ws.id: ws for ws in build_workspaces(outputs, focused, visible)
        }
        self.commands: List[str] = []
        self.rejected: List[str] = []
        self.window_moves: List[int] = []
        self.fail_at = fail_at
        self.snapshot_reads = 0

    # I3Client interface

    def list_workspaces(self) -> List[Workspace]:
        return [ws.model_copy() for ws in self.workspaces.values()]

    def snapshot(self) -> WorkspaceSnapshot:
        self.snapshot_reads += 1
        return WorkspaceSnapshot(workspaces=self.list_workspaces())

    def run_command(self, command: str) -> None:
        if self.fail_at is not None and len(self.commands) == self.fail_at:
            self.rejected.append(command)
            raise CommandError(operation="run_command", command=command, reason="injected failure")

        match = RENAME_RE.match(command)
        if match:
            self._rename(command, int(match.group(1)), int(match.group(2)))
        elif FOCUS_RE.match(command):
            self._focus(int(FOCUS_RE.match(command).group(1)))
        elif MOVE_RE.match(command):
            target = int(MOVE_RE.match(command).group(1))
            self._ensure_exists(target)
            self.window_moves.append(target)
        else:
            self._reject(command, "unknown command")

        self.commands.append(command)

    # Helpers

    @property
    def focused_id(self) -> int:
        return next(ws.id for ws in self.workspaces.values() if ws.is_focused)

    def ids_by_output(self) -> Dict[str, List[int]]:
        result: Dict[str, List[int]] = {}
        for ws in sorted(self.workspaces.values(), key=lambda ws: ws.id):
            result.setdefault(ws.output, []).append(ws.id)
        return result

    def names_by_output(self) -> Dict[str, List[str]]:
        """Original names in current id order; renames keep the name."""
        result: Dict[str, List[str]] = {}
        for ws in sorted(self.workspaces.values(), key=lambda ws: ws.id):
            result.setdefault(ws.output, []).append(ws.display_name)
        return result

    def _reject(self, command: str, reason: str) -> None:
        self.rejected.append(command)
        raise CommandError(operation="run_command", command=command, reason=reason)

    def _rename(self, command: str, old_id: int, new_id: int) -> None:
        if old_id not in self.workspaces:
            self._reject(command, "There is no workspace with that name")
        if new_id in self.workspaces:
            self._reject(command, "New workspace name is already taken")

        ws = self.workspaces.pop(old_id)
        # Keep display_name as identity marker so tests can follow workspaces
        ws.id = new_id
        self.workspaces[new_id] = ws

    def _ensure_exists(self, workspace_id: int) -> None:
        if workspace_id in self.workspaces:
            return
        current = self.workspaces[self.focused_id]
        self.workspaces[workspace_id] = Workspace(
            id=workspace_id,
            display_name=f"new-{workspace_id}",
            output=current.output,
            is_visible=False,
            is_focused=False,
        )

    def _focus(self, workspace_id: int) -> None:
        self._ensure_exists(workspace_id)
        target = self.workspaces[workspace_id]
        for ws in self.workspaces.values():
            ws.is_focused = False
            if ws.output == target.output:
                ws.is_visible = False
        target.is_focused = True
        target.is_visible = True


@pytest.fixture
def make_snapshot():
    """Factory: make_snapshot({"DP-1": [1, 3]}, focused=3) -> WorkspaceSnapshot."""
    def _make(outputs, focused, visible=None):
        return WorkspaceSnapshot(workspaces=build_workspaces(outputs, focused, visible))
    return _make


@pytest.fixture
def fake_wm():
    """Factory for FakeWindowManager instances."""
    return FakeWindowManager


def workspace_reply(num, output, visible=False, focused=False):
    """Mock i3ipc WorkspaceReply. name is set after construction because
    Mock(name=...) names the mock itself."""
    reply = Mock(num=num, output=output, visible=visible, focused=focused)
    reply.name = str(num)
    return reply


@pytest.fixture
def mock_i3_connection():
    """Mock i3ipc.Connection with two outputs."""
    conn = Mock()
    conn.get_workspaces.return_value = [
        workspace_reply(1, "HEADLESS-1", visible=True, focused=True),
        workspace_reply(2, "HEADLESS-1"),
        workspace_reply(3, "HEADLESS-2", visible=True),
        workspace_reply(5, "HEADLESS-2"),
    ]
    conn.command.return_value = [Mock(success=True, error=None)]
    return conn
