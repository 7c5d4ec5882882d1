"""Thin driver for the three workspace commands.

Each operation builds one command string and passes it to the IPC client.
Ids are quoted in move/rename commands because i3 and sway take the workspace
name literally there.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..errors import CommandError

if TYPE_CHECKING:
    from ..core.i3_client import I3Client

logger = logging.getLogger(__name__)


@dataclass
class CommandRecord:
    """One command issued (or planned, in dry-run mode) by the driver.

    Attributes:
        operation: "focus", "move_focused_window" or "rename"
        command: Exact command text
        ids: Workspace ids involved
        sent: False when the driver ran in dry-run mode
    """
    operation: str
    command: str
    ids: Dict[str, int] = field(default_factory=dict)
    sent: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation,
            "command": self.command,
            "ids": dict(self.ids),
            "sent": self.sent,
        }


def focus_command(workspace_id: int) -> str:
    return f"workspace {workspace_id}"


def move_container_command(workspace_id: int) -> str:
    return f'move container to workspace "{workspace_id}"'


def rename_command(old_id: int, new_id: int) -> str:
    return f'rename workspace "{old_id}" to "{new_id}"'


class CommandDriver:
    """Send focus/move/rename commands through an I3Client.

    Keeps a history of every command so callers can report what was applied
    when a sequence aborts. With dry_run=True nothing is sent and the history
    is the plan.
    """

    def __init__(self, client: Optional["I3Client"], dry_run: bool = False):
        if client is None and not dry_run:
            raise CommandError(
                operation="connect",
                command="",
                reason="No IPC connection available",
            )
        self.client = client
        self.dry_run = dry_run
        self.history: List[CommandRecord] = []

    def focus(self, workspace_id: int) -> None:
        """Switch focus to a workspace."""
        self._send("focus", focus_command(workspace_id), {"workspace_id": workspace_id})

    def move_focused_window(self, workspace_id: int) -> None:
        """Move the focused container to a workspace without following it."""
        self._send(
            "move_focused_window",
            move_container_command(workspace_id),
            {"workspace_id": workspace_id},
        )

    def rename(self, old_id: int, new_id: int) -> None:
        """Rename a workspace, changing its number."""
        self._send("rename", rename_command(old_id, new_id), {"old_id": old_id, "new_id": new_id})

    def _send(self, operation: str, command: str, ids: Dict[str, int]) -> None:
        record = CommandRecord(operation=operation, command=command, ids=ids, sent=not self.dry_run)

        if self.dry_run:
            logger.info(f"[dry-run] {command}")
            self.history.append(record)
            return

        try:
            self.client.run_command(command)
        except CommandError as e:
            # Re-raise with the driver operation and ids attached
            raise CommandError(
                operation=operation,
                command=command,
                reason=e.reason,
                ids=ids,
            ) from e

        self.history.append(record)
