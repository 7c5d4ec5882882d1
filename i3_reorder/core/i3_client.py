"""i3/sway IPC client.

Synchronous wrapper around i3ipc.Connection exposing the two requests
i3-reorder needs:
- Workspaces (GET_WORKSPACES)
- Sending commands (RUN_COMMAND)

Every call blocks until the window manager answers; a rename must be visible
before the next one is sent.
"""

import logging
from typing import List, Optional

import i3ipc

from ..errors import CommandError, IPCConnectionError
from ..models import Workspace, WorkspaceSnapshot

# Get logger for this module
logger = logging.getLogger(__name__)


class I3Client:
    """Blocking i3ipc wrapper.

    Usage:
        with I3Client() as client:
            snapshot = client.snapshot()
            client.run_command("workspace 3")
    """

    def __init__(self, socket_path: Optional[str] = None):
        """Initialize i3 client.

        Args:
            socket_path: IPC socket path (default: discovered by i3ipc)
        """
        self.socket_path = socket_path
        self._connection: Optional[i3ipc.Connection] = None

    def connect(self) -> None:
        """Connect to the IPC socket.

        Raises:
            IPCConnectionError: If connection fails
        """
        if self._connection is not None:
            return

        try:
            logger.debug(f"Connecting to i3 IPC socket ({self.socket_path or 'auto'})")
            self._connection = i3ipc.Connection(socket_path=self.socket_path)
            logger.debug("Connected to i3 IPC")
        except Exception as e:
            logger.error(f"Failed to connect to i3 IPC: {e}")
            raise IPCConnectionError(str(e), self.socket_path) from e

    def close(self) -> None:
        """Close the connection."""
        if self._connection is not None:
            self._connection.main_quit()
            self._connection = None

    def __enter__(self) -> "I3Client":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def list_workspaces(self) -> List[Workspace]:
        """Get all workspaces (GET_WORKSPACES).

        Raises:
            IPCConnectionError: If the query fails
        """
        self.connect()

        try:
            logger.debug("IPC query: GET_WORKSPACES")
            replies = self._connection.get_workspaces()
        except Exception as e:
            logger.error(f"GET_WORKSPACES failed: {e}")
            raise IPCConnectionError(f"GET_WORKSPACES failed: {e}", self.socket_path) from e

        workspaces = [Workspace.from_i3(reply) for reply in replies]
        logger.debug(f"GET_WORKSPACES returned {len(workspaces)} workspace(s)")
        return workspaces

    def snapshot(self) -> WorkspaceSnapshot:
        """Fresh, validated snapshot of all workspaces."""
        return WorkspaceSnapshot(workspaces=self.list_workspaces())

    def run_command(self, command: str) -> None:
        """Send one command (RUN_COMMAND).

        Raises:
            CommandError: If the command is rejected or the connection drops
        """
        if self._connection is None:
            raise CommandError(
                operation="run_command",
                command=command,
                reason="Not connected to i3 IPC",
            )

        try:
            logger.debug(f"IPC command: {command}")
            replies = self._connection.command(command)
        except Exception as e:
            logger.error(f"RUN_COMMAND failed for '{command}': {e}")
            raise CommandError(operation="run_command", command=command, reason=str(e)) from e

        failed = [reply for reply in replies if not reply.success]
        if failed:
            reason = "; ".join(getattr(reply, "error", None) or "rejected" for reply in failed)
            logger.debug(f"RUN_COMMAND rejected: {reason}")
            raise CommandError(operation="run_command", command=command, reason=reason)
