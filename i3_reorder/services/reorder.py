"""Run one i3-reorder request end to end.

Reads a snapshot, resolves the target, frees id 0 when a jump to the start
needs it, applies the focus/move/swap action and finally collapses when asked.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.config import ReorderConfig
from ..core.i3_client import I3Client
from ..errors import UnsupportedOperationError
from ..models import Action, ReorderRequest, WorkspaceSnapshot
from .command_driver import CommandDriver, CommandRecord
from .rename_sequencer import RenameSequencer, WorkspaceLayout
from .target_resolver import resolve

logger = logging.getLogger(__name__)


@dataclass
class ReorderResult:
    """Outcome of a run.

    Attributes:
        source: Focused workspace id the action started from
        target: Resolved target id (None when there was nothing to do)
        shifted: Whether workspaces were shifted to free id 0
        collapsed: Whether a collapse pass ran
        commands: Commands sent, or planned in dry-run mode
        dry_run: Nothing was sent to the window manager
    """
    source: Optional[int] = None
    target: Optional[int] = None
    shifted: bool = False
    collapsed: bool = False
    commands: List[CommandRecord] = field(default_factory=list)
    dry_run: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "shifted": self.shifted,
            "collapsed": self.collapsed,
            "dry_run": self.dry_run,
            "commands": [record.to_dict() for record in self.commands],
        }


class WorkspaceReorderer:
    """Orchestrates resolver, sequencer and driver for one request."""

    def __init__(
        self,
        client: I3Client,
        request: ReorderRequest,
        config: Optional[ReorderConfig] = None,
    ):
        self.client = client
        self.request = request
        self.config = config or ReorderConfig()

    def run(self) -> ReorderResult:
        """Execute the request.

        Raises:
            UnsupportedOperationError: Moving a whole workspace to another output
            IPCConnectionError: Workspaces could not be read
            CommandError: A command failed; the remaining ones were not sent
        """
        request = self.request
        if request.action == Action.MOVE_WORKSPACE_ACROSS_MONITOR:
            raise UnsupportedOperationError(
                "move workspace to another monitor",
                suggestion="Use the window manager's 'move workspace to output' command instead",
            )

        snapshot = self.client.snapshot()
        layout = WorkspaceLayout.from_snapshot(snapshot)
        driver = CommandDriver(self.client, dry_run=request.dry_run)
        sequencer = RenameSequencer(driver, layout, self.config.scratch_margin)
        result = ReorderResult(dry_run=request.dry_run)

        intent = request.intent
        if intent is not None:
            target = resolve(intent, snapshot, layout.groups)
            source = snapshot.focused.id

            if target is not None and target < 0:
                logger.debug("Target is below 0, shifting workspaces up by one")
                sequencer.shift_for_zero()
                result.shifted = True
                snapshot = self._refresh(layout)
                layout = WorkspaceLayout.from_snapshot(snapshot)
                sequencer.layout = layout
                source = snapshot.focused.id
                target = 0

            result.source = source
            result.target = target

            if target is not None:
                logger.debug(f"Current workspace id: {source}")
                logger.debug(f"Target workspace id: {target}")
                created = not layout.occupied(target) and request.action != Action.MOVE_WORKSPACE
                self._apply(request.action, driver, sequencer, source, target)

                if created and request.collapse:
                    # Focus/move created the target; the source may be gone if it emptied
                    layout = self._track_created(layout, source, target)
                    sequencer.layout = layout

        if request.collapse:
            logger.info("Collapsing...")
            sequencer.collapse()
            result.collapsed = True

        result.commands = list(driver.history)
        return result

    def _refresh(self, layout: WorkspaceLayout) -> WorkspaceSnapshot:
        """Re-read workspaces after ids changed underneath the snapshot."""
        if self.request.dry_run:
            return layout.to_snapshot()
        return self.client.snapshot()

    def _track_created(self, layout: WorkspaceLayout, source: int, target: int) -> WorkspaceLayout:
        """Layout including the workspace created at target."""
        if self.request.dry_run:
            layout.track_created(target, layout.workspace(source).output)
            return layout
        return WorkspaceLayout.from_snapshot(self.client.snapshot())

    @staticmethod
    def _apply(
        action: Action,
        driver: CommandDriver,
        sequencer: RenameSequencer,
        source: int,
        target: int,
    ) -> None:
        if action == Action.MOVE_FOCUSED_WINDOW:
            driver.move_focused_window(target)
            driver.focus(target)
        elif action == Action.MOVE_WORKSPACE:
            sequencer.swap(source, target)
        else:
            driver.focus(target)
