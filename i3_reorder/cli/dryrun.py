"""Dry-run reporting.

Shows which commands a request would send without sending them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..services.command_driver import CommandRecord
from ..services.reorder import ReorderResult


@dataclass
class DryRunChange:
    """A single command that would be sent.

    Attributes:
        action: focus, move or rename
        target: Workspace the command acts on
        old_value: Previous workspace id (renames only)
        new_value: New workspace id (renames only)
    """

    action: str
    target: str
    old_value: Optional[Any] = None
    new_value: Optional[Any] = None

    def __str__(self) -> str:
        """Format change as human-readable string."""
        if self.action == "rename":
            return f"  [RENAME] workspace {self.old_value} → {self.new_value}"
        elif self.action == "move":
            return f"  [MOVE] focused window → workspace {self.target}"
        return f"  [{self.action.upper()}] workspace {self.target}"

    @classmethod
    def from_record(cls, record: CommandRecord) -> "DryRunChange":
        if record.operation == "rename":
            return cls(
                action="rename",
                target=str(record.ids["old_id"]),
                old_value=record.ids["old_id"],
                new_value=record.ids["new_id"],
            )
        if record.operation == "move_focused_window":
            return cls(action="move", target=str(record.ids["workspace_id"]))
        return cls(action=record.operation, target=str(record.ids["workspace_id"]))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        result = {
            "action": self.action,
            "target": self.target,
        }
        if self.old_value is not None:
            result["old_value"] = self.old_value
        if self.new_value is not None:
            result["new_value"] = self.new_value
        return result


@dataclass
class DryRunResult:
    """Everything a request would do."""

    changes: List[DryRunChange] = field(default_factory=list)
    target: Optional[int] = None
    shifted: bool = False

    @classmethod
    def from_result(cls, result: ReorderResult) -> "DryRunResult":
        return cls(
            changes=[DryRunChange.from_record(record) for record in result.commands],
            target=result.target,
            shifted=result.shifted,
        )

    def format(self) -> str:
        """Human-readable plan."""
        if not self.changes:
            return "Dry run: nothing to do"

        lines = [f"Dry run: {len(self.changes)} command(s) would be sent"]
        if self.shifted:
            lines.append("  (workspaces shifted up to free id 0)")
        lines.extend(str(change) for change in self.changes)
        return "\n".join(lines)
