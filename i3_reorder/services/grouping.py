"""Partition a workspace snapshot by output."""

from typing import Dict, List

from ..models import MonitorGroup, Workspace, WorkspaceSnapshot


def group(snapshot: WorkspaceSnapshot) -> Dict[str, MonitorGroup]:
    """Group workspaces by output, each group in ascending id order.

    Outputs appear in the order their lowest workspace id appears in the
    snapshot. Workspaces are copied, so renumbering a group never touches
    the snapshot.
    """
    members: Dict[str, List[Workspace]] = {}
    for ws in snapshot.workspaces:
        members.setdefault(ws.output, []).append(ws.model_copy())

    return {output: MonitorGroup(output, workspaces) for output, workspaces in members.items()}
