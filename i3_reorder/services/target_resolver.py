"""Resolve a navigation intent to a destination workspace id.

The resolver only reads the snapshot and grouping; it never talks to the
window manager. A None result means there is nothing to do.
"""

import logging
from typing import Dict, Optional

from ..models import Intent, MonitorGroup, WorkspaceSnapshot

logger = logging.getLogger(__name__)


def resolve(
    intent: Intent,
    snapshot: WorkspaceSnapshot,
    grouping: Dict[str, MonitorGroup],
) -> Optional[int]:
    """Compute the target workspace id for an intent.

    Args:
        intent: Requested navigation
        snapshot: Current workspaces
        grouping: Workspaces grouped by output (see services.grouping.group)

    Returns:
        Target id, or None when the intent is a no-op. JUMP_TO_START may
        return a negative id; the caller has to free id 0 first.

    Raises:
        ValueError: For COLLAPSE, which has no single target
    """
    focused = snapshot.focused

    if intent == Intent.JUMP_TO_END:
        target = snapshot.max_id + 1
    elif intent == Intent.JUMP_TO_START:
        if focused.id == snapshot.min_id:
            logger.debug(f"Workspace {focused.id} is already first, nothing to do")
            return None
        target = snapshot.min_id - 1
    elif intent == Intent.NEAREST_OTHER_MONITOR:
        target = _first_visible_on_other_output(focused.output, grouping)
    elif intent in (Intent.NEXT, Intent.PREVIOUS):
        target = _neighbour(intent, focused.id, grouping[focused.output])
    else:
        raise ValueError(f"Intent {intent.value!r} has no single target workspace")

    logger.debug(f"Resolved {intent.value} from workspace {focused.id} to {target}")
    return target


def _neighbour(intent: Intent, focused_id: int, monitor: MonitorGroup) -> int:
    """Next/previous id on the same output, wrapping at both ends."""
    index = monitor.index_of(focused_id)

    if intent == Intent.NEXT:
        if index + 1 < len(monitor):
            return monitor[index + 1].id
        return monitor.first.id

    if index > 0:
        return monitor[index - 1].id
    return monitor.last.id


def _first_visible_on_other_output(
    focused_output: str,
    grouping: Dict[str, MonitorGroup],
) -> Optional[int]:
    """Visible workspace of the first other output in grouping order.

    With three or more outputs this is whichever visible workspace is found
    first, not the geometrically nearest one.
    """
    for output, monitor in grouping.items():
        if output == focused_output:
            continue
        for ws in monitor:
            if ws.is_visible:
                return ws.id

    logger.debug(f"No visible workspace on any output other than {focused_output}")
    return None
