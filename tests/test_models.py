"""Tests for workspace snapshot and monitor group invariants."""

from unittest.mock import Mock

import pytest

from i3_reorder.models import (
    Action,
    Intent,
    MonitorGroup,
    ReorderRequest,
    SnapshotError,
    Workspace,
    WorkspaceSnapshot,
)


def ws(ws_id, output="DP-1", visible=False, focused=False):
    return Workspace(
        id=ws_id,
        display_name=str(ws_id),
        output=output,
        is_visible=visible or focused,
        is_focused=focused,
    )


class TestWorkspace:

    def test_from_i3_reply(self):
        reply = Mock(num=4, output="eDP-1", visible=True, focused=False)
        reply.name = "4"

        workspace = Workspace.from_i3(reply)

        assert workspace.id == 4
        assert workspace.display_name == "4"
        assert workspace.output == "eDP-1"
        assert workspace.is_visible is True
        assert workspace.is_focused is False


class TestWorkspaceSnapshot:

    def test_sorted_by_id(self):
        snapshot = WorkspaceSnapshot(workspaces=[ws(7), ws(1, focused=True), ws(3)])
        assert snapshot.ids == [1, 3, 7]
        assert snapshot.min_id == 1
        assert snapshot.max_id == 7

    def test_focused(self):
        snapshot = WorkspaceSnapshot(workspaces=[ws(1), ws(3, focused=True)])
        assert snapshot.focused.id == 3

    def test_rejects_duplicate_ids(self):
        with pytest.raises(ValueError, match="Duplicate workspace id 1"):
            WorkspaceSnapshot(workspaces=[ws(1, focused=True), ws(1, output="HDMI-1")])

    def test_requires_exactly_one_focused(self):
        with pytest.raises(ValueError, match="exactly one focused"):
            WorkspaceSnapshot(workspaces=[ws(1), ws(2)])

        with pytest.raises(ValueError, match="exactly one focused"):
            WorkspaceSnapshot(workspaces=[ws(1, focused=True), ws(2, output="HDMI-1", focused=True)])

    def test_one_visible_per_output(self):
        with pytest.raises(ValueError, match="More than one visible"):
            WorkspaceSnapshot(workspaces=[ws(1, focused=True), ws(2, visible=True)])

    def test_visible_on_each_output_is_fine(self):
        snapshot = WorkspaceSnapshot(
            workspaces=[ws(1, focused=True), ws(2, output="HDMI-1", visible=True)]
        )
        assert len(snapshot.workspaces) == 2

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            WorkspaceSnapshot(workspaces=[])


class TestMonitorGroup:

    def test_orders_ascending(self):
        group = MonitorGroup("DP-1", [ws(7), ws(1), ws(3)])
        assert group.ids == [1, 3, 7]
        assert group.first.id == 1
        assert group.last.id == 7
        assert len(group) == 3

    def test_rejects_duplicates(self):
        with pytest.raises(SnapshotError, match="Duplicate"):
            MonitorGroup("DP-1", [ws(1), ws(1)])

    def test_rejects_foreign_output(self):
        with pytest.raises(SnapshotError, match="HDMI-1"):
            MonitorGroup("DP-1", [ws(1), ws(2, output="HDMI-1")])

    def test_renumber_keeps_order_current(self):
        group = MonitorGroup("DP-1", [ws(1), ws(3), ws(7)])

        group.renumber(7, 0)

        assert group.ids == [0, 1, 3]
        assert group.index_of(0) == 0
        assert group.first.display_name == "7"

    def test_add_inserts_in_order(self):
        group = MonitorGroup("DP-1", [ws(1), ws(7)])

        group.add(ws(4))

        assert group.ids == [1, 4, 7]
        with pytest.raises(SnapshotError):
            group.add(ws(4))
        with pytest.raises(SnapshotError, match="HDMI-1"):
            group.add(ws(9, output="HDMI-1"))

    def test_renumber_rejects_taken_id(self):
        group = MonitorGroup("DP-1", [ws(1), ws(3)])
        with pytest.raises(SnapshotError):
            group.renumber(1, 3)

    def test_index_of_missing(self):
        group = MonitorGroup("DP-1", [ws(1)])
        with pytest.raises(KeyError):
            group.index_of(2)

    def test_contains(self):
        group = MonitorGroup("DP-1", [ws(1), ws(4)])
        assert 4 in group
        assert 2 not in group


class TestReorderRequest:

    def test_jump_beats_monitor(self):
        request = ReorderRequest(direction=Intent.JUMP_TO_END, monitor=True)
        assert request.intent == Intent.JUMP_TO_END

    def test_monitor_beats_next(self):
        request = ReorderRequest(direction=Intent.NEXT, monitor=True)
        assert request.intent == Intent.NEAREST_OTHER_MONITOR

    def test_collapse_only_has_no_intent(self):
        assert ReorderRequest(collapse=True).intent is None

    @pytest.mark.parametrize(
        "kwargs, action",
        [
            ({}, Action.FOCUS_ONLY),
            ({"window": True}, Action.MOVE_FOCUSED_WINDOW),
            ({"window": True, "workspace": True}, Action.MOVE_FOCUSED_WINDOW),
            ({"workspace": True}, Action.MOVE_WORKSPACE),
            ({"workspace": True, "monitor": True}, Action.MOVE_WORKSPACE_ACROSS_MONITOR),
        ],
    )
    def test_action(self, kwargs, action):
        assert ReorderRequest(direction=Intent.NEXT, **kwargs).action == action
