# tests/test_task_api.py

from __future__ import annotations

import pytest

from todolist.core.state import AppState
from todolist.tasks import task_api


def _titles(state: AppState) -> list[str]:
    return [t.title for t in state.tasks]


def test_example_scenario_display_order(state: AppState) -> None:
    milk = task_api.add_task(state, "Buy milk", 3)
    task_api.add_task(state, "Pay rent", 5)
    task_api.add_task(state, "Walk dog", 3)

    assert [t.title for t in state.task_store.list_tasks()] == ["Pay rent", "Buy milk", "Walk dog"]
    assert _titles(state) == ["Pay rent", "Buy milk", "Walk dog"]

    assert task_api.set_completed(state, milk, True) == 1
    assert _titles(state) == ["Pay rent", "Walk dog", "Buy milk"]
    assert state.tasks[-1].completed is True


def test_completed_group_keeps_priority_then_insertion_order(state: AppState) -> None:
    a = task_api.add_task(state, "a", 2)
    b = task_api.add_task(state, "b", 4)
    c = task_api.add_task(state, "c", 2)
    d = task_api.add_task(state, "d", 4)
    e = task_api.add_task(state, "e", 2)

    for task_id in (e, a, d):
        task_api.set_completed(state, task_id, True)

    assert [t.id for t in state.tasks] == [b, c, d, a, e]


def test_add_strips_title_and_rejects_empty(state: AppState) -> None:
    task_id = task_api.add_task(state, "  Pay rent  ", 5)
    assert state.tasks[0].id == task_id
    assert state.tasks[0].title == "Pay rent"

    with pytest.raises(ValueError):
        task_api.add_task(state, "   ", 3)
    with pytest.raises(ValueError):
        task_api.add_task(state, "", 3)
    assert state.task_store.count_tasks() == 1


@pytest.mark.parametrize("priority", [0, 6, -1])
def test_add_rejects_out_of_range_priority(state: AppState, priority: int) -> None:
    with pytest.raises(ValueError):
        task_api.add_task(state, "Buy milk", priority)
    assert state.task_store.count_tasks() == 0


def test_toggle_flips_and_refreshes(state: AppState) -> None:
    task_id = task_api.add_task(state, "Walk dog", 3)

    assert task_api.toggle_completed(state, task_id) == 1
    assert state.tasks[0].completed is True

    assert task_api.toggle_completed(state, task_id) == 1
    assert state.tasks[0].completed is False


def test_missing_task_is_a_no_op(state: AppState) -> None:
    task_api.add_task(state, "Walk dog", 3)
    before = state.tasks

    assert task_api.set_completed(state, 12345, True) == 0
    assert task_api.toggle_completed(state, 12345) == 0
    assert task_api.remove_task(state, 12345) == 0
    assert state.tasks == before


def test_remove_then_refresh_drops_task(state: AppState) -> None:
    keep = task_api.add_task(state, "Pay rent", 5)
    gone = task_api.add_task(state, "Buy milk", 3)

    assert task_api.remove_task(state, gone) == 1
    assert [t.id for t in state.tasks] == [keep]
    assert task_api.remove_task(state, gone) == 0


def test_refresh_replaces_snapshot_instead_of_mutating(state: AppState) -> None:
    task_id = task_api.add_task(state, "Buy milk", 3)
    old_snapshot = state.tasks

    task_api.set_completed(state, task_id, True)

    assert state.tasks is not old_snapshot
    assert old_snapshot[0].completed is False
    assert state.tasks[0].completed is True


def test_refresh_picks_up_writes_made_elsewhere(state: AppState) -> None:
    assert task_api.refresh_tasks(state) == ()
    state.task_store.add_task("Written directly", 2)
    snapshot = task_api.refresh_tasks(state)
    assert [t.title for t in snapshot] == ["Written directly"]
    assert state.tasks == snapshot
