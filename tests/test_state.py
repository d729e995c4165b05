import pytest

from tracker.config import TrackerConfig
from tracker.models import Priority, StatusFilter
from tracker.state import TrackerState


@pytest.fixture()
def config(db_url) -> TrackerConfig:
    return TrackerConfig(database_url=db_url, log_level="INFO", page_title="Test", sql_echo=False)


@pytest.fixture()
def state(config) -> TrackerState:
    return TrackerState.from_config(config)


def _fill(state, text, due="", priority=Priority.MEDIUM):
    state.pending_text = text
    state.pending_due_date = due
    state.pending_priority = priority


def test_initial_view_state(state):
    assert state.search_term == ""
    assert state.status_filter is StatusFilter.ALL
    assert state.dark_mode is False
    assert state.visible_tasks() == []


def test_create_resets_form_on_success(state):
    _fill(state, "Buy milk", "2024-01-01", Priority.HIGH)
    task = state.create()
    assert task is not None
    assert (state.pending_text, state.pending_due_date, state.pending_priority) == ("", "", Priority.MEDIUM)


def test_rejected_create_keeps_form(state):
    _fill(state, "   ", "2024-01-01", Priority.LOW)
    assert state.create() is None
    assert state.pending_due_date == "2024-01-01"
    assert state.pending_priority is Priority.LOW
    assert state.tasks.all() == []


def test_buy_milk_scenario(state):
    _fill(state, "Buy milk", "2024-01-01", Priority.HIGH)
    task = state.create()
    assert [t.to_dict() for t in state.tasks.all()] == [{
        "id": task.id, "text": "Buy milk", "completed": False,
        "dueDate": "2024-01-01", "priority": "High",
    }]

    state.toggle(task.id)
    assert task.completed is True

    state.set_status_filter("Active")
    assert state.visible_tasks() == []
    state.set_status_filter(StatusFilter.COMPLETED)
    assert state.visible_tasks() == [task]


def test_visible_rows_carry_full_positions(state):
    for text in ["alpha", "beta", "alphabet"]:
        _fill(state, text)
        state.create()
    state.toggle(state.tasks.all()[0].id)
    state.set_search_term("ALPHA")
    state.set_status_filter("Active")
    rows = state.visible_rows()
    assert [(i, t.text) for i, t in rows] == [(2, "alphabet")]


def test_delete_through_state(state):
    _fill(state, "a")
    a = state.create()
    assert state.delete(a.id, confirmed=False) is False
    assert state.delete(a.id, confirmed=True) is True
    assert state.tasks.all() == []


def test_set_search_term_none_clears(state):
    state.set_search_term("x")
    state.set_search_term(None)
    assert state.search_term == ""


def test_bad_status_filter(state):
    with pytest.raises(ValueError):
        state.set_status_filter("Everything")
    assert state.status_filter is StatusFilter.ALL


def test_everything_survives_restart(config, state):
    _fill(state, "remember me", "2030-12-31", Priority.LOW)
    task = state.create()
    state.toggle(task.id)
    state.toggle_theme()

    restored = TrackerState.from_config(config)
    assert restored.dark_mode is True
    assert [t.to_dict() for t in restored.tasks.all()] == [task.to_dict()]
    # view inputs are not persisted
    state.set_search_term("zzz")
    assert TrackerState.from_config(config).search_term == ""


def test_two_sessions_on_one_database_keep_each_others_tasks(config):
    first = TrackerState.from_config(config)
    second = TrackerState.from_config(config)

    _fill(first, "from the first window")
    a = first.create()
    _fill(second, "from the second window")
    b = second.create()

    stored = TrackerState.from_config(config).tasks.all()
    assert [t.text for t in stored] == ["from the first window", "from the second window"]

    # toggles and deletes from one session don't undo the other's
    second.toggle(a.id)
    first.delete(b.id, confirmed=True)
    stored = TrackerState.from_config(config).tasks.all()
    assert [(t.id, t.completed) for t in stored] == [(a.id, True)]


def test_refresh_shows_other_sessions_changes(config):
    first = TrackerState.from_config(config)
    second = TrackerState.from_config(config)
    _fill(first, "shared")
    task = first.create()
    first.toggle_theme()

    assert second.visible_tasks() == []
    assert second.dark_mode is False
    second.refresh()
    assert [t.id for t in second.visible_tasks()] == [task.id]
    assert second.dark_mode is True
