import pytest

from tracker.models import StatusFilter, Task
from tracker.view_filter import compute, counts


@pytest.fixture()
def tasks():
    return [
        Task(text="Buy Milk", completed=False),
        Task(text="Walk dog", completed=True),
        Task(text="milkshake run", completed=True),
        Task(text="Write report", completed=False),
    ]


def test_all_with_empty_term_returns_everything(tasks):
    assert compute(tasks, "All", "") == tasks


def test_active_and_completed(tasks):
    assert compute(tasks, "Active", "") == [tasks[0], tasks[3]]
    assert compute(tasks, StatusFilter.COMPLETED, "") == [tasks[1], tasks[2]]


@pytest.mark.parametrize("term", ["milk", "MILK", "Milk"])
def test_search_is_case_insensitive(tasks, term):
    assert compute(tasks, "All", term) == [tasks[0], tasks[2]]


def test_both_predicates_must_hold(tasks):
    assert compute(tasks, "Active", "milk") == [tasks[0]]
    assert compute(tasks, "Completed", "report") == []


def test_does_not_mutate_input(tasks):
    before = [t.to_dict() for t in tasks]
    result = compute(tasks, "Active", "w")
    result.clear()
    assert [t.to_dict() for t in tasks] == before


def test_unknown_status_filter():
    with pytest.raises(ValueError):
        compute([], "Done", "")


def test_counts(tasks):
    assert counts(tasks) == {
        StatusFilter.ALL: 4,
        StatusFilter.ACTIVE: 2,
        StatusFilter.COMPLETED: 2,
    }


def test_search_uses_full_case_folding():
    street = Task(text="Straße fegen")
    assert compute([street], "All", "STRASSE") == [street]
    assert compute([street], "All", "ss") == [street]
