"""Visible subset of the task list for the current search and status filter."""

from __future__ import annotations

from typing import Dict, Iterable, List, Union

from .models import StatusFilter, Task


def _matches_status(task: Task, status_filter: StatusFilter) -> bool:
    if status_filter is StatusFilter.ACTIVE:
        return not task.completed
    if status_filter is StatusFilter.COMPLETED:
        return task.completed
    return True


def compute(
    tasks: Iterable[Task],
    status_filter: Union[StatusFilter, str] = StatusFilter.ALL,
    search_term: str = "",
) -> List[Task]:
    """Tasks passing both the status and the search predicate, in source order.

    The search is a case-insensitive substring match on the task text; an
    empty term matches everything. A string ``status_filter`` must be one of
    the ``StatusFilter`` values, otherwise ``ValueError`` is raised.
    """
    status_filter = StatusFilter(status_filter)
    needle = (search_term or "").casefold()
    return [
        t for t in tasks
        if _matches_status(t, status_filter) and needle in t.text.casefold()
    ]


def counts(tasks: Iterable[Task]) -> Dict[StatusFilter, int]:
    tasks = list(tasks)
    done = sum(1 for t in tasks if t.completed)
    return {
        StatusFilter.ALL: len(tasks),
        StatusFilter.ACTIVE: len(tasks) - done,
        StatusFilter.COMPLETED: done,
    }
