"""Single owner of the tracker's state.

``TrackerState`` holds the task repository, the dark-mode flag, the search
and status inputs and the pending add-form fields. The page keeps one
instance per browser session and only talks to it through the methods here.
Sessions sharing a database see each other's writes after ``refresh()``.
"""

from __future__ import annotations

from typing import List, Optional, Tuple, Union

from .config import TrackerConfig
from .models import Priority, StatusFilter, Task
from .store import PersistentStore
from .tasks_repo import TaskRepository
from .theme import PreferenceFlag
from .view_filter import compute


class TrackerState:
    def __init__(self, tasks: TaskRepository, dark_mode: PreferenceFlag):
        self.tasks = tasks
        self.theme = dark_mode

        self.search_term: str = ""
        self.status_filter: StatusFilter = StatusFilter.ALL

        self.pending_text: str = ""
        self.pending_due_date: str = ""
        self.pending_priority: Priority = Priority.MEDIUM

    @classmethod
    def from_config(cls, config: TrackerConfig) -> "TrackerState":
        store = PersistentStore(config.database_url, echo=config.sql_echo)
        return cls(TaskRepository(store), PreferenceFlag(store))

    # -------------------- views --------------------
    def refresh(self) -> None:
        self.tasks.refresh()
        self.theme.refresh()

    @property
    def dark_mode(self) -> bool:
        return self.theme.value

    def visible_tasks(self) -> List[Task]:
        return compute(self.tasks.all(), self.status_filter, self.search_term)

    def visible_rows(self) -> List[Tuple[int, Task]]:
        """Visible tasks paired with their position in the full list."""
        positions = {t.id: i for i, t in enumerate(self.tasks)}
        return [(positions[t.id], t) for t in self.visible_tasks()]

    # -------------------- commands --------------------
    def create(self) -> Optional[Task]:
        task = self.tasks.create(self.pending_text, self.pending_due_date, self.pending_priority)
        if task is not None:
            self.reset_form()
        return task

    def reset_form(self) -> None:
        self.pending_text = ""
        self.pending_due_date = ""
        self.pending_priority = Priority.MEDIUM

    def toggle(self, task_id: str) -> Task:
        return self.tasks.toggle(task_id)

    def delete(self, task_id: str, confirmed: bool) -> bool:
        return self.tasks.delete(task_id, confirmed)

    def set_search_term(self, term: Optional[str]) -> None:
        self.search_term = term or ""

    def set_status_filter(self, value: Union[StatusFilter, str]) -> None:
        self.status_filter = StatusFilter(value)

    def toggle_theme(self) -> bool:
        return self.theme.toggle()
