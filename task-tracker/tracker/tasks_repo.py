"""Task repository: the ordered task list and its mutations.

The whole list is stored as one JSON array under the ``tasks`` key. Several
browser sessions may share that key, so every mutation re-reads the stored
list, applies the change and writes it back while holding the database's
write lock. Tasks are addressed by their stable id; the positional helpers
exist for callers that iterate the full list.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple, Union

from .db import get_write_lock
from .models import Priority, Task
from .store import PersistentStore

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"


class TaskNotFoundError(KeyError):
    """Raised when a task id is not in the current collection."""


class TaskRepository:
    def __init__(self, store: PersistentStore):
        self.store = store
        self._lock = get_write_lock(store.database_url)
        self._synced = True
        with self._lock:
            self._tasks, stamped = self._load()
            if stamped:
                # Ids must be stored before any other session reads these tasks.
                logger.info("Assigning ids to %d stored task(s)", stamped)
                self._persist()
        logger.info("Loaded %d task(s)", len(self._tasks))

    def _load(self) -> Tuple[List[Task], int]:
        """Stored tasks, and how many of them were given a new id."""
        raw = self.store.load_json(TASKS_KEY, default=[])
        if not isinstance(raw, list):
            logger.warning("Stored %r is not a list; starting with no tasks", TASKS_KEY)
            return [], 0
        tasks: List[Task] = []
        seen = set()
        stamped = 0
        for record in raw:
            if not isinstance(record, dict):
                logger.warning("Skipping malformed task record: %r", record)
                continue
            try:
                task = Task.from_dict(record)
            except ValueError as exc:
                logger.warning("Skipping malformed task record: %s", exc)
                continue
            if task.id in seen:
                logger.warning("Skipping duplicate task id %s", task.id)
                continue
            seen.add(task.id)
            tasks.append(task)
            if not record.get("id"):
                stamped += 1
        return tasks, stamped

    def _refresh(self) -> None:
        """Pick up changes other sessions have written since we last looked.

        Tasks already held keep their identity; only ``completed`` can change
        on them. Skipped while our last write is unsaved, since the in-memory
        list is then newer than the stored one.
        """
        if not self._synced:
            return
        mine = {t.id: t for t in self._tasks}
        tasks: List[Task] = []
        for stored in self._load()[0]:
            task = mine.get(stored.id)
            if task is None:
                task = stored
            else:
                task.completed = stored.completed
            tasks.append(task)
        self._tasks = tasks

    def refresh(self) -> None:
        with self._lock:
            self._refresh()

    def _persist(self) -> None:
        self._synced = self.store.save_json(TASKS_KEY, [t.to_dict() for t in self._tasks])

    # -------------------- queries --------------------
    def all(self) -> List[Task]:
        return list(self._tasks)

    def get(self, task_id: str) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def index_of(self, task_id: str) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise TaskNotFoundError(task_id)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    # -------------------- mutations --------------------
    def create(
        self,
        text: str,
        due_date: Optional[str] = "",
        priority: Union[Priority, str] = Priority.MEDIUM,
    ) -> Optional[Task]:
        """Append a new task; blank text is ignored and returns None."""
        if not text or not text.strip():
            logger.debug("Ignoring task with blank text")
            return None
        task = Task(text=text, due_date=due_date or "", priority=Priority.parse(priority))
        with self._lock:
            self._refresh()
            self._tasks.append(task)
            self._persist()
        logger.info("Created task %s (%s)", task.id, task.priority.value)
        return task

    def toggle(self, task_id: str) -> Task:
        """Flip a task's completed flag.

        Raises TaskNotFoundError if the task is gone, including when another
        session deleted it.
        """
        with self._lock:
            self._refresh()
            task = self.get(task_id)
            task.completed = not task.completed
            self._persist()
        logger.info("Task %s completed=%s", task.id, task.completed)
        return task

    def delete(self, task_id: str, confirmed: bool) -> bool:
        """Remove a task, but only once the user has confirmed it."""
        if not confirmed:
            return False
        with self._lock:
            self._refresh()
            del self._tasks[self.index_of(task_id)]
            self._persist()
        logger.info("Deleted task %s", task_id)
        return True

    # positional forms, resolved against the list as last seen by the caller
    def _id_at(self, index: int) -> str:
        if index < 0 or index >= len(self._tasks):
            raise IndexError(f"task index {index} out of range (0..{len(self._tasks) - 1})")
        return self._tasks[index].id

    def toggle_at(self, index: int) -> Task:
        return self.toggle(self._id_at(index))

    def delete_at(self, index: int, confirmed: bool) -> bool:
        return self.delete(self._id_at(index), confirmed)
