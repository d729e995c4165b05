from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base


Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.utcnow()


class KVEntry(Base):
    """One durable key/value pair. Values are always stored as text."""

    __tablename__ = "kv_store"

    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def parse(cls, raw: Any, default: Optional["Priority"] = None) -> "Priority":
        """Return the matching member; unknown values give ``default`` (Medium)."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw))
        except ValueError:
            return default or cls.MEDIUM


class StatusFilter(str, Enum):
    ALL = "All"
    ACTIVE = "Active"
    COMPLETED = "Completed"


def new_task_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Task:
    """A single to-do entry.

    ``text``, ``due_date`` and ``priority`` are fixed at creation; only
    ``completed`` changes afterwards. ``id`` is stable for the task's life.
    """

    text: str
    completed: bool = False
    due_date: str = ""
    priority: Priority = Priority.MEDIUM
    id: str = field(default_factory=new_task_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "dueDate": self.due_date,
            "priority": self.priority.value,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Task":
        """Build a task from a persisted record.

        Records written before ids existed get a fresh one.
        """
        text = raw.get("text")
        if not isinstance(text, str) or not text.strip():
            raise ValueError(f"task record has no text: {raw!r}")
        task_id = raw.get("id")
        return cls(
            text=text,
            completed=raw.get("completed") is True,
            due_date=str(raw.get("dueDate") or ""),
            priority=Priority.parse(raw.get("priority")),
            id=str(task_id) if task_id else new_task_id(),
        )
