"""Todo items and their progress status."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum


class Status(IntEnum):
    """Progress of a todo item; the integer value is what gets stored."""

    TODO = 0
    IN_PROGRESS = 1
    DONE = 2

    def __str__(self) -> str:
        return _STATUS_LABELS[self]

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


_STATUS_LABELS = {
    Status.TODO: "ToDo",
    Status.IN_PROGRESS: "InProgress",
    Status.DONE: "Done",
}


@dataclass
class TodoItem:
    """A single task on the todo list.

    Unset timestamps are ``None``.
    """

    id: int
    task: str
    parent_id: int = 0
    children_ids: list[int] = field(default_factory=list)
    created_at: datetime | None = None
    due: datetime | None = None
    done_at: datetime | None = None
    status: Status = Status.TODO