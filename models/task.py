# models/task.py
from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return PRIORITY_ORDER.index(self)

    @property
    def label(self) -> str:
        return self.value.title()

    # str comparison would order alphabetically; compare by rank instead
    def __lt__(self, other):
        if not isinstance(other, TaskPriority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, TaskPriority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, TaskPriority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, TaskPriority):
            return NotImplemented
        return self.rank >= other.rank


PRIORITY_ORDER = [TaskPriority.LOW, TaskPriority.MEDIUM, TaskPriority.HIGH, TaskPriority.CRITICAL]


class TaskStatus(StrEnum):
    BACKLOG = "backlog"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    DONE = "done"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


STATUS_LABELS = {
    TaskStatus.BACKLOG: "Backlog",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.BLOCKED: "Blocked",
    TaskStatus.DONE: "Done",
}
STATUS_ORDER = list(STATUS_LABELS)


class Attachment(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    file_url: str


class TaskItem(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    project_id: Optional[UUID] = None
    title: str
    details: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.BACKLOG
    created_at: datetime = Field(default_factory=datetime.now)
    # stamped by TaskStore.update; callers should not rely on their own value
    updated_at: datetime = Field(default_factory=datetime.now)
    due_date: Optional[datetime] = None
    tags: List[str] = Field(default_factory=list)
    assignee_user_ids: List[UUID] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)

    def is_overdue(self, reference: datetime) -> bool:
        if self.due_date is None:
            return False
        return self.due_date < reference and self.status != TaskStatus.DONE

    def has_any_tag(self, tags) -> bool:
        return bool(self.tags) and not set(self.tags).isdisjoint(tags)
