# stores/task_store.py
from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from db import Slots
from models.task import TaskItem, TaskStatus

from .base import CollectionStore


class TaskStore(CollectionStore[TaskItem]):
    slot = Slots.TASKS
    item_type = TaskItem

    def _prepare_update(self, item: TaskItem) -> TaskItem:
        return item.model_copy(update={"updated_at": self._clock()})

    def tasks_for_project(self, project_id: Optional[UUID]) -> List[TaskItem]:
        """Tasks owned by ``project_id``; ``None`` selects standalone tasks."""
        return [t for t in self._items if t.project_id == project_id]

    def tasks_matching_tags(self, tags: Iterable[str]) -> List[TaskItem]:
        wanted = set(tags)
        if not wanted:
            return list(self._items)
        return [t for t in self._items if t.has_any_tag(wanted)]

    def overdue_tasks(self, reference: Optional[datetime] = None) -> List[TaskItem]:
        now = reference or self._clock()
        return [t for t in self._items if t.is_overdue(now)]

    def tasks_grouped_by_status(self) -> Dict[TaskStatus, List[TaskItem]]:
        groups: Dict[TaskStatus, List[TaskItem]] = {}
        for t in self._items:
            groups.setdefault(t.status, []).append(t)
        return groups
