# viewmodels/task_view.py
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Dict, FrozenSet, List, Optional
from uuid import UUID

from models.task import TaskItem, TaskPriority, TaskStatus
from notifications import NotificationService
from stores.task_store import TaskStore
from utils.dates import parse_date
from utils.signals import Signal

logger = logging.getLogger(__name__)

NEXT_STATUS = {
    TaskStatus.BACKLOG: TaskStatus.IN_PROGRESS,
    TaskStatus.IN_PROGRESS: TaskStatus.DONE,
    TaskStatus.BLOCKED: TaskStatus.IN_PROGRESS,
    TaskStatus.DONE: TaskStatus.BACKLOG,
}


def next_status(status: TaskStatus) -> TaskStatus:
    return NEXT_STATUS[status]


def filter_tasks(
    tasks: Iterable[TaskItem],
    tags: FrozenSet[str],
    status: Optional[TaskStatus],
) -> List[TaskItem]:
    filtered = list(tasks)
    if tags:
        filtered = [t for t in filtered if t.has_any_tag(tags)]
    if status is not None:
        filtered = [t for t in filtered if t.status == status]
    return filtered


class TaskViewModel:
    """
    Filtered projection of the task store.

    ``filtered_tasks`` is recomputed synchronously whenever the task store
    publishes or either facet (``selected_tags``, ``selected_status``) is set.
    """

    def __init__(
        self,
        task_store: TaskStore,
        *,
        notifications: Optional[NotificationService] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = task_store
        self._notifications = notifications
        self._clock = clock
        self.changed = Signal()

        self._all_tasks: List[TaskItem] = task_store.items
        self._selected_tags: FrozenSet[str] = frozenset()
        self._selected_status: Optional[TaskStatus] = None
        self._filtered_tasks: List[TaskItem] = []

        self._disconnect = task_store.changed.connect(self._on_tasks_changed)
        self._recompute()

    def close(self) -> None:
        self._disconnect()

    # ---- upstream ----

    def _on_tasks_changed(self, tasks: List[TaskItem]) -> None:
        self._all_tasks = list(tasks)
        self._recompute()

    def _recompute(self) -> None:
        self._filtered_tasks = filter_tasks(self._all_tasks, self._selected_tags, self._selected_status)
        self.changed.emit(self)

    # ---- projections ----

    @property
    def all_tasks(self) -> List[TaskItem]:
        return list(self._all_tasks)

    @property
    def filtered_tasks(self) -> List[TaskItem]:
        return list(self._filtered_tasks)

    @property
    def all_tags(self) -> set[str]:
        return {tag for t in self._all_tasks for tag in t.tags}

    @property
    def overdue_tasks(self) -> List[TaskItem]:
        return self._store.overdue_tasks()

    @property
    def tasks_grouped_by_status(self) -> Dict[TaskStatus, List[TaskItem]]:
        return self._store.tasks_grouped_by_status()

    # ---- filter facets ----

    @property
    def selected_tags(self) -> FrozenSet[str]:
        return self._selected_tags

    @selected_tags.setter
    def selected_tags(self, tags: Iterable[str]) -> None:
        self._selected_tags = frozenset(tags)
        self._recompute()

    @property
    def selected_status(self) -> Optional[TaskStatus]:
        return self._selected_status

    @selected_status.setter
    def selected_status(self, status: Optional[TaskStatus]) -> None:
        self._selected_status = status
        self._recompute()

    def toggle_tag(self, tag: str) -> None:
        self.selected_tags = self._selected_tags ^ {tag}

    def clear_filters(self) -> None:
        self._selected_tags = frozenset()
        self._selected_status = None
        self._recompute()

    # ---- mutations (delegated to the store) ----

    def add_task(
        self,
        title: str,
        details: str = "",
        priority: TaskPriority = TaskPriority.MEDIUM,
        due_date=None,
        tags: Optional[List[str]] = None,
        project_id: Optional[UUID] = None,
    ) -> TaskItem:
        now = self._clock()
        task = TaskItem(
            project_id=project_id,
            title=title,
            details=details,
            priority=priority,
            created_at=now,
            updated_at=now,
            due_date=parse_date(due_date),
            tags=list(tags or []),
        )
        self._store.create(task)
        if task.due_date is not None and self._notifications is not None:
            self._notifications.schedule_due_task_notification(task.title, task.due_date)
        return task

    def create(self, task: TaskItem) -> None:
        self._store.create(task)

    def update(self, task: TaskItem) -> bool:
        return self._store.update(task)

    def delete(self, ids: Iterable[UUID]) -> int:
        return self._store.delete(ids)

    def delete_at(self, positions: Iterable[int]) -> int:
        return self._store.delete_at(positions)

    def toggle_task_status(self, task: TaskItem) -> TaskItem:
        toggled = task.model_copy(update={"status": next_status(task.status)})
        logger.debug("Task %s: %s -> %s", task.id, task.status.value, toggled.status.value)
        self.update(toggled)
        return self._store.get(task.id) or toggled
