# viewmodels/project_view.py
from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from models.gantt import GanttBar, GanttItem
from models.project import ChatMessage, Project
from models.task import TaskItem
from notifications import NotificationService
from stores.project_store import ProjectStore
from stores.task_store import TaskStore
from utils.progress import compute_project_progress
from utils.signals import Signal
from utils.timeline import layout_gantt

GANTT_PALETTE = ["#bd0e1b", "#0a1a3b", "#ffbe00"]


def color_for_name(name: str) -> str:
    # str hashes are salted per interpreter: same color within a run only
    return GANTT_PALETTE[abs(hash(name)) % len(GANTT_PALETTE)]


def build_gantt_items(projects: Iterable[Project], tasks: List[TaskItem]) -> List[GanttItem]:
    return [
        GanttItem(
            id=p.id,
            name=p.name,
            start_date=p.start_date,
            end_date=p.end_date,
            color_hex=color_for_name(p.name),
            progress=compute_project_progress(p.id, tasks),
        )
        for p in projects
    ]


class ProjectListViewModel:
    """Projects plus the Gantt projection joined from projects and tasks."""

    def __init__(
        self,
        project_store: ProjectStore,
        task_store: TaskStore,
        *,
        notifications: Optional[NotificationService] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._projects_store = project_store
        self._tasks_store = task_store
        self._notifications = notifications
        self._clock = clock
        self.changed = Signal()

        self._projects: List[Project] = project_store.items
        self._tasks: List[TaskItem] = task_store.items
        self._gantt_items: List[GanttItem] = []
        self._selected_id: Optional[UUID] = None

        self._disconnects = [
            project_store.changed.connect(self._on_projects_changed),
            task_store.changed.connect(self._on_tasks_changed),
        ]
        self._recompute()

    def close(self) -> None:
        for disconnect in self._disconnects:
            disconnect()

    def _on_projects_changed(self, projects: List[Project]) -> None:
        self._projects = list(projects)
        if self._selected_id is not None and not any(p.id == self._selected_id for p in projects):
            self._selected_id = None
        self._recompute()

    def _on_tasks_changed(self, tasks: List[TaskItem]) -> None:
        self._tasks = list(tasks)
        self._recompute()

    def _recompute(self) -> None:
        self._gantt_items = build_gantt_items(self._projects, self._tasks)
        self.changed.emit(self)

    # ---- projections ----

    @property
    def projects(self) -> List[Project]:
        return list(self._projects)

    @property
    def gantt_items(self) -> List[GanttItem]:
        return list(self._gantt_items)

    def gantt_bars(self, available_width: float) -> List[GanttBar]:
        return layout_gantt(self._gantt_items, available_width)

    @property
    def selected_project(self) -> Optional[Project]:
        if self._selected_id is None:
            return None
        return next((p for p in self._projects if p.id == self._selected_id), None)

    def select_project(self, project: Optional[Project]) -> None:
        self._selected_id = project.id if project is not None else None
        self.changed.emit(self)

    @property
    def active_projects(self) -> List[Project]:
        return self._projects_store.active_projects()

    def progress_for(self, project_id: UUID) -> float:
        item = next((g for g in self._gantt_items if g.id == project_id), None)
        return item.progress if item is not None else 0.0

    def tasks_for_project(self, project: Project) -> List[TaskItem]:
        return self._tasks_store.tasks_for_project(project.id)

    # ---- mutations ----

    def add_project(
        self,
        name: str,
        summary: str = "",
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Project:
        project = Project(
            name=name,
            summary=summary,
            start_date=start_date or self._clock(),
            end_date=end_date,
        )
        self._projects_store.create(project)
        if self._notifications is not None:
            self._notifications.schedule_project_deadline_notification(project.name, project.end_date)
        return project

    def update(self, project: Project) -> bool:
        return self._projects_store.update(project)

    def delete_at(self, positions: Iterable[int]) -> int:
        return self._projects_store.delete_at(positions)

    def delete_project(self, project: Project) -> bool:
        return self._projects_store.delete([project.id]) > 0

    def add_message(self, body: str, project: Project, author_id: UUID) -> ChatMessage:
        message = ChatMessage(project_id=project.id, author_id=author_id, body=body, created_at=self._clock())
        self._projects_store.add_message(message, project.id)
        return message
