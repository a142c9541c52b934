# app.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from config import Settings, load_settings
from db import DocumentGateway
from notifications import InMemoryNotificationCenter, NotificationCenter, NotificationService
from stores import ProjectStore, TaskStore, UserStore
from viewmodels import ProfileViewModel, ProjectListViewModel, TaskViewModel

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything built once at startup; consumers receive it explicitly."""

    settings: Settings
    gateway: DocumentGateway
    projects: ProjectStore
    tasks: TaskStore
    users: UserStore
    notifications: NotificationService
    task_view: TaskViewModel
    project_view: ProjectListViewModel
    profile_view: ProfileViewModel

    def close(self) -> None:
        """Flush pending writes so the last debounce window is not lost."""
        for view in (self.task_view, self.project_view, self.profile_view):
            view.close()
        for store in (self.projects, self.tasks, self.users):
            store.close()
        self.gateway.dispose()
        logger.info("%s closed", self.settings.app_name)


def build_context(
    settings: Optional[Settings] = None,
    *,
    notification_center: Optional[NotificationCenter] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> AppContext:
    settings = settings or load_settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)

    gateway = DocumentGateway(settings.database_url)
    gateway.init_db()

    store_kwargs = {"save_delay": settings.save_delay, "clock": clock}
    projects = ProjectStore(gateway, **store_kwargs)
    tasks = TaskStore(gateway, **store_kwargs)
    users = UserStore(gateway, **store_kwargs)

    notifications = NotificationService(notification_center or InMemoryNotificationCenter())

    return AppContext(
        settings=settings,
        gateway=gateway,
        projects=projects,
        tasks=tasks,
        users=users,
        notifications=notifications,
        task_view=TaskViewModel(tasks, notifications=notifications, clock=clock),
        project_view=ProjectListViewModel(projects, tasks, notifications=notifications, clock=clock),
        profile_view=ProfileViewModel(users, notifications),
    )
