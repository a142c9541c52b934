# utils/progress.py
from collections.abc import Iterable
from typing import Optional
from uuid import UUID

from models.task import TaskItem, TaskStatus


def compute_project_progress(project_id: Optional[UUID], tasks: Iterable[TaskItem]) -> float:
    """Share of the project's tasks that are done, 0.0 when it has none."""
    project_tasks = [t for t in tasks if t.project_id == project_id]
    if not project_tasks:
        return 0.0
    done = sum(1 for t in project_tasks if t.status == TaskStatus.DONE)
    return float(done / len(project_tasks))
