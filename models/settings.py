# models/settings.py
from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class WorkflowStyle(StrEnum):
    KANBAN = "kanban"
    SCRUM = "scrum"
    SIMPLE = "simple"

    @property
    def label(self) -> str:
        return self.value.title()


class AppSettings(BaseModel):
    notifications_enabled: bool = True
    preferred_workflow: WorkflowStyle = WorkflowStyle.KANBAN
    onboarding_completed: bool = False
