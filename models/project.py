# models/project.py
from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from utils.dates import days_until


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    project_id: UUID
    author_id: UUID
    body: str
    created_at: datetime = Field(default_factory=datetime.now)


class Project(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    summary: str = ""
    start_date: datetime = Field(default_factory=datetime.now)
    # end_date >= start_date is not enforced; callers validate
    end_date: Optional[datetime] = None
    member_ids: List[UUID] = Field(default_factory=list)
    task_ids: List[UUID] = Field(default_factory=list)
    messages: List[ChatMessage] = Field(default_factory=list)

    @model_validator(mode="after")
    def _default_end_date(self) -> "Project":
        if self.end_date is None:
            self.end_date = self.start_date + timedelta(days=7)
        return self

    @property
    def duration_days(self) -> int:
        return days_until(self.start_date, self.end_date)

    def is_active(self, reference: datetime) -> bool:
        return self.start_date <= reference <= self.end_date
