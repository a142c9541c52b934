# models/user.py
from __future__ import annotations

from enum import StrEnum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class UserRole(StrEnum):
    OWNER = "owner"
    ADMIN = "admin"
    CONTRIBUTOR = "contributor"
    VIEWER = "viewer"

    @property
    def label(self) -> str:
        return self.value.title()


class UserProfile(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    full_name: str
    email: str
    role: UserRole = UserRole.OWNER
    avatar_url: Optional[str] = None

    @property
    def initials(self) -> str:
        return "".join(part[0] for part in self.full_name.split()[:2])

    @classmethod
    def placeholder(cls) -> "UserProfile":
        return cls(full_name="You", email="you@example.com")
