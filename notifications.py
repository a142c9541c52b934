# notifications.py
"""
Notification collaborator.

The core never delivers notifications itself. It asks a NotificationCenter
(the OS side) for permission and hands it Reminder requests; the center
decides how and when they are shown.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Protocol
from uuid import UUID, uuid4

from utils.signals import Signal

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Reminder:
    title: str
    body: str
    fire_at: datetime
    id: UUID = field(default_factory=uuid4)


class NotificationCenter(Protocol):
    def authorization_granted(self) -> bool: ...

    async def request_authorization(self) -> bool: ...

    def add(self, reminder: Reminder) -> None: ...


class InMemoryNotificationCenter:
    """
    Headless center: keeps scheduled reminders in a list.

    ``grant_on_request`` is the answer a permission prompt will give.
    """

    def __init__(self, *, granted: bool = False, grant_on_request: bool = True) -> None:
        self.granted = granted
        self.grant_on_request = grant_on_request
        self.requests = 0
        self.reminders: list[Reminder] = []

    def authorization_granted(self) -> bool:
        return self.granted

    async def request_authorization(self) -> bool:
        self.requests += 1
        self.granted = self.grant_on_request
        return self.granted

    def add(self, reminder: Reminder) -> None:
        self.reminders.append(reminder)


class NotificationService:
    def __init__(self, center: NotificationCenter) -> None:
        self._center = center
        self.changed = Signal()
        self._has_permission = bool(center.authorization_granted())

    @property
    def has_permission(self) -> bool:
        return self._has_permission

    def _set_permission(self, granted: bool) -> None:
        if granted != self._has_permission:
            self._has_permission = granted
            self.changed.emit(granted)

    async def request_permission(self) -> bool:
        granted = bool(await self._center.request_authorization())
        self._set_permission(granted)
        logger.info("Notification permission %s", "granted" if granted else "denied")
        return granted

    def schedule_reminder(self, subject_text: str, fire_at: datetime, *, title: str = "Reminder") -> Reminder | None:
        """Fire-and-forget; does nothing without permission."""
        if not self._has_permission:
            logger.debug("Reminder %r skipped: no notification permission", subject_text)
            return None
        reminder = Reminder(title=title, body=subject_text, fire_at=fire_at)
        try:
            self._center.add(reminder)
        except Exception:
            logger.exception("Failed to schedule notification %r", subject_text)
            return None
        logger.debug("Scheduled reminder %s at %s", reminder.id, fire_at.isoformat())
        return reminder

    def schedule_due_task_notification(self, task_title: str, due_date: datetime) -> Reminder | None:
        return self.schedule_reminder(f"{task_title} is due.", due_date, title="Task Due")

    def schedule_project_deadline_notification(self, project_name: str, deadline: datetime) -> Reminder | None:
        return self.schedule_reminder(
            f"{project_name} deadline is approaching.",
            deadline - timedelta(days=1),
            title="Project Deadline",
        )
