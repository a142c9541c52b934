# viewmodels/profile_view.py
from __future__ import annotations

import logging

from models.settings import AppSettings, WorkflowStyle
from models.user import UserProfile
from notifications import NotificationService
from stores.user_store import UserStore
from utils.signals import Signal

logger = logging.getLogger(__name__)


class ProfileViewModel:
    """Current user, app settings and the permission-gated notifications toggle."""

    def __init__(self, user_store: UserStore, notifications: NotificationService) -> None:
        self._users = user_store
        self._notifications = notifications
        self.changed = Signal()

        self._fallback_user = UserProfile.placeholder()
        self._current_user = user_store.current_user or self._fallback_user
        self._settings = user_store.settings
        self._has_permission = notifications.has_permission

        self._disconnects = [
            user_store.changed.connect(self._on_users_changed),
            user_store.settings_changed.connect(self._on_settings_changed),
            notifications.changed.connect(self._on_permission_changed),
        ]

    def close(self) -> None:
        for disconnect in self._disconnects:
            disconnect()

    def _on_users_changed(self, _users) -> None:
        self._current_user = self._users.current_user or self._fallback_user
        self.changed.emit(self)

    def _on_settings_changed(self, settings: AppSettings) -> None:
        self._settings = settings
        self.changed.emit(self)

    def _on_permission_changed(self, granted: bool) -> None:
        self._has_permission = granted
        self.changed.emit(self)

    # ---- projections ----

    @property
    def current_user(self) -> UserProfile:
        return self._current_user

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def has_notification_permission(self) -> bool:
        return self._has_permission

    # ---- mutations ----

    def save_profile(self, profile: UserProfile) -> bool:
        return self._users.save_current_user(profile)

    def _write_settings(self, **changes) -> None:
        self._users.update_settings(self._users.settings.model_copy(update=changes))

    async def toggle_notifications(self, enabled: bool) -> None:
        """
        Set the notifications flag; when enabling without permission, ask for it.

        The flag is written before the prompt resolves. On denial the flag is
        cleared on whatever the settings are at that moment, so edits made
        while the prompt was open survive.
        """
        self._write_settings(notifications_enabled=enabled)

        if enabled and not self._has_permission:
            granted = await self._notifications.request_permission()
            if not granted:
                logger.info("Notification permission denied; disabling notifications")
                self._write_settings(notifications_enabled=False)

    def update_workflow_style(self, style: WorkflowStyle) -> None:
        self._write_settings(preferred_workflow=style)

    def complete_onboarding(self) -> None:
        self._write_settings(onboarding_completed=True)

    def reset_onboarding(self) -> None:
        self._write_settings(onboarding_completed=False)
