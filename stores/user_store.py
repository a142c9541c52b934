# stores/user_store.py
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional
from uuid import UUID

from db import Slots
from models.settings import AppSettings
from models.user import UserProfile
from utils.debounce import Debouncer
from utils.signals import Signal

from .base import CollectionStore

logger = logging.getLogger(__name__)


class UserStore(CollectionStore[UserProfile]):
    """
    Users plus the app settings singleton and the current-user selection.

    Users and settings live in separate slots and are saved independently.
    """

    slot = Slots.USERS
    item_type = UserProfile

    def __init__(self, gateway, **kwargs) -> None:
        super().__init__(gateway, **kwargs)
        self.settings_changed = Signal()
        self._settings = gateway.load_or_default(AppSettings, Slots.SETTINGS, AppSettings())
        self._settings_autosave = Debouncer(self._autosave.delay, self._persist_settings, name="save-settings")

        if self._items:
            self._current_user_id: Optional[UUID] = self._items[0].id
        else:
            default_user = UserProfile.placeholder()
            self._items.append(default_user)
            self._current_user_id = default_user.id
            logger.info("No users stored; created default profile %s", default_user.id)
            self._commit()

    # ---- current user ----

    @property
    def current_user_id(self) -> Optional[UUID]:
        return self._current_user_id

    @property
    def current_user(self) -> Optional[UserProfile]:
        if self._current_user_id is None:
            return None
        return self.get(self._current_user_id)

    def select_user(self, user_id: UUID) -> bool:
        if self.index_of(user_id) is None:
            return False
        self._current_user_id = user_id
        self.changed.emit(list(self._items))
        return True

    def save_current_user(self, profile: UserProfile) -> bool:
        return self.update(profile)

    def add_user(self, user: UserProfile) -> None:
        self.create(user)

    def remove_users_at(self, positions: Iterable[int]) -> int:
        return self.delete_at(positions)

    # ---- settings ----

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def update_settings(self, settings: AppSettings) -> None:
        self._settings = settings
        self.settings_changed.emit(settings)
        self._settings_autosave.trigger(settings)

    def _persist_settings(self, settings: AppSettings) -> None:
        try:
            self._gateway.save(settings, Slots.SETTINGS)
        except Exception:
            logger.exception("Autosave failed slot=%s", Slots.SETTINGS)

    def flush(self) -> bool:
        users_written = super().flush()
        settings_written = self._settings_autosave.flush()
        return users_written or settings_written

    def close(self) -> None:
        super().close()
        self._settings_autosave.close()
