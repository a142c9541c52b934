# stores/project_store.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from db import Slots
from models.project import ChatMessage, Project

from .base import CollectionStore

logger = logging.getLogger(__name__)


class ProjectStore(CollectionStore[Project]):
    slot = Slots.PROJECTS
    item_type = Project

    def add_message(self, message: ChatMessage, project_id: UUID) -> bool:
        idx = self.index_of(project_id)
        if idx is None:
            logger.debug("add_message ignored: project %s not found", project_id)
            return False
        project = self._items[idx]
        self._items[idx] = project.model_copy(update={"messages": [*project.messages, message]})
        self._commit()
        return True

    def active_projects(self, reference: Optional[datetime] = None) -> List[Project]:
        now = reference or self._clock()
        return [p for p in self._items if p.is_active(now)]
