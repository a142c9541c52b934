# stores/__init__.py
from .base import CollectionStore
from .project_store import ProjectStore
from .task_store import TaskStore
from .user_store import UserStore
