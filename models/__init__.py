# models/__init__.py
from .document import Document
from .project import ChatMessage, Project
from .settings import AppSettings, WorkflowStyle
from .task import Attachment, TaskItem, TaskPriority, TaskStatus
from .user import UserProfile, UserRole
