# viewmodels/__init__.py
from .profile_view import ProfileViewModel
from .project_view import ProjectListViewModel
from .task_view import TaskViewModel
