from .task import Category, Task, TaskStatus
from .user import User

# Export all models for easy importing
__all__ = ["Category", "Task", "TaskStatus", "User"]
