"""
TaskHub - Task Management Backend

Users register and authenticate, administrators manage users,
projects group tasks, and tasks move through TO_DO / IN_PROGRESS / DONE
with set-once timestamps and optional file attachments.

Core rules:
- Admins see everything; users see tasks they created or are assigned to
- Task search never widens a user's visibility scope
- Project titles are globally unique
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
