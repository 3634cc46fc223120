"""API routers."""

from taskhub.api.routes.auth import router as auth_router
from taskhub.api.routes.health import router as health_router
from taskhub.api.routes.projects import router as projects_router
from taskhub.api.routes.tasks import router as tasks_router

__all__ = ["auth_router", "health_router", "projects_router", "tasks_router"]
