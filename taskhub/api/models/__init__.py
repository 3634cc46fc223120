"""API request/response models."""

from taskhub.api.models.common import ApiResponse, FieldError, error_body
from taskhub.api.models.health import HealthResponse
from taskhub.api.models.project import ProjectRef, ProjectRequest, ProjectResponse
from taskhub.api.models.task import (
    AssigneeUpdateRequest,
    StatusUpdateRequest,
    TaskResponse,
    TaskStatsResponse,
)
from taskhub.api.models.user import (
    AdminRegisterRequest,
    AuthPayload,
    InitialTaskRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserRef,
    UserResponse,
)

__all__ = [
    "AdminRegisterRequest",
    "ApiResponse",
    "AssigneeUpdateRequest",
    "AuthPayload",
    "FieldError",
    "HealthResponse",
    "InitialTaskRequest",
    "LoginRequest",
    "ProfileUpdateRequest",
    "ProjectRef",
    "ProjectRequest",
    "ProjectResponse",
    "RegisterRequest",
    "StatusUpdateRequest",
    "TaskResponse",
    "TaskStatsResponse",
    "UserRef",
    "UserResponse",
    "error_body",
]
