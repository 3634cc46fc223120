"""FastAPI dependency providers."""

from taskhub.api.dependencies.auth import get_current_actor, require_admin
from taskhub.api.dependencies.services import (
    get_config,
    get_credential_service,
    get_entity_store,
    get_file_storage,
    get_project_service,
    get_task_service,
    get_user_service,
    reset_dependencies,
    set_config,
    set_entity_store,
    set_file_storage,
    set_password_hasher,
    set_token_codec,
)

__all__ = [
    "get_config",
    "get_credential_service",
    "get_current_actor",
    "get_entity_store",
    "get_file_storage",
    "get_project_service",
    "get_task_service",
    "get_user_service",
    "require_admin",
    "reset_dependencies",
    "set_config",
    "set_entity_store",
    "set_file_storage",
    "set_password_hasher",
    "set_token_codec",
]
