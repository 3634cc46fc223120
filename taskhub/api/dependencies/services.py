"""Service dependencies for the TaskHub API.

Module-level singletons created on first use from AppConfig:

    config           -> load_config() (.env + environment)
    entity store     -> in-memory stub or SqlEntityStore (DATABASE_URL)
    file storage     -> LocalFileStorage(UPLOAD_DIR)
    password hasher  -> BcryptPasswordHasher(BCRYPT_ROUNDS)
    token codec      -> JwtTokenCodec(JWT_SECRET, JWT_ALGORITHM, TOKEN_TTL_HOURS)

Services are rebuilt whenever one of their collaborators is replaced
through a ``set_*`` function. Tests call ``reset_dependencies()`` between
cases.
"""

from taskhub.application.ports.credentials import (
    PasswordHasherProtocol,
    TokenCodecProtocol,
)
from taskhub.application.ports.entity_store import EntityStoreProtocol
from taskhub.application.ports.file_storage import FileStorageProtocol
from taskhub.application.services.credential_service import CredentialService
from taskhub.application.services.project_service import ProjectService
from taskhub.application.services.task_service import TaskService
from taskhub.application.services.user_service import UserService
from taskhub.bootstrap.config import load_config
from taskhub.bootstrap.entity_store import build_entity_store
from taskhub.config import AppConfig
from taskhub.infrastructure.adapters.security import (
    BcryptPasswordHasher,
    JwtTokenCodec,
)
from taskhub.infrastructure.adapters.storage import LocalFileStorage

_config: AppConfig | None = None
_entity_store: EntityStoreProtocol | None = None
_file_storage: FileStorageProtocol | None = None
_password_hasher: PasswordHasherProtocol | None = None
_token_codec: TokenCodecProtocol | None = None
_credential_service: CredentialService | None = None
_project_service: ProjectService | None = None
_task_service: TaskService | None = None
_user_service: UserService | None = None


def _reset_services() -> None:
    global _credential_service, _project_service, _task_service, _user_service
    _credential_service = None
    _project_service = None
    _task_service = None
    _user_service = None


def get_config() -> AppConfig:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: AppConfig) -> None:
    """Replace configuration; adapters built from it are rebuilt lazily."""
    global _config, _file_storage, _password_hasher, _token_codec
    _config = config
    _file_storage = None
    _password_hasher = None
    _token_codec = None
    _reset_services()


def get_entity_store() -> EntityStoreProtocol:
    global _entity_store
    if _entity_store is None:
        _entity_store = build_entity_store(get_config())
    return _entity_store


def set_entity_store(store: EntityStoreProtocol) -> None:
    global _entity_store
    _entity_store = store
    _reset_services()


def get_file_storage() -> FileStorageProtocol:
    global _file_storage
    if _file_storage is None:
        _file_storage = LocalFileStorage(get_config().upload_dir)
    return _file_storage


def set_file_storage(storage: FileStorageProtocol) -> None:
    global _file_storage
    _file_storage = storage
    _reset_services()


def get_password_hasher() -> PasswordHasherProtocol:
    global _password_hasher
    if _password_hasher is None:
        _password_hasher = BcryptPasswordHasher(rounds=get_config().bcrypt_rounds)
    return _password_hasher


def set_password_hasher(hasher: PasswordHasherProtocol) -> None:
    global _password_hasher
    _password_hasher = hasher
    _reset_services()


def get_token_codec() -> TokenCodecProtocol:
    global _token_codec
    if _token_codec is None:
        config = get_config()
        _token_codec = JwtTokenCodec(
            secret=config.jwt_secret,
            algorithm=config.jwt_algorithm,
            ttl=config.token_ttl,
        )
    return _token_codec


def set_token_codec(codec: TokenCodecProtocol) -> None:
    global _token_codec
    _token_codec = codec
    _reset_services()


def get_credential_service() -> CredentialService:
    global _credential_service
    if _credential_service is None:
        _credential_service = CredentialService(
            store=get_entity_store(),
            hasher=get_password_hasher(),
            token_codec=get_token_codec(),
        )
    return _credential_service


def get_project_service() -> ProjectService:
    global _project_service
    if _project_service is None:
        _project_service = ProjectService(get_entity_store())
    return _project_service


def get_task_service() -> TaskService:
    global _task_service
    if _task_service is None:
        _task_service = TaskService(get_entity_store(), get_file_storage())
    return _task_service


def get_user_service() -> UserService:
    global _user_service
    if _user_service is None:
        _user_service = UserService(
            store=get_entity_store(),
            credentials=get_credential_service(),
            task_service=get_task_service(),
            seed_password=get_config().seed_password,
        )
    return _user_service


def reset_dependencies() -> None:
    """Reset all singleton instances for testing."""
    global _config, _entity_store, _file_storage, _password_hasher, _token_codec
    _config = None
    _entity_store = None
    _file_storage = None
    _password_hasher = None
    _token_codec = None
    _reset_services()
