"""Authentication and user administration routes.

Public:
    POST /api/auth/register, POST /api/auth/login, POST /api/auth/seed
Authenticated:
    GET/PUT /api/auth/profile
Admin:
    GET /api/auth/users, GET/DELETE /api/auth/users/{user_id},
    POST /api/auth/admin/register
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from taskhub.api.dependencies.auth import get_current_actor, require_admin
from taskhub.api.dependencies.services import get_user_service
from taskhub.api.models.common import ApiResponse
from taskhub.api.models.user import (
    AdminRegisterRequest,
    AuthPayload,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserResponse,
)
from taskhub.application.services.user_service import (
    AuthSession,
    InitialTask,
    UserService,
)
from taskhub.domain.models.actor import ActorIdentity, Role

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_payload(session: AuthSession) -> AuthPayload:
    return AuthPayload(token=session.token, user=UserResponse.from_domain(session.user))


@router.post(
    "/register",
    response_model=ApiResponse[AuthPayload],
    status_code=201,
    summary="Register a new user account",
)
async def register(
    body: RegisterRequest,
    service: UserService = Depends(get_user_service),
) -> ApiResponse[AuthPayload]:
    session = await service.register(body.username, body.email, body.password)
    return ApiResponse(
        message="User registered successfully", data=_auth_payload(session)
    )


@router.post("/login", response_model=ApiResponse[AuthPayload], summary="Log in")
async def login(
    body: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> ApiResponse[AuthPayload]:
    session = await service.login(body.username, body.password)
    return ApiResponse(message="Login successful", data=_auth_payload(session))


@router.post(
    "/seed",
    response_model=ApiResponse[None],
    summary="Create demo accounts when no users exist",
)
async def seed(service: UserService = Depends(get_user_service)) -> ApiResponse[None]:
    created = await service.seed_users()
    if created == 0:
        return ApiResponse(message="Users already seeded")
    return ApiResponse(message="Users seeded successfully", count=created)


@router.get("/users", response_model=ApiResponse[list[UserResponse]])
async def list_users(
    actor: ActorIdentity = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[list[UserResponse]]:
    users = await service.list_users(actor)
    return ApiResponse(
        data=[UserResponse.from_domain(user) for user in users], count=len(users)
    )


@router.get("/users/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(
    user_id: UUID,
    actor: ActorIdentity = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    user = await service.get_user(actor, user_id)
    return ApiResponse(data=UserResponse.from_domain(user))


@router.delete("/users/{user_id}", response_model=ApiResponse[None])
async def delete_user(
    user_id: UUID,
    actor: ActorIdentity = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[None]:
    await service.delete_user(actor, user_id)
    return ApiResponse(message="User deleted successfully")


@router.post(
    "/admin/register",
    response_model=ApiResponse[UserResponse],
    status_code=201,
    summary="Create a user with any role, optionally with an initial task",
)
async def admin_register(
    body: AdminRegisterRequest,
    actor: ActorIdentity = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    initial_task = None
    if body.task_data is not None:
        initial_task = InitialTask(
            heading=body.task_data.heading,
            description=body.task_data.description,
            status=body.task_data.status,
            project_id=body.task_data.project_id,
        )
    user = await service.admin_register(
        actor,
        body.username,
        body.email,
        body.password,
        role=Role(body.role),
        project_id=body.project_id,
        initial_task=initial_task,
    )
    return ApiResponse(
        message="User registered successfully by admin",
        data=UserResponse.from_domain(user),
    )


@router.get("/profile", response_model=ApiResponse[UserResponse])
async def get_profile(
    actor: ActorIdentity = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    user = await service.get_profile(actor)
    return ApiResponse(data=UserResponse.from_domain(user))


@router.put("/profile", response_model=ApiResponse[UserResponse])
async def update_profile(
    body: ProfileUpdateRequest,
    actor: ActorIdentity = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    user = await service.update_profile(actor, username=body.username, email=body.email)
    return ApiResponse(
        message="Profile updated successfully", data=UserResponse.from_domain(user)
    )
