"""Project routes. All require authentication; deletion requires admin."""

from uuid import UUID

from fastapi import APIRouter, Depends

from taskhub.api.dependencies.auth import get_current_actor, require_admin
from taskhub.api.dependencies.services import get_project_service
from taskhub.api.models.common import ApiResponse
from taskhub.api.models.project import ProjectRequest, ProjectResponse
from taskhub.application.services.project_service import ProjectService
from taskhub.domain.models.actor import ActorIdentity

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("/", response_model=ApiResponse[list[ProjectResponse]])
async def list_projects(
    actor: ActorIdentity = Depends(get_current_actor),
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[list[ProjectResponse]]:
    projects = await service.list_projects(actor)
    return ApiResponse(
        data=[ProjectResponse.from_domain(p) for p in projects], count=len(projects)
    )


@router.get("/{project_id}", response_model=ApiResponse[ProjectResponse])
async def get_project(
    project_id: UUID,
    actor: ActorIdentity = Depends(get_current_actor),
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[ProjectResponse]:
    project = await service.get_project(actor, project_id)
    return ApiResponse(data=ProjectResponse.from_domain(project))


@router.post("/", response_model=ApiResponse[ProjectResponse], status_code=201)
async def create_project(
    body: ProjectRequest,
    actor: ActorIdentity = Depends(get_current_actor),
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[ProjectResponse]:
    """Create a project. 409 when the trimmed title is already taken."""
    project = await service.create_project(actor, body.title, body.description)
    return ApiResponse(
        message="Project created successfully",
        data=ProjectResponse.from_domain(project),
    )


@router.put("/{project_id}", response_model=ApiResponse[ProjectResponse])
async def update_project(
    project_id: UUID,
    body: ProjectRequest,
    actor: ActorIdentity = Depends(get_current_actor),
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[ProjectResponse]:
    project = await service.update_project(
        actor, project_id, body.title, body.description
    )
    return ApiResponse(
        message="Project updated successfully",
        data=ProjectResponse.from_domain(project),
    )


@router.delete("/{project_id}", response_model=ApiResponse[None])
async def delete_project(
    project_id: UUID,
    actor: ActorIdentity = Depends(require_admin),
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[None]:
    await service.delete_project(actor, project_id)
    return ApiResponse(message="Project deleted successfully")
