"""Task routes. All require authentication.

Scoped (admin sees all, users see tasks they created or are assigned to):
    GET /api/tasks/, GET /api/tasks/stats, GET /api/tasks/users,
    GET /api/tasks/{task_id}, PATCH /api/tasks/{task_id}/status
Any authenticated user:
    POST /api/tasks/ (multipart form, optional file)
Admin:
    GET /api/tasks/user/{user_id}, PUT /api/tasks/{task_id} (multipart form),
    PATCH /api/tasks/{task_id}/assignee, DELETE /api/tasks/{task_id}
"""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from taskhub.api.dependencies.auth import get_current_actor, require_admin
from taskhub.api.dependencies.services import get_task_service
from taskhub.api.models.common import ApiResponse
from taskhub.api.models.task import (
    AssigneeUpdateRequest,
    StatusUpdateRequest,
    TaskResponse,
    TaskStatsResponse,
)
from taskhub.api.models.user import UserRef
from taskhub.application.services.task_query_composer import TaskQueryParams
from taskhub.application.services.task_service import (
    KEEP,
    Attachment,
    TaskDetails,
    TaskDraft,
    TaskService,
    TaskUpdate,
)
from taskhub.domain.models.actor import ActorIdentity

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


async def _read_attachment(file: UploadFile | None) -> Attachment | None:
    if file is None or not file.filename:
        return None
    return Attachment(filename=file.filename, content=await file.read())


def _task_list(tasks: list[TaskDetails]) -> ApiResponse[list[TaskResponse]]:
    return ApiResponse(
        data=[TaskResponse.from_details(details) for details in tasks],
        count=len(tasks),
    )


@router.get("/", response_model=ApiResponse[list[TaskResponse]])
async def list_tasks(
    status: str | None = Query(None, description="TO_DO, IN_PROGRESS or DONE"),
    project: str | None = Query(None, description="Legacy free-text project label"),
    project_id: UUID | None = Query(None),
    search: str | None = Query(
        None, description="Text searched in heading and description"
    ),
    actor: ActorIdentity = Depends(get_current_actor),
    service: TaskService = Depends(get_task_service),
) -> ApiResponse[list[TaskResponse]]:
    params = TaskQueryParams(
        status=status, project_label=project, project_id=project_id, search=search
    )
    return _task_list(await service.list_tasks(actor, params))


@router.get("/stats", response_model=ApiResponse[TaskStatsResponse])
async def task_stats(
    actor: ActorIdentity = Depends(get_current_actor),
    service: TaskService = Depends(get_task_service),
) -> ApiResponse[TaskStatsResponse]:
    stats = await service.stats(actor)
    return ApiResponse(data=TaskStatsResponse.from_stats(stats))


@router.get("/users", response_model=ApiResponse[list[UserRef]])
async def task_users(
    actor: ActorIdentity = Depends(get_current_actor),
    service: TaskService = Depends(get_task_service),
) -> ApiResponse[list[UserRef]]:
    """Users appearing as creator or assignee on tasks the actor can see."""
    users = await service.task_users(actor)
    return ApiResponse(data=[UserRef.from_domain(u) for u in users], count=len(users))


@router.get("/user/{user_id}", response_model=ApiResponse[list[TaskResponse]])
async def user_tasks(
    user_id: UUID,
    actor: ActorIdentity = Depends(require_admin),
    service: TaskService = Depends(get_task_service),
) -> ApiResponse[list[TaskResponse]]:
    return _task_list(await service.user_tasks(actor, user_id))


@router.get("/{task_id}", response_model=ApiResponse[TaskResponse])
async def get_task(
    task_id: UUID,
    actor: ActorIdentity = Depends(get_current_actor),
    service: TaskService = Depends(get_task_service),
) -> ApiResponse[TaskResponse]:
    details = await service.get_task(actor, task_id)
    return ApiResponse(data=TaskResponse.from_details(details))


@router.post("/", response_model=ApiResponse[TaskResponse], status_code=201)
async def create_task(
    heading: str = Form(..., max_length=200),
    description: str | None = Form(None, max_length=1000),
    assigned_to: UUID | None = Form(None),
    project_id: UUID | None = Form(None),
    project: str | None = Form(None),
    file: UploadFile | None = File(None),
    actor: ActorIdentity = Depends(get_current_actor),
    service: TaskService = Depends(get_task_service),
) -> ApiResponse[TaskResponse]:
    """Create a task. ``assigned_to`` is ignored unless the actor is an admin."""
    details = await service.create_task(
        actor,
        TaskDraft(
            heading=heading,
            description=description,
            assigned_to=assigned_to,
            project_id=project_id,
            project_label=project,
        ),
        attachment=await _read_attachment(file),
    )
    return ApiResponse(
        message="Task created successfully", data=TaskResponse.from_details(details)
    )


@router.patch("/{task_id}/status", response_model=ApiResponse[TaskResponse])
async def update_task_status(
    task_id: UUID,
    body: StatusUpdateRequest,
    actor: ActorIdentity = Depends(get_current_actor),
    service: TaskService = Depends(get_task_service),
) -> ApiResponse[TaskResponse]:
    project_id = body.project_id if "project_id" in body.model_fields_set else KEEP
    details = await service.update_status(
        actor, task_id, body.status, project_id=project_id
    )
    return ApiResponse(
        message="Task status updated successfully",
        data=TaskResponse.from_details(details),
    )


@router.put("/{task_id}", response_model=ApiResponse[TaskResponse])
async def update_task(
    task_id: UUID,
    heading: str | None = Form(None, max_length=200),
    description: str | None = Form(None, max_length=1000),
    status: str | None = Form(None),
    assigned_to: UUID | None = Form(None),
    project_id: UUID | None = Form(None),
    project: str | None = Form(None),
    file: UploadFile | None = File(None),
    actor: ActorIdentity = Depends(require_admin),
    service: TaskService = Depends(get_task_service),
) -> ApiResponse[TaskResponse]:
    """Partial update. Omitted or empty form fields leave the task unchanged."""
    update = TaskUpdate(
        heading=heading if heading is not None else KEEP,
        description=description if description is not None else KEEP,
        status=status if status is not None else KEEP,
        assigned_to=assigned_to if assigned_to is not None else KEEP,
        project_id=project_id if project_id is not None else KEEP,
        project_label=project if project is not None else KEEP,
    )
    details = await service.update_task(
        actor, task_id, update, attachment=await _read_attachment(file)
    )
    return ApiResponse(
        message="Task updated successfully", data=TaskResponse.from_details(details)
    )


@router.patch("/{task_id}/assignee", response_model=ApiResponse[TaskResponse])
async def update_task_assignee(
    task_id: UUID,
    body: AssigneeUpdateRequest,
    actor: ActorIdentity = Depends(require_admin),
    service: TaskService = Depends(get_task_service),
) -> ApiResponse[TaskResponse]:
    details = await service.update_assignee(actor, task_id, body.assignee_id)
    return ApiResponse(
        message="Task assignee updated successfully",
        data=TaskResponse.from_details(details),
    )


@router.delete("/{task_id}", response_model=ApiResponse[None])
async def delete_task(
    task_id: UUID,
    actor: ActorIdentity = Depends(require_admin),
    service: TaskService = Depends(get_task_service),
) -> ApiResponse[None]:
    await service.delete_task(actor, task_id)
    return ApiResponse(message="Task deleted successfully")
