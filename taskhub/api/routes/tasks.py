from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from libs.result import Error
from pydantic import BaseModel, Field

from taskhub.api.error import ClientError, ServerError
from taskhub.app.repositories.task_repository import TaskFilter
from taskhub.app.services.unit_of_work import UnitOfWork
from taskhub.app.use_cases.auth import Identity
from taskhub.app.use_cases.projects import MessageResponse
from taskhub.app.use_cases.tasks import (
    ManageTasksUseCase,
    TaskCommand,
    TaskCountResponse,
    TaskResponse,
)
from taskhub.depends import get_current_user, get_unit_of_work
from taskhub.domain.entities import TaskPriority, TaskStatus

router = APIRouter(prefix="/tasks", tags=["Tasks"])

# Filter value meaning "no filter", as sent by the dashboard selects
ALL = "all"


class TaskRequest(BaseModel):
    """
    Task create/update payload

    Has no user_id: the owner always comes from the session token, and
    unknown body fields are ignored.
    """

    title: str = Field(..., min_length=1, max_length=255, description="Task title")
    description: Optional[str] = Field("", description="Task description")
    status: TaskStatus = Field(TaskStatus.pending, description="Task status")
    priority: TaskPriority = Field(TaskPriority.medium, description="Task priority")
    project_id: Optional[int] = Field(None, description="Owning project, if any")
    due_date: Optional[date] = Field(None, description="Due date (YYYY-MM-DD)")

    def to_command(self) -> TaskCommand:
        return TaskCommand(
            title=self.title,
            description=self.description or "",
            status=self.status,
            priority=self.priority,
            project_id=self.project_id,
            due_date=self.due_date,
        )


def raise_for_error(error) -> None:
    if error.code == "VALIDATION_ERROR":
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    elif error.code in ("TASK_NOT_FOUND", "PROJECT_NOT_FOUND"):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)


def _parse_choice(name: str, value: Optional[str], enum_type):
    if value is None or value == ALL or value == "":
        return None
    try:
        return enum_type(value)
    except ValueError:
        raise ClientError(Error("VALIDATION_ERROR", f"Invalid {name}: {value}"))


def _parse_project_id(value: Optional[str]) -> Optional[int]:
    if value is None or value == ALL or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise ClientError(Error("VALIDATION_ERROR", f"Invalid project_id: {value}"))


def build_task_filter(
    status: Optional[str] = Query(None, description="Task status or 'all'"),
    priority: Optional[str] = Query(None, description="Task priority or 'all'"),
    project_id: Optional[str] = Query(None, description="Project ID or 'all'"),
    start_date: Optional[date] = Query(None, description="Created on or after (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, description="Created on or before (YYYY-MM-DD)"),
    search: Optional[str] = Query(None, description="Substring of title or description"),
) -> TaskFilter:
    return TaskFilter(
        status=_parse_choice("status", status, TaskStatus),
        priority=_parse_choice("priority", priority, TaskPriority),
        project_id=_parse_project_id(project_id),
        start_date=start_date,
        end_date=end_date,
        search=search or None,
    )


@router.get("", status_code=status.HTTP_200_OK, response_model=List[TaskResponse])
async def list_tasks(
    current_user: Identity = Depends(get_current_user),
    task_filter: TaskFilter = Depends(build_task_filter),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Tasks

    Returns the caller's tasks with their project name, newest first.

    Query Parameters:
        - status, priority, project_id: exact match; 'all' disables the filter
        - start_date, end_date: inclusive bounds on the creation date
        - search: case-insensitive match on title or description
    """
    result = await ManageTasksUseCase(uow).list_tasks(current_user.id, task_filter)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/filtered-count", status_code=status.HTTP_200_OK, response_model=TaskCountResponse)
async def count_tasks(
    status_filter: Optional[str] = Query(None, alias="status"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    current_user: Identity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Count the caller's tasks matching status and creation-date bounds"""
    task_filter = TaskFilter(
        status=_parse_choice("status", status_filter, TaskStatus),
        start_date=start_date,
        end_date=end_date,
    )
    result = await ManageTasksUseCase(uow).count_tasks(current_user.id, task_filter)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{task_id}", status_code=status.HTTP_200_OK, response_model=TaskResponse)
async def get_task(
    task_id: int,
    current_user: Identity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Task

    Raises:
        - 404 Not Found: No such task, or it belongs to another user
    """
    result = await ManageTasksUseCase(uow).get_task(task_id, current_user.id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TaskResponse)
async def create_task(
    request: TaskRequest,
    current_user: Identity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Task

    Raises:
        - 400 Bad Request: Missing title or invalid field
        - 404 Not Found: project_id is not one of the caller's projects
    """
    result = await ManageTasksUseCase(uow).create_task(current_user.id, request.to_command())
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put("/{task_id}", status_code=status.HTTP_200_OK, response_model=TaskResponse)
async def update_task(
    task_id: int,
    request: TaskRequest,
    current_user: Identity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Task

    Replaces all editable fields.

    Raises:
        - 400 Bad Request: Missing title or invalid field
        - 404 Not Found: No such task, it belongs to another user, or
          project_id is not one of the caller's projects
    """
    result = await ManageTasksUseCase(uow).update_task(
        task_id, current_user.id, request.to_command()
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{task_id}", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def delete_task(
    task_id: int,
    current_user: Identity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Task

    Raises:
        - 404 Not Found: No such task, or it belongs to another user
    """
    result = await ManageTasksUseCase(uow).delete_task(task_id, current_user.id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
