from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from taskhub.api.error import ClientError, ServerError
from taskhub.app.services.unit_of_work import UnitOfWork
from taskhub.app.use_cases.auth import Identity
from taskhub.app.use_cases.projects import (
    ManageProjectsUseCase,
    MessageResponse,
    ProjectCommand,
    ProjectResponse,
)
from taskhub.depends import get_current_user, get_unit_of_work
from taskhub.domain.entities import ProjectStatus

router = APIRouter(prefix="/projects", tags=["Projects"])


class ProjectRequest(BaseModel):
    """
    Project create/update payload

    Has no user_id: the owner always comes from the session token, and
    unknown body fields are ignored.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Project name")
    description: Optional[str] = Field("", description="Project description")
    status: ProjectStatus = Field(ProjectStatus.active, description="Project status")

    def to_command(self) -> ProjectCommand:
        return ProjectCommand(
            name=self.name, description=self.description or "", status=self.status
        )


def raise_for_error(error) -> None:
    if error.code == "VALIDATION_ERROR":
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    elif error.code == "PROJECT_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)


@router.get("", status_code=status.HTTP_200_OK, response_model=List[ProjectResponse])
async def list_projects(
    current_user: Identity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List the caller's projects, newest first"""
    result = await ManageProjectsUseCase(uow).list_projects(current_user.id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{project_id}", status_code=status.HTTP_200_OK, response_model=ProjectResponse)
async def get_project(
    project_id: int,
    current_user: Identity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Project

    Raises:
        - 404 Not Found: No such project, or it belongs to another user
    """
    result = await ManageProjectsUseCase(uow).get_project(project_id, current_user.id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ProjectResponse)
async def create_project(
    request: ProjectRequest,
    current_user: Identity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Project

    Raises:
        - 400 Bad Request: Missing name or invalid status
    """
    result = await ManageProjectsUseCase(uow).create_project(
        current_user.id, request.to_command()
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put("/{project_id}", status_code=status.HTTP_200_OK, response_model=ProjectResponse)
async def update_project(
    project_id: int,
    request: ProjectRequest,
    current_user: Identity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Project

    Raises:
        - 400 Bad Request: Missing name or invalid status
        - 404 Not Found: No such project, or it belongs to another user
    """
    result = await ManageProjectsUseCase(uow).update_project(
        project_id, current_user.id, request.to_command()
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{project_id}", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def delete_project(
    project_id: int,
    current_user: Identity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Project

    The caller's tasks in the project are kept and detached from it.

    Raises:
        - 404 Not Found: No such project, or it belongs to another user
    """
    result = await ManageProjectsUseCase(uow).delete_project(project_id, current_user.id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
