"""
Manage Projects Use Case

CRUD for projects, scoped to the calling user.
"""

from typing import List

from libs.result import Error, Result, Return
from taskhub.app.services.unit_of_work import UnitOfWork
from taskhub.domain.base import utcnow
from taskhub.domain.entities import Project
from .dtos import MessageResponse, ProjectCommand, ProjectResponse

PROJECT_NOT_FOUND = Error("PROJECT_NOT_FOUND", "Project not found")


def _to_response(project: Project) -> ProjectResponse:
    return ProjectResponse(**project.model_dump())


class ManageProjectsUseCase:
    """
    Use case for project CRUD.

    Business Rules:
    - Every operation is scoped by owner_id taken from the session token
    - A project owned by someone else is reported as PROJECT_NOT_FOUND
    - Update and delete are single conditional statements on (id, owner)
    - Deleting a project detaches the owner's tasks from it
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list_projects(self, owner_id: int) -> Result[List[ProjectResponse]]:
        async with self.uow:
            projects = await self.uow.projects.list_by_owner(owner_id)
            return Return.ok([_to_response(p) for p in projects])

    async def get_project(self, project_id: int, owner_id: int) -> Result[ProjectResponse]:
        async with self.uow:
            project = await self.uow.projects.get_owned(project_id, owner_id)
            if project is None:
                return Return.err(PROJECT_NOT_FOUND)
            return Return.ok(_to_response(project))

    async def create_project(
        self, owner_id: int, command: ProjectCommand
    ) -> Result[ProjectResponse]:
        """
        Create a project owned by owner_id.

        Returns:
            Result with the created project, or Error(VALIDATION_ERROR)
        """
        if not command.name or not command.name.strip():
            return Return.err(Error("VALIDATION_ERROR", "Project name is required"))

        async with self.uow:
            project = Project(
                name=command.name,
                description=command.description,
                status=command.status,
                user_id=owner_id,
            )
            project = await self.uow.projects.create(project)
            await self.uow.commit()
            return Return.ok(_to_response(project))

    async def update_project(
        self, project_id: int, owner_id: int, command: ProjectCommand
    ) -> Result[ProjectResponse]:
        """
        Replace the editable fields of an owned project.

        Returns:
            Result with the updated project, or Error(VALIDATION_ERROR | PROJECT_NOT_FOUND)
        """
        if not command.name or not command.name.strip():
            return Return.err(Error("VALIDATION_ERROR", "Project name is required"))

        async with self.uow:
            updated = await self.uow.projects.update_owned(
                project_id,
                owner_id,
                {
                    "name": command.name,
                    "description": command.description,
                    "status": command.status,
                    "updated_at": utcnow(),
                },
            )
            if not updated:
                return Return.err(PROJECT_NOT_FOUND)

            await self.uow.commit()

            project = await self.uow.projects.get_owned(project_id, owner_id)
            if project is None:
                # Deleted between the update and the read-back
                return Return.err(PROJECT_NOT_FOUND)
            return Return.ok(_to_response(project))

    async def delete_project(self, project_id: int, owner_id: int) -> Result[MessageResponse]:
        async with self.uow:
            # Tasks reference the project row, so detach them before the delete
            await self.uow.tasks.detach_project(project_id, owner_id)
            deleted = await self.uow.projects.delete_owned(project_id, owner_id)
            if not deleted:
                return Return.err(PROJECT_NOT_FOUND)

            await self.uow.commit()

        return Return.ok(MessageResponse(message="Project deleted successfully"))
