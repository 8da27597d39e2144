"""
Manage Tasks Use Case

CRUD and filtered listing for tasks, scoped to the calling user.
"""

from typing import List, Optional

from libs.result import Error, Result, Return
from taskhub.app.repositories.task_repository import TaskFilter
from taskhub.app.services.unit_of_work import UnitOfWork
from taskhub.app.use_cases.projects.dtos import MessageResponse
from taskhub.app.use_cases.projects.manage_projects_use_case import PROJECT_NOT_FOUND
from taskhub.domain.base import utcnow
from taskhub.domain.entities import Task, TaskStatus
from .dtos import TaskCommand, TaskCountResponse, TaskResponse

TASK_NOT_FOUND = Error("TASK_NOT_FOUND", "Task not found")


def _to_response(task: Task, project_name: Optional[str]) -> TaskResponse:
    return TaskResponse(**task.model_dump(), project_name=project_name)


class ManageTasksUseCase:
    """
    Use case for task CRUD.

    Business Rules:
    - Every operation is scoped by owner_id taken from the session token
    - A task owned by someone else is reported as TASK_NOT_FOUND
    - project_id must reference one of the owner's projects
    - Update and delete are single conditional statements on (id, owner)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list_tasks(
        self, owner_id: int, task_filter: TaskFilter
    ) -> Result[List[TaskResponse]]:
        async with self.uow:
            rows = await self.uow.tasks.list_by_owner(owner_id, task_filter)
            return Return.ok([_to_response(task, name) for task, name in rows])

    async def count_tasks(self, owner_id: int, task_filter: TaskFilter) -> Result[TaskCountResponse]:
        async with self.uow:
            count = await self.uow.tasks.count_by_owner(owner_id, task_filter)
            return Return.ok(TaskCountResponse(count=count))

    async def get_task(self, task_id: int, owner_id: int) -> Result[TaskResponse]:
        async with self.uow:
            row = await self.uow.tasks.get_owned(task_id, owner_id)
            if row is None:
                return Return.err(TASK_NOT_FOUND)
            return Return.ok(_to_response(*row))

    async def create_task(self, owner_id: int, command: TaskCommand) -> Result[TaskResponse]:
        """
        Create a task owned by owner_id.

        Returns:
            Result with the created task, or Error(VALIDATION_ERROR | PROJECT_NOT_FOUND)
        """
        if not command.title or not command.title.strip():
            return Return.err(Error("VALIDATION_ERROR", "Task title is required"))

        async with self.uow:
            project_name = None
            if command.project_id is not None:
                project = await self.uow.projects.get_owned(command.project_id, owner_id)
                if project is None:
                    return Return.err(PROJECT_NOT_FOUND)
                project_name = project.name

            task = Task(
                title=command.title,
                description=command.description,
                status=command.status,
                priority=command.priority,
                project_id=command.project_id,
                due_date=command.due_date,
                user_id=owner_id,
                completed_at=utcnow() if command.status == TaskStatus.completed else None,
            )
            task = await self.uow.tasks.create(task)
            await self.uow.commit()
            return Return.ok(_to_response(task, project_name))

    async def update_task(
        self, task_id: int, owner_id: int, command: TaskCommand
    ) -> Result[TaskResponse]:
        """
        Replace the editable fields of an owned task.

        Returns:
            Result with the updated task,
            or Error(VALIDATION_ERROR | PROJECT_NOT_FOUND | TASK_NOT_FOUND)
        """
        if not command.title or not command.title.strip():
            return Return.err(Error("VALIDATION_ERROR", "Task title is required"))

        async with self.uow:
            if command.project_id is not None:
                project = await self.uow.projects.get_owned(command.project_id, owner_id)
                if project is None:
                    return Return.err(PROJECT_NOT_FOUND)

            updated = await self.uow.tasks.update_owned(
                task_id,
                owner_id,
                {
                    "title": command.title,
                    "description": command.description,
                    "status": command.status,
                    "priority": command.priority,
                    "project_id": command.project_id,
                    "due_date": command.due_date,
                    "updated_at": utcnow(),
                },
            )
            if not updated:
                return Return.err(TASK_NOT_FOUND)

            await self.uow.commit()

            row = await self.uow.tasks.get_owned(task_id, owner_id)
            if row is None:
                # Deleted between the update and the read-back
                return Return.err(TASK_NOT_FOUND)
            return Return.ok(_to_response(*row))

    async def delete_task(self, task_id: int, owner_id: int) -> Result[MessageResponse]:
        async with self.uow:
            deleted = await self.uow.tasks.delete_owned(task_id, owner_id)
            if not deleted:
                return Return.err(TASK_NOT_FOUND)
            await self.uow.commit()

        return Return.ok(MessageResponse(message="Task deleted successfully"))
