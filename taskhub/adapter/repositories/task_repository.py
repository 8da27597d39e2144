from datetime import datetime, time, timedelta
from typing import List, Optional

from sqlalchemy import delete, func, update
from sqlmodel import col, or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from taskhub.app.repositories.task_repository import ITaskRepository, TaskFilter, TaskRow
from taskhub.domain.base import utcnow
from taskhub.domain.entities import Project, Task, TaskStatus


def _apply_filter(stmt, task_filter: TaskFilter):
    if task_filter.status is not None:
        stmt = stmt.where(Task.status == task_filter.status)
    if task_filter.priority is not None:
        stmt = stmt.where(Task.priority == task_filter.priority)
    if task_filter.project_id is not None:
        stmt = stmt.where(Task.project_id == task_filter.project_id)
    # Date bounds are inclusive calendar days
    if task_filter.start_date is not None:
        stmt = stmt.where(Task.created_at >= datetime.combine(task_filter.start_date, time.min))
    if task_filter.end_date is not None:
        day_after = task_filter.end_date + timedelta(days=1)
        stmt = stmt.where(Task.created_at < datetime.combine(day_after, time.min))
    if task_filter.search:
        pattern = f"%{task_filter.search}%"
        stmt = stmt.where(
            or_(col(Task.title).ilike(pattern), col(Task.description).ilike(pattern))
        )
    return stmt


class TaskRepository(ITaskRepository):
    """Task repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _select_with_project_name(self, owner_id: int):
        return (
            select(Task, Project.name)
            .outerjoin(Project, Project.id == Task.project_id)
            .where(Task.user_id == owner_id)
            .execution_options(populate_existing=True)
        )

    async def list_by_owner(self, owner_id: int, task_filter: TaskFilter) -> List[TaskRow]:
        stmt = _apply_filter(self._select_with_project_name(owner_id), task_filter)
        stmt = stmt.order_by(col(Task.created_at).desc(), col(Task.id).desc())
        result = await self.session.execute(stmt)
        return [(task, project_name) for task, project_name in result.all()]

    async def count_by_owner(self, owner_id: int, task_filter: TaskFilter) -> int:
        stmt = select(func.count()).select_from(Task).where(Task.user_id == owner_id)
        stmt = _apply_filter(stmt, task_filter)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def get_owned(self, task_id: int, owner_id: int) -> Optional[TaskRow]:
        stmt = self._select_with_project_name(owner_id).where(Task.id == task_id)
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return row[0], row[1]

    async def create(self, task: Task) -> Task:
        """Create a new task"""
        self.session.add(task)
        await self.session.flush()
        await self.session.refresh(task)
        return task

    async def update_owned(self, task_id: int, owner_id: int, values: dict) -> bool:
        values = dict(values)
        if "status" in values:
            if values["status"] == TaskStatus.completed:
                # Keep the original completion time if it was already completed
                values["completed_at"] = func.coalesce(Task.completed_at, utcnow())
            else:
                values["completed_at"] = None

        stmt = (
            update(Task)
            .where(Task.id == task_id, Task.user_id == owner_id)
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_owned(self, task_id: int, owner_id: int) -> bool:
        stmt = delete(Task).where(Task.id == task_id, Task.user_id == owner_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def detach_project(self, project_id: int, owner_id: int) -> int:
        stmt = (
            update(Task)
            .where(Task.project_id == project_id, Task.user_id == owner_id)
            .values(project_id=None)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_by_owner(self, owner_id: int) -> int:
        stmt = delete(Task).where(Task.user_id == owner_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
