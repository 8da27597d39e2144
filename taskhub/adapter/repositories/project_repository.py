from typing import List, Optional

from sqlalchemy import delete, update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from taskhub.app.repositories.project_repository import IProjectRepository
from taskhub.domain.entities import Project


class ProjectRepository(IProjectRepository):
    """Project repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_by_owner(self, owner_id: int) -> List[Project]:
        """Get all projects of an owner, newest first"""
        stmt = (
            select(Project)
            .where(Project.user_id == owner_id)
            .order_by(col(Project.created_at).desc(), col(Project.id).desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_owned(self, project_id: int, owner_id: int) -> Optional[Project]:
        """Get project by ID if it belongs to owner_id"""
        stmt = (
            select(Project)
            .where(Project.id == project_id, Project.user_id == owner_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, project: Project) -> Project:
        """Create a new project"""
        self.session.add(project)
        await self.session.flush()
        await self.session.refresh(project)
        return project

    async def update_owned(self, project_id: int, owner_id: int, values: dict) -> bool:
        stmt = (
            update(Project)
            .where(Project.id == project_id, Project.user_id == owner_id)
            .values(**values)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_owned(self, project_id: int, owner_id: int) -> bool:
        stmt = delete(Project).where(Project.id == project_id, Project.user_id == owner_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_by_owner(self, owner_id: int) -> int:
        stmt = delete(Project).where(Project.user_id == owner_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
