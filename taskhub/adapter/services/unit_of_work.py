from sqlmodel.ext.asyncio.session import AsyncSession

from taskhub.adapter.repositories.project_repository import ProjectRepository
from taskhub.adapter.repositories.revoked_token_repository import RevokedTokenRepository
from taskhub.adapter.repositories.task_repository import TaskRepository
from taskhub.adapter.repositories.user_repository import UserRepository
from taskhub.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.projects = ProjectRepository(self.session)
        self.tasks = TaskRepository(self.session)
        self.revoked_tokens = RevokedTokenRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
