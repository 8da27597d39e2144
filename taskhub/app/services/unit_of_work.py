from abc import ABC, abstractmethod

from taskhub.app.repositories.project_repository import IProjectRepository
from taskhub.app.repositories.revoked_token_repository import IRevokedTokenRepository
from taskhub.app.repositories.task_repository import ITaskRepository
from taskhub.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    projects: IProjectRepository
    tasks: ITaskRepository
    revoked_tokens: IRevokedTokenRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
