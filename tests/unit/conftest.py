import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_username = AsyncMock(return_value=None)
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_username_or_email = AsyncMock(return_value=None)
    uow.users.create = AsyncMock()
    uow.users.list_all = AsyncMock(return_value=[])
    uow.users.update = AsyncMock(return_value=True)
    uow.users.delete = AsyncMock(return_value=True)

    uow.projects = MagicMock()
    uow.projects.list_by_owner = AsyncMock(return_value=[])
    uow.projects.get_owned = AsyncMock(return_value=None)
    uow.projects.create = AsyncMock()
    uow.projects.update_owned = AsyncMock(return_value=True)
    uow.projects.delete_owned = AsyncMock(return_value=True)
    uow.projects.delete_by_owner = AsyncMock(return_value=0)

    uow.tasks = MagicMock()
    uow.tasks.list_by_owner = AsyncMock(return_value=[])
    uow.tasks.count_by_owner = AsyncMock(return_value=0)
    uow.tasks.get_owned = AsyncMock(return_value=None)
    uow.tasks.create = AsyncMock()
    uow.tasks.update_owned = AsyncMock(return_value=True)
    uow.tasks.delete_owned = AsyncMock(return_value=True)
    uow.tasks.detach_project = AsyncMock(return_value=0)
    uow.tasks.delete_by_owner = AsyncMock(return_value=0)

    uow.revoked_tokens = MagicMock()
    uow.revoked_tokens.is_revoked = AsyncMock(return_value=False)
    uow.revoked_tokens.add = AsyncMock(return_value=True)
    uow.revoked_tokens.purge_expired = AsyncMock(return_value=0)

    return uow
