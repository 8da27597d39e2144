from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from taskhub.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from taskhub.api.error import ClientError, ServerError
from taskhub.app.services.unit_of_work import UnitOfWork
from taskhub.app.use_cases.auth import AuthenticateUseCase, Identity

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# auto_error=False: a missing header must be a 401 from the gate, not FastAPI's 403
security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """Bearer token from the Authorization header, or None if absent"""
    if credentials is None:
        return None
    return credentials.credentials


async def get_current_user(
    token: Optional[str] = Depends(get_bearer_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> Identity:
    """
    Dependency gating every protected route.

    Args:
        token: Bearer token from Authorization header
        uow: Unit of work used for the revocation lookup

    Returns:
        Identity (id, username) of the caller

    Raises:
        ClientError: 401 if the token is missing,
                     403 if it is revoked, invalid or expired
    """
    use_case = AuthenticateUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        error = result.error
        if error.code == "MISSING_TOKEN":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in ("TOKEN_REVOKED", "INVALID_TOKEN"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value
