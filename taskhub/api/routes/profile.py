from fastapi import APIRouter, Depends, status

from taskhub.api.error import ClientError, ServerError
from taskhub.app.services.unit_of_work import UnitOfWork
from taskhub.app.use_cases.auth import Identity
from taskhub.app.use_cases.users import LoadProfileUseCase, ProfileResponse
from taskhub.depends import get_current_user, get_unit_of_work

router = APIRouter(tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=ProfileResponse)
async def get_me(
    current_user: Identity = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Load Current User

    Raises:
        - 401 Unauthorized: Missing token
        - 403 Forbidden: Revoked, invalid or expired token
        - 404 Not Found: Account no longer exists
    """
    use_case = LoadProfileUseCase(uow)
    result = await use_case.execute(current_user.id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
