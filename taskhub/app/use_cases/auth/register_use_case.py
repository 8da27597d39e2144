import logging

from libs.result import Error, Result, Return

from taskhub.api.utils.jwt import generate_jwt
from taskhub.app.repositories.user_repository import UserAlreadyExistsError
from taskhub.app.services.unit_of_work import UnitOfWork
from taskhub.domain.entities import User
from .account_conflicts import USERNAME_TAKEN, find_account_conflict
from .credentials import hash_password, password_error
from .dtos import AuthResponse, RegisterCommand, UserInfo

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand
    - Output: Result[AuthResponse]

    Business Logic:
    1. Require username, email and a password of at least 6 characters
    2. Reject an existing username or email
    3. Hash password with bcrypt cost factor 10
    4. Create User and commit
    5. Issue a 7-day session token

    The unique constraints on users.username and users.email decide races
    between concurrent registrations; the loser gets the same conflict error
    as a sequential duplicate.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: RegisterCommand) -> Result[AuthResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with username, email, password

        Returns:
            Result[AuthResponse] with token and public user data,
            or Error(VALIDATION_ERROR | USERNAME_ALREADY_EXISTS | EMAIL_ALREADY_EXISTS)
        """
        if not command.username or not command.email or not command.password:
            return Return.err(
                Error("VALIDATION_ERROR", "Username, email and password are required")
            )

        invalid_password = password_error(command.password)
        if invalid_password is not None:
            return Return.err(invalid_password)

        async with self.uow:
            user = await create_account(self.uow, command)
            if isinstance(user, Error):
                return Return.err(user)

            await self.uow.commit()

            user_info = UserInfo(id=user.id, username=user.username, email=user.email)

        logger.info("User registered: id=%s", user_info.id)

        token = generate_jwt(user_info.id, user_info.username)
        return Return.ok(
            AuthResponse(message="Registration successful", token=token, user=user_info)
        )


async def create_account(uow: UnitOfWork, command: RegisterCommand):
    """
    Insert a validated account inside an open unit of work, without committing.

    Returns the created User, or the conflict Error.
    """
    conflict = await find_account_conflict(uow.users, command.username, command.email)
    if conflict is not None:
        return conflict

    password_hash = await hash_password(command.password)

    user = User(
        username=command.username,
        email=command.email,
        password_hash=password_hash,
    )
    try:
        return await uow.users.create(user)
    except UserAlreadyExistsError:
        # Another registration won the race between check and insert
        conflict = await find_account_conflict(uow.users, command.username, command.email)
        return conflict or USERNAME_TAKEN
