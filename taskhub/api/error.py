from fastapi import status
from libs.result import Error


class ClientError(Exception):
    """Anticipated failure caused by the request; rendered as {error, code}"""

    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)

    @property
    def code(self) -> str:
        return self.base_error.code

    @property
    def message(self) -> str:
        return self.base_error.message


class ServerError(Exception):
    """Use case error the route has no status for; the message stays server side"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

    @property
    def code(self) -> str:
        return self.base_error.code
