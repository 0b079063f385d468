from fastapi import status

from libs.result import Error
from src.app.errors import ErrorCategory, category_of


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


_CLIENT_STATUS = {
    ErrorCategory.validation: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCategory.not_found: status.HTTP_404_NOT_FOUND,
    ErrorCategory.state_conflict: status.HTTP_409_CONFLICT,
    ErrorCategory.commitment_violation: status.HTTP_403_FORBIDDEN,
}


def to_http_error(error: Error) -> Exception:
    """ClientError or ServerError for a use-case Error, by taxonomy."""
    category = category_of(error)
    if category in _CLIENT_STATUS:
        return ClientError(error, status_code=_CLIENT_STATUS[category])
    if category == ErrorCategory.persistence:
        return ServerError(error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return ServerError(error)
