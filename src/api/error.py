from fastapi import status

from src.domain.errors import Error, ErrorKind

# The one place an ErrorKind becomes an HTTP status.
# Unknown username, wrong password and inactive account all surface as 401.
STATUS_BY_KIND = {
    ErrorKind.already_exists: status.HTTP_409_CONFLICT,
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.invalid_credentials: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.user_inactive: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.unauthenticated: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.token_invalid: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.permission_denied: status.HTTP_403_FORBIDDEN,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def to_http_error(error: Error) -> Exception:
    """Translate a domain error into the exception the app handlers render"""
    if error.kind == ErrorKind.internal:
        return ServerError(error)
    return ClientError(error, status_code=STATUS_BY_KIND[error.kind])
