# server/core/errors.py

from fastapi import status


INVALID_LOGIN_MESSAGE = "Invalid email or password"


class AuthServiceError(Exception):
    """
    Base class for every failure the service reports to a client.
    Each subclass carries the HTTP status and a stable, client-safe message.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class MissingFields(AuthServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Missing fields"


class DuplicateAccount(AuthServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Username or email already exists"


class NotFound(AuthServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found"


class BadCredentials(AuthServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = INVALID_LOGIN_MESSAGE


class BadOldPassword(AuthServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Old password is incorrect"


class InvalidPassword(AuthServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Password contains a NUL character or is too long"


class Unauthenticated(AuthServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Access denied: No token"


class Forbidden(AuthServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Invalid token"


class StoreError(AuthServiceError):
    message = "Database error"


class ServerError(AuthServiceError):
    pass
