"""Domain errors, mapped to HTTP responses in taskboard.main"""

from typing import Optional

from fastapi import status


class TaskboardError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Internal server error"
    headers = None

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(TaskboardError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid request"


class DuplicateEmail(TaskboardError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Email already registered"


class InvalidCredentials(TaskboardError):
    # même réponse pour email inconnu et mauvais mot de passe
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid email or password"


class Unauthorized(TaskboardError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Not authenticated"
    headers = {"WWW-Authenticate": "Bearer"}


class TokenInvalid(Unauthorized):
    detail = "Invalid token"


class TokenExpired(Unauthorized):
    detail = "Token expired"


class NotFound(TaskboardError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class InternalError(TaskboardError):
    pass
