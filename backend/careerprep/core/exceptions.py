"""
Application Errors

Each error carries the HTTP status it maps to. Routes let these propagate;
the handlers registered in main.py shape them into {"error", "message"}.
"""
from typing import Optional

from fastapi import status


class AppError(Exception):
    """Base application error"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.error
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed request fields"""
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Validation Error"


class ConflictError(AppError):
    """Duplicate unique field (e.g. email)"""
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Duplicate entry"


class UnauthorizedError(AppError):
    """Missing, invalid or expired credential"""
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"


class NotFoundError(AppError):
    """Referenced record absent or not owned by the caller"""
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"


class CollaboratorError(AppError):
    """External LLM / search call failed or returned unusable output"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "External service failure"
