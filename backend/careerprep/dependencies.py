"""
Dependency Injection
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from careerprep.core.database import get_db
from careerprep.core.exceptions import UnauthorizedError
from careerprep.models.user import User
from careerprep.services.auth_service import AuthService


# Security (missing header is reported by get_current_user, not by HTTPBearer)
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Get current authenticated user from JWT token"""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No token provided")
    return AuthService(db).get_user_from_token(credentials.credentials)
