"""
Authentication Service
"""
from datetime import datetime, timezone
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from careerprep.core.config import settings
from careerprep.core.exceptions import ConflictError, UnauthorizedError, ValidationError
from careerprep.core.logging import logger
from careerprep.core.security import create_access_token, decode_access_token
from careerprep.models.user import User
from careerprep.repositories.user_repository import UserRepository


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AuthService:
    """Authentication service for user management"""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)

    def register_user(self, email: str, password: str, full_name: Optional[str] = None) -> Tuple[User, str]:
        """
        Register a new user

        Returns:
            (user, access token)

        Raises:
            ValidationError: missing email or short password
            ConflictError: email already registered (any case)
        """
        email = normalize_email(email)
        if not email or not password:
            raise ValidationError("Email and password are required")
        if len(password) < settings.PASSWORD_MIN_LENGTH:
            raise ValidationError(f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters")

        if self.users.get_by_email(email):
            raise ConflictError("User with this email already exists")

        user = User(
            email=email,
            full_name=(full_name or "").strip() or email.split("@")[0],
        )
        user.set_password(password)

        try:
            user = self.users.create(user)
        except IntegrityError:
            # lost a race with a concurrent registration
            self.db.rollback()
            raise ConflictError("User with this email already exists")

        logger.info(f"User registered: {user.id}")
        return user, create_access_token(str(user.id))

    def authenticate_user(self, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate user with email and password

        Raises:
            UnauthorizedError: unknown email, wrong password or deactivated account
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self.users.get_by_email(email)
        if not user or not user.check_password(password):
            raise UnauthorizedError("Invalid email or password")
        if not user.is_active:
            raise UnauthorizedError("Account is deactivated")

        user.last_login_at = datetime.now(timezone.utc)
        user = self.users.update(user)

        return user, create_access_token(str(user.id))

    def get_user_from_token(self, token: str) -> User:
        """Resolve a bearer token to an active user"""
        subject = decode_access_token(token)
        try:
            user_id = UUID(subject)
        except ValueError:
            raise UnauthorizedError("Invalid or expired token")

        user = self.users.get_by_id(user_id)
        if not user:
            raise UnauthorizedError("User not found")
        if not user.is_active:
            raise UnauthorizedError("Account is deactivated")
        return user
