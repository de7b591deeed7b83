"""
User Repository
"""
from sqlalchemy.orm import Session
from sqlalchemy import update
from typing import Optional
from uuid import UUID

from careerprep.models.user import User


class UserRepository:
    """User data access layer"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, user: User) -> User:
        """Create user"""
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)"""
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def update(self, user: User) -> User:
        """Update user"""
        self.db.commit()
        self.db.refresh(user)
        return user

    def increment_counter(self, user_id: UUID, column: str, amount: int = 1) -> None:
        """
        Atomic counter increment (no commit)

        Args:
            column: "total_jobs_discovered" or "total_jobs_applied"
        """
        counter = getattr(User, column)
        self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values({counter: counter + amount})
            .execution_options(synchronize_session=False)
        )

    def set_active_resume(self, user_id: UUID, resume_id: Optional[UUID]) -> None:
        """Point the user at a resume, or clear it (no commit)"""
        self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(active_resume_id=resume_id)
            .execution_options(synchronize_session=False)
        )

    def clear_active_resume(self, user_id: UUID, resume_id: UUID) -> int:
        """Clear the reference only if it still points at resume_id (no commit)"""
        result = self.db.execute(
            update(User)
            .where(User.id == user_id, User.active_resume_id == resume_id)
            .values(active_resume_id=None)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
