"""
Resume Repository
"""
from sqlalchemy.orm import Session
from sqlalchemy import update
from typing import List, Optional
from uuid import UUID

from careerprep.models.resume import Resume


class ResumeRepository:
    """Resume data access layer"""

    def __init__(self, db: Session):
        self.db = db

    def add(self, resume: Resume) -> Resume:
        """Stage a new resume and flush so it has an id (no commit)"""
        self.db.add(resume)
        self.db.flush()
        return resume

    def get_by_id(self, resume_id: UUID) -> Optional[Resume]:
        """Get resume by ID"""
        return self.db.query(Resume).filter(Resume.id == resume_id).first()

    def get_owned(self, resume_id: UUID, user_id: UUID) -> Optional[Resume]:
        """Get resume by ID, only if it belongs to the user"""
        return self.db.query(Resume).filter(
            Resume.id == resume_id,
            Resume.user_id == user_id
        ).first()

    def get_active(self, user_id: UUID) -> Optional[Resume]:
        """The user's active resume"""
        return self.db.query(Resume).filter(
            Resume.user_id == user_id,
            Resume.is_active.is_(True)
        ).order_by(
            Resume.created_at.desc()
        ).first()

    def get_by_user(
        self,
        user_id: UUID,
        skip: int = 0,
        limit: int = 50
    ) -> List[Resume]:
        """User's resumes, newest first"""
        return self.db.query(Resume).filter(
            Resume.user_id == user_id
        ).order_by(
            Resume.created_at.desc()
        ).offset(skip).limit(limit).all()

    def count_active(self, user_id: UUID) -> int:
        return self.db.query(Resume).filter(
            Resume.user_id == user_id,
            Resume.is_active.is_(True)
        ).count()

    def deactivate_others(self, user_id: UUID, keep_id: Optional[UUID] = None) -> int:
        """
        Single conditional UPDATE: deactivate every active resume of the user
        except keep_id (no commit)

        Returns:
            number of rows deactivated
        """
        stmt = update(Resume).where(
            Resume.user_id == user_id,
            Resume.is_active.is_(True)
        )
        if keep_id is not None:
            stmt = stmt.where(Resume.id != keep_id)
        result = self.db.execute(
            stmt.values(is_active=False).execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def update(self, resume: Resume) -> Resume:
        """Commit pending changes to a resume"""
        self.db.commit()
        self.db.refresh(resume)
        return resume

    def delete(self, resume: Resume) -> None:
        """Delete resume row (no commit)"""
        self.db.delete(resume)
        self.db.flush()
