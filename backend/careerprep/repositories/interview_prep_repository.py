"""
Interview Prep Repository
"""
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from careerprep.models.interview_prep import InterviewPrep


class InterviewPrepRepository:
    """Interview prep data access layer"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, prep: InterviewPrep) -> InterviewPrep:
        """Create interview prep"""
        self.db.add(prep)
        self.db.commit()
        self.db.refresh(prep)
        return prep

    def get_owned(self, prep_id: UUID, user_id: UUID) -> Optional[InterviewPrep]:
        """Get prep by ID, only if it belongs to the user"""
        return self.db.query(InterviewPrep).filter(
            InterviewPrep.id == prep_id,
            InterviewPrep.user_id == user_id
        ).first()

    def get_by_user(self, user_id: UUID, status: Optional[str] = None) -> List[InterviewPrep]:
        """User's preps, newest first"""
        query = self.db.query(InterviewPrep).filter(InterviewPrep.user_id == user_id)
        if status and status != "all":
            query = query.filter(InterviewPrep.status == status)
        return query.order_by(InterviewPrep.created_at.desc()).all()

    def update(self, prep: InterviewPrep) -> InterviewPrep:
        """Update interview prep"""
        self.db.commit()
        self.db.refresh(prep)
        return prep

    def delete(self, prep: InterviewPrep) -> None:
        """Delete interview prep"""
        self.db.delete(prep)
        self.db.commit()
