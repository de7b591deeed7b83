"""
Job Match Repository
"""
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy import update, case
from typing import List, Optional, Dict, Any
from uuid import UUID

from careerprep.models.job_match import JobMatch


class JobMatchRepository:
    """Job match data access layer"""

    def __init__(self, db: Session):
        self.db = db

    def add_all(self, matches: List[JobMatch]) -> List[JobMatch]:
        """Stage a batch of matches (no commit)"""
        self.db.add_all(matches)
        self.db.flush()
        return matches

    def get_owned(self, match_id: UUID, user_id: UUID) -> Optional[JobMatch]:
        """Get match by ID, only if it belongs to the user"""
        return self.db.query(JobMatch).filter(
            JobMatch.id == match_id,
            JobMatch.user_id == user_id
        ).first()

    def get_by_user(
        self,
        user_id: UUID,
        filters: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None
    ) -> List[JobMatch]:
        """User's matches (filters applied), best score first"""
        query = self.db.query(JobMatch).filter(JobMatch.user_id == user_id)

        filters = filters or {}
        status = filters.get("status")
        if status and status != "all":
            query = query.filter(JobMatch.application_status == status)

        if filters.get("saved"):
            query = query.filter(JobMatch.is_saved.is_(True))

        # hidden jobs are excluded unless explicitly asked for
        if not filters.get("include_hidden"):
            query = query.filter(JobMatch.is_hidden.is_(False))

        if filters.get("min_score") is not None:
            query = query.filter(JobMatch.match_score >= filters["min_score"])

        query = query.order_by(JobMatch.match_score.desc(), JobMatch.created_at.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def scores_and_analysis(self, user_id: UUID) -> List[tuple]:
        """(match_score, match_analysis) for every match of the user"""
        return self.db.query(JobMatch.match_score, JobMatch.match_analysis).filter(
            JobMatch.user_id == user_id
        ).all()

    def mark_applied_once(self, match_id: UUID, user_id: UUID) -> bool:
        """
        Conditional UPDATE flipping applied false -> true (no commit)

        Status becomes "applied" unless it is already further along.

        Returns:
            True if this call performed the first transition
        """
        result = self.db.execute(
            update(JobMatch)
            .where(
                JobMatch.id == match_id,
                JobMatch.user_id == user_id,
                JobMatch.applied.is_(False)
            )
            .values(
                applied=True,
                applied_date=datetime.now(timezone.utc),
                application_status=case(
                    (JobMatch.application_status.in_(("not_applied", "applied")), "applied"),
                    else_=JobMatch.application_status,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def update(self, match: JobMatch) -> JobMatch:
        """Commit pending changes to a match"""
        self.db.commit()
        self.db.refresh(match)
        return match
