"""
User Model
"""
from datetime import datetime, timezone

from sqlalchemy import Column, String, Boolean, Integer, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from careerprep.core.database import Base, JSONType
from careerprep.core.security import hash_password, verify_password


def default_analytics() -> dict:
    return {
        "average_match_score": 0,
        "top_strengths": [],
        "skill_gaps": [],
        "last_updated": datetime.now(timezone.utc).isoformat(),
    }


class User(Base):
    __tablename__ = "user"

    # Primary Key
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Authentication
    email = Column(String(255), unique=True, nullable=False, index=True)  # stored lower-cased
    password_hash = Column(String(255), nullable=False)

    # Profile
    full_name = Column(String(100), nullable=False)
    phone = Column(String(50))
    location = Column(String(200))
    linkedin_url = Column(String(500))
    github_url = Column(String(500))
    portfolio_url = Column(String(500))
    avatar_url = Column(String(500))

    # Active resume
    active_resume_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("resume.id", ondelete="SET NULL", use_alter=True, name="fk_user_active_resume"),
        nullable=True,
    )

    # Dashboard counters (columns so increments are single atomic UPDATEs)
    total_jobs_discovered = Column(Integer, nullable=False, default=0)
    total_jobs_applied = Column(Integer, nullable=False, default=0)

    # Dashboard analytics (embedded)
    analytics = Column(JSONType, nullable=False, default=default_analytics)
    """
    {
        "average_match_score": 61,
        "top_strengths": ["Python", "SQL"],
        "skill_gaps": ["Kubernetes"],
        "last_updated": "2025-01-01T00:00:00+00:00"
    }
    """

    # Status
    is_active = Column(Boolean, default=True, index=True)
    last_login_at = Column(DateTime(timezone=True))

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    resumes = relationship(
        "Resume",
        back_populates="user",
        cascade="all, delete-orphan",
        foreign_keys="Resume.user_id",
    )
    job_matches = relationship("JobMatch", back_populates="user", cascade="all, delete-orphan")
    interview_preps = relationship("InterviewPrep", back_populates="user", cascade="all, delete-orphan")

    def set_password(self, password: str) -> None:
        """Rehash only when the password actually changes"""
        if self.password_hash and verify_password(password, self.password_hash):
            return
        self.password_hash = hash_password(password)

    def check_password(self, password: str) -> bool:
        return verify_password(password, self.password_hash)

    def update_analytics(self, **values) -> None:
        """Merge values into analytics and stamp last_updated"""
        analytics = dict(default_analytics())
        analytics.update(self.analytics or {})
        analytics.update(values)
        analytics["last_updated"] = datetime.now(timezone.utc).isoformat()
        # reassign so the JSON column is flagged dirty
        self.analytics = analytics

    @property
    def dashboard_analytics(self) -> dict:
        analytics = dict(default_analytics())
        analytics.update(self.analytics or {})
        analytics["total_jobs_discovered"] = self.total_jobs_discovered or 0
        analytics["total_jobs_applied"] = self.total_jobs_applied or 0
        return analytics
