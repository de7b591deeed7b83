"""
Job Match Model
"""
from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, Date, ForeignKey, Index, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from careerprep.core.database import Base, JSONType


APPLICATION_STATUSES = ("not_applied", "applied", "interviewing", "offered", "rejected", "withdrawn")


class JobMatch(Base):
    __tablename__ = "job_match"

    # Primary Key
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    resume_id = Column(Uuid(as_uuid=True), ForeignKey("resume.id", ondelete="SET NULL"), index=True)

    # Job Details
    job_title = Column(String(500), nullable=False, index=True)
    company = Column(String(255), nullable=False, index=True)
    location = Column(String(255), nullable=False)
    location_type = Column(String(20))  # remote, hybrid, onsite
    employment_type = Column(String(20), default="full-time")  # full-time, part-time, contract, internship, freelance
    experience_level = Column(String(20))  # entry, mid, senior, lead, executive

    # Description
    description = Column(Text, nullable=False, default="")
    short_description = Column(Text)
    requirements = Column(JSONType, default=list)  # [{"requirement", "is_met", "matched_skill"}]
    responsibilities = Column(JSONType, default=list)
    benefits = Column(JSONType, default=list)

    # Compensation
    salary = Column(JSONType)  # {"min", "max", "currency", "period", "is_estimate"} or {"text": "..."}

    # Source & Links
    url = Column(String(1000), nullable=False)
    source = Column(String(100), default="Unknown")
    posted_date = Column(Date)
    expires_date = Column(Date)

    # Match Analysis
    match_score = Column(Integer, nullable=False, index=True)  # 0 ~ 100
    why_this_job_fits = Column(Text, nullable=False)
    match_analysis = Column(JSONType, nullable=False)
    """
    {
        "matching_skills": ["Python"],
        "missing_skills": ["Kubernetes"],
        "strength_areas": [],
        "improvement_areas": [],
        "overall_fit": "good"
    }
    """

    # Application Tracking
    applied = Column(Boolean, default=False, nullable=False, index=True)
    applied_date = Column(DateTime(timezone=True))
    application_status = Column(String(20), default="not_applied", nullable=False)
    application_notes = Column(Text)

    # User Interaction
    is_saved = Column(Boolean, default=False, nullable=False)
    is_hidden = Column(Boolean, default=False, nullable=False)
    user_rating = Column(Integer, CheckConstraint("user_rating >= 1 AND user_rating <= 5", name="ck_job_match_rating"))
    user_notes = Column(Text)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="job_matches")
    resume = relationship("Resume", back_populates="job_matches")

    __table_args__ = (
        CheckConstraint("match_score >= 0 AND match_score <= 100", name="ck_job_match_score"),
        Index("idx_job_match_user_score", "user_id", "match_score"),
        Index("idx_job_match_user_status", "user_id", "application_status"),
        Index("idx_job_match_company_title", "company", "job_title"),
    )

    @property
    def overall_fit(self) -> str:
        return (self.match_analysis or {}).get("overall_fit", "moderate")
