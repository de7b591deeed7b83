"""
Resume Model
"""
from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, ForeignKey, Index, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func, text
import uuid

from careerprep.core.database import Base, JSONType


class Resume(Base):
    __tablename__ = "resume"

    # Primary Key
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)

    # Original file (opaque storage id)
    file_id = Column(String(64))
    original_file_name = Column(String(500))
    file_size = Column(Integer)
    mime_type = Column(String(100), default="application/pdf")

    # Text Info
    raw_text = Column(Text, nullable=False)
    page_count = Column(Integer)

    # Structured resume (source of truth)
    structured_json = Column(JSONType)
    """
    {
        "name": "...",
        "email": "...",
        "phone": "...",
        "location": "...",
        "summary": "...",
        "headline": "...",
        "skills": [...],
        "experience": [{"company", "role", "start_date", "end_date", "description", ...}],
        "education": [{"institution", "degree", "field", ...}],
        "projects": [...],
        "certifications": [...],
        "languages": [...]
    }
    """

    # Denormalized copies, always projected from structured_json
    skills = Column(JSONType, nullable=False, default=list)
    experience = Column(JSONType, nullable=False, default=list)
    education = Column(JSONType, nullable=False, default=list)

    # Parsing metadata
    parsing_version = Column(String(20), default="1.0.0")
    ai_model = Column(String(100))
    parsing_confidence = Column(
        Integer,
        CheckConstraint("parsing_confidence >= 0 AND parsing_confidence <= 100", name="ck_resume_confidence"),
    )

    # Status
    is_active = Column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="resumes", foreign_keys=[user_id])
    job_matches = relationship("JobMatch", back_populates="resume")

    __table_args__ = (
        Index("idx_resume_user_active", "user_id", "is_active"),
        # at most one active resume per user
        Index(
            "uq_resume_user_active",
            "user_id",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
    )

    @property
    def skill_count(self) -> int:
        return len(self.skills or [])

    @property
    def experience_count(self) -> int:
        return len(self.experience or [])
