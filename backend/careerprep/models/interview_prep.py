"""
Interview Prep Model
"""
from sqlalchemy import Column, String, Text, DateTime, Date, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from careerprep.core.database import Base, JSONType


QUESTION_TYPES = ("technical", "behavioral", "system design", "situational", "coding")
DIFFICULTIES = ("easy", "medium", "hard")
CONFIDENCE_LEVELS = ("low", "medium", "high")
PREP_STATUSES = ("draft", "generating", "generated", "in_progress", "completed")
EXPERIENCE_LEVELS = ("entry", "mid", "senior", "lead", "executive")


def empty_question_stats() -> dict:
    return {
        "total": 0,
        "technical": 0,
        "behavioral": 0,
        "system_design": 0,
        "situational": 0,
        "coding": 0,
        "easy": 0,
        "medium": 0,
        "hard": 0,
    }


def empty_progress() -> dict:
    return {
        "questions_completed": 0,
        "total_questions": 0,
        "percent_complete": 0,
        "last_practiced_at": None,
        "total_practice_time": 0,  # minutes
        "average_confidence": 0,  # 0-100
    }


class InterviewPrep(Base):
    __tablename__ = "interview_prep"

    # Primary Key
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    job_match_id = Column(Uuid(as_uuid=True), ForeignKey("job_match.id", ondelete="SET NULL"))

    # Target
    company = Column(String(255), nullable=False, index=True)
    role = Column(String(255), nullable=False)
    technologies = Column(JSONType, nullable=False, default=list)
    experience_level = Column(String(20))

    # Company Research
    company_info = Column(JSONType)  # {"overview", "culture", "recent_news", "interview_process", ...}
    role_requirements = Column(Text)

    # Question Bank
    questions_json = Column(JSONType, nullable=False, default=list)
    """
    [
        {
            "id": "9f1c...",
            "question": "...",
            "type": "technical",
            "difficulty": "medium",
            "topic": "...",
            "model_answer": "...",
            "hints": [...],
            "practiced": false,
            "practiced_count": 0,
            "confidence_level": null,
            "user_notes": null
        }
    ]
    """

    # Derived from questions_json, never set directly
    question_stats = Column(JSONType, nullable=False, default=empty_question_stats)

    # Status
    status = Column(String(20), nullable=False, default="draft", index=True)
    generated_at = Column(DateTime(timezone=True))
    completed_at = Column(DateTime(timezone=True))

    # Progress
    progress = Column(JSONType, nullable=False, default=empty_progress)

    # Practice History
    practice_sessions = Column(JSONType, nullable=False, default=list)

    # User Customization
    user_notes = Column(Text)
    target_date = Column(Date)

    # Generation Metadata
    ai_model = Column(String(100))
    generation_prompt = Column(Text)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="interview_preps")

    __table_args__ = (
        Index("idx_interview_prep_user_status", "user_id", "status"),
        Index("idx_interview_prep_user_company_role", "user_id", "company", "role"),
    )
