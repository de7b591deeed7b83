"""
Interview Prep Schemas
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Literal
from datetime import datetime, date
from uuid import UUID


class GenerateInterviewRequest(BaseModel):
    """Generate interview prep request schema"""
    company: str = Field(min_length=1, max_length=255)
    role: str = Field(min_length=1, max_length=255)
    technologies: List[str] = Field(min_length=1)
    job_match_id: Optional[UUID] = None
    experience_level: Optional[Literal["entry", "mid", "senior", "lead", "executive"]] = None


class QuestionProgressRequest(BaseModel):
    practiced: bool = True
    confidence_level: Optional[Literal["low", "medium", "high"]] = None
    user_notes: Optional[str] = None


class PracticeSessionRequest(BaseModel):
    questions_attempted: int = Field(ge=1)
    duration: int = Field(ge=1)  # minutes
    average_confidence: Optional[float] = Field(default=None, ge=0, le=100)
    notes: Optional[str] = None


class InterviewPrepSummary(BaseModel):
    """List item schema"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    company: str
    role: str
    technologies: List[str]
    experience_level: Optional[str] = None
    status: str
    question_stats: dict
    progress: dict
    target_date: Optional[date] = None
    created_at: Optional[datetime] = None


class InterviewPrepResponse(InterviewPrepSummary):
    """Interview prep detail schema"""
    job_match_id: Optional[UUID] = None
    company_info: Optional[dict] = None
    role_requirements: Optional[str] = None
    questions: List[dict] = Field(default_factory=list, validation_alias="questions_json")
    practice_sessions: List[dict] = []
    user_notes: Optional[str] = None
    ai_model: Optional[str] = None
    generated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class InterviewPrepEnvelope(BaseModel):
    message: Optional[str] = None
    interview_prep: InterviewPrepResponse


class InterviewPrepListResponse(BaseModel):
    interview_preps: List[InterviewPrepSummary]


class ProgressResponse(BaseModel):
    message: str
    progress: dict
    status: str
    session_count: Optional[int] = None
