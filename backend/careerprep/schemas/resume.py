"""
Resume Schemas
"""
from pydantic import BaseModel, ConfigDict
from typing import Optional, List
from datetime import datetime
from uuid import UUID


class ResumeResponse(BaseModel):
    """Resume response schema"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    original_file_name: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    page_count: Optional[int] = None
    skills: List[str] = []
    skill_count: int = 0
    experience_count: int = 0
    is_active: bool
    ai_model: Optional[str] = None
    parsing_version: Optional[str] = None
    parsing_confidence: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ResumeDetail(ResumeResponse):
    """Resume detail schema"""
    raw_text: str
    structured_json: Optional[dict] = None
    experience: List[dict] = []
    education: List[dict] = []


class ResumeHistoryItem(BaseModel):
    """One row of the resume history"""
    id: UUID
    original_file_name: Optional[str] = None
    name: str
    skill_count: int
    is_active: bool
    file_size: Optional[int] = None
    created_at: Optional[datetime] = None


class ResumeEnvelope(BaseModel):
    message: Optional[str] = None
    resume: ResumeDetail


class ResumeHistoryResponse(BaseModel):
    resumes: List[ResumeHistoryItem]
