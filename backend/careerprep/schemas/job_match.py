"""
Job Match Schemas
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Literal
from datetime import date, datetime
from uuid import UUID


ApplicationStatus = Literal["not_applied", "applied", "interviewing", "offered", "rejected", "withdrawn"]


class MatchAnalysis(BaseModel):
    matching_skills: List[str] = []
    missing_skills: List[str] = []
    strength_areas: List[str] = []
    improvement_areas: List[str] = []
    overall_fit: str = "moderate"


class JobMatchResponse(BaseModel):
    """Job match response schema"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    resume_id: Optional[UUID] = None
    job_title: str
    company: str
    location: str
    description: str = ""
    url: str
    source: Optional[str] = None
    salary: Optional[dict] = None
    posted_date: Optional[date] = None
    match_score: int
    why_this_job_fits: str
    match_analysis: MatchAnalysis
    overall_fit: str
    applied: bool
    applied_date: Optional[datetime] = None
    application_status: str
    application_notes: Optional[str] = None
    is_saved: bool
    is_hidden: bool
    created_at: Optional[datetime] = None


class DiscoverResponse(BaseModel):
    message: str
    matches: List[JobMatchResponse]
    total_found: int = 0


class JobMatchListResponse(BaseModel):
    matches: List[JobMatchResponse]


class JobMatchEnvelope(BaseModel):
    message: Optional[str] = None
    match: JobMatchResponse


class ApplyRequest(BaseModel):
    notes: Optional[str] = None


class StatusUpdateRequest(BaseModel):
    # checked by the service so the error is "Invalid status"
    status: str
    notes: Optional[str] = None


class JobSuggestion(BaseModel):
    job_match_id: UUID
    job_title: str
    company: str
    match_score: int
    required_skills: List[str] = []
    preferred_skills: List[str] = []
    matched_skills: List[str] = []
    missing_skills: List[str] = []
    experience_level: Optional[str] = None


class SuggestionsResponse(BaseModel):
    suggestions: List[JobSuggestion] = Field(default_factory=list)
