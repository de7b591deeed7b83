"""
Interview Prep API Routes
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from uuid import UUID
from typing import Optional

from careerprep.core.database import get_db
from careerprep.dependencies import get_current_user
from careerprep.models.user import User
from careerprep.schemas.interview import (
    GenerateInterviewRequest,
    InterviewPrepEnvelope,
    InterviewPrepListResponse,
    PracticeSessionRequest,
    ProgressResponse,
    QuestionProgressRequest,
)
from careerprep.services.interview_service import InterviewService

router = APIRouter()


def get_interview_service(db: Session = Depends(get_db)) -> InterviewService:
    return InterviewService(db)


@router.post("/generate", response_model=InterviewPrepEnvelope)
def generate_interview(
    request: GenerateInterviewRequest,
    current_user: User = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service)
):
    """
    Generate company research and a question bank

    A failed generation leaves the prep in "draft" and returns 500.
    """
    prep = service.generate(
        current_user,
        company=request.company,
        role=request.role,
        technologies=request.technologies,
        job_match_id=request.job_match_id,
        experience_level=request.experience_level,
    )
    return {"message": "Interview preparation generated successfully", "interview_prep": prep}


@router.get("", response_model=InterviewPrepListResponse)
def list_interview_preps(
    status: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service)
):
    return {"interview_preps": service.list_preps(current_user, status)}


@router.get("/{prep_id}", response_model=InterviewPrepEnvelope)
def get_interview_prep(
    prep_id: UUID,
    current_user: User = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service)
):
    return {"interview_prep": service.get(current_user, prep_id)}


@router.patch("/{prep_id}/question/{question_id}", response_model=ProgressResponse)
def update_question_progress(
    prep_id: UUID,
    question_id: str,
    request: QuestionProgressRequest,
    current_user: User = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service)
):
    prep = service.get(current_user, prep_id)
    prep = service.mark_question_practiced(
        prep,
        question_id,
        practiced=request.practiced,
        confidence_level=request.confidence_level,
        notes=request.user_notes,
    )
    return {"message": "Question progress updated", "progress": prep.progress, "status": prep.status}


@router.post("/{prep_id}/practice", response_model=ProgressResponse)
def record_practice_session(
    prep_id: UUID,
    request: PracticeSessionRequest,
    current_user: User = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service)
):
    prep = service.get(current_user, prep_id)
    prep = service.record_practice_session(
        prep,
        questions_attempted=request.questions_attempted,
        duration=request.duration,
        average_confidence=request.average_confidence,
        notes=request.notes,
    )
    return {
        "message": "Practice session recorded",
        "progress": prep.progress,
        "status": prep.status,
        "session_count": len(prep.practice_sessions or []),
    }


@router.delete("/{prep_id}")
def delete_interview_prep(
    prep_id: UUID,
    current_user: User = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service)
):
    service.delete(current_user, prep_id)
    return {"message": "Interview prep deleted successfully"}
