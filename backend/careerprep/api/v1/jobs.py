"""
Job Match API Routes
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from uuid import UUID
from typing import Optional

from careerprep.core.database import get_db
from careerprep.dependencies import get_current_user
from careerprep.models.user import User
from careerprep.schemas.job_match import (
    ApplyRequest,
    DiscoverResponse,
    JobMatchEnvelope,
    JobMatchListResponse,
    StatusUpdateRequest,
    SuggestionsResponse,
)
from careerprep.services.job_match_service import JobMatchService

router = APIRouter()


def get_job_match_service(db: Session = Depends(get_db)) -> JobMatchService:
    return JobMatchService(db)


@router.post("/discover", response_model=DiscoverResponse)
def discover_jobs(
    current_user: User = Depends(get_current_user),
    service: JobMatchService = Depends(get_job_match_service)
):
    """
    Search jobs for the active resume's skills, score and save the best ones

    No search results is a success with an empty list.
    """
    result = service.discover(current_user)
    if not result["matches"]:
        return {"message": "No jobs found", "matches": [], "total_found": 0}
    return {
        "message": f"Found {result['total_found']} job matches",
        "matches": result["matches"],
        "total_found": result["total_found"],
    }


@router.get("/matches", response_model=JobMatchListResponse)
def get_job_matches(
    status: Optional[str] = Query(None),
    saved: bool = Query(False),
    hidden: bool = Query(False),
    min_score: Optional[int] = Query(None, alias="minScore", ge=0, le=100),
    current_user: User = Depends(get_current_user),
    service: JobMatchService = Depends(get_job_match_service)
):
    """Saved matches, best score first; hidden matches only when hidden=true"""
    matches = service.list_matches(current_user, {
        "status": status,
        "saved": saved,
        "include_hidden": hidden,
        "min_score": min_score,
    })
    return {"matches": matches}


@router.get("/suggestions", response_model=SuggestionsResponse)
def get_job_suggestions(
    current_user: User = Depends(get_current_user),
    service: JobMatchService = Depends(get_job_match_service)
):
    """Required skills of the top matches, split into matched and missing"""
    return {"suggestions": service.suggestions(current_user)}


@router.patch("/{match_id}/apply", response_model=JobMatchEnvelope)
def mark_as_applied(
    match_id: UUID,
    request: Optional[ApplyRequest] = None,
    current_user: User = Depends(get_current_user),
    service: JobMatchService = Depends(get_job_match_service)
):
    notes = request.notes if request else None
    return {"match": service.mark_applied(current_user, match_id, notes)}


@router.patch("/{match_id}/status", response_model=JobMatchEnvelope)
def update_application_status(
    match_id: UUID,
    request: StatusUpdateRequest,
    current_user: User = Depends(get_current_user),
    service: JobMatchService = Depends(get_job_match_service)
):
    return {"match": service.set_application_status(current_user, match_id, request.status, request.notes)}


@router.patch("/{match_id}/save", response_model=JobMatchEnvelope)
def toggle_save_job(
    match_id: UUID,
    current_user: User = Depends(get_current_user),
    service: JobMatchService = Depends(get_job_match_service)
):
    return {"match": service.toggle_save(current_user, match_id)}


@router.patch("/{match_id}/hide", response_model=JobMatchEnvelope)
def hide_job(
    match_id: UUID,
    current_user: User = Depends(get_current_user),
    service: JobMatchService = Depends(get_job_match_service)
):
    return {"message": "Job hidden successfully", "match": service.hide(current_user, match_id)}
