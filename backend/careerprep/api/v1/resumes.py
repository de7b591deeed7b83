"""
Resume API Routes
"""
from fastapi import APIRouter, Depends, UploadFile, File, Response
from sqlalchemy.orm import Session
from uuid import UUID

from careerprep.core.database import get_db
from careerprep.core.storage import StorageService, get_storage
from careerprep.dependencies import get_current_user
from careerprep.models.user import User
from careerprep.schemas.resume import ResumeDetail, ResumeEnvelope, ResumeHistoryItem, ResumeHistoryResponse
from careerprep.services.resume_service import ResumeService

router = APIRouter()


def get_resume_service(
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage)
) -> ResumeService:
    return ResumeService(db, storage=storage)


@router.post("/upload", response_model=ResumeEnvelope)
async def upload_resume(
    resume: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service)
):
    """
    Upload a PDF resume
    - store the original file
    - extract text and structure it (regex fallback when the model fails)
    - make it the active resume
    """
    content = await resume.read()
    record = await service.upload(current_user, resume.filename or "resume.pdf", content, resume.content_type)
    return {
        "message": "Resume uploaded and parsed successfully",
        "resume": ResumeDetail.model_validate(record),
    }


@router.get("", response_model=ResumeEnvelope)
def get_active_resume(
    current_user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service)
):
    """Active resume with structured data"""
    return {"resume": ResumeDetail.model_validate(service.get_active(current_user))}


@router.get("/history", response_model=ResumeHistoryResponse)
def get_resume_history(
    current_user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service)
):
    """All resumes of the user, newest first"""
    return {
        "resumes": [
            ResumeHistoryItem(
                id=r.id,
                original_file_name=r.original_file_name,
                name=(r.structured_json or {}).get("name") or "Unknown",
                skill_count=r.skill_count,
                is_active=r.is_active,
                file_size=r.file_size,
                created_at=r.created_at,
            )
            for r in service.get_history(current_user)
        ]
    }


@router.get("/{resume_id}/file")
async def download_resume_file(
    resume_id: UUID,
    current_user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service)
):
    """Original uploaded file"""
    record = service.get_owned(current_user, resume_id)
    content, filename, mime_type = await service.read_file(record)
    return Response(
        content=content,
        media_type=mime_type,
        headers={"Content-Disposition": f'inline; filename="{filename}"'},
    )


@router.post("/{resume_id}/reanalyze", response_model=ResumeEnvelope)
async def reanalyze_resume(
    resume_id: UUID,
    current_user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service)
):
    """Re-run structuring on the stored text"""
    record = service.get_owned(current_user, resume_id)
    record = await service.reanalyze(record)
    return {
        "message": "Resume re-analyzed successfully",
        "resume": ResumeDetail.model_validate(record),
    }


@router.delete("/{resume_id}")
async def delete_resume(
    resume_id: UUID,
    current_user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service)
):
    """Delete a resume and its stored file"""
    record = service.get_owned(current_user, resume_id)
    await service.delete(record)
    return {"message": "Resume deleted successfully"}
