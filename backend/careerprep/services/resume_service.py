"""
Resume Service

Keeps exactly one active resume per user and keeps the denormalized
skills/experience/education columns equal to the structured payload.
"""
from typing import Any, Dict, List, Optional, Tuple

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from careerprep.core.config import settings
from careerprep.core.exceptions import AppError, NotFoundError, ValidationError
from careerprep.core.logging import logger
from careerprep.core.storage import StorageService, get_storage
from careerprep.models.resume import Resume
from careerprep.models.user import User
from careerprep.repositories.resume_repository import ResumeRepository
from careerprep.repositories.user_repository import UserRepository
from careerprep.services.parsing.llm_parser import ResumeParser
from careerprep.services.parsing.pdf_parser import PDFParser
from careerprep.utils.validators import validate_file_size, validate_mime_type


def project_denormalized(structured: Optional[Dict[str, Any]]) -> Dict[str, List[Any]]:
    """The top-level copies stored next to structured_json"""
    structured = structured or {}

    def as_list(key):
        value = structured.get(key)
        return list(value) if isinstance(value, list) else []

    return {
        "skills": as_list("skills"),
        "experience": as_list("experience"),
        "education": as_list("education"),
    }


class ResumeService:
    """Resume lifecycle: upload, activate, re-analyze, delete"""

    def __init__(
        self,
        db: Session,
        storage: Optional[StorageService] = None,
        parser: Optional[ResumeParser] = None,
        pdf_parser: Optional[PDFParser] = None
    ):
        self.db = db
        self.resumes = ResumeRepository(db)
        self.users = UserRepository(db)
        self.storage = storage or get_storage()
        self._parser = parser
        self.pdf_parser = pdf_parser or PDFParser()

    @property
    def parser(self) -> ResumeParser:
        if self._parser is None:
            self._parser = ResumeParser()
        return self._parser

    # ----- invariants -----

    def _apply_structured(self, resume: Resume, structured: Dict[str, Any]) -> None:
        resume.structured_json = dict(structured)
        for key, value in project_denormalized(structured).items():
            setattr(resume, key, value)

    def activate(self, resume: Resume) -> Resume:
        """
        Make resume the user's only active resume

        One conditional UPDATE deactivates the others, then the resume and
        the user's reference are written in the same transaction.
        """
        deactivated = self.resumes.deactivate_others(resume.user_id, keep_id=resume.id)
        resume.is_active = True
        self.users.set_active_resume(resume.user_id, resume.id)
        self.db.commit()
        self.db.refresh(resume)

        if deactivated:
            logger.info(f"Deactivated {deactivated} previous resume(s) for user {resume.user_id}")
        return resume

    def replace_structured_data(self, resume: Resume, structured: Dict[str, Any]) -> Resume:
        """Overwrite structured_json and its denormalized copies in one update"""
        self._apply_structured(resume, structured)
        return self.resumes.update(resume)

    # ----- lifecycle -----

    async def upload(self, user: User, filename: str, content: bytes, mime_type: Optional[str]) -> Resume:
        """
        Store, parse and activate a new resume

        A structuring failure is not fatal: the fallback parser result is kept.

        Raises:
            ValidationError: no file, wrong type, too large, or unreadable PDF
        """
        if not content:
            raise ValidationError("No file uploaded")
        if not validate_mime_type(mime_type, settings.ALLOWED_MIME_TYPES):
            raise ValidationError("Only PDF files are allowed")
        if not validate_file_size(len(content), settings.MAX_UPLOAD_SIZE):
            raise ValidationError(f"File too large (max {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB)")

        file_id = await self.storage.save_file(
            content,
            filename,
            content_type=mime_type,
            metadata={"user_id": str(user.id)},
        )
        logger.info(f"Stored resume file {file_id} ({len(content)} bytes) for user {user.id}")

        try:
            parsed = await run_in_threadpool(self.pdf_parser.extract_text, content)
            if not parsed.text:
                raise ValidationError("No text could be extracted from the PDF")
        except ValidationError:
            await self._discard_file(file_id)
            raise

        analysis = await run_in_threadpool(self.parser.parse_resume, parsed.text)
        if analysis.used_fallback:
            logger.warning(f"Resume {filename!r} stored with fallback parsing")

        resume = Resume(
            user_id=user.id,
            file_id=file_id,
            original_file_name=filename,
            file_size=len(content),
            mime_type=mime_type,
            raw_text=parsed.text,
            page_count=parsed.page_count,
            parsing_version=settings.PARSING_VERSION,
            ai_model=analysis.ai_model,
            parsing_confidence=analysis.confidence,
            is_active=False,
        )
        self._apply_structured(resume, analysis.structured)

        try:
            self.resumes.add(resume)
            resume = self.activate(resume)
        except Exception:
            self.db.rollback()
            await self._discard_file(file_id)
            raise

        logger.info(f"Resume {resume.id} uploaded and activated for user {user.id}")
        return resume

    async def reanalyze(self, resume: Resume) -> Resume:
        """Re-run structuring on the stored raw text"""
        analysis = await run_in_threadpool(self.parser.parse_resume, resume.raw_text)
        resume.ai_model = analysis.ai_model
        resume.parsing_confidence = analysis.confidence
        resume.parsing_version = settings.PARSING_VERSION
        return self.replace_structured_data(resume, analysis.structured)

    async def delete(self, resume: Resume) -> None:
        """
        Delete stored file, then the row; clear the user's reference if it
        pointed here. A failed file delete is logged and does not stop the
        row delete.
        """
        resume_id, user_id = resume.id, resume.user_id
        if resume.file_id:
            await self._discard_file(resume.file_id)

        self.users.clear_active_resume(user_id, resume_id)
        self.resumes.delete(resume)
        self.db.commit()
        logger.info(f"Resume {resume_id} deleted")

    async def _discard_file(self, file_id: str) -> None:
        try:
            await self.storage.delete_file(file_id)
        except (AppError, OSError) as e:
            logger.warning(f"Failed to delete stored file {file_id}: {e}")

    # ----- reads -----

    def get_active(self, user: User) -> Resume:
        resume = self.resumes.get_active(user.id)
        if not resume:
            raise NotFoundError("No resume found")
        return resume

    def get_owned(self, user: User, resume_id) -> Resume:
        resume = self.resumes.get_owned(resume_id, user.id)
        if not resume:
            raise NotFoundError("Resume not found")
        return resume

    def get_history(self, user: User) -> List[Resume]:
        return self.resumes.get_by_user(user.id)

    async def read_file(self, resume: Resume) -> Tuple[bytes, str, str]:
        """(content, filename, mime type) of the original upload"""
        if not resume.file_id:
            raise NotFoundError("File not found")
        content = await self.storage.read_file(resume.file_id)
        return content, resume.original_file_name or "resume.pdf", resume.mime_type or "application/pdf"
