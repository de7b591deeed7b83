"""
Interview Prep Service

question_stats and progress are projections of questions_json and
practice_sessions; every mutation recomputes them and re-derives status.
"""
import uuid
from datetime import datetime, timezone
from typing import List, Dict, Any, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from careerprep.core.exceptions import CollaboratorError, NotFoundError, ValidationError
from careerprep.core.logging import logger
from careerprep.models.interview_prep import (
    CONFIDENCE_LEVELS,
    EXPERIENCE_LEVELS,
    PREP_STATUSES,
    InterviewPrep,
    empty_progress,
    empty_question_stats,
)
from careerprep.models.user import User
from careerprep.repositories.interview_prep_repository import InterviewPrepRepository
from careerprep.repositories.job_match_repository import JobMatchRepository
from careerprep.repositories.resume_repository import ResumeRepository
from careerprep.services.interview_researcher import InterviewResearcher
from careerprep.utils.numbers import round_half_up


_TYPE_BUCKETS = {
    "technical": "technical",
    "behavioral": "behavioral",
    "system design": "system_design",
    "situational": "situational",
    "coding": "coding",
}


# ----- pure derivations -----

def compute_question_stats(questions: List[Dict[str, Any]]) -> Dict[str, int]:
    stats = empty_question_stats()
    stats["total"] = len(questions)
    for q in questions:
        bucket = _TYPE_BUCKETS.get(q.get("type"))
        if bucket:
            stats[bucket] += 1
        if q.get("difficulty") in ("easy", "medium", "hard"):
            stats[q["difficulty"]] += 1
    return stats


def compute_completion(questions: List[Dict[str, Any]]) -> Tuple[int, int, int]:
    """(completed, total, percent) where percent = 100 * completed / total, halves rounded up"""
    total = len(questions)
    completed = sum(1 for q in questions if q.get("practiced"))
    percent = round_half_up(100 * completed / total) if total else 0
    return completed, total, percent


def derive_status(current: str, percent_complete: int, has_practice: bool) -> str:
    """
    Next status after a mutation

    draft and generating are only left through generation; completed is
    reached at 100%; generated moves to in_progress on any practice.
    """
    if current in ("draft", "generating"):
        return current
    if percent_complete >= 100:
        return "completed"
    if current == "generated" and (percent_complete > 0 or has_practice):
        return "in_progress"
    return current


def average_session_confidence(sessions: List[Dict[str, Any]]) -> float:
    """Mean of average_confidence over every session"""
    if not sessions:
        return 0
    total = sum(s.get("average_confidence") or 0 for s in sessions)
    return round_half_up(total / len(sessions), 2)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def prepare_question(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Question entry with a fresh id and practice state reset"""
    question = dict(raw)
    question["id"] = uuid.uuid4().hex
    question["practiced"] = False
    question["practiced_count"] = 0
    question["confidence_level"] = None
    question["user_notes"] = None
    return question


class InterviewService:
    """Interview-prep question bank and progress aggregator"""

    def __init__(self, db: Session, researcher: Optional[InterviewResearcher] = None):
        self.db = db
        self.preps = InterviewPrepRepository(db)
        self.resumes = ResumeRepository(db)
        self.matches = JobMatchRepository(db)
        self._researcher = researcher

    @property
    def researcher(self) -> InterviewResearcher:
        if self._researcher is None:
            self._researcher = InterviewResearcher()
        return self._researcher

    # ----- recomputation -----

    def _recompute(self, prep: InterviewPrep) -> None:
        questions = list(prep.questions_json or [])
        completed, total, percent = compute_completion(questions)

        progress = dict(empty_progress())
        progress.update(prep.progress or {})
        progress.update({
            "questions_completed": completed,
            "total_questions": total,
            "percent_complete": percent,
        })

        # reassign JSON values so the change is flushed
        prep.questions_json = questions
        prep.question_stats = compute_question_stats(questions)
        prep.progress = progress

        has_practice = completed > 0 or bool(prep.practice_sessions)
        new_status = derive_status(prep.status, percent, has_practice)
        if new_status == "completed" and prep.status != "completed":
            prep.completed_at = _now()
        prep.status = new_status

    def set_questions(self, prep: InterviewPrep, questions: List[Dict[str, Any]]) -> InterviewPrep:
        """Replace the question bank (no commit)"""
        prep.questions_json = [prepare_question(q) for q in questions]
        self._recompute(prep)
        return prep

    def mark_question_practiced(
        self,
        prep: InterviewPrep,
        question_id: str,
        practiced: bool = True,
        confidence_level: Optional[str] = None,
        notes: Optional[str] = None
    ) -> InterviewPrep:
        """
        Update one question's practice state

        practiced=False un-marks the question without touching its count.
        """
        if confidence_level is not None and confidence_level not in CONFIDENCE_LEVELS:
            raise ValidationError("Invalid confidence level")

        questions = [dict(q) for q in (prep.questions_json or [])]
        question = next((q for q in questions if q.get("id") == question_id), None)
        if question is None:
            raise NotFoundError("Question not found")

        question["practiced"] = practiced
        if practiced:
            question["practiced_count"] = (question.get("practiced_count") or 0) + 1
        if confidence_level is not None:
            question["confidence_level"] = confidence_level
        if notes is not None:
            question["user_notes"] = notes

        prep.questions_json = questions
        progress = dict(prep.progress or empty_progress())
        progress["last_practiced_at"] = _now().isoformat()
        prep.progress = progress

        self._recompute(prep)
        return self.preps.update(prep)

    def record_practice_session(
        self,
        prep: InterviewPrep,
        questions_attempted: int,
        duration: int,
        average_confidence: Optional[float] = None,
        notes: Optional[str] = None
    ) -> InterviewPrep:
        """Append a session and recompute average confidence over all sessions"""
        if not questions_attempted or questions_attempted < 1:
            raise ValidationError("questions_attempted must be at least 1")
        if not duration or duration < 1:
            raise ValidationError("duration must be at least 1 minute")
        if average_confidence is not None and not 0 <= average_confidence <= 100:
            raise ValidationError("average_confidence must be between 0 and 100")

        now = _now()
        sessions = list(prep.practice_sessions or [])
        sessions.append({
            "id": uuid.uuid4().hex,
            "session_date": now.isoformat(),
            "questions_attempted": questions_attempted,
            "duration": duration,
            "average_confidence": average_confidence or 0,
            "notes": notes,
        })
        prep.practice_sessions = sessions

        progress = dict(empty_progress())
        progress.update(prep.progress or {})
        progress["last_practiced_at"] = now.isoformat()
        progress["total_practice_time"] = (progress.get("total_practice_time") or 0) + duration
        progress["average_confidence"] = average_session_confidence(sessions)
        prep.progress = progress

        self._recompute(prep)
        return self.preps.update(prep)

    # ----- lifecycle -----

    def generate(
        self,
        user: User,
        company: str,
        role: str,
        technologies: List[str],
        job_match_id: Optional[UUID] = None,
        experience_level: Optional[str] = None
    ) -> InterviewPrep:
        """
        Create a prep in "generating", then fill it from the researcher

        On any failure the prep is kept and reverted to "draft".
        """
        company = (company or "").strip()
        role = (role or "").strip()
        technologies = [t.strip() for t in (technologies or []) if isinstance(t, str) and t.strip()]
        if not company or not role or not technologies:
            raise ValidationError("Missing required fields: company, role, technologies")
        if experience_level is not None and experience_level not in EXPERIENCE_LEVELS:
            raise ValidationError("Invalid experience level")
        if job_match_id is not None and not self.matches.get_owned(job_match_id, user.id):
            raise NotFoundError("Job match not found")

        prep = self.preps.create(InterviewPrep(
            user_id=user.id,
            job_match_id=job_match_id,
            company=company,
            role=role,
            technologies=technologies,
            experience_level=experience_level,
            status="generating",
        ))

        resume = self.resumes.get_active(user.id)
        user_skills = list(resume.skills or []) if resume else []

        try:
            generated = self.researcher.generate(company, role, technologies, user_skills, experience_level)

            prep.company_info = {"overview": generated.company_info}
            prep.role_requirements = generated.role_requirements
            prep.ai_model = generated.ai_model
            prep.generation_prompt = generated.prompt
            prep.generated_at = _now()
            prep.status = "generated"
            prep.progress = empty_progress()
            self.set_questions(prep, generated.questions)
            prep = self.preps.update(prep)
        except Exception as e:
            self.db.rollback()
            prep.status = "draft"
            self.preps.update(prep)
            logger.error(f"Interview generation failed for prep {prep.id}: {e}")
            if isinstance(e, CollaboratorError):
                raise CollaboratorError("Failed to generate interview preparation")
            raise

        logger.info(f"Generated {len(generated.questions)} questions for prep {prep.id}")
        return prep

    def get(self, user: User, prep_id: UUID) -> InterviewPrep:
        prep = self.preps.get_owned(prep_id, user.id)
        if not prep:
            raise NotFoundError("Interview prep not found")
        return prep

    def list_preps(self, user: User, status: Optional[str] = None) -> List[InterviewPrep]:
        if status and status != "all" and status not in PREP_STATUSES:
            raise ValidationError("Invalid status")
        return self.preps.get_by_user(user.id, status)

    def delete(self, user: User, prep_id: UUID) -> None:
        prep = self.get(user, prep_id)
        self.preps.delete(prep)
        logger.info(f"Interview prep {prep_id} deleted")
