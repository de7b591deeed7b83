"""
Job Match Service - discovery, persistence and application tracking
"""
from collections import Counter
from datetime import date
from typing import List, Dict, Any, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from careerprep.core.config import settings
from careerprep.core.exceptions import NotFoundError, ValidationError
from careerprep.core.logging import logger
from careerprep.models.job_match import APPLICATION_STATUSES, JobMatch
from careerprep.models.resume import Resume
from careerprep.models.user import User
from careerprep.repositories.job_match_repository import JobMatchRepository
from careerprep.repositories.resume_repository import ResumeRepository
from careerprep.repositories.user_repository import UserRepository
from careerprep.services.job_matcher import JobMatcher, ScoredJob, clamp_score
from careerprep.services.job_search import JobSearchClient
from careerprep.services.job_skill_extractor import JobSkillExtractor
from careerprep.utils.numbers import round_half_up


ANALYTICS_TOP_N = 5


def overall_fit_for(score: int) -> str:
    """Four-bucket label for a 0-100 match score"""
    thresholds = settings.FIT_THRESHOLDS
    if score >= thresholds["excellent"]:
        return "excellent"
    elif score >= thresholds["good"]:
        return "good"
    elif score >= thresholds["moderate"]:
        return "moderate"
    return "low"


def experience_summary(resume: Resume) -> str:
    structured = resume.structured_json or {}
    if structured.get("summary"):
        return structured["summary"]
    descriptions = [e.get("description") for e in (resume.experience or []) if isinstance(e, dict)]
    return " ".join(d for d in descriptions if d)


def _parse_salary(raw) -> Optional[Dict[str, Any]]:
    if not raw:
        return None
    if isinstance(raw, dict):
        return raw
    return {"text": str(raw), "is_estimate": True}


class JobMatchService:
    """Job-match discovery and status engine"""

    def __init__(
        self,
        db: Session,
        search_client: Optional[JobSearchClient] = None,
        matcher: Optional[JobMatcher] = None,
        skill_extractor: Optional[JobSkillExtractor] = None
    ):
        self.db = db
        self.matches = JobMatchRepository(db)
        self.resumes = ResumeRepository(db)
        self.users = UserRepository(db)
        self.search_client = search_client or JobSearchClient()
        self._matcher = matcher
        self._skill_extractor = skill_extractor

    @property
    def matcher(self) -> JobMatcher:
        if self._matcher is None:
            self._matcher = JobMatcher()
        return self._matcher

    @property
    def skill_extractor(self) -> JobSkillExtractor:
        if self._skill_extractor is None:
            self._skill_extractor = JobSkillExtractor()
        return self._skill_extractor

    def discover(self, user: User) -> Dict[str, Any]:
        """
        Search, score and persist job matches for the user's active resume

        Returns:
            {"matches": [JobMatch, ...] best first, "total_found": int}
        """
        resume = self.resumes.get_active(user.id)
        if not resume:
            raise NotFoundError("No resume found. Please upload your resume first.")

        skills = resume.skills or []
        if not skills:
            raise ValidationError("No skills found in resume")

        jobs = self.search_client.search(skills)
        if not jobs:
            logger.info(f"No jobs found for user {user.id}")
            return {"matches": [], "total_found": 0}

        scored = self.matcher.match_jobs(jobs, skills, experience_summary(resume))
        saved = self.persist_batch(user.id, resume.id, scored[:settings.JOB_MATCH_SAVE_LIMIT])

        logger.info(f"Discovered {len(scored)} jobs for user {user.id}, saved {len(saved)}")
        return {"matches": saved[:settings.JOB_MATCH_RESPONSE_LIMIT], "total_found": len(scored)}

    def persist_batch(self, user_id: UUID, resume_id: Optional[UUID], scored_jobs: List[ScoredJob]) -> List[JobMatch]:
        """
        Insert one JobMatch per scored job and bump the user's counters

        No per-item transaction: a failure surfaces to the caller.
        """
        rows = []
        for item in scored_jobs:
            job = item.job
            score = clamp_score(item.score)
            rows.append(JobMatch(
                user_id=user_id,
                resume_id=resume_id,
                job_title=job.get("title") or "Unknown",
                company=job.get("company") or "Unknown",
                location=job.get("location") or "Unknown",
                description=job.get("description") or "",
                url=job.get("url") or "#",
                source=job.get("source") or "SerpAPI",
                salary=_parse_salary(job.get("salary")),
                posted_date=job.get("posted_date") if isinstance(job.get("posted_date"), date) else None,
                requirements=[],
                match_score=score,
                why_this_job_fits=item.rationale,
                match_analysis={
                    "matching_skills": list(item.matching_skills),
                    "missing_skills": list(item.missing_skills),
                    "strength_areas": [],
                    "improvement_areas": [],
                    "overall_fit": overall_fit_for(score),
                },
                applied=False,
                application_status="not_applied",
                is_saved=False,
                is_hidden=False,
            ))

        if not rows:
            return []

        self.matches.add_all(rows)
        self.users.increment_counter(user_id, "total_jobs_discovered", len(rows))
        self.db.commit()

        self.refresh_analytics(user_id)
        return sorted(rows, key=lambda m: m.match_score, reverse=True)

    def refresh_analytics(self, user_id: UUID) -> None:
        """Recompute average score, top strengths and skill gaps"""
        user = self.users.get_by_id(user_id)
        if not user:
            return

        rows = self.matches.scores_and_analysis(user_id)
        strengths: Counter = Counter()
        gaps: Counter = Counter()
        for _, analysis in rows:
            analysis = analysis or {}
            strengths.update(analysis.get("matching_skills") or [])
            gaps.update(analysis.get("missing_skills") or [])

        average = round_half_up(sum(score for score, _ in rows) / len(rows)) if rows else 0
        user.update_analytics(
            average_match_score=average,
            top_strengths=[skill for skill, _ in strengths.most_common(ANALYTICS_TOP_N)],
            skill_gaps=[skill for skill, _ in gaps.most_common(ANALYTICS_TOP_N)],
        )
        self.users.update(user)

    # ----- per-record actions -----

    def get_owned(self, user: User, match_id: UUID) -> JobMatch:
        match = self.matches.get_owned(match_id, user.id)
        if not match:
            raise NotFoundError("Job match not found")
        return match

    def mark_applied(self, user: User, match_id: UUID, notes: Optional[str] = None) -> JobMatch:
        """
        Mark a match applied; the first call stamps applied_date and counts
        toward total_jobs_applied, later calls only update notes
        """
        match = self.get_owned(user, match_id)

        first_time = self.matches.mark_applied_once(match.id, user.id)
        if first_time:
            self.users.increment_counter(user.id, "total_jobs_applied", 1)
            user.update_analytics()
        if notes is not None:
            match.application_notes = notes

        self.db.commit()
        self.db.refresh(match)
        if first_time:
            logger.info(f"User {user.id} applied to job match {match.id}")
        return match

    def set_application_status(
        self,
        user: User,
        match_id: UUID,
        status: str,
        notes: Optional[str] = None
    ) -> JobMatch:
        """Any status may follow any other; only the value is checked"""
        if status not in APPLICATION_STATUSES:
            raise ValidationError("Invalid status")

        match = self.get_owned(user, match_id)
        match.application_status = status
        if notes:
            match.application_notes = notes
        return self.matches.update(match)

    def toggle_save(self, user: User, match_id: UUID) -> JobMatch:
        match = self.get_owned(user, match_id)
        match.is_saved = not match.is_saved
        return self.matches.update(match)

    def hide(self, user: User, match_id: UUID) -> JobMatch:
        """Hide a match from default listings (there is no unhide)"""
        match = self.get_owned(user, match_id)
        match.is_hidden = True
        return self.matches.update(match)

    def list_matches(self, user: User, filters: Optional[Dict[str, Any]] = None) -> List[JobMatch]:
        filters = filters or {}
        status = filters.get("status")
        if status and status != "all" and status not in APPLICATION_STATUSES:
            raise ValidationError("Invalid status")
        return self.matches.get_by_user(user.id, filters)

    def suggestions(self, user: User) -> List[Dict[str, Any]]:
        """
        Skill suggestions for the user's best visible matches

        Returns:
            one entry per match with the job's required skills, split into
            matched and missing against the active resume
        """
        resume = self.resumes.get_active(user.id)
        if not resume:
            raise NotFoundError("No resume found. Please upload your resume first.")

        resume_skills = {s.lower() for s in (resume.skills or []) if isinstance(s, str)}
        top_matches = self.matches.get_by_user(user.id, limit=settings.JOB_SUGGESTION_LIMIT)

        suggestions = []
        for match in top_matches:
            extraction = self.skill_extractor.extract(match.job_title, match.company, match.description)
            required = extraction["required_skills"]
            suggestions.append({
                "job_match_id": match.id,
                "job_title": match.job_title,
                "company": match.company,
                "match_score": match.match_score,
                "required_skills": required,
                "preferred_skills": extraction["preferred_skills"],
                "matched_skills": [s for s in required if s.lower() in resume_skills],
                "missing_skills": [s for s in required if s.lower() not in resume_skills],
                "experience_level": extraction["experience_level"],
            })
        return suggestions
