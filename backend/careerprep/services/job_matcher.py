"""
Job matcher - scores a job posting against a candidate's skills with the LLM
"""
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from careerprep.core.exceptions import CollaboratorError
from careerprep.core.logging import logger
from careerprep.services.llm.openai_client import OpenAIClient, get_llm_client
from careerprep.services.llm.prompt_templates import JOB_MATCH_SYSTEM, build_job_match_prompt
from careerprep.utils.numbers import round_half_up


FALLBACK_RATIONALE = "Unable to analyze match"


@dataclass
class ScoredJob:
    job: Dict[str, Any]
    score: int
    rationale: str
    matching_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)


def clamp_score(value) -> int:
    try:
        score = round_half_up(float(value))
    except (TypeError, ValueError, ArithmeticError):
        return 0
    return max(0, min(100, score))


class JobMatcher:
    """Job-scoring collaborator with a zero-score fallback"""

    def __init__(self, client: Optional[OpenAIClient] = None):
        self.client = client or get_llm_client()

    def match_job(
        self,
        job: Dict[str, Any],
        skills: List[str],
        experience: Optional[str] = None
    ) -> ScoredJob:
        prompt = build_job_match_prompt(
            title=job.get("title", ""),
            company=job.get("company", ""),
            description=job.get("description", ""),
            skills=skills,
            experience=experience,
        )
        try:
            data = self.client.generate_json(prompt, system_prompt=JOB_MATCH_SYSTEM)
        except CollaboratorError as e:
            logger.warning(f"Job scoring failed for {job.get('title')!r} at {job.get('company')!r}: {e}")
            return ScoredJob(job=job, score=0, rationale=FALLBACK_RATIONALE)

        matching = data.get("matchingSkills")
        gaps = data.get("skillGaps")
        return ScoredJob(
            job=job,
            score=clamp_score(data.get("matchScore")),
            rationale=data.get("whyMatch") or "No explanation provided",
            matching_skills=[s for s in matching if isinstance(s, str)] if isinstance(matching, list) else [],
            missing_skills=[s for s in gaps if isinstance(s, str)] if isinstance(gaps, list) else [],
        )

    def match_jobs(
        self,
        jobs: List[Dict[str, Any]],
        skills: List[str],
        experience: Optional[str] = None
    ) -> List[ScoredJob]:
        """Score every job; best score first"""
        scored = [self.match_job(job, skills, experience) for job in jobs]
        return sorted(scored, key=lambda s: s.score, reverse=True)
