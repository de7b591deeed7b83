"""
Job skill extractor - categorizes the skills a job posting asks for
"""
from typing import Dict, Any, Optional

from careerprep.core.exceptions import CollaboratorError
from careerprep.core.logging import logger
from careerprep.services.llm.openai_client import OpenAIClient, get_llm_client
from careerprep.services.llm.prompt_templates import JOB_SKILLS_SYSTEM, build_job_skills_prompt


SKILL_CATEGORIES = {
    "requiredSkills": "required_skills",
    "preferredSkills": "preferred_skills",
    "technologies": "technologies",
    "frameworks": "frameworks",
    "tools": "tools",
    "languages": "languages",
    "certifications": "certifications",
}


def empty_extraction() -> Dict[str, Any]:
    extraction = {key: [] for key in SKILL_CATEGORIES.values()}
    extraction["experience_level"] = None
    extraction["years_of_experience"] = None
    return extraction


class JobSkillExtractor:

    def __init__(self, client: Optional[OpenAIClient] = None):
        self.client = client or get_llm_client()

    def extract(self, title: str, company: str, description: str) -> Dict[str, Any]:
        """Categorized skills; empty categories when the model fails"""
        try:
            data = self.client.generate_json(
                build_job_skills_prompt(title, company, description),
                system_prompt=JOB_SKILLS_SYSTEM,
                temperature=0.1,
            )
        except CollaboratorError as e:
            logger.warning(f"Job skill extraction failed for {title!r}: {e}")
            return empty_extraction()

        extraction = empty_extraction()
        for source_key, target_key in SKILL_CATEGORIES.items():
            value = data.get(source_key)
            if isinstance(value, list):
                extraction[target_key] = [s for s in value if isinstance(s, str)]

        if data.get("experienceLevel") in ("entry", "mid", "senior", "lead", "executive"):
            extraction["experience_level"] = data["experienceLevel"]
        if isinstance(data.get("yearsOfExperience"), (int, float)):
            extraction["years_of_experience"] = data["yearsOfExperience"]
        return extraction
