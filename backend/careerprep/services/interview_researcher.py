"""
Interview researcher - company research plus a generated question bank
"""
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from careerprep.core.exceptions import CollaboratorError
from careerprep.core.logging import logger
from careerprep.models.interview_prep import QUESTION_TYPES, DIFFICULTIES
from careerprep.services.llm.openai_client import OpenAIClient, get_llm_client
from careerprep.services.llm.prompt_templates import (
    COMPANY_RESEARCH_SYSTEM,
    INTERVIEW_QUESTIONS_SYSTEM,
    build_company_research_prompt,
    build_interview_questions_prompt,
)


COMPANY_INFO_UNAVAILABLE = "Company information not available"
ROLE_REQUIREMENTS_UNAVAILABLE = "Role requirements not available"


@dataclass
class GeneratedPrep:
    questions: List[Dict[str, Any]]
    company_info: str
    role_requirements: str
    prompt: str = ""
    ai_model: Optional[str] = None


def _str_list(value) -> List[str]:
    return [v for v in value if isinstance(v, str)] if isinstance(value, list) else []


def _as_text(value) -> Optional[str]:
    """Flatten a model field that should be prose but may come back as a list or object"""
    if value is None:
        return None
    if isinstance(value, list):
        value = "\n".join(str(v) for v in value if v is not None)
    elif isinstance(value, dict):
        value = "\n".join(f"{k}: {v}" for k, v in value.items() if v is not None)
    text = str(value).strip()
    return text or None


def normalize_question(raw: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Shape one model question; None when it has no question text"""
    text = raw.get("question")
    if not isinstance(text, str) or not text.strip():
        return None

    q_type = str(raw.get("type") or "technical").lower().replace("_", " ")
    if q_type not in QUESTION_TYPES:
        q_type = "technical"
    difficulty = str(raw.get("difficulty") or "medium").lower()
    if difficulty not in DIFFICULTIES:
        difficulty = "medium"

    return {
        "question": text.strip(),
        "type": q_type,
        "difficulty": difficulty,
        "topic": raw.get("topic") or "General",
        "subtopic": raw.get("subtopic"),
        "model_answer": raw.get("modelAnswer") or raw.get("model_answer") or "",
        "hints": _str_list(raw.get("hints")),
        "key_points": _str_list(raw.get("keyPoints") or raw.get("key_points")),
        "follow_up_questions": _str_list(raw.get("followUpQuestions") or raw.get("follow_up_questions")),
        "time_estimate": raw.get("timeEstimate") if isinstance(raw.get("timeEstimate"), (int, float)) else None,
    }


class InterviewResearcher:
    """Question-generation collaborator"""

    def __init__(self, client: Optional[OpenAIClient] = None):
        self.client = client or get_llm_client()

    def research_company(self, company: str, role: str) -> Dict[str, str]:
        """Best effort; placeholder text on failure"""
        try:
            data = self.client.generate_json(
                build_company_research_prompt(company, role),
                system_prompt=COMPANY_RESEARCH_SYSTEM,
            )
        except CollaboratorError as e:
            logger.warning(f"Company research failed for {company!r}: {e}")
            data = {}
        return {
            "company_info": _as_text(data.get("companyInfo")) or COMPANY_INFO_UNAVAILABLE,
            "role_requirements": _as_text(data.get("roleRequirements")) or ROLE_REQUIREMENTS_UNAVAILABLE,
        }

    def generate(
        self,
        company: str,
        role: str,
        technologies: List[str],
        user_skills: Optional[List[str]] = None,
        experience_level: Optional[str] = None
    ) -> GeneratedPrep:
        """
        Research the company and generate questions

        Raises:
            CollaboratorError: question generation failed or produced no usable question
        """
        research = self.research_company(company, role)

        prompt = build_interview_questions_prompt(company, role, technologies, user_skills, experience_level)
        data = self.client.generate_json(prompt, system_prompt=INTERVIEW_QUESTIONS_SYSTEM, temperature=0.5)

        raw_questions = data.get("questions")
        if not isinstance(raw_questions, list):
            raise CollaboratorError("Question generation returned no questions")
        questions = [q for q in (normalize_question(r) for r in raw_questions if isinstance(r, dict)) if q]
        if not questions:
            raise CollaboratorError("Question generation returned no questions")

        return GeneratedPrep(
            questions=questions,
            company_info=research["company_info"],
            role_requirements=research["role_requirements"],
            prompt=prompt,
            ai_model=self.client.model,
        )
