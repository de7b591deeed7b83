"""
LLM-based resume structuring, with a regex fallback parser
"""
import re
from dataclasses import dataclass
from typing import Dict, Any, List, Optional

from careerprep.core.config import settings
from careerprep.core.exceptions import CollaboratorError
from careerprep.core.logging import logger
from careerprep.services.llm.openai_client import OpenAIClient, get_llm_client
from careerprep.services.llm.prompt_templates import RESUME_PARSER_SYSTEM, build_resume_parse_prompt


FALLBACK_MODEL = "fallback-parser"

KNOWN_SKILLS = [
    'JavaScript', 'TypeScript', 'Python', 'Java', 'C++', 'C#', 'Go', 'Rust', 'Ruby', 'PHP', 'Swift', 'Kotlin',
    'React', 'Vue', 'Angular', 'Node.js', 'Express', 'Django', 'Flask', 'FastAPI', 'Spring', 'Laravel',
    'MongoDB', 'PostgreSQL', 'MySQL', 'Redis', 'SQL', 'GraphQL', 'REST', 'API',
    'AWS', 'Azure', 'GCP', 'Docker', 'Kubernetes', 'CI/CD', 'Git', 'GitHub',
    'HTML', 'CSS', 'SASS', 'Tailwind', 'Bootstrap',
    'Machine Learning', 'Deep Learning', 'TensorFlow', 'PyTorch', 'NLP',
    'Agile', 'Scrum', 'JIRA', 'Figma', 'Adobe',
]

# keys the model may answer in camelCase
_KEY_ALIASES = {
    "startDate": "start_date",
    "endDate": "end_date",
    "issueDate": "issue_date",
    "expiryDate": "expiry_date",
    "credentialId": "credential_id",
    "credentialUrl": "credential_url",
    "isCurrentRole": "is_current_role",
    "relevantCourses": "relevant_courses",
}

_REQUIRED_ENTRY_KEY = {
    "experience": ("company", "role"),
    "education": ("institution",),
    "projects": ("name",),
    "certifications": ("name",),
}


@dataclass
class ResumeAnalysis:
    structured: Dict[str, Any]
    ai_model: str
    confidence: Optional[int] = None

    @property
    def used_fallback(self) -> bool:
        return self.ai_model == FALLBACK_MODEL


def _string_list(value) -> List[str]:
    if not isinstance(value, list):
        return []
    seen = []
    for item in value:
        if isinstance(item, str) and item.strip() and item.strip() not in seen:
            seen.append(item.strip())
    return seen


def _entry_list(value, section: str) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    entries = []
    for item in value:
        if not isinstance(item, dict):
            continue
        entry = {_KEY_ALIASES.get(k, k): v for k, v in item.items() if v is not None}
        for key in _REQUIRED_ENTRY_KEY.get(section, ()):
            if not entry.get(key):
                entry[key] = "Unknown"
        if section == "certifications":
            entry.setdefault("issuer", "Unknown")
        entries.append(entry)
    return entries


def normalize_structured_resume(data: Dict[str, Any]) -> Dict[str, Any]:
    """Coerce a model/fallback payload into the stored structured resume shape"""
    def text(key):
        value = data.get(key)
        return value.strip() if isinstance(value, str) and value.strip() else None

    return {
        "name": text("name") or "Unknown",
        "email": text("email"),
        "phone": text("phone"),
        "location": text("location"),
        "summary": text("summary"),
        "headline": text("headline"),
        "skills": _string_list(data.get("skills")),
        "experience": _entry_list(data.get("experience"), "experience"),
        "education": _entry_list(data.get("education"), "education"),
        "projects": _entry_list(data.get("projects"), "projects"),
        "certifications": _entry_list(data.get("certifications"), "certifications"),
        "languages": _string_list(data.get("languages")),
    }


class ResumeParser:
    """Turns raw resume text into the structured resume payload"""

    def __init__(self, client: Optional[OpenAIClient] = None):
        self.client = client or get_llm_client()

    def parse_resume(self, raw_text: str) -> ResumeAnalysis:
        """
        Structure resume text with the LLM; fall back to regex extraction
        when the model is unavailable or its reply is unusable

        Returns:
            ResumeAnalysis (never raises for collaborator failures)
        """
        try:
            data = self.client.generate_json(
                build_resume_parse_prompt(raw_text),
                system_prompt=RESUME_PARSER_SYSTEM,
                temperature=0.1,
            )
        except CollaboratorError as e:
            logger.warning(f"Resume structuring failed, using fallback parser: {e}")
            return ResumeAnalysis(structured=fallback_parse(raw_text), ai_model=FALLBACK_MODEL)

        structured = normalize_structured_resume(data)

        # fill gaps the model left
        if structured["name"] == "Unknown":
            structured["name"] = extract_name(raw_text) or "Unknown"
        if not structured["skills"]:
            structured["skills"] = extract_skills(raw_text)

        confidence = data.get("confidence")
        if isinstance(confidence, (int, float)):
            confidence = max(0, min(100, int(round(confidence))))
        else:
            confidence = None

        logger.info(f"Resume parsed: {structured['name']}, {len(structured['skills'])} skills found")
        return ResumeAnalysis(structured=structured, ai_model=self.client.model or settings.OPENAI_MODEL, confidence=confidence)


# ----- fallback parser -----

def fallback_parse(raw_text: str) -> Dict[str, Any]:
    """Best-effort extraction with regular expressions"""
    return normalize_structured_resume({
        "name": extract_name(raw_text),
        "email": extract_email(raw_text),
        "phone": extract_phone(raw_text),
        "summary": extract_summary(raw_text),
        "skills": extract_skills(raw_text),
        "experience": extract_experience(raw_text),
        "education": extract_education(raw_text),
        "projects": [],
    })


def extract_name(text: str) -> Optional[str]:
    # the name is usually the first non-empty line
    lines = [l.strip() for l in text.strip().split('\n') if l.strip()]
    if lines:
        first = lines[0]
        if len(first) < 50 and re.fullmatch(r"[A-Za-z\s.'-]+", first):
            return first
    return None


def extract_email(text: str) -> Optional[str]:
    match = re.search(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}", text)
    return match.group(0) if match else None


def extract_phone(text: str) -> Optional[str]:
    match = re.search(r"(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}", text)
    return match.group(0).strip() if match else None


def extract_summary(text: str) -> Optional[str]:
    match = re.search(
        r"(?:summary|objective|about|profile)[:\s]*\n?([\s\S]{50,500}?)(?:\n\n|experience|education|skills)",
        text,
        re.IGNORECASE,
    )
    return match.group(1).strip() if match else None


def extract_skills(text: str) -> List[str]:
    skills: List[str] = []
    text_lower = text.lower()

    for skill in KNOWN_SKILLS:
        # word-ish boundaries so "Go" does not match "Google"
        pattern = r"(?<![A-Za-z0-9])" + re.escape(skill.lower()) + r"(?![A-Za-z0-9])"
        if re.search(pattern, text_lower):
            skills.append(skill)

    section = re.search(r"skills[:\s]*\n?([\s\S]*?)(?:\n\n|experience|education|projects|$)", text, re.IGNORECASE)
    if section:
        for item in re.split(r"[,•|\n]", section.group(1)):
            item = item.strip()
            if 1 < len(item) < 30 and item not in skills:
                skills.append(item)

    return skills


def extract_experience(text: str) -> List[Dict[str, Any]]:
    experience = []
    section = re.search(
        r"(?:experience|work history|employment)[:\s]*\n?([\s\S]*?)(?:education|skills|projects|$)",
        text,
        re.IGNORECASE,
    )
    if section:
        entries = [e for e in re.split(r"\n{2,}", section.group(1)) if len(e.strip()) > 20]
        for entry in entries[:5]:
            lines = [l.strip() for l in entry.split('\n') if l.strip()]
            if len(lines) >= 2:
                experience.append({
                    "company": lines[0],
                    "role": lines[1],
                    "description": " ".join(lines[2:]),
                })
    return experience


def extract_education(text: str) -> List[Dict[str, Any]]:
    education = []
    section = re.search(
        r"education[:\s]*\n?([\s\S]*?)(?:experience|skills|projects|certifications|$)",
        text,
        re.IGNORECASE,
    )
    if section:
        entries = [e for e in re.split(r"\n{2,}", section.group(1)) if len(e.strip()) > 10]
        for entry in entries[:3]:
            lines = [l.strip() for l in entry.split('\n') if l.strip()]
            if lines:
                education.append({
                    "institution": lines[0],
                    "degree": lines[1] if len(lines) > 1 else None,
                    "field": lines[2] if len(lines) > 2 else None,
                })
    return education
