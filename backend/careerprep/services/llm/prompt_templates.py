"""
LLM Prompt Templates
"""
from typing import List, Optional


RESUME_PARSER_SYSTEM = (
    "You are an expert resume parser. You extract information exactly as written "
    "and always answer with a single JSON object."
)

RESUME_PARSE_TEMPLATE = """
Extract structured information from the resume text provided below.

Resume Text:
\"\"\"
{resume_text}
\"\"\"

Extract the following fields in JSON format:
- name (string): Full name
- email (string): Email address
- phone (string): Phone number
- location (string): City, State/Country
- summary (string): Professional summary
- headline (string): Professional headline
- skills (string[]): List of all technical and soft skills
- experience (object[]): company, role, location, start_date, end_date, description, highlights (string[]), technologies (string[])
- education (object[]): institution, degree, field, location, start_date, end_date, gpa
- projects (object[]): name, description, url, technologies (string[]), highlights (string[])
- certifications (object[]): name, issuer, issue_date, credential_id
- languages (string[]): Languages spoken
- confidence (number 0-100): how confident you are in the extraction

If information is missing, use null or empty arrays/strings. Do not guess.
"""

JOB_MATCH_SYSTEM = "You are an expert job matching assistant. You analyze job-resume compatibility and answer in JSON."

JOB_MATCH_TEMPLATE = """
Resume skills: {skills}
{experience_block}
Job Title: {title}
Company: {company}
Job Description: {description}

Analyze how well this job matches the candidate's profile. Provide:
1. A match score from 0-100
2. A brief explanation (2-3 sentences) of why this job fits or doesn't fit
3. List of matching skills
4. List of skill gaps (skills required but not in resume)

Respond in JSON format:
{{
  "matchScore": <number 0-100>,
  "whyMatch": "<explanation>",
  "matchingSkills": ["skill1", "skill2"],
  "skillGaps": ["skill1", "skill2"]
}}
"""

JOB_SKILLS_SYSTEM = "You are an expert job analyzer. You extract skills and requirements from job postings as JSON."

JOB_SKILLS_TEMPLATE = """
Job Title: {title}
Company: {company}
Job Description: {description}

Extract and categorize:
1. Required Skills (must-have technical and soft skills)
2. Preferred Skills (nice-to-have skills)
3. Technologies, Frameworks, Tools, Programming Languages
4. Certifications (if mentioned)
5. Experience Level (entry, mid, senior, lead, executive)
6. Years of Experience (if specified)

Respond in JSON format:
{{
  "requiredSkills": [],
  "preferredSkills": [],
  "technologies": [],
  "frameworks": [],
  "tools": [],
  "languages": [],
  "certifications": [],
  "experienceLevel": "mid",
  "yearsOfExperience": 3
}}
Return empty arrays if a category has no items.
"""

COMPANY_RESEARCH_SYSTEM = "You are a career research assistant. You answer concisely in JSON."

COMPANY_RESEARCH_TEMPLATE = """
Research the following company and role:

Company: {company}
Role: {role}

Provide:
1. Brief company information (what they do, culture, recent news)
2. Typical requirements and expectations for this role

Keep responses concise (2-3 paragraphs each).

Respond in JSON format:
{{
  "companyInfo": "...",
  "roleRequirements": "..."
}}
"""

INTERVIEW_QUESTIONS_SYSTEM = "You are a senior interviewer preparing candidates. You answer in JSON."

INTERVIEW_QUESTIONS_TEMPLATE = """
Generate comprehensive interview questions for:

Company: {company}
Role: {role}
Technologies: {technologies}
{skills_block}{level_block}
Generate 15-20 questions covering:
- Technical questions (coding, algorithms, system design)
- Behavioral questions (teamwork, problem-solving, past experiences)
- Role-specific and situational questions

For each question, provide:
- question: the question text
- type: one of technical, behavioral, system design, situational, coding
- difficulty: one of easy, medium, hard
- topic: topic/category
- modelAnswer: a comprehensive model answer
- hints: 2-3 hints
- keyPoints: key points a strong answer covers
- followUpQuestions: likely follow-up questions

Respond in JSON format:
{{
  "questions": [
    {{
      "question": "...",
      "type": "technical",
      "difficulty": "medium",
      "topic": "...",
      "modelAnswer": "...",
      "hints": ["hint1", "hint2"],
      "keyPoints": [],
      "followUpQuestions": []
    }}
  ]
}}
"""


def build_resume_parse_prompt(resume_text: str, max_chars: int = 12000) -> str:
    return RESUME_PARSE_TEMPLATE.format(resume_text=resume_text[:max_chars])


def build_job_match_prompt(
    title: str,
    company: str,
    description: str,
    skills: List[str],
    experience: Optional[str] = None
) -> str:
    experience_block = f"User experience summary: {experience}\n" if experience else ""
    return JOB_MATCH_TEMPLATE.format(
        skills=", ".join(skills),
        experience_block=experience_block,
        title=title,
        company=company,
        description=(description or "")[:3000],
    )


def build_job_skills_prompt(title: str, company: str, description: str) -> str:
    return JOB_SKILLS_TEMPLATE.format(title=title, company=company, description=(description or "")[:4000])


def build_company_research_prompt(company: str, role: str) -> str:
    return COMPANY_RESEARCH_TEMPLATE.format(company=company, role=role)


def build_interview_questions_prompt(
    company: str,
    role: str,
    technologies: List[str],
    user_skills: Optional[List[str]] = None,
    experience_level: Optional[str] = None
) -> str:
    skills_block = f"Candidate Skills: {', '.join(user_skills)}\n" if user_skills else ""
    level_block = f"Experience Level: {experience_level}\n" if experience_level else ""
    return INTERVIEW_QUESTIONS_TEMPLATE.format(
        company=company,
        role=role,
        technologies=", ".join(technologies),
        skills_block=skills_block,
        level_block=level_block,
    )
