import os
import tempfile

# settings are read at import time; point everything at throwaway locations first
_TMP = tempfile.mkdtemp(prefix="careerprep-tests-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "uploads")
os.environ["LOG_DIR"] = os.path.join(_TMP, "logs")
os.environ["OPENAI_API_KEY"] = ""
os.environ["SERPAPI_KEY"] = ""
os.environ["BCRYPT_ROUNDS"] = "4"

import fitz  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from careerprep.core.database import Base, get_db  # noqa: E402
from careerprep.core.storage import StorageService, get_storage  # noqa: E402
from careerprep.main import app  # noqa: E402
from careerprep.models.user import User  # noqa: E402
from careerprep.services.interview_researcher import GeneratedPrep  # noqa: E402
from careerprep.services.job_matcher import ScoredJob  # noqa: E402
from careerprep.services.parsing.llm_parser import ResumeAnalysis  # noqa: E402


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def storage(tmp_path):
    return StorageService(upload_dir=str(tmp_path))


@pytest.fixture
def client(db, storage):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def user(db):
    u = User(email="jane@example.com", full_name="Jane Doe")
    u.set_password("secret123")
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


def register(client, email="jane@example.com", password="secret123", **extra):
    resp = client.post("/api/auth/register", json={"email": email, "password": password, **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def auth_headers(client):
    token = register(client)["token"]
    return {"Authorization": f"Bearer {token}"}


def make_pdf(text: str) -> bytes:
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), text, fontsize=11)
    content = doc.tobytes()
    doc.close()
    return content


RESUME_TEXT = "Jane Doe\njane@example.com\n555-123-4567\n\nSkills\nGo, SQL"


@pytest.fixture
def resume_pdf():
    return make_pdf(RESUME_TEXT)


# ----- fake collaborators -----

class FakeResumeParser:
    def __init__(self, structured=None, ai_model="gpt-4o-mini", confidence=90):
        self.structured = structured or {
            "name": "Jane Doe",
            "email": "jane@example.com",
            "skills": ["Go", "SQL"],
            "experience": [{"company": "Acme", "role": "Engineer", "description": "Built services"}],
            "education": [{"institution": "State University", "degree": "BSc"}],
            "projects": [],
            "certifications": [],
            "languages": [],
        }
        self.ai_model = ai_model
        self.confidence = confidence
        self.calls = 0

    def parse_resume(self, raw_text):
        self.calls += 1
        return ResumeAnalysis(structured=dict(self.structured), ai_model=self.ai_model, confidence=self.confidence)


class FakeSearch:
    def __init__(self, jobs=None):
        self.jobs = jobs if jobs is not None else []
        self.queries = []

    def search(self, skills):
        self.queries.append(list(skills))
        return list(self.jobs)


class FakeMatcher:
    """Scores jobs from a title -> score map"""

    def __init__(self, scores):
        self.scores = scores

    def match_jobs(self, jobs, skills, experience=None):
        scored = [
            ScoredJob(
                job=job,
                score=self.scores.get(job["title"], 0),
                rationale=f"{job['title']} fits",
                matching_skills=["Go"],
                missing_skills=["Kubernetes"],
            )
            for job in jobs
        ]
        return sorted(scored, key=lambda s: s.score, reverse=True)


class FakeResearcher:
    def __init__(self, question_count=10, error=None):
        self.question_count = question_count
        self.error = error

    def generate(self, company, role, technologies, user_skills=None, experience_level=None):
        if self.error:
            raise self.error
        types = ["technical", "behavioral", "system design", "situational", "coding"]
        difficulties = ["easy", "medium", "hard"]
        questions = [
            {
                "question": f"Question {i}?",
                "type": types[i % len(types)],
                "difficulty": difficulties[i % len(difficulties)],
                "topic": "General",
                "model_answer": "An answer",
                "hints": [],
            }
            for i in range(self.question_count)
        ]
        return GeneratedPrep(
            questions=questions,
            company_info=f"{company} builds things",
            role_requirements=f"{role} requirements",
            prompt="prompt",
            ai_model="gpt-4o-mini",
        )


class StubClient:
    """LLM client returning canned replies in order; an exception instance is raised instead"""

    model = "stub-model"

    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts = []

    def generate_json(self, prompt, system_prompt=None, temperature=0.2, max_tokens=None):
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply
