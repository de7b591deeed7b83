import asyncio

import pytest
from sqlalchemy.exc import IntegrityError

from careerprep.api.v1 import resumes as resume_routes
from careerprep.models.resume import Resume
from careerprep.models.user import User
from careerprep.repositories.resume_repository import ResumeRepository
from careerprep.services.parsing.llm_parser import FALLBACK_MODEL
from careerprep.services.resume_service import ResumeService, project_denormalized

from conftest import FakeResumeParser


def upload(client, headers, pdf, filename="resume.pdf", content_type="application/pdf"):
    return client.post(
        "/api/resume/upload",
        files={"resume": (filename, pdf, content_type)},
        headers=headers,
    )


@pytest.fixture
def parser(client, db, storage):
    fake = FakeResumeParser()
    resume_routes_override = lambda: ResumeService(db, storage=storage, parser=fake)  # noqa: E731
    client.app.dependency_overrides[resume_routes.get_resume_service] = resume_routes_override
    return fake


def current_user(db):
    return db.query(User).filter(User.email == "jane@example.com").one()


@pytest.mark.integration
def test_upload_structures_and_activates(client, auth_headers, parser, resume_pdf, db):
    resp = upload(client, auth_headers, resume_pdf)
    assert resp.status_code == 200, resp.text
    resume = resp.json()["resume"]
    assert resume["is_active"] is True
    assert resume["skills"] == ["Go", "SQL"]
    assert resume["structured_json"]["skills"] == resume["skills"]
    assert resume["skill_count"] == 2
    assert "Jane Doe" in resume["raw_text"]
    assert parser.calls == 1

    db.expire_all()
    assert str(current_user(db).active_resume_id) == resume["id"]


@pytest.mark.integration
def test_upload_without_model_uses_fallback_parser(client, auth_headers, resume_pdf):
    # no OPENAI_API_KEY in tests: structuring fails and the regex parser takes over
    resp = upload(client, auth_headers, resume_pdf)
    assert resp.status_code == 200, resp.text
    resume = resp.json()["resume"]
    assert resume["ai_model"] == FALLBACK_MODEL
    assert resume["structured_json"]["name"] == "Jane Doe"
    assert "Go" in resume["skills"]
    assert "SQL" in resume["skills"]
    assert resume["raw_text"]


@pytest.mark.integration
def test_only_one_active_resume_after_many_uploads(client, auth_headers, parser, resume_pdf, db):
    ids = [upload(client, auth_headers, resume_pdf).json()["resume"]["id"] for _ in range(3)]

    db.expire_all()
    user = current_user(db)
    assert ResumeRepository(db).count_active(user.id) == 1
    assert str(user.active_resume_id) == ids[-1]

    history = client.get("/api/resume/history", headers=auth_headers).json()["resumes"]
    assert [r["id"] for r in history if r["is_active"]] == [ids[-1]]
    assert len(history) == 3


@pytest.mark.integration
def test_upload_rejects_non_pdf(client, auth_headers):
    resp = upload(client, auth_headers, b"hello", filename="resume.txt", content_type="text/plain")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Only PDF files are allowed"


@pytest.mark.integration
def test_upload_unreadable_pdf_removes_stored_file(client, auth_headers, storage):
    resp = upload(client, auth_headers, b"%PDF-1.4 not really a pdf")
    assert resp.status_code == 400
    assert list(storage.upload_dir.iterdir()) == []


@pytest.mark.integration
def test_upload_requires_auth(client, resume_pdf):
    assert upload(client, {}, resume_pdf).status_code == 401


@pytest.mark.integration
def test_get_active_resume_when_none(client, auth_headers):
    resp = client.get("/api/resume", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not found", "message": "No resume found"}


@pytest.mark.integration
def test_download_original_file(client, auth_headers, parser, resume_pdf):
    resume_id = upload(client, auth_headers, resume_pdf).json()["resume"]["id"]
    resp = client.get(f"/api/resume/{resume_id}/file", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.content == resume_pdf
    assert resp.headers["content-type"] == "application/pdf"


@pytest.mark.integration
def test_reanalyze_replaces_structured_data(client, auth_headers, parser, resume_pdf):
    resume_id = upload(client, auth_headers, resume_pdf).json()["resume"]["id"]
    parser.structured = {"name": "Jane Doe", "skills": ["Python"], "experience": [], "education": []}

    resp = client.post(f"/api/resume/{resume_id}/reanalyze", headers=auth_headers)
    assert resp.status_code == 200
    resume = resp.json()["resume"]
    assert resume["skills"] == ["Python"]
    assert resume["experience"] == []
    assert resume["structured_json"]["skills"] == ["Python"]


@pytest.mark.integration
def test_delete_active_resume_clears_reference(client, auth_headers, parser, resume_pdf, db, storage):
    resume_id = upload(client, auth_headers, resume_pdf).json()["resume"]["id"]

    resp = client.delete(f"/api/resume/{resume_id}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Resume deleted successfully"}

    db.expire_all()
    assert current_user(db).active_resume_id is None
    assert db.query(Resume).count() == 0
    assert list(storage.upload_dir.iterdir()) == []


@pytest.mark.integration
def test_delete_survives_storage_failure(client, auth_headers, parser, resume_pdf, db, storage, monkeypatch):
    resume_id = upload(client, auth_headers, resume_pdf).json()["resume"]["id"]

    async def broken_delete(file_id):
        raise OSError("disk on fire")

    monkeypatch.setattr(storage, "delete_file", broken_delete)
    resp = client.delete(f"/api/resume/{resume_id}", headers=auth_headers)
    assert resp.status_code == 200
    db.expire_all()
    assert db.query(Resume).count() == 0


@pytest.mark.integration
def test_other_users_resume_is_not_found(client, auth_headers, parser, resume_pdf):
    resume_id = upload(client, auth_headers, resume_pdf).json()["resume"]["id"]

    other = client.post("/api/auth/register", json={"email": "bob@example.com", "password": "secret123"}).json()
    headers = {"Authorization": f"Bearer {other['token']}"}
    assert client.get(f"/api/resume/{resume_id}/file", headers=headers).status_code == 404
    assert client.delete(f"/api/resume/{resume_id}", headers=headers).status_code == 404


@pytest.mark.unit
def test_replace_structured_data_round_trip(db, user, storage):
    resume = Resume(user_id=user.id, raw_text="text", is_active=False)
    ResumeRepository(db).add(resume)
    db.commit()

    payload = {
        "name": "Jane Doe",
        "skills": ["Go", "SQL"],
        "experience": [{"company": "Acme", "role": "Engineer"}],
        "education": [{"institution": "State University"}],
    }
    ResumeService(db, storage=storage).replace_structured_data(resume, payload)

    db.expire_all()
    stored = db.get(Resume, resume.id)
    assert stored.skills == stored.structured_json["skills"] == payload["skills"]
    assert stored.experience == stored.structured_json["experience"] == payload["experience"]
    assert stored.education == stored.structured_json["education"] == payload["education"]


@pytest.mark.unit
def test_activate_deactivates_other_resumes(db, user, storage):
    service = ResumeService(db, storage=storage)
    first = ResumeRepository(db).add(Resume(user_id=user.id, raw_text="one", is_active=False))
    service.activate(first)
    second = ResumeRepository(db).add(Resume(user_id=user.id, raw_text="two", is_active=False))
    service.activate(second)

    db.expire_all()
    assert db.get(Resume, first.id).is_active is False
    assert db.get(Resume, second.id).is_active is True
    assert db.get(User, user.id).active_resume_id == second.id


@pytest.mark.unit
def test_delete_inactive_resume_keeps_active_reference(db, user, storage):
    service = ResumeService(db, storage=storage)
    old = ResumeRepository(db).add(Resume(user_id=user.id, raw_text="old", is_active=False))
    service.activate(old)
    new = ResumeRepository(db).add(Resume(user_id=user.id, raw_text="new", is_active=False))
    service.activate(new)

    asyncio.run(service.delete(db.get(Resume, old.id)))

    db.expire_all()
    assert db.get(User, user.id).active_resume_id == new.id


@pytest.mark.unit
def test_project_denormalized_ignores_non_lists():
    assert project_denormalized(None) == {"skills": [], "experience": [], "education": []}
    assert project_denormalized({"skills": "Go", "experience": [{"company": "A"}]}) == {
        "skills": [],
        "experience": [{"company": "A"}],
        "education": [],
    }


@pytest.mark.unit
def test_database_rejects_second_active_resume(db, user):
    db.add(Resume(user_id=user.id, raw_text="one", is_active=True))
    db.flush()
    db.add(Resume(user_id=user.id, raw_text="two", is_active=True))
    with pytest.raises(IntegrityError):
        db.flush()
    db.rollback()


@pytest.mark.unit
def test_inactive_resumes_are_not_constrained(db, user):
    db.add_all([
        Resume(user_id=user.id, raw_text="one", is_active=True),
        Resume(user_id=user.id, raw_text="two", is_active=False),
        Resume(user_id=user.id, raw_text="three", is_active=False),
    ])
    db.commit()
    assert ResumeRepository(db).count_active(user.id) == 1
