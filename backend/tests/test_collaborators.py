import asyncio
from datetime import date, timedelta
from types import SimpleNamespace

import httpx
import pytest

from careerprep.core.exceptions import CollaboratorError, NotFoundError, ValidationError
from careerprep.core.storage import StorageService
from careerprep.services import job_search
from careerprep.services.interview_researcher import (
    COMPANY_INFO_UNAVAILABLE,
    InterviewResearcher,
    normalize_question,
)
from careerprep.services.job_matcher import FALLBACK_RATIONALE, JobMatcher, clamp_score
from careerprep.services.job_search import JobSearchClient, build_query, parse_posted_date
from careerprep.services.job_skill_extractor import JobSkillExtractor, empty_extraction
from careerprep.services.llm.openai_client import OpenAIClient, parse_json_response
from careerprep.services.parsing.llm_parser import (
    FALLBACK_MODEL,
    ResumeParser,
    extract_skills,
    fallback_parse,
)
from careerprep.services.parsing.pdf_parser import PDFParser

from conftest import RESUME_TEXT, StubClient, make_pdf


# ----- json replies -----

@pytest.mark.unit
def test_parse_json_response_strips_fences():
    assert parse_json_response('```json\n{"a": 1}\n```') == {"a": 1}


@pytest.mark.unit
def test_parse_json_response_finds_embedded_object():
    assert parse_json_response('Sure! Here you go: {"a": [1, 2]} hope it helps') == {"a": [1, 2]}


@pytest.mark.unit
@pytest.mark.parametrize("reply", [None, "", "no json here", "[1, 2, 3]", "{broken"])
def test_parse_json_response_rejects_unusable(reply):
    with pytest.raises(CollaboratorError):
        parse_json_response(reply)


@pytest.mark.unit
def test_client_without_key_is_unavailable():
    client = OpenAIClient(api_key="")
    assert not client.available
    with pytest.raises(CollaboratorError):
        client.generate_json("prompt")


# ----- resume parsing -----

@pytest.mark.unit
def test_extract_skills_respects_word_boundaries():
    skills = extract_skills("Worked at Google on Django services")
    assert "Django" in skills
    assert "Go" not in skills


@pytest.mark.unit
def test_fallback_parse_reads_contact_details():
    structured = fallback_parse(RESUME_TEXT)
    assert structured["name"] == "Jane Doe"
    assert structured["email"] == "jane@example.com"
    assert structured["phone"] == "555-123-4567"
    assert "Go" in structured["skills"]
    assert structured["projects"] == []


@pytest.mark.unit
def test_resume_parser_falls_back_on_model_failure():
    parser = ResumeParser(client=StubClient(CollaboratorError("down")))
    analysis = parser.parse_resume(RESUME_TEXT)
    assert analysis.used_fallback
    assert analysis.ai_model == FALLBACK_MODEL
    assert analysis.structured["name"] == "Jane Doe"


@pytest.mark.unit
def test_resume_parser_normalizes_model_reply():
    reply = {
        "name": "",
        "skills": ["Python", "Python", " ", 7],
        "experience": [{"company": "Acme", "startDate": "2020-01", "isCurrentRole": True}],
        "certifications": [{"name": "CKA"}],
        "confidence": 140,
    }
    analysis = ResumeParser(client=StubClient(reply)).parse_resume(RESUME_TEXT)
    structured = analysis.structured
    assert analysis.ai_model == "stub-model"
    assert analysis.confidence == 100
    assert structured["name"] == "Jane Doe"
    assert structured["skills"] == ["Python"]
    assert structured["experience"] == [
        {"company": "Acme", "start_date": "2020-01", "is_current_role": True, "role": "Unknown"}
    ]
    assert structured["certifications"] == [{"name": "CKA", "issuer": "Unknown"}]


@pytest.mark.unit
def test_pdf_parser_extracts_text():
    parsed = PDFParser().extract_text(make_pdf(RESUME_TEXT))
    assert "Jane Doe" in parsed.text
    assert parsed.page_count == 1


@pytest.mark.unit
def test_pdf_parser_rejects_garbage():
    with pytest.raises(ValidationError):
        PDFParser().extract_text(b"not a pdf at all")


# ----- job scoring -----

@pytest.mark.unit
def test_matcher_falls_back_to_zero_score():
    matcher = JobMatcher(client=StubClient(CollaboratorError("down")))
    scored = matcher.match_job({"title": "Engineer", "company": "Acme"}, ["Go"])
    assert scored.score == 0
    assert scored.rationale == FALLBACK_RATIONALE
    assert scored.matching_skills == scored.missing_skills == []


@pytest.mark.unit
def test_matcher_sorts_and_clamps():
    matcher = JobMatcher(client=StubClient(
        {"matchScore": 40, "whyMatch": "ok", "matchingSkills": ["Go"], "skillGaps": ["Rust"]},
        {"matchScore": 250, "whyMatch": "great"},
    ))
    scored = matcher.match_jobs([{"title": "A"}, {"title": "B"}], ["Go"])
    assert [(s.job["title"], s.score) for s in scored] == [("B", 100), ("A", 40)]
    assert scored[1].missing_skills == ["Rust"]


@pytest.mark.unit
@pytest.mark.parametrize("value,expected", [
    (55.6, 56), (62.5, 63), ("70", 70), (-3, 0), (101, 100),
    (None, 0), ("high", 0), ("nan", 0), ("inf", 0),
])
def test_clamp_score(value, expected):
    assert clamp_score(value) == expected


@pytest.mark.unit
def test_skill_extractor_returns_empty_categories_on_failure():
    extractor = JobSkillExtractor(client=StubClient(CollaboratorError("down")))
    assert extractor.extract("Engineer", "Acme", "desc") == empty_extraction()


@pytest.mark.unit
def test_skill_extractor_maps_categories():
    extractor = JobSkillExtractor(client=StubClient({
        "requiredSkills": ["Go", 3],
        "preferredSkills": ["Rust"],
        "experienceLevel": "wizard",
        "yearsOfExperience": 4,
    }))
    result = extractor.extract("Engineer", "Acme", "desc")
    assert result["required_skills"] == ["Go"]
    assert result["preferred_skills"] == ["Rust"]
    assert result["tools"] == []
    assert result["experience_level"] is None
    assert result["years_of_experience"] == 4


# ----- job search -----

@pytest.mark.unit
def test_search_without_key_returns_nothing(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("no request expected")

    monkeypatch.setattr(job_search.httpx, "get", fail)
    assert JobSearchClient(api_key="").search(["Go"]) == []
    assert JobSearchClient(api_key="key").search([]) == []


@pytest.mark.unit
def test_search_normalizes_results(monkeypatch):
    payload = {"jobs_results": [{
        "title": "Backend Engineer",
        "company_name": "Acme",
        "location": "Remote",
        "description": "Go services",
        "via": "LinkedIn",
        "apply_options": [{"link": "https://apply/1"}],
        "detected_extensions": {"posted_at": "2 days ago", "salary": "$100K-$120K"},
    }]}
    calls = []

    def fake_get(url, params=None, timeout=None):
        calls.append(params)
        return httpx.Response(200, json=payload, request=httpx.Request("GET", url))

    monkeypatch.setattr(job_search.httpx, "get", fake_get)
    jobs = JobSearchClient(api_key="key").search(["Go", "SQL"])

    assert calls[0]["q"] == build_query(["Go", "SQL"])
    assert jobs == [{
        "title": "Backend Engineer",
        "company": "Acme",
        "location": "Remote",
        "description": "Go services",
        "url": "https://apply/1",
        "posted_date": date.today() - timedelta(days=2),
        "salary": "$100K-$120K",
        "source": "LinkedIn",
    }]


@pytest.mark.unit
@pytest.mark.parametrize("text,expected", [
    ("2 days ago", date(2025, 3, 8)),
    ("30+ days ago", date(2025, 2, 8)),
    ("1 week ago", date(2025, 3, 3)),
    ("5 hours ago", date(2025, 3, 10)),
    ("Today", date(2025, 3, 10)),
    ("Full-time", None),
    (None, None),
])
def test_parse_posted_date(text, expected):
    assert parse_posted_date(text, today=date(2025, 3, 10)) == expected


@pytest.mark.unit
def test_search_failure_returns_nothing(monkeypatch):
    def fake_get(url, params=None, timeout=None):
        return httpx.Response(503, request=httpx.Request("GET", url))

    monkeypatch.setattr(job_search.httpx, "get", fake_get)
    assert JobSearchClient(api_key="key").search(["Go"]) == []


# ----- interview research -----

@pytest.mark.unit
def test_normalize_question_defaults_and_aliases():
    question = normalize_question({
        "question": "  Explain goroutines  ",
        "type": "System_Design",
        "difficulty": "brutal",
        "modelAnswer": "Lightweight threads",
        "keyPoints": ["scheduler"],
        "timeEstimate": 5,
    })
    assert question["question"] == "Explain goroutines"
    assert question["type"] == "system design"
    assert question["difficulty"] == "medium"
    assert question["model_answer"] == "Lightweight threads"
    assert question["key_points"] == ["scheduler"]
    assert question["time_estimate"] == 5
    assert normalize_question({"question": "   "}) is None


@pytest.mark.unit
def test_researcher_uses_placeholders_when_research_fails():
    client = StubClient(
        CollaboratorError("down"),
        {"questions": [{"question": "Why Acme?", "type": "behavioral"}, {"nope": 1}]},
    )
    generated = InterviewResearcher(client=client).generate("Acme", "Engineer", ["Go"])
    assert generated.company_info == COMPANY_INFO_UNAVAILABLE
    assert [q["question"] for q in generated.questions] == ["Why Acme?"]
    assert generated.ai_model == "stub-model"


@pytest.mark.unit
def test_researcher_raises_without_questions():
    client = StubClient({"companyInfo": "info"}, {"questions": []})
    with pytest.raises(CollaboratorError):
        InterviewResearcher(client=client).generate("Acme", "Engineer", ["Go"])


# ----- storage -----

@pytest.mark.unit
def test_storage_round_trip_and_path_rejection(tmp_path):
    storage = StorageService(upload_dir=str(tmp_path))

    file_id = asyncio.run(storage.save_file(b"%PDF", "resume.pdf"))
    assert asyncio.run(storage.read_file(file_id)) == b"%PDF"
    info = asyncio.run(storage.get_file_info(file_id))
    assert info["filename"] == "resume.pdf"
    assert info["length"] == 4

    for bad in ("../secret", ".hidden", "a/b", ""):
        with pytest.raises(NotFoundError):
            asyncio.run(storage.read_file(bad))

    assert asyncio.run(storage.delete_file(file_id)) is True
    with pytest.raises(NotFoundError):
        asyncio.run(storage.delete_file(file_id))


@pytest.mark.unit
def test_stub_namespace_client_is_enough_for_matcher():
    client = SimpleNamespace(generate_json=lambda prompt, system_prompt=None: {"matchScore": "88"})
    assert JobMatcher(client=client).match_job({"title": "A"}, ["Go"]).score == 88


@pytest.mark.unit
def test_client_rejects_reply_without_choices():
    client = OpenAIClient(api_key="sk-test")
    client.client = SimpleNamespace(
        chat=SimpleNamespace(completions=SimpleNamespace(create=lambda **kwargs: SimpleNamespace(choices=[])))
    )
    with pytest.raises(CollaboratorError):
        client.generate_json("prompt")


@pytest.mark.unit
def test_research_fields_are_flattened_to_text():
    client = StubClient({"companyInfo": {"overview": "Builds rockets"}, "roleRequirements": ["Go", None, "SQL"]})
    research = InterviewResearcher(client=client).research_company("Acme", "Engineer")
    assert research == {"company_info": "overview: Builds rockets", "role_requirements": "Go\nSQL"}
