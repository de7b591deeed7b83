"""
Job search client (SerpAPI google_jobs)

Returns plain dicts: {"title", "company", "location", "description", "url",
"posted_date", "salary", "source"}, with posted_date a date or None. An empty
list is a valid outcome; transport and configuration problems are logged and
also yield an empty list.
"""
import re
from datetime import date, timedelta
from typing import List, Dict, Any, Optional

import httpx

from careerprep.core.config import settings
from careerprep.core.logging import logger


_AGE_RE = re.compile(r"(\d+)\+?\s*(minute|hour|day|week|month)s?\s+ago", re.IGNORECASE)
_AGE_DAYS = {"minute": 0, "hour": 0, "day": 1, "week": 7, "month": 30}


def parse_posted_date(text: Optional[str], today: Optional[date] = None) -> Optional[date]:
    """
    Turn a relative age such as "3 days ago" or "30+ days ago" into a date

    Returns None for anything that is not a recognizable age.
    """
    if not text:
        return None
    today = today or date.today()
    if text.strip().lower() in ("today", "just posted"):
        return today
    match = _AGE_RE.search(text)
    if not match:
        return None
    return today - timedelta(days=int(match.group(1)) * _AGE_DAYS[match.group(2).lower()])


def build_query(skills: List[str]) -> str:
    top_skills = " ".join(skills[:8])
    return f'{top_skills} job OR internship OR "software engineer"'


def _normalize_result(job: Dict[str, Any]) -> Dict[str, Any]:
    apply_options = job.get("apply_options") or []
    related_links = job.get("related_links") or []
    url = None
    if apply_options and isinstance(apply_options[0], dict):
        url = apply_options[0].get("link")
    if not url and related_links and isinstance(related_links[0], dict):
        url = related_links[0].get("link")

    extensions = job.get("detected_extensions") or {}
    return {
        "title": job.get("title") or "Unknown",
        "company": job.get("company_name") or "Unknown",
        "location": job.get("location") or "Unknown",
        "description": job.get("description") or "",
        "url": url or "#",
        "posted_date": parse_posted_date(extensions.get("posted_at")),
        "salary": extensions.get("salary"),
        "source": job.get("via") or "SerpAPI",
    }


class JobSearchClient:
    """Searches job postings for a skill list"""

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None):
        self.api_key = api_key if api_key is not None else settings.SERPAPI_KEY
        self.timeout = timeout or settings.JOB_SEARCH_TIMEOUT

    def search(self, skills: List[str]) -> List[Dict[str, Any]]:
        if not skills:
            return []
        if not self.api_key:
            logger.warning("SERPAPI_KEY not configured. Job search disabled.")
            return []

        params = {
            "engine": "google_jobs",
            "q": build_query(skills),
            "location": settings.SERPAPI_LOCATION,
            "api_key": self.api_key,
        }
        try:
            response = httpx.get(settings.SERPAPI_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Job search failed: {e}")
            return []

        results = payload.get("jobs_results") or []
        jobs = [_normalize_result(job) for job in results if isinstance(job, dict)]
        logger.info(f"Job search returned {len(jobs)} postings")
        return jobs
