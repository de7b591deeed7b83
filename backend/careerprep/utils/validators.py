"""
Validators
"""
import re
from typing import List, Optional


PHONE_RE = re.compile(r"^[\d\s\-+()]*$")
LINKEDIN_RE = re.compile(r"^https?://(www\.)?linkedin\.com/.*$")
GITHUB_RE = re.compile(r"^https?://(www\.)?github\.com/.*$")


def validate_phone(phone: Optional[str]) -> bool:
    """Digits, spaces, dashes, plus and parentheses only"""
    return not phone or bool(PHONE_RE.match(phone))


def validate_linkedin_url(url: Optional[str]) -> bool:
    return not url or bool(LINKEDIN_RE.match(url))


def validate_github_url(url: Optional[str]) -> bool:
    return not url or bool(GITHUB_RE.match(url))


def validate_mime_type(mime_type: Optional[str], allowed_types: List[str]) -> bool:
    return mime_type in allowed_types


def validate_file_size(file_size: int, max_size: int) -> bool:
    """Validate file size"""
    return 0 < file_size <= max_size
