"""
SQLAlchemy Models
"""
from careerprep.models.user import User
from careerprep.models.resume import Resume
from careerprep.models.job_match import JobMatch
from careerprep.models.interview_prep import InterviewPrep

__all__ = [
    "User",
    "Resume",
    "JobMatch",
    "InterviewPrep",
]
