"""Public job-application page: job lookup, form checks and resume submission."""

from .models import ApplicationForm, Company, Job, ResumeFile
from .page import JobApplicationPage, Notice, PageState

__all__ = [
    "ApplicationForm", "Company", "Job", "ResumeFile",
    "JobApplicationPage", "Notice", "PageState",
]
