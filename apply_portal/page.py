"""Page controller: load a job, validate the form, submit, report the outcome."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from apply_portal.config import Settings
from apply_portal.errors import PortalError
from apply_portal.graphql import GraphQLClient
from apply_portal.ingestion import ApplicationSubmitter
from apply_portal.jobs import JobFetcher
from apply_portal.log import get_logger
from apply_portal.models import ApplicationForm, Job, ResumeFile
from apply_portal.routing import NOT_FOUND_MESSAGE
from apply_portal.validation import MODAL_FORM, ValidationProfile, validate

log = get_logger(__name__)


@dataclass(frozen=True)
class Notice:
    """A transient toast shown after a submit attempt."""

    kind: str  # "success" | "error"
    message: str


@dataclass
class PageState:
    job: Job | None = None
    error: str | None = None

    @property
    def not_found(self) -> bool:
        return self.job is None


class JobApplicationPage:
    def __init__(self, fetcher: JobFetcher, submitter: ApplicationSubmitter) -> None:
        self.fetcher = fetcher
        self.submitter = submitter
        self.state = PageState()
        self.submitting = False
        self.has_applied = False
        self.form_error: str | None = None
        self.reset_form = False
        self.last_result: dict[str, Any] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> JobApplicationPage:
        client = GraphQLClient(
            settings.graphql_endpoint,
            settings.graphql_admin_secret,
            timeout=settings.request_timeout,
        )
        submitter = ApplicationSubmitter(
            settings.ingestion_service_url,
            timeout=settings.request_timeout,
        )
        return cls(JobFetcher(client), submitter)

    def load(self, job_id: str | None) -> PageState:
        if not job_id:
            self.state = PageState(error=NOT_FOUND_MESSAGE)
            return self.state

        try:
            job = self.fetcher.fetch_job(job_id)
        except PortalError as exc:
            log.error("Error loading job %s: %s", job_id, exc)
            self.state = PageState(error=str(exc) or "Failed to load job")
            return self.state

        if job is None:
            self.state = PageState(error=NOT_FOUND_MESSAGE)
        else:
            self.state = PageState(job=job)
        return self.state

    def claim(self) -> bool:
        """Mark a submission as pending before it is sent.

        The UI calls this from the click handler so the submit control is
        already disabled when the request goes out. Returns ``False`` (and
        changes nothing) when a submission is pending or no job is loaded.
        """
        if self.state.job is None or self.submitting:
            return False
        self.submitting = True
        return True

    def submit(
        self,
        form: ApplicationForm,
        resume: ResumeFile | None,
        profile: ValidationProfile = MODAL_FORM,
        *,
        claimed: bool = False,
    ) -> Notice | None:
        """Validate and send one application.

        Pass ``claimed=True`` when :meth:`claim` already succeeded for this
        attempt. Returns ``None`` without doing anything while another
        submission is pending, when the claim is missing, or when no job is
        loaded. The pending flag is cleared once the outcome is known.
        """
        if claimed:
            if not self.submitting or self.state.job is None:
                return None
        elif not self.claim():
            return None
        job = self.state.job

        try:
            self.form_error = validate(form, resume, profile)
            self.reset_form = False
            if self.form_error is not None:
                return Notice("error", self.form_error)

            self.state.error = None
            try:
                self.last_result = self.submitter.submit(job.id, job.client_id, form, resume)
            except PortalError as exc:
                log.error("Error submitting application for job %s: %s", job.id, exc)
                message = str(exc) or "Failed to submit application"
                self.state.error = message
                return Notice("error", message)
        finally:
            self.submitting = False

        self.has_applied = True
        self.reset_form = profile.reset_on_success
        return Notice(
            "success",
            f"Application submitted successfully for {job.job_role}! We'll be in touch soon.",
        )
