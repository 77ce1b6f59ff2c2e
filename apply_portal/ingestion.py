"""Submit candidate applications to the resume-ingestion service."""
from __future__ import annotations

import json
from typing import Any

import requests

from apply_portal.errors import ServiceError, SubmissionRejected, TransportError
from apply_portal.log import get_logger
from apply_portal.models import ApplicationForm, ResumeFile

log = get_logger(__name__)

INGESTION_PATH = "/hr_handler/process-single-resume"
RESUME_FIELD = "resume"
REQUEST_FIELD = "request"

_OPTIONAL_FIELDS = ("notice_period_days", "current_salary", "expected_salary")


def build_request_payload(job_id: str, client_id: str, form: ApplicationForm) -> dict[str, Any]:
    """Metadata sent alongside the resume; unset optional numbers are left out."""
    payload: dict[str, Any] = {
        "client_id": client_id,
        "job_id": job_id,
        "candidate_name": form.name,
        "candidate_email": form.email,
        "candidate_phone": form.phone or "",
        "cover_letter": "",
    }
    for name in _OPTIONAL_FIELDS:
        value = getattr(form, name)
        if value is not None:
            payload[name] = value
    return payload


class ApplicationSubmitter:
    def __init__(
        self,
        service_url: str,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self.service_url = service_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.service_url}{INGESTION_PATH}"

    def submit(
        self,
        job_id: str,
        client_id: str,
        form: ApplicationForm,
        resume: ResumeFile,
    ) -> dict[str, Any]:
        """POST one application and return the service's JSON reply untouched.

        Sends exactly one request. The multipart boundary (and so the
        Content-Type header) is left to ``requests``.
        """
        payload = build_request_payload(job_id, client_id, form)
        files = {
            RESUME_FIELD: (resume.filename, resume.data, resume.content_type),
            REQUEST_FIELD: (None, json.dumps(payload)),
        }
        log.info(
            "Submitting application job_id=%s client_id=%s candidate=%s <%s> → %s",
            job_id, client_id, form.name, form.email, self.endpoint,
        )

        try:
            r = self.session.post(self.endpoint, files=files, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"Failed to submit application: {exc}") from exc

        if not r.ok:
            log.warning("Ingestion rejected application for job %s: %d", job_id, r.status_code)
            raise SubmissionRejected(r.status_code, r.text)

        try:
            result = r.json()
        except ValueError as exc:
            raise ServiceError("Ingestion service returned invalid JSON") from exc

        log.info("Application submitted for job %s", job_id)
        return result
