"""Fetch a job posting and enrich it with the hiring company's profile."""
from __future__ import annotations

from typing import Mapping

from apply_portal.errors import ServiceError, TransportError
from apply_portal.graphql import GraphQLClient
from apply_portal.log import get_logger
from apply_portal.models import Company, Job

log = get_logger(__name__)

JOB_TABLE = "vocallabs_hr2_posts_by_pk"
COMPANY_TABLE = "vocallabs_hr2_company"

JOB_QUERY = f"""
query GetJobById($jobId: uuid!) {{
  {JOB_TABLE}(id: $jobId) {{
    id
    client_id
    job_role
    description
    location
    ctc
    ctc_minimum
    ctc_maximum
    experience_minimum_needed
    experience_maximum_needed
    work_mode
    number_of_openings
    created_at
    status
  }}
}}
"""

COMPANY_QUERY = f"""
query GetCompanyInfo($clientId: uuid!) {{
  {COMPANY_TABLE}(where: {{client_id: {{_eq: $clientId}}}}, limit: 1) {{
    name
    website
  }}
}}
"""


class JobFetcher:
    def __init__(self, client: GraphQLClient) -> None:
        self.client = client

    def fetch_job(self, job_id: str) -> Job | None:
        """Return the job for ``job_id``, or ``None`` when it has no record.

        Transport and service failures of the job lookup propagate; the
        company lookup never fails the call (see :meth:`lookup_company`).
        """
        data = self.client.execute(JOB_QUERY, {"jobId": job_id})
        record = data.get(JOB_TABLE)
        if not record:
            log.info("Job %s not found", job_id)
            return None
        if not isinstance(record, Mapping):
            raise ServiceError("Unexpected job record shape")

        company: Company | None = None
        client_id = record.get("client_id")
        if client_id:
            company = self.lookup_company(client_id)

        job = Job.from_record(record, company)
        log.debug("Loaded job %s (%s @ %s)", job.id, job.job_role, job.company_name)
        return job

    def lookup_company(self, client_id: str) -> Company | None:
        """Best-effort company profile for ``client_id``.

        ``None`` means "use the defaults": either no profile exists or the
        lookup failed, in which case the failure is only logged.
        """
        try:
            data = self.client.execute(COMPANY_QUERY, {"clientId": client_id})
        except (TransportError, ServiceError) as exc:
            log.warning("Could not fetch company info for %s: %s", client_id, exc)
            return None

        rows = data.get(COMPANY_TABLE)
        if not rows:
            log.debug("No company profile for client %s", client_id)
            return None
        if not isinstance(rows, list) or not isinstance(rows[0], Mapping):
            log.warning("Unexpected company info for %s: %r", client_id, rows)
            return None
        return Company.from_row(rows[0])
