"""Data models for jobs, companies and candidate applications."""
from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

DEFAULT_COMPANY_NAME = "Company"

# Not every platform's mime table knows about .docx.
mimetypes.add_type(
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document", ".docx"
)


@dataclass(frozen=True)
class Company:
    name: str = DEFAULT_COMPANY_NAME
    website: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Company:
        return cls(
            name=row.get("name") or DEFAULT_COMPANY_NAME,
            website=row.get("website") or "",
        )


def _number(value: float | int | None) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value:,}"


@dataclass(frozen=True)
class Job:
    """A job posting merged with its company profile."""

    id: str
    client_id: str
    job_role: str
    job_description: str
    location: str
    work_mode: str
    ctc: str
    min_experience: float
    max_experience: float
    min_ctc: float | None = None
    max_ctc: float | None = None
    number_of_openings: int | None = None
    created_at: str | None = None
    status: str | None = None
    company_name: str = DEFAULT_COMPANY_NAME
    company_website: str = ""

    @classmethod
    def from_record(cls, record: Mapping[str, Any], company: Company | None = None) -> Job:
        company = company or Company()
        return cls(
            id=record["id"],
            client_id=record.get("client_id") or "",
            job_role=record.get("job_role") or "",
            job_description=record.get("description") or "",
            location=record.get("location") or "",
            work_mode=record.get("work_mode") or "",
            ctc=record.get("ctc") or "",
            min_experience=record.get("experience_minimum_needed"),
            max_experience=record.get("experience_maximum_needed"),
            min_ctc=record.get("ctc_minimum"),
            max_ctc=record.get("ctc_maximum"),
            number_of_openings=record.get("number_of_openings"),
            created_at=record.get("created_at"),
            status=record.get("status"),
            company_name=company.name,
            company_website=company.website,
        )

    def compensation_label(self) -> str:
        """Range from the numeric bounds when both are set, else the free-text label."""
        if self.min_ctc and self.max_ctc:
            return f"₹{_number(self.min_ctc)} - ₹{_number(self.max_ctc)}"
        return self.ctc

    def experience_label(self) -> str:
        return f"{_number(self.min_experience)} - {_number(self.max_experience)} years"

    def openings_label(self) -> str | None:
        if self.number_of_openings and self.number_of_openings > 1:
            return f"Hiring {self.number_of_openings} candidates for this position"
        return None

    def website_url(self) -> str | None:
        if not self.company_website:
            return None
        if self.company_website.startswith("http"):
            return self.company_website
        return f"https://{self.company_website}"

    def company_initial(self) -> str:
        return self.company_name[:1].upper() or "C"


@dataclass
class ApplicationForm:
    """Candidate-supplied fields; optional numbers stay ``None`` unless given."""

    name: str
    email: str
    phone: str = ""
    notice_period_days: int | None = None
    current_salary: float | None = None
    expected_salary: float | None = None


@dataclass(frozen=True)
class ResumeFile:
    """An uploaded resume. ``content_type`` is what the uploader declared."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: str | Path) -> ResumeFile:
        p = Path(path)
        content_type, _ = mimetypes.guess_type(p.name)
        return cls(
            filename=p.name,
            content_type=content_type or "application/octet-stream",
            data=p.read_bytes(),
        )
