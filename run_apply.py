#!/usr/bin/env python3
"""Apply to a job from the command line with a resume file on disk."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from apply_portal.config import load_settings
from apply_portal.errors import PortalError, ValidationError
from apply_portal.log import configure, get_logger
from apply_portal.models import ApplicationForm, ResumeFile
from apply_portal.page import JobApplicationPage
from apply_portal.routing import NOT_FOUND_MESSAGE
from apply_portal.validation import INLINE_FORM, MODAL_FORM, ensure_valid

log = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Submit a job application with a resume.")
    parser.add_argument("job_id", help="Job identifier")
    parser.add_argument("--name", required=True, help="Candidate full name")
    parser.add_argument("--email", required=True, help="Candidate email")
    parser.add_argument("--phone", default="", help="Candidate phone number")
    parser.add_argument("--resume", type=Path, required=True, help="PDF, DOC or DOCX file")
    parser.add_argument("--notice-period-days", type=int, default=None)
    parser.add_argument("--current-salary", type=float, default=None)
    parser.add_argument("--expected-salary", type=float, default=None)
    parser.add_argument(
        "--require-phone", action="store_true",
        help="Apply the stricter dialog rules (phone required)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        configure(logging.DEBUG)

    page = JobApplicationPage.from_settings(load_settings())

    try:
        job = page.fetcher.fetch_job(args.job_id)
    except PortalError as exc:
        log.error("Could not load job %s: %s", args.job_id, exc)
        return 2
    if job is None:
        log.error(NOT_FOUND_MESSAGE)
        return 1
    log.info("Applying to %s at %s", job.job_role, job.company_name)

    form = ApplicationForm(
        name=args.name,
        email=args.email,
        phone=args.phone,
        notice_period_days=args.notice_period_days,
        current_salary=args.current_salary,
        expected_salary=args.expected_salary,
    )
    resume = ResumeFile.from_path(args.resume) if args.resume.is_file() else None
    profile = MODAL_FORM if args.require_phone else INLINE_FORM

    try:
        ensure_valid(form, resume, profile)
    except ValidationError as exc:
        log.error("%s", exc)
        return 1

    try:
        result = page.submitter.submit(job.id, job.client_id, form, resume)
    except PortalError as exc:
        log.error("%s", exc)
        return 2

    log.info("Application submitted successfully for %s", job.job_role)
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
