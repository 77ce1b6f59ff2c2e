"""Pre-submission checks for the application forms.

Both forms run the same ordered rules and stop at the first failure, so the
candidate only ever sees one message. They differ only where noted on
:class:`ValidationProfile`. The messages are shown to the candidate verbatim.
"""
from __future__ import annotations

from dataclasses import dataclass

from apply_portal.errors import ValidationError
from apply_portal.models import ApplicationForm, ResumeFile

NAME_REQUIRED = "Please enter your name"
EMAIL_INVALID = "Please enter a valid email address"
PHONE_REQUIRED = "Please enter your phone number"
RESUME_REQUIRED = "Please upload your resume"
RESUME_TYPE_INVALID = "Please upload a PDF or Word document"
RESUME_TOO_LARGE = "File size must be less than 5MB"

ALLOWED_RESUME_TYPES: frozenset[str] = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
})
MAX_RESUME_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class ValidationProfile:
    name: str
    require_phone: bool
    reset_on_success: bool


# Page-embedded form: phone is optional.
INLINE_FORM = ValidationProfile("inline", require_phone=False, reset_on_success=False)
# Apply dialog: phone is required and fields clear after a successful submit.
MODAL_FORM = ValidationProfile("modal", require_phone=True, reset_on_success=True)


def validate(
    form: ApplicationForm,
    resume: ResumeFile | None,
    profile: ValidationProfile = INLINE_FORM,
) -> str | None:
    """Return the first violated rule's message, or ``None`` when valid."""
    if not form.name.strip():
        return NAME_REQUIRED
    if not form.email.strip() or "@" not in form.email:
        return EMAIL_INVALID
    if profile.require_phone and not form.phone.strip():
        return PHONE_REQUIRED
    if resume is None:
        return RESUME_REQUIRED
    if resume.content_type not in ALLOWED_RESUME_TYPES:
        return RESUME_TYPE_INVALID
    if resume.size > MAX_RESUME_BYTES:
        return RESUME_TOO_LARGE
    return None


def ensure_valid(
    form: ApplicationForm,
    resume: ResumeFile | None,
    profile: ValidationProfile = INLINE_FORM,
) -> None:
    message = validate(form, resume, profile)
    if message is not None:
        raise ValidationError(message)
