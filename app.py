"""Streamlit page for applying to a single job posting.

Run with ``streamlit run app.py`` and open ``/?job=<job id>``.
"""
from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from apply_portal.config import load_settings
from apply_portal.log import get_logger
from apply_portal.models import ApplicationForm, Job, ResumeFile
from apply_portal.page import JobApplicationPage, Notice
from apply_portal.routing import NOT_FOUND_MESSAGE, resolve_job_id
from apply_portal.validation import INLINE_FORM, MODAL_FORM, ValidationProfile

log = get_logger(__name__)

# ── Constants ────────────────────────────────────────────────────────────

RESUME_EXTENSIONS: list[str] = ["pdf", "doc", "docx"]

_PAGE_CSS = """
<style>
[data-testid="stAppViewContainer"] {
    background: #f9fafb;
}
.company-badge {
    width: 3.5rem; height: 3.5rem; border-radius: 10px;
    background: linear-gradient(135deg, #2563eb 0%, #1d4ed8 100%);
    color: white; font-weight: 600; font-size: 1.25rem;
    display: flex; align-items: center; justify-content: center;
}
.openings-banner {
    padding: 0.5rem 0.75rem; background: rgba(37,99,235,0.08);
    border-left: 3px solid #2563eb; border-radius: 6px;
    font-size: 0.9rem; color: #1e3a8a;
}
</style>
"""

# ── Helpers ──────────────────────────────────────────────────────────────


def _page() -> JobApplicationPage:
    """One controller per browser session, built from settings on first use."""
    if "page" not in st.session_state:
        st.session_state["page"] = JobApplicationPage.from_settings(load_settings())
    return st.session_state["page"]


def _resume_from_upload(uploaded) -> ResumeFile | None:
    if uploaded is None:
        return None
    return ResumeFile(
        filename=uploaded.name,
        content_type=uploaded.type or "",
        data=uploaded.getvalue(),
    )


def _optional_int(raw: str) -> int | None:
    raw = raw.strip()
    return int(raw) if raw.isdigit() else None


def _optional_float(raw: str) -> float | None:
    raw = raw.strip().replace(",", "")
    try:
        return float(raw) if raw else None
    except ValueError:
        return None


def _clear_form(prefix: str) -> None:
    for key in list(st.session_state.keys()):
        if str(key).startswith(prefix):
            del st.session_state[key]


def _show_notice() -> None:
    notice: Notice | None = st.session_state.pop("notice", None)
    if notice is None:
        return
    st.toast(notice.message, icon="✅" if notice.kind == "success" else "⚠️")


# ── Form ─────────────────────────────────────────────────────────────────


def _claim(page: JobApplicationPage, prefix: str) -> None:
    """Submit-button callback: runs before the rerun that sends the form."""
    if page.claim():
        st.session_state[f"{prefix}claimed"] = True


def _application_form(
    page: JobApplicationPage,
    profile: ValidationProfile,
    prefix: str,
    rerun_scope: str = "app",
) -> None:
    outcome: Notice | None = st.session_state.pop(f"{prefix}outcome", None)
    if outcome is not None:
        st.error(outcome.message)
        if page.form_error is None:
            st.toast(outcome.message, icon="⚠️")

    with st.form(f"{prefix}form"):
        name = st.text_input("Full name *", key=f"{prefix}name")
        email = st.text_input("Email *", key=f"{prefix}email")
        phone_label = "Phone *" if profile.require_phone else "Phone"
        phone = st.text_input(phone_label, key=f"{prefix}phone")

        c1, c2, c3 = st.columns(3)
        notice_days = c1.text_input("Notice period (days)", key=f"{prefix}notice")
        current = c2.text_input("Current salary", key=f"{prefix}current")
        expected = c3.text_input("Expected salary", key=f"{prefix}expected")

        uploaded = st.file_uploader(
            "Resume * (PDF or Word, max 5MB)",
            type=RESUME_EXTENSIONS,
            key=f"{prefix}resume",
        )
        # page.submitting is already set by _claim when this run sends the form
        st.form_submit_button(
            "Submitting…" if page.submitting else "Submit Application",
            type="primary",
            use_container_width=True,
            disabled=page.submitting or page.has_applied,
            on_click=_claim,
            args=(page, prefix),
        )

    if not st.session_state.pop(f"{prefix}claimed", False):
        return

    form = ApplicationForm(
        name=name,
        email=email,
        phone=phone,
        notice_period_days=_optional_int(notice_days),
        current_salary=_optional_float(current),
        expected_salary=_optional_float(expected),
    )
    with st.spinner("Submitting your application…"):
        notice = page.submit(form, _resume_from_upload(uploaded), profile, claimed=True)
    if notice is None:
        return

    if notice.kind == "success":
        if page.reset_form:
            _clear_form(prefix)
        st.session_state["notice"] = notice
        st.rerun()
    else:
        # redraw with the button enabled again and the fields kept
        st.session_state[f"{prefix}outcome"] = notice
        st.rerun(scope=rerun_scope)


@st.dialog("Apply for this job")
def _apply_dialog() -> None:
    page = _page()
    if page.state.job is not None:
        st.caption(page.state.job.job_role)
    _application_form(page, MODAL_FORM, "modal_", rerun_scope="fragment")


# ── Job details ──────────────────────────────────────────────────────────


def _job_header(job: Job) -> None:
    c1, c2 = st.columns([1, 12])
    with c1:
        st.markdown(f'<div class="company-badge">{job.company_initial()}</div>', unsafe_allow_html=True)
    with c2:
        st.subheader(job.company_name)
        website = job.website_url()
        if website:
            st.markdown(f"[Visit company website]({website})")

    st.title(job.job_role)

    c1, c2 = st.columns(2)
    c1.metric("Location", job.location or "—")
    c2.metric("Work mode", (job.work_mode or "—").capitalize())
    c1.metric("Compensation", job.compensation_label() or "—")
    c2.metric("Experience", job.experience_label())

    openings = job.openings_label()
    if openings:
        st.markdown(f'<div class="openings-banner">{openings}</div>', unsafe_allow_html=True)


def page_job() -> None:
    st.markdown(_PAGE_CSS, unsafe_allow_html=True)
    page = _page()

    job_id = resolve_job_id(st.query_params.get("job", ""))
    # one fetch per page load, not per rerun
    if "loaded_job_id" not in st.session_state or st.session_state["loaded_job_id"] != job_id:
        log.info("Loading job page for %r", job_id)
        with st.spinner("Loading job…"):
            page.load(job_id)
        st.session_state["loaded_job_id"] = job_id

    state = page.state
    if state.job is None:
        st.header("404")
        st.error(state.error or NOT_FOUND_MESSAGE)
        return

    job = state.job
    _job_header(job)

    if st.button(
        "Applied ✓" if page.has_applied else "Apply Now",
        type="primary",
        use_container_width=True,
        disabled=page.has_applied,
    ):
        _apply_dialog()

    st.divider()
    st.subheader("Job Description")
    st.markdown(job.job_description or "_No description provided._")

    if not page.has_applied:
        st.divider()
        st.subheader("Quick apply")
        _application_form(page, INLINE_FORM, "inline_")

    _show_notice()


page_job()
