"""The portal has one route: ``/<job_id>``. Anything else is "not found"."""
from __future__ import annotations

from urllib.parse import unquote

NOT_FOUND_MESSAGE = "Job not found"


def resolve_job_id(path: str | None) -> str | None:
    if not path:
        return None
    segment = path.strip()
    if segment.startswith("/"):
        segment = segment[1:]
    segment = segment.rstrip("/")
    if not segment or "/" in segment:
        return None
    return unquote(segment).strip() or None
