"""Load portal settings from defaults, an optional YAML file and the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable

import yaml
from dotenv import load_dotenv

from apply_portal.log import get_logger

log = get_logger(__name__)

CONFIG_DIR: Path = Path(__file__).resolve().parent.parent / "config"
SETTINGS_PATH: Path = CONFIG_DIR / "settings.yaml"

DEFAULT_GRAPHQL_ENDPOINT = "https://arc.vocallabs.ai/v1/graphql"
DEFAULT_INGESTION_SERVICE_URL = "https://campaign.vocallabs.ai"

# env var -> Settings field
_ENV_KEYS: dict[str, str] = {
    "GRAPHQL_ENDPOINT": "graphql_endpoint",
    "GRAPHQL_ADMIN_SECRET": "graphql_admin_secret",
    "INGESTION_SERVICE_URL": "ingestion_service_url",
    "REQUEST_TIMEOUT": "request_timeout",
}


@dataclass(frozen=True)
class Settings:
    """Endpoints and secrets, resolved once at start-up and passed around."""

    graphql_endpoint: str = DEFAULT_GRAPHQL_ENDPOINT
    graphql_admin_secret: str = ""
    ingestion_service_url: str = DEFAULT_INGESTION_SERVICE_URL
    request_timeout: float | None = None


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _parse_timeout(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        log.warning("Ignoring invalid request timeout %r", value)
        return None
    return timeout if timeout > 0 else None


def _coerce(field_name: str, value: Any) -> Any:
    if field_name == "request_timeout":
        return _parse_timeout(value)
    return str(value).strip()


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        log.warning("%s is not a mapping, ignoring it", path.name)
        return {}
    return data


def load_settings(
    path: Path | None = None,
    env_getter: Callable[[str], str] = get_env,
    *,
    use_dotenv: bool = True,
) -> Settings:
    """Build :class:`Settings`: defaults, then ``settings.yaml``, then env vars."""
    if use_dotenv:
        load_dotenv()

    settings = Settings()
    known = set(_ENV_KEYS.values())

    file_values = _load_yaml(path or SETTINGS_PATH)
    overrides: dict[str, Any] = {}
    for key, value in file_values.items():
        name = str(key).lower()
        if name not in known:
            log.warning("Unknown setting %r in %s", key, (path or SETTINGS_PATH).name)
            continue
        if value is not None:
            overrides[name] = _coerce(name, value)

    for env_key, name in _ENV_KEYS.items():
        value = env_getter(env_key)
        if value:
            overrides[name] = _coerce(name, value)

    settings = replace(settings, **overrides)
    log.debug(
        "Settings: graphql=%s ingestion=%s timeout=%s secret=%s",
        settings.graphql_endpoint,
        settings.ingestion_service_url,
        settings.request_timeout,
        "set" if settings.graphql_admin_secret else "unset",
    )
    return settings
