"""Minimal GraphQL-over-HTTP client for the jobs backend (Hasura)."""
from __future__ import annotations

from typing import Any

import requests

from apply_portal.errors import ServiceError, TransportError
from apply_portal.log import get_logger

log = get_logger(__name__)

SECRET_HEADER = "x-hasura-admin-secret"


class GraphQLClient:
    def __init__(
        self,
        endpoint: str,
        admin_secret: str = "",
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.admin_secret = admin_secret
        self.session = session or requests.Session()
        self.timeout = timeout

    def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run ``query`` and return its ``data`` object.

        Raises :class:`TransportError` when the request does not complete or
        the status is not 2xx, and :class:`ServiceError` when the backend
        reports errors or returns no data.
        """
        headers = {"Content-Type": "application/json"}
        if self.admin_secret:
            headers[SECRET_HEADER] = self.admin_secret

        try:
            r = self.session.post(
                self.endpoint,
                json={"query": query, "variables": variables or {}},
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"GraphQL request failed: {exc}") from exc

        if not r.ok:
            raise TransportError(f"HTTP error! status: {r.status_code}", status_code=r.status_code)

        try:
            result = r.json()
        except ValueError as exc:
            raise ServiceError("GraphQL endpoint returned invalid JSON") from exc
        if not isinstance(result, dict):
            raise ServiceError("Unexpected GraphQL response shape")

        errors = result.get("errors")
        if errors is not None:
            first = errors[0] if isinstance(errors, list) and errors else {}
            if not isinstance(first, dict):
                first = {}
            message = first.get("message") or "GraphQL Error"
            log.debug("GraphQL errors: %s", errors)
            raise ServiceError(message)

        data = result.get("data")
        if not data:
            raise ServiceError("No data returned from GraphQL")
        if not isinstance(data, dict):
            raise ServiceError("Unexpected GraphQL response shape")
        return data
