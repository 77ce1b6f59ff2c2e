"""Tests for the GraphQL client and the job fetcher."""
from __future__ import annotations

import pytest
import requests

from apply_portal.errors import ServiceError, TransportError
from apply_portal.graphql import SECRET_HEADER, GraphQLClient
from apply_portal.jobs import COMPANY_TABLE, JOB_TABLE, JobFetcher
from apply_portal.models import DEFAULT_COMPANY_NAME

from conftest import FakeSession, graphql_reply, make_response

ENDPOINT = "https://graphql.example/v1/graphql"


def _fetcher(session: FakeSession, secret: str = "s3cret") -> JobFetcher:
    return JobFetcher(GraphQLClient(ENDPOINT, secret, session=session))


# ── GraphQLClient ────────────────────────────────────────────────────────


def test_execute_posts_query_with_secret() -> None:
    session = FakeSession(graphql_reply({"thing": 1}))
    client = GraphQLClient(ENDPOINT, "s3cret", session=session, timeout=5)

    assert client.execute("query { thing }", {"a": 1}) == {"thing": 1}

    call = session.calls[0]
    assert call["url"] == ENDPOINT
    assert call["json"] == {"query": "query { thing }", "variables": {"a": 1}}
    assert call["headers"][SECRET_HEADER] == "s3cret"
    assert call["timeout"] == 5


def test_execute_omits_empty_secret() -> None:
    session = FakeSession(graphql_reply({"thing": 1}))
    GraphQLClient(ENDPOINT, "", session=session).execute("query { thing }")
    assert SECRET_HEADER not in session.calls[0]["headers"]


def test_http_failure_is_transport_error() -> None:
    session = FakeSession(make_response(502, text="bad gateway"))
    with pytest.raises(TransportError, match="status: 502") as exc_info:
        GraphQLClient(ENDPOINT, session=session).execute("query { thing }")
    assert exc_info.value.status_code == 502


def test_connection_failure_is_transport_error() -> None:
    session = FakeSession(requests.ConnectionError("refused"))
    with pytest.raises(TransportError):
        GraphQLClient(ENDPOINT, session=session).execute("query { thing }")


def test_errors_array_is_service_error() -> None:
    session = FakeSession(make_response(200, {"errors": [{"message": "field not found"}]}))
    with pytest.raises(ServiceError, match="field not found"):
        GraphQLClient(ENDPOINT, session=session).execute("query { thing }")


@pytest.mark.parametrize("errors", [[], {"message": "denied"}, ["denied"]])
def test_malformed_errors_are_service_errors(errors) -> None:
    session = FakeSession(make_response(200, {"errors": errors, "data": {"thing": 1}}))
    with pytest.raises(ServiceError, match="GraphQL Error"):
        GraphQLClient(ENDPOINT, session=session).execute("query { thing }")


def test_non_object_data_is_service_error() -> None:
    session = FakeSession(make_response(200, {"data": ["thing"]}))
    with pytest.raises(ServiceError, match="shape"):
        GraphQLClient(ENDPOINT, session=session).execute("query { thing }")


def test_missing_data_is_service_error() -> None:
    session = FakeSession(make_response(200, {}))
    with pytest.raises(ServiceError, match="No data"):
        GraphQLClient(ENDPOINT, session=session).execute("query { thing }")


# ── JobFetcher ───────────────────────────────────────────────────────────


def test_job_merged_with_company(job_record) -> None:
    session = FakeSession(
        graphql_reply({JOB_TABLE: job_record}),
        graphql_reply({COMPANY_TABLE: [{"name": "Acme", "website": "acme.com"}]}),
    )

    job = _fetcher(session).fetch_job("abc-123")

    assert job is not None
    assert job.id == "abc-123"
    assert job.client_id == "c-1"
    assert job.company_name == "Acme"
    assert job.company_website == "acme.com"
    assert job.job_description == "Build APIs."
    assert (job.min_ctc, job.max_ctc) == (1200000, 1800000)
    assert (job.min_experience, job.max_experience) == (2, 5)
    assert job.number_of_openings == 3
    assert job.status == "active"

    assert session.calls[0]["json"]["variables"] == {"jobId": "abc-123"}
    assert session.calls[1]["json"]["variables"] == {"clientId": "c-1"}
    assert "limit: 1" in session.calls[1]["json"]["query"]


def test_missing_job_returns_none() -> None:
    session = FakeSession(graphql_reply({JOB_TABLE: None}))
    assert _fetcher(session).fetch_job("missing-1") is None
    assert len(session.calls) == 1


def test_no_client_id_skips_company_lookup(job_record) -> None:
    job_record["client_id"] = None
    session = FakeSession(graphql_reply({JOB_TABLE: job_record}))

    job = _fetcher(session).fetch_job("abc-123")

    assert job.company_name == DEFAULT_COMPANY_NAME
    assert job.company_website == ""
    assert len(session.calls) == 1


@pytest.mark.parametrize(
    "company_reply",
    [
        make_response(500, text="boom"),
        requests.Timeout("slow"),
        make_response(200, {"errors": [{"message": "permission denied"}]}),
        make_response(200, {"errors": {"message": "denied"}}),
        graphql_reply({COMPANY_TABLE: {"name": "Acme"}}),
        graphql_reply({COMPANY_TABLE: ["Acme"]}),
    ],
)
def test_company_lookup_failure_falls_back(job_record, company_reply) -> None:
    session = FakeSession(graphql_reply({JOB_TABLE: job_record}), company_reply)

    job = _fetcher(session).fetch_job("abc-123")

    assert job is not None
    assert job.company_name == DEFAULT_COMPANY_NAME
    assert job.company_website == ""


def test_empty_company_rows_fall_back(job_record) -> None:
    session = FakeSession(
        graphql_reply({JOB_TABLE: job_record}),
        graphql_reply({COMPANY_TABLE: []}),
    )
    job = _fetcher(session).fetch_job("abc-123")
    assert job.company_name == DEFAULT_COMPANY_NAME


def test_company_row_with_blank_fields(job_record) -> None:
    session = FakeSession(
        graphql_reply({JOB_TABLE: job_record}),
        graphql_reply({COMPANY_TABLE: [{"name": None, "website": None}]}),
    )
    job = _fetcher(session).fetch_job("abc-123")
    assert (job.company_name, job.company_website) == (DEFAULT_COMPANY_NAME, "")


def test_lookup_company_returns_none_on_failure() -> None:
    session = FakeSession(make_response(503, text="down"))
    assert _fetcher(session).lookup_company("c-1") is None


def test_primary_lookup_failure_propagates() -> None:
    with pytest.raises(TransportError):
        _fetcher(FakeSession(make_response(500, text="oops"))).fetch_job("abc-123")
    with pytest.raises(ServiceError):
        _fetcher(FakeSession(make_response(200, {"errors": [{}]}))).fetch_job("abc-123")
