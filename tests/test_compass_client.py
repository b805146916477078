"""Tests for compass_provider.compass_client.CompassGraphQLClient.

All tests mock requests.post so no real HTTP calls are made.
Covers request construction, both auth schemes, error mapping for the
envelope, and tenant -> cloud id resolution.
"""

import base64
from unittest.mock import patch

import pytest
import requests

from compass_provider.compass_client import CompassGraphQLClient, normalize_tenant_host
from compass_provider.errors import (
    GraphQLError,
    HTTPError,
    NotFoundError,
    TransportError,
    ValidationError,
)

from fake_compass import make_response

POST = "compass_provider.compass_client.requests.post"


def _client(**kwargs):
    params = {
        "base_url": "https://api.example.com/",
        "api_token": "tok",
        "email": "me@example.com",
    }
    params.update(kwargs)
    return CompassGraphQLClient(**params)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def test_constructor_requires_token():
    with pytest.raises(ValidationError):
        _client(api_token="")


def test_constructor_requires_email_for_basic():
    with pytest.raises(ValidationError):
        _client(email="")


def test_constructor_bearer_does_not_need_email():
    client = _client(email="", auth_scheme="bearer")
    assert client.auth_scheme == "bearer"


def test_constructor_rejects_unknown_scheme():
    with pytest.raises(ValidationError):
        _client(auth_scheme="both")


def test_graphql_url_strips_trailing_slash():
    assert _client().graphql_url == "https://api.example.com/graphql"


# ---------------------------------------------------------------------------
# Request construction
# ---------------------------------------------------------------------------

def test_execute_posts_query_and_variables():
    client = _client()
    with patch(POST, return_value=make_response({"data": {"ok": True}})) as mock_post:
        data = client.execute("query { ok }", {"id": "1"})

    assert data == {"ok": True}
    mock_post.assert_called_once()
    args, kwargs = mock_post.call_args
    assert args[0] == "https://api.example.com/graphql"
    assert kwargs["json"] == {"query": "query { ok }", "variables": {"id": "1"}}
    assert kwargs["timeout"] == 30
    assert kwargs["headers"]["Content-Type"] == "application/json"


def test_execute_omits_empty_variables():
    client = _client()
    with patch(POST, return_value=make_response({"data": {}})) as mock_post:
        client.execute("query { ok }", {})
    assert "variables" not in mock_post.call_args[1]["json"]


def test_execute_rejects_empty_query_without_network_call():
    client = _client()
    with patch(POST) as mock_post:
        with pytest.raises(ValidationError):
            client.execute("   ")
    mock_post.assert_not_called()


def test_basic_auth_headers():
    client = _client()
    with patch(POST, return_value=make_response({"data": {}})) as mock_post:
        client.execute("query { ok }")
    headers = mock_post.call_args[1]["headers"]
    expected = base64.b64encode(b"me@example.com:tok").decode("ascii")
    assert headers["Authorization"] == f"Basic {expected}"
    assert headers["X-ExperimentalApi"] == "compass-beta"


def test_bearer_auth_headers():
    client = _client(auth_scheme="bearer")
    with patch(POST, return_value=make_response({"data": {}})) as mock_post:
        client.execute("query { ok }")
    headers = mock_post.call_args[1]["headers"]
    assert headers["Authorization"] == "Bearer tok"
    assert "X-ExperimentalApi" not in headers


def test_per_call_timeout_is_capped():
    client = _client()
    with patch(POST, return_value=make_response({"data": {}})) as mock_post:
        client.execute("query { ok }", timeout=5)
        client.execute("query { ok }", timeout=120)
    assert mock_post.call_args_list[0][1]["timeout"] == 5
    assert mock_post.call_args_list[1][1]["timeout"] == 30


def test_null_data_returns_empty_dict():
    client = _client()
    with patch(POST, return_value=make_response({"data": None})):
        assert client.execute("query { ok }") == {}


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------

def test_graphql_errors_are_joined():
    body = {
        "data": {"partial": True},
        "errors": [
            {"message": "first", "path": ["compass"]},
            {"message": "second", "extensions": {"statusCode": 403}},
        ],
    }
    client = _client()
    with patch(POST, return_value=make_response(body)):
        with pytest.raises(GraphQLError) as exc_info:
            client.execute("query { ok }")
    assert exc_info.value.messages == ["first", "second"]
    assert "first; second" in str(exc_info.value)


def test_non_200_status_raises_http_error_with_body():
    client = _client()
    resp = make_response({"errors": [{"message": "nope"}]}, status_code=401, text='{"errors":[]}')
    with patch(POST, return_value=resp):
        with pytest.raises(HTTPError) as exc_info:
            client.execute("query { ok }")
    assert exc_info.value.status_code == 401
    assert exc_info.value.body == '{"errors":[]}'


def test_connection_failure_raises_transport_error():
    client = _client()
    cause = requests.ConnectionError("dns failure")
    with patch(POST, side_effect=cause):
        with pytest.raises(TransportError) as exc_info:
            client.execute("query { ok }")
    assert exc_info.value.cause is cause


def test_timeout_raises_transport_error():
    client = _client()
    with patch(POST, side_effect=requests.Timeout("slow")):
        with pytest.raises(TransportError):
            client.execute("query { ok }")


def test_undecodable_body_raises_transport_error():
    client = _client()
    resp = make_response(status_code=200, text="<html>")
    resp.json.side_effect = ValueError("Expecting value")
    with patch(POST, return_value=resp):
        with pytest.raises(TransportError):
            client.execute("query { ok }")


# ---------------------------------------------------------------------------
# Tenant resolution
# ---------------------------------------------------------------------------

def test_normalize_tenant_host():
    assert normalize_tenant_host("acme") == "acme.atlassian.net"
    assert normalize_tenant_host("acme.atlassian.net") == "acme.atlassian.net"
    with pytest.raises(ValidationError):
        normalize_tenant_host("")


def test_resolve_cloud_id_bare_name():
    client = _client()
    body = {"data": {"tenantContexts": [{"cloudId": "cloud-1"}]}}
    with patch(POST, return_value=make_response(body)) as mock_post:
        assert client.resolve_cloud_id("acme") == "cloud-1"
    assert mock_post.call_args[1]["json"]["variables"] == {"hostNames": ["acme.atlassian.net"]}


def test_resolve_cloud_id_full_host_unchanged():
    client = _client()
    body = {"data": {"tenantContexts": [{"cloudId": "cloud-1"}]}}
    with patch(POST, return_value=make_response(body)) as mock_post:
        client.resolve_cloud_id("acme.atlassian.net")
    assert mock_post.call_args[1]["json"]["variables"] == {"hostNames": ["acme.atlassian.net"]}


def test_resolve_cloud_id_passes_timeout():
    client = _client()
    body = {"data": {"tenantContexts": [{"cloudId": "cloud-1"}]}}
    with patch(POST, return_value=make_response(body)) as mock_post:
        client.resolve_cloud_id("acme", timeout=2)
    assert mock_post.call_args[1]["timeout"] == 2


def test_resolve_cloud_id_no_contexts():
    client = _client()
    with patch(POST, return_value=make_response({"data": {"tenantContexts": []}})):
        with pytest.raises(NotFoundError) as exc_info:
            client.resolve_cloud_id("ghost")
    assert "not found or inaccessible" in str(exc_info.value)


def test_resolve_cloud_id_empty_id():
    client = _client()
    body = {"data": {"tenantContexts": [{"cloudId": ""}]}}
    with patch(POST, return_value=make_response(body)):
        with pytest.raises(NotFoundError):
            client.resolve_cloud_id("acme")
