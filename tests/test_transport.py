"""Tests for adapters.graphql_transport using httpx.MockTransport."""

import asyncio
import json

import httpx
import pytest

from adapters.graphql_transport import HttpGraphQLTransport
from adapters.http_client import build_async_client
from core.config import AppSettings
from core.errors import TransportError
from core.interfaces.transport import GraphQLTransport

QUERY = "query {\n    taxonomies {\n        name\n    }\n}"


def _execute(settings, handler, query=QUERY):
    transport = HttpGraphQLTransport(settings, transport=httpx.MockTransport(handler))
    return asyncio.run(transport.execute(query))


def test_is_a_graphql_transport(settings):
    assert isinstance(HttpGraphQLTransport(settings), GraphQLTransport)


def test_success_returns_data_object(settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url.copy_with(query=None))
        seen["key"] = request.url.params.get("subscription-key")
        seen["body"] = json.loads(request.content)
        seen["content_type"] = request.headers.get("content-type")
        return httpx.Response(200, json={"data": {"taxonomies": [{"name": "categories"}]}})

    data = _execute(settings, handler)

    assert data == {"taxonomies": [{"name": "categories"}]}
    assert seen["method"] == "POST"
    assert seen["url"] == "https://api.example.test/graphql"
    assert seen["key"] == "secret-key"
    assert seen["body"] == {"query": QUERY}
    assert seen["content_type"] == "application/json"


def test_missing_key_sends_no_param():
    settings = AppSettings(_env_file=None, api_url="https://api.example.test/graphql", subscription_key=None)

    def handler(request: httpx.Request) -> httpx.Response:
        assert "subscription-key" not in request.url.params
        return httpx.Response(200, json={"data": {}})

    assert _execute(settings, handler) == {}


@pytest.mark.parametrize("body", [{}, {"data": None}, {"data": []}])
def test_missing_data_is_empty_mapping(settings, body):
    assert _execute(settings, lambda request: httpx.Response(200, json=body)) == {}


def test_non_200_with_errors_array(settings):
    errors = [{"message": "Unknown field"}]

    with pytest.raises(TransportError) as excinfo:
        _execute(settings, lambda request: httpx.Response(500, json={"errors": errors}))

    err = excinfo.value
    assert err.status_code == 500
    assert err.query == QUERY
    assert json.loads(err.detail) == errors
    assert "500" in str(err)
    assert "Query: " in str(err)


def test_non_200_with_plain_body(settings):
    with pytest.raises(TransportError) as excinfo:
        _execute(settings, lambda request: httpx.Response(401, text="Access denied"))

    assert excinfo.value.status_code == 401
    assert excinfo.value.detail == "Access denied"


def test_invalid_json_body(settings):
    with pytest.raises(TransportError, match="Failed to decode"):
        _execute(settings, lambda request: httpx.Response(200, text="<html>oops</html>"))


def test_non_object_envelope(settings):
    with pytest.raises(TransportError, match="envelope"):
        _execute(settings, lambda request: httpx.Response(200, json=[1, 2]))


def test_graphql_errors_with_200(settings):
    body = {"data": None, "errors": [{"message": "Variable lang is invalid"}]}

    with pytest.raises(TransportError) as excinfo:
        _execute(settings, lambda request: httpx.Response(200, json=body))

    assert excinfo.value.status_code == 200
    assert "Variable lang is invalid" in excinfo.value.detail
    assert excinfo.value.query == QUERY


def test_network_failure_is_wrapped(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as excinfo:
        _execute(settings, handler)

    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_client_defaults(settings):
    client = build_async_client(settings)
    try:
        assert client.headers["User-Agent"] == settings.user_agent
        assert client.headers["Accept"] == "application/json"
        assert client.timeout.read == settings.http_timeout_seconds
    finally:
        asyncio.run(client.aclose())


def test_client_takes_no_extra_headers(settings):
    with pytest.raises(TypeError):
        build_async_client(settings, extra_headers={"X-Debug": "1"})
