"""Shared fixtures for the muxbridge test suite."""

import copy

import pytest

from muxbridge.config.settings import get_settings

REST_EVENT = {
    "resource": "/{proxy+}",
    "path": "/prod/test",
    "httpMethod": "GET",
    "headers": {
        "Accept": "application/json",
        "Host": "abc123.execute-api.us-east-1.amazonaws.com",
        "X-Forwarded-For": "203.0.113.7",
    },
    "multiValueHeaders": {"Accept": ["application/json"]},
    "queryStringParameters": {"page": "2"},
    "pathParameters": {"proxy": "test"},
    "stageVariables": None,
    "requestContext": {
        "requestId": "c6af9ac6-7b61-11e6-9a41-93e8deadbeef",
        "stage": "prod",
        "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        "identity": {"sourceIp": "203.0.113.7"},
    },
    "body": None,
    "isBase64Encoded": False,
}

HTTP_EVENT = {
    "version": "2.0",
    "routeKey": "ANY /{proxy+}",
    "rawPath": "/prod/api/test",
    "rawQueryString": "page=2",
    "headers": {
        "accept": "application/json",
        "host": "xyz789.execute-api.us-east-1.amazonaws.com",
    },
    "queryStringParameters": {"page": "2"},
    "pathParameters": {"proxy": "test"},
    "requestContext": {
        "accountId": "123456789012",
        "apiId": "xyz789",
        "domainName": "xyz789.execute-api.us-east-1.amazonaws.com",
        "requestId": "JKJaXmPLvHcESHA=",
        "stage": "prod",
        "http": {
            "method": "GET",
            "path": "/prod/api/test",
            "protocol": "HTTP/1.1",
            "sourceIp": "203.0.113.7",
            "userAgent": "curl/8.4.0",
        },
    },
    "body": None,
    "isBase64Encoded": False,
}


@pytest.fixture
def rest_event():
    """Factory fixture: REST API (v1) proxy event with overrides.

    Usage:
        rest_event(httpMethod="POST", path="/prod/user", body='{"name": "a"}')
    """
    def _make(**overrides) -> dict:
        event = copy.deepcopy(REST_EVENT)
        event.update(overrides)
        return event

    return _make


@pytest.fixture
def http_event():
    """Factory fixture: HTTP API (v2) proxy event.

    `method` is placed under requestContext.http; other kwargs override
    top-level keys.
    """
    def _make(method: str = "GET", **overrides) -> dict:
        event = copy.deepcopy(HTTP_EVENT)
        event["requestContext"]["http"]["method"] = method
        if "rawPath" in overrides:
            event["requestContext"]["http"]["path"] = overrides["rawPath"]
        event.update(overrides)
        return event

    return _make


@pytest.fixture
def override_settings(monkeypatch):
    """Factory fixture: set env vars and clear settings cache.

    Usage:
        override_settings(EVENT_FORMAT="http", PATH_PREFIX_SEGMENTS="0")
    """
    monkeypatch.delenv("AWS_LAMBDA_FUNCTION_NAME", raising=False)

    def _override(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key.upper(), str(value))
        # Clear lru_cache so Settings re-reads env
        get_settings.cache_clear()

    yield _override

    # Always clear cache on teardown so other tests get fresh settings
    get_settings.cache_clear()
