"""Translation between API Gateway proxy events and generic requests/responses.

A deployment receives exactly one payload shape, so the converter is chosen
once from configuration (`get_translator`) instead of inspecting each event.

Pipeline: raw event -> variant model -> RequestDescriptor -> Router
          -> ResponseCapture -> proxy response dict
"""

import base64
import binascii
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from muxbridge.adapter.events import (
    HttpApiEvent,
    HttpMethod,
    RequestDescriptor,
    RestApiEvent,
)
from muxbridge.adapter.paths import normalize_path
from muxbridge.adapter.response import ResponseCapture
from muxbridge.config.settings import DEFAULT_PREFIX_SEGMENTS


class EventTranslationError(Exception):
    """The inbound event is missing or has malformed method/path fields."""


def request_from_http(
    method: str,
    path: str,
    headers: Mapping[str, str] | None = None,
    query_params: Mapping[str, str] | None = None,
    body: bytes | str | None = None,
) -> RequestDescriptor:
    """Build a RequestDescriptor from already-decoded HTTP request parts."""
    try:
        http_method = HttpMethod(method.upper())
    except ValueError as e:
        raise EventTranslationError(f"Unsupported HTTP method: {method}") from e

    if isinstance(body, str):
        body = body.encode("utf-8")

    return RequestDescriptor(
        method=http_method,
        path=path,
        headers=headers or {},
        query_params=query_params or {},
        body=body or b"",
    )


def _decode_body(body: str | None, is_base64: bool) -> bytes:
    if not body:
        return b""
    if not is_base64:
        return body.encode("utf-8")
    try:
        return base64.b64decode(body, validate=True)
    except binascii.Error as e:
        raise EventTranslationError("Body is flagged base64 but does not decode") from e


def rest_event_to_request(event: RestApiEvent, prefix_segments: int) -> RequestDescriptor:
    """REST API (v1): method and path sit at the top level."""
    return request_from_http(
        method=event.httpMethod,
        path=normalize_path(event.path, prefix_segments),
        headers=event.headers,
        query_params=event.queryStringParameters,
        body=_decode_body(event.body, event.isBase64Encoded),
    )


def http_event_to_request(event: HttpApiEvent, prefix_segments: int) -> RequestDescriptor:
    """HTTP API (v2): path is rawPath, method lives in requestContext.http."""
    return request_from_http(
        method=event.requestContext.http.method,
        path=normalize_path(event.rawPath, prefix_segments),
        headers=event.headers,
        query_params=event.queryStringParameters,
        body=_decode_body(event.body, event.isBase64Encoded),
    )


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _describe_rest(event: Mapping[str, Any]) -> dict[str, Any]:
    context = _mapping(event.get("requestContext"))
    return {
        "method": event.get("httpMethod"),
        "path": event.get("path"),
        "headers": event.get("headers"),
        "query_params": event.get("queryStringParameters"),
        "path_params": event.get("pathParameters"),
        "request_context": {
            "request_id": context.get("requestId"),
            "stage": context.get("stage"),
            "domain": context.get("domainName"),
        },
        "body": event.get("body"),
    }


def _describe_http(event: Mapping[str, Any]) -> dict[str, Any]:
    context = _mapping(event.get("requestContext"))
    http = _mapping(context.get("http"))
    return {
        "method": http.get("method"),
        "path": event.get("rawPath"),
        "raw_query": event.get("rawQueryString"),
        "headers": event.get("headers"),
        "query_params": event.get("queryStringParameters"),
        "path_params": event.get("pathParameters"),
        "request_context": {
            "request_id": context.get("requestId"),
            "stage": context.get("stage"),
            "domain": context.get("domainName"),
        },
        "body": event.get("body"),
    }


@dataclass(frozen=True)
class _Variant:
    model: type[RestApiEvent] | type[HttpApiEvent]
    convert: Callable[[Any, int], RequestDescriptor]
    describe: Callable[[Mapping[str, Any]], dict[str, Any]]


_VARIANTS: dict[str, _Variant] = {
    "rest": _Variant(RestApiEvent, rest_event_to_request, _describe_rest),
    "http": _Variant(HttpApiEvent, http_event_to_request, _describe_http),
}


class EventTranslator:
    """Converts one configured event shape to requests and captures to responses."""

    def __init__(self, event_format: str, prefix_segments: int):
        if event_format not in _VARIANTS:
            raise ValueError(f"Unknown event format: {event_format}")
        if prefix_segments < 0:
            raise ValueError(f"prefix_segments must be >= 0, got {prefix_segments}")
        self.event_format = event_format
        self.prefix_segments = prefix_segments
        self._variant = _VARIANTS[event_format]

    def to_request(self, event: Any) -> RequestDescriptor:
        try:
            parsed = self._variant.model.model_validate(event)
        except ValidationError as e:
            raise EventTranslationError(
                f"Malformed {self.event_format} event: {e.error_count()} validation error(s)"
            ) from e
        return self._variant.convert(parsed, self.prefix_segments)

    @staticmethod
    def to_envelope(captured: ResponseCapture) -> dict[str, Any]:
        return {
            "statusCode": captured.status_code,
            "headers": dict(captured.headers),
            "body": captured.body,
            "isBase64Encoded": False,
        }

    def describe(self, event: Any) -> dict[str, Any]:
        """Summarize an event for logging without validating it."""
        if not isinstance(event, Mapping):
            return {"unparsed_event": event}
        return self._variant.describe(event)


def get_translator(event_format: str, prefix_segments: int | None = None) -> EventTranslator:
    """Build the translator for the configured gateway integration."""
    if prefix_segments is None:
        if event_format not in DEFAULT_PREFIX_SEGMENTS:
            raise ValueError(f"Unknown event format: {event_format}")
        prefix_segments = DEFAULT_PREFIX_SEGMENTS[event_format]
    return EventTranslator(event_format, prefix_segments)
