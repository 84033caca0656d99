"""Entry dispatcher: one gateway event in, one proxy response out.

Cycle: Log-in -> Translate -> Dispatch -> Translate-back -> Log-out.
Nothing survives between invocations; each call gets its own
ResponseCapture and request id.
"""

import json
import logging
from typing import Any

from muxbridge.adapter.events import RequestDescriptor
from muxbridge.adapter.response import ResponseCapture
from muxbridge.adapter.translator import EventTranslationError, EventTranslator
from muxbridge.logging.audit import (
    RequestTimer,
    generate_request_id,
    get_audit_logger,
    request_id_var,
)
from muxbridge.routing.router import Router

INTERNAL_ERROR_BODY = "Internal Server Error"


def internal_error_response() -> dict[str, Any]:
    return {
        "statusCode": 500,
        "headers": {},
        "body": INTERNAL_ERROR_BODY,
        "isBase64Encoded": False,
    }


def _resolve_request_id(event: Any, context: Any) -> str:
    rid = getattr(context, "aws_request_id", None)
    if rid:
        return rid
    if isinstance(event, dict):
        request_context = event.get("requestContext")
        if isinstance(request_context, dict) and request_context.get("requestId"):
            return str(request_context["requestId"])
    return generate_request_id()


class Dispatcher:
    """Lambda-compatible callable wrapping a translator and a router."""

    def __init__(
        self,
        router: Router,
        translator: EventTranslator,
        logger: logging.Logger | None = None,
    ):
        self.router = router
        self.translator = translator
        self.logger = logger or get_audit_logger()

    def __call__(self, event: Any, context: Any = None) -> dict[str, Any]:
        token = request_id_var.set(_resolve_request_id(event, context))
        try:
            return self.handle_event(event)
        finally:
            request_id_var.reset(token)

    def handle_event(self, event: Any) -> dict[str, Any]:
        self._log_event(event)

        try:
            request = self.translator.to_request(event)
        except EventTranslationError as e:
            self.logger.error(
                "Rejected malformed gateway event",
                extra={"audit_data": {
                    "event_format": self.translator.event_format,
                    "error": str(e),
                }},
            )
            response = internal_error_response()
        else:
            captured = self.dispatch(request)
            response = self.translator.to_envelope(captured)

        self.logger.info(
            "Returning gateway response",
            extra={"audit_data": {"response": response}},
        )
        return response

    def dispatch(self, request: RequestDescriptor) -> ResponseCapture:
        """Route one request into a fresh capture and return it."""
        captured = ResponseCapture()
        with RequestTimer() as timer:
            matched = self.router.dispatch(request, captured)

        self.logger.info(
            "Request dispatched",
            extra={"audit_data": {
                "method": request.method.value,
                "path": request.path,
                "matched": matched,
                "status": captured.status_code,
                "latency_ms": timer.elapsed_ms,
            }},
        )
        return captured

    def _log_event(self, event: Any) -> None:
        summary = self.translator.describe(event)
        try:
            json.dumps(summary)
        except (TypeError, ValueError) as e:
            self.logger.warning(
                "Could not serialize gateway event for logging",
                extra={"audit_data": {"error": str(e)}},
            )
            return
        self.logger.info("Received gateway event", extra={"audit_data": {"event": summary}})
