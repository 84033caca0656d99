"""Route handlers for the demo API."""

import json

from muxbridge.adapter.events import HttpMethod, RequestDescriptor
from muxbridge.adapter.response import ResponseCapture
from muxbridge.routing.router import Router


def _write_json(response: ResponseCapture, payload: dict, status: int = 200) -> None:
    response.set_header("Content-Type", "application/json")
    response.set_status(status)
    response.write(json.dumps(payload))


def handle_root(request: RequestDescriptor, response: ResponseCapture) -> None:
    _write_json(response, {"message": "Welcome to the root endpoint"})


def handle_test(request: RequestDescriptor, response: ResponseCapture) -> None:
    _write_json(response, {"message": "Hello from /test"})


def handle_user(request: RequestDescriptor, response: ResponseCapture) -> None:
    if request.method == HttpMethod.POST:
        _write_json(response, {"message": "User created"})
    else:
        _write_json(response, {"message": "User endpoint"})


def handle_order(request: RequestDescriptor, response: ResponseCapture) -> None:
    if request.method == HttpMethod.POST:
        _write_json(response, {"message": "Order created"})
    else:
        _write_json(response, {"message": "Order endpoint"})


def build_router() -> Router:
    """Route table used by both run modes."""
    router = Router()
    router.route("GET", "/", handle_root)
    router.route("GET", "/test", handle_test)
    router.route(["GET", "POST"], "/user", handle_user)
    router.route(["GET", "POST"], "/order", handle_order)
    return router
