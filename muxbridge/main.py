"""muxbridge — composition root for both run modes.

One route table, two front doors:

- Lambda: API Gateway events arrive at `muxbridge.lambda_handler.handler`,
  a Dispatcher that translates them for the router and back.
- Server: a FastAPI app served by uvicorn forwards every request to the
  same router.

Settings are resolved here and passed down; the dispatcher never reads
the environment.
"""

import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, Response

from muxbridge.adapter.events import HttpMethod
from muxbridge.adapter.translator import get_translator, request_from_http
from muxbridge.config.settings import Settings, get_settings
from muxbridge.dispatcher import Dispatcher
from muxbridge.logging.audit import (
    generate_request_id,
    get_audit_logger,
    request_id_var,
    setup_logging,
)
from muxbridge.routing.handlers import build_router

VERSION = "0.1.0"


def create_dispatcher(settings: Settings | None = None) -> Dispatcher:
    settings = settings or get_settings()
    translator = get_translator(settings.event_format, settings.prefix_segments)
    return Dispatcher(router=build_router(), translator=translator)


def create_lambda_handler(settings: Settings | None = None) -> Dispatcher:
    """Build the Lambda entry point: logging configured, dispatcher wired."""
    settings = settings or get_settings()
    setup_logging(settings)
    dispatcher = create_dispatcher(settings)
    get_audit_logger().info(
        "Lambda handler initialized",
        extra={"audit_data": {
            "event_format": settings.event_format,
            "prefix_segments": settings.prefix_segments,
        }},
    )
    return dispatcher


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the standalone listener app around the shared route table."""
    settings = settings or get_settings()
    dispatcher = create_dispatcher(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings)
        get_audit_logger().info("Listener started", extra={"audit_data": {"version": VERSION}})
        yield
        get_audit_logger().info("Listener stopped")

    app = FastAPI(
        title="muxbridge",
        description="Shared route table for API Gateway events and a local listener",
        version=VERSION,
        lifespan=lifespan,
    )

    @app.api_route("/{path:path}", methods=[m.value for m in HttpMethod])
    async def forward(request: Request) -> Response:
        token = request_id_var.set(request.headers.get("x-request-id") or generate_request_id())
        try:
            # Starlette only routes the methods listed above, so this cannot fail
            descriptor = request_from_http(
                method=request.method,
                path=request.url.path,
                headers=dict(request.headers),
                query_params=dict(request.query_params),
                body=await request.body(),
            )
            captured = dispatcher.dispatch(descriptor)
            return Response(
                content=captured.body,
                status_code=captured.status_code,
                headers=captured.headers,
            )
        finally:
            request_id_var.reset(token)

    return app


def serve(settings: Settings | None = None) -> None:
    """Run the listener until terminated. Exits the process if it cannot bind."""
    settings = settings or get_settings()
    setup_logging(settings)
    logger = get_audit_logger()
    app = create_app(settings)

    logger.info(
        "Starting local server",
        extra={"audit_data": {"host": settings.listen_host, "port": settings.listen_port}},
    )
    try:
        uvicorn.run(
            app,
            host=settings.listen_host,
            port=settings.listen_port,
            log_level=settings.log_level.lower(),
        )
    except (OSError, SystemExit) as e:
        # uvicorn exits on its own when the socket cannot be bound
        logger.critical(
            "Listener failed",
            extra={"audit_data": {
                "host": settings.listen_host,
                "port": settings.listen_port,
                "error": str(e) or type(e).__name__,
            }},
        )
        raise SystemExit(1) from e


def main() -> None:
    settings = get_settings()
    if settings.runtime_mode == "lambda":
        # The Lambda runtime imports muxbridge.lambda_handler.handler itself
        setup_logging(settings)
        get_audit_logger().info(
            "Lambda runtime detected; not starting a listener",
            extra={"audit_data": {"handler": "muxbridge.lambda_handler.handler"}},
        )
        return
    serve(settings)


if __name__ == "__main__":
    sys.exit(main())
