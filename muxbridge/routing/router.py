"""Static path router shared by the Lambda dispatcher and the local listener.

Routes are matched in registration order on (method, path); a trailing
slash is ignored, so "/test" and "/test/" hit the same handler. When nothing
matches, the response sink is left untouched and keeps its 404 default.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from muxbridge.adapter.events import HttpMethod, RequestDescriptor
from muxbridge.adapter.response import ResponseCapture

Handler = Callable[[RequestDescriptor, ResponseCapture], None]


def _strip_trailing_slash(path: str) -> str:
    return path.rstrip("/") or "/"


@dataclass(frozen=True)
class Route:
    methods: frozenset[HttpMethod]
    path: str
    handler: Handler

    def matches(self, method: HttpMethod, path: str) -> bool:
        return method in self.methods and self.path == _strip_trailing_slash(path)


class Router:
    def __init__(self):
        self._routes: list[Route] = []

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(self._routes)

    def route(self, methods: str | Iterable[str], path: str, handler: Handler | None = None):
        """Register `handler` for `path` under one or more methods.

        Without `handler`, returns a decorator:

            @router.route(["GET", "POST"], "/user")
            def user(request, response): ...
        """
        if isinstance(methods, str):
            methods = [methods]
        parsed = frozenset(HttpMethod(m.upper()) for m in methods)
        if not parsed:
            raise ValueError(f"No methods given for route {path}")
        if not path.startswith("/"):
            raise ValueError(f"Route path must start with '/': {path}")

        def register(fn: Handler) -> Handler:
            self._routes.append(Route(methods=parsed, path=_strip_trailing_slash(path), handler=fn))
            return fn

        if handler is not None:
            return register(handler)
        return register

    def get(self, path: str):
        return self.route("GET", path)

    def post(self, path: str):
        return self.route("POST", path)

    def match(self, method: HttpMethod, path: str) -> Route | None:
        for route in self._routes:
            if route.matches(method, path):
                return route
        return None

    def dispatch(self, request: RequestDescriptor, sink: ResponseCapture) -> bool:
        """Run the first matching handler against `sink`. Returns False on no match."""
        route = self.match(request.method, request.path)
        if route is None:
            return False
        route.handler(request, sink)
        return True
