"""In-memory response sink handed to route handlers.

Handlers write status, headers and body here instead of to a socket, so the
caller can read the result back once the handler returns.
"""

from dataclasses import dataclass, field

NOT_FOUND = 404  # Left in place when no route matched


@dataclass
class ResponseCapture:
    status_code: int = NOT_FOUND
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    def set_header(self, key: str, value: str) -> None:
        self.headers[key] = value

    def set_status(self, code: int) -> None:
        self.status_code = code

    def write(self, data: bytes | str) -> int:
        """Replace the body with `data` and return the number of bytes written.

        Handlers write once; a second call discards the first.
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.body = data.decode("utf-8", errors="replace")
        return len(data)
