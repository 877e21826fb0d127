"""HTTP API with token authentication and the update-trigger endpoint."""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import IO, Optional
from urllib.parse import parse_qs, urlsplit

TOKEN_MISSING_MESSAGE = "api token is empty or has not been set. exiting"
DEFAULT_PORT = 8080
UPDATE_PATH = "/v1/update"

_log = logging.getLogger(__name__)


class ApiError(Exception):
    """The HTTP API is misconfigured."""


@dataclass(frozen=True)
class Request:
    """An incoming request; header names are stored in lower case."""

    method: str
    path: str
    query: dict[str, list[str]] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def header(self, name: str) -> str:
        return self.headers.get(name.lower(), "")


@dataclass
class Response:
    """The status, headers and body sent back for a request."""

    status: int = HTTPStatus.OK
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)


Handler = Callable[[Request], Response]


class Api:
    """Routes requests to registered handlers, each guarded by a bearer token."""

    def __init__(self, token: str = "") -> None:
        self.token = token
        self._routes: dict[str, Handler] = {}

    @property
    def has_handlers(self) -> bool:
        return bool(self._routes)

    def require_token(self, handler: Handler) -> Handler:
        """Wrap ``handler`` so that it only runs for requests carrying the token."""

        def guarded(request: Request) -> Response:
            if request.header("Authorization") != f"Bearer {self.token}":
                return Response(HTTPStatus.UNAUTHORIZED)
            _log.debug("Valid token found.")
            return handler(request)

        return guarded

    def register(self, path: str, handler: Handler) -> None:
        """Serve ``handler`` at ``path``, behind the token check."""
        if path in self._routes:
            raise ApiError(f"multiple registrations for {path}")
        self._routes[path] = self.require_token(handler)

    def dispatch(
        self,
        method: str,
        path: str,
        headers: Optional[Mapping[str, str]] = None,
        body: bytes = b"",
    ) -> Response:
        """Route one request to its handler and return the handler's response."""
        parts = urlsplit(path)
        handler = self._routes.get(parts.path)
        if handler is None:
            return Response(HTTPStatus.NOT_FOUND, b"404 page not found\n")
        request = Request(
            method=method.upper(),
            path=parts.path,
            query=parse_qs(parts.query, keep_blank_values=True),
            headers={key.lower(): value for key, value in (headers or {}).items()},
            body=body,
        )
        return handler(request)

    def start(self, block: bool = False, port: int = DEFAULT_PORT) -> Optional[ThreadingHTTPServer]:
        """Serve the API over HTTP.

        Returns None without serving when no handler is registered. Raises
        ApiError when the token is empty. When not blocking, the server runs
        in a background thread and is returned so it can be shut down.
        """
        if not self.has_handlers:
            _log.debug("Watchtower HTTP API skipped.")
            return None
        if not self.token:
            raise ApiError(TOKEN_MISSING_MESSAGE)

        server = ThreadingHTTPServer(("", port), _make_request_handler(self))
        if block:
            try:
                server.serve_forever()
            finally:
                server.server_close()
            return server
        threading.Thread(target=server.serve_forever, name="http-api", daemon=True).start()
        return server


def _make_request_handler(api: Api) -> type[BaseHTTPRequestHandler]:
    class _RequestHandler(BaseHTTPRequestHandler):
        def _serve(self) -> None:
            length = int(self.headers.get("Content-Length") or 0)
            body = self.rfile.read(length) if length > 0 else b""
            response = api.dispatch(self.command, self.path, dict(self.headers.items()), body)
            self.send_response(int(response.status))
            for key, value in response.headers.items():
                self.send_header(key, value)
            self.send_header("Content-Length", str(len(response.body)))
            self.end_headers()
            if response.body and self.command != "HEAD":
                self.wfile.write(response.body)

        do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = do_HEAD = _serve

        def log_message(self, format: str, *args: object) -> None:
            _log.debug("%s - %s", self.address_string(), format % args)

    return _RequestHandler


class UpdateHandler:
    """Triggers an update run when the update endpoint is called.

    The lock is shared with the scheduler so only one update runs at a time.
    """

    def __init__(
        self,
        update_fn: Callable[[Optional[list[str]]], None],
        lock: Optional[threading.Lock] = None,
        output: Optional[IO[str]] = None,
    ) -> None:
        self._update = update_fn
        self.lock = lock if lock is not None else threading.Lock()
        self._output = output
        self.path = UPDATE_PATH

    def handle(self, query: Optional[Mapping[str, Sequence[str]]], body: bytes = b"") -> bool:
        """Run an update for the images named in ``query``; return whether it ran.

        With images named, waits for a running update to finish. Without,
        an update that is already running makes this call skip.
        """
        _log.info("Updates triggered by HTTP API request.")
        if body:
            out = self._output if self._output is not None else sys.stdout
            out.write(body.decode("utf-8", errors="replace"))

        values = (query or {}).get("image")
        images = None if values is None else [part for value in values for part in value.split(",")]

        if images:
            with self.lock:
                self._update(images)
            return True

        if not self.lock.acquire(blocking=False):
            _log.debug("Skipped. Another update already running.")
            return False
        try:
            self._update(images)
        finally:
            self.lock.release()
        return True

    def __call__(self, request: Request) -> Response:
        self.handle(request.query, request.body)
        return Response()