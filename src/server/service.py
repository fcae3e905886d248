"""Overlay UI server: index page, static assets, event stream and client commands."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Optional
from urllib.parse import urlsplit

import websockets
from websockets.asyncio.server import ServerConnection
from websockets.datastructures import Headers
from websockets.http11 import Request, Response

from contracts.ui_protocol import EVENT_HELLO

from .config import HEALTHZ_PATH, INDEX_PATH, ROOT_PATH, UIServerConfig
from .events import StickyEventStore, make_event, parse_client_message
from .static_files import load_static_asset

CommandHandler = Callable[[dict[str, Any]], None]
HttpReply = tuple[int, str, bytes, str]

_TEXT_PLAIN = "text/plain; charset=utf-8"
_NOT_FOUND: HttpReply = (404, "Not Found", b"not found\n", _TEXT_PLAIN)


class UIServer:
    """Serves the overlay page and streams session/drop events on a daemon thread.

    Client frames are decoded with `parse_client_message` and handed to
    `command_handler` from the server thread; the handler must be thread-safe
    (the runtime passes `Queue.put`).
    """

    def __init__(
        self,
        config: UIServerConfig,
        logger: Optional[logging.Logger] = None,
        command_handler: Optional[CommandHandler] = None,
    ):
        self._config = config
        self._logger = logger or logging.getLogger("ui_server")
        self._command_handler = command_handler
        self._index_html = Path(config.index_file).read_bytes()
        self._sticky_events = StickyEventStore()
        self._clients: set[ServerConnection] = set()

        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._shutdown: Optional[asyncio.Event] = None
        self._ready = threading.Event()
        self._failure: Optional[Exception] = None

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        return self._config.port

    def start(self, timeout_seconds: float = 5.0) -> None:
        if self._serving():
            self._logger.warning("UI server is already running")
            return

        self._failure = None
        self._ready.clear()
        self._thread = threading.Thread(
            target=self._thread_main,
            daemon=True,
            name="ui-server",
        )
        self._thread.start()

        if not self._ready.wait(timeout_seconds):
            raise RuntimeError(f"UI server did not start within {timeout_seconds:.1f}s")
        if self._failure is not None:
            raise RuntimeError(f"UI server startup failed: {self._failure}")

    def stop(self, timeout_seconds: float = 5.0) -> None:
        thread = self._thread
        if thread is None:
            return

        if self._loop is not None and self._shutdown is not None:
            self._loop.call_soon_threadsafe(self._shutdown.set)
        thread.join(timeout=timeout_seconds)
        if thread.is_alive():
            self._logger.error("UI server thread did not stop within %.1fs", timeout_seconds)

        self._thread = None
        self._loop = None
        self._shutdown = None

    def publish(self, event_type: str, **payload: Any) -> None:
        """Remember sticky events and broadcast to connected clients, if serving."""
        message = make_event(event_type, **payload)
        self._sticky_events.remember(event_type, message)

        loop = self._loop
        if loop is None or not self._serving():
            return
        try:
            future = asyncio.run_coroutine_threadsafe(self._broadcast(message), loop)
        except RuntimeError:
            # Loop is closing.
            return
        future.add_done_callback(_discard_result)

    def greeting_messages(self) -> list[str]:
        """Frames sent to a client right after it connects: hello, then sticky state."""
        hello = make_event(EVENT_HELLO, message="UI websocket connected")
        return [hello, *self._sticky_events.snapshot()]

    def route_http(self, path: str) -> Optional[HttpReply]:
        """Map a plain HTTP path to `(status, reason, body, content_type)`.

        Returns None for the websocket path so the upgrade proceeds.
        """
        if path == self._config.websocket_path:
            return None
        if path in (ROOT_PATH, INDEX_PATH):
            return 200, "OK", self._index_html, "text/html; charset=utf-8"
        if path == HEALTHZ_PATH:
            return 200, "OK", b"ok\n", _TEXT_PLAIN

        asset = load_static_asset(self._config.static_root, path)
        if asset is None:
            return _NOT_FOUND
        body, content_type = asset
        return 200, "OK", body, content_type

    def _dispatch_client_message(self, message: str | bytes) -> None:
        command = parse_client_message(message)
        if command is None:
            self._logger.warning("Ignoring malformed UI message: %r", message)
            return
        if self._command_handler is None:
            self._logger.debug("No command handler; dropping %s", command["command"])
            return
        self._command_handler(command)

    def _serving(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive() and self._failure is None

    def _thread_main(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        self._shutdown = asyncio.Event()
        try:
            loop.run_until_complete(self._serve())
        except Exception as error:  # pragma: no cover - bind failures
            self._failure = error
            self._logger.error("UI server failed: %s", error, exc_info=True)
            self._ready.set()
        finally:
            pending = asyncio.all_tasks(loop)
            for task in pending:
                task.cancel()
            with contextlib.suppress(Exception):
                loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            loop.close()

    async def _serve(self) -> None:
        async with websockets.serve(
            self._handle_connection,
            host=self._config.host,
            port=self._config.port,
            process_request=self._process_request,
            logger=self._logger,
        ):
            self._logger.info(
                "UI server running at http://%s:%d (websocket: %s)",
                self._config.host,
                self._config.port,
                self._config.websocket_path,
            )
            self._ready.set()
            await self._shutdown.wait()
            await self._disconnect_all()

    async def _handle_connection(self, websocket: ServerConnection) -> None:
        request = websocket.request
        path = urlsplit(request.path).path if request is not None else ""
        if path != self._config.websocket_path:
            await websocket.close(code=1008, reason="Invalid websocket path")
            return

        self._clients.add(websocket)
        self._logger.info("Client connected: %s", websocket.remote_address)
        try:
            for frame in self.greeting_messages():
                await websocket.send(frame)
            async for message in websocket:
                self._dispatch_client_message(message)
        except websockets.exceptions.ConnectionClosed:
            self._logger.info("Client disconnected: %s", websocket.remote_address)
        finally:
            self._clients.discard(websocket)

    async def _process_request(
        self,
        connection: ServerConnection,
        request: Request,
    ) -> Response | None:
        del connection
        reply = self.route_http(urlsplit(request.path).path)
        if reply is None:
            return None
        status, reason, body, content_type = reply
        headers = Headers()
        headers["Content-Type"] = content_type
        headers["Content-Length"] = str(len(body))
        headers["Cache-Control"] = "no-store"
        return Response(status, reason, headers, body)

    async def _broadcast(self, message: str) -> None:
        clients = tuple(self._clients)
        if not clients:
            return
        results = await asyncio.gather(
            *(client.send(message) for client in clients),
            return_exceptions=True,
        )
        for client, result in zip(clients, results):
            if isinstance(result, Exception):
                self._logger.warning("Dropping client after failed send: %s", result)
                self._clients.discard(client)

    async def _disconnect_all(self) -> None:
        clients = tuple(self._clients)
        self._clients.clear()
        await asyncio.gather(
            *(client.close(code=1001, reason="Server shutting down") for client in clients),
            return_exceptions=True,
        )


def _discard_result(future) -> None:
    with contextlib.suppress(Exception):
        future.result()
