"""Socket.IO client for uploading live video stream chunks."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any
from urllib.parse import urlsplit

import socketio
from socketio import exceptions as sio_exceptions

from lifeline.config import Settings, get_settings
from lifeline.exceptions import ProtocolError, StreamNotConnectedError, TransportError
from lifeline.logging_config import get_logger, sanitize_for_log
from lifeline.services.stream.protocol import (
    StreamEvent,
    StreamSession,
    build_chunk_payload,
    build_end_payload,
    build_start_payload,
)

logger: Any = get_logger(__name__)

LOCAL_HOSTNAMES = frozenset({"localhost", "127.0.0.1", "::1"})
SOCKET_TRANSPORTS = ["websocket", "polling"]


def resolve_stream_url(
    origin: str,
    *,
    backend_port: int = 3001,
    dev_ports: Iterable[str] = ("5173", "3002"),
) -> str:
    """Derive the upload server URL from the client's own origin.

    A localhost origin, or one served from a dev-server port, points at the
    backend on ``backend_port``; anything else is the same origin.
    """
    parts = urlsplit(origin)
    hostname = parts.hostname or "localhost"
    port = str(parts.port) if parts.port else ""

    if hostname in LOCAL_HOSTNAMES or port in set(dev_ports):
        host = f"[{hostname}]" if ":" in hostname else hostname
        return f"http://{host}:{backend_port}"

    return f"{parts.scheme}://{parts.netloc}"


class StreamUploadClient:
    """Uploads a recording to the backend as a sequence of acked chunks.

    The client owns a single Socket.IO channel: ``connect`` reuses it while
    live and creates it otherwise. Reconnection after a drop is left to the
    transport (bounded attempts, fixed delay). Each request waits for the
    server's acknowledgement; ``{"success": false, "error": ...}`` becomes a
    ProtocolError carrying the server message.

    Usage:
        async with StreamUploadClient() as client:
            await client.start_session(42, "sess-1", {"lat": 0, "lng": 0})
            await client.upload_chunk(chunk)
            await client.end_session()
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        url: str | None = None,
        client_factory: Callable[[], Any] | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._url = url or self._settings.stream_server_url or resolve_stream_url(
            self._settings.stream_origin,
            backend_port=self._settings.stream_backend_port,
            dev_ports=self._settings.stream_dev_ports,
        )
        self._client_factory = client_factory or self._create_client
        self._sio: Any = None
        self._session: StreamSession | None = None

    async def __aenter__(self) -> StreamUploadClient:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    @property
    def url(self) -> str:
        return self._url

    @property
    def connected(self) -> bool:
        return self._sio is not None and self._sio.connected

    @property
    def session(self) -> StreamSession | None:
        """The session established by the last successful start, if any."""
        return self._session

    def _create_client(self) -> socketio.AsyncClient:
        delay = self._settings.stream_reconnection_delay
        return socketio.AsyncClient(
            reconnection=True,
            reconnection_attempts=self._settings.stream_reconnection_attempts,
            reconnection_delay=delay,
            reconnection_delay_max=delay,
            randomization_factor=0,
        )

    def _register_handlers(self, sio: Any) -> None:
        async def on_connect() -> None:
            logger.info(f"[StreamSocket] Connected: {sio.sid}")

        async def on_disconnect(*args: Any) -> None:
            reason = args[0] if args else "unknown"
            logger.info(f"[StreamSocket] Disconnected: {reason}")

        async def on_connect_error(data: Any) -> None:
            logger.error(f"[StreamSocket] Connection error: {data}")

        sio.on("connect", on_connect)
        sio.on("disconnect", on_disconnect)
        sio.on("connect_error", on_connect_error)

    async def connect(self) -> Any:
        """Return the live channel, opening a new one if needed.

        Raises:
            TransportError: The server could not be reached.
        """
        if self.connected:
            return self._sio

        if self._sio is not None:
            # Stale channel: stop its reconnection attempts before replacing it
            stale, self._sio = self._sio, None
            await stale.disconnect()

        sio = self._client_factory()
        self._register_handlers(sio)

        try:
            await sio.connect(self._url, transports=SOCKET_TRANSPORTS)
        except sio_exceptions.ConnectionError as e:
            logger.error(f"[StreamSocket] Connection error: {e}")
            await sio.disconnect()
            raise TransportError(f"Stream server unreachable at {self._url}: {e}") from e

        self._sio = sio
        return sio

    async def start_session(
        self,
        user_id: int | str,
        session_id: str,
        location: Mapping[str, Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Start a new upload session, connecting first if necessary.

        Returns:
            The server acknowledgement body.

        Raises:
            TransportError: No channel could be opened or the ack timed out.
            ProtocolError: The server refused the session.
        """
        if not self.connected:
            await self.connect()

        payload = build_start_payload(user_id, session_id, location)
        logger.debug(f"[StreamSocket] Starting session: {sanitize_for_log(payload)}")

        response = await self._request(StreamEvent.START, payload, timeout)
        self._session = StreamSession(
            user_id=user_id,
            session_id=session_id,
            location=dict(location) if location else {},
        )
        logger.info(f"[StreamSocket] Session started: {session_id}")
        return response

    async def upload_chunk(
        self,
        chunk: bytes | bytearray | memoryview,
        *,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Upload one chunk of the current recording.

        Raises:
            StreamNotConnectedError: No live channel; nothing is sent.
            ProtocolError: The server rejected the chunk.
        """
        if not self.connected:
            raise StreamNotConnectedError()

        return await self._request(StreamEvent.CHUNK, build_chunk_payload(chunk), timeout)

    async def end_session(
        self,
        cancelled: bool = False,
        *,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Finish (or cancel) the current upload session.

        Raises:
            StreamNotConnectedError: No live channel; nothing is sent.
            ProtocolError: The server failed to close the session.
        """
        if not self.connected:
            raise StreamNotConnectedError()

        response = await self._request(StreamEvent.END, build_end_payload(cancelled), timeout)
        self._session = None
        logger.info(f"[StreamSocket] Session ended: {response}")
        return response

    async def disconnect(self) -> None:
        """Tear down the channel. Safe to call when already disconnected."""
        sio, self._sio = self._sio, None
        self._session = None
        if sio is not None:
            await sio.disconnect()

    async def _request(
        self,
        event: StreamEvent,
        payload: dict[str, Any],
        timeout: float | None,
    ) -> dict[str, Any]:
        ack_timeout = timeout if timeout is not None else self._settings.stream_ack_timeout

        try:
            response = await self._sio.call(event.value, payload, timeout=ack_timeout)
        except sio_exceptions.TimeoutError as e:
            logger.error(f"[StreamSocket] No acknowledgement for {event.value}")
            raise TransportError(
                f"No acknowledgement for {event.value} within {ack_timeout}s"
            ) from e
        except sio_exceptions.BadNamespaceError as e:
            raise StreamNotConnectedError() from e

        if isinstance(response, dict) and response.get("success"):
            return response

        error = response.get("error") if isinstance(response, dict) else None
        message = error or f"{event.value} was not acknowledged"
        logger.error(f"[StreamSocket] {event.value} failed: {message}")
        raise ProtocolError(message, event=event.value)
