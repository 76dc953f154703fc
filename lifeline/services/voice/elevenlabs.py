"""ElevenLabs Conversational AI session over a persistent WebSocket."""

from __future__ import annotations

import asyncio
import base64
import binascii
import inspect
import json
from collections.abc import Awaitable, Callable
from typing import Any

from websockets.asyncio.client import connect as websocket_connect
from websockets.exceptions import WebSocketException

from lifeline.config import Settings, get_settings
from lifeline.exceptions import ConfigurationError, ProtocolError, TransportError
from lifeline.logging_config import get_logger
from lifeline.services.voice.protocol import (
    AudioCallback,
    ConversationTurn,
    ErrorCallback,
    InboundMessageType,
    TranscriptCallback,
    TranscriptEvent,
    build_audio_message,
    build_context_update,
    build_initiation_message,
    build_user_message,
)

logger: Any = get_logger(__name__)

Connector = Callable[..., Awaitable[Any]]


def is_configured(settings: Settings | None = None) -> bool:
    """Report whether an ElevenLabs credential is available."""
    return (settings or get_settings()).voice_configured


class VoiceSession:
    """One real-time conversation with the ElevenLabs agent.

    Local calls become outbound JSON messages; inbound messages are
    dispatched on their ``type`` tag:

    - ``audio``: base64 payload decoded and passed to ``on_audio``
    - ``transcript``: turn appended to history, ``on_transcript`` called
    - ``agent_response``: logged only
    - ``error``: ``on_error`` called with a ProtocolError
    - anything that is not JSON: treated as raw audio, passed unchanged

    Sends while disconnected are silently dropped. There is no automatic
    reconnection; the caller owns retry policy.
    """

    def __init__(
        self,
        *,
        system_prompt: str,
        on_transcript: TranscriptCallback | None = None,
        on_audio: AudioCallback | None = None,
        on_error: ErrorCallback | None = None,
        voice_id: str | None = None,
        first_message: str | None = None,
        language: str | None = None,
        settings: Settings | None = None,
        connector: Connector | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._system_prompt = system_prompt
        self._on_transcript = on_transcript
        self._on_audio = on_audio
        self._on_error = on_error
        self._voice_id = voice_id or self._settings.elevenlabs_voice_id
        self._first_message = first_message or self._settings.voice_first_message
        self._language = language or self._settings.voice_language
        self._connector = connector or websocket_connect
        self._ws: Any = None
        self._connected = False
        self._history: list[ConversationTurn] = []
        self._receive_task: asyncio.Task[None] | None = None

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def history(self) -> list[ConversationTurn]:
        """Transcript turns received so far, in arrival order."""
        return list(self._history)

    async def connect(self, *, timeout: float | None = None) -> None:
        """Open the socket and send the conversation initiation payload.

        Args:
            timeout: Seconds to wait for the handshake; defaults to
                ``voice_connect_timeout`` from settings.

        Raises:
            ConfigurationError: No ElevenLabs API key configured.
            TransportError: The socket failed or timed out before opening.
        """
        if not self._settings.voice_configured:
            raise ConfigurationError("ElevenLabs API key not configured")

        if self._connected:
            logger.warning("Voice session already connected")
            return

        api_key = self._settings.elevenlabs_api_key.get_secret_value()
        open_timeout = timeout if timeout is not None else self._settings.voice_connect_timeout

        try:
            ws = await asyncio.wait_for(
                self._connector(
                    self._settings.elevenlabs_ws_url,
                    additional_headers={"xi-api-key": api_key},
                ),
                timeout=open_timeout,
            )
        except (OSError, WebSocketException, TimeoutError) as e:
            logger.error(f"ElevenLabs WebSocket error: {e!r}")
            error = TransportError(f"ElevenLabs connection failed: {e!r}")
            await self._emit_error(error)
            raise error from e

        logger.info("ElevenLabs WebSocket connected")
        self._ws = ws
        self._connected = True

        try:
            await self._send(
                build_initiation_message(
                    system_prompt=self._system_prompt,
                    first_message=self._first_message,
                    language=self._language,
                    voice_id=self._voice_id,
                )
            )
        except (OSError, WebSocketException) as e:
            self._ws = None
            self._connected = False
            error = TransportError(f"ElevenLabs initiation failed: {e!r}")
            await self._emit_error(error)
            raise error from e

        self._receive_task = asyncio.create_task(self._receive_loop(ws))

    async def send_audio(self, audio: bytes) -> None:
        """Forward a chunk of caller audio (base64 encoded on the wire)."""
        await self._send_if_connected(build_audio_message(audio))

    async def send_text(self, text: str) -> None:
        """Send a text message for the agent to respond to."""
        await self._send_if_connected(build_user_message(text))

    async def update_context(self, context: Any) -> None:
        """Push new situational information (e.g. video analysis) to the agent."""
        await self._send_if_connected(build_context_update(context))

    async def disconnect(self) -> None:
        """Close the socket if open. Safe to call repeatedly."""
        ws, self._ws = self._ws, None
        self._connected = False

        if ws is not None:
            await ws.close()

        task, self._receive_task = self._receive_task, None
        if task is not None and task is not asyncio.current_task():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def health_check(self) -> bool:
        return is_configured(self._settings)

    # ------------------------------------------------------------------
    # Outbound
    # ------------------------------------------------------------------

    async def _send_if_connected(self, message: dict[str, Any]) -> None:
        if not self._connected or self._ws is None:
            return
        try:
            await self._send(message)
        except (OSError, WebSocketException) as e:
            # Socket dropped before the receive loop noticed
            logger.warning(f"Dropping {message.get('type')} message, socket closed: {e!r}")
            self._connected = False

    async def _send(self, message: dict[str, Any]) -> None:
        await self._ws.send(json.dumps(message))

    # ------------------------------------------------------------------
    # Inbound
    # ------------------------------------------------------------------

    async def _receive_loop(self, ws: Any) -> None:
        try:
            async for frame in ws:
                try:
                    await self._handle_frame(frame)
                except Exception:
                    logger.exception("Error handling ElevenLabs message")
        except (OSError, WebSocketException) as e:
            logger.error(f"ElevenLabs WebSocket error: {e!r}")
            await self._emit_error(TransportError(f"ElevenLabs connection lost: {e!r}"))
        finally:
            logger.info("ElevenLabs WebSocket closed")
            if self._ws is ws or self._ws is None:
                self._connected = False

    async def _handle_frame(self, frame: str | bytes) -> None:
        try:
            message = json.loads(frame)
        except ValueError:
            # Not JSON: binary audio
            audio = frame if isinstance(frame, bytes) else frame.encode()
            await self._dispatch_audio(audio)
            return

        if not isinstance(message, dict):
            logger.debug(f"Ignoring non-object message: {type(message).__name__}")
            return

        await self._handle_message(message)

    async def _handle_message(self, message: dict[str, Any]) -> None:
        msg_type = message.get("type")

        if msg_type == InboundMessageType.AUDIO:
            payload = message.get("audio")
            if not payload:
                return
            try:
                audio = base64.b64decode(payload)
            except (binascii.Error, TypeError) as e:
                logger.warning(f"Discarding undecodable audio payload: {e}")
                return
            await self._dispatch_audio(audio)

        elif msg_type == InboundMessageType.TRANSCRIPT:
            role = message.get("role", "")
            text = message.get("text", "")
            self._history.append(ConversationTurn(role=role, content=text))
            if self._on_transcript:
                await _invoke(self._on_transcript, TranscriptEvent(role=role, text=text))

        elif msg_type == InboundMessageType.AGENT_RESPONSE:
            logger.info(f"Agent response: {message.get('text', '')}")

        elif msg_type == InboundMessageType.ERROR:
            logger.error(f"ElevenLabs error: {message}")
            await self._emit_error(
                ProtocolError(message.get("message") or "ElevenLabs reported an error")
            )

        else:
            logger.debug(f"Unhandled ElevenLabs message type: {msg_type}")

    async def _dispatch_audio(self, audio: bytes) -> None:
        if self._on_audio:
            await _invoke(self._on_audio, audio)

    async def _emit_error(self, error: Exception) -> None:
        if self._on_error:
            await _invoke(self._on_error, error)


async def _invoke(callback: Callable[[Any], Any], arg: Any) -> None:
    """Call a sync or async callback."""
    result = callback(arg)
    if inspect.isawaitable(result):
        await result
