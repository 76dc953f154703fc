"""Voice conversation wire protocol and data types."""

from __future__ import annotations

import base64
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class InboundMessageType(str, Enum):
    """Message tags sent by the conversation service."""

    AUDIO = "audio"
    TRANSCRIPT = "transcript"
    AGENT_RESPONSE = "agent_response"
    ERROR = "error"


class OutboundMessageType(str, Enum):
    """Message tags sent to the conversation service."""

    INITIATION = "conversation_initiation_client_data"
    AUDIO = "audio"
    USER_MESSAGE = "user_message"
    CONTEXT_UPDATE = "context_update"


@dataclass(frozen=True, slots=True)
class TranscriptEvent:
    """Transcription of user speech or of the agent's reply."""

    role: str  # "user" or "agent"
    text: str


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    """One entry of the session's append-only history."""

    role: str
    content: str


TranscriptCallback = Callable[[TranscriptEvent], Awaitable[None] | None]
AudioCallback = Callable[[bytes], Awaitable[None] | None]
ErrorCallback = Callable[[Exception], Awaitable[None] | None]


def build_initiation_message(
    *,
    system_prompt: str,
    first_message: str,
    language: str,
    voice_id: str,
) -> dict[str, Any]:
    """Build the payload sent right after the socket opens."""
    return {
        "type": OutboundMessageType.INITIATION.value,
        "conversation_config_override": {
            "agent": {
                "prompt": {"prompt": system_prompt},
                "first_message": first_message,
                "language": language,
            },
            "tts": {"voice_id": voice_id},
        },
    }


def build_audio_message(audio: bytes) -> dict[str, Any]:
    return {
        "type": OutboundMessageType.AUDIO.value,
        "audio": base64.b64encode(audio).decode("ascii"),
    }


def build_user_message(text: str) -> dict[str, Any]:
    return {"type": OutboundMessageType.USER_MESSAGE.value, "text": text}


def build_context_update(context: Any) -> dict[str, Any]:
    return {"type": OutboundMessageType.CONTEXT_UPDATE.value, "context": context}
