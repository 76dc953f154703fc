"""Stream upload event names, session identity and payload builders."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class StreamEvent(str, Enum):
    """Request events understood by the upload backend (each is acked)."""

    START = "stream:start"
    CHUNK = "stream:chunk"
    END = "stream:end"


@dataclass(frozen=True, slots=True)
class StreamSession:
    """Identity of one upload session, fixed by the start handshake."""

    user_id: int | str
    session_id: str
    location: Mapping[str, Any] = field(default_factory=dict)
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))


def build_start_payload(
    user_id: int | str, session_id: str, location: Mapping[str, Any] | None
) -> dict[str, Any]:
    return {
        "userId": user_id,
        "sessionId": session_id,
        "location": dict(location) if location is not None else None,
    }


def build_chunk_payload(chunk: bytes | bytearray | memoryview) -> dict[str, Any]:
    return {"chunkData": bytes(chunk)}


def build_end_payload(cancelled: bool) -> dict[str, Any]:
    return {"cancelled": cancelled}
