"""Real-time voice conversation sessions (ElevenLabs Conversational AI).

- VoiceSession: relays audio/text/context to the service and dispatches
  inbound transcripts, audio and errors to callbacks
"""

from lifeline.services.voice.elevenlabs import (
    VoiceSession,
    is_configured,
)
from lifeline.services.voice.protocol import (
    ConversationTurn,
    InboundMessageType,
    OutboundMessageType,
    TranscriptEvent,
)

__all__ = [
    # Session
    "VoiceSession",
    "is_configured",
    # Data types
    "ConversationTurn",
    "TranscriptEvent",
    "InboundMessageType",
    "OutboundMessageType",
]
