#!/usr/bin/env python3
"""Interactive CLI to talk to the emergency voice agent by text.

Opens a real ElevenLabs conversation (needs ELEVENLABS_API_KEY), prints
transcripts as they arrive and forwards typed lines as user messages.
Audio replies are counted, not played.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from lifeline.config import get_settings
from lifeline.exceptions import LifelineError
from lifeline.logging_config import setup_logging
from lifeline.prompts import EmergencyContext, build_scene_update, build_system_prompt
from lifeline.services.voice import TranscriptEvent, VoiceSession, is_configured

audio_bytes_received = 0


def on_transcript(event: TranscriptEvent) -> None:
    label = "🤖 Agent" if event.role == "agent" else "👤 You"
    print(f"\n  {label}: {event.text}")


def on_audio(audio: bytes) -> None:
    global audio_bytes_received
    audio_bytes_received += len(audio)


def on_error(error: Exception) -> None:
    print(f"\n  ⚠️  {type(error).__name__}: {error}")


async def main() -> None:
    settings = get_settings()
    setup_logging(level=settings.log_level, enable_file=False)

    if not is_configured(settings):
        print("ELEVENLABS_API_KEY is not set")
        sys.exit(1)

    context = EmergencyContext(
        user_name="Test Caller",
        latitude=43.6532,
        longitude=-79.3832,
        situation="Caller is hiding and cannot speak",
    )
    session = VoiceSession(
        system_prompt=build_system_prompt(context),
        on_transcript=on_transcript,
        on_audio=on_audio,
        on_error=on_error,
        settings=settings,
    )

    print("=" * 60)
    print("🚨 Emergency Voice Agent - Test CLI")
    print("=" * 60)
    print("\nCommands: /scene <text> (send video analysis), /history, /quit\n")

    try:
        await session.connect()
    except LifelineError as e:
        print(f"Could not connect: {e}")
        sys.exit(1)

    try:
        while True:
            user_input = (await asyncio.to_thread(input, "> ")).strip()

            if not user_input:
                continue

            if user_input.lower() == "/quit":
                break

            if user_input.lower() == "/history":
                for turn in session.history:
                    print(f"  [{turn.role}] {turn.content}")
                continue

            if user_input.startswith("/scene "):
                await session.update_context(build_scene_update(user_input[7:], context))
                continue

            await session.send_text(user_input)
    except (KeyboardInterrupt, EOFError):
        pass
    finally:
        await session.disconnect()
        print(f"\n👋 Goodbye! ({audio_bytes_received} bytes of agent audio received)")


if __name__ == "__main__":
    asyncio.run(main())
