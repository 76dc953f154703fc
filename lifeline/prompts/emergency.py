"""Emergency agent prompt templates.

The voice agent speaks to a dispatcher on behalf of a caller who cannot
speak. The system prompt carries everything known about the caller;
later video analysis is pushed mid-call as a context update.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_SITUATION = "Emergency - caller cannot speak"

ROLE_INSTRUCTIONS = """YOUR ROLE:
- You are speaking to a 911 operator
- Be calm, clear, and concise
- First, state this is an AI calling on behalf of someone in an emergency
- Immediately provide the location
- Describe the emergency situation
- Answer the operator's questions directly
- If asked, confirm this is a TEST CALL for demonstration"""


@dataclass(frozen=True, slots=True)
class EmergencyContext:
    """What is known about the caller when the call starts."""

    user_name: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    address: str | None = None
    situation: str | None = None
    video_analysis: str | None = None

    @property
    def location_text(self) -> str:
        """Street address if known, else GPS coordinates, else Unknown."""
        if self.address:
            return self.address
        if self.latitude is not None and self.longitude is not None:
            return f"GPS: {self.latitude:.6f}, {self.longitude:.6f}"
        return "Unknown"


def build_system_prompt(context: EmergencyContext) -> str:
    """Build the agent's system prompt from the caller's emergency context."""
    lines = [
        "You are an AI emergency assistant making a 911 call on behalf of someone "
        "who cannot speak. They may be in danger, injured, or hiding.",
        "",
        "CRITICAL EMERGENCY INFORMATION:",
        f"- Caller Name: {context.user_name or 'Unknown'}",
        f"- Location: {context.location_text}",
        f"- Emergency Situation: {context.situation or DEFAULT_SITUATION}",
    ]
    if context.video_analysis:
        lines.append(f"- Scene Description: {context.video_analysis}")

    lines.extend(["", ROLE_INSTRUCTIONS])
    return "\n".join(lines)


def build_scene_update(
    analysis: str,
    context: EmergencyContext | None = None,
) -> dict[str, Any]:
    """Build a context-update body for fresh video analysis.

    Includes the caller's current location when a context is given, so the
    agent can relay a position change along with the scene.
    """
    update: dict[str, Any] = {"scene_description": analysis}
    if context is not None:
        update["location"] = context.location_text
    return update
