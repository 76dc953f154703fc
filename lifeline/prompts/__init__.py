"""Prompt builders for the emergency voice agent."""

from lifeline.prompts.emergency import EmergencyContext, build_scene_update, build_system_prompt

__all__ = [
    "EmergencyContext",
    "build_scene_update",
    "build_system_prompt",
]
