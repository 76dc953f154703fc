"""Application configuration using Pydantic Settings.

All configuration is loaded from environment variables.
See .env.example for the available variables.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # ==========================================================================
    # Voice Service (ElevenLabs Conversational AI)
    # ==========================================================================
    elevenlabs_api_key: SecretStr | None = Field(
        default=None, description="ElevenLabs API key for conversational voice sessions"
    )
    elevenlabs_ws_url: str = Field(
        default="wss://api.elevenlabs.io/v1/convai/conversation",
        description="ElevenLabs conversation WebSocket endpoint",
    )
    elevenlabs_voice_id: str = Field(
        default="EXAVITQu4vr4xnSDxMaL",
        description="Default ElevenLabs voice ID (Sarah)",
    )
    voice_language: str = Field(default="en", description="Conversation language tag")
    voice_first_message: str = Field(
        default="911, what's your emergency?",
        description="Opening utterance spoken by the agent",
    )
    voice_connect_timeout: float = Field(
        default=10.0,
        description="Seconds to wait for the voice WebSocket handshake",
    )

    # ==========================================================================
    # Stream Upload (Socket.IO)
    # ==========================================================================
    stream_origin: str = Field(
        default="http://localhost:5173",
        description="Network origin this client runs under",
    )
    stream_server_url: str | None = Field(
        default=None,
        description="Explicit upload server URL (skips origin-based resolution)",
    )
    stream_backend_port: int = Field(
        default=3001,
        description="Backend port used when running against a local dev server",
    )
    stream_dev_ports: list[str] = Field(
        default_factory=lambda: ["5173", "3002"],
        description="Origin ports that indicate a development frontend",
    )
    stream_reconnection_attempts: int = Field(
        default=5,
        description="Transport-level reconnection attempts",
    )
    stream_reconnection_delay: float = Field(
        default=1.0,
        description="Fixed delay between reconnection attempts (seconds)",
    )
    stream_ack_timeout: float = Field(
        default=30.0,
        description="Seconds to wait for a server acknowledgement",
    )

    # ==========================================================================
    # Application
    # ==========================================================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Deployment environment"
    )

    # ==========================================================================
    # Derived Properties
    # ==========================================================================
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def voice_configured(self) -> bool:
        """Check if a non-empty ElevenLabs credential is present."""
        return bool(
            self.elevenlabs_api_key and self.elevenlabs_api_key.get_secret_value()
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
