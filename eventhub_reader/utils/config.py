# ==============================================================================
# Application Configuration
# ==============================================================================
"""
Configuration management using pydantic-settings.

All configuration is loaded from environment variables, with support for
.env files via python-dotenv. Command-line options take precedence over
the values loaded here.
"""

from functools import lru_cache
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file before any settings are instantiated
load_dotenv()


class EventHubSettings(BaseSettings):
    """Event Hubs connection settings."""

    model_config = SettingsConfigDict(env_prefix="EVENTHUB_")

    connection_string: Optional[str] = Field(
        default=None, description="Event Hubs namespace or entity connection string"
    )
    name: Optional[str] = Field(
        default=None, description="Event hub name (optional when the connection string has EntityPath)"
    )
    consumer_group: str = Field(default="$Default", description="Consumer group name")
    starting_position: str = Field(
        default="-1", description="Starting position for every partition ('-1' = start of stream)"
    )
    transport: Literal["amqp", "websocket"] = Field(
        default="amqp",
        description="Transport (amqp on port 5671, websocket for AMQP over port 443)",
    )
    prefetch: int = Field(default=300, description="Events prefetched per partition")
    connection_verify: bool = Field(
        default=True, description="Verify TLS certificates (False behind intercepting proxies)"
    )


class ReaderSettings(BaseSettings):
    """Bounded reader settings."""

    model_config = SettingsConfigDict(env_prefix="READER_")

    timeout_seconds: int = Field(default=5, description="Seconds to read before cancelling")
    max_events: int = Field(default=100, description="Maximum number of events to print")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    # Nested settings
    eventhub: EventHubSettings = Field(default_factory=EventHubSettings)
    reader: ReaderSettings = Field(default_factory=ReaderSettings)

    # General settings
    log_level: str = Field(default="WARNING", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once and cached for subsequent calls.
    """
    return Settings()
