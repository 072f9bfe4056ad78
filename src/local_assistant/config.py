"""Configuration module for local-assistant using pydantic-settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from local_assistant import __version__


class AssistantSettings(BaseSettings):
    """Main configuration settings for local-assistant.

    All settings can be overridden via environment variables with the
    LOCAL_ASSISTANT_ prefix. For example, LOCAL_ASSISTANT_MODEL will override
    the model setting.
    """

    # Ollama
    ollama_host: str = "http://localhost:11434"
    model: str = "llama3.2"

    # Geocoding (Nominatim)
    geocoding_base_url: str = "https://nominatim.openstreetmap.org"

    # Weather (Open-Meteo)
    weather_base_url: str = "https://api.open-meteo.com/v1/forecast"
    temperature_unit: str = "fahrenheit"
    wind_speed_unit: str = "mph"
    forecast_days: int = 1

    # Search (SearxNG-compatible JSON endpoint)
    search_base_url: str = "http://localhost:3333"

    # HTTP
    http_timeout: float = 10.0
    user_agent: str = f"local-assistant/{__version__}"

    # ReadFile tool is confined to this directory
    read_file_root: str = "."

    # Embedded tool-call protocol
    call_start_marker: str = "<<<TOOL_CALL>>>"
    call_end_marker: str = "<<<END_TOOL_CALL>>>"
    brace_fallback_enabled: bool = False

    # Keep tool results in the conversation history for the next turn
    retain_tool_results: bool = True

    # Logging
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(env_prefix="LOCAL_ASSISTANT_")

    @property
    def resolved_read_file_root(self) -> Path:
        """Get the absolute path of the directory ReadFile may access."""
        return Path(self.read_file_root).resolve()
