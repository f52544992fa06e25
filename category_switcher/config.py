"""Configuration for the category switcher."""

import os
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _get_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Config:
    """Configuration class for the category switcher.

    Built once at startup and passed to the components that need it.
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        # Remote classification endpoint (any OpenAI-compatible API)
        # Leave the endpoint unset to use the default OpenAI base URL
        self.llm_endpoint: Optional[str] = os.getenv("SWITCHER_LLM_ENDPOINT") or None
        self.llm_model = os.getenv("SWITCHER_LLM_MODEL", "gpt-4")
        self.llm_api_key = os.getenv("SWITCHER_LLM_API_KEY") or os.getenv("OPENAI_API_KEY", "")
        self.llm_timeout = float(os.getenv("SWITCHER_LLM_TIMEOUT", "10"))
        self.llm_temperature = float(os.getenv("SWITCHER_LLM_TEMPERATURE", "0.0"))

        # Upper bound on concurrent classification calls during a refresh
        # (0 runs every uncached app of a snapshot at once)
        self.classify_workers = int(os.getenv("SWITCHER_CLASSIFY_WORKERS", "0"))

        # Settings file holding the classification cache blob
        self.settings_path = os.getenv(
            "SWITCHER_SETTINGS_PATH",
            os.path.expanduser("~/.category_switcher.json")
        )
        self.cache_key = os.getenv("SWITCHER_CACHE_KEY", "appCategoryCache")

        # Background snapshot refresh (0 disables)
        self.refresh_interval = float(os.getenv("SWITCHER_REFRESH_INTERVAL", "5"))

        # Modifier that opens a session while held: 'alt'/'option', 'cmd', 'ctrl'
        self.modifier = os.getenv("SWITCHER_MODIFIER", "alt").lower()

        # Suppress console rendering of the overlay
        self.quiet = _get_bool("SWITCHER_QUIET", "false")

        # Validate configuration
        self._validate()

    @property
    def remote_configured(self) -> bool:
        """True if a remote classification call can be attempted."""
        return bool(self.llm_api_key) or bool(self.llm_endpoint)

    def _validate(self):
        """Validate configuration values."""
        if self.llm_timeout <= 0:
            raise ValueError(f"LLM timeout must be positive, got {self.llm_timeout}")

        if not 0.0 <= self.llm_temperature <= 2.0:
            raise ValueError(
                f"LLM temperature must be between 0 and 2, got {self.llm_temperature}"
            )

        if self.classify_workers < 0:
            raise ValueError(
                f"Classify workers must not be negative, got {self.classify_workers}"
            )

        if self.refresh_interval < 0:
            raise ValueError(
                f"Refresh interval must not be negative, got {self.refresh_interval}"
            )

        valid_modifiers = ["alt", "option", "cmd", "ctrl", "control"]
        if self.modifier not in valid_modifiers:
            raise ValueError(
                f"Invalid modifier '{self.modifier}'. "
                f"Must be one of: {', '.join(valid_modifiers)}"
            )

        if not self.cache_key:
            raise ValueError("Cache key must not be empty")


__all__ = ["Config"]
