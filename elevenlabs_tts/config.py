"""Configuration for the ElevenLabs MCP server.

All settings come from the process environment and are read once at
startup into an immutable Settings value:

    ELEVENLABS_API_KEY      API key (required)
    ELEVENLABS_VOICE_ID     Default voice (default: Rachel)
    ELEVENLABS_MODEL        Default model (default: eleven_flash_v2_5)
    ELEVENLABS_API_BASE     API base URL (default: https://api.elevenlabs.io/v1)
    ELEVENLABS_TTS_DEBUG    Enable debug logging (true/1/yes/on)
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import StartupConfigError

DEFAULT_VOICE_ID = "21m00Tcm4TlvDq8ikWAM"  # Rachel
DEFAULT_MODEL_ID = "eleven_flash_v2_5"
DEFAULT_API_BASE = "https://api.elevenlabs.io/v1"

LOGGER_NAME = "elevenlabs-tts"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _env(environ: Mapping[str, str], name: str, default: Optional[str] = None) -> Optional[str]:
    """Read an environment variable, treating blank values as unset."""
    value = environ.get(name, "").strip()
    return value or default


def _env_bool(environ: Mapping[str, str], name: str) -> bool:
    return (_env(environ, name) or "").lower() in ("true", "1", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, immutable after startup."""

    api_key: str
    voice_id: str = DEFAULT_VOICE_ID
    model_id: str = DEFAULT_MODEL_ID
    api_base: str = DEFAULT_API_BASE
    debug: bool = False

    def __repr__(self) -> str:
        # Keep the key out of logs and tracebacks
        return (
            f"Settings(api_key='***', voice_id={self.voice_id!r}, "
            f"model_id={self.model_id!r}, api_base={self.api_base!r}, debug={self.debug!r})"
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from the environment.

        Raises:
            StartupConfigError: If ELEVENLABS_API_KEY is not set
        """
        if environ is None:
            environ = os.environ

        api_key = _env(environ, "ELEVENLABS_API_KEY")
        if not api_key:
            raise StartupConfigError("ELEVENLABS_API_KEY environment variable not set")

        return cls(
            api_key=api_key,
            voice_id=_env(environ, "ELEVENLABS_VOICE_ID", DEFAULT_VOICE_ID),
            model_id=_env(environ, "ELEVENLABS_MODEL", DEFAULT_MODEL_ID),
            api_base=_env(environ, "ELEVENLABS_API_BASE", DEFAULT_API_BASE).rstrip("/"),
            debug=_env_bool(environ, "ELEVENLABS_TTS_DEBUG"),
        )


def setup_logging(debug: bool = False) -> logging.Logger:
    """Configure logging to stderr.

    stdout carries the MCP stdio transport, so nothing may log there.
    """
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # httpx logs every request at INFO
    if not debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)

    return logger
