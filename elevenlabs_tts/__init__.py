"""
elevenlabs-tts - ElevenLabs text-to-speech for Model Context Protocol (MCP) clients

This package provides an MCP server (stdio transport) with three tools:
- text_to_speech: synthesize text to an MP3 file and optionally play it
- list_voices: list the voices available to the configured account
- get_voice_info: fetch metadata for a single voice
"""

from .version import __version__

from .config import Settings
from .errors import (
    ElevenLabsTTSError,
    StartupConfigError,
    UpstreamError,
    NoPlayerError,
    PlaybackError,
    MissingArgumentsError,
    MissingArgumentError,
    UnknownToolError,
)
from .client import ElevenLabsClient
from .player import AudioPlayer, PlaybackResult, resolve_player
from .tools import SynthesisRequest, ToolDispatcher, ToolResult, build_tools

__all__ = [
    "__version__",
    "Settings",
    # Errors
    "ElevenLabsTTSError",
    "StartupConfigError",
    "UpstreamError",
    "NoPlayerError",
    "PlaybackError",
    "MissingArgumentsError",
    "MissingArgumentError",
    "UnknownToolError",
    # Components
    "ElevenLabsClient",
    "AudioPlayer",
    "PlaybackResult",
    "resolve_player",
    "SynthesisRequest",
    "ToolDispatcher",
    "ToolResult",
    "build_tools",
]
