"""MCP tool catalog and dispatcher.

The dispatcher is the fail-soft boundary of the server: call_tool() never
raises. Every failure, whether a missing argument, an API error, a playback
failure or an unknown tool name, comes back as a ToolResult with is_error
set, and callers must check that flag.
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional

from mcp.types import CallToolResult, TextContent, Tool

from .client import ElevenLabsClient
from .config import Settings
from .errors import MissingArgumentError, MissingArgumentsError, UnknownToolError
from .player import AudioPlayer

logger = logging.getLogger("elevenlabs-tts")

FALSE_STRINGS = ("false", "0", "no", "off")


def build_tools(settings: Settings) -> List[Tool]:
    """Build the tool catalog, naming the configured defaults."""
    return [
        Tool(
            name="text_to_speech",
            description=(
                "Convert text to speech using ElevenLabs API. "
                "Generates audio and optionally plays it."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "text": {
                        "type": "string",
                        "description": "The text to convert to speech"
                    },
                    "voice_id": {
                        "type": "string",
                        "description": f"Voice ID (default: {settings.voice_id})"
                    },
                    "model_id": {
                        "type": "string",
                        "description": f"Model ID (default: {settings.model_id})"
                    },
                    "play": {
                        "type": "boolean",
                        "description": "Whether to play the audio after generation (default: true)",
                        "default": True
                    },
                    "save_path": {
                        "type": "string",
                        "description": "Optional path to save the audio file"
                    }
                },
                "required": ["text"]
            }
        ),
        Tool(
            name="list_voices",
            description="List all available voices from ElevenLabs",
            inputSchema={
                "type": "object",
                "properties": {}
            }
        ),
        Tool(
            name="get_voice_info",
            description="Get detailed information about a specific voice",
            inputSchema={
                "type": "object",
                "properties": {
                    "voice_id": {
                        "type": "string",
                        "description": "The ID of the voice to query"
                    }
                },
                "required": ["voice_id"]
            }
        ),
    ]


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool call: text plus an error flag."""

    text: str
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> "ToolResult":
        return cls(text=text)

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(text=f"Error: {message}", is_error=True)

    def to_call_tool_result(self) -> CallToolResult:
        return CallToolResult(
            content=[TextContent(type="text", text=self.text)],
            isError=self.is_error,
        )


def _optional_str(arguments: Dict[str, Any], name: str) -> Optional[str]:
    value = arguments.get(name)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _required_str(arguments: Dict[str, Any], name: str) -> str:
    value = _optional_str(arguments, name)
    if value is None:
        raise MissingArgumentError(name)
    return value


def _coerce_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() not in FALSE_STRINGS
    return bool(value)


@dataclass(frozen=True)
class SynthesisRequest:
    """A validated text_to_speech invocation."""

    text: str
    voice_id: str
    model_id: str
    play: bool = True
    save_path: Optional[Path] = None

    @classmethod
    def from_arguments(cls, arguments: Dict[str, Any], settings: Settings) -> "SynthesisRequest":
        """Validate tool arguments, filling in configured defaults.

        Raises:
            MissingArgumentError: If text is absent or blank
        """
        text = arguments.get("text")
        if not isinstance(text, str) or not text.strip():
            raise MissingArgumentError("text")

        save_path = _optional_str(arguments, "save_path")
        return cls(
            text=text,
            voice_id=_optional_str(arguments, "voice_id") or settings.voice_id,
            model_id=_optional_str(arguments, "model_id") or settings.model_id,
            play=_coerce_bool(arguments.get("play"), default=True),
            save_path=Path(save_path).expanduser() if save_path else None,
        )


def temp_audio_path() -> Path:
    """Create an empty temporary output file, unique per call."""
    fd, name = tempfile.mkstemp(prefix="elevenlabs-", suffix=".mp3")
    os.close(fd)
    return Path(name)


class ToolDispatcher:
    """Routes MCP tool calls to the ElevenLabs client and audio player."""

    def __init__(self, settings: Settings, client: ElevenLabsClient, player: AudioPlayer):
        self.settings = settings
        self.client = client
        self.player = player
        self._tools = build_tools(settings)
        self._handlers: Dict[str, Callable[[Dict[str, Any]], Awaitable[ToolResult]]] = {
            "text_to_speech": self.text_to_speech,
            "list_voices": self.list_voices,
            "get_voice_info": self.get_voice_info,
        }

    def list_tools(self) -> List[Tool]:
        return list(self._tools)

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> ToolResult:
        """Execute a tool, converting any failure into an error result."""
        try:
            if arguments is None:
                raise MissingArgumentsError()

            handler = self._handlers.get(name)
            if handler is None:
                raise UnknownToolError(name)

            logger.info(f"Calling tool: {name}")
            return await handler(arguments)

        except Exception as e:
            logger.error(f"Error executing tool {name}: {e}")
            logger.debug("Tool failure details", exc_info=True)
            return ToolResult.error(str(e) or type(e).__name__)

    async def text_to_speech(self, arguments: Dict[str, Any]) -> ToolResult:
        request = SynthesisRequest.from_arguments(arguments, self.settings)

        audio = await self.client.synthesize(request.text, request.voice_id, request.model_id)

        output_path = request.save_path or temp_audio_path()
        output_path.write_bytes(audio)
        logger.info(f"Audio generated: {output_path} ({len(audio)} bytes)")

        result = f"Audio generated: {output_path}"
        if not request.play:
            return ToolResult.ok(result)

        playback = await self.player.play(str(output_path))
        if not playback.success:
            return ToolResult.error(f"{playback.error} (audio saved to: {output_path})")

        result += f" (played with {playback.player})"

        if request.save_path is None:
            try:
                os.unlink(output_path)
                result += " (temporary file removed)"
            except OSError as e:
                logger.warning(f"Could not remove temporary file {output_path}: {e}")

        return ToolResult.ok(result)

    async def list_voices(self, arguments: Dict[str, Any]) -> ToolResult:
        catalog = await self.client.list_voices()
        voices = catalog.get("voices", []) if isinstance(catalog, dict) else catalog

        lines = [
            f"{voice.get('name')} ({voice.get('voice_id')}) - {voice.get('category')}"
            for voice in voices
        ]

        default_id = self.settings.voice_id
        default = next((v for v in voices if v.get("voice_id") == default_id), None)
        if default is not None:
            default_line = f"Default: {default.get('name')} ({default_id})"
        else:
            default_line = f"Default: {default_id}"

        formatted = "\n".join(lines)
        return ToolResult.ok(f"Available voices:\n\n{formatted}\n\n{default_line}")

    async def get_voice_info(self, arguments: Dict[str, Any]) -> ToolResult:
        voice_id = _required_str(arguments, "voice_id")
        info = await self.client.get_voice_info(voice_id)
        return ToolResult.ok(json.dumps(info, indent=2))
