"""Error types raised by the ElevenLabs client, player and tool dispatcher.

Everything except StartupConfigError is caught at the dispatcher boundary
and reported to the MCP client as an error result.
"""

from typing import Optional


class ElevenLabsTTSError(Exception):
    """Base class for all elevenlabs-tts errors."""


class StartupConfigError(ElevenLabsTTSError):
    """Configuration is unusable; the server must not start."""


class UpstreamError(ElevenLabsTTSError):
    """The ElevenLabs API answered with a non-success status."""

    def __init__(self, status: int, body: str = ""):
        self.status = status
        self.body = body
        message = f"ElevenLabs API error: {status}"
        if body:
            message += f" {body}"
        super().__init__(message)


class NoPlayerError(ElevenLabsTTSError):
    """Playback was requested but no audio player is installed."""

    def __init__(self, message: str = "No audio player found. Install mpv or ffplay."):
        super().__init__(message)


class PlaybackError(ElevenLabsTTSError):
    """The audio player could not be started or exited with an error."""

    def __init__(self, exit_code: Optional[int] = None, cause: Optional[BaseException] = None):
        self.exit_code = exit_code
        self.cause = cause
        if cause is not None:
            message = f"Audio player failed to start: {cause}"
        else:
            message = f"Audio player exited with code {exit_code}"
        super().__init__(message)


class MissingArgumentsError(ElevenLabsTTSError):
    """A tool was invoked without an argument mapping."""

    def __init__(self, message: str = "Arguments are required"):
        super().__init__(message)


class MissingArgumentError(MissingArgumentsError):
    """A required tool argument is absent or empty."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Missing required argument: {name}")


class UnknownToolError(ElevenLabsTTSError):
    """No tool is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")
