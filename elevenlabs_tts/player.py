"""Local audio playback through a command-line player.

The player binary is resolved once per AudioPlayer, on first use:

- macOS: afplay (always present)
- Linux: the first of mpv, ffplay, aplay found on PATH
- anything else: no player

Playback spawns the player with the file path and waits for it to exit.
There is no timeout, so a player that never exits blocks the caller.
"""

import asyncio
import logging
import platform
import subprocess
from dataclasses import dataclass
from functools import cached_property
from typing import Callable, Dict, List, Optional, Sequence, Union

from .errors import NoPlayerError, PlaybackError

logger = logging.getLogger("elevenlabs-tts")

MACOS_PLAYER = "afplay"

# Preference order, first found wins
LINUX_PLAYERS = ("mpv", "ffplay", "aplay")

# Flags that keep a player headless and make it exit when the file ends
PLAYER_ARGS: Dict[str, List[str]] = {
    "mpv": ["--no-video", "--really-quiet"],
    "ffplay": ["-nodisp", "-autoexit", "-loglevel", "quiet"],
}


def is_on_path(binary: str) -> bool:
    """Check if a binary is available in PATH.

    Only a completed `which` with exit status 0 counts as found.
    """
    try:
        result = subprocess.run(
            ["which", binary],
            capture_output=True,
            text=True,
            timeout=2
        )
        return result.returncode == 0
    except (subprocess.TimeoutExpired, OSError):
        return False


def resolve_player(
    system: Optional[str] = None,
    candidates: Sequence[str] = LINUX_PLAYERS,
) -> Optional[str]:
    """Find a command-line audio player for this platform.

    Args:
        system: Platform name as reported by platform.system() (default: current)
        candidates: Linux players to probe, in order of preference

    Returns:
        Player binary name, or None if nothing usable is installed
    """
    system = system or platform.system()

    if system == "Darwin":
        return MACOS_PLAYER

    if system == "Linux":
        for player in candidates:
            if is_on_path(player):
                logger.debug(f"Found audio player: {player}")
                return player
            logger.debug(f"Audio player not found: {player}")

    return None


@dataclass
class PlaybackResult:
    """Outcome of a single playback.

    Attributes:
        success: True if the player ran and exited with status 0.
        player: The player binary used, None if none was available.
        exit_code: Player exit status, None if it never started.
        error: NoPlayerError or PlaybackError when success is False.
    """

    success: bool
    player: Optional[str] = None
    exit_code: Optional[int] = None
    error: Optional[Union[NoPlayerError, PlaybackError]] = None


class AudioPlayer:
    """Plays audio files with the platform's command-line player."""

    def __init__(self, resolver: Callable[[], Optional[str]] = resolve_player):
        self._resolver = resolver

    @cached_property
    def player(self) -> Optional[str]:
        """The resolved player binary, probed once and then reused."""
        player = self._resolver()
        if player:
            logger.info(f"Using audio player: {player}")
        else:
            logger.warning("No audio player found; playback will be unavailable")
        return player

    def command(self, file_path: str) -> List[str]:
        """Build the command line for playing file_path."""
        return [self.player, *PLAYER_ARGS.get(self.player, []), str(file_path)]

    async def play(self, file_path: str) -> PlaybackResult:
        """Play an audio file and wait for the player to exit."""
        player = self.player
        if not player:
            return PlaybackResult(success=False, error=NoPlayerError())

        cmd = self.command(file_path)
        logger.debug(f"Launching player: {' '.join(cmd)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            logger.error(f"Failed to start {player}: {e}")
            return PlaybackResult(success=False, player=player, error=PlaybackError(cause=e))

        try:
            exit_code = await process.wait()
        except asyncio.CancelledError:
            logger.warning(f"Playback cancelled, stopping {player}")
            try:
                process.kill()
            except ProcessLookupError:
                pass
            await process.wait()
            raise

        if exit_code != 0:
            logger.error(f"{player} exited with code {exit_code}")
            return PlaybackResult(
                success=False,
                player=player,
                exit_code=exit_code,
                error=PlaybackError(exit_code=exit_code),
            )

        return PlaybackResult(success=True, player=player, exit_code=0)
