"""Shared test fixtures and configuration for elevenlabs-tts tests."""

import json
import os
import subprocess
import tempfile
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from elevenlabs_tts.client import ElevenLabsClient
from elevenlabs_tts.config import Settings
from elevenlabs_tts.errors import NoPlayerError, PlaybackError
from elevenlabs_tts.player import PlaybackResult
from elevenlabs_tts.tools import ToolDispatcher


# Audio players must never actually run in tests
BLOCKED_COMMANDS = {
    "afplay",
    "mpv",
    "ffplay",
    "aplay",
}

FAKE_AUDIO = b"ID3\x04\x00fake-mp3-payload"

RACHEL = {
    "voice_id": "21m00Tcm4TlvDq8ikWAM",
    "name": "Rachel",
    "category": "premade",
    "labels": {"accent": "american", "gender": "female"},
}

ADAM = {
    "voice_id": "pNInz6obpgDQGcFmaJgB",
    "name": "Adam",
    "category": "premade",
}


def _safe_subprocess_run(original_run):
    """Wrapper that blocks audio players during tests."""
    def wrapper(*args, **kwargs):
        cmd = args[0] if args else kwargs.get("args", [])
        cmd_parts = cmd.split() if isinstance(cmd, str) else list(cmd or [])

        if cmd_parts and cmd_parts[0] in BLOCKED_COMMANDS:
            mock_result = MagicMock()
            mock_result.returncode = 0
            mock_result.stdout = ""
            mock_result.stderr = ""
            return mock_result

        return original_run(*args, **kwargs)
    return wrapper


def _safe_create_subprocess_exec(original_exec):
    """Wrapper that blocks audio players started through asyncio."""
    async def wrapper(program, *args, **kwargs):
        if program in BLOCKED_COMMANDS:
            mock_proc = MagicMock()
            mock_proc.pid = 99999
            mock_proc.returncode = 0
            mock_proc.wait = AsyncMock(return_value=0)
            return mock_proc

        return await original_exec(program, *args, **kwargs)
    return wrapper


@pytest.fixture(autouse=True)
def block_audio_players(monkeypatch):
    """
    Automatically block audio players in all tests.

    Tests that need to check how a player is launched should patch
    asyncio.create_subprocess_exec explicitly.
    """
    import asyncio

    monkeypatch.setattr("subprocess.run", _safe_subprocess_run(subprocess.run))
    monkeypatch.setattr(
        "asyncio.create_subprocess_exec",
        _safe_create_subprocess_exec(asyncio.create_subprocess_exec),
    )


@pytest.fixture(autouse=True)
def isolate_temp_dir(tmp_path, monkeypatch):
    """
    Redirect tempfile.gettempdir() and ~ expansion into tmp_path.

    Generated audio lands in a per-test directory that the test can
    inspect, instead of the real /tmp or home directory.
    """
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(temp_dir))

    fake_home = tmp_path / "home"
    fake_home.mkdir()
    original_expanduser = os.path.expanduser

    def mock_expanduser(path):
        path = os.fspath(path)
        if path.startswith("~"):
            return str(fake_home) + path[1:]
        return original_expanduser(path)

    monkeypatch.setattr("os.path.expanduser", mock_expanduser)
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setattr("pathlib.Path.home", lambda: fake_home)

    yield temp_dir


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Make sure a developer's real ElevenLabs settings never leak into tests."""
    for name in (
        "ELEVENLABS_API_KEY",
        "ELEVENLABS_VOICE_ID",
        "ELEVENLABS_MODEL",
        "ELEVENLABS_API_BASE",
        "ELEVENLABS_TTS_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    return Settings(api_key="test-api-key")


class MockApi:
    """In-process stand-in for the ElevenLabs API.

    Routes requests by method and path, records every request, and lets
    tests override the response for a route.
    """

    def __init__(self, voices=None):
        self.requests: list = []
        self.voices = voices if voices is not None else [RACHEL, ADAM]
        self._overrides: dict = {}

    def set_response(self, method: str, path: str, response: httpx.Response):
        self._overrides[(method, path)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key in self._overrides:
            return self._overrides[key]

        path = request.url.path
        if request.method == "POST" and path.startswith("/v1/text-to-speech/"):
            return httpx.Response(200, content=FAKE_AUDIO, headers={"Content-Type": "audio/mpeg"})
        if request.method == "GET" and path == "/v1/voices":
            return httpx.Response(200, json={"voices": self.voices})
        if request.method == "GET" and path.startswith("/v1/voices/"):
            voice_id = path.rsplit("/", 1)[-1]
            for voice in self.voices:
                if voice["voice_id"] == voice_id:
                    return httpx.Response(200, json=voice)
            return httpx.Response(404, json={"detail": {"status": "voice_not_found"}})

        return httpx.Response(404, text="Not Found")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def last_json(self):
        return json.loads(self.requests[-1].content)


class FakePlayer:
    """Mock audio player recording what it was asked to play."""

    def __init__(self, player="mpv", exit_code=0):
        self.player = player
        self.exit_code = exit_code
        self.played: list = []

    async def play(self, file_path: str) -> PlaybackResult:
        self.played.append(file_path)
        if not self.player:
            return PlaybackResult(success=False, error=NoPlayerError())
        if self.exit_code != 0:
            return PlaybackResult(
                success=False,
                player=self.player,
                exit_code=self.exit_code,
                error=PlaybackError(exit_code=self.exit_code),
            )
        return PlaybackResult(success=True, player=self.player, exit_code=0)


@pytest.fixture
def mock_api():
    return MockApi()


@pytest.fixture
def client(settings, mock_api):
    return ElevenLabsClient.from_settings(settings, transport=mock_api.transport)


@pytest.fixture
def fake_player():
    return FakePlayer()


@pytest.fixture
def dispatcher(settings, client, fake_player):
    return ToolDispatcher(settings, client, fake_player)
