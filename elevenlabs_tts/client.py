"""HTTP client for the ElevenLabs REST API.

Each call is a single request/response round trip: no retries, no caching
and no timeout beyond httpx's defaults.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from .config import Settings
from .errors import UpstreamError

logger = logging.getLogger("elevenlabs-tts")


class ElevenLabsClient:
    """Thin async wrapper around the three ElevenLabs endpoints we use.

    A transport can be injected for testing (e.g. httpx.MockTransport) so
    no network access is needed.
    """

    def __init__(
        self,
        api_key: str,
        api_base: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_base = api_base.rstrip("/")
        self._api_key = api_key
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "ElevenLabsClient":
        return cls(settings.api_key, settings.api_base, transport=transport)

    def _headers(self, **extra: str) -> Dict[str, str]:
        headers = {"xi-api-key": self._api_key}
        headers.update(extra)
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport)

    async def synthesize(self, text: str, voice_id: str, model_id: str) -> bytes:
        """Convert text to speech.

        Args:
            text: Text to speak
            voice_id: ElevenLabs voice ID
            model_id: ElevenLabs model ID

        Returns:
            The audio payload exactly as returned by the API (MP3 by default)

        Raises:
            UpstreamError: If the API returns a non-success status
        """
        url = f"{self.api_base}/text-to-speech/{quote(voice_id, safe='')}"
        logger.debug(f"POST {url} model={model_id} chars={len(text)}")

        async with self._client() as client:
            response = await client.post(
                url,
                headers=self._headers(**{"Content-Type": "application/json"}),
                json={"text": text, "model_id": model_id},
            )

        if not response.is_success:
            logger.error(f"Synthesis failed: {response.status_code} - {response.text}")
            raise UpstreamError(response.status_code, response.text)

        logger.debug(f"Received {len(response.content)} bytes of audio")
        return response.content

    async def _get_json(self, url: str) -> Any:
        logger.debug(f"GET {url}")

        async with self._client() as client:
            response = await client.get(url, headers=self._headers())

        if not response.is_success:
            logger.error(f"Request failed: {response.status_code} - {url}")
            raise UpstreamError(response.status_code, response.text)

        return response.json()

    async def list_voices(self) -> Dict[str, Any]:
        """List the voices available to this account.

        Returns the catalog as sent by the API, i.e. {"voices": [...]}.
        """
        return await self._get_json(f"{self.api_base}/voices")

    async def get_voice_info(self, voice_id: str) -> Dict[str, Any]:
        """Fetch metadata for a single voice."""
        return await self._get_json(f"{self.api_base}/voices/{quote(voice_id, safe='')}")
