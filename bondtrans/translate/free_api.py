"""
Free HTTP translation backends.

This module provides:
- Free Translate API (ftapi.pythonanywhere.com), the gateway's default
- MyMemory Translation API, an alternative public service

Both are called with a single GET per text through a shared
``httpx.AsyncClient``. Any non-success status, undecodable body or missing
translation raises TranslationError; RemoteTranslator.translate turns that
into a fallback to the original text.
"""

from __future__ import annotations

from typing import Optional

import httpx

from bondtrans.config import DEFAULT_TIMEOUT, FTAPI_URL, MYMEMORY_URL, USER_AGENT
from bondtrans.translate.base import RemoteTranslator, TranslationError


class HTTPTranslator(RemoteTranslator):
    """Shared plumbing for JSON-over-HTTP translation services.

    A client passed in by the caller is borrowed and never closed here;
    otherwise one is created lazily and closed by ``aclose()``.
    """

    DEFAULT_URL = ""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__()
        self.base_url = (base_url or self.DEFAULT_URL).rstrip("/")
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": USER_AGENT},
            )
        return self._client

    async def _get_json(self, path: str, params: dict) -> dict:
        response = await self.client.get(f"{self.base_url}{path}", params=params)
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError as e:
            raise TranslationError(f"{self.name} returned a non-JSON body") from e

        if not isinstance(data, dict):
            raise TranslationError(f"{self.name} returned unexpected JSON: {type(data).__name__}")
        return data

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None


class FreeTranslateAPITranslator(HTTPTranslator):
    """Free Translate API translator (no key required).

    Request:  GET /translate?sl=en&dl=zh-cn&text=...
    Response: {"source-text": ..., "destination-text": ...}
    """

    DEFAULT_URL = FTAPI_URL

    @property
    def name(self) -> str:
        return "ftapi"

    async def _request(self, text: str, source_locale: str, target_locale: str) -> str:
        data = await self._get_json(
            "/translate",
            {"sl": source_locale, "dl": target_locale, "text": text},
        )
        translation = data.get("destination-text")
        if not isinstance(translation, str) or not translation.strip():
            raise TranslationError(f"ftapi response has no destination-text: {data}")
        return translation


class MyMemoryTranslator(HTTPTranslator):
    """MyMemory Translation API translator (rate limited, no key required).

    Request:  GET /get?q=...&langpair=en|zh-cn (or en|zh-TW)
    Response: {"responseStatus": 200, "responseData": {"translatedText": ...}}
    """

    DEFAULT_URL = MYMEMORY_URL

    @property
    def name(self) -> str:
        return "mymemory"

    async def _request(self, text: str, source_locale: str, target_locale: str) -> str:
        data = await self._get_json(
            "/get",
            {"q": text, "langpair": f"{source_locale}|{target_locale}"},
        )
        if data.get("responseStatus") != 200:
            raise TranslationError(
                f"mymemory status {data.get('responseStatus')}: {data.get('responseDetails', '')}"
            )
        response_data = data.get("responseData") or {}
        translation = response_data.get("translatedText") if isinstance(response_data, dict) else None
        if not isinstance(translation, str) or not translation.strip():
            raise TranslationError("mymemory response has no translatedText")
        return translation.strip()
