"""
Gemini REST provider (``generateContent``) over httpx.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from movemax.shared.infrastructure.llm.base import (
    AuthenticationError,
    LLMError,
    ModelNotFoundError,
    RateLimitError,
    VisionProvider,
)

logger = logging.getLogger(__name__)


class GeminiProvider(VisionProvider):
    """Google Gemini via the public ``v1beta`` REST API."""

    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    DEFAULT_MODEL = "gemini-2.5-flash"

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float = 60.0,
    ):
        if not api_key:
            raise AuthenticationError("Gemini API key is required")
        self.api_key = api_key
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.default_model = model or self.DEFAULT_MODEL
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
            )
        return self._client

    def build_payload(
        self,
        prompt: str,
        image_b64: str | None = None,
        mime_type: str = "image/jpeg",
        response_schema: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Request body; the image part precedes the text part."""
        parts: list[dict[str, Any]] = []
        if image_b64:
            parts.append({"inline_data": {"mime_type": mime_type, "data": image_b64}})
        parts.append({"text": prompt})

        payload: dict[str, Any] = {"contents": [{"parts": parts}]}
        if response_schema is not None:
            payload["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            }
        return payload

    async def generate(
        self,
        prompt: str,
        image_b64: str | None = None,
        mime_type: str = "image/jpeg",
        response_schema: dict[str, Any] | None = None,
        model: str | None = None,
    ) -> str:
        model_name = model or self.default_model
        url = f"{self.base_url}/models/{model_name}:generateContent"
        payload = self.build_payload(prompt, image_b64, mime_type, response_schema)

        try:
            response = await self._get_client().post(url, params={"key": self.api_key}, json=payload)
        except httpx.HTTPError as e:
            raise LLMError(f"Gemini request failed: {e}") from e

        self._raise_for_status(response, model_name)
        return self._extract_text(response.json())

    def _raise_for_status(self, response: httpx.Response, model_name: str) -> None:
        status = response.status_code
        if status < 400:
            return
        if status in (401, 403):
            raise AuthenticationError("Gemini rejected the API key", status_code=status)
        if status == 429:
            raise RateLimitError("Gemini rate limit exceeded", status_code=status)
        if status == 404:
            raise ModelNotFoundError(f"Model not found: {model_name}", status_code=status)
        raise LLMError(f"Gemini API error {status}: {response.text[:200]}", status_code=status)

    @staticmethod
    def _extract_text(data: dict[str, Any]) -> str:
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = candidates[0].get("content", {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("Gemini client closed")
