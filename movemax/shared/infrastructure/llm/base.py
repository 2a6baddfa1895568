"""
Base provider contract for multimodal (text + image) model backends.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


# ============================================================================
# Errors
# ============================================================================


class LLMError(Exception):
    """Base error raised by model providers."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(LLMError):
    """API key missing, invalid or not authorized for the model."""


class RateLimitError(LLMError):
    """Provider rejected the request because of quota or rate limits."""


class ModelNotFoundError(LLMError):
    """Requested model does not exist on the provider."""


# ============================================================================
# Provider Interface
# ============================================================================


class VisionProvider(ABC):
    """Async provider that answers a prompt, optionally about one image."""

    default_model: str | None = None

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        image_b64: str | None = None,
        mime_type: str = "image/jpeg",
        response_schema: dict[str, Any] | None = None,
        model: str | None = None,
    ) -> str:
        """Return the model's text output.

        Args:
            prompt: Instruction text
            image_b64: Base64 image data sent inline with the prompt
            mime_type: MIME type of ``image_b64``
            response_schema: When set, the provider is asked for JSON matching it
            model: Overrides ``default_model`` for this call

        Raises:
            LLMError: On transport or API failure
        """

    async def close(self) -> None:
        """Release network resources."""

    async def __aenter__(self) -> "VisionProvider":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
