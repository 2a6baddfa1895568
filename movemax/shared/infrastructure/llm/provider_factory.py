"""
Builds the vision provider named by the ``ai`` configuration section.

No API key means no provider: ``create_from_config`` returns ``None`` and the
auditor answers with canned results instead.
"""

from __future__ import annotations

import logging
from enum import Enum

from movemax.shared.core.configuration import AIConfig
from movemax.shared.infrastructure.llm.base import VisionProvider
from movemax.shared.infrastructure.llm.gemini_provider import GeminiProvider

logger = logging.getLogger(__name__)


class ProviderType(str, Enum):
    GEMINI = "gemini"

    @classmethod
    def parse(cls, name: ProviderType | str) -> ProviderType:
        if isinstance(name, cls):
            return name
        normalized = str(name).strip().lower().replace("-", "_")
        for member in cls:
            if member.value == normalized:
                return member
        supported = ", ".join(member.value for member in cls)
        raise ValueError(f"Unsupported provider type: {name!r} (supported: {supported})")


_PROVIDER_CLASSES: dict[ProviderType, type[VisionProvider]] = {
    ProviderType.GEMINI: GeminiProvider,
}


class ProviderFactory:
    """Maps provider names onto ``VisionProvider`` implementations."""

    @staticmethod
    def create(
        provider_type: ProviderType | str,
        api_key: str,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float = 60.0,
    ) -> VisionProvider:
        """Instantiate the provider registered for ``provider_type``.

        Raises:
            ValueError: If the name does not match a registered provider
        """
        provider_cls = _PROVIDER_CLASSES[ProviderType.parse(provider_type)]
        return provider_cls(api_key=api_key, base_url=base_url, model=model, timeout=timeout)

    @staticmethod
    def create_from_config(config: AIConfig) -> VisionProvider | None:
        if not config.api_key:
            logger.info("No AI API key configured; image analysis will return mock results")
            return None

        provider = ProviderFactory.create(
            config.provider,
            api_key=config.api_key,
            base_url=config.base_url,
            model=config.model,
            timeout=config.timeout,
        )
        logger.info(f"Vision provider '{config.provider}' ready (model '{provider.default_model}')")
        return provider
