"""
Vision model interface - provider abstraction layer.
"""

from movemax.shared.infrastructure.llm.base import (
    VisionProvider,
    LLMError,
    AuthenticationError,
    RateLimitError,
    ModelNotFoundError,
)
from movemax.shared.infrastructure.llm.gemini_provider import GeminiProvider
from movemax.shared.infrastructure.llm.provider_factory import ProviderFactory, ProviderType

__all__ = [
    # Base
    "VisionProvider",
    "LLMError",
    "AuthenticationError",
    "RateLimitError",
    "ModelNotFoundError",
    # Factory
    "ProviderFactory",
    "ProviderType",
    # Providers
    "GeminiProvider",
]
