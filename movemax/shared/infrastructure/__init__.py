"""
Shared Infrastructure Module
=============================

Technical adapters for external systems (vision model API, local storage).
"""

# LLM
from movemax.shared.infrastructure.llm import (
    VisionProvider,
    LLMError,
    AuthenticationError,
    RateLimitError,
    ModelNotFoundError,
    GeminiProvider,
    ProviderFactory,
    ProviderType,
)

# Persistence
from movemax.shared.infrastructure.persistence import LocalStorage

__all__ = [
    # LLM
    "VisionProvider",
    "LLMError",
    "AuthenticationError",
    "RateLimitError",
    "ModelNotFoundError",
    "GeminiProvider",
    "ProviderFactory",
    "ProviderType",
    # Persistence
    "LocalStorage",
]
