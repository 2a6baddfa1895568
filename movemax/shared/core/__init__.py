"""
Shared Core Module
==================

Event system, configuration and handled error types.
"""

# Event System
from .event_bus import EventBus, EventPayload
from . import events

# Errors
from .exceptions import (
    MoveMaxError,
    FormValidationError,
    UploadValidationError,
    PermissionDeniedError,
    AuthenticationRequiredError,
)

# Configuration
from .configuration import (
    ConfigManager,
    SystemConfig,
    get_config_manager,
    get_config,
    ValidationLevel,
)

__all__ = [
    # Event System
    "EventBus",
    "EventPayload",
    "events",
    # Errors
    "MoveMaxError",
    "FormValidationError",
    "UploadValidationError",
    "PermissionDeniedError",
    "AuthenticationRequiredError",
    # Configuration
    "ConfigManager",
    "SystemConfig",
    "get_config_manager",
    "get_config",
    "ValidationLevel",
]
