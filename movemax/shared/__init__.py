"""
MoveMax Shared Kernel
=====================

Business rules and infrastructure used by the application layer.

Architecture:
- core: EventBus, configuration, handled error types
- config: Jinja2 prompt templates for the AI auditor
- infrastructure: Technical adapters (vision model, local storage)
- domain: Records, seed data and pure business rules
"""

__version__ = "1.0.0"

__all__ = []
