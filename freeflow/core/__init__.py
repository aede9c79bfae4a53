"""Core package - Configuration, logging, exceptions, timers.

This package provides foundational infrastructure used by all other layers.

Modules:
    - config: Environment and configuration management
    - logging: Structured JSON logging
    - exceptions: Custom exception hierarchy
    - timers: Host timer facility with cancellable handles
"""

from freeflow.core.exceptions import (
    ConfigurationError,
    FreeFlowError,
    SessionError,
    ValidationError,
)

__all__ = [
    "FreeFlowError",
    "ConfigurationError",
    "ValidationError",
    "SessionError",
]
