"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides shared utilities, constants, and enums that are used
across multiple layers of the application.

Its primary responsibilities include:
- Defining cross-layer constants (environment names, log levels,
  reserved asset file names)
- Centralizing logging configuration

Following Clean Architecture principles, the shared module must not
depend on Infrastructure or Frameworks.
"""

from .consts import MANIFEST_FILENAME, PROBE_FILENAME, EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "MANIFEST_FILENAME",
    "PROBE_FILENAME",
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
