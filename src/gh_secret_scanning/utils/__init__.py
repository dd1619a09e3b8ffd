"""Shared utility functions.

This subpackage provides common utility functions used across
the application with no dependencies on other subpackages.

Key modules:
    - parsing: Secret-type parsing
    - logging: Logging configuration
"""

from .parsing import provider_prefix
from .logging import configure_logging, get_logger, sanitize_text

__all__ = [
    # parsing
    "provider_prefix",
    # logging
    "configure_logging",
    "get_logger",
    "sanitize_text",
]
