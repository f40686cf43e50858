"""Application-level error types.

Purpose:
- Signal fatal startup conditions (``ConfigurationError``).
- Signal recoverable user input problems in the interactive client
  (``InputError``).

Remote API failures live in ``lifelog_mcp.lifelogs_api.errors`` and client
lifecycle failures in ``lifelog_mcp.client.errors``.
"""

from __future__ import annotations


class LifelogMcpError(Exception):
    """Base error for all application exceptions."""


class ConfigurationError(LifelogMcpError):
    """Raised when required configuration is missing or invalid at startup."""


class InputError(LifelogMcpError):
    """Raised when interactive input cannot be turned into tool arguments."""
