"""
Monitoring and Tracing Configuration Module.

This module provides optional integration with Pydantic Logfire for tracing
the lifelog adapter:
- Outbound HTTPX calls to the Limitless API
- MCP requests handled by the server and issued by the client
- Tool call outcomes

Logfire stays off unless ``LOGFIRE_ENABLED`` is set and a ``LOGFIRE_TOKEN`` is
available. Nothing is written to standard output: the stdio server owns it.
"""

import logging
from typing import Optional

import logfire

from lifelog_mcp import __version__
from lifelog_mcp.core.config import Settings

logger = logging.getLogger(__name__)


def initialize_logfire(settings: Settings) -> bool:
    """
    Initialize Logfire for monitoring and tracing.

    This function sets up Logfire with automatic instrumentation for:
    - HTTPX HTTP requests (when ``LOGFIRE_TRACE_HTTPX`` is on)
    - MCP sessions (when ``LOGFIRE_TRACE_MCP`` is on)

    Args:
        settings: Application settings carrying the ``logfire_*`` options.

    Returns:
        True when Logfire was configured, False when it stays disabled.
    """
    if not settings.logfire_enabled:
        logger.debug("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return False

    if not settings.logfire_token:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return False

    try:
        logfire.configure(
            token=settings.logfire_token,
            service_name=settings.logfire_service_name,
            service_version=__version__,
            environment=settings.logfire_environment,
            console=False,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return False

    if settings.logfire_trace_httpx:
        try:
            logfire.instrument_httpx()
            logger.info("Logfire: HTTPX instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument HTTPX: {e}")

    if settings.logfire_trace_mcp:
        try:
            logfire.instrument_mcp()
            logger.info("Logfire: MCP instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument MCP: {e}")

    logger.info(
        f"Logfire monitoring initialized: "
        f"environment={settings.logfire_environment}, "
        f"service={settings.logfire_service_name}"
    )
    return True


def log_tool_call(tool_name: str, is_error: bool, duration_ms: float, error: Optional[str] = None) -> None:
    """
    Log a completed tool call.

    Args:
        tool_name: Name of the called tool
        is_error: Whether the tool reported a failure
        duration_ms: Time spent in the call in milliseconds
        error: Failure text, when ``is_error`` is set
    """
    try:
        if is_error:
            logfire.warn("Tool call failed", tool_name=tool_name, duration_ms=duration_ms, error=error)
        else:
            logfire.info("Tool call completed", tool_name=tool_name, duration_ms=duration_ms)
    except Exception:
        logger.debug(f"Could not log tool call to Logfire: tool={tool_name}")
