import argparse
import asyncio
import logging
import sys
from typing import Awaitable, Callable, List, Optional

from lifelog_mcp.client.client import LifelogMcpClient
from lifelog_mcp.client.runner import run_interactive, run_once
from lifelog_mcp.client.transport import (
    MCPTransport,
    SseMCPTransport,
    StreamableHttpMCPTransport,
    spawn_server_transport,
)
from lifelog_mcp.core.config import LOG_LEVELS, Settings, load_settings
from lifelog_mcp.core.logging_config import setup_logging
from lifelog_mcp.core.monitoring import initialize_logfire
from lifelog_mcp.errors import ConfigurationError
from lifelog_mcp.server.server import create_server

logger = logging.getLogger(__name__)

MODES = ("server", "client", "interactive")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lifelog-mcp",
        description='Serve or call the Limitless "getLifelogs" MCP tool.',
    )
    parser.add_argument(
        "mode",
        choices=MODES,
        help=(
            "server: serve tools over stdio; client: spawn a server and call getLifelogs once; "
            "interactive: spawn a server and prompt for tool calls."
        ),
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Attach client modes to an already running server at this URL instead of spawning one.",
    )
    parser.add_argument(
        "--transport",
        default="streamable-http",
        choices=["streamable-http", "sse"],
        help="Transport used with --url.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Override the configured log level.",
    )
    return parser


def client_transport(arguments: argparse.Namespace, settings: Settings) -> MCPTransport:
    if arguments.url is None:
        return spawn_server_transport(settings)
    if arguments.transport == "sse":
        return SseMCPTransport(arguments.url)
    return StreamableHttpMCPTransport(arguments.url)


async def run_server(settings: Settings, *, monitored: bool = False) -> None:
    server = create_server(settings, monitored=monitored)
    try:
        await server.serve_stdio()
    finally:
        await server.aclose()


def _run(label: str, work: Callable[[], Awaitable[object]]) -> int:
    try:
        asyncio.run(work())
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        logger.debug("%s", label, exc_info=True)
        print(f"{label}: {e}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    arguments = parser.parse_args(argv)
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
    setup_logging(arguments.log_level or settings.log_level, settings.log_format)
    monitored = initialize_logfire(settings)

    if arguments.mode == "server":
        code = _run("Server error", lambda: run_server(settings, monitored=monitored))
    elif arguments.mode == "client":
        code = _run("Client error", lambda: run_once(LifelogMcpClient(client_transport(arguments, settings))))
    else:
        code = _run(
            "Interactive client error",
            lambda: run_interactive(LifelogMcpClient(client_transport(arguments, settings))),
        )
    sys.exit(code)


if __name__ == "__main__":
    main()
