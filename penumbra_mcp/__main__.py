"""
Command-line entry point.

Usage:
    # Serve the tool catalog over stdio (what MCP clients launch)
    python -m penumbra_mcp

    # Print the catalog
    python -m penumbra_mcp --list-tools

    # Run one tool call in-process and print the envelope
    python -m penumbra_mcp --call estimate_fees --arguments '{"actions": [{"type": "spend", "params": {}}]}'

Settings come from PENUMBRA_* environment variables (see penumbra_mcp.config).
Logs go to stderr; stdout carries the protocol.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from penumbra_mcp.config import Settings
from penumbra_mcp.dispatcher import Dispatcher
from penumbra_mcp.errors import ConfigError, ProtocolError
from penumbra_mcp.node import NodeClient
from penumbra_mcp.server import StdioToolServer
from penumbra_mcp.tools import build_handlers

logger = logging.getLogger("penumbra_mcp")

EXIT_OK = 0
EXIT_STARTUP_FAILURE = 1
EXIT_PROTOCOL_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="penumbra-mcp",
        description="Penumbra tool server (MCP over stdio).",
    )
    parser.add_argument("--list-tools", action="store_true", help="Print the tool catalog as JSON and exit")
    parser.add_argument("--call", metavar="TOOL", help="Call one tool in-process and print the envelope")
    parser.add_argument("--arguments", default="{}", help="JSON object of arguments for --call")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug output")
    return parser


async def _call_once(dispatcher: Dispatcher, node: NodeClient | None, name: str, arguments: object) -> int:
    try:
        envelope = await dispatcher.dispatch(name, arguments)
    except ProtocolError as e:
        print(json.dumps({"error": e.to_dict()}), file=sys.stderr)
        return EXIT_PROTOCOL_ERROR
    finally:
        if node is not None:
            await node.close()
    print(json.dumps(envelope.to_dict(), indent=2))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = Settings.from_env()
        # listing the catalog never touches the node
        live = settings.node.live and not args.list_tools
        node = NodeClient(settings.node) if live else None
        dispatcher = Dispatcher(build_handlers(settings, node))
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_STARTUP_FAILURE
    except Exception:
        logger.exception("Failed to start Penumbra tool server")
        return EXIT_STARTUP_FAILURE

    if args.list_tools:
        print(json.dumps([d.to_dict() for d in dispatcher.list_tools()], indent=2))
        return EXIT_OK

    if args.call:
        try:
            arguments = json.loads(args.arguments)
        except json.JSONDecodeError as e:
            print(f"--arguments is not valid JSON: {e}", file=sys.stderr)
            return EXIT_PROTOCOL_ERROR
        return asyncio.run(_call_once(dispatcher, node, args.call, arguments))

    if node is not None:
        logger.info(f"Live node queries enabled against {settings.node.url}")
    server = StdioToolServer(dispatcher, on_close=node.close if node is not None else None)
    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception:
        logger.exception("Tool server crashed")
        return EXIT_STARTUP_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
