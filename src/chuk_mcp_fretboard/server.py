#!/usr/bin/env python3
"""
Entry point for the CHUK Fretboard MCP Server.

This module provides the main entry point for the MCP server,
supporting multiple transport modes (stdio, http).
"""

import argparse
import asyncio
import logging
import os

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

STYLES_DIR_ENV = "CHUK_FRETBOARD_STYLES_DIR"


def main() -> None:
    """Main entry point with transport detection."""
    parser = argparse.ArgumentParser(description="CHUK Fretboard MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--styles-dir",
        default=None,
        help="Directory of project style packs (default: ./styles)",
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.styles_dir:
        os.environ[STYLES_DIR_ENV] = args.styles_dir

    # Import after argument parsing so --debug and --styles-dir cover registry loading
    from chuk_mcp_fretboard.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting CHUK Fretboard MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Fretboard MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
