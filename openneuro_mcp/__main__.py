"""
Console entry point: serve the OpenNeuro MCP app over SSE with uvicorn.

    openneuro-mcp --host 127.0.0.1 --port 8001
    python -m openneuro_mcp --log-level DEBUG
"""

import argparse
import sys

import uvicorn

from .app import app
from .config import LOG_LEVELS, RelaySettings
from .logging import set_log_level


def parse_args(argv: list[str] | None = None, settings: RelaySettings | None = None) -> argparse.Namespace:
    settings = settings or RelaySettings.from_env()
    parser = argparse.ArgumentParser(description="OpenNeuro GraphQL MCP server (SSE transport)")
    parser.add_argument("--host", default=settings.host, help="Bind host (env: MCP_HOST)")
    parser.add_argument("--port", type=int, default=settings.port, help="Bind port (env: MCP_PORT)")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=settings.log_level,
        help="Logging level (env: LOG_LEVEL)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    set_log_level(args.log_level)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
