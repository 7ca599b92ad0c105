"""Unified entry point for devlog.

This module selects which interface to start:
- CLI (default): every argument is passed to the typer app
- HTTP tool server: `python -m devlog api [--host HOST] [--port PORT]`
"""

import argparse
import sys


def build_api_parser() -> argparse.ArgumentParser:
    """Argument parser for the tool server interface."""
    parser = argparse.ArgumentParser(
        prog="devlog api",
        description="Start the devlog HTTP tool server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m devlog api                # Start tool server
  python -m devlog api --port 8080    # Start tool server on custom port
""",
    )

    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind the tool server to (default: 127.0.0.1)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for the tool server (default: 8421)",
    )
    return parser


def main():
    """Main entry point with interface selection."""
    argv = sys.argv[1:]

    if argv and argv[0] == "api":
        import uvicorn

        from devlog.core.config import DEVLOG_HOST, DEVLOG_PORT

        args = build_api_parser().parse_args(argv[1:])
        host = args.host or DEVLOG_HOST or "127.0.0.1"
        port = args.port or DEVLOG_PORT

        print(f"Starting devlog tool server on {host}:{port}")
        uvicorn.run(
            "devlog.api.app:app",
            host=host,
            port=port,
            reload=False,
        )
        return

    from devlog.interfaces.cli.app import run_cli

    if argv and argv[0] == "cli":
        argv = argv[1:]
    sys.argv = [sys.argv[0], *argv]
    run_cli()


if __name__ == "__main__":
    main()
