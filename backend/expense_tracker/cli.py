"""
Command line entry point for the Expense Tracker server.

Usage:
    expense-tracker [--port PORT] [--host HOST] [--db PATH] [--no-browser]
"""

import argparse
import os
import webbrowser

import qrcode
import structlog
import uvicorn

from .config import load_settings
from .logging_config import configure_logging

logger = structlog.get_logger(__name__)


def print_qr_code(url: str) -> None:
    """Print a QR code to the terminal."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=1,
        border=1,
    )
    qr.add_data(url)
    qr.make(fit=True)

    # Print QR code using ASCII
    qr.print_ascii(invert=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Expense Tracker")
    parser.add_argument("--port", type=int, default=8000, help="Port to run on")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--db", default=None, help="SQLite database file (overrides settings)")
    parser.add_argument("--no-browser", action="store_true", help="Don't open browser")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    if args.db:
        # Read by load_settings() in the server process
        os.environ["EXPENSE_TRACKER_DB"] = os.path.abspath(args.db)

    settings = load_settings()
    configure_logging(settings.log_level, json_output=settings.log_json)

    url = f"http://{args.host}:{args.port}"

    print("\n" + "=" * 50)
    print("  Expense Tracker")
    print("=" * 50)
    print(f"\n  URL: {url}\n")

    try:
        print_qr_code(url)
    except Exception:
        # QR code is optional
        logger.debug("qr_code_unavailable", exc_info=True)

    print("\n  Press Ctrl+C to stop the server\n")
    print("=" * 50 + "\n")

    if not args.no_browser:
        webbrowser.open(f"{url}/docs")

    uvicorn.run(
        "expense_tracker.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
