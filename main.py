# main.py

"""Entry point for the inventory tracker (TUI, API server, or headless CLI)."""

import argparse
import asyncio
import locale
import logging
import sys

from inventory_tracker.config.logging_config import setup_logging
from inventory_tracker.config.settings import Settings

logger = logging.getLogger("inventory_tracker.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="inventory_tracker",
        description="Product inventory tracker.",
        epilog=f"Default API: {Settings.API_BASE_URL}",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        default=False,
        help="Run the products API server instead of the TUI.",
    )
    parser.add_argument(
        "--host",
        default=None,
        help=f"Bind address for --serve (default: {Settings.SERVER_HOST}).",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help=f"Port for --serve (default: {Settings.SERVER_PORT}).",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        dest="api_url",
        help="Base URL of the products API used by the TUI and CLI.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        default=False,
        dest="list_products",
        help="Print all products and exit.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="table",
        dest="output_format",
        help="Output format for --list (default: table).",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Run a connectivity health check against the API.",
    )
    return parser


def _use_system_collation() -> None:
    """Sort product names with the user's locale rules when available."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logger.warning("System locale unavailable, using code-point order")


def _run_tui(api_url: str | None) -> None:
    """Launch the interactive Textual TUI."""
    from inventory_tracker.clients.product_client import ProductClient
    from inventory_tracker.ui.app import InventoryApp

    try:
        app = InventoryApp(ProductClient(api_url) if api_url else None)
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("inventory_tracker TUI shutting down")


def _run_list(args: argparse.Namespace) -> None:
    """List products headlessly and exit."""
    from inventory_tracker.cli.runner import cli_list

    exit_code = asyncio.run(cli_list(args.output_format, args.api_url))
    sys.exit(exit_code)


def _run_health_check(api_url: str | None) -> None:
    """Run API connectivity health check."""
    from inventory_tracker.cli.runner import run_health_check

    exit_code = asyncio.run(run_health_check(api_url))
    sys.exit(exit_code)


def _run_server(args: argparse.Namespace) -> None:
    """Serve the products API."""
    from inventory_tracker.cli.runner import run_server

    sys.exit(run_server(args.host, args.port))


def main() -> None:
    """Route to the server, a headless command, or the TUI."""
    parser = _build_parser()
    args = parser.parse_args()

    log_file = setup_logging(
        logging.INFO if args.serve else logging.WARNING
    )
    logger.info("inventory_tracker starting, log file: %s", log_file)
    _use_system_collation()

    if args.serve:
        _run_server(args)
    elif args.health:
        _run_health_check(args.api_url)
    elif args.list_products:
        _run_list(args)
    else:
        _run_tui(args.api_url)


if __name__ == "__main__":
    main()
