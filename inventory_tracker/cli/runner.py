# inventory_tracker/cli/runner.py

"""Headless CLI commands: list products, health check, API server."""

import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from inventory_tracker.clients.product_client import ProductClient
from inventory_tracker.config.settings import Settings
from inventory_tracker.models.product import Product
from inventory_tracker.ui.presentation import (
    StockStatus,
    low_stock_count,
    stock_status,
    total_units,
)

logger = logging.getLogger("inventory_tracker.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)

_STATUS_MARKUP: dict[StockStatus, str] = {
    StockStatus.IN_STOCK: "[green]in stock[/green]",
    StockStatus.LOW_STOCK: "[yellow]low stock[/yellow]",
    StockStatus.OUT_OF_STOCK: "[red]out of stock[/red]",
}


def _print_table(products: list[Product]) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(
        title="Inventory",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", max_width=40)
    table.add_column("Code", style="magenta")
    table.add_column("Stock", justify="right")
    table.add_column("Status", justify="center")
    table.add_column("Description", overflow="fold", style="dim")

    for idx, p in enumerate(products, 1):
        table.add_row(
            str(idx),
            p.name[:40],
            p.code,
            str(p.count),
            _STATUS_MARKUP[stock_status(p.count)],
            p.description or "—",
        )

    Console().print(table)


async def cli_list(
    output_format: str,
    api_url: str | None = None,
) -> int:
    """List products from the API and return an exit code (0=ok, 1=fail)."""
    async with ProductClient(api_url) as client:
        _err.print(f"[dim]Fetching products from {client.base_url}[/dim]")
        try:
            products = await client.list_products()
        except Exception as exc:
            logger.error("Listing failed: %s", exc, exc_info=True)
            _err.print(f"[red]Error: {exc}[/red]")
            return 1

    low = low_stock_count(products)
    detail = f" ({low} low stock)" if low else ""
    _err.print(
        f"[green]✓ {len(products)} products,"
        f" {total_units(products)} units{detail}[/green]"
    )

    if output_format == "table":
        _print_table(products)
    else:
        json.dump(
            [p.to_dict() for p in products],
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return 0


async def run_health_check(api_url: str | None = None) -> int:
    """Probe the API's health endpoint."""
    from inventory_tracker.services.health_checker import HealthChecker

    _err.print("[bold]Running API health check...[/bold]")
    result = await HealthChecker(api_url).check()

    table = Table(
        title="API Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Target", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    if result.status == "ok":
        status = "[green]✅ OK[/green]"
    elif result.status == "slow":
        status = "[yellow]⚠️  SLOW[/yellow]"
    else:
        status = "[red]❌ DOWN[/red]"

    latency = (
        f"{result.latency_ms:.0f}ms"
        if result.latency_ms > 0
        else "—"
    )
    table.add_row(result.target, status, latency, result.message)

    Console().print(table)
    return 1 if result.status == "down" else 0


def run_server(host: str | None = None, port: int | None = None) -> int:
    """Serve the products API with uvicorn until interrupted."""
    import uvicorn

    from inventory_tracker.api.app import create_app

    bind_host = host or Settings.SERVER_HOST
    bind_port = port or Settings.SERVER_PORT
    _err.print(
        f"[bold]Serving inventory API on http://{bind_host}:{bind_port}[/bold]"
    )
    logger.info("Starting API server on %s:%d", bind_host, bind_port)
    uvicorn.run(create_app(), host=bind_host, port=bind_port)
    return 0
