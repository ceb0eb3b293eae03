"""CLI commands for SKUs and stock."""

from __future__ import annotations

import click

from marketplace.application.add_sku import AddSkuHandler
from marketplace.application.response import ServiceResponse
from marketplace.application.set_stock import SetSkuStockHandler
from marketplace.application.show_stock import ShowStockHandler
from marketplace.infrastructure.bootstrap import sku_repository, unit_of_work
from marketplace.infrastructure.cli.output import emit, format_money, json_option
from marketplace.infrastructure.config import Settings


@click.command("add")
@click.option("--code", "sku_code", required=True, help="SKU code.")
@click.option("--name", "product_name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--currency", default="USD", show_default=True, help="ISO currency code.")
@click.option("--stock", type=int, default=0, show_default=True, help="Initial stock.")
@json_option
@click.pass_obj
def sku_add(
    settings: Settings,
    sku_code: str,
    product_name: str,
    price: str,
    currency: str,
    stock: int,
    as_json: bool,
) -> None:
    """Add a new SKU to the catalog."""
    handler = AddSkuHandler(unit_of_work(settings))

    def render(dto) -> None:
        price_text = format_money(dto.price, dto.currency)
        click.echo(f"SKU #{dto.sku_id} '{dto.sku_code}' added at {price_text}")

    response = handler.handle(sku_code, product_name, price, stock, currency=currency)
    emit(response, as_json, render)


@click.command("set-stock")
@click.option("--id", "sku_id", required=True, help="SKU ID.")
@click.option("--quantity", required=True, type=int, help="Units on hand.")
@json_option
@click.pass_obj
def sku_set_stock(settings: Settings, sku_id: str, quantity: int, as_json: bool) -> None:
    """Set the stock level of a SKU."""
    handler = SetSkuStockHandler(unit_of_work(settings))

    def render(dto) -> None:
        click.echo(f"Stock for '{dto.sku_code}' set to {dto.stock_quantity}")

    emit(handler.handle(sku_id, quantity), as_json, render)


@click.command("list")
@json_option
@click.pass_obj
def sku_list(settings: Settings, as_json: bool) -> None:
    """Show current stock levels."""
    lines = ShowStockHandler(sku_repository(settings)).handle()

    def render(lines) -> None:
        if not lines:
            click.echo("No SKUs found.")
            return
        click.echo(f"{'ID':<6} {'Code':<12} {'Product':<20} {'Price':>10} {'Stock':>7}")
        click.echo("-" * 59)
        for line in lines:
            click.echo(
                f"{line.sku_id:<6} {line.sku_code:<12} {line.product_name:<20} "
                f"{format_money(line.price, line.currency):>10} {line.stock_quantity:>7}"
            )

    emit(ServiceResponse.ok("Stock retrieved successfully", lines), as_json, render)
