import click

from marketplace.infrastructure.cli.order_commands import (
    order_cancel,
    order_history,
    order_list,
    order_payment,
    order_place,
    order_show,
    order_status,
)
from marketplace.infrastructure.cli.sku_commands import sku_add, sku_list, sku_set_stock
from marketplace.infrastructure.cli.user_commands import user_add
from marketplace.infrastructure.config import Settings
from marketplace.infrastructure.logging import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Marketplace order lifecycle and stock."""
    settings = Settings.from_env()
    configure_logging(settings)
    ctx.obj = settings


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def sku() -> None:
    """Manage SKUs and stock."""


@cli.group()
def user() -> None:
    """Manage users."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_history)
order.add_command(order_list)
order.add_command(order_payment)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_status)
sku.add_command(sku_add)
sku.add_command(sku_list)
sku.add_command(sku_set_stock)
user.add_command(user_add)
