"""Shared helpers for turning service responses into CLI output."""

from __future__ import annotations

import json
from typing import Any, Callable

import click

from marketplace.application.response import ServiceResponse

json_option = click.option(
    "--json", "as_json", is_flag=True, default=False,
    help="Print the {success, message, data} envelope as JSON.",
)

_CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}


def format_money(amount: str, currency: str) -> str:
    """Render a DTO amount for humans, e.g. ``$70.00`` or ``70.00 CHF``."""
    symbol = _CURRENCY_SYMBOLS.get(currency)
    return f"{symbol}{amount}" if symbol else f"{amount} {currency}"


def emit(
    response: ServiceResponse[Any],
    as_json: bool,
    render: Callable[[Any], None] | None = None,
) -> None:
    """Print a response; a failed response exits with status 1."""
    if as_json:
        click.echo(json.dumps(response.to_dict(), indent=2))
        if not response.success:
            raise click.exceptions.Exit(1)
        return

    if not response.success:
        raise click.ClickException(response.message)
    if render is not None:
        render(response.data)
    else:
        click.echo(response.message)
