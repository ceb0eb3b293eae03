"""CLI commands for marketplace users."""

from __future__ import annotations

import click

from marketplace.application.register_user import RegisterUserHandler
from marketplace.infrastructure.bootstrap import unit_of_work
from marketplace.infrastructure.cli.output import emit, json_option
from marketplace.infrastructure.config import Settings


@click.command("add")
@click.option("--identity", "identity_id", required=True, help="External identity id.")
@click.option("--email", required=True, help="Email address.")
@click.option("--name", default="", help="Display name.")
@json_option
@click.pass_obj
def user_add(
    settings: Settings, identity_id: str, email: str, name: str, as_json: bool
) -> None:
    """Register a user for an external identity."""
    handler = RegisterUserHandler(unit_of_work(settings))

    def render(user) -> None:
        click.echo(f"User {user.id} registered for identity '{user.identity_id}'")

    emit(handler.handle(identity_id, email, name), as_json, render)
