"""Click CLI for sending messages, looking up people and signing payloads."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from graph_messenger.errors import GraphMessengerError
from graph_messenger.messenger import Messenger
from graph_messenger.models import MessageSend
from graph_messenger.webhook.signature import sign


@click.group()
@click.option("--token", default=None, help="Page access token (env TOKEN wins).")
@click.option("--verify-token", default=None, help="Webhook verify token (env VERIFY_TOKEN wins).")
@click.pass_context
def cli(ctx: click.Context, token: str | None, verify_token: str | None) -> None:
    """Messenger Graph API client CLI."""
    ctx.ensure_object(dict)
    ctx.obj["options"] = {"token": token, "verify_token": verify_token}


def _messenger(ctx: click.Context) -> Messenger:
    return Messenger(**ctx.obj["options"])


@cli.command()
@click.argument("person_id")
@click.argument("text")
@click.pass_context
def send(ctx: click.Context, person_id: str, text: str) -> None:
    """Send a text message to a person."""
    messenger = _messenger(ctx)
    try:
        message = asyncio.run(
            messenger.send_message(MessageSend(person_id=person_id, text=text))
        )
    except GraphMessengerError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(message.model_dump_json(indent=2))


@cli.command()
@click.argument("person_id")
@click.pass_context
def person(ctx: click.Context, person_id: str) -> None:
    """Show a person's profile."""
    messenger = _messenger(ctx)
    try:
        profile = asyncio.run(messenger.get_person(person_id))
    except GraphMessengerError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(profile.model_dump_json(indent=2))


@cli.command("sign")
@click.option("--secret", required=True, help="Webhook (app) secret.")
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False))
def sign_command(secret: str, payload_file: str) -> None:
    """Print the x-hub-signature value for a payload file."""
    payload = Path(payload_file).read_text(encoding="utf-8")
    click.echo(sign(secret, payload))
