"""CLI: wa-newsletter messages|updates"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from wa_newsletter.models.update import UpdateRecord

console = Console()


def _get_client():
    from wa_newsletter.cli.main import _get_client
    return _get_client()


def _run(coro):
    from wa_newsletter.cli.main import _run
    return _run(coro)


def _print_records(records: list[UpdateRecord], title: str, json_output: bool, show_status: bool = True) -> None:
    if json_output:
        exclude = {"message"} if show_status else {"message", "error"}
        click.echo(json.dumps([r.model_dump(mode="json", exclude=exclude) for r in records], indent=2))
        return
    table = Table(title=f"{title} ({len(records)})")
    table.add_column("Server ID", style="bold")
    table.add_column("Views", justify="right")
    table.add_column("Reactions")
    if show_status:
        table.add_column("Status")
    for r in records:
        reactions = " ".join(f"{x.code}×{x.count}" for x in r.reactions)
        row = [r.server_id or "", str(r.views), reactions]
        if show_status:
            row.append(f"[red]{r.error}[/red]" if r.error else "ok")
        table.add_row(*row)
    console.print(table)


@click.command("messages")
@click.argument("key")
@click.option("--invite", "is_invite", is_flag=True, help="KEY is an invite code, not a jid")
@click.option("-n", "--count", default=10, type=int)
@click.option("--after", default=None)
@click.option("--json-output", "--json", is_flag=True)
def messages_cmd(key: str, is_invite: bool, count: int, after: Optional[str], json_output: bool):
    """Fetch newsletter messages.

    Shows server ids, views and reactions. The CLI configures no message
    decryptor, so bodies are not decrypted and no Status column is shown.
    """

    client = _get_client()

    async def _fetch():
        await client.connect()
        try:
            with console.status("Fetching messages..."):
                records = await client.fetch_messages("invite" if is_invite else "jid", key, count, after)
        finally:
            await client.disconnect()
        _print_records(records, "Messages", json_output, show_status=client.can_decrypt)

    _run(_fetch())


@click.command("updates")
@click.argument("jid")
@click.option("-n", "--count", default=10, type=int)
@click.option("--after", default=None)
@click.option("--since", default=None)
@click.option("--json-output", "--json", is_flag=True)
def updates_cmd(jid: str, count: int, after: Optional[str], since: Optional[str], json_output: bool):
    """Fetch view/reaction updates."""

    client = _get_client()

    async def _fetch():
        await client.connect()
        try:
            with console.status("Fetching updates..."):
                records = await client.fetch_updates(jid, count, after=after, since=since)
        finally:
            await client.disconnect()
        _print_records(records, "Updates", json_output)

    _run(_fetch())
