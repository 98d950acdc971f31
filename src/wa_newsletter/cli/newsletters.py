"""CLI: wa-newsletter subscribed|metadata|follow|unfollow|mute|unmute|rename|describe"""

import json

import click
from rich.console import Console
from rich.table import Table

console = Console()


def _get_client():
    from wa_newsletter.cli.main import _get_client
    return _get_client()


def _run(coro):
    from wa_newsletter.cli.main import _run
    return _run(coro)


@click.command("subscribed")
@click.option("--json-output", "--json", is_flag=True)
def subscribed_cmd(json_output: bool):
    """List followed newsletters."""

    client = _get_client()

    async def _list():
        await client.connect()
        try:
            result = await client.fetch_all_subscribed()
        finally:
            await client.disconnect()
        if json_output or not isinstance(result, list):
            click.echo(json.dumps(result, indent=2))
            return
        table = Table(title=f"Newsletters ({len(result)})")
        table.add_column("ID", style="bold")
        table.add_column("Name")
        table.add_column("Role")
        for item in result:
            thread = item.get("thread_metadata") or {}
            name = (thread.get("name") or {}).get("text", "")
            role = (item.get("viewer_metadata") or {}).get("role", "")
            table.add_row(item.get("id", ""), name, role)
        console.print(table)

    _run(_list())


@click.command("metadata")
@click.argument("key")
@click.option("--invite", "is_invite", is_flag=True, help="KEY is an invite code, not a jid")
@click.option("--json-output", "--json", is_flag=True)
def metadata_cmd(key: str, is_invite: bool, json_output: bool):
    """Show newsletter metadata."""

    client = _get_client()

    async def _metadata():
        await client.connect()
        try:
            record = await client.metadata("invite" if is_invite else "jid", key)
        finally:
            await client.disconnect()
        if json_output:
            click.echo(record.model_dump_json(indent=2))
            return
        table = Table(title=record.name or record.id or key, show_header=False)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        for field, value in record.model_dump(exclude_none=True).items():
            table.add_row(field, str(value))
        console.print(table)

    _run(_metadata())


def _simple_action(name: str, help_text: str, method: str, done: str):
    @click.command(name, help=help_text)
    @click.argument("jid")
    def _cmd(jid: str):
        client = _get_client()

        async def _act():
            await client.connect()
            try:
                with console.status(f"{help_text.rstrip('.')}..."):
                    await getattr(client, method)(jid)
            finally:
                await client.disconnect()
            console.print(f"[green]{done} {jid}[/green]")

        _run(_act())

    return _cmd


follow_cmd = _simple_action("follow", "Follow a newsletter.", "follow", "Following")
unfollow_cmd = _simple_action("unfollow", "Unfollow a newsletter.", "unfollow", "Unfollowed")
mute_cmd = _simple_action("mute", "Mute a newsletter.", "mute", "Muted")
unmute_cmd = _simple_action("unmute", "Unmute a newsletter.", "unmute", "Unmuted")


@click.command("rename")
@click.argument("jid")
@click.argument("name")
def rename_cmd(jid: str, name: str):
    """Change a newsletter's name."""

    client = _get_client()

    async def _rename():
        await client.connect()
        try:
            await client.update_name(jid, name)
        finally:
            await client.disconnect()
        console.print(f"[green]Renamed {jid}[/green]")

    _run(_rename())


@click.command("describe")
@click.argument("jid")
@click.argument("description")
def describe_cmd(jid: str, description: str):
    """Change a newsletter's description."""

    client = _get_client()

    async def _describe():
        await client.connect()
        try:
            await client.update_description(jid, description)
        finally:
            await client.disconnect()
        console.print(f"[green]Description updated for {jid}[/green]")

    _run(_describe())
