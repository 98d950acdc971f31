"""CLI: wa-newsletter config set|show"""

from typing import Optional

import click
from rich.console import Console

console = Console()


def _load_config() -> dict:
    from wa_newsletter.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from wa_newsletter.cli.main import _save_config
    _save_config(cfg)


@click.group()
def config():
    """Connection settings."""


@config.command("set")
@click.option("--token", default=None, help="Transport auth token")
@click.option("--me-id", default=None, help="Own account jid")
@click.option("--me-lid", default=None, help="Own account lid")
@click.option("--base-url", default=None, help="Transport base URL")
def config_set(token: Optional[str], me_id: Optional[str], me_lid: Optional[str], base_url: Optional[str]):
    """Save connection settings."""
    cfg = _load_config()
    if token is None and not cfg.get("token"):
        token = click.prompt("Token", hide_input=True)
    updates = {"token": token, "me_id": me_id, "me_lid": me_lid, "base_url": base_url}
    cfg.update({k: v for k, v in updates.items() if v is not None})
    _save_config(cfg)
    console.print("[green]Settings saved to ~/.wa-newsletter/config.json[/green]")


@config.command("show")
def config_show():
    """Show current settings."""
    cfg = _load_config()
    if not cfg:
        console.print("[yellow]No settings. Run `wa-newsletter config set`.[/yellow]")
        return
    for key, value in sorted(cfg.items()):
        shown = "****" if key == "token" and value else value
        console.print(f"{key}: {shown}")


@config.command("clear")
def config_clear():
    """Clear saved settings."""
    _save_config({})
    console.print("[green]Settings cleared.[/green]")
