"""
wa-newsletter CLI — `wa-newsletter` command.

Commands:
  wa-newsletter config set|show          Connection settings
  wa-newsletter subscribed               Followed newsletters
  wa-newsletter metadata <jid|invite>    Newsletter metadata
  wa-newsletter messages <jid|invite>    Fetch messages
  wa-newsletter updates <jid>            Fetch view/reaction updates
  wa-newsletter follow|unfollow|mute|unmute <jid>
  wa-newsletter rename|describe <jid> <text>
"""

import asyncio
import json
import logging
from pathlib import Path

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install wa-newsletter[cli]")

from wa_newsletter.client import AsyncNewsletterClient, DEFAULT_BASE_URL
from wa_newsletter.models.queries import DecryptFailurePolicy

console = Console()
CONFIG_FILE = Path.home() / ".wa-newsletter" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client() -> AsyncNewsletterClient:
    cfg = _load_config()
    if not cfg.get("token"):
        console.print("[red]No connection settings. Run `wa-newsletter config set` first.[/red]")
        raise SystemExit(1)
    return AsyncNewsletterClient(
        token=cfg["token"],
        me_id=cfg.get("me_id"),
        me_lid=cfg.get("me_lid"),
        base_url=cfg.get("base_url", DEFAULT_BASE_URL),
        decrypt_policy=DecryptFailurePolicy.PARTIAL,
        auto_follow=False,
    )


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """wa-newsletter CLI — query and sync WhatsApp newsletters."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands from separate modules
from wa_newsletter.cli.config import config
from wa_newsletter.cli.messages import messages_cmd, updates_cmd
from wa_newsletter.cli.newsletters import (
    describe_cmd, follow_cmd, metadata_cmd, mute_cmd, rename_cmd,
    subscribed_cmd, unfollow_cmd, unmute_cmd,
)

main.add_command(config)
main.add_command(subscribed_cmd)
main.add_command(metadata_cmd)
main.add_command(messages_cmd)
main.add_command(updates_cmd)
main.add_command(follow_cmd)
main.add_command(unfollow_cmd)
main.add_command(mute_cmd)
main.add_command(unmute_cmd)
main.add_command(rename_cmd)
main.add_command(describe_cmd)


if __name__ == "__main__":
    main()
