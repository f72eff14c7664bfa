"""
Jackbox CLI — `jackbox` command.

Commands:
  jackbox room <code>                  Show room info
  jackbox join <code> [-n NAME] [-p PICTURE]
                                       Join a room, optionally send a player picture
"""

import asyncio
import json
import logging
from pathlib import Path

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install jackbox-client[cli]")

from jackbox_client.client import AsyncJackboxClient
from jackbox_client.transport.http import DEFAULT_ROOM_BASE, DEFAULT_WS_BASE

console = Console()
CONFIG_FILE = Path.home() / ".jackbox" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _get_client() -> AsyncJackboxClient:
    cfg = _load_config()
    return AsyncJackboxClient(
        room_base=cfg.get("room_base", DEFAULT_ROOM_BASE),
        ws_base=cfg.get("ws_base", DEFAULT_WS_BASE),
        timeout=cfg.get("timeout"),
    )


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log protocol traffic.")
def main(verbose: bool):
    """Jackbox CLI — join a Jackbox.tv room from the terminal."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


# Register subcommands from separate modules
from jackbox_client.cli.rooms import room_cmd
from jackbox_client.cli.play import join_cmd

main.add_command(room_cmd)
main.add_command(join_cmd)


if __name__ == "__main__":
    main()
