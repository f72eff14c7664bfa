"""CLI: jackbox join"""

from typing import Optional

import click
from rich.console import Console

from jackbox_client.errors import JackboxError
from jackbox_client.models.messages import EventMessage, ResultMessage

console = Console()


def _load_config() -> dict:
    from jackbox_client.cli.main import _load_config
    return _load_config()


def _get_client():
    from jackbox_client.cli.main import _get_client
    return _get_client()


def _run(coro):
    from jackbox_client.cli.main import _run
    return _run(coro)


@click.command("join")
@click.argument("room_code")
@click.option("-n", "--name", default=None, help="Display name (defaults to config `name`).")
@click.option("-p", "--picture", "picture", default=None, type=click.Path(dir_okay=False),
              help="Drawful drawing JSON to send as the player picture.")
def join_cmd(room_code: str, name: Optional[str], picture: Optional[str]):
    """Join a room and stay connected until the session ends."""
    name = name or _load_config().get("name")
    if not name:
        raise click.UsageError("--name is required (or set `name` in ~/.jackbox/config.json)")

    async def _join():
        client = _get_client()
        try:
            room = await client.join_room(name, room_code)
            console.print(f"[dim]Joined {room.app_tag} room {room.room_id} as {name}[/dim]")
            if picture:
                await client.set_player_picture(picture)
            async for message in client.messages():
                if isinstance(message, ResultMessage):
                    status = "ok" if message.success else "failed"
                    console.print(f"[green]{message.action}[/green] {status}")
                elif isinstance(message, EventMessage):
                    console.print(f"[cyan]{message.event}[/cyan] {message.blob}")
        finally:
            await client.close()

    try:
        _run(_join())
    except KeyboardInterrupt:
        pass
    except JackboxError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
