"""CLI: jackbox room"""

import json

import click
from rich.console import Console
from rich.table import Table

from jackbox_client.errors import JackboxError

console = Console()


def _get_client():
    from jackbox_client.cli.main import _get_client
    return _get_client()


def _run(coro):
    from jackbox_client.cli.main import _run
    return _run(coro)


@click.command("room")
@click.argument("room_code")
@click.option("--json-output", "--json", is_flag=True)
def room_cmd(room_code: str, json_output: bool):
    """Look up a room code."""

    async def _lookup():
        client = _get_client()
        try:
            return await client.rooms.get(room_code, client.user_id)
        finally:
            await client.http.close()

    try:
        room = _run(_lookup())
    except JackboxError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    if json_output:
        click.echo(json.dumps(room.model_dump(by_alias=True), indent=2))
        return
    table = Table(title=f"Room {room.room_id}")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Game", room.app_tag)
    table.add_row("App ID", room.app_id)
    table.add_row("Server", room.server)
    table.add_row("Join as", room.join_as)
    table.add_row("Audience", f"{room.num_audience} ({'on' if room.audience_enabled else 'off'})")
    table.add_row("Password", "yes" if room.requires_password else "no")
    console.print(table)
