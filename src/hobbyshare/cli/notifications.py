"""CLI: hobbyshare notifications list|read-all|watch"""

import asyncio

import click
from rich.console import Console
from rich.table import Table

console = Console()


def _get_client():
    from hobbyshare.cli.main import _get_client
    return _get_client()


def _run(coro):
    from hobbyshare.cli.main import _run
    return _run(coro)


@click.group()
def notifications():
    """Notification commands."""


@notifications.command("list")
@click.option("--limit", default=15, type=int)
def notifications_list(limit: int):
    """List recent notifications."""

    async def _list():
        client = _get_client()
        try:
            items = await client.notifications.list(page_size=limit)
            unread = await client.notifications.unread_count()
        finally:
            await client.close()
        table = Table(title=f"Notifications ({unread} unread)")
        table.add_column("ID", style="bold")
        table.add_column("Type")
        table.add_column("From")
        table.add_column("Message")
        table.add_column("Read")
        for n in items:
            table.add_row(
                str(n.notification_id), n.notification_type.value, n.sender_nickname,
                n.message, "✓" if n.read else "",
            )
        console.print(table)

    _run(_list())


@notifications.command("read-all")
def notifications_read_all():
    """Mark every notification read."""

    async def _read_all():
        client = _get_client()
        try:
            await client.notifications.mark_all_read()
        finally:
            await client.close()
        console.print("[green]All notifications marked read.[/green]")

    _run(_read_all())


@notifications.command("watch")
def notifications_watch():
    """Print notifications as they arrive (Ctrl+C to exit)."""

    async def _watch():
        client = _get_client()

        def show(n) -> None:
            console.print(f"[cyan]{n.notification_type.value}[/cyan] {n.sender_nickname}: {n.message}")

        try:
            channel = client.connect_notifications(on_notification=show)
            console.print("[dim]Listening for notifications...[/dim]")
            await channel.wait_closed()
            console.print("[yellow]Notification stream closed.[/yellow]")
        except asyncio.CancelledError:
            pass
        finally:
            await client.close()

    try:
        _run(_watch())
    except KeyboardInterrupt:
        pass
