"""CLI: hobbyshare auth login|status|logout"""

from typing import Optional

import click
from rich.console import Console

console = Console()


def _load_config() -> dict:
    from hobbyshare.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from hobbyshare.cli.main import _save_config
    _save_config(cfg)


def _make_client():
    from hobbyshare.cli.main import _make_client
    return _make_client()


def _run(coro):
    from hobbyshare.cli.main import _run
    return _run(coro)


@click.group()
def auth():
    """Authentication commands."""


@auth.command("login")
@click.option("--base-url", default=None, help="API base URL")
@click.option("--email", default=None)
def auth_login(base_url: Optional[str], email: Optional[str]):
    """Log in with email and password."""
    if base_url:
        _save_config({**_load_config(), "base_url": base_url})

    async def _login():
        client = _make_client()
        try:
            address = email or click.prompt("Email")
            password = click.prompt("Password", hide_input=True)
            with console.status("Logging in..."):
                result = await client.auth.login(address, password)
            console.print(f"[green]Logged in as {result.nickname or address} (ID: {result.user_id})[/green]")
        finally:
            await client.close()

    _run(_login())
    console.print("[dim]Session saved to ~/.hobbyshare/session.json[/dim]")


@auth.command("status")
def auth_status():
    """Show current auth status."""

    async def _status():
        client = _make_client()
        try:
            if client.is_authenticated:
                console.print(f"[green]Logged in[/green] (ID: {client.session.user_id})")
            else:
                console.print("[yellow]Not logged in. Run `hobbyshare auth login`.[/yellow]")
        finally:
            await client.close()

    _run(_status())


@auth.command("logout")
def auth_logout():
    """Log out and clear the saved session."""

    async def _logout():
        client = _make_client()
        try:
            await client.auth.logout()
        finally:
            await client.close()

    _run(_logout())
    console.print("[green]Logged out.[/green]")
