"""
hobbyshare CLI — `hobbyshare` command.

Commands:
  hobbyshare auth login|status|logout
  hobbyshare feed                  Read the feed page by page
  hobbyshare search <keyword>      Search posts
  hobbyshare notifications <cmd>   List, mark read, or watch live
"""

import asyncio
import json
import logging
from pathlib import Path

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install hobbyshare[cli]")

from hobbyshare.client import AsyncHobbyShare
from hobbyshare.config import Settings
from hobbyshare.errors import HobbyShareError

console = Console()
CONFIG_DIR = Path.home() / ".hobbyshare"
CONFIG_FILE = CONFIG_DIR / "config.json"
SESSION_FILE = CONFIG_DIR / "session.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _make_client() -> AsyncHobbyShare:
    settings = Settings()
    cfg = _load_config()
    if cfg.get("base_url"):
        settings.base_url = cfg["base_url"]
    return AsyncHobbyShare(
        settings=settings,
        session_file=SESSION_FILE,
        on_session_reset=lambda: console.print("[red]Session expired. Run `hobbyshare auth login`.[/red]"),
    )


def _get_client() -> AsyncHobbyShare:
    client = _make_client()
    if not client.is_authenticated:
        console.print("[red]Not logged in. Run `hobbyshare auth login` first.[/red]")
        raise SystemExit(1)
    return client


def _run(coro):
    try:
        return asyncio.run(coro)
    except HobbyShareError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log HTTP and channel activity")
def main(verbose: bool):
    """hobbyshare CLI — share your hobbies from the terminal."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)


# Register subcommands from separate modules
from hobbyshare.cli.auth import auth
from hobbyshare.cli.feed import feed_cmd, search_cmd
from hobbyshare.cli.notifications import notifications

main.add_command(auth)
main.add_command(feed_cmd)
main.add_command(search_cmd)
main.add_command(notifications)


if __name__ == "__main__":
    main()
