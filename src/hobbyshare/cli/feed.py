"""CLI: hobbyshare feed, hobbyshare search"""

import json

import click
from rich.console import Console
from rich.table import Table

from hobbyshare.models.search import SearchParams

console = Console()


def _make_client():
    from hobbyshare.cli.main import _make_client
    return _make_client()


def _run(coro):
    from hobbyshare.cli.main import _run
    return _run(coro)


def _post_table(title: str, rows: list) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="bold")
    table.add_column("Author")
    table.add_column("Title")
    table.add_column("Tags")
    table.add_column("♥", justify="right")
    table.add_column("💬", justify="right")
    for p in rows:
        table.add_row(
            str(p.post_id), p.nickname, p.title, ", ".join(p.post_hobby_tags),
            str(p.like_count), str(p.comment_count),
        )
    return table


@click.command("feed")
@click.option("--pages", default=1, type=int, help="Number of pages to load")
@click.option("--page-size", default=15, type=int)
@click.option("--hobby", is_flag=True, help="Only posts matching my hobby tags")
@click.option("--json-output", "--json", is_flag=True)
def feed_cmd(pages: int, page_size: int, hobby: bool, json_output: bool):
    """Read the feed. Visitors get the public feed."""

    async def _feed():
        client = _make_client()
        try:
            if client.is_authenticated:
                paginator = client.posts.feed_paginator(tag_exist=hobby, page_size=page_size)
            else:
                paginator = client.posts.public_feed_paginator(limit=page_size)
            for _ in range(pages):
                await paginator.load_more()
                if not paginator.has_more:
                    break
            posts = paginator.items
        finally:
            await client.close()
        if json_output:
            click.echo(json.dumps([p.model_dump(by_alias=True) for p in posts], indent=2, ensure_ascii=False))
            return
        console.print(_post_table(f"Feed ({len(posts)} posts)", posts))
        if paginator.has_more:
            console.print("[dim]More posts available; use --pages to load more.[/dim]")

    _run(_feed())


@click.command("search")
@click.argument("keyword", required=False, default="")
@click.option("--user", "keyword_user", default="", help="Search by author nickname")
@click.option("--tag", "hobby_tags", multiple=True, help="Hobby tag filter (repeatable)")
@click.option("--mbti", multiple=True, help="MBTI filter (repeatable)")
@click.option("--limit", default=15, type=int)
def search_cmd(keyword: str, keyword_user: str, hobby_tags: tuple, mbti: tuple, limit: int):
    """Search posts by text, author, hobby tags or MBTI."""
    params = SearchParams(keyword_text=keyword, keyword_user=keyword_user, hobby_tags=list(hobby_tags), mbti=list(mbti))

    async def _search():
        client = _make_client()
        try:
            paginator = client.search.paginator(params, limit=limit)
            posts = await paginator.load_more()
        finally:
            await client.close()
        console.print(_post_table(f"Results ({len(posts)})", posts))

    _run(_search())
