#!/usr/bin/env python3
"""
Postboard command line.

Commands:
1. ``serve``      run the web application with uvicorn
2. ``posts``      list posts from a running server
3. ``post``       sign in and create a post on a running server
4. ``check-deps`` verify runtime dependencies are importable
"""

from __future__ import annotations

import asyncio
import logging
import os

import click
import uvicorn
from rich.console import Console
from rich.table import Table

from postboard.backend.cli.check_deps import main as check_deps_main
from postboard.backend.core.utils.config import resolve_config
from postboard.backend.core.utils.logging_setup import setup_logging, setup_logging_from_config
from postboard.backend.schemas import PostCreateIn, PostOut, SignInIn
from postboard.frontend.client import PostboardClient
from postboard.frontend.views import format_created_date

console = Console()
logger = logging.getLogger(__name__)


def _flag_level(verbose: bool, debug: bool) -> int | None:
    if debug:
        return logging.DEBUG
    return logging.INFO if verbose else None


def _fail(what: str, exc: Exception, debug: bool) -> None:
    console.print(f"\n[bold red]{what}:[/bold red] {exc}")
    logger.exception(what)
    if debug:
        raise exc
    raise SystemExit(1) from exc


def print_posts(posts: list[PostOut]) -> None:
    """Print posts as a rich table."""
    table = Table(title=f"Posts ({len(posts)})")
    table.add_column("Date", style="dim")
    table.add_column("Author", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Body")
    for post in posts:
        table.add_row(format_created_date(post.created_at), post.author.name, post.title, post.body)
    console.print(table)


async def _list_posts(url: str) -> list[PostOut]:
    async with PostboardClient(url) as client:
        return await client.get_all_posts()


async def _create_post(url: str, title: str, body: str, name: str | None) -> PostOut:
    async with PostboardClient(url) as client:
        await client.sign_in(SignInIn(name=name))
        return await client.create_post(PostCreateIn(title=title, body=body))


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output.")
@click.option("--debug", is_flag=True, default=False, help="Enable debug mode with additional logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Postboard: list posts, create a post, sign in and out."""
    level = _flag_level(verbose, debug)
    setup_logging(level if level is not None else logging.WARNING)
    ctx.obj = {"debug": debug, "level": level}


@cli.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    default=None,
    help="Path to configuration file.",
)
@click.option("--host", default=None, help="Bind address (defaults to server.host).")
@click.option("--port", type=int, default=None, help="Port (defaults to server.port).")
@click.option("--reload", is_flag=True, default=False, help="Reload on code changes.")
@click.pass_context
def serve(ctx: click.Context, config: str | None, host: str | None, port: int | None, reload: bool) -> None:
    """Run the web application."""
    cfg = resolve_config(config)
    setup_logging_from_config(cfg["logging"], ctx.obj["level"])
    if config:
        # the uvicorn factory re-resolves configuration in the server process
        os.environ["POSTBOARD_CONFIG"] = config
    host = host or cfg["server"].get("host", "127.0.0.1")
    port = port or int(cfg["server"].get("port", 8000))
    console.print(f"[bold cyan]Serving Postboard on http://{host}:{port}[/bold cyan]")
    uvicorn.run(
        "postboard.backend.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_config=None,
    )


@cli.command()
@click.option("--url", default="http://127.0.0.1:8000", show_default=True, help="Server URL.")
@click.pass_context
def posts(ctx: click.Context, url: str) -> None:
    """List posts from a running server."""
    try:
        result = asyncio.run(_list_posts(url))
    except Exception as e:
        _fail("Could not load posts", e, ctx.obj["debug"])
    print_posts(result)


@cli.command()
@click.option("--url", default="http://127.0.0.1:8000", show_default=True, help="Server URL.")
@click.option("--title", "-t", required=True, help="Post title.")
@click.option("--body", "-b", default="", help="Post body.")
@click.option("--as", "name", default=None, help="Sign in under this name.")
@click.pass_context
def post(ctx: click.Context, url: str, title: str, body: str, name: str | None) -> None:
    """Sign in and create a post on a running server."""
    try:
        created = asyncio.run(_create_post(url, title, body, name))
    except Exception as e:
        _fail("Could not create post", e, ctx.obj["debug"])
    console.print(f"[bold green]Created post[/bold green] {created.id} by {created.author.name}")


@cli.command("check-deps")
def check_deps() -> None:
    """Verify every runtime package can be imported."""
    raise SystemExit(check_deps_main())


main = cli

if __name__ == "__main__":
    cli()
