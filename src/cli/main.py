"""Operator CLI for fitox."""

import asyncio
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from cli.config import load_config_model
from cli.logging_config import setup_logging
from coach import ResponseSelector, UserContext, compute_stats
from store import StoreHandle, list_tasks

console = Console()


def _context_for(config, user_id: Optional[str]) -> UserContext:
    if not user_id:
        return UserContext()
    handle = StoreHandle.for_path(config.store.db_path)
    try:
        return compute_stats(list_tasks(handle, user_id))
    finally:
        handle.close()


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """FITOX - habit tracking with an AI coach."""
    config = load_config_model()
    setup_logging(
        json_mode=config.logging.json_mode,
        level="DEBUG" if verbose else config.logging.level,
    )
    ctx.obj = config


@cli.command()
@click.pass_obj
def quote(config):
    """Print a motivational quote."""
    selector = ResponseSelector.from_config(config)
    console.print(asyncio.run(selector.generate_quote()))


@cli.command()
@click.argument("message")
@click.option("--user", "user_id", help="Use this user's task stats as coach context")
@click.pass_obj
def chat(config, message: str, user_id: Optional[str]):
    """Ask the coach a single question."""
    selector = ResponseSelector.from_config(config)
    context = _context_for(config, user_id)
    reply = asyncio.run(selector.generate_reply([{"role": "user", "content": message}], context))
    console.print(reply.content)
    console.print(f"[dim]source: {reply.source}[/]")


@cli.command()
@click.option("--user", "user_id", required=True, help="Owner id of the tasks")
@click.pass_obj
def stats(config, user_id: str):
    """Show completion counts and streak for a user."""
    context = _context_for(config, user_id)
    table = Table(title=f"Stats for {user_id}")
    table.add_column("Completed", justify="right")
    table.add_column("Pending", justify="right")
    table.add_column("Streak", justify="right")
    table.add_row(str(context.completed_tasks), str(context.pending_tasks), str(context.streak))
    console.print(table)


if __name__ == "__main__":
    cli()
