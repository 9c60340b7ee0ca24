#!/usr/bin/env python3
"""
pelican2hugo CLI
------------------------

Command-line interface for converting Pelican posts to Hugo.

Commands:
    - convert: Convert a directory (or a single file) of Pelican posts
    - list: Show which posts a conversion would pick up

Usage:
    # Print converted posts to stdout (nothing is modified)
    p2h convert --path content/posts

    # Rewrite the posts where they are
    p2h convert --path content/posts --in-place

    # Write into a Hugo site, overwriting earlier conversions
    p2h convert --path content/posts --output hugo/content/posts --force

    # Preview
    p2h list --path content/posts
"""
from __future__ import annotations

import click
from pathlib import Path

from pelican2hugo.core.paths import LOG_DIR
from pelican2hugo.core.cli import setup_logger


@click.group()
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    show_default=True,
    help="Directory for log files (relative to the current directory)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, log_dir: str, verbose: bool) -> None:
    """Pelican to Hugo Post Converter"""
    ctx.ensure_object(dict)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    try:
        ctx.obj["logger"] = setup_logger(Path(log_dir), "convert")
    except OSError as e:
        raise click.ClickException(
            f"Cannot write logs to {log_dir} ({e.strerror or e}); use --log-dir"
        ) from e
    ctx.call_on_close(ctx.obj["logger"].close)


# Import and register commands from submodules
from .convert import convert, list_posts

cli.add_command(convert)
cli.add_command(list_posts)


if __name__ == "__main__":
    cli(obj={})
