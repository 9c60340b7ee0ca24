"""
Conversion Commands
-------------------------

Commands for converting Pelican posts into Hugo posts.

Commands:
    - convert: Convert posts (Pelican → Hugo)
    - list: List the posts a conversion would process
"""
from __future__ import annotations

import click
from pathlib import Path
from typing import Optional

from pelican2hugo.core.paths import CONTENT_DIR
from pelican2hugo.core.logging_manager import ConversionLogger, handle_cli_error
from pelican2hugo.pipeline.configs.defaults import (
    DEFAULT_AUTHOR,
    DEFAULT_EMBED_STYLE,
    EMBED_STYLES,
    GIPHY_API_KEY_ENV,
    HTTP_MAX_RETRIES,
    POST_PATTERN,
)
from pelican2hugo.pipeline.pelican2hugo import (
    ConversionReport,
    OutputMode,
    convert_directory,
    convert_file,
)
from pelican2hugo.pipeline.resolvers import HttpMediaResolver
from pelican2hugo.utils.fs import find_post_files


@click.command()
@click.option(
    "-p",
    "--path",
    type=click.Path(),
    default=str(CONTENT_DIR),
    show_default=True,
    help="Directory with Pelican posts, or a single post",
)
@click.option(
    "-a",
    "--author",
    default=DEFAULT_AUTHOR,
    show_default=True,
    help="Author for posts without an Author header",
)
@click.option(
    "--giphy-key",
    default=None,
    help=f"GIPHY API key (default: ${GIPHY_API_KEY_ENV})",
)
@click.option(
    "--embed-style",
    type=click.Choice(sorted(EMBED_STYLES)),
    default=DEFAULT_EMBED_STYLE,
    show_default=True,
    help="Shortcode delimiters for video embeds",
)
@click.option("--in-place", is_flag=True, help="Overwrite the source posts")
@click.option(
    "-o",
    "--output",
    type=click.Path(),
    default=None,
    help="Write converted posts to this directory",
)
@click.option("-f", "--force", is_flag=True, help="Overwrite existing files in --output")
@click.option("--dry-run", is_flag=True, help="Convert without writing any file")
@click.option(
    "--pattern",
    default=POST_PATTERN,
    show_default=True,
    help="File name pattern of posts",
)
@click.option(
    "--max-workers",
    type=click.IntRange(min=1),
    default=None,
    help="Limit concurrent conversions (default: one per post)",
)
@click.option(
    "--retries",
    type=click.IntRange(min=1),
    default=HTTP_MAX_RETRIES,
    show_default=True,
    help="Attempts per remote media lookup",
)
@click.option(
    "--min-interval",
    type=click.FloatRange(min=0.0),
    default=0.0,
    show_default=True,
    help="Minimum seconds between remote media requests",
)
@click.pass_context
def convert(
    ctx: click.Context,
    path: str,
    author: str,
    giphy_key: Optional[str],
    embed_style: str,
    in_place: bool,
    output: Optional[str],
    force: bool,
    dry_run: bool,
    pattern: str,
    max_workers: Optional[int],
    retries: int,
    min_interval: float,
) -> None:
    """
    Convert Pelican posts to Hugo posts.

    By default converted posts are printed to stdout. Use --in-place to
    rewrite the sources or --output to write them to another directory.
    """
    logger: ConversionLogger = ctx.obj["logger"]

    if in_place and output:
        raise click.UsageError("--in-place and --output cannot be combined")

    if in_place:
        mode = OutputMode.IN_PLACE
    elif output:
        mode = OutputMode.DIRECTORY
    else:
        mode = OutputMode.STDOUT

    # Keep stdout clean for the converted documents
    to_stderr = mode is OutputMode.STDOUT
    input_path = Path(path)
    output_dir = Path(output) if output else None

    if dry_run:
        click.echo("📝 Converting posts (DRY RUN - no files will be modified)...", err=to_stderr)
    else:
        click.echo("📝 Converting posts...", err=to_stderr)

    try:
        with HttpMediaResolver(
            giphy_api_key=giphy_key,
            max_retries=retries,
            min_interval=min_interval,
            logger=logger,
        ) as resolver:
            if input_path.is_file():
                report = convert_file(
                    input_path=input_path,
                    default_author=author,
                    resolver=resolver,
                    embed_style=embed_style,
                    mode=mode,
                    output_dir=output_dir,
                    force_overwrite=force,
                    dry_run=dry_run,
                    logger=logger,
                )
            else:
                report = convert_directory(
                    input_dir=input_path,
                    pattern=pattern,
                    default_author=author,
                    resolver=resolver,
                    embed_style=embed_style,
                    mode=mode,
                    output_dir=output_dir,
                    force_overwrite=force,
                    dry_run=dry_run,
                    max_workers=max_workers,
                    logger=logger,
                )
    except Exception as e:
        handle_cli_error(
            ctx,
            e,
            "convert",
            additional_context={"path": path, "output": output},
        )

    if mode is OutputMode.STDOUT:
        for result in report.results:
            if result.success and result.content is not None:
                click.echo(result.content)

    _echo_report(report, dry_run, to_stderr)

    if not report.ok:
        ctx.exit(1)


@click.command("list")
@click.option(
    "-p",
    "--path",
    type=click.Path(),
    default=str(CONTENT_DIR),
    show_default=True,
    help="Directory with Pelican posts",
)
@click.option(
    "--pattern",
    default=POST_PATTERN,
    show_default=True,
    help="File name pattern of posts",
)
def list_posts(path: str, pattern: str) -> None:
    """List the posts that convert would process."""
    posts = find_post_files(Path(path), pattern)
    if not posts:
        click.echo(f"No {pattern} files found in {path}")
        return

    click.echo(f"Would process {len(posts)} posts:")
    for post in posts:
        click.echo(f"  • {post.name}")


def _echo_report(report: ConversionReport, dry_run: bool, err: bool) -> None:
    """Print the aggregate summary and the failed posts."""
    stats = report.stats
    title = "✅ Conversion complete" if report.ok else "⚠️  Conversion finished with errors"
    if dry_run:
        title += " (dry run)"

    click.echo(f"\n{title}:", err=err)
    click.echo(f"  Files processed: {stats.files_processed}", err=err)
    click.echo(f"  Entries created: {stats.entries_created}", err=err)
    click.echo(f"  Entries updated: {stats.entries_updated}", err=err)
    click.echo(f"  Entries skipped: {stats.entries_skipped}", err=err)
    if stats.entries_printed:
        click.echo(f"  Entries printed: {stats.entries_printed}", err=err)
    click.echo(f"  Errors: {stats.errors}", err=err)
    click.echo(f"  Duration: {stats.duration():.2f}s", err=err)

    for failure in report.failures:
        click.echo(f"  ❌ {failure.path.name}: {failure.reason}", err=err)


__all__ = ["convert", "list_posts"]
