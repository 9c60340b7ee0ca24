#!/usr/bin/env python3
"""
pelican2hugo.py
-------------------
Convert Pelican blog posts into Hugo posts.

Each post goes through the same steps:
1. HeaderParser splits the file into front matter and body
2. BodyRewriter turns Pelican embeds, images and links into Hugo syntax
3. PostEntry.to_markdown() renders the YAML front matter and the body
4. The result is printed, written over the source, or written to an
   output directory

    content/
    └── posts/
        ├── 1up-berlin.md          (Pelican)
        └── ...
    hugo/
    └── content/posts/
        ├── 1up-berlin.md          (Hugo, --output mode)
        └── ...

Posts are independent. A batch runs one task per post and waits for all
of them; a post that fails is reported in its ConversionResult and does
not stop the others.

Programmatic API:
    from pelican2hugo.pipeline.pelican2hugo import convert_file, convert_directory
    report = convert_file(path, resolver=resolver, logger=logger)
    report = convert_directory(input_dir, mode=OutputMode.IN_PLACE, logger=logger)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

# --- Local imports ---
from pelican2hugo.core.cli import ConversionStats
from pelican2hugo.core.exceptions import (
    ConfigurationError,
    EntryParseError,
    Pelican2HugoError,
    ResolverError,
)
from pelican2hugo.core.logging_manager import ConversionLogger, safe_logger
from pelican2hugo.dataclasses.post_entry import PostEntry
from pelican2hugo.pipeline.body_rewriter import BodyRewriter
from pelican2hugo.pipeline.configs.defaults import (
    DEFAULT_AUTHOR,
    DEFAULT_EMBED_STYLE,
    POST_PATTERN,
)
from pelican2hugo.pipeline.resolvers import MediaResolver
from pelican2hugo.utils.fs import find_post_files, has_front_matter, write_if_changed


# Errors that end one post's conversion without affecting the batch
POST_ERRORS = (EntryParseError, ResolverError, ConfigurationError, OSError)


class OutputMode(str, Enum):
    """Where converted posts go."""

    STDOUT = "stdout"
    IN_PLACE = "in-place"
    DIRECTORY = "directory"


@dataclass
class ConversionResult:
    """
    Outcome of converting one post.

    Attributes:
        path: Source post
        success: False if the post could not be converted
        action: 'created', 'updated', 'unchanged', 'skipped' or 'printed'
        output_path: File written (or that would be written in a dry run)
        content: Converted document, when conversion ran
        error: Exception that stopped the conversion
    """

    path: Path
    success: bool = True
    action: Optional[str] = None
    output_path: Optional[Path] = None
    content: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def reason(self) -> str:
        """Human-readable failure reason (empty on success)."""
        if self.error is None:
            return ""
        return f"{type(self.error).__name__}: {self.error}"


@dataclass
class ConversionReport:
    """Per-post results of a batch, in input order, plus aggregate stats."""

    results: List[ConversionResult] = field(default_factory=list)
    stats: ConversionStats = field(default_factory=ConversionStats)

    @property
    def failures(self) -> List[ConversionResult]:
        return [r for r in self.results if not r.success]

    @property
    def ok(self) -> bool:
        return not self.failures


# --- Conversion ---
def convert_text(
    text: str,
    default_author: str = DEFAULT_AUTHOR,
    resolver: Optional[MediaResolver] = None,
    embed_style: str = DEFAULT_EMBED_STYLE,
    logger: Optional[ConversionLogger] = None,
) -> str:
    """
    Convert the raw text of one Pelican post into a Hugo document.

    Raises:
        EntryParseError: Malformed date or empty body
        ResolverError: Remote media lookup failed
        ConfigurationError: Bad embed style or missing resolver
    """
    entry = PostEntry.from_text(text, default_author)
    entry.body = BodyRewriter(resolver, embed_style, logger).rewrite(entry.body)
    return entry.to_markdown()


def process_post(
    path: Path,
    default_author: str = DEFAULT_AUTHOR,
    resolver: Optional[MediaResolver] = None,
    embed_style: str = DEFAULT_EMBED_STYLE,
    mode: OutputMode = OutputMode.STDOUT,
    output_dir: Optional[Path] = None,
    force_overwrite: bool = False,
    dry_run: bool = False,
    logger: Optional[ConversionLogger] = None,
) -> ConversionResult:
    """
    Convert a single post and deliver it according to ``mode``.

    Skip Logic:
    - IN_PLACE: files already opening with a ``---`` front matter block
      were converted before and are skipped
    - DIRECTORY: an existing target is skipped unless force_overwrite

    Args:
        path: Pelican post
        default_author: Author for posts without an ``Author:`` header
        resolver: Media resolver for giphy/soundcloud embeds
        embed_style: Shortcode style for video embeds
        mode: Output mode
        output_dir: Target directory (DIRECTORY mode only)
        force_overwrite: Overwrite existing targets in DIRECTORY mode
        dry_run: Convert but do not write anything
        logger: Optional logger

    Returns:
        ConversionResult; per-post errors are captured, not raised
    """
    log = safe_logger(logger)
    log.log_info(f"Working on {path.name}")
    result = ConversionResult(path=path)

    try:
        if mode is OutputMode.IN_PLACE and has_front_matter(path):
            log.log_debug(f"{path.name} already has front matter, skipping")
            result.action = "skipped"
            return result

        target: Optional[Path] = None
        if mode is OutputMode.IN_PLACE:
            target = path
        elif mode is OutputMode.DIRECTORY:
            if output_dir is None:
                raise ConfigurationError("Directory output requires an output directory")
            target = output_dir / path.name
            if target.exists() and not force_overwrite:
                log.log_debug(f"{target.name} exists, skipping")
                result.action = "skipped"
                result.output_path = target
                return result

        entry = PostEntry.from_file(path, default_author)
        entry.body = BodyRewriter(resolver, embed_style, logger).rewrite(entry.body)
        result.content = entry.to_markdown()

        if target is None:
            result.action = "printed"
            return result

        result.output_path = target
        existed = target.exists()
        if dry_run:
            result.action = "updated" if existed else "created"
        elif write_if_changed(target, result.content):
            result.action = "updated" if existed else "created"
        else:
            result.action = "unchanged"
        log.log_debug(f"{result.action.capitalize()} file: {target.name}")

    except POST_ERRORS as e:
        result.success = False
        result.error = e
        log.log_error(e, {"operation": "process_post", "file": str(path)})

    return result


def convert_files(
    paths: Sequence[Path],
    default_author: str = DEFAULT_AUTHOR,
    resolver: Optional[MediaResolver] = None,
    embed_style: str = DEFAULT_EMBED_STYLE,
    mode: OutputMode = OutputMode.STDOUT,
    output_dir: Optional[Path] = None,
    force_overwrite: bool = False,
    dry_run: bool = False,
    max_workers: Optional[int] = None,
    logger: Optional[ConversionLogger] = None,
) -> ConversionReport:
    """
    Convert posts concurrently, one task per post, and wait for all of them.

    Args:
        paths: Posts to convert
        max_workers: Cap on concurrent tasks (default: one per post)
        (other arguments as in process_post)

    Returns:
        ConversionReport with results in the order of ``paths``
    """
    report = ConversionReport()
    log = safe_logger(logger)

    if not paths:
        return report

    if mode is OutputMode.DIRECTORY and output_dir is not None and not dry_run:
        output_dir.mkdir(parents=True, exist_ok=True)

    log.log_operation(
        "convert_files_start",
        {"files": len(paths), "mode": mode.value, "dry_run": dry_run},
    )

    workers = max_workers or len(paths)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="post") as pool:
        futures = [
            pool.submit(
                process_post,
                path,
                default_author,
                resolver,
                embed_style,
                mode,
                output_dir,
                force_overwrite,
                dry_run,
                logger,
            )
            for path in paths
        ]

        for path, future in zip(paths, futures):
            try:
                result = future.result()
            except Exception as e:
                # Bugs surface here; record them against the post and keep going
                log.log_error(e, {"operation": "convert_files", "file": str(path)})
                result = ConversionResult(path=path, success=False, error=e)
            report.results.append(result)

    _tally(report)
    log.log_operation("convert_files_complete", {"stats": report.stats.summary()})
    return report


def convert_file(
    input_path: Path,
    default_author: str = DEFAULT_AUTHOR,
    resolver: Optional[MediaResolver] = None,
    embed_style: str = DEFAULT_EMBED_STYLE,
    mode: OutputMode = OutputMode.STDOUT,
    output_dir: Optional[Path] = None,
    force_overwrite: bool = False,
    dry_run: bool = False,
    logger: Optional[ConversionLogger] = None,
) -> ConversionReport:
    """
    Convert one post.

    Raises:
        Pelican2HugoError: If the input file does not exist
    """
    if not input_path.is_file():
        raise Pelican2HugoError(f"Input file not found: {input_path}")

    return convert_files(
        [input_path.resolve()],
        default_author=default_author,
        resolver=resolver,
        embed_style=embed_style,
        mode=mode,
        output_dir=output_dir,
        force_overwrite=force_overwrite,
        dry_run=dry_run,
        logger=logger,
    )


def convert_directory(
    input_dir: Path,
    pattern: str = POST_PATTERN,
    default_author: str = DEFAULT_AUTHOR,
    resolver: Optional[MediaResolver] = None,
    embed_style: str = DEFAULT_EMBED_STYLE,
    mode: OutputMode = OutputMode.STDOUT,
    output_dir: Optional[Path] = None,
    force_overwrite: bool = False,
    dry_run: bool = False,
    max_workers: Optional[int] = None,
    logger: Optional[ConversionLogger] = None,
) -> ConversionReport:
    """
    Convert every post matching ``pattern`` directly inside ``input_dir``.

    Raises:
        Pelican2HugoError: If the directory does not exist
    """
    if not input_dir.is_dir():
        raise Pelican2HugoError(f"Input directory not found: {input_dir}")

    posts = find_post_files(input_dir, pattern)
    if not posts:
        safe_logger(logger).log_info(f"No {pattern} files found in {input_dir}")
        return ConversionReport()

    safe_logger(logger).log_operation(
        "convert_directory_start",
        {"input": str(input_dir), "files_found": len(posts)},
    )

    return convert_files(
        posts,
        default_author=default_author,
        resolver=resolver,
        embed_style=embed_style,
        mode=mode,
        output_dir=output_dir,
        force_overwrite=force_overwrite,
        dry_run=dry_run,
        max_workers=max_workers,
        logger=logger,
    )


# --- Helper ---
def _tally(report: ConversionReport) -> None:
    """Fill report.stats from the collected results."""
    stats = report.stats
    for result in report.results:
        if not result.success:
            stats.errors += 1
            continue
        stats.files_processed += 1
        if result.action == "created":
            stats.entries_created += 1
        elif result.action == "updated":
            stats.entries_updated += 1
        elif result.action == "printed":
            stats.entries_printed += 1
        else:
            stats.entries_skipped += 1
