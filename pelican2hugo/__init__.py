"""
pelican2hugo
===============================

Convert Pelican blog posts into Hugo posts.

Pelican posts carry their metadata as ``Key: value`` header lines and embed
media with ``{% tag arg %}`` tokens. This package extracts the header into
YAML front matter, rewrites embeds, images and internal links into Hugo
shortcodes, and writes the result back out.

Main Components:
    - pipeline: header parsing, body rewriting, media resolvers, batch runs
    - dataclasses: FrontMatter and PostEntry
    - core: Logging, exceptions, paths, CLI statistics
    - utils: Filesystem helpers

Primary Interfaces:
    - pelican2hugo.pipeline.cli: Command-line interface (``p2h``)
    - pelican2hugo.pipeline.pelican2hugo: convert_file / convert_directory

Example Usage:
    >>> from pelican2hugo import PostEntry, BodyRewriter
    >>> entry = PostEntry.from_text("Title: X\\n\\nbody {% youtube ABC %}\\n")
    >>> entry.body = BodyRewriter().rewrite(entry.body)
    >>> print(entry.to_markdown())
"""

__version__ = "1.0.0"

from pelican2hugo.dataclasses.post_entry import FrontMatter, PostEntry
from pelican2hugo.pipeline.body_rewriter import BodyRewriter
from pelican2hugo.pipeline.header_parser import HeaderParser

__all__ = [
    "BodyRewriter",
    "FrontMatter",
    "HeaderParser",
    "PostEntry",
]
