#!/usr/bin/env python3
"""
post_entry.py
-------------------

Defines the dataclasses for a single blog post moving through the
Pelican → Hugo conversion.

Each PostEntry instance contains:
- front matter extracted from the Pelican header lines
    - title, slug, tags, date, author, draft
- body text (everything that was not a header line)
- the source path, when read from disk

It supports construction from raw text or a file and serialization to a
Hugo Markdown document with YAML front matter.
"""
# ---- Annotations ----
from __future__ import annotations

# ---- Standard library imports ----
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

# ---- Third party ----
import yaml

# ---- Local imports ----
from pelican2hugo.core.exceptions import EntryParseError
from pelican2hugo.pipeline.configs.defaults import DEFAULT_AUTHOR


# ----- Logging ----
logger = logging.getLogger(__name__)


# ----- YAML -----
class _QuotedString(str):
    """String rendered in double quotes by the front matter dumper."""


class _FrontMatterDumper(yaml.SafeDumper):
    """SafeDumper that knows how to emit _QuotedString."""


def _represent_quoted(dumper: yaml.SafeDumper, data: _QuotedString) -> yaml.Node:
    return dumper.represent_scalar("tag:yaml.org,2002:str", str(data), style='"')


_FrontMatterDumper.add_representer(_QuotedString, _represent_quoted)


# ----- Dataclasses -----
@dataclass
class FrontMatter:
    """
    Metadata of a post, built incrementally while parsing header lines.

    Attributes:
        title: Post title
        slug: URL slug
        tags: Ordered tag list (duplicates kept)
        date: RFC 3339 timestamp string
        author: Explicit author, or the caller's default
        draft: True only for an exact ``Status: draft`` header
    """

    title: Optional[str] = None
    slug: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    date: Optional[str] = None
    author: str = DEFAULT_AUTHOR
    draft: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """
        Ordered mapping of the fields that should appear in the front matter.

        Key order is title, slug, tags, date, author, draft. Empty optional
        fields are left out; draft is always present.
        """
        data: Dict[str, Any] = {}
        if self.title:
            data["title"] = self.title
        if self.slug:
            data["slug"] = self.slug
        if self.tags:
            data["tags"] = list(self.tags)
        if self.date:
            data["date"] = _QuotedString(self.date)
        if self.author:
            data["author"] = self.author
        data["draft"] = self.draft
        return data

    def to_yaml(self) -> str:
        """Render the front matter as a YAML block (no delimiters)."""
        return yaml.dump(
            self.to_dict(),
            Dumper=_FrontMatterDumper,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=4096,
        )


@dataclass
class PostEntry:
    """
    Represents a single blog post: front matter plus body text.

    Attributes:
        front_matter (FrontMatter): Metadata extracted from header lines.
        body (str): Newline-joined body lines.
        path (Optional[Path]): Source file, if the entry was read from disk.
    """

    # ---- Attributes ----
    front_matter: FrontMatter
    body: str
    path: Optional[Path] = None

    # ---- Public constructors ----
    @classmethod
    def from_text(
        cls,
        text: str,
        default_author: str = DEFAULT_AUTHOR,
        path: Optional[Path] = None,
    ) -> PostEntry:
        """
        Parse raw Pelican post text.

        Raises:
            EntryParseError: On a malformed date or an empty body
        """
        from pelican2hugo.pipeline.header_parser import HeaderParser

        entry = HeaderParser(default_author).parse(text)
        entry.path = path
        return entry

    @classmethod
    def from_file(
        cls,
        path: Path,
        default_author: str = DEFAULT_AUTHOR,
    ) -> PostEntry:
        """
        Read and parse a Pelican post from disk.

        Raises:
            EntryParseError: If the file cannot be read or parsed
        """
        logger.debug(f"Reading file: {str(path)}")

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Cannot read input file: {str(path)}")
            raise EntryParseError(f"Cannot read post {path}: {e}") from e

        return cls.from_text(text, default_author, path=path)

    # ---- Serialization ----
    def to_markdown(self) -> str:
        """
        Generate the Hugo document: ``---``, YAML front matter, ``---``, body.
        """
        return "---\n" + self.front_matter.to_yaml() + "---\n" + self.body
