#!/usr/bin/env python3
"""
header_parser.py
-------------------
Split a Pelican post into front matter and body text.

Pelican posts open with ``Key: value`` header lines:

    Title: 1UP berlin
    Date: 2011-12-20 12:46
    Category: Kunst
    Tags: art, berlin, documentary, graffiti
    Slug: 1up-berlin
    Status: draft

    Jeder der einmal durch Berlin gelaufen ist kennt sie.

Every line is matched against an ordered table of header patterns. The
first pattern that matches consumes the line; lines matching nothing are
body text. Header lines are recognised anywhere in the file, not only at
the top. Blank lines between two header lines belong to the header block;
of the blank lines separating the header from the text, exactly one is
removed, as is one trailing blank line.

Programmatic API:
    from pelican2hugo.pipeline.header_parser import HeaderParser, parse
    entry = parse(text, "marvin")
    entry = HeaderParser("marvin").parse(text)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from datetime import datetime, tzinfo
from typing import Callable, List, Tuple

# --- Local imports ---
from pelican2hugo.core.exceptions import EmptyBodyError, EntryParseError
from pelican2hugo.dataclasses.post_entry import FrontMatter, PostEntry
from pelican2hugo.pipeline.configs.defaults import (
    DEFAULT_AUTHOR,
    SOURCE_DATE_FORMAT,
    SOURCE_TZ,
)


# ----- Patterns -----
TITLE_RE = re.compile(r"^Title:\s(.+)$")
DATE_RE = re.compile(r"^Date:\s(.+)$")
SLUG_RE = re.compile(r"^Slug:\s(.+)$")
AUTHOR_RE = re.compile(r"^Author:\s(.+)$")
TAGS_RE = re.compile(r"^Tags:\s(.+)$")
CATEGORY_RE = re.compile(r"^Category:\s(.+)$")
DRAFT_RE = re.compile(r"^Status:\s(draft)$")

_WHITESPACE_RE = re.compile(r"\s+")
# strptime alone accepts single-digit fields
_DATE_VALUE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}$")


def split_lines(text: str) -> List[str]:
    """
    Split text on newlines only, dropping ``\\r`` line endings.

    A final newline does not start an extra line. Unlike ``str.splitlines``,
    form feeds and other Unicode separators stay inside their line.

    Examples:
        >>> split_lines("a\\r\\nb\\n\\n")
        ['a', 'b', '']
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def split_tags(value: str) -> List[str]:
    """
    Split a comma-separated tag list.

    All whitespace is removed from each tag; order and duplicates are kept,
    empty tags are dropped.

    Examples:
        >>> split_tags("a, b,c")
        ['a', 'b', 'c']
        >>> split_tags("new york, art,")
        ['newyork', 'art']
    """
    tags = [_WHITESPACE_RE.sub("", token) for token in value.split(",")]
    return [tag for tag in tags if tag]


def parse_date(value: str, source_tz: tzinfo = SOURCE_TZ) -> str:
    """
    Convert a Pelican ``YYYY-MM-DD HH:MM`` date to an RFC 3339 string.

    Raises:
        EntryParseError: If the value does not match the format exactly

    Examples:
        >>> parse_date("2011-12-20 12:46")
        '2011-12-20T12:46:00+01:00'
    """
    message = f"Invalid date '{value}' (expected YYYY-MM-DD HH:MM)"
    if not _DATE_VALUE_RE.match(value):
        raise EntryParseError(message)
    try:
        parsed = datetime.strptime(value, SOURCE_DATE_FORMAT)
    except ValueError as e:
        raise EntryParseError(message) from e
    return parsed.replace(tzinfo=source_tz).isoformat()


class HeaderParser:
    """
    Line classifier that builds a PostEntry from raw Pelican text.

    Attributes:
        default_author: Author used unless an ``Author:`` line is present
        source_tz: Timezone the header dates are written in
    """

    def __init__(
        self,
        default_author: str = DEFAULT_AUTHOR,
        source_tz: tzinfo = SOURCE_TZ,
    ) -> None:
        self.default_author = default_author
        self.source_tz = source_tz
        # Priority order: the first matching pattern wins
        self._fields: List[Tuple[re.Pattern[str], Callable[[FrontMatter, str], None]]] = [
            (TITLE_RE, self._set_title),
            (DATE_RE, self._set_date),
            (SLUG_RE, self._set_slug),
            (AUTHOR_RE, self._set_author),
            (TAGS_RE, self._set_tags),
            (CATEGORY_RE, self._ignore),
            (DRAFT_RE, self._set_draft),
        ]

    def parse(self, text: str) -> PostEntry:
        """
        Classify every line of ``text`` and return the resulting entry.

        Raises:
            EntryParseError: On a malformed Date header
            EmptyBodyError: If no body lines remain after trimming
        """
        front_matter = FrontMatter(author=self.default_author)
        body_lines: List[str] = []
        # Blank lines seen before any body text; dropped if a header line follows
        pending: List[str] = []

        for line in split_lines(text):
            if self._classify(front_matter, line):
                pending.clear()
            elif not body_lines and line == "":
                pending.append(line)
            else:
                body_lines.extend(pending)
                pending.clear()
                body_lines.append(line)

        if not body_lines:
            body_lines = pending

        return PostEntry(front_matter=front_matter, body=self._join_body(body_lines))

    def _classify(self, front_matter: FrontMatter, line: str) -> bool:
        """Apply the first matching header handler; False if the line is body text."""
        for pattern, handler in self._fields:
            match = pattern.match(line)
            if match:
                handler(front_matter, match.group(1))
                return True
        return False

    @staticmethod
    def _join_body(lines: List[str]) -> str:
        """Drop one leading and one trailing blank line, then join."""
        if not lines:
            raise EmptyBodyError("Post has no body after header extraction")
        if lines[0] == "":
            lines = lines[1:]
        if not lines:
            raise EmptyBodyError("Post body is a single blank line")
        if lines[-1] == "":
            lines = lines[:-1]
        if not lines:
            raise EmptyBodyError("Post body contains only blank separator lines")
        return "\n".join(lines)

    # ---- Field handlers ----
    @staticmethod
    def _set_title(front_matter: FrontMatter, value: str) -> None:
        front_matter.title = value

    def _set_date(self, front_matter: FrontMatter, value: str) -> None:
        front_matter.date = parse_date(value, self.source_tz)

    @staticmethod
    def _set_slug(front_matter: FrontMatter, value: str) -> None:
        front_matter.slug = value

    @staticmethod
    def _set_author(front_matter: FrontMatter, value: str) -> None:
        front_matter.author = value

    @staticmethod
    def _set_tags(front_matter: FrontMatter, value: str) -> None:
        front_matter.tags = split_tags(value)

    @staticmethod
    def _ignore(front_matter: FrontMatter, value: str) -> None:
        pass

    @staticmethod
    def _set_draft(front_matter: FrontMatter, value: str) -> None:
        front_matter.draft = True


def parse(text: str, default_author: str = DEFAULT_AUTHOR) -> PostEntry:
    """Parse raw Pelican text with the default source timezone."""
    return HeaderParser(default_author).parse(text)
