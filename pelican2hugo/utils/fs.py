#!/usr/bin/env python3
"""
fs.py
-------------------
Filesystem utilities for post discovery and output.

Functions:
    find_post_files: Sorted absolute paths of posts in one directory
    has_front_matter: Check whether a file already starts with a front matter block
    write_if_changed: Write text unless the file already holds it

Usage:
    from pelican2hugo.utils.fs import find_post_files

    posts = find_post_files(Path("content/posts"))
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import List

# --- Local imports ---
from pelican2hugo.pipeline.configs.defaults import FRONT_MATTER_DELIMITER, POST_PATTERN


def find_post_files(directory: Path, pattern: str = POST_PATTERN) -> List[Path]:
    """
    List the posts directly inside ``directory`` (no recursion).

    Args:
        directory: Directory holding the Pelican posts
        pattern: Glob pattern matched against file names

    Returns:
        Sorted absolute paths of the matching regular files; empty if the
        directory does not exist
    """
    if not directory.is_dir():
        return []
    return sorted(p.resolve() for p in directory.glob(pattern) if p.is_file())


def has_front_matter(path: Path) -> bool:
    """True if the first line of ``path`` is a ``---`` front matter delimiter."""
    with path.open(encoding="utf-8", errors="replace") as f:
        return f.readline().rstrip("\r\n") == FRONT_MATTER_DELIMITER


def write_if_changed(path: Path, content: str) -> bool:
    """
    Write ``content`` to ``path`` unless it already holds exactly that.

    Returns:
        True if the file was written
    """
    if path.exists() and path.read_text(encoding="utf-8") == content:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return True
