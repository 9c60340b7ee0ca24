#!/usr/bin/env python3
"""
paths.py
-------------------
Default locations used by the ``p2h`` commands.

Both paths are relative, so they resolve against the directory ``p2h`` is
run from (normally the root of the blog):

    <cwd>/
    ├── content/posts/     # Posts to convert (--path)
    └── logs/              # Run logs (--log-dir)

Nothing here is required to exist; commands create what they write to.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


# ---- Content ----
CONTENT_DIR = Path("content") / "posts"

# ---- Logs ----
LOG_DIR = Path("logs")
