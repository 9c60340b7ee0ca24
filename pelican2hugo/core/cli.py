#!/usr/bin/env python3
"""
cli.py
------
Logger setup and run statistics for the ``p2h`` commands.

Usage:
    from pelican2hugo.core.cli import setup_logger, ConversionStats

    logger = setup_logger(Path("logs"), "convert")
    stats = ConversionStats()
    stats.entries_created += 1
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# --- Local imports ---
from pelican2hugo.core.logging_manager import ConversionLogger


def setup_logger(log_dir: Path, component_name: str) -> ConversionLogger:
    """
    Create the logger for one command run, writing to ``<log_dir>/operations``.

    Raises:
        OSError: If the log directory cannot be created
    """
    return ConversionLogger(log_dir / "operations", component_name=component_name)


@dataclass
class ConversionStats:
    """
    Outcome counts of one conversion batch.

    files_processed counts every post converted without error, whatever
    happened to the output; the entries_* fields split it by outcome.

    Attributes:
        files_processed: Posts converted successfully
        entries_created: Written to a new file
        entries_updated: Written over an existing file
        entries_skipped: Already converted, target kept, or unchanged
        entries_printed: Sent to stdout
        errors: Posts that failed
    """

    files_processed: int = 0
    entries_created: int = 0
    entries_updated: int = 0
    entries_skipped: int = 0
    entries_printed: int = 0
    errors: int = 0
    started: float = field(default_factory=time.monotonic, repr=False)
    _finished: Optional[float] = field(default=None, init=False, repr=False)

    def duration(self) -> float:
        """Seconds from creation to the first call (frozen afterwards)."""
        if self._finished is None:
            self._finished = time.monotonic()
        return self._finished - self.started

    def summary(self) -> str:
        """One-line summary for the run log, e.g. ``3 files processed, 3 created, ...``."""
        parts = [
            f"{self.files_processed} files processed",
            f"{self.entries_created} created",
            f"{self.entries_updated} updated",
            f"{self.entries_skipped} skipped",
        ]
        if self.entries_printed:
            parts.append(f"{self.entries_printed} printed")
        parts.append(f"{self.errors} errors")
        parts.append(f"{self.duration():.2f}s")
        return ", ".join(parts)
