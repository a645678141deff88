"""Exceptions raised while cleaning a single file."""

from __future__ import annotations

from pathlib import Path


class CleanError(Exception):
    """A pipeline transform failed; the file is left untouched."""

    def __init__(self, path: Path | None, errors: dict[str, str]) -> None:
        self.path = path
        self.errors = dict(errors)
        detail = "; ".join(f"{tid}: {msg}" for tid, msg in sorted(self.errors.items()))
        super().__init__(f"cleanup failed ({detail})")
