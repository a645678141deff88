"""CleanContext — the single mutable state object flowing through all transforms.

One context per file. Counters aggregate across the whole recursive descent
and decide whether the file is rewritten.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import asdict, dataclass, field
from pathlib import Path

from svgcleaner.engine.config import CleanerConfig
from svgcleaner.svg.matrix import Matrix


@dataclass
class ChangeCounters:
    viewbox_added: int = 0
    rects_removed: int = 0
    fonts_changed: int = 0
    attributes_cleaned: int = 0
    transforms_applied: int = 0
    folds: int = 0
    empty_elements_removed: int = 0

    @property
    def modified(self) -> bool:
        return any(asdict(self).values())

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class CleanContext:
    """Shared state for one document."""

    root: ET.Element
    config: CleanerConfig = field(default_factory=CleanerConfig)
    source_path: Path | None = None

    # Set by T0.02 when the layer groups share a matrix(...) transform
    shared_matrix: Matrix | None = None

    counters: ChangeCounters = field(default_factory=ChangeCounters)
    # Human-readable details, e.g. "Added viewBox: 0 0 800 600"
    notes: list[str] = field(default_factory=list)

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def modified(self) -> bool:
        return self.counters.modified
