"""T0.01 — ViewBox Normalization.

Word processors size embedded SVGs from the viewBox. Exports that only carry
width/height get `viewBox="0 0 {width} {height}"` with units stripped.
"""

from __future__ import annotations

import logging
import re

from svgcleaner.engine.context import CleanContext
from svgcleaner.engine.registry import Layer, transform

logger = logging.getLogger(__name__)

_NON_NUMERIC_RE = re.compile(r"[^\d\.]")


def _strip_units(value: str) -> str | None:
    """'800px' -> '800'. None when nothing numeric is left."""
    stripped = _NON_NUMERIC_RE.sub("", value)
    try:
        float(stripped)
    except ValueError:
        return None
    return stripped


@transform(
    id="T0.01",
    layer=Layer.PREPARE,
    description="Add a numeric viewBox derived from width/height",
)
def viewbox_normalization(ctx: CleanContext) -> None:
    root = ctx.root
    if root.get("viewBox") is not None:
        return

    width = root.get("width")
    height = root.get("height")
    if width is None or height is None:
        return

    w, h = _strip_units(width), _strip_units(height)
    if w is None or h is None:
        logger.debug("Cannot derive viewBox from width=%r height=%r", width, height)
        return

    viewbox = f"0 0 {w} {h}"
    root.set("viewBox", viewbox)
    ctx.counters.viewbox_added += 1
    ctx.notes.append(f"Added viewBox: {viewbox}")
