"""T1.01 — Recursive Group Cleaning.

Depth-first walk over the group tree, starting at the root's direct child
groups. Per group, in order:

1. Fold the shared matrix into directly-owned rect/text/path coordinates
   when the group declares it, then drop the group's transform.
2. Remove provably invisible rectangles (alpha 00 fill, zero opacity).
   White rectangles with or without a stroke are class borders and stay.
3. Strip attributes the word processor's renderer cannot handle.
4. Retarget the source font on every descendant text element.
5. Recurse into child groups with the same inherited matrix.

The inherited matrix is not reset after a fold, so a nested group that
declares the same matrix again is folded again.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET

from svgcleaner.engine.context import CleanContext
from svgcleaner.engine.registry import Layer, transform
from svgcleaner.svg.dom import children, descendants, is_svg, remove_attribute
from svgcleaner.svg.matrix import Matrix, format_coordinate, parse_matrix
from svgcleaner.svg.path_data import collapse_duplicate_close, transform_path_data

logger = logging.getLogger(__name__)

# #RRGGBBAA
_RGBA_HEX_RE = re.compile(r"^#[0-9a-fA-F]{8}$")


@transform(
    id="T1.01",
    layer=Layer.CLEAN,
    dependencies=["T0.02"],
    description="Fold shared transforms and clean every group",
)
def group_cleaning(ctx: CleanContext) -> None:
    for group in children(ctx.root, "g"):
        clean_group(group, ctx.shared_matrix, ctx)


def clean_group(group: ET.Element, matrix: Matrix | None, ctx: CleanContext) -> None:
    rects = children(group, "rect")
    texts = children(group, "text")
    paths = children(group, "path")

    group_transform = group.get("transform")
    if group_transform is not None and matrix is not None:
        parsed = parse_matrix(group_transform)
        if parsed is not None and parsed == matrix:
            apply_transform_to_children(group, matrix, ctx)
            del group.attrib["transform"]
            ctx.counters.folds += 1

    kept_rects = []
    for rect in rects:
        if is_invisible_rect(rect):
            group.remove(rect)
            ctx.counters.rects_removed += 1
        else:
            kept_rects.append(rect)

    for element in [group, *kept_rects, *paths, *texts]:
        ctx.counters.attributes_cleaned += sanitize_attributes(element, ctx)

    if ctx.config.change_fonts:
        ctx.counters.fonts_changed += retarget_fonts(group, ctx)

    for nested in children(group, "g"):
        clean_group(nested, matrix, ctx)


# ── Transform folding ───────────────────────────────────────────────────


def _read_coordinate(element: ET.Element, name: str) -> float:
    try:
        return float(element.get(name, "0"))
    except ValueError:
        logger.debug("Malformed %s=%r on <%s>, using 0", name, element.get(name), element.tag)
        return 0.0


def _move_origin(element: ET.Element, matrix: Matrix) -> None:
    # Only the origin corner moves; width/height are left as exported
    x, y = matrix.transform(_read_coordinate(element, "x"), _read_coordinate(element, "y"))
    element.set("x", format_coordinate(x))
    element.set("y", format_coordinate(y))
    remove_attribute(element, "transform")


def apply_transform_to_children(group: ET.Element, matrix: Matrix, ctx: CleanContext) -> None:
    """Bake `matrix` into the group's direct rect, text and path children."""
    for element in children(group, "rect") + children(group, "text"):
        _move_origin(element, matrix)
        ctx.counters.transforms_applied += 1

    for path in children(group, "path"):
        d = path.get("d")
        if d is not None:
            new_d = transform_path_data(d, matrix)
            if new_d != d:
                path.set("d", new_d)
                ctx.counters.transforms_applied += 1
        remove_attribute(path, "transform")


# ── Rectangle removal ───────────────────────────────────────────────────


def is_invisible_rect(rect: ET.Element) -> bool:
    """Only rectangles that are definitely invisible overlays."""
    fill = rect.get("fill")
    if fill is not None and _RGBA_HEX_RE.match(fill) and fill.endswith("00"):
        return True
    return rect.get("opacity") == "0" or rect.get("fill-opacity") == "0"


# ── Attribute sanitization ──────────────────────────────────────────────


def sanitize_attributes(element: ET.Element, ctx: CleanContext) -> int:
    """Remove unsupported attributes. Returns the number of changes made."""
    cleaned = 0

    for name in ctx.config.removed_attributes:
        if remove_attribute(element, name):
            cleaned += 1

    for name in ctx.config.blank_attributes:
        value = element.get(name)
        if value is not None and not value.strip():
            del element.attrib[name]
            cleaned += 1

    if is_svg(element, "path"):
        d = element.get("d")
        if d:
            collapsed = collapse_duplicate_close(d)
            if collapsed != d:
                element.set("d", collapsed)
                cleaned += 1

    return cleaned


# ── Font retargeting ────────────────────────────────────────────────────


def retarget_fonts(group: ET.Element, ctx: CleanContext) -> int:
    """Rewrite the source font on every descendant <text>. Returns the count."""
    source = ctx.config.source_font.casefold()
    changed = 0
    for text in descendants(group, "text"):
        font = text.get("font-family")
        if font is None or font == ctx.config.target_font:
            continue
        if font.casefold() == source:
            text.set("font-family", ctx.config.target_font)
            changed += 1
    return changed
