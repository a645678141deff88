"""T2.01 — Empty Group Pruning.

Removes groups left with nothing to render after T1.01. Rectangles and paths
veto removal even when they carry no text: class borders are drawn with them.

Single pass over the descendant list gathered up front, not a fixed point. A
group that only becomes empty because a sibling group was removed in the same
pass is left in place.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from svgcleaner.engine.context import CleanContext
from svgcleaner.engine.registry import Layer, transform
from svgcleaner.svg.dom import children, descendants, has_children, parent_map, text_content


def is_empty_group(group: ET.Element) -> bool:
    if children(group, "rect") or children(group, "path"):
        return False
    return not any(
        text_content(child).strip() or has_children(child)
        for child in group
    )


@transform(
    id="T2.01",
    layer=Layer.PRUNE,
    dependencies=["T1.01"],
    description="Remove groups without renderable content",
)
def empty_group_pruning(ctx: CleanContext) -> None:
    groups = descendants(ctx.root, "g")
    parents = parent_map(ctx.root)

    for group in groups:
        if not is_empty_group(group):
            continue
        # The parent may itself have been detached earlier in this pass
        parents[group].remove(group)
        ctx.counters.empty_elements_removed += 1
