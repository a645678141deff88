"""T0.02 — Shared Transform Extraction.

The UML exporter wraps every diagram element in a group carrying the same
`matrix(...)`. The transform on the first group of the layer group is taken
as the shared matrix for the whole document:

    <svg>
      <g>                                   <- layer group
        <g transform="matrix(1 0 0 1 ...)"> <- first element group
"""

from __future__ import annotations

import logging

from svgcleaner.engine.context import CleanContext
from svgcleaner.engine.registry import Layer, transform
from svgcleaner.svg.dom import first_child
from svgcleaner.svg.matrix import parse_matrix

logger = logging.getLogger(__name__)


@transform(
    id="T0.02",
    layer=Layer.PREPARE,
    dependencies=["T0.01"],
    description="Detect the matrix shared by the layer's groups",
)
def shared_transform_extraction(ctx: CleanContext) -> None:
    ctx.shared_matrix = None

    layer_group = first_child(ctx.root, "g")
    if layer_group is None:
        return
    element_group = first_child(layer_group, "g")
    if element_group is None:
        return

    transform_attr = element_group.get("transform")
    ctx.shared_matrix = parse_matrix(transform_attr)
    if ctx.shared_matrix is not None:
        logger.debug("Shared transform: %s", ctx.shared_matrix)
    elif transform_attr is not None:
        logger.debug("Unrecognised transform %r, folding disabled", transform_attr)
