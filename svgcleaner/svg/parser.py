"""SVG loader — parses a file into a mutable ElementTree.

ElementTree renames unknown namespace prefixes to ns0, ns1, ... on output, so
every prefix declared in the source file is registered before parsing. The
SVG and XLink namespaces always keep their conventional prefixes, even when a
file declares an extra alias for them (Inkscape writes `xmlns:svg`).
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from svgcleaner.svg.dom import SVG_NS, XLINK_NS

logger = logging.getLogger(__name__)

_DEFAULT_NAMESPACES = {
    "": SVG_NS,
    "xlink": XLINK_NS,
}

# Internal subset may contain '>' inside entity declarations
_DOCTYPE_RE = re.compile(r"<!DOCTYPE\s[^\[>]*(?:\[.*?\]\s*)?>", re.DOTALL)


def register_namespaces(source: str | Path) -> dict[str, str]:
    """Register the default SVG prefixes plus every other prefix declared in `source`.

    Returns the prefix -> URI mapping that was registered.
    """
    found = dict(_DEFAULT_NAMESPACES)
    claimed = set(found.values())
    for _event, (prefix, uri) in ET.iterparse(str(source), events=("start-ns",)):
        if uri in claimed or prefix in found:
            continue
        found[prefix] = uri
        claimed.add(uri)

    for prefix, uri in found.items():
        try:
            ET.register_namespace(prefix, uri)
        except ValueError:
            # reserved prefixes such as "ns0" or "xml"
            logger.debug("Skipping reserved namespace prefix %r", prefix)
    return found


def read_doctype(path: str | Path) -> str | None:
    """Return the document type declaration of `path`, which ElementTree discards."""
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    root_start = text.find("<svg")
    match = _DOCTYPE_RE.search(text, 0, root_start if root_start >= 0 else len(text))
    return match.group(0) if match else None


def load_svg(path: str | Path) -> ET.ElementTree:
    """Parse an SVG file. Raises ET.ParseError or OSError on failure."""
    register_namespaces(path)
    tree = ET.parse(str(path))
    logger.debug("Loaded %s (root <%s>)", path, tree.getroot().tag)
    return tree


def parse_svg_string(svg_text: str) -> ET.Element:
    """Parse SVG markup held in memory. Used by tests and small tools."""
    for prefix, uri in _DEFAULT_NAMESPACES.items():
        ET.register_namespace(prefix, uri)
    return ET.fromstring(svg_text)
