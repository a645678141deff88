"""ElementTree helpers — tag matching and traversal for SVG documents."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterator

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"


def local_name(tag: str) -> str:
    """Remove namespace from tag name."""
    return tag.split("}")[-1] if "}" in tag else tag


def namespace(tag: str) -> str:
    return tag[1:].split("}")[0] if tag.startswith("{") else ""


def is_svg(element: ET.Element, name: str) -> bool:
    """True for <name> in the SVG namespace or without a namespace."""
    tag = element.tag
    if not isinstance(tag, str):
        # comments and processing instructions
        return False
    return local_name(tag) == name and namespace(tag) in (SVG_NS, "")


def children(element: ET.Element, name: str) -> list[ET.Element]:
    """Direct children named `name`, as a snapshot list."""
    return [child for child in element if is_svg(child, name)]


def first_child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if is_svg(child, name):
            return child
    return None


def descendants(element: ET.Element, name: str) -> list[ET.Element]:
    """All descendants named `name` in document order, excluding `element` itself."""
    return [el for el in _iter_below(element) if is_svg(el, name)]


def _iter_below(element: ET.Element) -> Iterator[ET.Element]:
    it = element.iter()
    next(it)
    yield from it


def parent_map(root: ET.Element) -> dict[ET.Element, ET.Element]:
    return {child: parent for parent in root.iter() for child in parent}


def text_content(element: ET.Element) -> str:
    """Concatenated text of the element and its descendants (tails excluded)."""
    return "".join(element.itertext())


def has_children(element: ET.Element) -> bool:
    return len(element) > 0


def remove_attribute(element: ET.Element, name: str) -> bool:
    if name in element.attrib:
        del element.attrib[name]
        return True
    return False
