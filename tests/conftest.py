"""Shared test fixtures."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from svgcleaner.engine.config import CleanerConfig
from svgcleaner.engine.context import CleanContext
from svgcleaner.engine.pipeline import load_transforms
from svgcleaner.svg.parser import parse_svg_string

SVG_NS = "http://www.w3.org/2000/svg"


# A class diagram as the UML tool exports it: one layer group, every element
# group carrying the same matrix, an invisible overlay rect and an empty group.
UML_EXPORT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="800px" height="600px">
  <g>
    <g transform="matrix(1 0 0 1 100 50)">
      <rect x="10" y="20" width="200" height="100" fill="#FFFFFF" stroke="#000000"/>
      <rect x="0" y="0" width="10" height="10" fill="#FFFFFF00"/>
      <path d="M 0 0 L 10 0 L 10 10 Z" stroke="#000000" paint-order="stroke"/>
      <text x="5" y="15" font-family="Arial">Patient</text>
    </g>
    <g transform="matrix(1 0 0 1 100 50)">
      <text x="0" y="0" font-family="Calibri">Note</text>
    </g>
    <g/>
  </g>
</svg>'''

# Already normalized: viewBox present, no transforms, nothing to remove.
CLEAN_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" viewBox="0 0 100 100">
  <g>
    <g>
      <rect x="10" y="10" width="80" height="80" fill="#FFFFFF" stroke="#000000"/>
      <text x="20" y="30" font-family="Cambria">Encounter</text>
    </g>
  </g>
</svg>'''

# Shared transform that is not a matrix(...) expression
TRANSLATE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <g>
    <g transform="translate(5 5)">
      <rect x="1" y="2" width="3" height="4" fill="#000000"/>
    </g>
    <g transform="matrix(1 0 0 1 5 5)">
      <rect x="1" y="2" width="3" height="4" fill="#000000"/>
    </g>
  </g>
</svg>'''

MALFORMED_SVG = '<svg xmlns="http://www.w3.org/2000/svg"><g><rect></g></svg>'


def make_context(svg_text: str, **config) -> CleanContext:
    return CleanContext(root=parse_svg_string(svg_text), config=CleanerConfig(**config))


def svg_children(element: ET.Element, name: str) -> list[ET.Element]:
    return element.findall(f"{{{SVG_NS}}}{name}")


@pytest.fixture(scope="session", autouse=True)
def _transforms_loaded() -> None:
    load_transforms()


@pytest.fixture
def uml_export_svg() -> str:
    return UML_EXPORT_SVG


@pytest.fixture
def clean_svg() -> str:
    return CLEAN_SVG


@pytest.fixture
def svg_dir(tmp_path):
    """A folder with one exported diagram, one clean diagram and a non-SVG file."""
    (tmp_path / "class_diagram.svg").write_text(UML_EXPORT_SVG, encoding="utf-8")
    (tmp_path / "already_clean.svg").write_text(CLEAN_SVG, encoding="utf-8")
    (tmp_path / "notes.txt").write_text("not a diagram", encoding="utf-8")
    return tmp_path
