"""Tests for Layer 1 — recursive group cleaning."""

import pytest

from svgcleaner.engine.layer1.t1_01_group_cleaning import (
    clean_group,
    group_cleaning,
    is_invisible_rect,
)
from svgcleaner.engine.layer0.t0_02_shared_transform import shared_transform_extraction
from svgcleaner.svg.matrix import Matrix, translation
from svgcleaner.svg.parser import parse_svg_string
from tests.conftest import TRANSLATE_SVG, UML_EXPORT_SVG, make_context, svg_children

NS = 'xmlns="http://www.w3.org/2000/svg"'


def _run(ctx):
    shared_transform_extraction(ctx)
    group_cleaning(ctx)
    return ctx


def _element_groups(ctx):
    layer = svg_children(ctx.root, "g")[0]
    return svg_children(layer, "g")


# ── Transform folding ───────────────────────────────────────────────────


def test_fold_shifts_children_and_drops_transform():
    ctx = _run(make_context(UML_EXPORT_SVG))
    first, second = _element_groups(ctx)[:2]

    assert first.get("transform") is None
    assert second.get("transform") is None

    rect = svg_children(first, "rect")[0]
    assert (rect.get("x"), rect.get("y")) == ("110.000000", "70.000000")
    assert (rect.get("width"), rect.get("height")) == ("200", "100")

    path = svg_children(first, "path")[0]
    assert path.get("d") == (
        "M 100.000000 50.000000 L 110.000000 50.000000 L 110.000000 60.000000 Z"
    )

    text = svg_children(first, "text")[0]
    assert (text.get("x"), text.get("y")) == ("105.000000", "65.000000")

    note = svg_children(second, "text")[0]
    assert (note.get("x"), note.get("y")) == ("100.000000", "50.000000")


def test_fold_counters():
    ctx = _run(make_context(UML_EXPORT_SVG))
    # first group: 2 rects + 1 text + 1 path, second group: 1 text
    assert ctx.counters.transforms_applied == 5
    assert ctx.counters.folds == 2
    assert ctx.counters.rects_removed == 1
    assert ctx.counters.attributes_cleaned == 1
    assert ctx.counters.fonts_changed == 1


def test_end_to_end_two_level_nesting():
    ctx = make_context(
        f"<svg {NS}><g>"
        '<g transform="matrix(1 0 0 1 100 50)">'
        '<rect x="0" y="0" width="5" height="5"/>'
        '<path d="M 0 0 L 10 0 Z"/>'
        '<text x="1" y="2">A</text>'
        "</g></g></svg>"
    )
    shared_transform_extraction(ctx)
    assert ctx.shared_matrix == Matrix(1, 0, 0, 1, 100, 50)

    group_cleaning(ctx)
    inner = _element_groups(ctx)[0]
    assert inner.get("transform") is None
    rect = svg_children(inner, "rect")[0]
    assert (float(rect.get("x")), float(rect.get("y"))) == (100.0, 50.0)
    assert svg_children(inner, "path")[0].get("d") == "M 100.000000 50.000000 L 110.000000 50.000000 Z"
    text = svg_children(inner, "text")[0]
    assert (float(text.get("x")), float(text.get("y"))) == (101.0, 52.0)


def test_group_with_different_matrix_is_not_folded():
    ctx = make_context(
        f"<svg {NS}><g>"
        '<g transform="matrix(1 0 0 1 100 50)"><rect x="0" y="0"/></g>'
        '<g transform="matrix(1 0 0 1 7 7)"><rect x="0" y="0"/></g>'
        "</g></svg>"
    )
    _run(ctx)
    other = _element_groups(ctx)[1]
    assert other.get("transform") == "matrix(1 0 0 1 7 7)"
    assert svg_children(other, "rect")[0].get("x") == "0"


def test_near_identical_matrix_is_folded():
    ctx = make_context(
        f"<svg {NS}><g>"
        '<g transform="matrix(1 0 0 1 100 50)"><rect x="0" y="0"/></g>'
        '<g transform="matrix(1 0 0 1 100.00001 49.99999)"><rect x="0" y="0"/></g>'
        "</g></svg>"
    )
    _run(ctx)
    other = _element_groups(ctx)[1]
    assert other.get("transform") is None
    assert svg_children(other, "rect")[0].get("x") == "100.000000"


def test_non_matrix_shared_transform_disables_folding():
    ctx = _run(make_context(TRANSLATE_SVG))
    groups = _element_groups(ctx)
    assert groups[0].get("transform") == "translate(5 5)"
    assert groups[1].get("transform") == "matrix(1 0 0 1 5 5)"
    assert ctx.counters.transforms_applied == 0


def test_matrix_keeps_propagating_below_fold():
    ctx = make_context(
        f"<svg {NS}><g>"
        '<g transform="matrix(1 0 0 1 10 10)"><rect x="0" y="0"/>'
        '<g transform="matrix(1 0 0 1 10 10)"><rect x="1" y="1"/></g>'
        "</g></g></svg>"
    )
    _run(ctx)
    outer = _element_groups(ctx)[0]
    nested = svg_children(outer, "g")[0]
    assert nested.get("transform") is None
    assert svg_children(outer, "rect")[0].get("x") == "10.000000"
    assert svg_children(nested, "rect")[0].get("x") == "11.000000"
    assert ctx.counters.folds == 2


def test_malformed_coordinates_default_to_zero():
    ctx = make_context(
        f"<svg {NS}><g>"
        '<g transform="matrix(1 0 0 1 100 50)"><rect x="abc" width="3"/><text y="n/a">T</text></g>'
        "</g></svg>"
    )
    _run(ctx)
    group = _element_groups(ctx)[0]
    rect = svg_children(group, "rect")[0]
    assert (rect.get("x"), rect.get("y")) == ("100.000000", "50.000000")
    text = svg_children(group, "text")[0]
    assert (text.get("x"), text.get("y")) == ("100.000000", "50.000000")


def test_scale_moves_origin_only():
    root = parse_svg_string(
        f'<svg {NS}><g transform="matrix(2 0 0 2 0 0)"><rect x="1" y="1" width="10" height="4"/></g></svg>'
    )
    ctx = make_context(f"<svg {NS}/>")
    group = svg_children(root, "g")[0]
    clean_group(group, Matrix(2, 0, 0, 2, 0, 0), ctx)
    rect = svg_children(group, "rect")[0]
    assert (rect.get("x"), rect.get("y")) == ("2.000000", "2.000000")
    assert (rect.get("width"), rect.get("height")) == ("10", "4")


def test_child_transforms_are_stripped():
    ctx = make_context(f"<svg {NS}/>")
    group = parse_svg_string(
        f'<g {NS} transform="matrix(1 0 0 1 1 1)">'
        '<rect x="0" y="0" transform="rotate(45)"/>'
        '<path transform="scale(2)"/>'
        "</g>"
    )
    clean_group(group, translation(1, 1), ctx)
    assert svg_children(group, "rect")[0].get("transform") is None
    path = svg_children(group, "path")[0]
    assert path.get("transform") is None
    assert path.get("d") is None
    # the path had no d, so only the rect counts
    assert ctx.counters.transforms_applied == 1


# ── Rectangle removal ───────────────────────────────────────────────────


@pytest.mark.parametrize(
    "attrs",
    [
        'fill="#FFFFFF00"',
        'fill="#ffffff00"',
        'fill="#FF000000"',
        'opacity="0"',
        'fill-opacity="0"',
        'fill="#FFFFFF" stroke="#000000" opacity="0"',
    ],
)
def test_invisible_rects(attrs):
    assert is_invisible_rect(parse_svg_string(f"<rect {NS} {attrs}/>"))


@pytest.mark.parametrize(
    "attrs",
    [
        'fill="#FFFFFF" stroke="black"',
        'fill="white"',
        'fill="#FFFFFF"',
        'fill="#FFFF00"',
        'fill="#FFFFFF80"',
        'opacity="0.0"',
        'fill-opacity="0.5"',
        "",
    ],
)
def test_visible_rects_are_kept(attrs):
    assert not is_invisible_rect(parse_svg_string(f"<rect {NS} {attrs}/>"))


def test_rect_removal_in_nested_group():
    ctx = make_context(
        f"<svg {NS}><g><g><g>"
        '<rect fill="#00000000"/><rect fill="#FFFFFF" stroke="black"/>'
        "</g></g></g></svg>"
    )
    _run(ctx)
    deepest = ctx.root.find(".//{http://www.w3.org/2000/svg}g/{http://www.w3.org/2000/svg}g/{http://www.w3.org/2000/svg}g")
    rects = svg_children(deepest, "rect")
    assert len(rects) == 1
    assert rects[0].get("stroke") == "black"
    assert ctx.counters.rects_removed == 1


# ── Attribute sanitization ──────────────────────────────────────────────


def test_sanitize_denylisted_attributes():
    ctx = make_context(
        f"<svg {NS}><g>"
        '<g paint-order="stroke">'
        '<rect vector-effect="non-scaling-stroke" stroke-dasharray="" stroke-miterlimit="10"/>'
        '<path d="M 0 0 L 1 1 Z Z" stroke-miterlimit="  " stroke-dasharray="4 2"/>'
        '<text paint-order="fill" vector-effect="none">x</text>'
        "</g></g></svg>"
    )
    _run(ctx)
    group = _element_groups(ctx)[0]
    assert "paint-order" not in group.attrib

    rect = svg_children(group, "rect")[0]
    assert "vector-effect" not in rect.attrib
    assert "stroke-dasharray" not in rect.attrib
    assert rect.get("stroke-miterlimit") == "10"

    path = svg_children(group, "path")[0]
    assert path.get("d") == "M 0 0 L 1 1 Z"
    assert "stroke-miterlimit" not in path.attrib
    assert path.get("stroke-dasharray") == "4 2"

    text = svg_children(group, "text")[0]
    assert "paint-order" not in text.attrib
    assert "vector-effect" not in text.attrib

    # group 1 + rect 2 + path 2 + text 2
    assert ctx.counters.attributes_cleaned == 7


# ── Font retargeting ────────────────────────────────────────────────────


def test_font_retargeting_default():
    ctx = make_context(
        f"<svg {NS}><g><g>"
        '<text font-family="Arial">a</text>'
        '<text font-family="ARIAL">b</text>'
        '<text font-family="Calibri">c</text>'
        "<text>d</text>"
        "</g></g></svg>"
    )
    _run(ctx)
    fonts = [t.get("font-family") for t in ctx.root.iter("{http://www.w3.org/2000/svg}text")]
    assert fonts == ["Cambria", "Cambria", "Calibri", None]
    assert ctx.counters.fonts_changed == 2


def test_font_retargeting_custom_target():
    ctx = make_context(
        f'<svg {NS}><g><text font-family="Arial">a</text></g></svg>', target_font="Georgia"
    )
    _run(ctx)
    assert ctx.root.find(".//{http://www.w3.org/2000/svg}text").get("font-family") == "Georgia"


def test_font_retargeting_disabled():
    ctx = make_context(
        f'<svg {NS}><g><text font-family="Arial">a</text></g></svg>', change_fonts=False
    )
    _run(ctx)
    assert ctx.root.find(".//{http://www.w3.org/2000/svg}text").get("font-family") == "Arial"
    assert not ctx.modified


def test_font_in_deeply_nested_group():
    ctx = make_context(
        f'<svg {NS}><g><g><g><g><text font-family="Arial">deep</text></g></g></g></g></svg>'
    )
    _run(ctx)
    assert ctx.root.find(".//{http://www.w3.org/2000/svg}text").get("font-family") == "Cambria"
    assert ctx.counters.fonts_changed == 1


# ── Idempotence ─────────────────────────────────────────────────────────


def test_second_pass_changes_nothing():
    ctx = _run(make_context(UML_EXPORT_SVG))
    assert ctx.modified

    again = make_context(UML_EXPORT_SVG)
    again.root = ctx.root
    _run(again)
    assert not again.modified
    assert again.counters.as_dict() == {k: 0 for k in again.counters.as_dict()}


def test_shapes_directly_under_root_are_not_visited():
    ctx = make_context(f'<svg {NS}><rect fill="#FFFFFF00"/><g/></svg>')
    _run(ctx)
    assert len(svg_children(ctx.root, "rect")) == 1
