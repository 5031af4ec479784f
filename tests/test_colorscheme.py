from xml.dom import minidom

import pytest

from xdgkit.colorscheme import recolor_svg, stylesheet

SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg">'
    '<style id="current-color-scheme" type="text/css">.a{fill:red}</style>'
    '<style id="other">.b{fill:blue}</style>'
    '<rect class="ColorScheme-Text"/>'
    "</svg>"
)


def _styles(data):
    doc = minidom.parseString(data)
    return {
        el.getAttribute("id"): "".join(c.data for c in el.childNodes)
        for el in doc.getElementsByTagName("style")
    }


def test_stylesheet_contains_colours_in_order():
    css = stylesheet("#111111", "#222222", "#333333")
    assert css.startswith("\n.ColorScheme-Text, .ColorScheme-NeutralText {color:#111111;}")
    assert "\n.ColorScheme-Background {color:#222222;}" in css
    assert css.endswith("\n.ColorScheme-Highlight {color:#333333;}")


def test_recolor_appends_to_scheme_style_only():
    out = recolor_svg(SVG.encode(), "#111111", "#222222", "#333333")
    styles = _styles(out)
    assert styles["current-color-scheme"] == ".a{fill:red}" + stylesheet("#111111", "#222222", "#333333")
    assert styles["other"] == ".b{fill:blue}"


def test_recolor_keeps_attributes_and_other_elements():
    doc = minidom.parseString(recolor_svg(SVG, "#000000", "#ffffff", "#00ff00"))
    style = doc.getElementsByTagName("style")[0]
    assert style.getAttribute("type") == "text/css"
    assert doc.getElementsByTagName("rect")[0].getAttribute("class") == "ColorScheme-Text"


def test_prefixed_style_is_not_recoloured():
    svg = (
        '<svg:svg xmlns:svg="http://www.w3.org/2000/svg">'
        '<svg:style id="current-color-scheme">.a{}</svg:style></svg:svg>'
    )
    doc = minidom.parseString(recolor_svg(svg, "#000000", "#ffffff", "#00ff00"))
    element = doc.getElementsByTagName("svg:style")[0]
    assert "".join(c.data for c in element.childNodes) == ".a{}"


def test_empty_scheme_style_gets_stylesheet():
    svg = '<svg><style id="current-color-scheme"/></svg>'
    styles = _styles(recolor_svg(svg, "#010101", "#020202", "#030303"))
    assert styles["current-color-scheme"] == stylesheet("#010101", "#020202", "#030303")


def test_malformed_svg_raises():
    with pytest.raises(ValueError):
        recolor_svg(b"<svg><style>", "#000000", "#ffffff", "#00ff00")