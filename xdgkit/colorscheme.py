"""Recolouring of SVG icons that follow the KDE colour-scheme convention."""

from __future__ import annotations

from xml.dom import minidom
from xml.dom.minidom import Node
from xml.parsers.expat import ExpatError

STYLE_ID = "current-color-scheme"

_STYLE = (
    "\n.ColorScheme-Text, .ColorScheme-NeutralText {{color:{text};}}"
    "\n.ColorScheme-Background {{color:{background};}}"
    "\n.ColorScheme-Highlight {{color:{highlight};}}"
)


def stylesheet(text: str, background: str, highlight: str) -> str:
    """The CSS appended to an icon's colour-scheme style element."""
    return _STYLE.format(text=text, background=background, highlight=highlight)


def recolor_svg(data: bytes | str, text: str, background: str, highlight: str) -> bytes:
    """Append the colour stylesheet to every ``<style id="current-color-scheme">``.

    Raises ValueError when ``data`` is not well-formed XML.
    """
    try:
        document = minidom.parseString(data)
    except ExpatError as error:
        raise ValueError(f"invalid SVG document: {error}") from error

    css = stylesheet(text, background, highlight)
    try:
        for element in document.getElementsByTagName("style"):
            if element.getAttribute("id") != STYLE_ID:
                continue
            original = "".join(
                child.data
                for child in element.childNodes
                if child.nodeType in (Node.TEXT_NODE, Node.CDATA_SECTION_NODE)
            )
            while element.firstChild is not None:
                element.removeChild(element.firstChild)
            element.appendChild(document.createTextNode(original + css))
        return document.toxml(encoding="utf-8")
    finally:
        document.unlink()