"""Freedesktop icon theme lookup, GTK icon cache reading, SVG recolouring and a MIME type tool."""

__version__ = "0.1.0"