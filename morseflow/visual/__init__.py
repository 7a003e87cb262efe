"""SVG rendering of code strings."""

from .svg import SvgGenerator  # noqa: F401

__all__ = ["SvgGenerator"]
