"""SVG generation for pedigree diagrams using drawsvg."""

from __future__ import annotations

from pedigree_lines.layout.coords import CoordinateConverter
from pedigree_lines.parser.model import PedigreeLayout
from pedigree_lines.render.diagram import Diagram
from pedigree_lines.render.style import Theme


def render_svg(
    layout: PedigreeLayout,
    theme: Theme,
    width: int | None = None,
    height: int | None = None,
    converter: CoordinateConverter | None = None,
    read_only: bool = True,
    smooth_corners: bool = True,
) -> str:
    """Render a laid-out pedigree to an SVG string."""
    if not layout.persons:
        return '<svg xmlns="http://www.w3.org/2000/svg"></svg>'

    diagram = Diagram(
        layout, theme, converter=converter, read_only=read_only,
        smooth_corners=smooth_corners,
    )
    diagram.render()
    return diagram.as_svg(width, height)
