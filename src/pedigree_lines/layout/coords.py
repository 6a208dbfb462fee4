"""Conversion between abstract layout units and drawing-surface units."""

from __future__ import annotations

from dataclasses import dataclass

Point = tuple[float, float]


@dataclass(frozen=True)
class CoordinateConverter:
    """Linear map from layout coordinates to surface coordinates.

    The layout engine positions nodes on an abstract grid; the surface is
    measured in SVG user units.  ``x_scale``/``y_scale`` stretch the grid
    and ``x_offset``/``y_offset`` move its origin away from the canvas edge.
    """

    x_scale: float = 1.0
    y_scale: float = 1.0
    x_offset: float = 0.0
    y_offset: float = 0.0

    def to_canvas(self, x: float, y: float) -> Point:
        return (x * self.x_scale + self.x_offset, y * self.y_scale + self.y_offset)

    def to_canvas_y(self, y: float) -> float:
        return y * self.y_scale + self.y_offset

    def to_graph(self, x: float, y: float) -> Point:
        """Inverse of :meth:`to_canvas`."""
        if self.x_scale == 0 or self.y_scale == 0:
            raise ValueError("Cannot invert a coordinate converter with zero scale")
        return ((x - self.x_offset) / self.x_scale, (y - self.y_offset) / self.y_scale)
