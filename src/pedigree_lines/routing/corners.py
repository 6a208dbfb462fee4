"""Rounded corner geometry for orthogonal pedigree lines.

A corner joins a horizontal and a vertical segment with a cubic Bézier
curve approximating a quarter circle.  The two straight segments are cut
back by exactly one radius from the bend point, so the corner starts and
ends one radius away from the bend along each segment.

Key invariant
-------------
The inbound tangent at the corner start and the outbound tangent at the
corner end are axis-aligned and perpendicular.  ``bends_down=True``
selects a horizontal inbound tangent; ``False`` a vertical one.

Doubled (consanguineous) lines draw the corner twice, each copy shifted by
its own vector.  The shift vectors depend only on the turn kind and the
horizontal direction, and keep each copy joined to the matching copy of
the adjacent straight segments.
"""

from __future__ import annotations

from dataclasses import dataclass

import drawsvg as draw

from pedigree_lines.layout.constants import (
    CORNER_BEZIER_K,
    COORD_TOLERANCE,
    DOUBLE_LINE_OFFSET,
)
from pedigree_lines.render.surface import DrawingSurface, Primitive

Point = tuple[float, float]
Shifts = tuple[float, float, float, float]


@dataclass(frozen=True)
class Corner:
    """Geometry of one rounded corner."""

    start: Point
    control1: Point
    control2: Point
    end: Point
    bends_down: bool
    shifts: Shifts = (0.0, 0.0, 0.0, 0.0)

    @property
    def bend(self) -> Point:
        """The point where the two straight segments would have met."""
        if self.bends_down:
            return (self.end[0], self.start[1])
        return (self.start[0], self.end[1])

    @property
    def points(self) -> tuple[Point, Point, Point, Point]:
        return (self.start, self.control1, self.control2, self.end)


# ---------------------------------------------------------------------------
# Double-line shift tables
# ---------------------------------------------------------------------------


def corner_shifts(
    start: Point, end: Point, bends_down: bool, offset: float = DOUBLE_LINE_OFFSET
) -> Shifts:
    """Shift vectors ``(dx1, dy1, dx2, dy2)`` for the two copies of a doubled corner.

    The first copy moves toward the inside of the turn, the second toward
    the outside, so each lands on the matching copy of the straight
    segments (which are offset by ``offset`` perpendicular to themselves).

    For a turn that climbs by one radius this gives, going left/right:

    ==================  ======================  ======================
    turn                left                    right
    ==================  ======================  ======================
    horizontal->up      (+o, -o, -o, +o)        (-o, -o, +o, +o)
    vertical->across    (-o, +o, +o, -o)        (+o, +o, -o, -o)
    ==================  ======================  ======================
    """
    sx, sy = start
    ex, ey = end
    if bends_down:
        out_x = offset if ex > sx else -offset
        out_y = offset if sy > ey else -offset
    else:
        out_x = offset if sx > ex else -offset
        out_y = offset if ey > sy else -offset
    return (-out_x, -out_y, out_x, out_y)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def build_corner(
    start: Point,
    end: Point,
    bends_down: bool,
    shifts: Shifts = (0.0, 0.0, 0.0, 0.0),
) -> Corner:
    """Build the corner curve from ``start`` to ``end``.

    Deterministic: the same inputs always give the same control points.
    """
    sx, sy = start
    ex, ey = end
    if abs(ex - sx) < COORD_TOLERANCE or abs(ey - sy) < COORD_TOLERANCE:
        raise ValueError(
            f"Corner endpoints {start} and {end} must differ in both X and Y"
        )
    k = CORNER_BEZIER_K
    if bends_down:
        c1 = (sx + (ex - sx) * k, sy)
        c2 = (ex, ey - (ey - sy) * k)
    else:
        c1 = (sx, sy + (ey - sy) * k)
        c2 = (ex - (ex - sx) * k, ey)
    return Corner(start, c1, c2, end, bends_down, shifts)


def corner_at(
    bend: Point,
    inbound: Point,
    outbound: Point,
    radius: float,
) -> Corner:
    """Build the corner that rounds ``bend`` between two axis-aligned segments.

    ``inbound`` and ``outbound`` are unit direction vectors of the segment
    arriving at and leaving the bend.  Double-line shifts are derived from
    the turn.
    """
    bx, by = bend
    start = (bx - inbound[0] * radius, by - inbound[1] * radius)
    end = (bx + outbound[0] * radius, by + outbound[1] * radius)
    bends_down = inbound[1] == 0
    return build_corner(
        start, end, bends_down, shifts=corner_shifts(start, end, bends_down)
    )


def draw_corner(
    surface: DrawingSurface,
    corner: Corner,
    attrs: dict,
    style: object | None = None,
    owner: str | None = None,
    double: bool = False,
) -> list[Primitive]:
    """Emit ``corner`` on ``surface``; twice, shifted, when ``double``."""
    if not double:
        return [_add_corner_path(surface, corner, attrs, style, owner, None)]
    dx1, dy1, dx2, dy2 = corner.shifts
    return [
        _add_corner_path(surface, corner, attrs, style, owner, (dx1, dy1)),
        _add_corner_path(surface, corner, attrs, style, owner, (dx2, dy2)),
    ]


def _add_corner_path(
    surface: DrawingSurface,
    corner: Corner,
    attrs: dict,
    style: object | None,
    owner: str | None,
    shift: tuple[float, float] | None,
) -> Primitive:
    extra = {}
    if shift is not None:
        extra["transform"] = f"translate({shift[0]},{shift[1]})"
    path = draw.Path(**attrs, **extra)
    path.M(*corner.start)
    path.C(*corner.control1, *corner.control2, *corner.end)
    return surface.add(
        Primitive("corner", corner.points, path, style=style, owner=owner),
        to_back=True,
    )


# ---------------------------------------------------------------------------
# Line helpers
# ---------------------------------------------------------------------------


def find_x_intercept(y: float, p1: Point, p2: Point) -> float:
    """X at which the line through ``p1`` and ``p2`` reaches height ``y``."""
    x1, y1 = p1
    x2, y2 = p2
    if abs(x1 - x2) < COORD_TOLERANCE:
        return x1
    if abs(y1 - y2) < COORD_TOLERANCE:
        raise ValueError(f"Horizontal line {p1} -> {p2} has no X intercept at y={y}")
    return x1 + (y - y1) * (x2 - x1) / (y2 - y1)
