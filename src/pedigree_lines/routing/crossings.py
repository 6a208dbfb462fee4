"""Straight and curved line drawing with crossing resolution.

Every segment drawn for a partnership is appended to a :class:`DrawLog`.
When a new segment crosses a segment already logged by another
partnership, the new segment is drawn with a small hump (horizontal lines)
or a gap (vertical lines) at the crossing, so it reads as passing over or
behind the earlier line.  Earlier geometry is never touched, which makes
the result depend on draw order: callers process partnerships in a fixed
order for reproducible output.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass

import drawsvg as draw

from pedigree_lines.layout.constants import (
    CORNER_RADIUS,
    COORD_TOLERANCE,
    CROSSING_GAP_HALF_HEIGHT,
    CROSSING_HUMP_HALF_WIDTH,
    CURVED_APPROACH_SCALE,
    DOUBLE_LINE_OFFSET,
    NO_CROSSING_PROXIMITY,
)
from pedigree_lines.render.style import LineStyle, Theme
from pedigree_lines.render.surface import DrawingSurface, Primitive
from pedigree_lines.routing.corners import corner_at, draw_corner

log = logging.getLogger(__name__)

Point = tuple[float, float]


@dataclass(frozen=True)
class Segment:
    """A logged straight segment, normalised left-to-right / top-to-bottom."""

    start: Point
    end: Point
    owner: str
    channel: str = ""

    @property
    def is_horizontal(self) -> bool:
        return abs(self.start[1] - self.end[1]) < COORD_TOLERANCE

    @property
    def is_vertical(self) -> bool:
        return abs(self.start[0] - self.end[0]) < COORD_TOLERANCE


class DrawLog:
    """Append-only record of the segments drawn in the current diagram pass."""

    def __init__(self) -> None:
        self._entries: list[Segment] = []

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, segment: Segment) -> None:
        self._entries.append(segment)

    def forget(self, owner: str, channel: str | None = None) -> None:
        """Drop ``owner``'s entries (only ``channel``'s, when given)."""
        self._entries = [
            s
            for s in self._entries
            if not (s.owner == owner and (channel is None or s.channel == channel))
        ]

    def clear(self) -> None:
        self._entries = []

    def others(self, owner: str) -> list[Segment]:
        return [s for s in self._entries if s.owner != owner]


def _normalise(start: Point, end: Point) -> tuple[Point, Point]:
    (x1, y1), (x2, y2) = start, end
    if x1 > x2 or (x1 == x2 and y1 > y2):
        return end, start
    return start, end


def _crossing(a: Segment, b: Segment) -> Point | None:
    """Interior intersection of ``a`` with ``b``, or None."""
    (x1, y1), (x2, y2) = a.start, a.end
    (x3, y3), (x4, y4) = b.start, b.end
    denom = (x2 - x1) * (y4 - y3) - (y2 - y1) * (x4 - x3)
    if abs(denom) < COORD_TOLERANCE:
        return None  # parallel or collinear
    t = ((x3 - x1) * (y4 - y3) - (y3 - y1) * (x4 - x3)) / denom
    u = ((x3 - x1) * (y2 - y1) - (y3 - y1) * (x2 - x1)) / denom
    eps = 1e-9
    if not (0.0 <= t <= 1.0 and eps < u < 1.0 - eps):
        return None
    return (x1 + t * (x2 - x1), y1 + t * (y2 - y1))


class CrossingAwareLineDrawer:
    """Draws segments for one diagram pass, resolving crossings via the log."""

    def __init__(self, surface: DrawingSurface, draw_log: DrawLog, theme: Theme):
        self.surface = surface
        self.draw_log = draw_log
        self.theme = theme

    def crossings(self, segment: Segment) -> list[Point]:
        """Crossings of ``segment`` with other owners' segments worth marking.

        Sorted by distance from the segment start.  Crossings near either
        endpoint are joins, not crossings, and are skipped.
        """
        points = []
        for other in self.draw_log.others(segment.owner):
            p = _crossing(segment, other)
            if p is None:
                continue
            if (
                math.dist(p, segment.start) < NO_CROSSING_PROXIMITY
                or math.dist(p, segment.end) < NO_CROSSING_PROXIMITY
            ):
                continue
            points.append(p)
        points.sort(key=lambda p: math.dist(p, segment.start))

        # Crossings too close together share one hump/gap
        merged: list[Point] = []
        for p in points:
            if merged and math.dist(p, merged[-1]) < 2 * CROSSING_HUMP_HALF_WIDTH:
                continue
            merged.append(p)
        return merged

    def draw_line(
        self,
        owner: str,
        start: Point,
        end: Point,
        style: LineStyle,
        double: bool = False,
        second_below: bool = False,
        channel: str = "",
    ) -> list[Primitive]:
        """Draw one straight segment; returns the primitives added (none if zero length)."""
        start, end = _normalise(start, end)
        if math.dist(start, end) < COORD_TOLERANCE:
            return []

        segment = Segment(start, end, owner, channel)
        crossing_points = self.crossings(segment)
        self.draw_log.record(segment)
        if crossing_points:
            log.debug(
                "%s: %d crossing(s) on %s -> %s",
                owner, len(crossing_points), start, end,
            )

        attrs = self.theme.line_attrs(style)
        if not double:
            path = self._segment_path(segment, crossing_points, attrs, None)
            return [self._add(path, segment, style)]

        (x1, y1), (x2, y2) = start, end
        length = math.dist(start, end)
        nx_, ny_ = -(y2 - y1) / length, (x2 - x1) / length
        # The copy drawn second is the one below (or above) the path
        if (ny_ < 0) == second_below:
            nx_, ny_ = -nx_, -ny_
        o = DOUBLE_LINE_OFFSET
        shifts = [(-nx_ * o, -ny_ * o), (nx_ * o, ny_ * o)]
        return [
            self._add(self._segment_path(segment, crossing_points, attrs, s), segment, style)
            for s in shifts
        ]

    def draw_curved_line(
        self,
        owner: str,
        start: Point,
        y_top: float,
        end: Point,
        last_bend: float,
        style: LineStyle,
        double: bool = False,
        second_below: bool = False,
        channel: str = "",
    ) -> list[Primitive]:
        """Draw the final approach from ``start`` to a parent's attachment point.

        Climbs (or drops) vertically to ``y_top`` with a rounded corner, runs
        horizontally toward the parent and, for a finite ``last_bend``, jogs
        to ``end``'s height ``last_bend`` units before reaching it.  Any piece
        with no room degenerates to a straight line.
        """
        xf, yf = start
        xt, yt = end
        radius = CORNER_RADIUS * CURVED_APPROACH_SCALE
        line_args = dict(double=double, second_below=second_below, channel=channel)

        if abs(xt - xf) < COORD_TOLERANCE:
            return self.draw_line(owner, start, end, style, **line_args)

        drawn: list[Primitive] = []
        s = 1.0 if xt > xf else -1.0
        x = xf

        if abs(yf - y_top) > COORD_TOLERANCE:
            v = 1.0 if y_top > yf else -1.0
            r = min(radius, abs(y_top - yf), abs(xt - xf) / 2)
            drawn += self.draw_line(owner, start, (xf, y_top - v * r), style, **line_args)
            drawn += self._corner(owner, (xf, y_top), (0.0, v), (s, 0.0), r, style, double)
            x = xf + s * r

        if math.isinf(last_bend) or abs(yt - y_top) < COORD_TOLERANCE:
            drawn += self.draw_line(owner, (x, y_top), (xt, y_top), style, **line_args)
            drawn += self.draw_line(owner, (xt, y_top), (xt, yt), style, **line_args)
            return drawn

        xb = xt - s * last_bend
        if s * (xb - x) < 0:
            xb = x
        v = 1.0 if yt > y_top else -1.0
        r = min(radius, abs(yt - y_top) / 2, abs(xb - x), abs(xt - xb))
        if r < COORD_TOLERANCE:
            drawn += self.draw_line(owner, (x, y_top), (xb, y_top), style, **line_args)
            drawn += self.draw_line(owner, (xb, y_top), (xb, yt), style, **line_args)
            drawn += self.draw_line(owner, (xb, yt), (xt, yt), style, **line_args)
            return drawn

        drawn += self.draw_line(owner, (x, y_top), (xb - s * r, y_top), style, **line_args)
        drawn += self._corner(owner, (xb, y_top), (s, 0.0), (0.0, v), r, style, double)
        drawn += self.draw_line(
            owner, (xb, y_top + v * r), (xb, yt - v * r), style, **line_args
        )
        drawn += self._corner(owner, (xb, yt), (0.0, v), (s, 0.0), r, style, double)
        drawn += self.draw_line(owner, (xb + s * r, yt), (xt, yt), style, **line_args)
        return drawn

    # -- internals ---------------------------------------------------------

    def _corner(
        self,
        owner: str,
        bend: Point,
        inbound: Point,
        outbound: Point,
        radius: float,
        style: LineStyle,
        double: bool,
    ) -> list[Primitive]:
        corner = corner_at(bend, inbound, outbound, radius)
        return draw_corner(
            self.surface, corner, self.theme.line_attrs(style),
            style=style, owner=owner, double=double,
        )

    def _segment_path(
        self,
        segment: Segment,
        crossing_points: list[Point],
        attrs: dict,
        shift: tuple[float, float] | None,
    ) -> draw.Path:
        extra = {}
        if shift is not None:
            extra["transform"] = f"translate({shift[0]},{shift[1]})"
        path = draw.Path(**attrs, **extra)
        (x1, y1), (x2, y2) = segment.start, segment.end
        path.M(x1, y1)
        h = CROSSING_HUMP_HALF_WIDTH
        g = CROSSING_GAP_HALF_HEIGHT
        for px, py in crossing_points:
            if segment.is_horizontal:
                path.L(px - h, y1)
                path.C(px - h, y1 - h, px + h, y1 - h, px + h, y1)
            elif segment.is_vertical:
                path.L(x1, py - g)
                path.M(x1, py + g)
        path.L(x2, y2)
        return path

    def _add(self, path: draw.Path, segment: Segment, style: LineStyle) -> Primitive:
        return self.surface.add(
            Primitive(
                "segment", (segment.start, segment.end), path,
                style=style, owner=segment.owner,
            ),
            to_back=True,
        )
