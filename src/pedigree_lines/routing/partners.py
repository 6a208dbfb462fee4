"""Partner line routing: from a partnership junction to each partner.

The layout engine supplies, per partner, a list of routing waypoints that
ends at the partner.  The router walks those waypoints from the junction,
merges consecutive steps in the same direction into one straight run, and
at every horizontal/vertical turn cuts the run back by one corner radius
and inserts a rounded corner.  Angled steps (both coordinates change) are
drawn as plain diagonals and never get a corner.

The last leg is special: it has to reach the partner's attachment port,
not the partner's centre.  Partners with several relationships spread the
ports vertically, and the line jogs from the corridor height (``y_top``)
to the port height ``last_bend`` units before reaching the partner.

Key invariant
-------------
Every corner starts and ends exactly one radius from its bend point, on
two perpendicular runs.
"""

from __future__ import annotations

import logging
import math

import drawsvg as draw

from pedigree_lines.layout.constants import (
    BREAK_DASH_CENTERS,
    BREAK_DASH_HALF_HEIGHT,
    BREAK_DASH_HALF_WIDTH,
    BREAK_SKIP,
    BREAK_STUB_LENGTH,
    CORNER_RADIUS,
    COORD_TOLERANCE,
    LAST_BEND_BASE,
    LAST_BEND_PER_INDEX,
    LAST_BEND_PER_PORT,
    LAST_BEND_SINGLE_PORT,
    NODE_RADIUS,
)
from pedigree_lines.layout.coords import CoordinateConverter
from pedigree_lines.parser.model import PedigreeLayout, RelationshipLineInfo
from pedigree_lines.render.nodes import NodeVisuals
from pedigree_lines.render.style import LineStyle
from pedigree_lines.render.surface import Primitive
from pedigree_lines.routing.corners import corner_at, draw_corner
from pedigree_lines.routing.crossings import CrossingAwareLineDrawer

log = logging.getLogger(__name__)

Point = tuple[float, float]

CHANNEL = "partners"


def last_bend_distance(
    final_y: float,
    y_top: float,
    junction_y: float,
    info: RelationshipLineInfo,
) -> float:
    """Distance before the partner at which the final jog to the port happens.

    Infinite (no jog) when the corridor already sits at the topmost port
    above the junction.
    """
    if (
        abs(final_y - y_top) < COORD_TOLERANCE
        and y_top < junction_y
        and info.attachment_port == 1
    ):
        return math.inf
    if info.num_attach_ports > 1:
        return NODE_RADIUS * (
            LAST_BEND_BASE
            + info.num_attach_ports * LAST_BEND_PER_PORT
            - info.attachment_port * LAST_BEND_PER_INDEX
        )
    return NODE_RADIUS * LAST_BEND_SINGLE_PORT


def _step(a: Point, b: Point) -> tuple[str | None, Point]:
    """Classify the step a -> b as 'h', 'v', 'a' (angled) or None (no move)."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    moves_x = abs(dx) > COORD_TOLERANCE
    moves_y = abs(dy) > COORD_TOLERANCE
    if moves_x and moves_y:
        return "a", (dx, dy)
    if moves_x:
        return "h", (math.copysign(1.0, dx), 0.0)
    if moves_y:
        return "v", (0.0, math.copysign(1.0, dy))
    return None, (0.0, 0.0)


class PartnerPathRouter:
    """Draws the lines from one partnership junction to its partners."""

    def __init__(
        self,
        layout: PedigreeLayout,
        converter: CoordinateConverter,
        visuals: dict[str, NodeVisuals],
        drawer: CrossingAwareLineDrawer,
        smooth_corners: bool = True,
        corner_radius: float = CORNER_RADIUS,
    ):
        self.layout = layout
        self.converter = converter
        self.visuals = visuals
        self.drawer = drawer
        self.smooth_corners = smooth_corners
        self.corner_radius = corner_radius

    def draw(
        self,
        partnership_id: str,
        junction: Point,
        consanguineous: bool,
        broken: bool = False,
    ) -> list[Primitive]:
        drawn: list[Primitive] = []
        for path in self.layout.path_to_parents(partnership_id):
            drawn += _PathWalk(self, partnership_id, junction, path, consanguineous, broken).run()
        log.debug("%s: drew %d partner primitive(s)", partnership_id, len(drawn))
        return drawn

    def canvas_position(self, node_id: str) -> Point:
        vis = self.visuals.get(node_id)
        if vis is not None:
            return (vis.x, vis.y)
        return self.converter.to_canvas(*self.layout.position(node_id))


class _PathWalk:
    """State of one walk from the junction to one partner."""

    def __init__(
        self,
        router: PartnerPathRouter,
        partnership_id: str,
        junction: Point,
        path: list[str],
        consanguineous: bool,
        broken: bool,
    ):
        self.router = router
        self.owner = partnership_id
        self.junction = junction
        self.path = path
        self.double = consanguineous
        self.broken = broken
        self.style = LineStyle.select(consanguineous=consanguineous)
        self.drawn: list[Primitive] = []
        self.goes_left = False

    def run(self) -> list[Primitive]:
        router = self.router
        layout = router.layout
        parent = self.path[-1]
        info = layout.relationship_line_info(self.owner, parent)
        final_y = router.converter.to_canvas_y(info.attach_y)
        y_top = router.converter.to_canvas_y(info.vertical_y)
        last_bend = last_bend_distance(final_y, y_top, self.junction[1], info)

        # Waypoints in surface units; the last two sit on the corridor height
        n = len(self.path)
        points = [self.junction]
        for i, node_id in enumerate(self.path):
            x, y = router.canvas_position(node_id)
            points.append((x, y_top) if i >= n - 2 else (x, y))

        run_start = self.junction
        run_kind: str | None = None
        run_dir: Point = (0.0, 0.0)
        r = router.corner_radius

        for j in range(1, n):
            prev, here = points[j - 1], points[j]
            kind, direction = _step(prev, here)
            if kind is None:
                continue
            self._track_direction(direction)

            if j == 1 and self.goes_left and self.broken:
                run_start = self._draw_break()

            if run_kind is None:
                run_kind, run_dir = kind, direction
                continue
            if kind == run_kind and kind != "a" and direction == run_dir:
                continue

            # Direction change at ``prev``
            bend = prev
            perpendicular = {run_kind, kind} == {"h", "v"}
            # Full radius even on short runs; the cut may then overshoot run_start
            radius = r if router.smooth_corners and perpendicular else 0.0
            if radius > COORD_TOLERANCE:
                cut = (bend[0] - run_dir[0] * radius, bend[1] - run_dir[1] * radius)
                self._line(run_start, cut)
                corner = corner_at(bend, run_dir, direction, radius)
                self.drawn += draw_corner(
                    router.drawer.surface, corner,
                    router.drawer.theme.line_attrs(self.style),
                    style=self.style, owner=self.owner, double=self.double,
                )
                run_start = corner.end
            else:
                self._line(run_start, bend)
                run_start = bend
            run_kind, run_dir = kind, direction

        # Final leg into the partner
        last_waypoint, target = points[n - 1], points[n]
        _, final_dir = _step(last_waypoint, target)
        self._track_direction(final_dir)
        if n == 1 and self.goes_left and self.broken:
            run_start = self._draw_break()

        absorbed = run_kind is None or run_kind == "v" or (
            run_kind == "h"
            and abs(run_start[1] - y_top) < COORD_TOLERANCE
            and (final_dir[0] == 0 or math.copysign(1.0, final_dir[0]) == run_dir[0])
        )
        if not absorbed:
            self._line(run_start, last_waypoint)
            run_start = last_waypoint

        parent_vis = router.visuals[parent]
        final_style = LineStyle.select(
            consanguineous=self.double,
            lost_contact=(
                not layout.is_proband(parent)
                and parent_vis.lost_contact
                and layout.is_partnership_related_to_proband(self.owner)
            ),
        )
        end = (parent_vis.x, final_y)
        if (
            run_start[1] >= parent_vis.y + 2 * r
            and abs(run_start[0] - end[0]) < COORD_TOLERANCE
        ):
            self.drawn += router.drawer.draw_line(
                self.owner, run_start, end, final_style,
                double=self.double, second_below=self.goes_left, channel=CHANNEL,
            )
        else:
            self.drawn += router.drawer.draw_curved_line(
                self.owner, run_start, y_top, end, last_bend, final_style,
                double=self.double, second_below=self.goes_left, channel=CHANNEL,
            )
        return self.drawn

    def _track_direction(self, direction: Point) -> None:
        if direction[0] < 0:
            self.goes_left = True
        elif direction[0] > 0:
            self.goes_left = False

    def _line(self, start: Point, end: Point) -> None:
        self.drawn += self.router.drawer.draw_line(
            self.owner, start, end, self.style,
            double=self.double, second_below=self.goes_left, channel=CHANNEL,
        )

    def _draw_break(self) -> Point:
        """Draw the broken-relationship mark left of the junction.

        Returns the point where the partner line resumes.
        """
        x, y = self.junction
        self._line((x, y), (x - BREAK_STUB_LENGTH, y))
        drawer = self.router.drawer
        attrs = drawer.theme.line_attrs(self.style)
        w, h = BREAK_DASH_HALF_WIDTH, BREAK_DASH_HALF_HEIGHT
        for offset in BREAK_DASH_CENTERS:
            cx = x - offset
            start, end = (cx - w, y + h), (cx + w, y - h)
            dash = draw.Line(*start, *end, **attrs)
            self.drawn.append(
                drawer.surface.add(
                    Primitive("break", (start, end), dash, style=self.style, owner=self.owner),
                    to_back=True,
                )
            )
        return (x - BREAK_SKIP, y)
