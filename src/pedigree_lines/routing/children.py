r"""Children fan-out: from a partnership junction down to each child.

Layout of the fan-out, top to bottom::

    junction
       |                 stem (junction -> children row)
    ---+--------------   children row
    |     |      |       twin groups get one shared sub-stem,
    |    / \    /|\      then one branch per twin; monozygotic
    |   /   \  /-+-\     groups add a tie line between the
    c1 c2  c3 c4 c5 c6   outer twins' branches

Each twin group or singleton is one pregnancy.  A partnership with more
than one pregnancy gets a small orb where the stem meets the row.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pedigree_lines.layout.constants import (
    CONSANGUINEOUS_STEM_SHIFT,
    COORD_TOLERANCE,
    PARTNERSHIP_RADIUS,
    TWIN_COMMON_VERTICAL_LENGTH,
    TWIN_MONOZYGOTIC_LINE_SHIFT_Y,
)
from pedigree_lines.layout.coords import CoordinateConverter
from pedigree_lines.parser.model import PedigreeLayout
from pedigree_lines.render.nodes import NodeVisuals
from pedigree_lines.render.style import LineStyle
from pedigree_lines.routing.corners import find_x_intercept
from pedigree_lines.routing.crossings import CrossingAwareLineDrawer

log = logging.getLogger(__name__)

Point = tuple[float, float]

CHANNEL = "children"


@dataclass(frozen=True)
class TwinGroup:
    """Children of one multiple pregnancy, left to right."""

    members: tuple[str, ...]
    positions: tuple[Point, ...]
    monozygotic: bool

    @classmethod
    def of(cls, members: list[str], visuals: dict[str, NodeVisuals]) -> TwinGroup:
        if not members:
            raise ValueError("Twin group has no members")
        return cls(
            members=tuple(members),
            positions=tuple((visuals[m].x, visuals[m].y) for m in members),
            monozygotic=visuals[members[0]].monozygotic,
        )

    @property
    def left(self) -> Point:
        return self.positions[0]

    @property
    def right(self) -> Point:
        return self.positions[-1]

    @property
    def center_x(self) -> float:
        """Midpoint of the outer twins; the middle twin's X for triplets."""
        if len(self.positions) == 3:
            return self.positions[1][0]
        return (self.left[0] + self.right[0]) / 2

    def is_outer(self, x: float) -> bool:
        return abs(x - self.left[0]) < COORD_TOLERANCE or abs(x - self.right[0]) < COORD_TOLERANCE


@dataclass
class Fanout:
    """Summary of one drawn fan-out."""

    row_y: float | None = None
    leftmost_x: float | None = None
    rightmost_x: float | None = None
    pregnancies: int = 0
    all_lost_contact: bool = False
    row_style: LineStyle | None = None


class ChildFanoutBuilder:
    """Draws the partnership-to-children connection."""

    def __init__(
        self,
        layout: PedigreeLayout,
        converter: CoordinateConverter,
        visuals: dict[str, NodeVisuals],
        drawer: CrossingAwareLineDrawer,
    ):
        self.layout = layout
        self.converter = converter
        self.visuals = visuals
        self.drawer = drawer

    def child_lost_contact(self, child: str) -> bool:
        layout = self.layout
        return (
            layout.is_child_of_proband(child) or layout.is_sibling_of_proband(child)
        ) and self.visuals[child].lost_contact

    def draw(self, partnership_id: str, junction: Point, consanguineous: bool) -> Fanout:
        layout = self.layout
        children = layout.children_sorted_by_order(partnership_id)
        if not children or (len(children) == 1 and layout.is_placeholder(children[0])):
            return Fanout()

        owner = partnership_id
        drawer = self.drawer
        _, hub_y = layout.childhub_position(partnership_id)
        row_y = self.converter.to_canvas_y(hub_y)
        stem_foot_y = row_y + TWIN_COMMON_VERTICAL_LENGTH
        twin_line_y = row_y + TWIN_MONOZYGOTIC_LINE_SHIFT_Y
        jx, jy = junction

        leftmost = rightmost = jx
        current_group = None
        group: TwinGroup | None = None
        pregnancies = 0
        all_lost = True

        for child in children:
            group_id = layout.twin_group_id(child)
            if group_id is None:
                pregnancies += 1
                current_group = None
                group = None
            elif group_id != current_group:
                pregnancies += 1
                current_group = group_id
                group = TwinGroup.of(layout.all_twins_sorted_by_order(child), self.visuals)
                cx = group.center_x
                drawer.draw_line(
                    owner, (cx, row_y), (cx, stem_foot_y), LineStyle.PARTNER, channel=CHANNEL
                )
                if group.monozygotic:
                    x1 = find_x_intercept(twin_line_y, (cx, stem_foot_y), group.left)
                    x2 = find_x_intercept(twin_line_y, (cx, stem_foot_y), group.right)
                    drawer.draw_line(
                        owner, (x1, twin_line_y), (x2, twin_line_y),
                        LineStyle.PARTNER, channel=CHANNEL,
                    )

            vis = self.visuals[child]
            if group is None:
                top = (vis.x, row_y)
            else:
                top = (group.center_x, stem_foot_y)
            leftmost = min(leftmost, top[0])
            rightmost = max(rightmost, top[0])

            lost = self.child_lost_contact(child)
            all_lost = all_lost and lost
            style = LineStyle.select(lost_contact=lost, adopted_in=layout.is_adopted_in(child))

            start = top
            if group is not None and group.monozygotic and not group.is_outer(vis.x):
                start = (find_x_intercept(twin_line_y, top, (vis.x, vis.y)), twin_line_y)
            drawer.draw_line(owner, start, (vis.x, vis.y), style, channel=CHANNEL)

        row_style = LineStyle.NO_CONTACT if all_lost else LineStyle.PARTNER
        drawer.draw_line(owner, (leftmost, row_y), (rightmost, row_y), row_style, channel=CHANNEL)
        stem_top = jy + CONSANGUINEOUS_STEM_SHIFT if consanguineous else jy
        drawer.draw_line(owner, (jx, stem_top), (jx, row_y), row_style, channel=CHANNEL)

        if pregnancies > 1:
            theme = drawer.theme
            drawer.surface.circle(
                (jx, row_y),
                PARTNERSHIP_RADIUS / 2,
                owner=owner,
                fill=theme.pregnancy_orb_fill,
                stroke=theme.pregnancy_orb_stroke,
                stroke_width=1,
            )

        log.debug(
            "%s: %d child(ren), %d pregnancy(ies)", partnership_id, len(children), pregnancies
        )
        return Fanout(
            row_y=row_y,
            leftmost_x=leftmost,
            rightmost_x=rightmost,
            pregnancies=pregnancies,
            all_lost_contact=all_lost,
            row_style=row_style,
        )
