"""Per-partnership drawing: junction, partner lines and children fan-out.

One :class:`PartnershipConnectionController` owns everything drawn for a
partnership.  Each sub-connection (partner lines, children fan-out) lives
in its own :class:`DrawnGroup`; a redraw always disposes the previous group
and the partnership's draw-log entries for that sub-connection before
drawing again, so repeated redraws never accumulate stale elements.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol

import drawsvg as draw

from pedigree_lines.layout.constants import PARTNERSHIP_CHILDLESS_LENGTH, PARTNERSHIP_RADIUS
from pedigree_lines.layout.coords import CoordinateConverter
from pedigree_lines.parser.model import Consanguinity, PedigreeLayout
from pedigree_lines.render.constants import (
    GROW_SCALE,
    HIGHLIGHT_GLOW_OPACITY,
    HIGHLIGHT_GLOW_WIDTH,
    PREGNANCY_GLOW_OPACITY,
    PREGNANCY_GLOW_WIDTH,
)
from pedigree_lines.render.hoverbox import make_hoverbox
from pedigree_lines.render.nodes import NodeVisuals
from pedigree_lines.render.style import Theme
from pedigree_lines.render.surface import DrawingSurface, DrawnGroup, Primitive
from pedigree_lines.routing.children import CHANNEL as CHILD_CHANNEL
from pedigree_lines.routing.children import ChildFanoutBuilder, Fanout
from pedigree_lines.routing.crossings import CrossingAwareLineDrawer, DrawLog
from pedigree_lines.routing.partners import CHANNEL as PARTNER_CHANNEL
from pedigree_lines.routing.partners import PartnerPathRouter

log = logging.getLogger(__name__)

Point = tuple[float, float]


class ConnectionState(Enum):
    UNINITIALIZED = "uninitialized"
    DRAWN = "drawn"
    REMOVED = "removed"


class ChildlessBehavior(Protocol):
    """Childless/infertile status display attached to a partnership."""

    def update_status_label(self) -> None: ...

    def remove(self) -> None: ...


class PartnershipConnectionController:
    """Draws and redraws everything that belongs to one partnership."""

    def __init__(
        self,
        partnership_id: str,
        junction: Point,
        *,
        layout: PedigreeLayout,
        converter: CoordinateConverter,
        visuals: dict[str, NodeVisuals],
        surface: DrawingSurface,
        draw_log: DrawLog,
        theme: Theme,
        read_only: bool = True,
        childless: ChildlessBehavior | None = None,
        smooth_corners: bool = True,
    ):
        self.partnership_id = partnership_id
        self.layout = layout
        self.surface = surface
        self.draw_log = draw_log
        self.theme = theme
        self.childless = childless
        self.state = ConnectionState.UNINITIALIZED

        self._junction = junction
        self.hoverbox = make_hoverbox(read_only, partnership_id, junction, surface)

        drawer = CrossingAwareLineDrawer(surface, draw_log, theme)
        self.partner_router = PartnerPathRouter(
            layout, converter, visuals, drawer, smooth_corners=smooth_corners
        )
        self.child_builder = ChildFanoutBuilder(layout, converter, visuals, drawer)

        self.partner_connections: DrawnGroup | None = None
        self.child_connections: DrawnGroup | None = None
        self.fanout: Fanout | None = None
        self._junction_shape: Primitive | None = None
        self._area: Primitive | None = None
        self._mark: Primitive | None = None
        self._mark2: Primitive | None = None

    @property
    def junction(self) -> Point:
        return self._junction

    @property
    def bottom_y(self) -> float:
        """Lowest surface Y of the junction graphic, childless stub included."""
        return self._junction[1] + PARTNERSHIP_RADIUS + PARTNERSHIP_CHILDLESS_LENGTH

    def is_displayed_as_consanguineous(self) -> bool:
        """Graph consanguinity, unless the partnership overrides it."""
        rel = self.layout.partnerships[self.partnership_id]
        if rel.consanguinity is Consanguinity.YES:
            return True
        if rel.consanguinity is Consanguinity.NO:
            return False
        return self.layout.is_consanguineous_relationship(self.partnership_id)

    # -- drawing -----------------------------------------------------------

    def draw(self) -> None:
        """Draw the junction and both connections."""
        self._check_not_removed()
        self._draw_junction_shape()
        self.redraw_partner_connections()
        self.redraw_child_connections()

    def redraw_partner_connections(self) -> DrawnGroup:
        self._check_not_removed()
        if self.partner_connections is not None:
            self.partner_connections.remove()
            self.partner_connections = None
        self.draw_log.forget(self.partnership_id, PARTNER_CHANNEL)

        rel = self.layout.partnerships[self.partnership_id]
        self.surface.start_group()
        try:
            self.partner_router.draw(
                self.partnership_id,
                self._junction,
                self.is_displayed_as_consanguineous(),
                broken=rel.broken,
            )
        except Exception:
            self.surface.finish_group().remove()
            self.draw_log.forget(self.partnership_id, PARTNER_CHANNEL)
            raise
        self.partner_connections = self.surface.finish_group().to_back()
        self.state = ConnectionState.DRAWN

        self.hoverbox.regenerate_handles()
        self.hoverbox.regenerate_buttons()
        return self.partner_connections

    def redraw_child_connections(self) -> DrawnGroup:
        self._check_not_removed()
        if self.child_connections is not None:
            self.child_connections.remove()
            self.child_connections = None
        self.draw_log.forget(self.partnership_id, CHILD_CHANNEL)

        self.surface.start_group()
        try:
            self.fanout = self.child_builder.draw(
                self.partnership_id,
                self._junction,
                self.is_displayed_as_consanguineous(),
            )
        except Exception:
            self.surface.finish_group().remove()
            self.draw_log.forget(self.partnership_id, CHILD_CHANNEL)
            raise
        self.child_connections = self.surface.finish_group()
        self.state = ConnectionState.DRAWN
        return self.child_connections

    def reposition(self, junction: Point, animate: bool = False) -> None:
        """Move the junction to ``junction`` and redraw its connections."""
        if animate:
            raise ValueError("Can't animate a partnership node")
        self._check_not_removed()

        self.hoverbox.remove_handles()
        self.hoverbox.remove_buttons()
        self.unmark_pregnancy()
        self.unmark()

        log.debug("%s: reposition %s -> %s", self.partnership_id, self._junction, junction)
        self._junction = junction
        self.hoverbox.set_position(junction)
        self._draw_junction_shape()
        if self._area is not None:
            self.shrink()
            self.grow()

        self.redraw_partner_connections()
        self.redraw_child_connections()
        if self.childless is not None:
            self.childless.update_status_label()

    def remove(self) -> None:
        """Take every element of this partnership off the surface."""
        if self._junction_shape is not None:
            self.surface.remove(self._junction_shape)
            self._junction_shape = None
        self.hoverbox.remove()
        if self.childless is not None:
            self.childless.remove()
        if self.child_connections is not None:
            self.child_connections.remove()
            self.child_connections = None
        if self.partner_connections is not None:
            self.partner_connections.remove()
            self.partner_connections = None
        self.shrink()
        self.unmark_pregnancy()
        self.unmark()
        self.draw_log.forget(self.partnership_id)
        if self.state is not ConnectionState.REMOVED:
            log.debug("%s: removed", self.partnership_id)
        self.state = ConnectionState.REMOVED

    # -- overlay markers ---------------------------------------------------

    def grow(self) -> None:
        """Expand the junction with a halo."""
        if self._area is not None:
            return
        self._area = self._overlay(
            PARTNERSHIP_RADIUS * GROW_SCALE, fill=self.theme.grow_color, stroke="none"
        )

    def shrink(self) -> None:
        if self._area is not None:
            self.surface.remove(self._area)
            self._area = None

    def mark_pregnancy(self) -> None:
        if self._mark is not None:
            return
        self._mark = self._overlay(
            PARTNERSHIP_RADIUS + PREGNANCY_GLOW_WIDTH / 2,
            fill=self.theme.pregnancy_glow_color,
            stroke="none",
            opacity=PREGNANCY_GLOW_OPACITY,
        )

    def unmark_pregnancy(self) -> None:
        if self._mark is not None:
            self.surface.remove(self._mark)
            self._mark = None

    def mark_permanently(self) -> None:
        if self._mark2 is not None:
            return
        self._mark2 = self._overlay(
            PARTNERSHIP_RADIUS + HIGHLIGHT_GLOW_WIDTH / 2,
            fill=self.theme.highlight_color,
            stroke="none",
            opacity=HIGHLIGHT_GLOW_OPACITY,
        )

    def unmark(self) -> None:
        if self._mark2 is not None:
            self.surface.remove(self._mark2)
            self._mark2 = None

    # -- introspection -----------------------------------------------------

    def get_shapes(self) -> list[Primitive]:
        return [self._junction_shape] if self._junction_shape is not None else []

    def get_all_graphics(self) -> list[Primitive]:
        graphics = list(self.hoverbox.get_back_elements())
        graphics += [p for p in (self._area, self._mark, self._mark2) if p is not None]
        graphics += self.get_shapes()
        for group in (self.partner_connections, self.child_connections):
            if group is not None:
                graphics += list(group)
        graphics += self.hoverbox.get_front_elements()
        return graphics

    # -- internals ---------------------------------------------------------

    def _check_not_removed(self) -> None:
        if self.state is ConnectionState.REMOVED:
            raise ValueError(f"Partnership '{self.partnership_id}' has been removed")

    def _draw_junction_shape(self) -> None:
        if self._junction_shape is not None:
            self.surface.remove(self._junction_shape)
        x, y = self._junction
        element = draw.Circle(
            x, y, PARTNERSHIP_RADIUS,
            fill=self.theme.junction_fill,
            stroke=self.theme.junction_stroke,
            stroke_width=1,
        )
        self._junction_shape = self.surface.add(
            Primitive("circle", (self._junction,), element, owner=self.partnership_id)
        )

    def _overlay(self, radius: float, **attrs) -> Primitive:
        x, y = self._junction
        element = draw.Circle(x, y, radius, **attrs)
        primitive = Primitive("overlay", (self._junction,), element, owner=self.partnership_id)
        if self._junction_shape is None:
            return self.surface.add(primitive)
        return self.surface.insert_before(primitive, self._junction_shape)
