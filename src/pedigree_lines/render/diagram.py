"""Whole-diagram rendering: persons, then one controller per partnership."""

from __future__ import annotations

import logging

import drawsvg as draw

from pedigree_lines.layout.constants import NODE_RADIUS
from pedigree_lines.layout.coords import CoordinateConverter
from pedigree_lines.parser.model import PedigreeLayout
from pedigree_lines.render.constants import CANVAS_PADDING, TITLE_Y
from pedigree_lines.render.nodes import NodeVisuals, build_node_visuals, draw_person
from pedigree_lines.render.partnership import PartnershipConnectionController
from pedigree_lines.render.style import Theme
from pedigree_lines.render.surface import DrawingSurface, Primitive
from pedigree_lines.routing.crossings import DrawLog

log = logging.getLogger(__name__)


class Diagram:
    """A rendered pedigree: the surface plus everything drawn on it.

    Partnerships are drawn in sorted id order so that crossing resolution,
    which depends on what was drawn before, is reproducible.
    """

    def __init__(
        self,
        layout: PedigreeLayout,
        theme: Theme,
        converter: CoordinateConverter | None = None,
        read_only: bool = True,
        smooth_corners: bool = True,
    ):
        self.layout = layout
        self.theme = theme
        self.converter = converter or CoordinateConverter(
            x_offset=CANVAS_PADDING, y_offset=CANVAS_PADDING
        )
        self.read_only = read_only
        self.smooth_corners = smooth_corners
        self.surface = DrawingSurface()
        self.draw_log = DrawLog()
        self.visuals: dict[str, NodeVisuals] = {}
        self.controllers: dict[str, PartnershipConnectionController] = {}

    def controller(self, partnership_id: str) -> PartnershipConnectionController:
        try:
            return self.controllers[partnership_id]
        except KeyError:
            raise KeyError(f"No partnership '{partnership_id}' has been drawn") from None

    def render(self) -> None:
        """Clear the surface and draw the whole diagram from the layout."""
        for controller in self.controllers.values():
            controller.remove()
        self.controllers = {}
        self.surface.clear()
        self.draw_log.clear()

        self.visuals = build_node_visuals(self.layout, self.converter)
        if self.layout.title:
            text = draw.Text(
                self.layout.title,
                self.theme.title_font_size,
                CANVAS_PADDING, TITLE_Y,
                fill=self.theme.title_color,
                font_family=self.theme.label_font_family,
                font_weight="bold",
            )
            self.surface.add(Primitive("text", ((CANVAS_PADDING, TITLE_Y),), text))

        for vis in self.visuals.values():
            draw_person(self.surface, vis, self.theme)

        for pid in sorted(self.layout.partnerships):
            rel = self.layout.partnerships[pid]
            controller = PartnershipConnectionController(
                pid,
                self.converter.to_canvas(rel.x, rel.y),
                layout=self.layout,
                converter=self.converter,
                visuals=self.visuals,
                surface=self.surface,
                draw_log=self.draw_log,
                theme=self.theme,
                read_only=self.read_only,
                smooth_corners=self.smooth_corners,
            )
            controller.draw()
            self.controllers[pid] = controller

        log.debug(
            "Rendered %d person(s), %d partnership(s), %d primitive(s)",
            len(self.visuals), len(self.controllers), len(self.surface),
        )

    def bounds(self) -> tuple[float, float]:
        """Width and height that fit every drawn node plus padding."""
        rights = [v.x + NODE_RADIUS for v in self.visuals.values()]
        bottoms = [v.y + NODE_RADIUS for v in self.visuals.values()]
        for controller in self.controllers.values():
            rights.append(controller.junction[0] + NODE_RADIUS)
            bottoms.append(controller.bottom_y)
        if not rights:
            return (2 * CANVAS_PADDING, 2 * CANVAS_PADDING)
        return (max(rights) + CANVAS_PADDING, max(bottoms) + CANVAS_PADDING)

    def as_svg(self, width: int | None = None, height: int | None = None) -> str:
        auto_width, auto_height = self.bounds()
        return self.surface.as_svg(
            width or int(auto_width),
            height or int(auto_height),
            background=self.theme.background_color,
        )
