"""Hoverbox variants attached to a partnership junction.

The interactive drag-handle layer itself lives outside this package; a
hoverbox only keeps the anchor points that layer needs and the hit area it
draws on the surface.  Both variants expose the same methods, the
read-only one simply has nothing to show.
"""

from __future__ import annotations

import drawsvg as draw

from pedigree_lines.layout.constants import PARTNERSHIP_RADIUS
from pedigree_lines.render.constants import BUTTON_OFFSET_Y, HANDLE_LENGTH
from pedigree_lines.render.surface import DrawingSurface, Primitive

Point = tuple[float, float]


class PartnershipHoverbox:
    """Interactive hoverbox: a hit area plus handle and button anchors."""

    read_only = False

    def __init__(self, node_id: str, position: Point, surface: DrawingSurface):
        self.node_id = node_id
        self.position = position
        self.surface = surface
        self.handles: list[tuple[str, Point]] = []
        self.buttons: list[tuple[str, Point]] = []
        self.regenerations = 0
        self._hit_area: Primitive | None = None
        self._draw_hit_area()

    def _draw_hit_area(self) -> None:
        x, y = self.position
        size = PARTNERSHIP_RADIUS * 4
        element = draw.Rectangle(
            x - size, y - size, 2 * size, 2 * size,
            fill="none", stroke="none", pointer_events="all",
        )
        self._hit_area = self.surface.add(
            Primitive("hitbox", (self.position,), element, owner=self.node_id),
            to_back=True,
        )

    def set_position(self, position: Point) -> None:
        self.position = position
        if self._hit_area is not None:
            self.surface.remove(self._hit_area)
            self._draw_hit_area()

    def get_back_elements(self) -> list[Primitive]:
        return [self._hit_area] if self._hit_area is not None else []

    def get_front_elements(self) -> list[Primitive]:
        return []

    def regenerate_handles(self) -> None:
        x, y = self.position
        self.handles = [
            ("child", (x, y + HANDLE_LENGTH)),
            ("partner-left", (x - HANDLE_LENGTH, y)),
            ("partner-right", (x + HANDLE_LENGTH, y)),
        ]
        self.regenerations += 1

    def regenerate_buttons(self) -> None:
        x, y = self.position
        self.buttons = [("menu", (x, y - BUTTON_OFFSET_Y))]

    def remove_handles(self) -> None:
        self.handles = []

    def remove_buttons(self) -> None:
        self.buttons = []

    def remove(self) -> None:
        self.remove_handles()
        self.remove_buttons()
        if self._hit_area is not None:
            self.surface.remove(self._hit_area)
            self._hit_area = None


class ReadOnlyHoverbox:
    """Hoverbox for read-only diagrams: no handles, no buttons."""

    read_only = True

    def __init__(self, node_id: str, position: Point, surface: DrawingSurface):
        self.node_id = node_id
        self.position = position
        self.regenerations = 0

    def set_position(self, position: Point) -> None:
        self.position = position

    def get_back_elements(self) -> list[Primitive]:
        return []

    def get_front_elements(self) -> list[Primitive]:
        return []

    def regenerate_handles(self) -> None:
        self.regenerations += 1

    def regenerate_buttons(self) -> None:
        pass

    def remove_handles(self) -> None:
        pass

    def remove_buttons(self) -> None:
        pass

    def remove(self) -> None:
        pass


def make_hoverbox(
    read_only: bool, node_id: str, position: Point, surface: DrawingSurface
) -> PartnershipHoverbox | ReadOnlyHoverbox:
    if read_only:
        return ReadOnlyHoverbox(node_id, position, surface)
    return PartnershipHoverbox(node_id, position, surface)
