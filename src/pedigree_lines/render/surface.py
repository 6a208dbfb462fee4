"""Drawing surface backed by drawsvg elements.

The surface keeps its own ordered list of primitives so that elements can be
removed and regrouped between redraws; a ``draw.Drawing`` is only built when
SVG output is requested.  Groups are captured the way a retained-mode canvas
does it: ``start_group()`` opens a capture, every primitive added until
``finish_group()`` belongs to the returned :class:`DrawnGroup`.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import drawsvg as draw

Point = tuple[float, float]


@dataclass(eq=False)
class Primitive:
    """One drawn element plus the geometry it was built from.

    ``kind`` is one of ``"segment"``, ``"corner"``, ``"break"``, ``"circle"``,
    ``"symbol"``, ``"text"``, ``"overlay"`` or ``"hitbox"``.  ``points`` are
    the defining points in surface units (endpoints for segments,
    start/control/control/end for corners, centre for circles).
    """

    kind: str
    points: tuple[Point, ...]
    element: draw.DrawingElement
    style: object | None = None
    owner: str | None = None

    def signature(self) -> tuple:
        pts = tuple((round(x, 6), round(y, 6)) for x, y in self.points)
        return (self.kind, pts, self.style)


class DrawnGroup:
    """All primitives of one logical connection.

    Removing a group takes its primitives off the surface; removing twice
    is a no-op.
    """

    def __init__(self, surface: DrawingSurface, primitives: list[Primitive]):
        self._surface = surface
        self._primitives = list(primitives)
        self._removed = False

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self._primitives)

    def __len__(self) -> int:
        return len(self._primitives)

    @property
    def is_empty(self) -> bool:
        return not self._primitives

    @property
    def removed(self) -> bool:
        return self._removed

    def of_kind(self, kind: str) -> list[Primitive]:
        return [p for p in self._primitives if p.kind == kind]

    def signature(self) -> list[tuple]:
        return [p.signature() for p in self._primitives]

    def to_back(self) -> DrawnGroup:
        self._surface.move_to_back(self._primitives)
        return self

    def remove(self) -> None:
        if self._removed:
            return
        for primitive in self._primitives:
            self._surface.remove(primitive)
        self._removed = True


class DrawingSurface:
    """Ordered, mutable collection of drawn primitives (back to front)."""

    def __init__(self) -> None:
        self._primitives: list[Primitive] = []
        self._capture: list[Primitive] | None = None

    def __len__(self) -> int:
        return len(self._primitives)

    def __contains__(self, primitive: object) -> bool:
        return any(p is primitive for p in self._primitives)

    @property
    def primitives(self) -> list[Primitive]:
        return list(self._primitives)

    def owned_by(self, owner: str) -> list[Primitive]:
        return [p for p in self._primitives if p.owner == owner]

    # -- group capture -----------------------------------------------------

    def start_group(self) -> None:
        if self._capture is not None:
            raise ValueError("A group capture is already open on this surface")
        self._capture = []

    def finish_group(self) -> DrawnGroup:
        if self._capture is None:
            raise ValueError("finish_group() called without start_group()")
        group = DrawnGroup(self, self._capture)
        self._capture = None
        return group

    # -- mutation ----------------------------------------------------------

    def add(self, primitive: Primitive, to_back: bool = False) -> Primitive:
        if to_back:
            self._primitives.insert(0, primitive)
        else:
            self._primitives.append(primitive)
        if self._capture is not None:
            self._capture.append(primitive)
        return primitive

    def insert_before(self, primitive: Primitive, anchor: Primitive) -> Primitive:
        """Insert ``primitive`` directly behind ``anchor`` (or at the back if absent)."""
        for i, p in enumerate(self._primitives):
            if p is anchor:
                self._primitives.insert(i, primitive)
                break
        else:
            self._primitives.insert(0, primitive)
        if self._capture is not None:
            self._capture.append(primitive)
        return primitive

    def remove(self, primitive: Primitive) -> None:
        self._primitives = [p for p in self._primitives if p is not primitive]

    def move_to_back(self, primitives: list[Primitive]) -> None:
        ids = {id(p) for p in primitives}
        moved = [p for p in self._primitives if id(p) in ids]
        rest = [p for p in self._primitives if id(p) not in ids]
        self._primitives = moved + rest

    def clear(self) -> None:
        self._primitives = []
        self._capture = None

    # -- convenience constructors -------------------------------------------

    def circle(
        self,
        center: Point,
        radius: float,
        owner: str | None = None,
        to_back: bool = False,
        **attrs,
    ) -> Primitive:
        element = draw.Circle(center[0], center[1], radius, **attrs)
        return self.add(
            Primitive("circle", (center,), element, owner=owner), to_back=to_back
        )

    # -- output ------------------------------------------------------------

    def as_svg(self, width: float, height: float, background: str = "none") -> str:
        d = draw.Drawing(width, height)
        if background and background != "none":
            d.append(draw.Rectangle(0, 0, width, height, fill=background))
        for primitive in self._primitives:
            d.append(primitive.element)
        return d.as_svg()
