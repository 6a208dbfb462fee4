"""Per-person visuals: surface position, display flags and the person symbol."""

from __future__ import annotations

from dataclasses import dataclass

import drawsvg as draw

from pedigree_lines.layout.constants import NODE_RADIUS
from pedigree_lines.layout.coords import CoordinateConverter
from pedigree_lines.parser.model import PedigreeLayout
from pedigree_lines.render.constants import (
    LABEL_GAP,
    PERSON_SYMBOL_SCALE,
    PLACEHOLDER_OPACITY,
    PROBAND_ARROW_LENGTH,
)
from pedigree_lines.render.style import Theme
from pedigree_lines.render.surface import DrawingSurface, Primitive


@dataclass
class NodeVisuals:
    """What the connection builders need to know about a drawn person."""

    node_id: str
    x: float
    y: float
    gender: str = "U"
    label: str = ""
    monozygotic: bool = False
    lost_contact: bool = False
    is_proband: bool = False
    placeholder: bool = False


def build_node_visuals(
    layout: PedigreeLayout, converter: CoordinateConverter
) -> dict[str, NodeVisuals]:
    """Registry of person visuals keyed by person id."""
    visuals: dict[str, NodeVisuals] = {}
    for person in layout.persons.values():
        x, y = converter.to_canvas(person.x, person.y)
        visuals[person.id] = NodeVisuals(
            node_id=person.id,
            x=x,
            y=y,
            gender=person.gender,
            label=person.label,
            monozygotic=person.monozygotic,
            lost_contact=person.lost_contact,
            is_proband=layout.is_proband(person.id),
            placeholder=person.placeholder,
        )
    return visuals


def draw_person(
    surface: DrawingSurface, vis: NodeVisuals, theme: Theme
) -> list[Primitive]:
    """Draw a person symbol: square (M), circle (F) or diamond (U)."""
    s = NODE_RADIUS * PERSON_SYMBOL_SCALE
    attrs = {
        "fill": theme.person_fill,
        "stroke": theme.person_stroke,
        "stroke_width": theme.person_stroke_width,
    }
    if vis.placeholder:
        attrs["opacity"] = PLACEHOLDER_OPACITY
        attrs["stroke_dasharray"] = "3,3"

    if vis.gender == "M":
        element = draw.Rectangle(vis.x - s, vis.y - s, 2 * s, 2 * s, **attrs)
    elif vis.gender == "F":
        element = draw.Circle(vis.x, vis.y, s, **attrs)
    else:
        element = draw.Lines(
            vis.x, vis.y - s,
            vis.x + s, vis.y,
            vis.x, vis.y + s,
            vis.x - s, vis.y,
            close=True,
            **attrs,
        )
    drawn = [
        surface.add(Primitive("symbol", ((vis.x, vis.y),), element, owner=vis.node_id))
    ]

    if vis.is_proband:
        tip = (vis.x - s, vis.y + s)
        tail = (tip[0] - PROBAND_ARROW_LENGTH, tip[1] + PROBAND_ARROW_LENGTH)
        arrow = draw.Path(stroke=theme.person_stroke, stroke_width=theme.person_stroke_width,
                          fill="none")
        arrow.M(*tail)
        arrow.L(*tip)
        arrow.M(tip[0] - 6, tip[1])
        arrow.L(*tip)
        arrow.L(tip[0], tip[1] + 6)
        drawn.append(surface.add(Primitive("symbol", (tail, tip), arrow, owner=vis.node_id)))

    if vis.label:
        text = draw.Text(
            vis.label,
            theme.label_font_size,
            vis.x, vis.y + s + LABEL_GAP,
            fill=theme.label_color,
            font_family=theme.label_font_family,
            text_anchor="middle",
            dominant_baseline="hanging",
        )
        drawn.append(surface.add(Primitive("text", ((vis.x, vis.y),), text, owner=vis.node_id)))
    return drawn
