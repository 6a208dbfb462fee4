"""Theme and line-style definitions for pedigree rendering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LineStyle(Enum):
    """Visual treatment of a connection line.

    Chosen from the consanguinity, lost-contact and adopted-in flags; the
    combinations are mutually exclusive.
    """

    PARTNER = "partner"
    CONSANGUINEOUS = "consanguineous"
    NO_CONTACT = "no_contact"
    NO_CONTACT_CONSANGUINEOUS = "no_contact_consanguineous"
    ADOPTED_IN = "adopted_in"
    NO_CONTACT_ADOPTED_IN = "no_contact_adopted_in"

    @classmethod
    def select(
        cls,
        consanguineous: bool = False,
        lost_contact: bool = False,
        adopted_in: bool = False,
    ) -> LineStyle:
        if adopted_in:
            return cls.NO_CONTACT_ADOPTED_IN if lost_contact else cls.ADOPTED_IN
        if consanguineous:
            return cls.NO_CONTACT_CONSANGUINEOUS if lost_contact else cls.CONSANGUINEOUS
        return cls.NO_CONTACT if lost_contact else cls.PARTNER


@dataclass
class Theme:
    """Visual theme for a pedigree diagram."""

    name: str
    background_color: str
    line_color: str
    consanguineous_line_color: str
    no_contact_line_color: str
    line_width: float
    no_contact_dasharray: str
    adopted_dasharray: str
    no_contact_adopted_dasharray: str
    person_fill: str
    person_stroke: str
    person_stroke_width: float
    junction_fill: str
    junction_stroke: str
    label_color: str
    label_font_family: str
    label_font_size: float
    title_color: str
    title_font_size: float
    # Pregnancy orb below a partnership with several pregnancies
    pregnancy_orb_fill: str = "#666666"
    pregnancy_orb_stroke: str = "#888888"
    # Overlay markers
    grow_color: str = "green"
    pregnancy_glow_color: str = "blue"
    highlight_color: str = "#ee8d00"

    def line_attrs(self, style: LineStyle) -> dict[str, object]:
        """drawsvg keyword arguments for a line drawn in ``style``."""
        color = {
            LineStyle.CONSANGUINEOUS: self.consanguineous_line_color,
            LineStyle.NO_CONTACT_CONSANGUINEOUS: self.consanguineous_line_color,
            LineStyle.NO_CONTACT: self.no_contact_line_color,
            LineStyle.NO_CONTACT_ADOPTED_IN: self.no_contact_line_color,
        }.get(style, self.line_color)
        attrs: dict[str, object] = {
            "stroke": color,
            "stroke_width": self.line_width,
            "fill": "none",
        }
        dash = {
            LineStyle.NO_CONTACT: self.no_contact_dasharray,
            LineStyle.NO_CONTACT_CONSANGUINEOUS: self.no_contact_dasharray,
            LineStyle.ADOPTED_IN: self.adopted_dasharray,
            LineStyle.NO_CONTACT_ADOPTED_IN: self.no_contact_adopted_dasharray,
        }.get(style)
        if dash:
            attrs["stroke_dasharray"] = dash
        return attrs
