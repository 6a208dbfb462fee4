"""Default theme: the pedigree editor's on-screen colours."""

from pedigree_lines.render.style import Theme

DEFAULT_THEME = Theme(
    name="default",
    background_color="#ffffff",
    line_color="#303058",
    consanguineous_line_color="#402058",
    no_contact_line_color="#333333",
    line_width=1.25,
    no_contact_dasharray="6,4",
    adopted_dasharray="2,3",
    no_contact_adopted_dasharray="6,3,2,3",
    person_fill="#ffffff",
    person_stroke="#595959",
    person_stroke_width=2.0,
    junction_fill="#dc7868",
    junction_stroke="#595959",
    label_color="#333333",
    label_font_family="Arial, sans-serif",
    label_font_size=12.0,
    title_color="#111111",
    title_font_size=20.0,
)
