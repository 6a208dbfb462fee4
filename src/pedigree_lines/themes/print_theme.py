"""Print theme: black on white, heavier strokes."""

from pedigree_lines.render.style import Theme

PRINT_THEME = Theme(
    name="print",
    background_color="none",
    line_color="#000000",
    consanguineous_line_color="#000000",
    no_contact_line_color="#000000",
    line_width=1.5,
    no_contact_dasharray="6,4",
    adopted_dasharray="2,3",
    no_contact_adopted_dasharray="6,3,2,3",
    person_fill="#ffffff",
    person_stroke="#000000",
    person_stroke_width=2.0,
    junction_fill="#000000",
    junction_stroke="#000000",
    label_color="#000000",
    label_font_family="'Times New Roman', serif",
    label_font_size=12.0,
    title_color="#000000",
    title_font_size=20.0,
    pregnancy_orb_fill="#000000",
    pregnancy_orb_stroke="#000000",
)
