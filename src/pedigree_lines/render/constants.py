"""Render constants used across render modules.

Theme-dependent values remain in style.py.
"""

# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------
CANVAS_PADDING: float = 60.0
"""Default padding around the entire SVG canvas."""

TITLE_Y: float = 30.0
"""Baseline of the diagram title."""

# ---------------------------------------------------------------------------
# Person symbols
# ---------------------------------------------------------------------------
PERSON_SYMBOL_SCALE: float = 0.5
"""Person symbol half-size as a fraction of NODE_RADIUS."""

LABEL_GAP: float = 8.0
"""Gap between the bottom of a person symbol and its label."""

PROBAND_ARROW_LENGTH: float = 18.0
"""Length of the proband arrow drawn at the lower left of the symbol."""

PLACEHOLDER_OPACITY: float = 0.35
"""Opacity of placeholder person symbols."""

# ---------------------------------------------------------------------------
# Partnership overlays
# ---------------------------------------------------------------------------
GROW_SCALE: float = 2.0
"""Radius multiplier of the halo drawn by ``grow()``."""

PREGNANCY_GLOW_WIDTH: float = 10.0
"""Glow width of the pregnancy marker."""

PREGNANCY_GLOW_OPACITY: float = 0.3
"""Opacity of the pregnancy marker."""

HIGHLIGHT_GLOW_WIDTH: float = 18.0
"""Glow width of the permanent highlight marker."""

HIGHLIGHT_GLOW_OPACITY: float = 0.4
"""Opacity of the permanent highlight marker."""

# ---------------------------------------------------------------------------
# Hoverbox
# ---------------------------------------------------------------------------
HANDLE_LENGTH: float = 40.0
"""Distance from the junction to a drag handle anchor."""

BUTTON_OFFSET_Y: float = 20.0
"""Vertical distance from the junction to the hoverbox buttons."""
