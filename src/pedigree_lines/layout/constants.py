"""Geometry constants used across the routing modules.

These are visual tuning values carried over from the pedigree editor's
drawing parameters. They have no derivation beyond "looks right"; change
them here rather than re-deriving them at call sites.
"""

# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------
NODE_RADIUS: float = 40.0
"""Radius of a person symbol in surface units."""

PARTNERSHIP_RADIUS: float = 6.0
"""Radius of the partnership junction circle."""

PARTNERSHIP_CHILDLESS_LENGTH: float = 25.0
"""Length of the childless stub below a partnership junction."""

# ---------------------------------------------------------------------------
# Corners
# ---------------------------------------------------------------------------
CORNER_RADIUS: float = 25.0
"""Radius of a rounded corner on partner lines."""

CURVED_APPROACH_SCALE: float = 0.8
"""Corner radius multiplier for the final curved approach to a parent."""

CORNER_BEZIER_K: float = 0.5523
"""Control point distance (fraction of the span) approximating a quarter circle."""

# ---------------------------------------------------------------------------
# Final-leg bend distances (multiples of NODE_RADIUS)
# ---------------------------------------------------------------------------
LAST_BEND_SINGLE_PORT: float = 1.6
"""Bend distance factor when the parent has a single attachment port."""

LAST_BEND_BASE: float = 1.8
"""Base bend distance factor when the parent has several attachment ports."""

LAST_BEND_PER_PORT: float = 0.1
"""Added to the base factor for every attachment port on the parent."""

LAST_BEND_PER_INDEX: float = 0.35
"""Subtracted from the base factor for every step of the port index."""

# ---------------------------------------------------------------------------
# Double lines and crossings
# ---------------------------------------------------------------------------
DOUBLE_LINE_OFFSET: float = 2.5
"""Perpendicular shift of each copy of a doubled (consanguineous) line."""

CONSANGUINEOUS_STEM_SHIFT: float = 2.0
"""Downward shift of the child stem start under a doubled partner line."""

NO_CROSSING_PROXIMITY: float = 20.0
"""Crossings closer than this to a segment endpoint are not marked."""

CROSSING_HUMP_HALF_WIDTH: float = 5.0
"""Half width (and height) of the hump a horizontal line draws over a crossing."""

CROSSING_GAP_HALF_HEIGHT: float = 4.0
"""Half height of the gap a vertical line leaves at a crossing."""

COORD_TOLERANCE: float = 1e-6
"""Coordinates closer than this are treated as equal."""

# ---------------------------------------------------------------------------
# Broken relationship mark
# ---------------------------------------------------------------------------
BREAK_STUB_LENGTH: float = 16.0
"""Length of the partner line stub drawn before the break mark."""

BREAK_SKIP: float = 23.0
"""Horizontal distance the partner line resumes after the break mark."""

BREAK_DASH_HALF_HEIGHT: float = 9.0
"""Half height of each diagonal break dash."""

BREAK_DASH_HALF_WIDTH: float = 7.0
"""Half width of each diagonal break dash."""

BREAK_DASH_CENTERS: tuple[float, float] = (22.0, 17.0)
"""Distances left of the junction of the two break dash centres."""

# ---------------------------------------------------------------------------
# Children
# ---------------------------------------------------------------------------
TWIN_COMMON_VERTICAL_LENGTH: float = 6.0
"""Length of the shared stem below the children row for a twin group."""

TWIN_MONOZYGOTIC_LINE_SHIFT_Y: float = 24.0
"""Distance below the children row of the monozygotic tie line."""
