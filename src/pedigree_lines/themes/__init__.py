"""Theme definitions for pedigree diagrams."""

from pedigree_lines.themes.default import DEFAULT_THEME
from pedigree_lines.themes.print_theme import PRINT_THEME

THEMES = {
    "default": DEFAULT_THEME,
    "print": PRINT_THEME,
}

__all__ = ["THEMES", "DEFAULT_THEME", "PRINT_THEME"]
