"""Layout-side helpers: geometry constants and coordinate conversion."""

from pedigree_lines.layout.coords import CoordinateConverter

__all__ = ["CoordinateConverter"]
