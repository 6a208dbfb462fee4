"""pedigree-lines: draw the connecting lines of laid-out pedigree diagrams."""

__version__ = "0.3.0"
