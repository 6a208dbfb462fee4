"""Rendering: drawing surface, person symbols, partnership controllers, SVG output."""
