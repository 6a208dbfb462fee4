"""Pedigree layout model and JSON loader."""

from pedigree_lines.parser.json_loader import parse_layout_json
from pedigree_lines.parser.model import PedigreeLayout

__all__ = ["PedigreeLayout", "parse_layout_json"]
