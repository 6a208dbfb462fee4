#!/usr/bin/env python3
"""Batch render all example layouts to SVG, once per theme.

Outputs go to /tmp/pedigree_lines_renders/.

Run from an environment where pedigree-lines is installed:

    python scripts/render_examples.py [--interactive]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pedigree_lines.parser import parse_layout_json
from pedigree_lines.render.svg import render_svg
from pedigree_lines.themes import THEMES

OUTPUT_DIR = Path("/tmp/pedigree_lines_renders")
EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"

EXAMPLE_FILES = sorted(EXAMPLES_DIR.glob("*.json"))


def render_file(
    json_path: Path, output_dir: Path, *, read_only: bool = True
) -> tuple[str, list[str]]:
    """Parse and render a layout file in every theme.

    Returns (name, list_of_issues).
    """
    name = json_path.stem
    issues: list[str] = []

    try:
        layout = parse_layout_json(json_path.read_text())
    except ValueError as e:
        return name, [f"PARSE ERROR: {e}"]

    for theme_name, theme in THEMES.items():
        try:
            svg_str = render_svg(layout, theme, read_only=read_only)
        except (ValueError, KeyError) as e:
            issues.append(f"RENDER ERROR ({theme_name}): {e}")
            continue
        (output_dir / f"{name}_{theme_name}.svg").write_text(svg_str)

    return name, issues


def main():
    parser = argparse.ArgumentParser(description="Batch render example layouts")
    parser.add_argument(
        "--interactive", action="store_true", help="Draw hoverbox hit areas"
    )
    args = parser.parse_args()

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    print(f"Rendering {len(EXAMPLE_FILES)} files to {OUTPUT_DIR}/")
    print()

    max_name_len = max(len(f.stem) for f in EXAMPLE_FILES)
    any_errors = False

    for json_path in EXAMPLE_FILES:
        name, issues = render_file(json_path, OUTPUT_DIR, read_only=not args.interactive)
        status = "OK" if not issues else "FAIL"
        any_errors = any_errors or bool(issues)

        print(f"  {name:<{max_name_len}}  [{status}]")
        for issue in issues:
            print(f"    - {issue}")

    print(f"\nOutputs in: {OUTPUT_DIR}/")

    if any_errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
