"""CLI for pedigree-lines."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from pedigree_lines import __version__
from pedigree_lines.layout.coords import CoordinateConverter
from pedigree_lines.parser import parse_layout_json
from pedigree_lines.parser.model import Consanguinity
from pedigree_lines.render.constants import CANVAS_PADDING
from pedigree_lines.render.svg import render_svg
from pedigree_lines.themes import THEMES


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
def cli(verbose: bool) -> None:
    """pedigree-lines: Draw the connection lines of laid-out pedigree diagrams."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Defaults to <input>.svg")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="default",
              help="Visual theme (default: default)")
@click.option("--width", type=int, default=None, help="SVG width in pixels")
@click.option("--height", type=int, default=None, help="SVG height in pixels")
@click.option("--scale", type=float, default=1.0,
              help="SVG units per layout unit on both axes (default: 1)")
@click.option("--read-only/--interactive", default=True,
              help="Draw hoverbox hit areas for interactive use (default: read-only)")
def render(
    input_file: Path,
    output: Path | None,
    theme: str,
    width: int | None,
    height: int | None,
    scale: float,
    read_only: bool,
) -> None:
    """Render a laid-out pedigree JSON document to SVG."""
    try:
        layout = parse_layout_json(input_file.read_text())
    except ValueError as e:
        click.echo(f"Parse error: {e}", err=True)
        raise SystemExit(1)

    if scale <= 0:
        click.echo(f"Scale must be positive, got {scale}", err=True)
        raise SystemExit(1)
    converter = CoordinateConverter(
        x_scale=scale, y_scale=scale, x_offset=CANVAS_PADDING, y_offset=CANVAS_PADDING
    )
    svg = render_svg(
        layout, THEMES[theme], width=width, height=height,
        converter=converter, read_only=read_only,
    )

    if output is None:
        output = input_file.with_suffix(".svg")

    output.write_text(svg)
    click.echo(f"Rendered {len(layout.persons)} persons, "
               f"{len(layout.partnerships)} partnerships -> {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def validate(input_file: Path) -> None:
    """Validate a laid-out pedigree JSON document."""
    try:
        layout = parse_layout_json(input_file.read_text())
    except ValueError as e:
        click.echo(f"Parse error: {e}", err=True)
        raise SystemExit(1)

    errors = []

    # Every child belongs to exactly one partnership
    seen: dict[str, str] = {}
    for rel in layout.partnerships.values():
        for child in rel.children:
            if child in seen:
                errors.append(f"Person '{child}' is a child of both "
                              f"'{seen[child]}' and '{rel.id}'")
            else:
                seen[child] = rel.id

    # Twin groups must not mix monozygotic and dizygotic members
    for rel in layout.partnerships.values():
        groups: dict[int, set[bool]] = {}
        for child in rel.children:
            person = layout.persons[child]
            if person.twin_group is not None:
                groups.setdefault(person.twin_group, set()).add(person.monozygotic)
        for group, flags in sorted(groups.items()):
            if len(flags) > 1:
                errors.append(f"Twin group {group} of '{rel.id}' mixes monozygotic "
                              f"and dizygotic members")

    # The children row hangs below the junction
    for rel in layout.partnerships.values():
        if rel.children and rel.childhub_y < rel.y:
            errors.append(f"Partnership '{rel.id}' has its children row above "
                          f"the junction")

    if errors:
        click.echo("Validation errors:", err=True)
        for err in errors:
            click.echo(f"  - {err}", err=True)
        raise SystemExit(1)

    click.echo(f"Valid: {len(layout.persons)} persons, "
               f"{len(layout.routing_nodes)} routing nodes, "
               f"{len(layout.partnerships)} partnerships")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def info(input_file: Path) -> None:
    """Show information about a laid-out pedigree JSON document."""
    try:
        layout = parse_layout_json(input_file.read_text())
    except ValueError as e:
        click.echo(f"Parse error: {e}", err=True)
        raise SystemExit(1)

    click.echo(f"Title: {layout.title or '(none)'}")
    click.echo(f"Proband: {layout.proband or '(none)'}")
    click.echo(f"Persons: {len(layout.persons)}")
    click.echo(f"Routing nodes: {len(layout.routing_nodes)}")
    click.echo(f"Partnerships: {len(layout.partnerships)}")
    for pid in sorted(layout.partnerships):
        rel = layout.partnerships[pid]
        flags = []
        if rel.consanguinity is Consanguinity.YES or (
            rel.consanguinity is Consanguinity.AUTO
            and layout.is_consanguineous_relationship(pid)
        ):
            flags.append("consanguineous")
        if rel.broken:
            flags.append("broken")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        click.echo(f"  {pid}: {' + '.join(rel.partners)} -> "
                   f"{len(rel.children)} children{suffix}")
