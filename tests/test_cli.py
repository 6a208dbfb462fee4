"""Tests for the CLI entry points."""

import json

from click.testing import CliRunner
from scenes import EXAMPLES_DIR

from pedigree_lines import __version__
from pedigree_lines.cli import cli

NUCLEAR_JSON = EXAMPLES_DIR / "nuclear_family.json"
TWINS_JSON = EXAMPLES_DIR / "twins_consanguinity.json"
REMARRIAGE_JSON = EXAMPLES_DIR / "remarriage.json"


def _write(tmp_path, doc, name="doc.json"):
    path = tmp_path / name
    path.write_text(json.dumps(doc))
    return path


def _two_families():
    return {
        "persons": [
            {"id": "f", "x": 0, "y": 0},
            {"id": "m", "x": 200, "y": 0},
            {"id": "g", "x": 400, "y": 0},
            {"id": "c", "x": 100, "y": 160},
        ],
        "partnerships": [
            {"id": "r1", "partners": ["f", "m"], "x": 100, "y": 0, "children": ["c"]},
            {"id": "r2", "partners": ["m", "g"], "x": 300, "y": 0, "children": ["c"]},
        ],
    }


def test_render_produces_svg(tmp_path):
    """render command produces an SVG file."""
    out = tmp_path / "output.svg"
    runner = CliRunner()
    result = runner.invoke(cli, ["render", str(NUCLEAR_JSON), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert "Rendered 5 persons, 1 partnerships" in result.output
    assert "<svg" in out.read_text()


def test_render_default_output(tmp_path):
    """render command uses input stem + .svg when no -o given."""
    doc = tmp_path / "family.json"
    doc.write_text(NUCLEAR_JSON.read_text())
    runner = CliRunner()
    result = runner.invoke(cli, ["render", str(doc)])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "family.svg").exists()


def test_render_print_theme_interactive(tmp_path):
    out = tmp_path / "output.svg"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["render", str(TWINS_JSON), "-o", str(out), "--theme", "print", "--interactive",
         "--width", "800", "--height", "600", "--scale", "1.5"],
    )
    assert result.exit_code == 0, result.output
    content = out.read_text()
    assert 'width="800"' in content
    assert 'height="600"' in content


def test_render_rejects_bad_scale(tmp_path):
    runner = CliRunner()
    result = runner.invoke(
        cli, ["render", str(NUCLEAR_JSON), "-o", str(tmp_path / "o.svg"), "--scale", "0"]
    )
    assert result.exit_code == 1
    assert "Scale must be positive" in result.output
    assert not (tmp_path / "o.svg").exists()


def test_render_verbose(tmp_path):
    runner = CliRunner()
    result = runner.invoke(
        cli, ["-v", "render", str(REMARRIAGE_JSON), "-o", str(tmp_path / "o.svg")]
    )
    assert result.exit_code == 0, result.output


def test_render_parse_error(tmp_path):
    bad = _write(tmp_path, {"persons": [{"x": 0}]})
    runner = CliRunner()
    result = runner.invoke(cli, ["render", str(bad)])
    assert result.exit_code == 1
    assert "Parse error" in result.output


def test_validate_success():
    """validate command succeeds on valid input."""
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(REMARRIAGE_JSON)])
    assert result.exit_code == 0
    assert "Valid: 5 persons, 2 routing nodes, 2 partnerships" in result.output


def test_validate_bad_file(tmp_path):
    """validate command reports parse errors."""
    bad = tmp_path / "bad.json"
    bad.write_text("not a pedigree")
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(bad)])
    assert result.exit_code == 1
    assert "Parse error" in result.output


def test_validate_child_in_two_partnerships(tmp_path):
    doc = _write(tmp_path, _two_families())
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(doc)])
    assert result.exit_code == 1
    assert "Person 'c' is a child of both 'r1' and 'r2'" in result.output


def test_validate_mixed_twin_group(tmp_path):
    doc = _two_families()
    doc["persons"].append({"id": "d", "x": 200, "y": 160, "twin_group": 1})
    doc["persons"][3].update(twin_group=1, monozygotic=True)
    doc["partnerships"] = [
        {"id": "r1", "partners": ["f", "m"], "x": 100, "y": 0, "children": ["c", "d"]},
    ]
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(_write(tmp_path, doc))])
    assert result.exit_code == 1
    assert "Twin group 1 of 'r1' mixes monozygotic and dizygotic members" in result.output


def test_validate_children_row_above_junction(tmp_path):
    doc = _two_families()
    doc["partnerships"] = [
        {"id": "r1", "partners": ["f", "m"], "x": 100, "y": 0,
         "childhub": {"y": -20}, "children": ["c"]},
    ]
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(_write(tmp_path, doc))])
    assert result.exit_code == 1
    assert "children row above the junction" in result.output


def test_info_output():
    """info command prints pedigree metadata."""
    runner = CliRunner()
    result = runner.invoke(cli, ["info", str(TWINS_JSON)])
    assert result.exit_code == 0
    assert "Title: First-cousin marriage with triplets" in result.output
    assert "Proband: t1" in result.output
    assert "Persons: 8" in result.output
    assert "r0: g1 + g2 -> 2 children\n" in result.output
    assert "r1: a + b -> 4 children [consanguineous]" in result.output


def test_info_flags_broken():
    runner = CliRunner()
    result = runner.invoke(cli, ["info", str(REMARRIAGE_JSON)])
    assert result.exit_code == 0
    assert "r1: w1 + p -> 1 children [broken]" in result.output
    assert "Routing nodes: 2" in result.output


def test_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_validate_null_childhub(tmp_path):
    doc = _two_families()
    doc["partnerships"] = [
        {"id": "r1", "partners": ["f", "m"], "x": 100, "y": 0,
         "childhub": {"y": None}, "children": ["c"]},
    ]
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(_write(tmp_path, doc))])
    assert result.exit_code == 1
    assert "Parse error: Field 'y' must be a number" in result.output
