"""Loader for laid-out pedigree documents in JSON.

The document is the output of the layout engine::

    {
      "title": "...",
      "proband": "p1",
      "persons": [{"id": "p1", "x": 0, "y": 0, "gender": "F", ...}],
      "routing": [{"id": "v1", "x": 2, "y": 0}],
      "partnerships": [{
        "id": "r1", "partners": ["p1", "p2"], "x": 1, "y": 0,
        "childhub": {"x": 1, "y": 1},
        "children": ["c1"],
        "paths": [["v1", "p1"], ["p2"]],
        "attachments": {"p1": {"attach_y": 0, "vertical_y": 0,
                                "port": 1, "num_ports": 1}},
        "consanguinity": "A", "broken": false
      }]
    }
"""

from __future__ import annotations

import json

from pedigree_lines.parser.model import (
    Consanguinity,
    Partnership,
    PedigreeLayout,
    Person,
    RelationshipLineInfo,
    RoutingNode,
)

_GENDERS = {"M", "F", "U"}


def parse_layout_json(text: str) -> PedigreeLayout:
    """Parse a JSON layout document into a :class:`PedigreeLayout`."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Layout is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("Layout document must be a JSON object")
    return load_layout(data)


def load_layout(data: dict) -> PedigreeLayout:
    """Build a :class:`PedigreeLayout` from an already-decoded document."""
    layout = PedigreeLayout(title=str(data.get("title", "")))

    for entry in _array(data.get("persons", []), "persons"):
        layout.add_person(_parse_person(_object(entry, "Person entry")))
    for entry in _array(data.get("routing", []), "routing"):
        entry = _object(entry, "Routing node entry")
        node_id = _require_id(entry, "routing node")
        layout.add_routing_node(
            RoutingNode(id=node_id, x=_num(entry, "x"), y=_num(entry, "y"))
        )
    for entry in _array(data.get("partnerships", []), "partnerships"):
        layout.add_partnership(_parse_partnership(_object(entry, "Partnership entry"), layout))

    proband = data.get("proband")
    if proband is not None:
        if not isinstance(proband, str) or proband not in layout.persons:
            raise ValueError(f"Proband '{proband}' is not a declared person")
        layout.proband = proband

    _check_references(layout)
    return layout


def _parse_person(entry: dict) -> Person:
    person_id = _require_id(entry, "person")
    gender = str(entry.get("gender", "U")).upper()
    if gender not in _GENDERS:
        raise ValueError(
            f"Person '{person_id}' has unsupported gender '{gender}' "
            f"(expected one of {sorted(_GENDERS)})"
        )
    twin_group = None if entry.get("twin_group") is None else _int(entry, "twin_group", 0)
    return Person(
        id=person_id,
        x=_num(entry, "x"),
        y=_num(entry, "y"),
        gender=gender,
        label=str(entry.get("label", "")),
        lost_contact=bool(entry.get("lost_contact", False)),
        monozygotic=bool(entry.get("monozygotic", False)),
        adopted_in=bool(entry.get("adopted_in", False)),
        placeholder=bool(entry.get("placeholder", False)),
        twin_group=twin_group,
    )


def _parse_partnership(entry: dict, layout: PedigreeLayout) -> Partnership:
    rel_id = _require_id(entry, "partnership")
    partners = tuple(_ids(entry.get("partners", []), f"Partnership '{rel_id}' partners"))
    if not 1 <= len(partners) <= 2:
        raise ValueError(
            f"Partnership '{rel_id}' must have one or two partners, got {len(partners)}"
        )

    childhub = _object(entry.get("childhub", {}), f"Partnership '{rel_id}' childhub")
    try:
        consanguinity = Consanguinity(entry.get("consanguinity", "A"))
    except ValueError as e:
        raise ValueError(
            f"Partnership '{rel_id}' has invalid consanguinity "
            f"'{entry.get('consanguinity')}' (expected A, Y or N)"
        ) from e

    attachments: dict[str, RelationshipLineInfo] = {}
    attachment_entries = _object(
        entry.get("attachments", {}), f"Partnership '{rel_id}' attachments"
    )
    for parent_id, info in attachment_entries.items():
        info = _object(info, f"Partnership '{rel_id}' attachment for {parent_id}")
        port = _int(info, "port", 1)
        num_ports = _int(info, "num_ports", 1)
        if not 1 <= port <= num_ports:
            raise ValueError(
                f"Partnership '{rel_id}': attachment port {port} of {parent_id} "
                f"is outside 1..{num_ports}"
            )
        attach_y = _num(info, "attach_y")
        attachments[parent_id] = RelationshipLineInfo(
            attach_y=attach_y,
            vertical_y=_num(info, "vertical_y") if "vertical_y" in info else attach_y,
            attachment_port=port,
            num_attach_ports=num_ports,
        )

    y = _num(entry, "y")
    return Partnership(
        id=rel_id,
        partners=partners,
        x=_num(entry, "x"),
        y=y,
        childhub_x=_num(childhub, "x") if "x" in childhub else None,
        childhub_y=_num(childhub, "y", y),
        children=_ids(entry.get("children", []), f"Partnership '{rel_id}' children"),
        consanguinity=consanguinity,
        broken=bool(entry.get("broken", False)),
        paths=[
            _ids(p, f"Partnership '{rel_id}' path")
            for p in _array(entry.get("paths", []), f"Partnership '{rel_id}' paths")
        ],
        attachments=attachments,
    )


def _check_references(layout: PedigreeLayout) -> None:
    """Make sure every id a partnership mentions exists."""
    known = set(layout.persons) | set(layout.routing_nodes)
    for rel in layout.partnerships.values():
        for pid in (*rel.partners, *rel.children):
            if pid not in layout.persons:
                raise ValueError(
                    f"Partnership '{rel.id}' references unknown person '{pid}'"
                )
        for path in rel.paths:
            for node_id in path:
                if node_id not in known:
                    raise ValueError(
                        f"Partnership '{rel.id}' path references unknown node '{node_id}'"
                    )
        # Raises on paths that do not end at a partner
        layout.path_to_parents(rel.id)


def _require_id(entry: dict, kind: str) -> str:
    node_id = entry.get("id")
    if not node_id:
        raise ValueError(f"Every {kind} needs an 'id': {entry!r}")
    return str(node_id)


def _object(value, what: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a JSON object, got {value!r}")
    return value


def _array(value, what: str) -> list:
    if not isinstance(value, list):
        raise ValueError(f"{what} must be a JSON array, got {value!r}")
    return value


def _ids(value, what: str) -> list[str]:
    ids = _array(value, what)
    for node_id in ids:
        if not isinstance(node_id, str):
            raise ValueError(f"{what} must hold string ids, got {node_id!r}")
    return list(ids)


def _num(entry: dict, key: str, default: float = 0.0) -> float:
    value = entry.get(key, default)
    if isinstance(value, bool):
        raise ValueError(f"Field '{key}' must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Field '{key}' must be a number, got {value!r}") from e


def _int(entry: dict, key: str, default: int) -> int:
    value = entry.get(key, default)
    if isinstance(value, bool):
        raise ValueError(f"Field '{key}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Field '{key}' must be an integer, got {value!r}") from e
