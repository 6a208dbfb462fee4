"""Data model for laid-out pedigree graphs.

The layout engine (external) decides where every person, partnership and
routing waypoint goes.  ``PedigreeLayout`` holds that result and answers the
read-only queries the connection builders need: waypoint paths, attachment
ports, children order, twin groups, and proband-relative predicates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import networkx as nx


class Consanguinity(Enum):
    """Per-partnership override of consanguinity display."""

    AUTO = "A"
    YES = "Y"
    NO = "N"


@dataclass
class Person:
    """A person (or placeholder) node in the pedigree."""

    id: str
    x: float = 0.0
    y: float = 0.0
    gender: str = "U"  # "M" | "F" | "U"
    label: str = ""
    lost_contact: bool = False
    monozygotic: bool = False
    adopted_in: bool = False
    placeholder: bool = False
    twin_group: int | None = None


@dataclass
class RoutingNode:
    """A virtual waypoint used by the layout to route a partner line."""

    id: str
    x: float = 0.0
    y: float = 0.0


@dataclass
class RelationshipLineInfo:
    """Where a partner line attaches to a parent.

    ``attach_y`` is the Y of the port on the parent symbol, ``vertical_y``
    the Y of the horizontal corridor the line arrives on.  Ports are
    numbered from 1 (topmost) to ``num_attach_ports``.
    """

    attach_y: float
    vertical_y: float
    attachment_port: int = 1
    num_attach_ports: int = 1


@dataclass
class Partnership:
    """A union between partners, drawn as a junction node."""

    id: str
    partners: tuple[str, ...]
    x: float = 0.0
    y: float = 0.0
    childhub_x: float | None = None
    childhub_y: float = 0.0
    children: list[str] = field(default_factory=list)
    consanguinity: Consanguinity = Consanguinity.AUTO
    broken: bool = False
    # One waypoint path per partner; each ends with the partner id
    paths: list[list[str]] = field(default_factory=list)
    attachments: dict[str, RelationshipLineInfo] = field(default_factory=dict)


@dataclass
class PedigreeLayout:
    """Complete laid-out pedigree graph."""

    title: str = ""
    proband: str | None = None
    persons: dict[str, Person] = field(default_factory=dict)
    routing_nodes: dict[str, RoutingNode] = field(default_factory=dict)
    partnerships: dict[str, Partnership] = field(default_factory=dict)
    _kinship: nx.DiGraph | None = field(default=None, repr=False, compare=False)

    def add_person(self, person: Person) -> None:
        self.persons[person.id] = person
        self._kinship = None

    def add_routing_node(self, node: RoutingNode) -> None:
        self.routing_nodes[node.id] = node

    def add_partnership(self, partnership: Partnership) -> None:
        self.partnerships[partnership.id] = partnership
        self._kinship = None

    # -- positions ---------------------------------------------------------

    def position(self, node_id: str) -> tuple[float, float]:
        """Return the abstract (x, y) of any node."""
        node = (
            self.persons.get(node_id)
            or self.routing_nodes.get(node_id)
            or self.partnerships.get(node_id)
        )
        if node is None:
            raise KeyError(f"Unknown node '{node_id}'")
        return (node.x, node.y)

    def childhub_position(self, partnership_id: str) -> tuple[float, float]:
        rel = self._partnership(partnership_id)
        x = rel.x if rel.childhub_x is None else rel.childhub_x
        return (x, rel.childhub_y)

    # -- partner paths -----------------------------------------------------

    def path_to_parents(self, partnership_id: str) -> list[list[str]]:
        """Return one waypoint path per partner, each ending at the partner."""
        rel = self._partnership(partnership_id)
        if not rel.paths:
            return [[p] for p in rel.partners]
        for path in rel.paths:
            if not path or path[-1] not in rel.partners:
                raise ValueError(
                    f"Partnership '{partnership_id}' has a path {path!r} that "
                    f"does not end at one of its partners {list(rel.partners)}"
                )
        return [list(path) for path in rel.paths]

    def relationship_line_info(
        self, partnership_id: str, parent_id: str
    ) -> RelationshipLineInfo:
        rel = self._partnership(partnership_id)
        info = rel.attachments.get(parent_id)
        if info is not None:
            return info
        _, y = self.position(parent_id)
        return RelationshipLineInfo(attach_y=y, vertical_y=y)

    # -- children ----------------------------------------------------------

    def children_sorted_by_order(self, partnership_id: str) -> list[str]:
        """Children left to right (ties keep declaration order)."""
        rel = self._partnership(partnership_id)
        return sorted(rel.children, key=lambda c: self._person(c).x)

    def parent_partnership(self, node_id: str) -> str | None:
        for rel in self.partnerships.values():
            if node_id in rel.children:
                return rel.id
        return None

    def twin_group_id(self, node_id: str) -> int | None:
        return self._person(node_id).twin_group

    def all_twins_sorted_by_order(self, node_id: str) -> list[str]:
        """All members of ``node_id``'s twin group, left to right.

        A child without a twin group is its own single-member group.
        """
        group = self.twin_group_id(node_id)
        rel_id = self.parent_partnership(node_id)
        if group is None or rel_id is None:
            return [node_id]
        return [
            c
            for c in self.children_sorted_by_order(rel_id)
            if self._person(c).twin_group == group
        ]

    # -- predicates --------------------------------------------------------

    def is_placeholder(self, node_id: str) -> bool:
        return self._person(node_id).placeholder

    def is_adopted_in(self, node_id: str) -> bool:
        return self._person(node_id).adopted_in

    def is_proband(self, node_id: str) -> bool:
        return self.proband is not None and node_id == self.proband

    def is_child_of_proband(self, node_id: str) -> bool:
        rel_id = self.parent_partnership(node_id)
        if rel_id is None or self.proband is None:
            return False
        return self.proband in self.partnerships[rel_id].partners

    def is_sibling_of_proband(self, node_id: str) -> bool:
        if self.proband is None or node_id == self.proband:
            return False
        rel_id = self.parent_partnership(node_id)
        return rel_id is not None and rel_id == self.parent_partnership(self.proband)

    def is_consanguineous_relationship(self, partnership_id: str) -> bool:
        """True when the partners share a blood ancestor (or descend from one another)."""
        partners = self._partnership(partnership_id).partners
        if len(partners) < 2:
            return False
        a, b = partners[0], partners[1]
        return self._blood_related(a, b)

    def is_partnership_related_to_proband(self, partnership_id: str) -> bool:
        if self.proband is None:
            return False
        partners = self._partnership(partnership_id).partners
        if self.proband in partners:
            return True
        return any(self._blood_related(p, self.proband) for p in partners)

    # -- internals ---------------------------------------------------------

    def kinship_graph(self) -> nx.DiGraph:
        """Parent -> child digraph over persons, rebuilt after mutation."""
        if self._kinship is None:
            G = nx.DiGraph()
            G.add_nodes_from(self.persons)
            for rel in self.partnerships.values():
                for parent in rel.partners:
                    for child in rel.children:
                        G.add_edge(parent, child)
            self._kinship = G
        return self._kinship

    def _blood_related(self, a: str, b: str) -> bool:
        G = self.kinship_graph()
        if a not in G or b not in G:
            return False
        line_a = nx.ancestors(G, a) | {a}
        line_b = nx.ancestors(G, b) | {b}
        return bool(line_a & line_b)

    def _person(self, node_id: str) -> Person:
        person = self.persons.get(node_id)
        if person is None:
            raise KeyError(f"Unknown person '{node_id}'")
        return person

    def _partnership(self, partnership_id: str) -> Partnership:
        rel = self.partnerships.get(partnership_id)
        if rel is None:
            raise KeyError(f"Unknown partnership '{partnership_id}'")
        return rel
