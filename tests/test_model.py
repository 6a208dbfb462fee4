"""Tests for the laid-out pedigree model queries."""

from __future__ import annotations

import pytest
from scenes import EXAMPLES_DIR, nuclear_layout, routed_layout

from pedigree_lines.layout.coords import CoordinateConverter
from pedigree_lines.parser import parse_layout_json
from pedigree_lines.parser.model import Partnership, Person, RelationshipLineInfo


@pytest.fixture
def cousins():
    return parse_layout_json((EXAMPLES_DIR / "twins_consanguinity.json").read_text())


class TestPositions:
    def test_person_routing_and_partnership(self):
        layout = routed_layout()
        assert layout.position("p2") == (300, 0)
        assert layout.position("v1") == (200, 100)
        assert layout.position("r1") == (100, 100)

    def test_unknown_node(self):
        with pytest.raises(KeyError, match="Unknown node 'nobody'"):
            routed_layout().position("nobody")

    def test_childhub_defaults_to_junction_x(self):
        layout = nuclear_layout()
        assert layout.childhub_position("r1") == (100, 80)

    def test_unknown_partnership(self):
        with pytest.raises(KeyError, match="Unknown partnership"):
            nuclear_layout().childhub_position("r9")


class TestPaths:
    def test_default_paths_go_straight_to_partners(self):
        assert nuclear_layout().path_to_parents("r1") == [["f"], ["m"]]

    def test_explicit_paths(self):
        assert routed_layout().path_to_parents("r1") == [["p1"], ["v1", "v2", "p2"]]

    def test_paths_are_copies(self):
        layout = routed_layout()
        layout.path_to_parents("r1")[1].append("zzz")
        assert layout.path_to_parents("r1")[1] == ["v1", "v2", "p2"]

    def test_default_line_info(self):
        info = nuclear_layout().relationship_line_info("r1", "m")
        assert info == RelationshipLineInfo(attach_y=0, vertical_y=0)

    def test_explicit_line_info(self):
        layout = nuclear_layout()
        info = RelationshipLineInfo(10, 0, attachment_port=2, num_attach_ports=2)
        layout.partnerships["r1"].attachments["m"] = info
        assert layout.relationship_line_info("r1", "m") is info


class TestChildren:
    def test_sorted_by_x(self):
        children = [Person("c3", 200, 160), Person("c1", 0, 160), Person("c2", 100, 160)]
        layout = nuclear_layout(children=children)
        assert layout.children_sorted_by_order("r1") == ["c1", "c2", "c3"]

    def test_twins(self, cousins):
        assert cousins.twin_group_id("t2") == 1
        assert cousins.twin_group_id("s") is None
        assert cousins.all_twins_sorted_by_order("t3") == ["t1", "t2", "t3"]
        assert cousins.all_twins_sorted_by_order("s") == ["s"]

    def test_parent_partnership(self, cousins):
        assert cousins.parent_partnership("a") == "r0"
        assert cousins.parent_partnership("g1") is None


class TestPredicates:
    def test_consanguinity_from_shared_ancestors(self, cousins):
        assert cousins.is_consanguineous_relationship("r1")
        assert not cousins.is_consanguineous_relationship("r0")

    def test_single_partner_is_not_consanguineous(self):
        layout = nuclear_layout()
        layout.partnerships["r1"].partners = ("f",)
        assert not layout.is_consanguineous_relationship("r1")

    def test_proband_relations(self, cousins):
        assert cousins.is_proband("t1")
        assert cousins.is_sibling_of_proband("t2")
        assert cousins.is_sibling_of_proband("s")
        assert not cousins.is_sibling_of_proband("t1")
        assert not cousins.is_child_of_proband("t2")

    def test_child_of_proband(self):
        layout = nuclear_layout()
        layout.proband = "m"
        assert layout.is_child_of_proband("c1")
        assert not layout.is_sibling_of_proband("c1")

    def test_partnership_related_to_proband(self, cousins):
        assert cousins.is_partnership_related_to_proband("r0")
        assert cousins.is_partnership_related_to_proband("r1")
        cousins.proband = None
        assert not cousins.is_partnership_related_to_proband("r1")

    def test_unrelated_partnership(self):
        layout = nuclear_layout()
        layout.add_person(Person("x", 400, 0))
        layout.add_person(Person("y", 600, 0))
        layout.add_partnership(Partnership("r2", ("x", "y"), 500, 0))
        layout.proband = "c1"
        assert not layout.is_partnership_related_to_proband("r2")

    def test_flags(self):
        layout = nuclear_layout(children=[Person("ph", 0, 160, placeholder=True, adopted_in=True)])
        assert layout.is_placeholder("ph")
        assert layout.is_adopted_in("ph")
        assert not layout.is_placeholder("f")


class TestKinshipGraph:
    def test_edges(self):
        G = nuclear_layout().kinship_graph()
        assert set(G.successors("f")) == {"c1", "c2", "c3"}
        assert set(G.predecessors("c2")) == {"f", "m"}

    def test_rebuilt_after_mutation(self):
        layout = nuclear_layout()
        first = layout.kinship_graph()
        assert layout.kinship_graph() is first
        layout.add_person(Person("x", 400, 0))
        assert "x" in layout.kinship_graph()
        assert layout.kinship_graph() is not first


class TestCoordinateConverter:
    def test_identity(self):
        assert CoordinateConverter().to_canvas(3, 4) == (3.0, 4.0)

    def test_scale_and_offset(self):
        conv = CoordinateConverter(x_scale=2, y_scale=3, x_offset=10, y_offset=20)
        assert conv.to_canvas(1, 1) == (12, 23)
        assert conv.to_canvas_y(2) == 26
        assert conv.to_graph(12, 23) == pytest.approx((1, 1))

    def test_zero_scale_cannot_invert(self):
        with pytest.raises(ValueError, match="zero scale"):
            CoordinateConverter(x_scale=0).to_graph(1, 1)
