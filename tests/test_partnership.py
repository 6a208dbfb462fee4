"""Tests for the per-partnership connection controller."""

from __future__ import annotations

import pytest
from scenes import make_scene, nuclear_layout

from pedigree_lines.layout.constants import PARTNERSHIP_CHILDLESS_LENGTH, PARTNERSHIP_RADIUS
from pedigree_lines.parser.model import Consanguinity, Partnership, PedigreeLayout, Person
from pedigree_lines.render.hoverbox import PartnershipHoverbox, ReadOnlyHoverbox
from pedigree_lines.render.partnership import ConnectionState
from pedigree_lines.render.style import LineStyle


class FakeChildless:
    def __init__(self):
        self.updates = 0
        self.removed = 0

    def update_status_label(self):
        self.updates += 1

    def remove(self):
        self.removed += 1


@pytest.fixture
def drawn(nuclear_scene):
    controller = nuclear_scene.controller("r1")
    controller.draw()
    return nuclear_scene, controller


def _snapshot(scene, controller):
    return (
        len(scene.surface),
        len(scene.draw_log),
        controller.partner_connections.signature(),
        controller.child_connections.signature(),
    )


class TestDraw:
    def test_initial_state(self, nuclear_scene):
        controller = nuclear_scene.controller("r1")
        assert controller.state is ConnectionState.UNINITIALIZED
        assert controller.partner_connections is None
        assert controller.child_connections is None

    def test_draw(self, drawn):
        scene, controller = drawn
        assert controller.state is ConnectionState.DRAWN
        assert len(controller.partner_connections) == 2
        assert not controller.child_connections.is_empty
        (junction,) = controller.get_shapes()
        assert junction in scene.surface
        assert junction.points == ((100.0, 0.0),)

    def test_junction_drawn_in_front_of_lines(self, drawn):
        scene, controller = drawn
        order = scene.surface.primitives
        (junction,) = controller.get_shapes()
        for prim in controller.partner_connections:
            assert order.index(prim) < order.index(junction)

    def test_redraw_partner_connections_is_idempotent(self, drawn):
        scene, controller = drawn
        before = _snapshot(scene, controller)
        old_group = controller.partner_connections
        controller.redraw_partner_connections()
        assert _snapshot(scene, controller) == before
        assert old_group.removed
        assert not any(p in scene.surface for p in old_group)

    def test_redraw_child_connections_is_idempotent(self, drawn):
        scene, controller = drawn
        before = _snapshot(scene, controller)
        for _ in range(3):
            controller.redraw_child_connections()
        assert _snapshot(scene, controller) == before

    def test_fanout_summary(self, drawn):
        _, controller = drawn
        assert controller.fanout.pregnancies == 3

    def test_placeholder_only_group_is_empty_not_none(self):
        scene = make_scene(nuclear_layout(children=[Person("ph", 100, 160, placeholder=True)]))
        controller = scene.controller("r1")
        controller.draw()
        assert controller.child_connections is not None
        assert controller.child_connections.is_empty

    def test_failed_redraw_leaves_nothing_behind(self, drawn, monkeypatch):
        scene, controller = drawn
        before = len(scene.surface)
        old_count = len(controller.partner_connections)

        drawer = controller.partner_router.drawer

        def broken_draw(partnership_id, junction, consanguineous, broken=False):
            drawer.draw_line(
                partnership_id, junction, (0.0, 50.0), LineStyle.PARTNER, channel="partners"
            )
            raise ValueError("boom")

        monkeypatch.setattr(controller.partner_router, "draw", broken_draw)
        with pytest.raises(ValueError, match="boom"):
            controller.redraw_partner_connections()
        assert len(scene.surface) == before - old_count
        assert not [s for s in scene.draw_log if s.channel == "partners"]
        # The surface accepts a new group afterwards
        scene.surface.start_group()
        scene.surface.finish_group()


class TestConsanguinityDisplay:
    def _siblings_marriage(self, consanguinity):
        layout = PedigreeLayout()
        for pid, x in (("g1", 0), ("g2", 200), ("a", 0), ("b", 200)):
            layout.add_person(Person(pid, x, 0 if pid.startswith("g") else 160))
        layout.add_partnership(Partnership("r0", ("g1", "g2"), 100, 0, childhub_y=80,
                                           children=["a", "b"]))
        layout.add_partnership(Partnership("r1", ("a", "b"), 100, 160, childhub_y=240,
                                           consanguinity=consanguinity))
        return make_scene(layout)

    def test_auto_uses_graph(self):
        scene = self._siblings_marriage(Consanguinity.AUTO)
        assert scene.controller("r1").is_displayed_as_consanguineous()
        assert not scene.controller("r0").is_displayed_as_consanguineous()

    def test_no_overrides_graph(self):
        scene = self._siblings_marriage(Consanguinity.NO)
        assert not scene.controller("r1").is_displayed_as_consanguineous()

    def test_yes_overrides_graph(self):
        layout = nuclear_layout(consanguinity=Consanguinity.YES)
        controller = make_scene(layout).controller("r1")
        assert controller.is_displayed_as_consanguineous()
        controller.draw()
        # Doubled partner lines
        assert len(controller.partner_connections) == 4


class TestReposition:
    def test_animate_rejected(self, drawn):
        _, controller = drawn
        with pytest.raises(ValueError, match="Can't animate a partnership node"):
            controller.reposition((120.0, 0.0), animate=True)
        assert controller.junction == (100.0, 0.0)

    def test_moves_junction_and_redraws(self, drawn):
        scene, controller = drawn
        controller.reposition((100.0, 20.0))
        assert controller.junction == (100.0, 20.0)
        (junction,) = controller.get_shapes()
        assert junction.points == ((100.0, 20.0),)
        stems = [p.points for p in controller.child_connections if p.points[0] == (100.0, 20.0)]
        assert stems == [((100.0, 20.0), (100.0, 80.0))]

    def test_clears_marks_and_updates_childless(self, nuclear_scene):
        childless = FakeChildless()
        controller = nuclear_scene.controller("r1", childless=childless)
        controller.draw()
        controller.mark_pregnancy()
        controller.mark_permanently()
        controller.reposition((100.0, 10.0))
        assert childless.updates == 1
        assert not [p for p in nuclear_scene.surface.primitives if p.kind == "overlay"]

    def test_bottom_follows_junction(self, drawn):
        _, controller = drawn
        assert controller.bottom_y == PARTNERSHIP_RADIUS + PARTNERSHIP_CHILDLESS_LENGTH
        controller.reposition((100.0, 30.0))
        assert controller.bottom_y == 30.0 + PARTNERSHIP_RADIUS + PARTNERSHIP_CHILDLESS_LENGTH

    def test_grow_follows_junction(self, drawn):
        scene, controller = drawn
        controller.grow()
        controller.reposition((100.0, 10.0))
        (halo,) = [p for p in scene.surface.primitives if p.kind == "overlay"]
        assert halo.points == ((100.0, 10.0),)


class TestRemove:
    def test_no_leaked_geometry(self, nuclear_scene):
        controller = nuclear_scene.controller("r1", read_only=False)
        controller.draw()
        controller.grow()
        controller.mark_pregnancy()
        controller.mark_permanently()
        controller.remove()
        assert nuclear_scene.surface.owned_by("r1") == []
        assert len(nuclear_scene.surface) == 0
        assert len(nuclear_scene.draw_log) == 0
        assert controller.state is ConnectionState.REMOVED

    def test_idempotent(self, drawn):
        scene, controller = drawn
        controller.remove()
        controller.remove()
        assert len(scene.surface) == 0

    def test_removes_childless(self, nuclear_scene):
        childless = FakeChildless()
        controller = nuclear_scene.controller("r1", childless=childless)
        controller.draw()
        controller.remove()
        assert childless.removed == 1

    def test_other_partnerships_untouched(self):
        layout = nuclear_layout()
        layout.add_person(Person("x", 400, 0))
        layout.add_partnership(Partnership("r2", ("m", "x"), 300, 0))
        scene = make_scene(layout)
        first, second = scene.controller("r1"), scene.controller("r2")
        first.draw()
        second.draw()
        kept = scene.surface.owned_by("r2")
        first.remove()
        assert scene.surface.owned_by("r2") == kept
        assert {s.owner for s in scene.draw_log} == {"r2"}

    @pytest.mark.parametrize(
        "operation",
        ["draw", "redraw_partner_connections", "redraw_child_connections"],
    )
    def test_redraw_after_remove_rejected(self, drawn, operation):
        _, controller = drawn
        controller.remove()
        with pytest.raises(ValueError, match="has been removed"):
            getattr(controller, operation)()

    def test_reposition_after_remove_rejected(self, drawn):
        _, controller = drawn
        controller.remove()
        with pytest.raises(ValueError, match="has been removed"):
            controller.reposition((0.0, 0.0))


class TestMarkers:
    def test_markers_sit_behind_junction(self, drawn):
        scene, controller = drawn
        controller.grow()
        controller.mark_pregnancy()
        controller.mark_permanently()
        order = scene.surface.primitives
        (junction,) = controller.get_shapes()
        overlays = [p for p in order if p.kind == "overlay"]
        assert len(overlays) == 3
        assert all(order.index(p) < order.index(junction) for p in overlays)

    def test_marking_twice_adds_one(self, drawn):
        scene, controller = drawn
        controller.mark_pregnancy()
        controller.mark_pregnancy()
        assert len([p for p in scene.surface.primitives if p.kind == "overlay"]) == 1

    @pytest.mark.parametrize(
        "mark,unmark",
        [("grow", "shrink"), ("mark_pregnancy", "unmark_pregnancy"),
         ("mark_permanently", "unmark")],
    )
    def test_unmark(self, drawn, mark, unmark):
        scene, controller = drawn
        before = len(scene.surface)
        getattr(controller, mark)()
        assert len(scene.surface) == before + 1
        getattr(controller, unmark)()
        getattr(controller, unmark)()
        assert len(scene.surface) == before

    def test_all_graphics(self, drawn):
        _, controller = drawn
        controller.grow()
        graphics = controller.get_all_graphics()
        assert controller.get_shapes()[0] in graphics
        assert all(p in graphics for p in controller.partner_connections)


class TestHoverbox:
    def test_read_only_by_default(self, drawn):
        _, controller = drawn
        assert isinstance(controller.hoverbox, ReadOnlyHoverbox)
        assert controller.hoverbox.get_back_elements() == []

    def test_interactive_hoverbox(self, nuclear_scene):
        controller = nuclear_scene.controller("r1", read_only=False)
        controller.draw()
        hoverbox = controller.hoverbox
        assert isinstance(hoverbox, PartnershipHoverbox)
        assert [name for name, _ in hoverbox.handles] == ["child", "partner-left", "partner-right"]
        (hitbox,) = hoverbox.get_back_elements()
        assert hitbox.kind == "hitbox"
        assert hitbox in nuclear_scene.surface

    def test_handles_regenerated_on_partner_redraw(self, drawn):
        _, controller = drawn
        count = controller.hoverbox.regenerations
        controller.redraw_partner_connections()
        assert controller.hoverbox.regenerations == count + 1

    def test_interactive_handles_follow_reposition(self, nuclear_scene):
        controller = nuclear_scene.controller("r1", read_only=False)
        controller.draw()
        controller.reposition((120.0, 0.0))
        assert dict(controller.hoverbox.handles)["child"][0] == 120.0
        (hitbox,) = controller.hoverbox.get_back_elements()
        assert hitbox.points == ((120.0, 0.0),)
