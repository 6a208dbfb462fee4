"""Shared fixtures for the connection-line tests."""

from __future__ import annotations

import pytest
from scenes import Scene, make_scene, nuclear_layout, routed_layout


@pytest.fixture
def nuclear_scene() -> Scene:
    return make_scene(nuclear_layout())


@pytest.fixture
def routed_scene() -> Scene:
    return make_scene(routed_layout())
