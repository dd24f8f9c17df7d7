"""Shared fixtures for sway-attach tests."""

from types import SimpleNamespace
from typing import List, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest

from sway_attach.models.geometry import (
    CoordinateSpace,
    Monitor,
    Rectangle,
    Screen,
    ShadowInsets,
)


class RecordingAdapter:
    """In-memory WindowAdapter that records every call in order."""

    def __init__(
        self,
        screen: Screen,
        size: Tuple[int, int],
        shadow: ShadowInsets = ShadowInsets(),
    ):
        self.screen = screen
        self.size = size
        self.shadow = shadow
        self.calls: List[tuple] = []

    async def resolve_absolute_origin(self, space: CoordinateSpace):
        self.calls.append(("resolve_absolute_origin", space))
        return space.absolute_origin()

    async def get_screen(self, window):
        self.calls.append(("get_screen", window))
        return self.screen

    async def monitor_work_area(self, screen, point):
        self.calls.append(("monitor_work_area", point))
        return screen.monitor_at_point(point[0], point[1]).usable_area

    async def window_pixel_size(self, window):
        self.calls.append(("window_pixel_size", window))
        return self.size

    async def window_shadow_insets(self, window):
        self.calls.append(("window_shadow_insets", window))
        return self.shadow

    async def move_window(self, window, x, y):
        self.calls.append(("move_window", window, x, y))


@pytest.fixture
def dual_screen():
    """Laptop panel with a 30px bar plus an external monitor to its right."""
    return Screen(
        monitors=[
            Monitor(
                name="eDP-1",
                geometry=Rectangle(x=0, y=0, width=1920, height=1080),
                work_area=Rectangle(x=0, y=30, width=1920, height=1050),
            ),
            Monitor(
                name="HDMI-A-1",
                geometry=Rectangle(x=1920, y=0, width=2560, height=1440),
            ),
        ]
    )


@pytest.fixture
def recording_adapter(dual_screen):
    return RecordingAdapter(dual_screen, size=(400, 300))


def _rect(x, y, width, height):
    return SimpleNamespace(x=x, y=y, width=width, height=height)


@pytest.fixture
def mock_sway_connection():
    """Mock i3ipc.aio connection with two outputs and one floating container."""
    conn = MagicMock()
    conn.get_outputs = AsyncMock(
        return_value=[
            SimpleNamespace(name="eDP-1", active=True, rect=_rect(0, 0, 1920, 1080)),
            SimpleNamespace(name="HDMI-A-1", active=True, rect=_rect(1920, 0, 2560, 1440)),
            SimpleNamespace(name="DP-2", active=False, rect=_rect(0, 0, 0, 0)),
        ]
    )
    conn.get_workspaces = AsyncMock(
        return_value=[
            SimpleNamespace(num=1, output="eDP-1", visible=True, rect=_rect(0, 30, 1920, 1050)),
            SimpleNamespace(num=2, output="eDP-1", visible=False, rect=_rect(0, 0, 1920, 1080)),
            SimpleNamespace(num=3, output="HDMI-A-1", visible=True, rect=_rect(1920, 30, 2560, 1410)),
        ]
    )

    containers = {
        42: SimpleNamespace(id=42, rect=_rect(10, 10, 400, 300)),
        7: SimpleNamespace(id=7, rect=_rect(100, 200, 800, 600)),
    }
    tree = MagicMock()
    tree.find_by_id = MagicMock(side_effect=lambda con_id: containers.get(con_id))
    conn.get_tree = AsyncMock(return_value=tree)

    conn.command = AsyncMock(return_value=[SimpleNamespace(success=True, error=None)])
    return conn


@pytest.fixture
def make_adapter(dual_screen):
    """Build a RecordingAdapter for a given window size and shadow."""

    def factory(size=(400, 300), shadow=ShadowInsets(), screen=None):
        return RecordingAdapter(screen or dual_screen, size=size, shadow=shadow)

    return factory
