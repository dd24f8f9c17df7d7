"""Monitor/window adapter interface consumed by place_window()."""

from typing import Any, Protocol, Tuple

from ..models.geometry import CoordinateSpace, Rectangle, Screen, ShadowInsets


class WindowAdapter(Protocol):
    """Compositor-side queries and side effects needed to place a window."""

    async def resolve_absolute_origin(self, space: CoordinateSpace) -> Tuple[int, int]:
        """Absolute origin of a (possibly nested) coordinate space."""
        ...

    async def get_screen(self, window: Any) -> Screen:
        """Monitors available to `window`."""
        ...

    async def monitor_work_area(self, screen: Screen, point: Tuple[int, int]) -> Rectangle:
        """Usable rectangle of the monitor containing `point`."""
        ...

    async def window_pixel_size(self, window: Any) -> Tuple[int, int]:
        ...

    async def window_shadow_insets(self, window: Any) -> ShadowInsets:
        ...

    async def move_window(self, window: Any, x: int, y: int) -> None:
        ...
