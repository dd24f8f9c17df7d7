"""
Sway/i3 Window Adapter

Implements the WindowAdapter queries over i3 IPC (i3ipc.aio):
- Screen: active outputs, work area = visible workspace rect on each output
- Window size: container rect from the layout tree
- Shadow insets: from PlacementConfig (the compositor does not report them)
- Move: `[con_id=N] move absolute position X Y`
- Lifetime: the adapter owns its connection; close() or `async with` ends it

Windows are identified by Sway container id (con_id).
"""

import asyncio
import logging
from typing import Dict, Optional, Tuple

from i3ipc import aio

from ..config import PlacementConfig
from ..errors import PlacementError, WindowNotFoundError
from ..models.geometry import (
    CoordinateSpace,
    Monitor,
    Rectangle,
    Screen,
    ShadowInsets,
)
from ..models.params import move_command

logger = logging.getLogger(__name__)


class SwayWindowAdapter:
    """WindowAdapter backed by an i3ipc.aio connection."""

    def __init__(self, conn: aio.Connection, config: Optional[PlacementConfig] = None):
        """
        Initialize adapter.

        Args:
            conn: Connected i3ipc.aio.Connection
            config: Placement defaults (shadow insets)
        """
        self.conn = conn
        self.config = config or PlacementConfig()

    @classmethod
    async def connect(
        cls,
        config: Optional[PlacementConfig] = None,
        initial_delay: float = 0.1,
    ) -> "SwayWindowAdapter":
        """
        Connect to Sway/i3 with exponential backoff retry.

        Args:
            config: Placement defaults; connect_attempts bounds the retries
            initial_delay: First retry delay in seconds (doubles up to 5s)

        Returns:
            Adapter with a live connection

        Raises:
            ConnectionError: If connection fails after all attempts
        """
        config = config or PlacementConfig()
        max_attempts = config.connect_attempts
        delay = initial_delay

        for attempt in range(max_attempts):
            try:
                logger.info(f"Attempting to connect to Sway (attempt {attempt + 1}/{max_attempts})")
                conn = await aio.Connection(auto_reconnect=False).connect()
                version = await conn.get_version()
                logger.info(f"Connected to {version.human_readable}")
                return cls(conn, config)
            except Exception as e:
                logger.warning(f"Connection attempt {attempt + 1} failed: {e}")
                if attempt + 1 < max_attempts:
                    logger.debug(f"Waiting {delay:.1f}s before retry...")
                    await asyncio.sleep(delay)
                    delay = min(delay * 2, 5.0)

        raise ConnectionError(f"Failed to connect to Sway after {max_attempts} attempts")

    def close(self) -> None:
        """Close the IPC connection. The adapter owns the connection it was given."""
        if self.conn is not None:
            self.conn.main_quit()
            self.conn = None
            logger.debug("Disconnected from Sway")

    async def __aenter__(self) -> "SwayWindowAdapter":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()

    async def _find_container(self, con_id: int):
        tree = await self.conn.get_tree()
        container = tree.find_by_id(con_id)
        if container is None:
            raise WindowNotFoundError(con_id)
        return container

    async def resolve_absolute_origin(self, space: CoordinateSpace) -> Tuple[int, int]:
        """
        Walk a coordinate space chain to absolute coordinates.

        A space bound to a container is positioned at that container's
        absolute rect, which ends the walk.
        """
        x, y = 0, 0
        current: Optional[CoordinateSpace] = space
        while current is not None:
            x += current.x
            y += current.y
            if current.con_id is not None:
                container = await self._find_container(current.con_id)
                x += container.rect.x
                y += container.rect.y
                break
            current = current.parent
        return x, y

    async def get_screen(self, window: int) -> Screen:
        """Active outputs with the visible workspace rect as work area."""
        outputs = await self.conn.get_outputs()
        workspaces = await self.conn.get_workspaces()

        work_areas: Dict[str, Rectangle] = {
            ws.output: Rectangle.from_ipc(ws.rect)
            for ws in workspaces
            if ws.visible
        }

        monitors = [
            Monitor(
                name=output.name,
                geometry=Rectangle.from_ipc(output.rect),
                work_area=work_areas.get(output.name),
            )
            for output in outputs
            if output.active
        ]
        logger.debug(f"Screen for window {window}: {[m.name for m in monitors]}")
        return Screen(monitors=monitors)

    async def monitor_work_area(self, screen: Screen, point: Tuple[int, int]) -> Rectangle:
        return screen.monitor_at_point(point[0], point[1]).usable_area

    async def window_pixel_size(self, window: int) -> Tuple[int, int]:
        container = await self._find_container(window)
        return container.rect.width, container.rect.height

    async def window_shadow_insets(self, window: int) -> ShadowInsets:
        return self.config.shadow

    async def move_window(self, window: int, x: int, y: int) -> None:
        """
        Move a container to absolute coordinates.

        Raises:
            PlacementError: If Sway rejects the command
        """
        command = move_command(window, x, y)
        logger.debug(f"Executing: {command}")
        replies = await self.conn.command(command)
        for reply in replies or []:
            if not reply.success:
                raise PlacementError(f"Sway rejected '{command}': {reply.error}")
