"""
Placement Parameters and Results

PlacementParams describes how a window should sit relative to an attachment
rectangle. It is mutable between placements and read once per solve.

The optional position callback context is owned by the params: whatever
release function came with it runs exactly once, either when the context is
replaced or when the params are closed.
"""

import logging
from typing import Any, Callable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .geometry import (
    BOTTOM_LEFT,
    ROOT_SPACE,
    TOP_LEFT,
    Anchor,
    CoordinateSpace,
    FlipHints,
    Rectangle,
)

logger = logging.getLogger(__name__)

# callback(window, params, x, y, offset_x, offset_y, flipped_x, flipped_y, context)
PositionCallback = Callable[..., Any]
ReleaseFunc = Callable[[Any], None]


def move_command(container_id: int, x: int, y: int) -> str:
    """Sway command moving a container to absolute coordinates."""
    return f"[con_id={container_id}] move absolute position {x} {y}"


class PlacementResult(BaseModel):
    """Final position chosen for a window."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(..., description="Final X position (absolute, pixels)")
    y: int = Field(..., description="Final Y position (absolute, pixels)")
    offset_x: int = Field(default=0, description="Horizontal push applied to stay on-screen")
    offset_y: int = Field(default=0, description="Vertical push applied to stay on-screen")
    flipped_x: bool = Field(default=False, description="Opposite horizontal anchors used")
    flipped_y: bool = Field(default=False, description="Opposite vertical anchors used")

    @property
    def constrained(self) -> bool:
        return self.offset_x != 0 or self.offset_y != 0

    def to_sway_command(self, container_id: int) -> str:
        """Generate Sway command to position window."""
        return move_command(container_id, self.x, self.y)


class PlacementParams:
    """
    Everything needed to position a window next to an attachment rectangle.

    Defaults: no attachment rectangle, root coordinate space, rectangle
    anchor bottom-left, window anchor top-left (a drop-down below the
    rectangle), no flip hints, zero offset, no callback.
    """

    def __init__(self) -> None:
        self._attach_rect: Optional[Rectangle] = None
        self._coordinate_space: CoordinateSpace = ROOT_SPACE
        self._rect_anchor: Anchor = BOTTOM_LEFT
        self._window_anchor: Anchor = TOP_LEFT
        self._flip_hints: FlipHints = FlipHints()
        self._offset: Tuple[int, int] = (0, 0)

        self._callback: Optional[PositionCallback] = None
        self._context: Any = None
        self._release: Optional[ReleaseFunc] = None

    def __repr__(self) -> str:
        return (
            f"PlacementParams(rect={self._attach_rect!r}, "
            f"anchors={self._rect_anchor}->{self._window_anchor}, "
            f"flip={self._flip_hints.flags}, offset={self._offset})"
        )

    def __enter__(self) -> "PlacementParams":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Attachment rectangle
    # ------------------------------------------------------------------

    def set_attach_rect(
        self,
        rect: Optional[Rectangle],
        coordinate_space: Optional[CoordinateSpace] = None,
    ) -> None:
        """
        Set the rectangle the window is aligned to.

        Args:
            rect: Attachment rectangle, or None to clear it
            coordinate_space: Space `rect` is expressed in (default: root)
        """
        self._attach_rect = rect
        self._coordinate_space = coordinate_space if coordinate_space is not None else ROOT_SPACE

    def has_attach_rect(self) -> bool:
        return self._attach_rect is not None

    @property
    def attach_rect(self) -> Optional[Rectangle]:
        return self._attach_rect

    @property
    def coordinate_space(self) -> CoordinateSpace:
        return self._coordinate_space

    # ------------------------------------------------------------------
    # Anchors, hints, offset
    # ------------------------------------------------------------------

    def set_anchors(self, rect_anchor: Anchor, window_anchor: Anchor) -> None:
        self._rect_anchor = rect_anchor
        self._window_anchor = window_anchor

    def get_anchors(self) -> Tuple[Anchor, Anchor]:
        return self._rect_anchor, self._window_anchor

    @property
    def rect_anchor(self) -> Anchor:
        return self._rect_anchor

    @property
    def window_anchor(self) -> Anchor:
        return self._window_anchor

    def set_flip_hints(self, hints: FlipHints) -> None:
        self._flip_hints = hints

    @property
    def flip_hints(self) -> FlipHints:
        return self._flip_hints

    def set_offset(self, dx: int, dy: int) -> None:
        """Displacement applied after anchor alignment (reversed on flip)."""
        self._offset = (dx, dy)

    @property
    def offset(self) -> Tuple[int, int]:
        return self._offset

    # ------------------------------------------------------------------
    # Position callback
    # ------------------------------------------------------------------

    def set_position_callback(
        self,
        callback: Optional[PositionCallback],
        context: Any = None,
        release: Optional[ReleaseFunc] = None,
    ) -> None:
        """
        Set the function notified with the final position.

        The params take ownership of `context`. A previously owned context
        is released when a different one replaces it. Passing the context
        already owned keeps it (and its release function) untouched.

        Args:
            callback: Called as callback(window, params, x, y, offset_x,
                offset_y, flipped_x, flipped_y, context), or None
            context: Opaque caller data handed back to the callback
            release: Called once with `context` when the params drop it
        """
        self._callback = callback

        if context is not self._context:
            self._release_context()
            self._context = context
            self._release = release
        elif context is not None:
            logger.warning("Params already own this callback context")

    @property
    def position_callback(self) -> Optional[PositionCallback]:
        return self._callback

    @property
    def callback_context(self) -> Any:
        return self._context

    def _release_context(self) -> None:
        context, release = self._context, self._release
        self._context = None
        self._release = None
        if context is not None and release is not None:
            release(context)

    def close(self) -> None:
        """Release the owned callback context. Safe to call more than once."""
        self._callback = None
        self._release_context()
