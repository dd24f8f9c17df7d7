"""
Anchor + Flip Position Solver

Places a window next to an attachment rectangle and keeps it on the monitor
work area. Each axis is solved independently:

1. Align the window's visual (shadow-free) anchor with the rectangle anchor
2. Add the fixed offset: the primary candidate
3. Pad the bounds outward by the window's shadow
4. If the primary overflows and the axis may flip, try the mirrored
   anchors with the offset reversed; keep them only if they fit
5. Clamp into the padded bounds and report the displacement
"""

import logging
from typing import NamedTuple, Optional, Tuple

from ..errors import MissingAttachRectError
from ..models.geometry import Anchor, Rectangle, ShadowInsets
from ..models.params import PlacementParams, PlacementResult
from .anchors import anchor_coordinate, opposite

logger = logging.getLogger(__name__)

NO_SHADOW = ShadowInsets()


class AxisSolution(NamedTuple):
    """Outcome on one axis."""

    position: int
    offset: int
    flipped: bool


def fits(position: int, size: int, lower: int, upper: int) -> bool:
    """Whether [position, position + size) lies inside [lower, upper)."""
    return lower <= position and position + size <= upper


def clamp_axis(position: int, size: int, lower: int, upper: int) -> int:
    """
    Push a window span inside [lower, upper).

    A window longer than the span goes to whichever edge is nearer its
    current position; `lower - position <= position - hi` picks the lower
    edge, so exact ties go to the lower edge.
    """
    hi = upper - size
    if hi < lower:
        return lower if lower - position <= position - hi else hi
    return min(max(position, lower), hi)


def _candidate(
    origin: int,
    rect_start: int,
    rect_length: int,
    rect_component,
    visual_start: int,
    visual_length: int,
    window_component,
    offset: int,
) -> int:
    target = origin + anchor_coordinate(rect_start, rect_length, rect_component)
    return target - anchor_coordinate(visual_start, visual_length, window_component) + offset


def solve_axis(
    origin: int,
    rect_start: int,
    rect_length: int,
    rect_component,
    flipped_rect_component,
    window_size: int,
    visual_start: int,
    visual_length: int,
    window_component,
    flipped_window_component,
    offset: int,
    may_flip: bool,
    bounds: Optional[Tuple[int, int]],
) -> AxisSolution:
    """
    Solve one axis.

    Args:
        origin: Absolute origin of the attachment coordinate space
        rect_start: Attachment rectangle start on this axis
        rect_length: Attachment rectangle length on this axis
        rect_component: Rectangle anchor component
        flipped_rect_component: Mirrored rectangle anchor component
        window_size: Outer window size (shadow included)
        visual_start: Start of the visual rect within the outer window
        visual_length: Length of the visual rect
        window_component: Window anchor component
        flipped_window_component: Mirrored window anchor component
        offset: Fixed displacement added after alignment
        may_flip: Flip hint for this axis
        bounds: (start, end) of the shadow-padded work area, or None

    Returns:
        AxisSolution with clamped position, clamp offset and flip flag
    """
    candidate = _candidate(
        origin, rect_start, rect_length, rect_component,
        visual_start, visual_length, window_component, offset,
    )

    if bounds is None:
        return AxisSolution(candidate, 0, False)

    lower, upper = bounds

    flipped = False
    if may_flip and not fits(candidate, window_size, lower, upper):
        alternative = _candidate(
            origin, rect_start, rect_length, flipped_rect_component,
            visual_start, visual_length, flipped_window_component, -offset,
        )
        if fits(alternative, window_size, lower, upper):
            logger.debug(f"Flipped: {candidate} -> {alternative}")
            candidate = alternative
            flipped = True
        else:
            logger.debug(
                f"Flip rejected: primary {candidate} and flipped {alternative} "
                f"both overflow [{lower}, {upper})"
            )

    position = clamp_axis(candidate, window_size, lower, upper)
    if position != candidate:
        logger.debug(f"Clamped: {candidate} -> {position} into [{lower}, {upper})")

    return AxisSolution(position, position - candidate, flipped)


def solve(
    params: PlacementParams,
    window_width: int,
    window_height: int,
    shadow: Optional[ShadowInsets] = None,
    bounds: Optional[Rectangle] = None,
    origin: Optional[Tuple[int, int]] = None,
) -> PlacementResult:
    """
    Find the best position for a window of the given size.

    Args:
        params: Placement parameters with an attachment rectangle
        window_width: Outer window width, shadow included
        window_height: Outer window height, shadow included
        shadow: Window shadow insets (default: none)
        bounds: Monitor work area in absolute coordinates (default: unbounded)
        origin: Absolute origin of the attachment rectangle's coordinate
            space (default: walk params.coordinate_space to its root)

    Returns:
        PlacementResult

    Raises:
        ValueError: If params is None, a window size is negative, or the
            coordinate space is bound to a container and no origin is given
        MissingAttachRectError: If params has no attachment rectangle
    """
    if params is None:
        raise ValueError("params is required")
    if not params.has_attach_rect():
        raise MissingAttachRectError()
    if window_width < 0 or window_height < 0:
        raise ValueError(
            f"Window size cannot be negative: {window_width}x{window_height}"
        )

    shadow = shadow or NO_SHADOW
    rect = params.attach_rect
    if origin is None:
        origin = params.coordinate_space.absolute_origin()

    # Visual rect relative to the window's outer top-left corner
    visual = Rectangle(width=window_width, height=window_height).shrink(shadow)
    # Shadows may hang past the monitor edge
    padded = bounds.grow(shadow) if bounds is not None else None

    rect_anchor, window_anchor = params.get_anchors()
    flipped_rect: Anchor = opposite(rect_anchor)
    flipped_window: Anchor = opposite(window_anchor)
    hints = params.flip_hints
    dx, dy = params.offset

    solved_x = solve_axis(
        origin[0], rect.x, rect.width,
        rect_anchor.horizontal, flipped_rect.horizontal,
        window_width, visual.x, visual.width,
        window_anchor.horizontal, flipped_window.horizontal,
        dx, hints.flip_x,
        (padded.x, padded.right) if padded is not None else None,
    )
    solved_y = solve_axis(
        origin[1], rect.y, rect.height,
        rect_anchor.vertical, flipped_rect.vertical,
        window_height, visual.y, visual.height,
        window_anchor.vertical, flipped_window.vertical,
        dy, hints.flip_y,
        (padded.y, padded.bottom) if padded is not None else None,
    )

    result = PlacementResult(
        x=solved_x.position,
        y=solved_y.position,
        offset_x=solved_x.offset,
        offset_y=solved_y.offset,
        flipped_x=solved_x.flipped,
        flipped_y=solved_y.flipped,
    )
    logger.debug(
        f"Solved {window_width}x{window_height} at {rect_anchor}->{window_anchor} "
        f"of {rect.x},{rect.y} {rect.width}x{rect.height}: "
        f"({result.x}, {result.y}) offset=({result.offset_x}, {result.offset_y}) "
        f"flipped=({result.flipped_x}, {result.flipped_y})"
    )
    return result
