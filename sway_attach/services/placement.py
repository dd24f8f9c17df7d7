"""
Window Placement

Composes adapter queries, a position strategy, the window move and the
position callback into a single placement request. place_window() uses the
anchor + flip solver; place_window_by_rules() uses the priority rule solver.
"""

import inspect
import logging
from typing import Any, Optional, Tuple

from ..errors import MissingAttachRectError
from ..models.geometry import Rectangle
from ..models.params import PlacementParams, PlacementResult
from ..models.rules import RulePlacement, RuleSet
from .adapter import WindowAdapter
from .rule_solver import choose_position
from .solver import solve

logger = logging.getLogger(__name__)


def _check_request(params: PlacementParams, window: Any) -> None:
    if params is None:
        raise ValueError("params is required")
    if window is None:
        raise ValueError("window is required")
    if not params.has_attach_rect():
        raise MissingAttachRectError()


async def _query_geometry(
    params: PlacementParams,
    window: Any,
    adapter: WindowAdapter,
) -> Tuple[Tuple[int, int], Rectangle, Tuple[int, int]]:
    """Absolute origin, work area at the rectangle's center, window size."""
    rect = params.attach_rect
    origin = await adapter.resolve_absolute_origin(params.coordinate_space)
    center = (origin[0] + rect.center_x, origin[1] + rect.center_y)

    screen = await adapter.get_screen(window)
    bounds = await adapter.monitor_work_area(screen, center)
    size = await adapter.window_pixel_size(window)
    return origin, bounds, size


async def _notify(params: PlacementParams, window: Any, *values) -> None:
    callback = params.position_callback
    if callback is None:
        return
    outcome = callback(window, params, *values, params.callback_context)
    if inspect.isawaitable(outcome):
        await outcome


async def place_window(
    params: PlacementParams,
    window: Any,
    adapter: WindowAdapter,
) -> PlacementResult:
    """
    Move `window` next to the params' attachment rectangle.

    The monitor is the one containing the center of the attachment
    rectangle. The position callback, if any, runs after the move as
    callback(window, params, x, y, offset_x, offset_y, flipped_x,
    flipped_y, context).

    Args:
        params: Placement parameters with an attachment rectangle
        window: Window handle understood by `adapter`
        adapter: Compositor adapter

    Returns:
        The PlacementResult that was applied

    Raises:
        ValueError: If params or window is None
        MissingAttachRectError: If params has no attachment rectangle
        PlacementError: If the adapter cannot find or move the window
    """
    _check_request(params, window)

    origin, bounds, (width, height) = await _query_geometry(params, window, adapter)
    shadow = await adapter.window_shadow_insets(window)

    result = solve(params, width, height, shadow=shadow, bounds=bounds, origin=origin)

    await adapter.move_window(window, result.x, result.y)
    logger.info(
        f"Placed window {window} at ({result.x}, {result.y})"
        + (f", pushed by ({result.offset_x}, {result.offset_y})" if result.constrained else "")
        + (" [flipped]" if result.flipped_x or result.flipped_y else "")
    )

    await _notify(
        params,
        window,
        result.x,
        result.y,
        result.offset_x,
        result.offset_y,
        result.flipped_x,
        result.flipped_y,
    )
    return result


async def place_window_by_rules(
    params: PlacementParams,
    rules: RuleSet,
    window: Any,
    adapter: WindowAdapter,
) -> Optional[RulePlacement]:
    """
    Move `window` to the best position allowed by priority rules.

    Nothing moves when no primary/secondary pair covers both axes. After a
    move the position callback, if any, runs as callback(window, params, x,
    y, offset_x, offset_y, primary_rule, secondary_rule, context).

    Returns:
        The RulePlacement that was applied, or None

    Raises:
        ValueError: If params, rules or window is None
        MissingAttachRectError: If params has no attachment rectangle
        PlacementError: If the adapter cannot find or move the window
    """
    _check_request(params, window)
    if rules is None:
        raise ValueError("rules are required")

    origin, bounds, (width, height) = await _query_geometry(params, window, adapter)

    placement = choose_position(params, rules, width, height, bounds=bounds, origin=origin)
    if placement is None:
        logger.warning(f"No rule pair places window {window}; leaving it in place")
        return None

    await adapter.move_window(window, placement.x, placement.y)
    logger.info(f"Placed window {window} at ({placement.x}, {placement.y}) using {placement.describe()}")

    await _notify(
        params,
        window,
        placement.x,
        placement.y,
        placement.offset_x,
        placement.offset_y,
        placement.primary_rule,
        placement.secondary_rule,
    )
    return placement
