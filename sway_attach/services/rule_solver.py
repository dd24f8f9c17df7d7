"""
Priority Rule Position Solver

Alternative to the anchor + flip solver. The caller lists primary rules and
secondary rules in descending priority; the solver looks for a primary rule
on one axis and a secondary rule on the other axis that can both be
satisfied, then slides the result back on-screen.

Search order:
1. Classify each rule per list and axis: the first satisfiable rule is
   "best", the first rule that is not taken as best is "good"
2. Try primary best, then primary good; within each, secondary best then
   good; within each pair, the primary rule on its preferred axis first
3. Clamp the chosen position into bounds
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..errors import MissingAttachRectError
from ..models.geometry import Rectangle
from ..models.params import PlacementParams
from ..models.rules import (
    AXIS_MASK,
    RECT_MASK,
    WINDOW_MASK,
    AttachRule,
    RulePlacement,
    RuleSet,
)

logger = logging.getLogger(__name__)

X = 0
Y = 1
BEST = 0
GOOD = 1


def rule_axis(rule: int) -> Optional[int]:
    """X, Y, or None when the axis bits are missing or ambiguous."""
    axis = rule & AXIS_MASK
    if axis == AttachRule.AXIS_X:
        return X
    if axis == AttachRule.AXIS_Y:
        return Y
    return None


def aligned_value(
    rule: int,
    params: PlacementParams,
    rules: RuleSet,
    width: int,
    height: int,
    origin: Tuple[int, int],
) -> int:
    """
    Window coordinate that satisfies `rule` on its axis, ignoring bounds.

    Margins apply only when the window sits outside the rectangle (rectangle
    min edge against window max edge, or the reverse). Padding always
    applies, so the window's contents rather than its edge line up.
    """
    rect = params.attach_rect
    rect_point = rule & RECT_MASK
    window_point = rule & WINDOW_MASK
    outside = (
        (rect_point == AttachRule.RECT_MIN and window_point == AttachRule.WINDOW_MAX)
        or (rect_point == AttachRule.RECT_MAX and window_point == AttachRule.WINDOW_MIN)
    )

    if rule_axis(rule) == X:
        start, length, size = rect.x, rect.width, width
        base = origin[0]
        attach_before, attach_after = rules.attach_margin.left, rules.attach_margin.right
        margin_before, margin_after = rules.window_margin.left, rules.window_margin.right
        padding_before, padding_after = rules.window_padding.left, rules.window_padding.right
        offset = params.offset[0]
    else:
        start, length, size = rect.y, rect.height, height
        base = origin[1]
        attach_before, attach_after = rules.attach_margin.top, rules.attach_margin.bottom
        margin_before, margin_after = rules.window_margin.top, rules.window_margin.bottom
        padding_before, padding_after = rules.window_padding.top, rules.window_padding.bottom
        offset = params.offset[1]

    value = base
    if rect_point == AttachRule.RECT_MIN:
        value += start
        if outside:
            value -= attach_before
    elif rect_point == AttachRule.RECT_MID:
        value += start + length // 2
    elif rect_point == AttachRule.RECT_MAX:
        value += start + length
        if outside:
            value += attach_after

    if window_point == AttachRule.WINDOW_MIN:
        if outside:
            value += margin_before
        value -= padding_before
    elif window_point == AttachRule.WINDOW_MID:
        value -= size // 2
    elif window_point == AttachRule.WINDOW_MAX:
        value -= size
        if outside:
            value -= margin_after
        value += padding_after

    return value + offset


def _within(value: int, size: int, axis: int, bounds: Optional[Rectangle]) -> bool:
    if bounds is None:
        return True
    if axis == X:
        return bounds.x <= value and value + size <= bounds.right
    return bounds.y <= value and value + size <= bounds.bottom


class _Tiers:
    """Best/good rule per axis for one rule list."""

    def __init__(self) -> None:
        self.rules: List[List[Optional[int]]] = [[None, None], [None, None]]
        self.values: List[List[int]] = [[0, 0], [0, 0]]
        self.preferred_axis: List[int] = [X, X]


def _classify(
    rule_list: List[int],
    params: PlacementParams,
    rules: RuleSet,
    width: int,
    height: int,
    bounds: Optional[Rectangle],
    origin: Tuple[int, int],
) -> _Tiers:
    tiers = _Tiers()

    for rule in rule_list:
        axis = rule_axis(rule)
        if axis is None:
            logger.warning(f"Invalid constraint axis: 0x{int(rule):X}")
            continue

        other = Y if axis == X else X
        value = aligned_value(rule, params, rules, width, height, origin)
        size = width if axis == X else height
        satisfiable = _within(value, size, axis, bounds)

        if satisfiable and tiers.rules[BEST][axis] is None:
            tiers.rules[BEST][axis] = rule
            tiers.values[BEST][axis] = value
            if tiers.rules[BEST][other] is not None:
                break
            tiers.preferred_axis[BEST] = axis
        elif tiers.rules[GOOD][axis] is None:
            tiers.rules[GOOD][axis] = rule
            tiers.values[GOOD][axis] = value
            if tiers.rules[GOOD][other] is None:
                tiers.preferred_axis[GOOD] = axis

    return tiers


def choose_position(
    params: PlacementParams,
    rules: RuleSet,
    width: int,
    height: int,
    bounds: Optional[Rectangle] = None,
    origin: Optional[Tuple[int, int]] = None,
) -> Optional[RulePlacement]:
    """
    Find the best position for a window using priority rules.

    Args:
        params: Placement parameters (attachment rectangle and offset)
        rules: Primary/secondary rules, margins and padding
        width: Window width
        height: Window height
        bounds: Monitor work area (default: unbounded)
        origin: Absolute origin of the attachment coordinate space

    Returns:
        RulePlacement, or None if no primary/secondary pair covers both axes

    Raises:
        ValueError: If params is None, or the coordinate space is bound to
            a container and no origin is given
        MissingAttachRectError: If params has no attachment rectangle
    """
    if params is None:
        raise ValueError("params is required")
    if not params.has_attach_rect():
        raise MissingAttachRectError()
    if origin is None:
        origin = params.coordinate_space.absolute_origin()

    primary = _classify(rules.primary, params, rules, width, height, bounds, origin)
    secondary = _classify(rules.secondary, params, rules, width, height, bounds, origin)

    chosen: Optional[Dict[str, int]] = None
    for i in (BEST, GOOD):
        preferred = primary.preferred_axis[i]
        for j in (BEST, GOOD):
            for primary_axis in (preferred, Y if preferred == X else X):
                secondary_axis = Y if primary_axis == X else X
                primary_rule = primary.rules[i][primary_axis]
                secondary_rule = secondary.rules[j][secondary_axis]
                if primary_rule is None or secondary_rule is None:
                    continue

                values = {
                    primary_axis: primary.values[i][primary_axis],
                    secondary_axis: secondary.values[j][secondary_axis],
                }
                chosen = {
                    "x": values[X],
                    "y": values[Y],
                    "primary_rule": int(primary_rule),
                    "secondary_rule": int(secondary_rule),
                }
                break
            if chosen:
                break
        if chosen:
            break

    if chosen is None:
        logger.debug("No satisfiable primary/secondary rule pair")
        return None

    x, y = chosen["x"], chosen["y"]
    offset_x = offset_y = 0
    if bounds is not None:
        if x + width > bounds.right:
            offset_x += bounds.right - width - x
            x = bounds.right - width
        if x < bounds.x:
            offset_x += bounds.x - x
            x = bounds.x
        if y + height > bounds.bottom:
            offset_y += bounds.bottom - height - y
            y = bounds.bottom - height
        if y < bounds.y:
            offset_y += bounds.y - y
            y = bounds.y

    placement = RulePlacement(
        x=x,
        y=y,
        offset_x=offset_x,
        offset_y=offset_y,
        primary_rule=chosen["primary_rule"],
        secondary_rule=chosen["secondary_rule"],
    )
    logger.debug(f"Rule placement ({x}, {y}) using {placement.describe()}")
    return placement
