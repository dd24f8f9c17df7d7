"""
Anchor Geometry

Pure helpers mapping symbolic anchors onto rectangles. Every placement
strategy is built from anchor_point() and opposite().
"""

import logging
from typing import Tuple, Union

from ..models.geometry import (
    Anchor,
    HorizontalAnchor,
    Rectangle,
    VerticalAnchor,
)

logger = logging.getLogger(__name__)

AnchorLike = Union[Anchor, int]

_OPPOSITE_HORIZONTAL = {
    HorizontalAnchor.LEFT: HorizontalAnchor.RIGHT,
    HorizontalAnchor.CENTER: HorizontalAnchor.CENTER,
    HorizontalAnchor.RIGHT: HorizontalAnchor.LEFT,
}

_OPPOSITE_VERTICAL = {
    VerticalAnchor.TOP: VerticalAnchor.BOTTOM,
    VerticalAnchor.CENTER: VerticalAnchor.CENTER,
    VerticalAnchor.BOTTOM: VerticalAnchor.TOP,
}


def as_anchor(anchor: AnchorLike) -> Anchor:
    """Accept an Anchor or a raw AnchorFlags bit mask."""
    if isinstance(anchor, Anchor):
        return anchor
    return Anchor.from_flags(anchor)


def anchor_coordinate(start: int, length: int, component: Union[HorizontalAnchor, VerticalAnchor]) -> int:
    """
    Locate an anchor component along one axis of a span.

    Args:
        start: Span origin (rect.x or rect.y)
        length: Span length (rect.width or rect.height), non-negative
        component: LEFT/TOP, CENTER or RIGHT/BOTTOM

    Returns:
        start, start + length // 2, or start + length
    """
    if component in (HorizontalAnchor.LEFT, VerticalAnchor.TOP):
        return start
    if component in (HorizontalAnchor.RIGHT, VerticalAnchor.BOTTOM):
        return start + length
    return start + length // 2


def anchor_point(rect: Rectangle, anchor: AnchorLike) -> Tuple[int, int]:
    """Concrete (x, y) of `anchor` on `rect`."""
    anchor = as_anchor(anchor)
    return (
        anchor_coordinate(rect.x, rect.width, anchor.horizontal),
        anchor_coordinate(rect.y, rect.height, anchor.vertical),
    )


def opposite(anchor: AnchorLike) -> Anchor:
    """Mirror an anchor: left/right and top/bottom swap, center stays."""
    anchor = as_anchor(anchor)
    return Anchor(
        horizontal=_OPPOSITE_HORIZONTAL[anchor.horizontal],
        vertical=_OPPOSITE_VERTICAL[anchor.vertical],
    )
