"""
Pydantic models for attached-window placement.

- geometry.py: rectangles, insets, anchors, flip hints, coordinate spaces,
  monitors
- params.py: PlacementParams and PlacementResult
- rules.py: AttachRule and RuleSet for the priority rule solver
"""

from .geometry import (
    ANCHORS_BY_NAME,
    BOTTOM,
    BOTTOM_LEFT,
    BOTTOM_RIGHT,
    CENTER,
    FLIP_LEFT_RIGHT,
    FLIP_TOP_BOTTOM,
    LEFT,
    NO_HINTS,
    RIGHT,
    ROOT_SPACE,
    TOP,
    TOP_LEFT,
    TOP_RIGHT,
    Anchor,
    AnchorFlags,
    CoordinateSpace,
    FlipHints,
    HorizontalAnchor,
    Monitor,
    Rectangle,
    Screen,
    ShadowInsets,
    VerticalAnchor,
)
from .params import PlacementParams, PlacementResult
from .rules import AttachRule, Border, RulePlacement, RuleSet

__all__ = [
    "ANCHORS_BY_NAME",
    "BOTTOM",
    "BOTTOM_LEFT",
    "BOTTOM_RIGHT",
    "CENTER",
    "FLIP_LEFT_RIGHT",
    "FLIP_TOP_BOTTOM",
    "LEFT",
    "NO_HINTS",
    "RIGHT",
    "ROOT_SPACE",
    "TOP",
    "TOP_LEFT",
    "TOP_RIGHT",
    "Anchor",
    "AnchorFlags",
    "AttachRule",
    "Border",
    "CoordinateSpace",
    "FlipHints",
    "HorizontalAnchor",
    "Monitor",
    "PlacementParams",
    "PlacementResult",
    "Rectangle",
    "RulePlacement",
    "RuleSet",
    "Screen",
    "ShadowInsets",
    "VerticalAnchor",
]
