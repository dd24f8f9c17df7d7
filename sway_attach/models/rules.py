"""
Priority Rule Models

Rule-based placement describes a window position as ordered lists of
single-axis alignment rules. Each AttachRule picks an axis, a point on the
attachment rectangle and a point on the window to line up.
"""

from enum import IntFlag

from pydantic import BaseModel, ConfigDict, Field

from .geometry import ShadowInsets

# Margins and paddings share the four-sided inset shape
Border = ShadowInsets


class AttachRule(IntFlag):
    """Single-axis alignment constraint."""

    AXIS_X = 1 << 0
    AXIS_Y = 1 << 1
    RECT_MIN = 1 << 2
    RECT_MID = 1 << 3
    RECT_MAX = 1 << 4
    WINDOW_MIN = 1 << 5
    WINDOW_MID = 1 << 6
    WINDOW_MAX = 1 << 7

    @classmethod
    def parse(cls, text: str) -> "AttachRule":
        """
        Parse '<axis>:<rect>:<window>', e.g. 'y:max:min' for a drop-down.

        Axis is x or y; rect and window points are min, mid or max.
        """
        parts = [p.strip().lower() for p in text.split(":")]
        if len(parts) != 3:
            raise ValueError(f"Invalid rule '{text}': expected <axis>:<rect>:<window>")
        axis, rect, window = parts
        try:
            return (
                _AXES[axis]
                | _RECT_POINTS[rect]
                | _WINDOW_POINTS[window]
            )
        except KeyError as e:
            raise ValueError(f"Invalid rule '{text}': unknown component {e}")

    @property
    def axis(self) -> "AttachRule":
        return self & AXIS_MASK

    @property
    def rect_point(self) -> "AttachRule":
        return self & RECT_MASK

    @property
    def window_point(self) -> "AttachRule":
        return self & WINDOW_MASK

    def describe(self) -> str:
        names = {v: k for k, v in _AXES.items()}
        rects = {v: k for k, v in _RECT_POINTS.items()}
        windows = {v: k for k, v in _WINDOW_POINTS.items()}
        return (
            f"{names.get(self.axis, '?')}:"
            f"{rects.get(self.rect_point, '?')}:"
            f"{windows.get(self.window_point, '?')}"
        )


AXIS_MASK = AttachRule.AXIS_X | AttachRule.AXIS_Y
RECT_MASK = AttachRule.RECT_MIN | AttachRule.RECT_MID | AttachRule.RECT_MAX
WINDOW_MASK = AttachRule.WINDOW_MIN | AttachRule.WINDOW_MID | AttachRule.WINDOW_MAX

_AXES = {"x": AttachRule.AXIS_X, "y": AttachRule.AXIS_Y}
_RECT_POINTS = {
    "min": AttachRule.RECT_MIN,
    "mid": AttachRule.RECT_MID,
    "max": AttachRule.RECT_MAX,
}
_WINDOW_POINTS = {
    "min": AttachRule.WINDOW_MIN,
    "mid": AttachRule.WINDOW_MID,
    "max": AttachRule.WINDOW_MAX,
}


class RuleSet(BaseModel):
    """
    Ordered rules and spacing for rule-based placement.

    Rules are stored as plain AttachRule bit values; malformed values are
    kept so the solver can skip them with a warning.
    """

    primary: list[int] = Field(
        default_factory=list, description="Rules tried first, descending priority"
    )
    secondary: list[int] = Field(
        default_factory=list, description="Rules for the other axis, descending priority"
    )
    attach_margin: Border = Field(
        default_factory=Border, description="Space to leave around the attachment rectangle"
    )
    window_margin: Border = Field(
        default_factory=Border, description="Space to leave around the window"
    )
    window_padding: Border = Field(
        default_factory=Border, description="Space between the window edge and its contents"
    )

    def add_primary_rules(self, *rules: AttachRule) -> None:
        self.primary.extend(rules)

    def add_secondary_rules(self, *rules: AttachRule) -> None:
        self.secondary.extend(rules)


class RulePlacement(BaseModel):
    """Position chosen by the rule solver and the rules that produced it."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    offset_x: int = 0
    offset_y: int = 0
    primary_rule: int
    secondary_rule: int

    def describe(self) -> str:
        return (
            f"{AttachRule(self.primary_rule).describe()} then "
            f"{AttachRule(self.secondary_rule).describe()}"
        )
