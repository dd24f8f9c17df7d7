"""
Placement Geometry Models

Pydantic models for attached-window placement:
- Rectangles and shadow insets in compositor pixels
- Symbolic anchors (nine points on a rectangle) and flip hints
- Nested coordinate spaces for ancestor-relative attachment rectangles
- Monitors and screens with usable work areas
"""

import logging
from enum import Enum, IntFlag
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


def _parse_ints(text: str, count: int, what: str) -> Tuple[int, ...]:
    """Parse a comma (or 'x') separated list of integers."""
    parts = [p for p in text.replace("x", ",").split(",") if p.strip() != ""]
    if len(parts) != count:
        raise ValueError(f"Invalid {what} '{text}': expected {count} integers")
    try:
        return tuple(int(p) for p in parts)
    except ValueError:
        raise ValueError(f"Invalid {what} '{text}': values must be integers")


# ============================================================================
# Domain 1: Rectangles & Insets
# ============================================================================

class ShadowInsets(BaseModel):
    """Non-solid margin around a window's visual content (pixels)."""

    model_config = ConfigDict(frozen=True)

    top: int = Field(default=0, ge=0, description="Top shadow inset (pixels)")
    left: int = Field(default=0, ge=0, description="Left shadow inset (pixels)")
    right: int = Field(default=0, ge=0, description="Right shadow inset (pixels)")
    bottom: int = Field(default=0, ge=0, description="Bottom shadow inset (pixels)")

    @classmethod
    def parse(cls, text: str) -> "ShadowInsets":
        """Parse 't,l,r,b' (a single value applies to all four sides)."""
        if text.strip().lstrip("-").isdigit():
            v = int(text)
            return cls(top=v, left=v, right=v, bottom=v)
        top, left, right, bottom = _parse_ints(text, 4, "insets")
        return cls(top=top, left=left, right=right, bottom=bottom)

    def total_horizontal(self) -> int:
        """Total horizontal inset (left + right)."""
        return self.left + self.right

    def total_vertical(self) -> int:
        """Total vertical inset (top + bottom)."""
        return self.top + self.bottom


class Rectangle(BaseModel):
    """Axis-aligned rectangle in some coordinate space."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(default=0, description="Left edge (pixels)")
    y: int = Field(default=0, description="Top edge (pixels)")
    width: int = Field(default=0, ge=0, description="Width (pixels)")
    height: int = Field(default=0, ge=0, description="Height (pixels)")

    @classmethod
    def parse(cls, text: str) -> "Rectangle":
        """Parse 'x,y,width,height'."""
        x, y, width, height = _parse_ints(text, 4, "rectangle")
        return cls(x=x, y=y, width=width, height=height)

    @classmethod
    def from_ipc(cls, rect) -> "Rectangle":
        """Build from an i3ipc Rect (anything with x/y/width/height)."""
        return cls(x=rect.x, y=rect.y, width=rect.width, height=rect.height)

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def center_x(self) -> int:
        return self.x + (self.width // 2)

    @property
    def center_y(self) -> int:
        return self.y + (self.height // 2)

    def contains_point(self, x: int, y: int) -> bool:
        """Check if point is within this rectangle (right/bottom exclusive)."""
        return self.x <= x < self.right and self.y <= y < self.bottom

    def shrink(self, insets: ShadowInsets) -> "Rectangle":
        """Rectangle inset by `insets`; sizes never go below zero."""
        return Rectangle(
            x=self.x + insets.left,
            y=self.y + insets.top,
            width=max(0, self.width - insets.total_horizontal()),
            height=max(0, self.height - insets.total_vertical()),
        )

    def grow(self, insets: ShadowInsets) -> "Rectangle":
        """Rectangle padded outward by `insets`."""
        return Rectangle(
            x=self.x - insets.left,
            y=self.y - insets.top,
            width=self.width + insets.total_horizontal(),
            height=self.height + insets.total_vertical(),
        )


# ============================================================================
# Domain 2: Anchors & Flip Hints
# ============================================================================

class AnchorFlags(IntFlag):
    """Bit-mask encoding of anchors used by toolkit-style callers."""

    CENTER = 0
    LEFT = 1 << 0
    RIGHT = 1 << 1
    TOP = 1 << 2
    BOTTOM = 1 << 3


_ANCHOR_MASK = 0xF


class HorizontalAnchor(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VerticalAnchor(str, Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class Anchor(BaseModel):
    """A symbolic point on a rectangle: one component per axis."""

    model_config = ConfigDict(frozen=True)

    horizontal: HorizontalAnchor = Field(default=HorizontalAnchor.CENTER)
    vertical: VerticalAnchor = Field(default=VerticalAnchor.CENTER)

    @classmethod
    def from_flags(cls, bits: int) -> "Anchor":
        """
        Decode an AnchorFlags bit mask.

        An axis with both of its bits set is malformed and degrades to
        center on that axis. Bits outside the mask are ignored. Both cases
        log a warning instead of failing.
        """
        bits = int(bits)
        unknown = bits & ~_ANCHOR_MASK
        if unknown:
            logger.warning(f"Ignoring unknown anchor bits: 0x{unknown:X}")

        horizontal_bits = bits & (AnchorFlags.LEFT | AnchorFlags.RIGHT)
        if horizontal_bits == AnchorFlags.LEFT:
            horizontal = HorizontalAnchor.LEFT
        elif horizontal_bits == AnchorFlags.RIGHT:
            horizontal = HorizontalAnchor.RIGHT
        else:
            if horizontal_bits:
                logger.warning(f"Invalid horizontal anchor: 0x{bits:X}, using center")
            horizontal = HorizontalAnchor.CENTER

        vertical_bits = bits & (AnchorFlags.TOP | AnchorFlags.BOTTOM)
        if vertical_bits == AnchorFlags.TOP:
            vertical = VerticalAnchor.TOP
        elif vertical_bits == AnchorFlags.BOTTOM:
            vertical = VerticalAnchor.BOTTOM
        else:
            if vertical_bits:
                logger.warning(f"Invalid vertical anchor: 0x{bits:X}, using center")
            vertical = VerticalAnchor.CENTER

        return cls(horizontal=horizontal, vertical=vertical)

    @classmethod
    def parse(cls, text: str) -> "Anchor":
        """
        Parse an anchor name.

        Accepts 'center', a single edge ('left', 'top', ...) or a
        '<vertical>-<horizontal>' corner such as 'bottom-right'. Underscores
        and spaces work as separators too.
        """
        name = text.strip().lower().replace("_", "-").replace(" ", "-")
        if name not in ANCHORS_BY_NAME:
            valid = ", ".join(ANCHORS_BY_NAME)
            raise ValueError(f"Invalid anchor '{text}': must be one of {valid}")
        return ANCHORS_BY_NAME[name]

    @property
    def flags(self) -> AnchorFlags:
        bits = AnchorFlags.CENTER
        if self.horizontal == HorizontalAnchor.LEFT:
            bits |= AnchorFlags.LEFT
        elif self.horizontal == HorizontalAnchor.RIGHT:
            bits |= AnchorFlags.RIGHT
        if self.vertical == VerticalAnchor.TOP:
            bits |= AnchorFlags.TOP
        elif self.vertical == VerticalAnchor.BOTTOM:
            bits |= AnchorFlags.BOTTOM
        return bits

    @property
    def name(self) -> str:
        if self.vertical == VerticalAnchor.CENTER:
            return self.horizontal.value
        if self.horizontal == HorizontalAnchor.CENTER:
            return self.vertical.value
        return f"{self.vertical.value}-{self.horizontal.value}"

    def __str__(self) -> str:
        return self.name


CENTER = Anchor()
LEFT = Anchor(horizontal=HorizontalAnchor.LEFT)
RIGHT = Anchor(horizontal=HorizontalAnchor.RIGHT)
TOP = Anchor(vertical=VerticalAnchor.TOP)
BOTTOM = Anchor(vertical=VerticalAnchor.BOTTOM)
TOP_LEFT = Anchor(horizontal=HorizontalAnchor.LEFT, vertical=VerticalAnchor.TOP)
TOP_RIGHT = Anchor(horizontal=HorizontalAnchor.RIGHT, vertical=VerticalAnchor.TOP)
BOTTOM_LEFT = Anchor(horizontal=HorizontalAnchor.LEFT, vertical=VerticalAnchor.BOTTOM)
BOTTOM_RIGHT = Anchor(horizontal=HorizontalAnchor.RIGHT, vertical=VerticalAnchor.BOTTOM)

ANCHORS_BY_NAME = {
    anchor.name: anchor
    for anchor in (
        CENTER, LEFT, RIGHT, TOP, BOTTOM,
        TOP_LEFT, TOP_RIGHT, BOTTOM_LEFT, BOTTOM_RIGHT,
    )
}


NO_HINTS = 0
FLIP_LEFT_RIGHT = 1 << 0
FLIP_TOP_BOTTOM = 1 << 1


class FlipHints(BaseModel):
    """Per-axis permission to try the mirrored anchor pair on overflow."""

    model_config = ConfigDict(frozen=True)

    flip_x: bool = Field(default=False, description="Allow horizontal flip")
    flip_y: bool = Field(default=False, description="Allow vertical flip")

    @classmethod
    def from_flags(cls, bits: int) -> "FlipHints":
        return cls(
            flip_x=bool(bits & FLIP_LEFT_RIGHT),
            flip_y=bool(bits & FLIP_TOP_BOTTOM),
        )

    @classmethod
    def parse(cls, text: str) -> "FlipHints":
        """Parse 'none', 'both', 'x', 'y' or 'x,y'."""
        value = text.strip().lower()
        if value in ("", "none", "no"):
            return cls()
        if value in ("both", "all"):
            return cls(flip_x=True, flip_y=True)
        axes = {part.strip() for part in value.split(",")}
        unknown = axes - {"x", "y"}
        if unknown:
            raise ValueError(
                f"Invalid flip hints '{text}': expected none, both, x, y or x,y"
            )
        return cls(flip_x="x" in axes, flip_y="y" in axes)

    @property
    def flags(self) -> int:
        return (FLIP_LEFT_RIGHT if self.flip_x else 0) | (FLIP_TOP_BOTTOM if self.flip_y else 0)


# ============================================================================
# Domain 3: Coordinate Spaces
# ============================================================================

class CoordinateSpace(BaseModel):
    """
    A coordinate system nested in a parent coordinate system.

    (x, y) is this space's origin expressed in the parent's coordinates. A
    space without a parent is absolute. A space bound to `con_id` takes its
    absolute origin from that compositor container instead, which ends the
    walk up the chain.
    """

    model_config = ConfigDict(frozen=True)

    x: int = Field(default=0, description="Origin X relative to parent (pixels)")
    y: int = Field(default=0, description="Origin Y relative to parent (pixels)")
    parent: Optional["CoordinateSpace"] = Field(default=None, description="Enclosing space")
    con_id: Optional[int] = Field(default=None, description="Compositor container anchoring this space")

    def absolute_origin(self) -> Tuple[int, int]:
        """
        Sum relative origins up to the root space.

        Raises:
            ValueError: If a space in the chain is bound to a container,
                whose position only the compositor knows
        """
        x, y = 0, 0
        space: Optional[CoordinateSpace] = self
        while space is not None:
            if space.con_id is not None:
                raise ValueError(
                    f"Coordinate space is bound to container {space.con_id}: "
                    "pass origin= explicitly or use place_window()"
                )
            x += space.x
            y += space.y
            space = space.parent
        return x, y

    def child(self, x: int, y: int) -> "CoordinateSpace":
        """Nested space whose origin sits at (x, y) in this space."""
        return CoordinateSpace(x=x, y=y, parent=self)


ROOT_SPACE = CoordinateSpace()


# ============================================================================
# Domain 4: Monitors & Screens
# ============================================================================

class Monitor(BaseModel):
    """A physical output and the part of it windows may occupy."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Output name (e.g., HEADLESS-1, eDP-1)")
    geometry: Rectangle = Field(..., description="Full output rectangle")
    work_area: Optional[Rectangle] = Field(
        default=None, description="Usable area excluding bars (defaults to geometry)"
    )

    @property
    def usable_area(self) -> Rectangle:
        return self.work_area if self.work_area is not None else self.geometry


class Screen(BaseModel):
    """All monitors a window can be placed on."""

    monitors: list[Monitor] = Field(default_factory=list)

    def monitor_at_point(self, x: int, y: int) -> Monitor:
        """
        Find the monitor containing a point.

        Falls back to the monitor whose center is closest (Manhattan
        distance) when the point is outside every monitor.

        Raises:
            ValueError: If the screen has no monitors
        """
        for monitor in self.monitors:
            if monitor.geometry.contains_point(x, y):
                logger.debug(f"Point ({x}, {y}) is on monitor {monitor.name}")
                return monitor

        if not self.monitors:
            raise ValueError("No monitors available")

        def distance_to_monitor(monitor: Monitor) -> int:
            geometry = monitor.geometry
            return abs(x - geometry.center_x) + abs(y - geometry.center_y)

        closest = min(self.monitors, key=distance_to_monitor)
        logger.warning(
            f"Point ({x}, {y}) not within any monitor, using closest: {closest.name}"
        )
        return closest
