"""sway-attach

Attached-window placement for Sway/i3.

This package positions a window next to an attachment rectangle (a menu
item, a button, the cursor) so that it stays on the monitor work area:
- Anchor + flip solver (solve) and priority rule solver (choose_position)
- PlacementParams with owned position-callback context
- Sway IPC adapter that queries outputs and moves containers

License: MIT
Version: 1.0.0
"""

__version__ = "1.0.0"

from .errors import MissingAttachRectError, PlacementError, WindowNotFoundError
from .models import (
    Anchor,
    CoordinateSpace,
    FlipHints,
    PlacementParams,
    PlacementResult,
    Rectangle,
    ShadowInsets,
)
from .services import choose_position, place_window, place_window_by_rules, solve

__all__ = [
    "Anchor",
    "CoordinateSpace",
    "FlipHints",
    "MissingAttachRectError",
    "PlacementError",
    "PlacementParams",
    "PlacementResult",
    "Rectangle",
    "ShadowInsets",
    "WindowNotFoundError",
    "choose_position",
    "place_window",
    "place_window_by_rules",
    "solve",
]
