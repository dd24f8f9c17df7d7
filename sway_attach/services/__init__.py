"""
Placement services.

Pure solvers (anchors, solver, rule_solver) plus the adapter-driven
place_window() / place_window_by_rules() and the Sway adapter.
"""

from .anchors import anchor_coordinate, anchor_point, opposite
from .adapter import WindowAdapter
from .placement import place_window, place_window_by_rules
from .rule_solver import choose_position
from .solver import clamp_axis, solve

__all__ = [
    "anchor_coordinate",
    "anchor_point",
    "opposite",
    "WindowAdapter",
    "place_window",
    "place_window_by_rules",
    "choose_position",
    "clamp_axis",
    "solve",
]
