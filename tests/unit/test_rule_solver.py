"""
Unit tests for the priority rule solver.

Tests rule parsing, best/good classification, margins and padding,
and the sequential clamp into bounds.
"""

import logging

import pytest

from sway_attach.errors import MissingAttachRectError
from sway_attach.models.geometry import CoordinateSpace, Rectangle
from sway_attach.models.params import PlacementParams
from sway_attach.models.rules import AttachRule, Border, RulePlacement, RuleSet
from sway_attach.services.rule_solver import X, Y, aligned_value, choose_position, rule_axis

MENU_ITEM = Rectangle(x=100, y=100, width=50, height=20)
BOUNDS = Rectangle(x=0, y=0, width=400, height=300)

BELOW = AttachRule.parse("y:max:min")
ABOVE = AttachRule.parse("y:min:max")
LEFT_ALIGNED = AttachRule.parse("x:min:min")
RIGHT_ALIGNED = AttachRule.parse("x:max:max")


@pytest.fixture
def params():
    params = PlacementParams()
    params.set_attach_rect(MENU_ITEM)
    return params


@pytest.fixture
def dropdown_rules():
    return RuleSet(primary=[BELOW, ABOVE], secondary=[LEFT_ALIGNED, RIGHT_ALIGNED])


class TestAttachRule:
    """Test rule parsing and description."""

    def test_parse_bits(self):
        assert int(BELOW) == 50
        assert int(LEFT_ALIGNED) == 37
        assert BELOW == AttachRule.AXIS_Y | AttachRule.RECT_MAX | AttachRule.WINDOW_MIN

    def test_parse_is_case_insensitive(self):
        assert AttachRule.parse("Y : MAX : MIN") == BELOW

    def test_parse_invalid(self):
        with pytest.raises(ValueError, match="expected <axis>:<rect>:<window>"):
            AttachRule.parse("y:max")
        with pytest.raises(ValueError, match="unknown component"):
            AttachRule.parse("z:max:min")

    def test_describe(self):
        assert BELOW.describe() == "y:max:min"
        assert RIGHT_ALIGNED.describe() == "x:max:max"

    def test_components(self):
        assert BELOW.axis == AttachRule.AXIS_Y
        assert BELOW.rect_point == AttachRule.RECT_MAX
        assert BELOW.window_point == AttachRule.WINDOW_MIN

    def test_rule_axis(self):
        assert rule_axis(BELOW) == Y
        assert rule_axis(LEFT_ALIGNED) == X
        assert rule_axis(AttachRule.RECT_MAX | AttachRule.WINDOW_MIN) is None
        assert rule_axis(AttachRule.AXIS_X | AttachRule.AXIS_Y | AttachRule.RECT_MIN) is None


class TestRuleSet:
    def test_add_rules_appends_in_priority_order(self):
        rules = RuleSet()
        rules.add_primary_rules(BELOW)
        rules.add_primary_rules(ABOVE)
        rules.add_secondary_rules(LEFT_ALIGNED, RIGHT_ALIGNED)

        assert rules.primary == [BELOW, ABOVE]
        assert rules.secondary == [LEFT_ALIGNED, RIGHT_ALIGNED]

    def test_placement_describe(self):
        placement = RulePlacement(
            x=0, y=0, primary_rule=int(BELOW), secondary_rule=int(LEFT_ALIGNED)
        )
        assert placement.describe() == "y:max:min then x:min:min"


class TestAlignedValue:
    """Test margins only apply outside the rectangle."""

    def test_margins_apply_below(self, params):
        rules = RuleSet(
            attach_margin=Border(bottom=5),
            window_margin=Border(top=3),
            window_padding=Border(top=2),
        )
        assert aligned_value(BELOW, params, rules, 200, 100, (0, 0)) == 120 + 5 + 3 - 2

    def test_margins_apply_above(self, params):
        rules = RuleSet(
            attach_margin=Border(top=5),
            window_margin=Border(bottom=3),
            window_padding=Border(bottom=2),
        )
        assert aligned_value(ABOVE, params, rules, 200, 100, (0, 0)) == 100 - 5 - 100 - 3 + 2

    def test_margins_ignored_inside(self, params):
        rules = RuleSet(attach_margin=Border(left=5), window_margin=Border(left=3))
        assert aligned_value(LEFT_ALIGNED, params, rules, 200, 100, (0, 0)) == 100

    def test_padding_applies_inside(self, params):
        rules = RuleSet(window_padding=Border(left=4))
        assert aligned_value(LEFT_ALIGNED, params, rules, 200, 100, (0, 0)) == 96

    def test_mid_points(self, params):
        rule = AttachRule.parse("x:mid:mid")
        assert aligned_value(rule, params, RuleSet(), 200, 100, (0, 0)) == 125 - 100

    def test_origin_and_offset(self, params):
        params.set_offset(4, 6)
        assert aligned_value(BELOW, params, RuleSet(), 200, 100, (10, 20)) == 20 + 120 + 6


class TestChoosePosition:
    """Test the best/good search and the final clamp."""

    def test_first_rules_fit(self, params, dropdown_rules):
        placement = choose_position(params, dropdown_rules, 200, 100, bounds=BOUNDS)

        assert (placement.x, placement.y) == (100, 120)
        assert (placement.offset_x, placement.offset_y) == (0, 0)
        assert placement.primary_rule == int(BELOW)
        assert placement.secondary_rule == int(LEFT_ALIGNED)

    def test_falls_back_to_satisfiable_rule(self, params, dropdown_rules):
        """Test a drop-down that does not fit below opens above"""
        short = Rectangle(x=0, y=0, width=400, height=150)

        placement = choose_position(params, dropdown_rules, 200, 100, bounds=short)

        assert (placement.x, placement.y) == (100, 0)
        assert placement.primary_rule == int(ABOVE)

    def test_nothing_fits_uses_first_rule_and_clamps(self, params, dropdown_rules):
        tiny = Rectangle(x=0, y=0, width=400, height=110)

        placement = choose_position(params, dropdown_rules, 200, 120, bounds=tiny)

        assert placement.primary_rule == int(BELOW)
        assert (placement.x, placement.y) == (100, 0)
        assert placement.offset_y == -120

    def test_no_bounds_uses_first_rules(self, params, dropdown_rules):
        placement = choose_position(params, dropdown_rules, 2000, 2000)

        assert (placement.x, placement.y) == (100, 120)
        assert (placement.offset_x, placement.offset_y) == (0, 0)

    def test_clamp_pushes_left_before_right(self, params):
        """Test overflow on both sides ends at the low edge"""
        rules = RuleSet(primary=[BELOW], secondary=[LEFT_ALIGNED])

        placement = choose_position(params, rules, 500, 100, bounds=BOUNDS)

        assert placement.x == 0
        assert placement.offset_x == -100

    def test_primary_on_x_axis(self, params):
        """Test a submenu-style primary rule on the x axis"""
        rules = RuleSet(
            primary=[AttachRule.parse("x:max:min")],
            secondary=[AttachRule.parse("y:min:min")],
        )

        placement = choose_position(params, rules, 200, 100, bounds=BOUNDS)

        assert (placement.x, placement.y) == (150, 100)

    def test_margins(self, params, dropdown_rules):
        rules = dropdown_rules.model_copy(update={
            "attach_margin": Border(bottom=5),
            "window_margin": Border(top=3),
            "window_padding": Border(top=2),
        })

        placement = choose_position(params, rules, 200, 100, bounds=BOUNDS)

        assert (placement.x, placement.y) == (100, 126)

    def test_offset(self, params, dropdown_rules):
        params.set_offset(4, 6)

        placement = choose_position(params, dropdown_rules, 200, 100, bounds=BOUNDS)

        assert (placement.x, placement.y) == (104, 126)

    def test_same_axis_lists_have_no_solution(self, params):
        rules = RuleSet(primary=[BELOW], secondary=[ABOVE])

        assert choose_position(params, rules, 200, 100, bounds=BOUNDS) is None

    def test_invalid_axis_skipped_with_warning(self, params, dropdown_rules, caplog):
        rules = dropdown_rules.model_copy(update={
            "primary": [int(AttachRule.RECT_MAX | AttachRule.WINDOW_MIN)] + dropdown_rules.primary,
        })

        with caplog.at_level(logging.WARNING):
            placement = choose_position(params, rules, 200, 100, bounds=BOUNDS)

        assert "Invalid constraint axis: 0x30" in caplog.text
        assert placement.primary_rule == int(BELOW)

    def test_missing_attach_rect(self, dropdown_rules):
        with pytest.raises(MissingAttachRectError):
            choose_position(PlacementParams(), dropdown_rules, 200, 100)

    def test_none_params(self, dropdown_rules):
        with pytest.raises(ValueError):
            choose_position(None, dropdown_rules, 200, 100)

    def test_container_space_requires_origin(self, dropdown_rules):
        params = PlacementParams()
        params.set_attach_rect(MENU_ITEM, CoordinateSpace(con_id=7))

        with pytest.raises(ValueError, match="bound to container 7"):
            choose_position(params, dropdown_rules, 200, 100)
