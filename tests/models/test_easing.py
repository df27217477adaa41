"""
Tests for easing curves, the cubic-bezier solver and parse_easing.
"""

import pytest

from keyframe_engine.models import (
    EASE_IN,
    EASE_IN_OUT,
    EASE_OUT,
    LINEAR,
    CubicBezierEasing,
    CustomEasing,
    EasingName,
    NamedEasing,
    parse_easing,
    reverse_easing,
)

NAMED = [LINEAR, EASE_IN, EASE_OUT, EASE_IN_OUT]


class TestNamedEasing:

    @pytest.mark.parametrize("easing", NAMED)
    def test_endpoints(self, easing):
        assert easing.apply(0.0) == 0.0
        assert easing.apply(1.0) == 1.0

    @pytest.mark.parametrize("easing", NAMED)
    def test_monotonic(self, easing):
        samples = [easing.apply(i / 20) for i in range(21)]
        assert samples == sorted(samples)

    def test_curve_values(self):
        assert LINEAR.apply(0.3) == pytest.approx(0.3)
        assert EASE_IN.apply(0.5) == pytest.approx(0.25)
        assert EASE_OUT.apply(0.5) == pytest.approx(0.75)
        assert EASE_IN_OUT.apply(0.25) == pytest.approx(0.125)
        assert EASE_IN_OUT.apply(0.5) == pytest.approx(0.5)

    def test_callable(self):
        assert EASE_IN(0.5) == pytest.approx(0.25)


class TestCubicBezierEasing:

    def test_endpoints_exact(self):
        easing = CubicBezierEasing(0.42, 0.0, 0.58, 1.0)
        assert easing.apply(0.0) == 0.0
        assert easing.apply(1.0) == 1.0

    def test_linear_control_points(self):
        """cubic-bezier(1/3, 1/3, 2/3, 2/3) is the identity curve."""
        easing = CubicBezierEasing(1 / 3, 1 / 3, 2 / 3, 2 / 3)
        for p in (0.1, 0.25, 0.5, 0.9):
            assert easing.apply(p) == pytest.approx(p, abs=1e-6)

    def test_symmetric_curve_midpoint(self):
        easing = CubicBezierEasing(0.42, 0.0, 0.58, 1.0)
        assert easing.apply(0.5) == pytest.approx(0.5, abs=1e-6)

    def test_ease_curve_is_monotonic(self):
        easing = CubicBezierEasing(0.25, 0.1, 0.25, 1.0)
        samples = [easing.apply(i / 50) for i in range(51)]
        assert samples == sorted(samples)

    def test_solver_finds_parameter(self):
        easing = CubicBezierEasing(0.9, 0.0, 0.1, 1.0)
        for p in (0.05, 0.3, 0.5, 0.7, 0.95):
            s = easing.solve_parameter(p)
            assert easing._curve(s, easing.x1, easing.x2) == pytest.approx(p, abs=1e-4)

    def test_solver_settings_are_per_instance(self):
        default = CubicBezierEasing(0.25, 0.1, 0.25, 1.0)
        coarse = default.with_solver(max_iterations=2, tolerance=1e-3)

        assert coarse.max_iterations == 2
        assert default.max_iterations == 16
        assert default.tolerance == 1e-7
        assert coarse == default
        assert coarse.apply(0.5) == pytest.approx(default.apply(0.5), abs=0.05)

    def test_overshoot_allowed_on_y(self):
        easing = CubicBezierEasing(0.5, 1.6, 0.5, 1.6)
        assert easing.apply(0.5) > 1.0


class TestParseEasing:

    def test_passthrough(self):
        assert parse_easing(EASE_IN) is EASE_IN

    def test_enum(self):
        assert parse_easing(EasingName.EASE_OUT) == EASE_OUT

    @pytest.mark.parametrize("name", ["ease_in", "EASE_IN", "ease-in"])
    def test_name_forms(self, name):
        assert parse_easing(name) == EASE_IN

    def test_unknown_name(self):
        assert parse_easing("bounce") is None

    def test_bezier_tuple(self):
        easing = parse_easing((0.25, 0.1, 0.25, 1.0))
        assert easing == CubicBezierEasing(0.25, 0.1, 0.25, 1.0)

    def test_tagged_bezier(self):
        assert isinstance(parse_easing(("cubic_bezier", 0.1, 0.2, 0.3, 0.4)), CubicBezierEasing)

    @pytest.mark.parametrize("points", [
        (1.5, 0.0, 0.5, 1.0),
        (0.5, 0.0, -0.1, 1.0),
        (0.1, 0.2, 0.3),
        (0.1, "a", 0.3, 0.4),
    ])
    def test_invalid_bezier(self, points):
        assert parse_easing(points) is None

    def test_callable(self):
        easing = parse_easing(lambda t: t ** 3)

        assert isinstance(easing, CustomEasing)
        assert easing.apply(0.5) == pytest.approx(0.125)

    def test_tagged_custom(self):
        assert isinstance(parse_easing(("custom", lambda t: t)), CustomEasing)

    def test_callable_with_wrong_arity(self):
        assert parse_easing(lambda a, b: a) is None
        assert parse_easing(lambda: 0.5) is None

    @pytest.mark.parametrize("value", [None, 42, {"name": "linear"}])
    def test_unsupported_types(self, value):
        assert parse_easing(value) is None


class TestReverseEasing:

    def test_swaps_in_and_out(self):
        assert reverse_easing(EASE_IN) == EASE_OUT
        assert reverse_easing(EASE_OUT) == EASE_IN

    def test_others_unchanged(self):
        bezier = CubicBezierEasing(0.1, 0.2, 0.3, 0.4)
        assert reverse_easing(LINEAR) == LINEAR
        assert reverse_easing(EASE_IN_OUT) == EASE_IN_OUT
        assert reverse_easing(bezier) is bezier

    def test_named_easing_default_is_linear(self):
        assert NamedEasing() == LINEAR
