"""Tests for bounded ranges and the mappings between them."""

import pytest
from panocam.core.range_operations import (
    DomainError,
    MinMaxRange,
    generate_range_transform,
    map_position_and_width_to_range,
)


class TestRangeConstruction:
    """Ranges must reject invalid bounds instead of coercing them."""

    def test_rejects_max_not_greater_than_min(self):
        """min >= max is a construction error."""
        with pytest.raises(DomainError):
            MinMaxRange(1, 0)
        with pytest.raises(DomainError):
            MinMaxRange(5, 5)

    def test_domain_error_is_a_value_error(self):
        """Callers catching ValueError still see range errors."""
        assert issubclass(DomainError, ValueError)

    @pytest.mark.parametrize("circular", [False, True])
    @pytest.mark.parametrize("current", [11, 0])
    def test_rejects_initial_current_outside_range(self, circular, current):
        """An explicit starting value must lie within the bounds."""
        with pytest.raises(DomainError):
            MinMaxRange(1, 10, circular, current)

    @pytest.mark.parametrize("circular", [False, True])
    def test_defaults_to_min_without_current(self, circular):
        """Unspecified current starts at min."""
        assert MinMaxRange(22, 500, circular).current == 22

    @pytest.mark.parametrize("circular", [False, True])
    def test_can_set_initial_current(self, circular):
        """Explicit current is kept."""
        assert MinMaxRange(22, 500, circular, 33).current == 33

    def test_bounds_may_equal_current(self):
        """Bounds are inclusive."""
        assert MinMaxRange(0, 360, True, 360).current == 360
        assert MinMaxRange(-90, 90, False, -90).current == -90


class TestClampedRange:
    """Non-circular ranges clamp assignments."""

    def test_values_inside_range_are_kept(self):
        """In-range values pass through unchanged."""
        r = MinMaxRange(22, 500, False, 33)

        r.current = 44
        assert r.current == 44

        r.current = 440
        assert r.current == 440

    def test_values_outside_range_are_clamped(self):
        """Out-of-range values stick to the nearest bound."""
        r = MinMaxRange(22, 500, False, 33)

        r.current = 501
        assert r.current == 500

        r.current = 21
        assert r.current == 22

    @pytest.mark.parametrize("bounds", [(0, 1), (-90, 90), (22, 500), (-3.5, -1.25)])
    @pytest.mark.parametrize("value", [-1e9, -100, -1, 0, 0.5, 45, 100, 1e9])
    def test_result_always_within_bounds(self, bounds, value):
        """Any assignment lands in [min, max], unchanged when already inside."""
        lo, hi = bounds
        r = MinMaxRange(lo, hi, False)

        r.current = value

        assert lo <= r.current <= hi
        if lo <= value <= hi:
            assert r.current == value


class TestCircularRange:
    """Circular ranges wrap once around the opposite bound."""

    def test_values_wrap_around(self):
        """Values below min come back from max and vice versa."""
        r = MinMaxRange(0, 360, True, 33)

        r.current = 44
        assert r.current == 44

        r.current = -90
        assert r.current == 270

        r.current = 361
        assert r.current == 1

    @pytest.mark.parametrize("k", [0.5, 1, 90, 359, 360])
    def test_single_wrap_within_one_span(self, k):
        """min - k gives max - k, max + k gives min + k, for k up to one span."""
        r = MinMaxRange(0, 360, True)

        r.current = r.min - k
        assert r.current == pytest.approx(r.max - k)

        r.current = r.max + k
        assert r.current == pytest.approx(r.min + k)

    def test_overshoot_beyond_one_span_wraps_only_once(self):
        """Values more than one span out are not fully normalized."""
        r = MinMaxRange(0, 360, True, 33)

        r.current = 720
        assert r.current == 360

        r.current = 1000
        assert r.current == 640

        r.current = -400
        assert r.current == -40

    def test_copy_is_independent(self):
        """Copies share bounds and policy but not state."""
        r = MinMaxRange(0, 360, True, 90)
        clone = r.copy()

        clone.current = 370

        assert clone.current == 10
        assert clone.circular is True
        assert r.current == 90

    def test_span(self):
        assert MinMaxRange(0, 360, True).span == 360
        assert MinMaxRange(-90, 90).span == 180
        assert MinMaxRange(100.5, 600.5).span == 500


class TestRangeTransform:
    """Transforms map proportional positions between ranges."""

    def test_maps_values_between_ranges(self):
        """Midpoints and bounds map onto each other."""
        transform = generate_range_transform(MinMaxRange(0, 100), MinMaxRange(0, 10))

        assert transform(0) == 0
        assert transform(50) == 5
        assert transform(100) == 10

        transform2 = generate_range_transform(MinMaxRange(0, 360), MinMaxRange(-180, 180))

        assert transform2(0) == -180
        assert transform2(180) == 0
        assert transform2(360) == 180

    @pytest.mark.parametrize("a_bounds, b_bounds", [
        ((0, 1), (0, 360)),
        ((-457.3, 502.7), (0, 360)),
        ((230, 770), (-90, 90)),
        ((-200, -100), (5, 6)),
    ])
    def test_bounds_map_to_bounds(self, a_bounds, b_bounds):
        """A.min maps to B.min and A.max to B.max."""
        a = MinMaxRange(*a_bounds)
        b = MinMaxRange(*b_bounds)
        transform = generate_range_transform(a, b)

        assert transform(a.min) == pytest.approx(b.min)
        assert transform(a.max) == pytest.approx(b.max)

    def test_output_is_not_clamped(self):
        """Values outside the source range extrapolate linearly."""
        transform = generate_range_transform(MinMaxRange(0, 100), MinMaxRange(0, 10))

        assert transform(200) == 20
        assert transform(-100) == -10


class TestMapPositionAndWidthToRange:
    """Drag ranges anchor the pointer at the anchor range's proportional position."""

    @pytest.mark.parametrize("i_range, j_current, j_width, expected_min, expected_max", [
        (MinMaxRange(0, 100, False, 20), 80, 360, 8, 368),
        (MinMaxRange(0, 100, True, 20), 50, 360, -22, 338),
        (MinMaxRange(-100, 100, False, -20), -10, 360, -154, 206),
        (MinMaxRange(-200, -100, True, -150), 20, 360, -160, 200),
    ])
    def test_maps_position_and_width(self, i_range, j_current, j_width, expected_min, expected_max):
        """Derived bounds follow the anchor's proportional position."""
        j_range = map_position_and_width_to_range(i_range, j_current, j_width)

        assert j_range.current == j_current
        assert j_range.circular == i_range.circular
        assert j_range.min == pytest.approx(expected_min)
        assert j_range.max == pytest.approx(expected_max)

    @pytest.mark.parametrize("circular", [False, True])
    @pytest.mark.parametrize("anchor_current", [0, 45, 180, 359, 360])
    def test_current_and_policy_always_follow(self, circular, anchor_current):
        """Result current equals the pointer position and keeps the anchor's policy."""
        anchor = MinMaxRange(0, 360, circular, anchor_current)

        j_range = map_position_and_width_to_range(anchor, 500, 960)

        assert j_range.current == 500
        assert j_range.circular is circular
        assert j_range.max - j_range.min == pytest.approx(960)

    def test_round_trip_returns_anchor_value(self):
        """Transforming the pointer position back gives the anchor's current value."""
        anchor = MinMaxRange(-90, 90, False, 30)
        j_range = map_position_and_width_to_range(anchor, 400, 540)

        back = generate_range_transform(j_range, anchor)(j_range.current)

        assert back == pytest.approx(30)
