#!/usr/bin/env python3
"""Numeric ranges with clamped or circular current values, and mappings between them."""

from typing import Callable, Optional


class DomainError(ValueError):
    """Raised when a range is constructed with invalid bounds or current value."""


class MinMaxRange:
    """
    A numeric range with a minimum, a maximum and a current value.

    Non-circular ranges clamp assignments to [min, max]. Circular ranges wrap
    an out-of-range assignment around to the opposite bound exactly once, so
    a value overshooting by more than one span is not fully normalized.
    """

    __slots__ = ('min', 'max', 'circular', '_current')

    def __init__(self, min: float, max: float, circular: bool = False, current: Optional[float] = None):
        """
        Args:
            min: Minimum value of the range
            max: Maximum value of the range, must be greater than min
            circular: Whether values wrap around at the bounds
            current: Initial value, defaults to min

        Raises:
            DomainError: If min >= max or current lies outside [min, max]
        """
        if min >= max:
            raise DomainError(f"min must be less than max, received min={min}, max={max}")
        if current is not None and not min <= current <= max:
            raise DomainError(f"current must be within range, received current={current}, min={min}, max={max}")

        self.min = min
        self.max = max
        self.circular = circular
        self._current = min
        self.current = min if current is None else current

    @property
    def current(self) -> float:
        return self._current

    @current.setter
    def current(self, value: float):
        if self.circular:
            if value < self.min:
                value = self.max - (self.min - value)
            elif value > self.max:
                value = self.min + (value - self.max)
        else:
            value = max(self.min, min(self.max, value))
        self._current = value

    @property
    def span(self) -> float:
        return self.max - self.min

    def copy(self) -> 'MinMaxRange':
        """Independent range with the same bounds, policy and current value."""
        return MinMaxRange(self.min, self.max, self.circular, self._current)

    def __repr__(self):
        kind = "circular" if self.circular else "clamped"
        return f"MinMaxRange({self.min}, {self.max}, {kind}, current={self._current})"


def generate_range_transform(i_range: MinMaxRange, j_range: MinMaxRange) -> Callable[[float], float]:
    """
    Build a function mapping a value's proportional position in one range to another.

    The output is neither clamped nor wrapped; assign it to a range's current
    value for that. Bounds are read once, when the transform is created.

    Args:
        i_range: Range to map from
        j_range: Range to map to

    Returns:
        Function mapping a value of i_range onto j_range
    """
    i_min, i_span = i_range.min, i_range.span
    j_min, j_span = j_range.min, j_range.span

    def transform(i_value: float) -> float:
        return ((i_value - i_min) / i_span) * j_span + j_min

    return transform


def map_position_and_width_to_range(i_range: MinMaxRange, j_current: float, j_width: float) -> MinMaxRange:
    """
    Derive a range of width j_width around j_current, where j_current sits at the
    same proportional position that i_range.current occupies within i_range.

    Args:
        i_range: Anchor range (e.g. the camera yaw range)
        j_current: Observed coordinate that becomes the new range's current value
        j_width: Span of the new range

    Returns:
        New range sharing the anchor's circular policy
    """
    percent = (i_range.current - i_range.min) / i_range.span
    j_min = j_current - j_width * percent
    j_max = j_min + j_width

    return MinMaxRange(j_min, j_max, i_range.circular, j_current)
