"""Tests for extrapolation and linear/bilinear interpolation."""

import pytest
from engines.interpolation import extrapolate_linear, linear_interpolate, bilinear_interpolate


def test_extrapolate_continues_slope():
    """Border sample minus the inward step."""
    assert extrapolate_linear(100, 90) == 110
    assert extrapolate_linear(100, 120) == 80


def test_extrapolate_clamps_to_byte_range():
    """Projection is clamped to [0, 255]."""
    assert extrapolate_linear(200, 10) == 255
    assert extrapolate_linear(10, 200) == 0


def test_extrapolate_flat_region():
    assert extrapolate_linear(42, 42) == 42


def test_linear_interpolate_endpoints_and_midpoint():
    assert linear_interpolate(0.0, 10, 20) == 10
    assert linear_interpolate(1.0, 10, 20) == 20
    assert linear_interpolate(0.5, 10, 20) == pytest.approx(15.0)


def test_bilinear_corners():
    """At the unit square corners the corner values are returned."""
    assert bilinear_interpolate(0, 0, 1, 2, 3, 4) == 1
    assert bilinear_interpolate(1, 0, 1, 2, 3, 4) == 3
    assert bilinear_interpolate(0, 1, 1, 2, 3, 4) == 2
    assert bilinear_interpolate(1, 1, 1, 2, 3, 4) == 4


def test_bilinear_center_is_mean():
    assert bilinear_interpolate(0.5, 0.5, 10, 20, 30, 40) == pytest.approx(25.0)
