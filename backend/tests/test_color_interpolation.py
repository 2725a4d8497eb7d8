import pytest

from radarmesh.core.errors import DegenerateInterpolation
from radarmesh.models import RadarFrame, RadarProduct
from radarmesh.services.product_resolver import ProductResolver
from radarmesh.services.color_interpolation import (
    interpolate_color,
    interpolation_ratio,
    neighbour_breakpoints,
    round_half_up,
)

GRAY = {0.0: (0, 0, 0), 10.0: (255, 255, 255)}


def test_exact_breakpoint_is_not_interpolated():
    colormap = {0.0: (0, 0, 0), 10.0: (255, 128, 0)}
    assert interpolate_color(10.0, colormap) == (1.0, 128 / 255, 0.0)


def test_midpoint_interpolation():
    assert interpolate_color(5.0, GRAY) == (0.5, 0.5, 0.5)


def test_legacy_red_channel_mixing():
    colormap = {0.0: (10, 200, 0), 10.0: (110, 200, 0)}
    # rojo: round(10 + (110 - 200) * 0.5) = -35
    assert interpolate_color(5.0, colormap, mode="legacy") == (-0.14, 0.78, 0.0)
    assert interpolate_color(5.0, colormap, mode="corrected") == (0.24, 0.78, 0.0)


def test_channels_rounded_half_up_then_two_decimals():
    colormap = {0.0: (0, 0, 0), 4.0: (1, 3, 5)}
    # 0.5, 1.5, 2.5 -> 1, 2, 3
    assert interpolate_color(2.0, colormap) == (round(1 / 255, 2), round(2 / 255, 2), round(3 / 255, 2))


def test_out_of_range_uses_nearest_breakpoint():
    colormap = {0.0: (0, 0, 0), 10.0: (255, 128, 0)}
    assert interpolate_color(20.0, colormap) == (1.0, 128 / 255, 0.0)
    assert interpolate_color(-5.0, colormap) == (0.0, 0.0, 0.0)


def test_empty_colormap_is_black():
    assert interpolate_color(42.0, {}) == (0.0, 0.0, 0.0)


def test_negative_breakpoints():
    product = RadarProduct(colormap={10: [0, 0, 0], -10: [200, 100, 50], 0: [100, 100, 100]})
    color = interpolate_color(-5.0, product.colormap, product.breakpoints, mode="corrected")
    assert color == (0.59, 0.39, 0.29)


def test_neighbour_breakpoints():
    keys = (-10.0, 0.0, 10.0)
    assert neighbour_breakpoints(3.0, keys) == (0.0, 10.0)
    assert neighbour_breakpoints(-20.0, keys) == (-10.0, -10.0)
    assert neighbour_breakpoints(20.0, keys) == (10.0, 10.0)


def test_zero_width_span_is_degenerate():
    with pytest.raises(DegenerateInterpolation):
        interpolation_ratio(5.0, 3.0, 3.0)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(127.5) == 128


def test_legacy_mode_can_leave_unit_range():
    product = ProductResolver().resolve(RadarFrame(product_name="Reflectivity"))
    legacy = interpolate_color(12.0, product.colormap, product.breakpoints, mode="legacy")
    corrected = interpolate_color(12.0, product.colormap, product.breakpoints, mode="corrected")

    assert legacy == (-0.24, 0.37, 0.96)
    assert corrected == (0.01, 0.37, 0.96)
    assert all(0 <= c <= 1 for c in corrected)
