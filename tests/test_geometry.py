import math

import pytest

from mindmap.core import geometry


@pytest.mark.parametrize("level,slots", [(1, 8), (2, 16), (3, 24), (7, 24)])
def test_slot_count_per_level(level, slots):
    assert geometry.slot_count(level) == slots


@pytest.mark.parametrize("level,expected", [(1, 225.0), (2, 180.0), (3, 150.0), (9, 150.0)])
def test_distance_per_level(level, expected):
    assert geometry.distance(level) == pytest.approx(expected)


def test_angle_is_ordinal_fraction_of_turn():
    assert geometry.angle(0, 1) == 0.0
    assert geometry.angle(1, 1) == pytest.approx(math.pi / 4)
    assert geometry.angle(4, 2) == pytest.approx(math.pi / 2)
    assert geometry.angle(6, 3) == pytest.approx(math.pi / 2)


def test_angles_alias_past_slot_count():
    # Sibling 8 at level 1 points the same way as sibling 0
    first = geometry.polar_offset(geometry.angle(0, 1), 1.0)
    ninth = geometry.polar_offset(geometry.angle(8, 1), 1.0)
    assert ninth[0] == pytest.approx(first[0])
    assert ninth[1] == pytest.approx(first[1], abs=1e-9)


def test_child_position_offsets_from_parent():
    x, y = geometry.child_position(10.0, 20.0, 2, 1)
    # Third child at level 1 points straight down (+y) at distance 225
    assert x == pytest.approx(10.0)
    assert y == pytest.approx(245.0)
