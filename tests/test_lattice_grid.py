# File: tests/test_lattice_grid.py
"""
Test the lattice helpers: directions, point keys, snapping and units.
"""

import pytest
import numpy as np

from climbframe.lattice.grid import (
    Direction,
    DIRECTIONS,
    parse_direction,
    point_key,
    axis_vec,
    direction_vec,
    end_point,
    snap_to_grid,
    units_to_meters,
    meters_to_units,
)


def test_direction_order():
    """
    Directions are enumerated X+, X-, Y+, Y-, Z+, Z-.
    """
    assert [d.label for d in DIRECTIONS] == ['X+', 'X-', 'Y+', 'Y-', 'Z+', 'Z-']
    print("✓ Direction order is fixed")


def test_direction_validation_and_opposite():
    assert Direction('y', 1).opposite() == Direction('y', -1)

    with pytest.raises(ValueError):
        Direction('w', 1)
    with pytest.raises(ValueError):
        Direction('x', 0)


def test_parse_direction_round_trip():
    """
    Every label parses back to the same direction, case-insensitively.
    """
    for d in DIRECTIONS:
        assert parse_direction(d.label) == d
    assert parse_direction('z-') == Direction('z', -1)

    with pytest.raises(ValueError):
        parse_direction('X')


def test_point_key_normalizes():
    """
    Lists, tuples and numpy rows with equal coordinates give equal keys.
    """
    assert point_key([1, 2, 3]) == (1, 2, 3)
    assert point_key(np.array([1, 2, 3])) == (1, 2, 3)
    assert point_key((1.0, 2.0, 3.0)) == (1, 2, 3)
    assert all(type(c) is int for c in point_key(np.array([4, 5, 6])))

    with pytest.raises(ValueError):
        point_key((1, 2))
    with pytest.raises(ValueError):
        point_key((0.5, 0, 0))

    print("✓ Point keys are canonical")


def test_vectors():
    assert axis_vec('x', 4) == (4, 0, 0)
    assert axis_vec('z', -2) == (0, 0, -2)
    assert direction_vec(Direction('y', -1), 4) == (0, -4, 0)
    assert end_point((1, 1, 1), 'z', 2) == (1, 1, 3)

    with pytest.raises(ValueError):
        axis_vec('q', 1)


def test_snap_to_grid():
    """
    Snapping rounds to the nearest lattice point, halves rounding up.
    """
    assert snap_to_grid((3.1, 1.9, -0.2)) == (3, 2, 0)
    assert snap_to_grid((0.5, -0.5, 2.5)) == (1, 0, 3)


def test_unit_conversion():
    """
    One grid unit is 10 cm.
    """
    assert units_to_meters((4, 0, 2)) == pytest.approx((0.4, 0.0, 0.2))
    assert meters_to_units((0.4, 0.0, 0.2)) == pytest.approx((4.0, 0.0, 2.0))


def test_package_exports_resolve():
    """
    Every name the lattice package advertises is importable.
    """
    import climbframe.lattice as lattice

    for name in lattice.__all__:
        assert hasattr(lattice, name), name
