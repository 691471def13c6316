# climbframe/lattice/grid.py
"""
LATTICE GRID: Integer Coordinates for Pipe Structures
=====================================================

PURPOSE:
--------
Every pipe endpoint in a climbing frame sits on an integer lattice.
One grid unit is 10 cm, so the two stock pipe sizes are:

    20 cm pipe  ->  2 grid units
    40 cm pipe  ->  4 grid units

Working in integer units (instead of metres) means two endpoints are
"the same connector" exactly when their tuples are equal. No tolerance,
no rounding drift, and a GridPoint can be used directly as a dict key.

CONVENTIONS:
------------
    GridPoint   (x, y, z) tuple of ints, z = up
    Axis        'x', 'y' or 'z'
    Direction   (axis, sign) with sign = +1 or -1

The fixed direction order X+, X-, Y+, Y-, Z+, Z- is used wherever a
"first available direction" is needed.

USAGE:
------
    from climbframe.lattice import axis_vec, end_point, DIRECTIONS

    end = end_point((0, 0, 0), 'x', 4)      # -> (4, 0, 0)
    axis_vec('z', -2)                        # -> (0, 0, -2)
    [d.label for d in DIRECTIONS]            # ['X+', 'X-', 'Y+', ...]
"""

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

GridPoint = Tuple[int, int, int]

UNIT_M = 0.1          # metres per grid unit (10 cm)
PIPE_RADIUS_M = 0.02  # 2 cm pipe radius, used only for drawing/picking
PIPE_LENGTHS = (2, 4)  # supported pipe lengths in grid units (20 cm, 40 cm)
FRAME_STEP = 4        # generator edge length in grid units (40 cm)

AXES = ('x', 'y', 'z')
ORIGIN: GridPoint = (0, 0, 0)

_AXIS_INDEX = {'x': 0, 'y': 1, 'z': 2}


@dataclass(frozen=True)
class Direction:
    """
    A signed axis direction leaving a lattice point.

    Parameters:
    -----------
    axis : str
        'x', 'y' or 'z'
    sign : int
        +1 for the positive direction, -1 for the negative one
    """
    axis: str
    sign: int

    def __post_init__(self):
        if self.axis not in _AXIS_INDEX:
            raise ValueError(f"Unknown axis: {self.axis}")
        if self.sign not in (1, -1):
            raise ValueError(f"Direction sign must be +1 or -1, got {self.sign}")

    @property
    def label(self) -> str:
        """Short label such as 'X+' or 'Z-'."""
        return f"{self.axis.upper()}{'+' if self.sign == 1 else '-'}"

    def opposite(self) -> 'Direction':
        return Direction(self.axis, -self.sign)


# Fixed enumeration order for direction defaults and cycling
DIRECTIONS: Tuple[Direction, ...] = (
    Direction('x', 1), Direction('x', -1),
    Direction('y', 1), Direction('y', -1),
    Direction('z', 1), Direction('z', -1),
)


def parse_direction(label: str) -> Direction:
    """Parse a label like 'X+' or 'y-' back into a Direction."""
    text = label.strip()
    if len(text) != 2 or text[1] not in '+-':
        raise ValueError(f"Invalid direction label: {label!r}")
    return Direction(text[0].lower(), 1 if text[1] == '+' else -1)


def point_key(p: Sequence) -> GridPoint:
    """
    Canonical hashable key for a lattice point.

    Accepts any 3-sequence of integral values (list, tuple, numpy row)
    and returns a plain int tuple so that equal points hash equally.
    """
    if len(p) != 3:
        raise ValueError(f"Grid point needs 3 coordinates, got {len(p)}")
    key = tuple(int(c) for c in p)
    if any(k != c for k, c in zip(key, p)):
        raise ValueError(f"Grid point must have integer coordinates: {tuple(p)}")
    return key


def axis_vec(axis: str, n: int) -> GridPoint:
    """Vector of length n along an axis."""
    if axis == 'x':
        return (n, 0, 0)
    if axis == 'y':
        return (0, n, 0)
    if axis == 'z':
        return (0, 0, n)
    raise ValueError(f"Unknown axis: {axis}")


def direction_vec(direction: Direction, n: int) -> GridPoint:
    """Vector of length n along a signed direction."""
    return axis_vec(direction.axis, n * direction.sign)


def add(a: GridPoint, b: GridPoint) -> GridPoint:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def end_point(start: GridPoint, axis: str, length_units: int) -> GridPoint:
    """End of a positive-direction segment: start + axis * length."""
    return add(start, axis_vec(axis, length_units))


def snap_to_grid(p: Sequence[float]) -> GridPoint:
    """Round a point given in (fractional) grid units onto the lattice."""
    # halves round up (round() would send 0.5 to 0)
    return tuple(int(math.floor(c + 0.5)) for c in p)


def units_to_meters(p: Sequence[float]) -> Tuple[float, float, float]:
    return (p[0] * UNIT_M, p[1] * UNIT_M, p[2] * UNIT_M)


def meters_to_units(p: Sequence[float]) -> Tuple[float, float, float]:
    return (p[0] / UNIT_M, p[1] / UNIT_M, p[2] / UNIT_M)
