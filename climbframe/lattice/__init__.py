# climbframe/lattice - Integer lattice geometry
"""
LATTICE: Grid-Unit Geometry for Pipe Structures
===============================================

Pure coordinate math over the 10 cm integer grid. No state.

    from climbframe.lattice import GridPoint, Direction, DIRECTIONS, end_point
"""

from .grid import (
    GridPoint,
    Direction,
    DIRECTIONS,
    AXES,
    ORIGIN,
    UNIT_M,
    PIPE_RADIUS_M,
    PIPE_LENGTHS,
    FRAME_STEP,
    parse_direction,
    point_key,
    axis_vec,
    direction_vec,
    add,
    end_point,
    snap_to_grid,
    units_to_meters,
    meters_to_units,
)

__all__ = [
    'GridPoint', 'Direction', 'DIRECTIONS', 'AXES', 'ORIGIN',
    'UNIT_M', 'PIPE_RADIUS_M', 'PIPE_LENGTHS', 'FRAME_STEP',
    'parse_direction', 'point_key', 'axis_vec', 'direction_vec',
    'add', 'end_point', 'snap_to_grid',
    'units_to_meters', 'meters_to_units',
]
