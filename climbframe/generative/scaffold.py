# climbframe/generative/scaffold.py
"""
TIERED SCAFFOLD: A Fixed Multi-Level Climbing Frame
===================================================

PURPOSE:
--------
A ready-made decorative structure: three stacked rectangular "tiers",
each smaller and higher than the one below, tied together by six
vertical columns. No parts budget applies.

TIER LAYOUT (40 cm step, grid units):
-------------------------------------
    tier  origin (x0, y0)  height z  nodes nx x ny
    0     (0, 0)           0         7 x 6
    1     (4, 4)           8         5 x 4
    2     (8, 4)           16        3 x 3

Each tier is drawn as:
- the two X-direction perimeter runs (front and back)
- the two Y-direction perimeter runs (left and right)
- one Y-direction run through the middle column floor((nx-1)/2)
- one X-direction run through the middle row floor((ny-1)/2)

COLUMNS:
--------
Six columns rise from z=0 to (top tier z + step): the four corners of
the base tier, the midpoint of its front edge, and the midpoint of its
left edge.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..lattice.grid import GridPoint, FRAME_STEP
from ..model import Pipe

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tier:
    """
    One horizontal level of the scaffold.

    Parameters:
    -----------
    x0, y0 : int
        Corner of the tier in grid units
    z : int
        Height of the tier in grid units
    nx, ny : int
        Number of lattice nodes along X and Y (nx-1 spans along X)
    """
    x0: int
    y0: int
    z: int
    nx: int
    ny: int


DEFAULT_TIERS: Tuple[Tier, ...] = (
    Tier(x0=0, y0=0, z=0, nx=7, ny=6),
    Tier(x0=FRAME_STEP, y0=FRAME_STEP, z=FRAME_STEP * 2, nx=5, ny=4),
    Tier(x0=FRAME_STEP * 2, y0=FRAME_STEP, z=FRAME_STEP * 4, nx=3, ny=3),
)


def _tier_edges(tier: Tier, step: int) -> List[Tuple[GridPoint, str]]:
    """Perimeter plus the two mid-span runs of one tier, as (start, axis)."""
    x0, y0, z, nx, ny = tier.x0, tier.y0, tier.z, tier.nx, tier.ny
    edges = []

    # X-direction perimeter: front (y0) and back (y0 + (ny-1)*step)
    for x in range(nx - 1):
        edges.append(((x0 + x * step, y0, z), 'x'))
    for x in range(nx - 1):
        edges.append(((x0 + x * step, y0 + (ny - 1) * step, z), 'x'))

    # Y-direction perimeter: left (x0) and right (x0 + (nx-1)*step)
    for y in range(ny - 1):
        edges.append(((x0, y0 + y * step, z), 'y'))
    for y in range(ny - 1):
        edges.append(((x0 + (nx - 1) * step, y0 + y * step, z), 'y'))

    # Mid-span reinforcement, one run in each in-plane axis
    mid_x = (nx - 1) // 2
    mid_y = (ny - 1) // 2
    for y in range(ny - 1):
        edges.append(((x0 + mid_x * step, y0 + y * step, z), 'y'))
    for x in range(nx - 1):
        edges.append(((x0 + x * step, y0 + mid_y * step, z), 'x'))

    return edges


def _column_positions(base: Tier, step: int) -> List[Tuple[int, int]]:
    far_x = base.x0 + (base.nx - 1) * step
    far_y = base.y0 + (base.ny - 1) * step
    return [
        (base.x0, base.y0),
        (far_x, base.y0),
        (base.x0, far_y),
        (far_x, far_y),
        (base.x0 + ((base.nx - 1) // 2) * step, base.y0),
        (base.x0, base.y0 + ((base.ny - 1) // 2) * step),
    ]


def build_tiered_scaffold(
    tiers: Sequence[Tier] = DEFAULT_TIERS,
    step: int = FRAME_STEP,
    id_prefix: str = 'scaffold',
) -> List[Pipe]:
    """
    Generate the tiered scaffold.

    The output is fully determined by `tiers` and `step`: calling it twice
    returns equal pipe lists (ids included).

    Returns:
    --------
    List[Pipe]
        All pipes (40 cm each), tiers first, then columns
    """
    if not tiers:
        raise ValueError("Scaffold needs at least one tier")

    pipes: List[Pipe] = []

    def add(start: GridPoint, axis: str) -> None:
        pipes.append(Pipe(
            id=f"{id_prefix}-{len(pipes):04d}",
            start=start,
            axis=axis,
            length_units=step,
        ))

    for tier in tiers:
        for start, axis in _tier_edges(tier, step):
            add(start, axis)

    top_z = tiers[-1].z + step
    for cx, cy in _column_positions(tiers[0], step):
        for z in range(0, top_z, step):
            add((cx, cy, z), 'z')

    log.info("Generated tiered scaffold with %d pipes over %d tiers", len(pipes), len(tiers))
    return pipes
