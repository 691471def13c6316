# climbframe/generative/frames.py
"""
FRAME GENERATOR: Box Frames from a Parts Budget
===============================================

PURPOSE:
--------
Given how many 20 cm and 40 cm pipes are on hand, build as many complete
cube wireframes (40 cm edges) as the budget allows.

EDGE CAPACITY:
--------------
Every box edge is 40 cm long and can be made from either

    - one 40 cm pipe, or
    - two 20 cm pipes joined at the edge midpoint (a two-way connector)

So the budget converts to a number of buildable edges:

    edge_capacity = count_40 + count_20 // 2
    boxes         = edge_capacity // 12        (12 edges per box)

Only whole boxes are built. 40 cm pipes are used first; the remaining
edges are made from 20 cm pairs.

LAYOUT:
-------
Boxes go on a near-cubic grid nx x ny x nz with

    nx = ny = ceil(cbrt(boxes))
    nz      = ceil(boxes / (nx * ny))

filled x-fastest, then y, then z. Box origins are 2 * step apart, so
neighbouring boxes never share a corner, edge or connector.

EDGE ORDER (per box, origin (x0, y0, z0)):
------------------------------------------
    bottom face (z0):        X at y0, X at y0+s, Y at x0, Y at x0+s
    top face (z0+s):         same four
    verticals (Z from z0):   (x0,y0), (x0+s,y0), (x0,y0+s), (x0+s,y0+s)

This order decides which edges get 40 cm pipes and which get 20 cm pairs,
and which edges would be left out if 20 cm stock ran short.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Tuple

from ..lattice.grid import GridPoint, FRAME_STEP, add, axis_vec
from ..model import Pipe

log = logging.getLogger(__name__)

EDGES_PER_BOX = 12
MAX_PIPE_COUNT = 2000  # per length, upper bound for user-entered counts


def clamp_count(value: Any) -> int:
    """
    Coerce a user-entered part count to a non-negative int.

    Negative, non-numeric and missing values become 0.
    """
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, number)


@dataclass(frozen=True)
class FrameBudget:
    """
    How a parts budget converts into boxes.

    Attributes:
    -----------
    count_20cm, count_40cm : int
        Available pipes (already clamped)
    edge_capacity : int
        Number of 40 cm edges the stock can form
    boxes : int
        Complete boxes that fit in the budget
    edges_40 : int
        Edges planned with a single 40 cm pipe
    edge_pairs_20 : int
        Edges planned with two 20 cm pipes
    """
    count_20cm: int
    count_40cm: int
    edge_capacity: int
    boxes: int
    edges_40: int
    edge_pairs_20: int


def plan_budget(count_20cm: Any, count_40cm: Any) -> FrameBudget:
    """Work out box count and 40/20 allocation for a budget."""
    c20 = clamp_count(count_20cm)
    c40 = clamp_count(count_40cm)
    edge_capacity = c40 + c20 // 2
    boxes = edge_capacity // EDGES_PER_BOX
    edges_needed = boxes * EDGES_PER_BOX
    edges_40 = min(c40, edges_needed)
    return FrameBudget(
        count_20cm=c20,
        count_40cm=c40,
        edge_capacity=edge_capacity,
        boxes=boxes,
        edges_40=edges_40,
        edge_pairs_20=edges_needed - edges_40,
    )


def _ceil_cbrt(n: int) -> int:
    """Smallest integer k with k**3 >= n (exact, no float cube root)."""
    k = 1
    while k * k * k < n:
        k += 1
    return k


def grid_dims(boxes: int) -> Tuple[int, int, int]:
    """Box grid (nx, ny, nz) for a number of boxes."""
    nx = _ceil_cbrt(max(1, boxes))
    ny = nx
    nz = max(1, -(-boxes // (nx * ny)))
    return nx, ny, nz


def box_origins(boxes: int, step: int = FRAME_STEP) -> List[GridPoint]:
    """Origin corners for `boxes` boxes in raster order (x fastest)."""
    nx, ny, nz = grid_dims(boxes)
    sep = step * 2
    origins = []
    for k in range(nz):
        for j in range(ny):
            for i in range(nx):
                if len(origins) >= boxes:
                    return origins
                origins.append((i * sep, j * sep, k * sep))
    return origins


def box_edges(origin: GridPoint, step: int = FRAME_STEP) -> List[Tuple[GridPoint, str]]:
    """The 12 edges of one box as (start, axis), in construction order."""
    x0, y0, z0 = origin
    s = step
    return [
        # bottom face
        ((x0, y0, z0), 'x'),
        ((x0, y0 + s, z0), 'x'),
        ((x0, y0, z0), 'y'),
        ((x0 + s, y0, z0), 'y'),
        # top face
        ((x0, y0, z0 + s), 'x'),
        ((x0, y0 + s, z0 + s), 'x'),
        ((x0, y0, z0 + s), 'y'),
        ((x0 + s, y0, z0 + s), 'y'),
        # verticals
        ((x0, y0, z0), 'z'),
        ((x0 + s, y0, z0), 'z'),
        ((x0, y0 + s, z0), 'z'),
        ((x0 + s, y0 + s, z0), 'z'),
    ]


def build_structure_by_counts(
    count_20cm: Any,
    count_40cm: Any,
    id_prefix: str = 'frame',
) -> List[Pipe]:
    """
    Build as many complete box frames as the parts budget allows.

    Parameters:
    -----------
    count_20cm : int
        Available 20 cm pipes (negative/non-numeric treated as 0)
    count_40cm : int
        Available 40 cm pipes (negative/non-numeric treated as 0)
    id_prefix : str
        Prefix for the generated pipe ids ('frame-0000', 'frame-0001', ...)

    Returns:
    --------
    List[Pipe]
        New structure (meant to replace the current one). Empty when the
        budget cannot complete a single box.

    Example:
    --------
    >>> len(build_structure_by_counts(24, 0))   # one box of 20 cm pairs
    24
    >>> len(build_structure_by_counts(0, 24))   # two boxes of 40 cm pipes
    24
    """
    budget = plan_budget(count_20cm, count_40cm)
    if budget.boxes <= 0:
        log.info(
            "Budget of %d x 20cm + %d x 40cm gives %d edges, not enough for one box",
            budget.count_20cm, budget.count_40cm, budget.edge_capacity,
        )
        return []

    step = FRAME_STEP
    half = step // 2
    edges_40 = budget.edges_40
    edge_pairs_20 = budget.edge_pairs_20
    remaining_20 = budget.count_20cm

    pipes: List[Pipe] = []

    def next_id() -> str:
        return f"{id_prefix}-{len(pipes):04d}"

    skipped = 0
    for origin in box_origins(budget.boxes, step):
        for start, axis in box_edges(origin, step):
            if edges_40 > 0:
                pipes.append(Pipe(id=next_id(), start=start, axis=axis, length_units=step))
                edges_40 -= 1
            elif edge_pairs_20 > 0 and remaining_20 >= 2:
                pipes.append(Pipe(id=next_id(), start=start, axis=axis, length_units=half))
                mid = add(start, axis_vec(axis, half))
                pipes.append(Pipe(id=next_id(), start=mid, axis=axis, length_units=half))
                edge_pairs_20 -= 1
                remaining_20 -= 2
            else:
                skipped += 1

    if skipped:
        log.warning("Ran out of pipes: %d edges left unbuilt", skipped)
    log.info("Generated %d boxes from %d pipes", budget.boxes, len(pipes))
    return pipes
