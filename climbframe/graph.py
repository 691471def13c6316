# climbframe/graph.py
"""
CONNECTION GRAPH: Node Degrees, Connector Types and Parts Counts
================================================================

PURPOSE:
--------
Pipes meet at lattice points. The number of pipe ends that land on a
point (its DEGREE) decides which connector has to be bought for it:

    degree 0 or 1   free anchor (no connector needed)
    degree 2        two-way connector (straight or elbow)
    degree 3        three-way connector (tee)
    degree >= 4     four-way connector (cross or higher)

Everything here is a pure function of the pipe list. Nothing is cached:
the structure is small and recomputing from scratch on every change is
what guarantees the connector counts always match the pipes.

THE ORIGIN SEED:
----------------
An empty structure still needs somewhere to start building, so the
origin (0, 0, 0) is always present in the degree map (degree 0 if no
pipe touches it).
"""

import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Iterable, List, Set

from .lattice.grid import GridPoint, Direction, ORIGIN
from .model import Pipe

log = logging.getLogger(__name__)


class ConnectorKind(Enum):
    """Connector classification by node degree."""
    FREE = 'free'
    TWO_WAY = 'two_way'
    THREE_WAY = 'three_way'
    FOUR_WAY = 'four_way'


def classify_degree(degree: int) -> ConnectorKind:
    """Map a node degree onto its connector type."""
    if degree >= 4:
        return ConnectorKind.FOUR_WAY
    if degree == 3:
        return ConnectorKind.THREE_WAY
    if degree == 2:
        return ConnectorKind.TWO_WAY
    return ConnectorKind.FREE


@dataclass(frozen=True)
class ConnectionNode:
    """A lattice point that is an endpoint of at least one pipe (or the origin)."""
    point: GridPoint
    degree: int

    @property
    def kind(self) -> ConnectorKind:
        return classify_degree(self.degree)


def node_degrees(structure: Iterable[Pipe]) -> Dict[GridPoint, int]:
    """
    Count pipe endpoints per lattice point.

    Each pipe adds 1 at its start and 1 at its end. The origin is always
    present so placement can begin on an empty structure.

    Returns:
    --------
    Dict[GridPoint, int]
        Degree per point, in first-seen order with the origin last if
        no pipe touches it
    """
    degrees: Dict[GridPoint, int] = {}
    for pipe in structure:
        for point in (pipe.start, pipe.end):
            degrees[point] = degrees.get(point, 0) + 1
    degrees.setdefault(ORIGIN, 0)
    return degrees


def connection_nodes(structure: Iterable[Pipe]) -> List[ConnectionNode]:
    """All connection nodes, sorted by coordinate for stable output."""
    degrees = node_degrees(structure)
    return [ConnectionNode(point=p, degree=degrees[p]) for p in sorted(degrees)]


def existing_nodes(structure: Iterable[Pipe]) -> List[GridPoint]:
    """Distinct pipe endpoints (without the origin seed), sorted."""
    points: Set[GridPoint] = set()
    for pipe in structure:
        points.add(pipe.start)
        points.add(pipe.end)
    return sorted(points)


def occupied_directions(structure: Iterable[Pipe], point: GridPoint) -> Set[Direction]:
    """
    Signed directions at `point` that already have a pipe leaving them.

    A pipe starting at the point occupies +axis; a pipe ending at the
    point occupies -axis. Occupancy is per signed direction: a pipe on
    +X leaves -X free.
    """
    occupied: Set[Direction] = set()
    for pipe in structure:
        if pipe.start == point:
            occupied.add(Direction(pipe.axis, 1))
        elif pipe.end == point:
            occupied.add(Direction(pipe.axis, -1))
    return occupied


@dataclass
class PartsSummary:
    """
    Bill of materials derived from a structure.

    Attributes:
    -----------
    pipe_20cm, pipe_40cm : int
        Pipe counts by length
    connectors_2, connectors_3, connectors_4 : int
        Nodes of degree 2, 3 and >= 4
    free_anchors : int
        Nodes of degree 0 or 1 (need no connector)
    """
    pipe_20cm: int = 0
    pipe_40cm: int = 0
    connectors_2: int = 0
    connectors_3: int = 0
    connectors_4: int = 0
    free_anchors: int = 0

    @property
    def total_pipes(self) -> int:
        return self.pipe_20cm + self.pipe_40cm

    @property
    def total_connectors(self) -> int:
        return self.connectors_2 + self.connectors_3 + self.connectors_4

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def parts_summary(structure: Iterable[Pipe]) -> PartsSummary:
    """Count pipes by length and nodes by connector type."""
    pipes = list(structure)
    summary = PartsSummary(
        pipe_20cm=sum(1 for p in pipes if p.length_units == 2),
        pipe_40cm=sum(1 for p in pipes if p.length_units == 4),
    )
    for degree in node_degrees(pipes).values():
        kind = classify_degree(degree)
        if kind is ConnectorKind.TWO_WAY:
            summary.connectors_2 += 1
        elif kind is ConnectorKind.THREE_WAY:
            summary.connectors_3 += 1
        elif kind is ConnectorKind.FOUR_WAY:
            summary.connectors_4 += 1
        else:
            summary.free_anchors += 1
    log.debug("Parts summary for %d pipes: %s", len(pipes), summary)
    return summary
