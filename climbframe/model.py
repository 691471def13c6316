# climbframe/model.py
"""
MODEL DEFINITIONS: Pipe and Structure
=====================================

PURPOSE:
--------
A climbing frame is nothing more than an ordered collection of straight,
axis-aligned pipes:

- Pipe: a rigid segment from `start` along +axis for `length_units`
- Structure: a tuple of Pipes (the single source of truth)

Connectors are NOT stored. They are derived from pipe endpoints every
time they are needed (see graph.py), so they can never drift from the
pipes they join.

CANONICAL FORM:
---------------
Pipes are always stored in the positive direction. A pipe drawn from
(4, 0, 0) towards -X with length 4 is stored as start=(0, 0, 0), axis='x'.
Two pipes describe the same physical segment exactly when their start
and end points coincide.
"""

import uuid
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .lattice.grid import GridPoint, PIPE_LENGTHS, AXES, end_point, point_key


@dataclass(frozen=True)
class Pipe:
    """
    A straight pipe on the lattice.

    Parameters:
    -----------
    id : str
        Unique identifier (uuid hex for placed pipes, a numbered
        prefix for generated ones)
    start : GridPoint
        Lower endpoint in grid units
    axis : str
        'x', 'y' or 'z'
    length_units : int
        2 (20 cm) or 4 (40 cm)

    Examples:
    ---------
    >>> p = Pipe(id='a', start=(0, 0, 0), axis='z', length_units=4)
    >>> p.end
    (0, 0, 4)
    >>> p.length_m
    0.4
    """
    id: str
    start: GridPoint
    axis: str
    length_units: int

    def __post_init__(self):
        object.__setattr__(self, 'start', point_key(self.start))
        if self.axis not in AXES:
            raise ValueError(f"Unknown axis: {self.axis}")
        if self.length_units not in PIPE_LENGTHS:
            raise ValueError(
                f"Unsupported pipe length {self.length_units} "
                f"(expected one of {PIPE_LENGTHS})"
            )

    @property
    def end(self) -> GridPoint:
        return end_point(self.start, self.axis, self.length_units)

    @property
    def endpoints(self) -> Tuple[GridPoint, GridPoint]:
        return (self.start, self.end)

    @property
    def length_m(self) -> float:
        return self.length_units / 10

    @property
    def length_cm(self) -> int:
        return self.length_units * 10


Structure = Tuple[Pipe, ...]


def new_pipe_id() -> str:
    """Fresh random id for an interactively placed pipe."""
    return uuid.uuid4().hex


def make_pipe(
    start: GridPoint,
    axis: str,
    length_units: int,
    pipe_id: Optional[str] = None,
) -> Pipe:
    """Build a Pipe, generating a random id when none is given."""
    return Pipe(
        id=pipe_id if pipe_id is not None else new_pipe_id(),
        start=start,
        axis=axis,
        length_units=length_units,
    )


def same_segment(a: Pipe, b: Pipe) -> bool:
    """True when two pipes cover the same two endpoints."""
    return a.start == b.start and a.end == b.end


def contains_segment(structure: Iterable[Pipe], pipe: Pipe) -> bool:
    return any(same_segment(p, pipe) for p in structure)


def add_pipe(structure: Structure, pipe: Pipe) -> Structure:
    """
    Append a pipe unless the same segment is already present.

    Duplicate segments are discarded silently, so adding the same
    pipe twice leaves exactly one copy in the structure.
    """
    if contains_segment(structure, pipe):
        return structure
    return tuple(structure) + (pipe,)


def remove_pipe(structure: Structure, pipe_id: str) -> Structure:
    """Remove the pipe with the given id (no-op if absent)."""
    return tuple(p for p in structure if p.id != pipe_id)


def find_pipe(structure: Iterable[Pipe], pipe_id: str) -> Optional[Pipe]:
    for p in structure:
        if p.id == pipe_id:
            return p
    return None
