# climbframe/placement.py
"""
PLACEMENT STATE MACHINE: Interactive Pipe Placement
===================================================

PURPOSE:
--------
The editor lets a user add pipes one at a time:

    1. pick a pipe length (20 cm or 40 cm tool)
    2. click an anchor point
    3. choose one of the free directions leaving that point
    4. confirm (or cancel)

STATES:
-------
    idle  --SelectAnchor-->  anchor_selected  --Commit-->  idle
                                              --Cancel-->  idle

The whole editor context lives in one immutable EditorState. Every user
action is an Event, and `transition(state, event)` returns the next
state without touching the old one. A UI stores the returned state and
redraws from it; nothing else holds mutable editor state.

DIRECTION AVAILABILITY:
-----------------------
At each anchor, a signed direction is taken if a pipe already leaves the
point that way. A pipe stored as start=(0,0,0), axis='x' occupies X+ at
(0,0,0) and X- at its end. Only the six signed directions are considered,
listed in the fixed order X+, X-, Y+, Y-, Z+, Z-.

NORMALIZATION:
--------------
A pipe drawn in a negative direction is stored from its far end, so a
segment has one stored form regardless of which end was clicked first.
Committing a segment that already exists is silently ignored.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Sequence, Tuple, Union

from .lattice.grid import (
    GridPoint,
    Direction,
    DIRECTIONS,
    PIPE_LENGTHS,
    add,
    direction_vec,
    axis_vec,
    point_key,
)
from .model import Pipe, Structure, add_pipe, remove_pipe, find_pipe, make_pipe
from .graph import occupied_directions

log = logging.getLogger(__name__)

DEFAULT_LENGTH_UNITS = 2

PHASE_IDLE = 'idle'
PHASE_ANCHOR_SELECTED = 'anchor_selected'


# =============================================================================
# State
# =============================================================================

@dataclass(frozen=True)
class PlacementSession:
    """
    Transient placement context.

    Parameters:
    -----------
    length_units : int
        Length of the pipe being placed (2 or 4)
    anchor : Optional[GridPoint]
        Chosen start point, None until the user clicks one
    direction : Optional[Direction]
        Chosen signed direction, None if no direction is free
    available_directions : Tuple[Direction, ...]
        Free directions at the anchor, in enumeration order
    """
    length_units: int = DEFAULT_LENGTH_UNITS
    anchor: Optional[GridPoint] = None
    direction: Optional[Direction] = None
    available_directions: Tuple[Direction, ...] = ()


@dataclass(frozen=True)
class EditorState:
    """Everything the editor knows: the pipes, the placement session, the selection."""
    structure: Structure = ()
    session: Optional[PlacementSession] = None
    selected_pipe_id: Optional[str] = None

    @property
    def phase(self) -> str:
        if self.session is not None and self.session.anchor is not None:
            return PHASE_ANCHOR_SELECTED
        return PHASE_IDLE


# =============================================================================
# Events
# =============================================================================

@dataclass(frozen=True)
class SelectLength:
    length_units: int


@dataclass(frozen=True)
class SelectAnchor:
    point: GridPoint


@dataclass(frozen=True)
class CycleDirection:
    pass


@dataclass(frozen=True)
class SetDirection:
    direction: Direction


@dataclass(frozen=True)
class Commit:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class PickPipe:
    pipe_id: str


@dataclass(frozen=True)
class PickEmpty:
    pass


@dataclass(frozen=True)
class DeleteSelected:
    pass


@dataclass(frozen=True)
class ReplaceStructure:
    pipes: Tuple[Pipe, ...] = field(default_factory=tuple)


Event = Union[
    SelectLength, SelectAnchor, CycleDirection, SetDirection, Commit,
    Cancel, PickPipe, PickEmpty, DeleteSelected, ReplaceStructure,
]


# Keyboard shortcuts -> events
KEY_BINDINGS: Dict[str, Event] = {
    'r': CycleDirection(),
    'R': CycleDirection(),
    'Enter': Commit(),
    'Escape': Cancel(),
    'Delete': DeleteSelected(),
    'Backspace': DeleteSelected(),
}


def event_for_key(key: str) -> Optional[Event]:
    """Event bound to a key name, or None for unbound keys."""
    return KEY_BINDINGS.get(key)


# =============================================================================
# Queries
# =============================================================================

def available_directions(structure: Structure, anchor: GridPoint) -> Tuple[Direction, ...]:
    """Free signed directions at `anchor`, in X+, X-, Y+, Y-, Z+, Z- order."""
    occupied = occupied_directions(structure, anchor)
    return tuple(d for d in DIRECTIONS if d not in occupied)


def can_commit(state: EditorState) -> bool:
    session = state.session
    return session is not None and session.anchor is not None and session.direction is not None


def normalized_pipe(session: PlacementSession, pipe_id: Optional[str] = None) -> Pipe:
    """
    The pipe a commit would store, in positive-direction form.

    For a negative direction the pipe starts `length_units` back from the
    anchor, so the anchor becomes its end point.
    """
    if session.anchor is None or session.direction is None:
        raise ValueError("Session needs an anchor and a direction")
    direction = session.direction
    if direction.sign == 1:
        start = session.anchor
    else:
        start = add(session.anchor, axis_vec(direction.axis, -session.length_units))
    return make_pipe(start, direction.axis, session.length_units, pipe_id=pipe_id)


def ghost_pipe(session: Optional[PlacementSession]) -> Optional[Tuple[GridPoint, GridPoint]]:
    """
    Preview segment (anchor, far end) for the current session.

    None unless both an anchor and a direction are chosen.
    """
    if session is None or session.anchor is None or session.direction is None:
        return None
    far = add(session.anchor, direction_vec(session.direction, session.length_units))
    return (session.anchor, far)


# =============================================================================
# Transitions
# =============================================================================

def _select_length(state: EditorState, event: SelectLength) -> EditorState:
    if event.length_units not in PIPE_LENGTHS:
        log.debug("Ignoring unsupported length %r", event.length_units)
        return state
    if state.session is None:
        return replace(state, session=PlacementSession(length_units=event.length_units))
    return replace(state, session=replace(state.session, length_units=event.length_units))


def _select_anchor(state: EditorState, event: SelectAnchor) -> EditorState:
    anchor = point_key(event.point)
    dirs = available_directions(state.structure, anchor)
    length = state.session.length_units if state.session is not None else DEFAULT_LENGTH_UNITS
    session = PlacementSession(
        length_units=length,
        anchor=anchor,
        direction=dirs[0] if dirs else None,
        available_directions=dirs,
    )
    if not dirs:
        log.info("Anchor %s has no free direction; commit disabled", anchor)
    return replace(state, session=session, selected_pipe_id=None)


def _cycle_direction(state: EditorState) -> EditorState:
    session = state.session
    if session is None or len(session.available_directions) <= 1:
        return state
    dirs = session.available_directions
    try:
        idx = dirs.index(session.direction)
    except ValueError:
        idx = -1
    return replace(state, session=replace(session, direction=dirs[(idx + 1) % len(dirs)]))


def _set_direction(state: EditorState, event: SetDirection) -> EditorState:
    session = state.session
    if session is None or event.direction not in session.available_directions:
        return state
    return replace(state, session=replace(session, direction=event.direction))


def _commit(state: EditorState) -> EditorState:
    if not can_commit(state):
        return state
    pipe = normalized_pipe(state.session)
    structure = add_pipe(state.structure, pipe)
    if structure is state.structure:
        log.debug("Discarding duplicate segment %s -> %s", pipe.start, pipe.end)
    else:
        log.debug("Committed pipe %s %s%d from %s", pipe.id, pipe.axis, pipe.length_units, pipe.start)
    return replace(state, structure=structure, session=None)


def _pick_pipe(state: EditorState, event: PickPipe) -> EditorState:
    if state.phase == PHASE_ANCHOR_SELECTED:
        return _commit(state)
    if find_pipe(state.structure, event.pipe_id) is None:
        return replace(state, selected_pipe_id=None)
    return replace(state, selected_pipe_id=event.pipe_id)


def _pick_empty(state: EditorState) -> EditorState:
    if state.phase == PHASE_ANCHOR_SELECTED:
        return _commit(state)
    return replace(state, selected_pipe_id=None)


def _delete_selected(state: EditorState) -> EditorState:
    if state.selected_pipe_id is None:
        return state
    log.debug("Deleting pipe %s", state.selected_pipe_id)
    return replace(
        state,
        structure=remove_pipe(state.structure, state.selected_pipe_id),
        selected_pipe_id=None,
    )


def transition(state: EditorState, event: Event) -> EditorState:
    """
    Apply one user event and return the next editor state.

    Parameters:
    -----------
    state : EditorState
        Current editor state (never modified)
    event : Event
        One of the event dataclasses defined in this module

    Returns:
    --------
    EditorState
        The next state. Invalid or inapplicable events return `state`
        itself, so `transition(s, e) is s` means "nothing happened".
    """
    if isinstance(event, SelectLength):
        return _select_length(state, event)
    if isinstance(event, SelectAnchor):
        return _select_anchor(state, event)
    if isinstance(event, CycleDirection):
        return _cycle_direction(state)
    if isinstance(event, SetDirection):
        return _set_direction(state, event)
    if isinstance(event, Commit):
        return _commit(state)
    if isinstance(event, Cancel):
        return state if state.session is None else replace(state, session=None)
    if isinstance(event, PickPipe):
        return _pick_pipe(state, event)
    if isinstance(event, PickEmpty):
        return _pick_empty(state)
    if isinstance(event, DeleteSelected):
        return _delete_selected(state)
    if isinstance(event, ReplaceStructure):
        log.info("Replacing structure with %d generated pipes", len(event.pipes))
        return EditorState(structure=tuple(event.pipes))
    raise TypeError(f"Unknown event: {event!r}")


def run_events(state: EditorState, events: Sequence[Event]) -> EditorState:
    """Apply a sequence of events in order."""
    for event in events:
        state = transition(state, event)
    return state
