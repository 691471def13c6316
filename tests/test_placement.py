# File: tests/test_placement.py
"""
Test the placement state machine: anchor -> direction -> commit, plus
cancel, cycling, selection, deletion and key bindings.
"""

import pytest

from climbframe.lattice.grid import Direction, DIRECTIONS
from climbframe.model import Pipe
from climbframe.placement import (
    EditorState,
    SelectLength,
    SelectAnchor,
    CycleDirection,
    SetDirection,
    Commit,
    Cancel,
    PickPipe,
    PickEmpty,
    DeleteSelected,
    ReplaceStructure,
    KEY_BINDINGS,
    event_for_key,
    can_commit,
    ghost_pipe,
    transition,
    run_events,
)

X_POS = Direction('x', 1)
X_NEG = Direction('x', -1)
Z_NEG = Direction('z', -1)


def _pipe(pid, start, axis, length=4):
    return Pipe(id=pid, start=start, axis=axis, length_units=length)


def test_place_first_pipe_from_origin():
    """
    Length -> anchor -> commit on an empty grid gives one +X pipe.
    """
    state = run_events(EditorState(), [
        SelectLength(length_units=4),
        SelectAnchor(point=(0, 0, 0)),
        Commit(),
    ])

    assert len(state.structure) == 1
    pipe = state.structure[0]
    assert pipe.start == (0, 0, 0)
    assert pipe.axis == 'x'
    assert pipe.length_units == 4
    assert state.session is None
    assert state.phase == 'idle'

    print("✓ First pipe placed from the origin")


def test_anchor_defaults():
    """
    With nothing around, all six directions are free and X+ is chosen.
    Without a prior length tool the session uses 20 cm.
    """
    state = transition(EditorState(), SelectAnchor(point=[0, 0, 0]))

    assert state.phase == 'anchor_selected'
    assert state.session.available_directions == DIRECTIONS
    assert state.session.direction == X_POS
    assert state.session.length_units == 2
    assert can_commit(state)


def test_negative_direction_is_normalized():
    """
    A pipe placed toward -X is stored from its lower end, ending at the anchor.
    """
    state = run_events(EditorState(), [
        SelectLength(length_units=2),
        SelectAnchor(point=(0, 0, 0)),
        SetDirection(direction=X_NEG),
        Commit(),
    ])

    pipe = state.structure[0]
    assert pipe.start == (-2, 0, 0)
    assert pipe.end == (0, 0, 0)
    assert pipe.axis == 'x'


@pytest.mark.parametrize("direction", DIRECTIONS, ids=lambda d: d.label)
def test_occupancy_is_per_signed_direction(direction):
    """
    A pipe leaving the anchor in one direction blocks only that direction.
    """
    base = run_events(EditorState(), [
        SelectLength(length_units=4),
        SelectAnchor(point=(0, 0, 0)),
        SetDirection(direction=direction),
        Commit(),
    ])
    state = transition(base, SelectAnchor(point=(0, 0, 0)))
    available = state.session.available_directions

    assert direction not in available
    assert direction.opposite() in available
    assert len(available) == 5


def test_far_end_blocks_opposite_direction():
    """
    At the far end of a +X pipe, -X is taken and X+ is the default.
    """
    state = EditorState(structure=(_pipe('a', (0, 0, 0), 'x'),))
    state = transition(state, SelectAnchor(point=(4, 0, 0)))

    assert X_NEG not in state.session.available_directions
    assert state.session.direction == X_POS


def test_anchor_with_no_free_direction():
    """
    When all six directions are taken, nothing can be committed.
    """
    structure = (
        _pipe('xp', (0, 0, 0), 'x', 2),
        _pipe('xn', (-2, 0, 0), 'x', 2),
        _pipe('yp', (0, 0, 0), 'y', 2),
        _pipe('yn', (0, -2, 0), 'y', 2),
        _pipe('zp', (0, 0, 0), 'z', 2),
        _pipe('zn', (0, 0, -2), 'z', 2),
    )
    state = transition(EditorState(structure=structure), SelectAnchor(point=(0, 0, 0)))

    assert state.phase == 'anchor_selected'
    assert state.session.available_directions == ()
    assert state.session.direction is None
    assert not can_commit(state)
    assert transition(state, Commit()) is state
    assert transition(state, CycleDirection()) is state

    print("✓ Blocked anchor disables commit")


def test_cycle_wraps_in_fixed_order():
    state = transition(EditorState(), SelectAnchor(point=(0, 0, 0)))
    seen = [state.session.direction]
    for _ in range(6):
        state = transition(state, CycleDirection())
        seen.append(state.session.direction)

    assert seen == list(DIRECTIONS) + [X_POS]


def test_set_direction_rejects_occupied():
    state = EditorState(structure=(_pipe('a', (0, 0, 0), 'x'),))
    state = transition(state, SelectAnchor(point=(0, 0, 0)))

    assert transition(state, SetDirection(direction=X_POS)) is state
    moved = transition(state, SetDirection(direction=Z_NEG))
    assert moved.session.direction == Z_NEG


def test_select_length_keeps_anchor():
    state = transition(EditorState(), SelectAnchor(point=(0, 0, 0)))
    state = transition(state, SelectLength(length_units=4))

    assert state.session.anchor == (0, 0, 0)
    assert state.session.length_units == 4
    assert transition(state, SelectLength(length_units=3)) is state


def test_reanchor_keeps_length_tool():
    """
    Clicking a second anchor mid-session moves the anchor and recomputes
    the free directions there, but keeps the chosen length.
    """
    state = EditorState(structure=(_pipe('a', (4, 0, 0), 'x'),))
    state = run_events(state, [
        SelectLength(length_units=4),
        SelectAnchor(point=(0, 0, 0)),
        SelectAnchor(point=(8, 0, 0)),
    ])

    assert state.session.length_units == 4
    assert state.session.anchor == (8, 0, 0)
    assert X_NEG not in state.session.available_directions
    assert len(state.session.available_directions) == 5
    assert state.session.direction == X_POS


def test_ghost_pipe():
    """
    The preview runs from the anchor toward the chosen direction.
    """
    state = run_events(EditorState(), [
        SelectLength(length_units=2),
        SelectAnchor(point=(0, 0, 0)),
        SetDirection(direction=X_NEG),
    ])
    assert ghost_pipe(state.session) == ((0, 0, 0), (-2, 0, 0))
    assert ghost_pipe(None) is None


def test_cancel_keeps_structure():
    state = EditorState(structure=(_pipe('a', (0, 0, 0), 'x'),))
    anchored = transition(state, SelectAnchor(point=(4, 0, 0)))
    cancelled = transition(anchored, Cancel())

    assert cancelled.session is None
    assert cancelled.structure == state.structure
    assert transition(cancelled, Cancel()) is cancelled


def test_commit_without_anchor_is_noop():
    state = transition(EditorState(), SelectLength(length_units=4))
    assert transition(state, Commit()) is state


def test_select_and_delete():
    """
    Picking a pipe selects it; delete removes it and clears the selection.
    """
    state = EditorState(structure=(_pipe('a', (0, 0, 0), 'x'), _pipe('b', (4, 0, 0), 'x')))
    state = transition(state, PickPipe(pipe_id='a'))
    assert state.selected_pipe_id == 'a'

    state = transition(state, DeleteSelected())
    assert [p.id for p in state.structure] == ['b']
    assert state.selected_pipe_id is None
    assert transition(state, DeleteSelected()) is state

    print("✓ Select and delete work")


def test_pick_empty_clears_selection():
    state = EditorState(structure=(_pipe('a', (0, 0, 0), 'x'),), selected_pipe_id='a')
    assert transition(state, PickEmpty()).selected_pipe_id is None


def test_anchor_click_clears_selection():
    state = EditorState(structure=(_pipe('a', (0, 0, 0), 'x'),), selected_pipe_id='a')
    state = transition(state, SelectAnchor(point=(4, 0, 0)))
    assert state.selected_pipe_id is None


def test_click_elsewhere_commits_anchored_session():
    """
    While an anchor is chosen, clicking a pipe or empty space confirms.
    """
    state = EditorState(structure=(_pipe('a', (0, 0, 0), 'x'),))
    anchored = transition(state, SelectAnchor(point=(4, 0, 0)))

    via_pipe = transition(anchored, PickPipe(pipe_id='a'))
    via_empty = transition(anchored, PickEmpty())

    for result in (via_pipe, via_empty):
        assert len(result.structure) == 2
        assert result.session is None
        assert result.selected_pipe_id is None


def test_replace_structure_resets_editor():
    state = transition(EditorState(selected_pipe_id='gone'), SelectAnchor(point=(0, 0, 0)))
    pipes = [_pipe('g', (0, 0, 0), 'z')]
    state = transition(state, ReplaceStructure(pipes=tuple(pipes)))

    assert state.structure == tuple(pipes)
    assert state.session is None
    assert state.selected_pipe_id is None


def test_key_bindings():
    """
    R cycles, Enter commits, Escape cancels, Delete/Backspace delete.
    """
    assert isinstance(event_for_key('r'), CycleDirection)
    assert isinstance(event_for_key('R'), CycleDirection)
    assert isinstance(event_for_key('Enter'), Commit)
    assert isinstance(event_for_key('Escape'), Cancel)
    assert isinstance(event_for_key('Delete'), DeleteSelected)
    assert isinstance(event_for_key('Backspace'), DeleteSelected)
    assert event_for_key('q') is None
    assert len(KEY_BINDINGS) == 6


def test_unknown_event_raises():
    with pytest.raises(TypeError):
        transition(EditorState(), object())


def test_transition_does_not_mutate():
    state = EditorState()
    after = transition(state, SelectAnchor(point=(0, 0, 0)))
    assert state.session is None
    assert after is not state
