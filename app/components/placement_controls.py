# app/components/placement_controls.py
"""
Placement toolbar: length tool, anchor pick, direction, confirm/cancel,
pipe selection and delete.

Every control dispatches an event to the placement state machine through
an on_click / on_change callback, so the new state is in place before
Streamlit reruns the script.
"""

import streamlit as st
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from config import CONFIG
from state import get_editor_state, dispatch, set_flash
from climbframe.graph import node_degrees
from climbframe.lattice.grid import parse_direction
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
    can_commit,
)

_NO_SELECTION = '(none)'


def _format_point(p) -> str:
    return f"({p[0]}, {p[1]}, {p[2]})"


def _on_anchor_choice():
    label = st.session_state.get('anchor_choice')
    choices = st.session_state.get('_anchor_lookup', {})
    if label in choices:
        dispatch(SelectAnchor(point=choices[label]))


def _on_new_anchor():
    point = (
        int(st.session_state.get('new_anchor_x', 0)),
        int(st.session_state.get('new_anchor_y', 0)),
        int(st.session_state.get('new_anchor_z', 0)),
    )
    dispatch(SelectAnchor(point=point))


def _on_direction_choice():
    label = st.session_state.get('direction_choice')
    if label:
        dispatch(SetDirection(direction=parse_direction(label)))


def _on_commit():
    before = len(get_editor_state().structure)
    state = dispatch(Commit())
    if len(state.structure) == before:
        set_flash("That pipe already exists; nothing added.")


def _on_pipe_choice():
    pipe_id = st.session_state.get('pipe_choice')
    if pipe_id and pipe_id != _NO_SELECTION:
        dispatch(PickPipe(pipe_id=pipe_id))
    else:
        dispatch(PickEmpty())


def render_length_tools(state: EditorState) -> None:
    """Two tool buttons: 20 cm and 40 cm pipe."""
    active = state.session.length_units if state.session is not None else None
    cols = st.columns(len(CONFIG.length_options))
    for col, length in zip(cols, CONFIG.length_options):
        with col:
            st.button(
                f"Add {length * 10} cm pipe",
                type='primary' if active == length else 'secondary',
                use_container_width=True,
                on_click=dispatch,
                args=(SelectLength(length_units=length),),
                key=f"tool_{length}",
            )


def render_anchor_picker(state: EditorState) -> None:
    """Pick an existing connection node, or type a new lattice point."""
    degrees = node_degrees(state.structure)
    lookup = {f"{_format_point(p)}  · degree {d}": p for p, d in sorted(degrees.items())}
    st.session_state['_anchor_lookup'] = lookup

    st.selectbox(
        "Anchor",
        options=list(lookup.keys()),
        index=None,
        placeholder="Click a connection node…",
        key='anchor_choice',
        on_change=_on_anchor_choice,
    )

    with st.expander("New anchor point (grid units, 1 = 10 cm)"):
        cols = st.columns(3)
        for col, axis in zip(cols, 'xyz'):
            with col:
                st.number_input(axis.upper(), value=0, step=1, key=f"new_anchor_{axis}")
        st.button("Use this point", on_click=_on_new_anchor, use_container_width=True)


def render_direction_controls(state: EditorState) -> None:
    """Direction radio, cycle button and confirm/cancel."""
    session = state.session
    labels = [d.label for d in session.available_directions] if session else []

    if session is not None and session.anchor is not None:
        if labels:
            current = session.direction.label if session.direction else labels[0]
            st.session_state['direction_choice'] = current
            st.radio(
                "Direction",
                options=labels,
                horizontal=True,
                key='direction_choice',
                on_change=_on_direction_choice,
            )
        else:
            st.warning("No free direction at this anchor.", icon="⚠️")

    keys = CONFIG.key_labels
    cols = st.columns(3)
    with cols[0]:
        st.button(
            f"Cycle ({keys['cycle']})",
            on_click=dispatch, args=(CycleDirection(),),
            disabled=len(labels) <= 1,
            use_container_width=True,
        )
    with cols[1]:
        st.button(
            f"Confirm ({keys['commit']})",
            on_click=_on_commit,
            disabled=not can_commit(state),
            type='primary',
            use_container_width=True,
        )
    with cols[2]:
        st.button(
            f"Cancel ({keys['cancel']})",
            on_click=dispatch, args=(Cancel(),),
            disabled=session is None,
            use_container_width=True,
        )


def render_selection_controls(state: EditorState) -> None:
    """Select a pipe by id and delete it."""
    ids = [p.id for p in state.structure]
    options = [_NO_SELECTION] + ids
    current = state.selected_pipe_id if state.selected_pipe_id in ids else _NO_SELECTION
    st.session_state['pipe_choice'] = current
    st.selectbox(
        "Selected pipe",
        options=options,
        key='pipe_choice',
        on_change=_on_pipe_choice,
        disabled=state.phase != 'idle',
    )
    st.button(
        f"Delete ({CONFIG.key_labels['delete']})",
        on_click=dispatch, args=(DeleteSelected(),),
        disabled=state.selected_pipe_id is None,
        use_container_width=True,
    )
