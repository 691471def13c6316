# app/state/session.py
"""
Session state management for Streamlit.

The editor's whole context is one immutable EditorState stored under a
single key. UI callbacks never edit it in place: they call `dispatch`
with an event and the state machine returns the next state.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import streamlit as st

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from climbframe.placement import EditorState, Event, transition

log = logging.getLogger(__name__)

EDITOR_KEY = 'editor_state'


# ============================================================================
# Editor State
# ============================================================================

def get_editor_state() -> EditorState:
    """Get the current editor state from session state."""
    if EDITOR_KEY not in st.session_state:
        st.session_state[EDITOR_KEY] = EditorState()
    return st.session_state[EDITOR_KEY]


def set_editor_state(state: EditorState) -> None:
    st.session_state[EDITOR_KEY] = state


def dispatch(event: Event) -> EditorState:
    """Run one event through the state machine and store the result."""
    state = transition(get_editor_state(), event)
    set_editor_state(state)
    log.debug("Dispatched %s -> phase=%s, %d pipes", type(event).__name__, state.phase, len(state.structure))
    return state


# ============================================================================
# Flash messages (shown once on the next rerun)
# ============================================================================

def set_flash(message: str) -> None:
    st.session_state['flash'] = message


def pop_flash() -> Optional[str]:
    return st.session_state.pop('flash', None)


# ============================================================================
# Utility
# ============================================================================

def clear_all() -> None:
    """Clear all session state."""
    for key in list(st.session_state.keys()):
        del st.session_state[key]
