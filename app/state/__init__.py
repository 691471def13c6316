# app/state - Session state management
from .session import (
    get_editor_state,
    set_editor_state,
    dispatch,
    set_flash,
    pop_flash,
    clear_all,
)

__all__ = [
    'get_editor_state',
    'set_editor_state',
    'dispatch',
    'set_flash',
    'pop_flash',
    'clear_all',
]
