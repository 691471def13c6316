# app/components/generation_inputs.py
"""
One-click generation controls: budgeted box frames and tiered scaffold.
"""

import streamlit as st
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from config import CONFIG
from services import StructureService
from state import dispatch, set_flash
from climbframe.generative import clamp_count, plan_budget
from climbframe.placement import ReplaceStructure


def _generate_frames():
    c20 = clamp_count(st.session_state.get('gen_count_20'))
    c40 = clamp_count(st.session_state.get('gen_count_40'))
    pipes, budget = StructureService.generate_frames(c20, c40)
    dispatch(ReplaceStructure(pipes=tuple(pipes)))
    if budget.boxes == 0:
        set_flash(f"Not enough pipes for a box: {budget.edge_capacity} of 12 edges.")
    else:
        set_flash(f"Built {budget.boxes} box frame(s) from {len(pipes)} pipes.")


def _generate_scaffold():
    pipes = StructureService.generate_scaffold()
    dispatch(ReplaceStructure(pipes=tuple(pipes)))
    set_flash(f"Built tiered scaffold from {len(pipes)} pipes.")


def render_generation_inputs() -> None:
    """Pipe-count inputs plus the two generate buttons."""
    col1, col2 = st.columns(2)
    with col1:
        st.number_input(
            "20 cm pipes",
            min_value=0,
            max_value=CONFIG.max_pipe_count,
            value=CONFIG.default_count_20cm,
            step=1,
            key='gen_count_20',
        )
    with col2:
        st.number_input(
            "40 cm pipes",
            min_value=0,
            max_value=CONFIG.max_pipe_count,
            value=CONFIG.default_count_40cm,
            step=1,
            key='gen_count_40',
        )

    budget = plan_budget(st.session_state.get('gen_count_20'), st.session_state.get('gen_count_40'))
    st.caption(f"Edge capacity {budget.edge_capacity} → {budget.boxes} complete box(es)")

    st.button(
        "Generate box frames",
        type='primary',
        on_click=_generate_frames,
        use_container_width=True,
        help="Replaces the current structure",
    )
    st.button(
        "Generate tiered scaffold",
        on_click=_generate_scaffold,
        use_container_width=True,
        help="Replaces the current structure",
    )
