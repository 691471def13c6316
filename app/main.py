# app/main.py
"""
ClimbFrame 3D Builder - Interactive Editor

Place 20 cm and 40 cm pipes on a 10 cm lattice, or generate a whole
frame in one click. The parts list updates with every change.

Run with:
    streamlit run app/main.py
"""

import logging
import streamlit as st
import sys
from pathlib import Path

# Add app directory to path
sys.path.insert(0, str(Path(__file__).parent))
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import CONFIG
from services import StructureService
from state import get_editor_state, dispatch, pop_flash, clear_all
from components import (
    render_3d_model,
    render_parts_panel,
    render_length_tools,
    render_anchor_picker,
    render_direction_controls,
    render_selection_controls,
    render_generation_inputs,
)
from climbframe.placement import event_for_key

logging.basicConfig(
    level=getattr(logging, CONFIG.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Page configuration - must be first Streamlit command
st.set_page_config(
    page_title=CONFIG.app_name,
    page_icon="🧗",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .block-container {
        padding-top: 1rem;
        padding-bottom: 1rem;
    }
    [data-testid="stMetricValue"] {
        font-size: 1.1rem;
    }
    .sidebar-header {
        font-size: 0.9rem;
        font-weight: 600;
        color: #666;
        text-transform: uppercase;
        letter-spacing: 0.05em;
        margin-top: 1rem;
        margin-bottom: 0.5rem;
    }
</style>
""", unsafe_allow_html=True)


def _on_key_command():
    key = st.session_state.get('key_command', '').strip()
    event = event_for_key(key)
    if event is not None:
        dispatch(event)
    st.session_state['key_command'] = ''


state = get_editor_state()


# =============================================================================
# SIDEBAR - Tools and Generators
# =============================================================================

with st.sidebar:
    st.title(f"🧗 {CONFIG.app_name}")
    st.caption(CONFIG.app_subtitle)

    st.divider()

    # -------------------------------------------------------------------------
    # PLACE A PIPE
    # -------------------------------------------------------------------------
    st.markdown('<p class="sidebar-header">📏 Place a pipe</p>', unsafe_allow_html=True)
    render_length_tools(state)
    render_anchor_picker(state)
    render_direction_controls(state)

    st.text_input(
        "Key command",
        key='key_command',
        placeholder="r, Enter, Escape, Delete",
        on_change=_on_key_command,
        help="Type a key name and press Enter",
    )

    st.divider()

    # -------------------------------------------------------------------------
    # SELECT / DELETE
    # -------------------------------------------------------------------------
    st.markdown('<p class="sidebar-header">🖱️ Selection</p>', unsafe_allow_html=True)
    render_selection_controls(state)

    st.divider()

    # -------------------------------------------------------------------------
    # GENERATE
    # -------------------------------------------------------------------------
    st.markdown('<p class="sidebar-header">⚙️ Generate</p>', unsafe_allow_html=True)
    render_generation_inputs()

    st.divider()

    if st.button("🗑️ Reset", use_container_width=True):
        clear_all()
        st.rerun()

    with st.expander("ℹ️ Help", expanded=False):
        st.markdown(f"""
        **Placing pipes:**
        1. Pick a pipe length
        2. Pick an anchor (existing node, or a new grid point)
        3. Choose or cycle the direction ({CONFIG.key_labels['cycle']})
        4. Confirm ({CONFIG.key_labels['commit']}) or cancel ({CONFIG.key_labels['cancel']})

        **Connectors:**
        - *Green*: two-way
        - *Yellow*: three-way
        - *Red*: four-way

        **Generators** replace the current structure.
        """)


# =============================================================================
# MAIN AREA - 3D View + Parts
# =============================================================================

state = get_editor_state()
flash = pop_flash()
if flash:
    st.info(flash)

col_title, col_status = st.columns([3, 1])
with col_title:
    st.title("Climbing Frame")
with col_status:
    if state.session is not None and state.session.anchor is not None:
        st.info(f"Anchor {state.session.anchor}", icon="📍")
    elif state.selected_pipe_id is not None:
        st.info(f"Selected {state.selected_pipe_id[:12]}", icon="🖱️")

col_3d, col_parts = st.columns([2, 1])

with col_3d:
    fig = render_3d_model(state, height=CONFIG.figure_height)
    st.plotly_chart(fig, use_container_width=True)

with col_parts:
    summary = StructureService.summary(state.structure)
    render_parts_panel(summary)

    st.divider()
    st.metric("Total pipes", summary.total_pipes)
    st.metric("Total connectors", summary.total_connectors)
    st.page_link("pages/1_Export.py", label="Export", icon="📥")

with st.expander("📋 Data", expanded=False):
    tab_pipes, tab_nodes = st.tabs(["Pipes", "Nodes"])
    with tab_pipes:
        st.dataframe(StructureService.pipes_table(state.structure), use_container_width=True, hide_index=True)
    with tab_nodes:
        st.dataframe(StructureService.nodes_table(state.structure), use_container_width=True, hide_index=True)
