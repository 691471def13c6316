# app/components/parts_panel.py
"""
Parts count (bill of materials) panel component.
"""

import streamlit as st
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from climbframe.graph import PartsSummary


def render_parts_panel(summary: PartsSummary) -> None:
    """
    Render pipe and connector counts.

    Parameters:
    -----------
    summary : PartsSummary
        Counts derived from the current structure
    """
    st.subheader("Pipes")
    cols = st.columns(2)
    with cols[0]:
        st.metric("20 cm", summary.pipe_20cm)
    with cols[1]:
        st.metric("40 cm", summary.pipe_40cm)

    st.subheader("Connectors")
    cols = st.columns(3)
    with cols[0]:
        st.metric("Two-way", summary.connectors_2)
    with cols[1]:
        st.metric("Three-way", summary.connectors_3)
    with cols[2]:
        st.metric("Four-way", summary.connectors_4)

