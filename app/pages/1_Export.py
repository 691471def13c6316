"""
Export Page - Snapshot, parts list and model data
"""

import streamlit as st
import sys
from datetime import datetime
from pathlib import Path

# Add app directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from config import CONFIG
from state import get_editor_state
from services import ExportService, StructureService

st.set_page_config(page_title="Export", layout="wide")

st.title("Export")
st.markdown("Download a snapshot, the parts list and model data.")

state = get_editor_state()
structure = state.structure

if not structure:
    st.warning("The structure is empty.")
    st.page_link("main.py", label="Back to the editor", icon="➡️")
    st.stop()

summary = StructureService.summary(structure)

# Summary
st.subheader("Parts")
col1, col2 = st.columns(2)
with col1:
    st.markdown("**Pipes**")
    st.write(f"20 cm: {summary.pipe_20cm}")
    st.write(f"40 cm: {summary.pipe_40cm}")
with col2:
    st.markdown("**Connectors**")
    st.write(f"Two-way: {summary.connectors_2}")
    st.write(f"Three-way: {summary.connectors_3}")
    st.write(f"Four-way: {summary.connectors_4}")

st.divider()

# Snapshot
st.subheader("Snapshot (PNG)")
now = datetime.now()
png = ExportService.generate_snapshot(
    structure,
    title=CONFIG.snapshot_title,
    now=now,
    width_px=CONFIG.snapshot_width_px,
    height_px=CONFIG.snapshot_height_px,
    dpi=CONFIG.snapshot_dpi,
)
if png is not None:
    st.image(png, use_container_width=True)
    st.download_button(
        label="Download Snapshot",
        data=png,
        file_name=ExportService.snapshot_filename(now),
        mime="image/png",
    )

st.divider()

col1, col2 = st.columns(2)

with col1:
    st.markdown("### Parts List (CSV)")
    bom_csv = ExportService.generate_bom_csv(structure)
    st.download_button(
        label="Download Parts List",
        data=bom_csv,
        file_name="climbframe_parts.csv",
        mime="text/csv",
    )

    st.markdown("### Cut List (CSV)")
    cut_csv = ExportService.generate_cutlist_csv(structure)
    st.download_button(
        label="Download Cut List",
        data=cut_csv,
        file_name="climbframe_cutlist.csv",
        mime="text/csv",
    )
    with st.expander("Preview CSV"):
        st.code(cut_csv[:1000] + "..." if len(cut_csv) > 1000 else cut_csv)

with col2:
    st.markdown("### Model Data (JSON)")
    json_content = ExportService.generate_model_json(structure)
    st.download_button(
        label="Download Model JSON",
        data=json_content,
        file_name="climbframe_model.json",
        mime="application/json",
    )
    with st.expander("Preview JSON"):
        st.code(json_content[:1500] + "..." if len(json_content) > 1500 else json_content, language="json")

st.divider()

st.markdown("### Summary (Text)")
summary_text = ExportService.generate_summary_text(summary)
st.download_button(
    label="Download Summary",
    data=summary_text,
    file_name="climbframe_summary.txt",
    mime="text/plain",
)
st.code(summary_text)
