# app/components/model_viewer.py
"""
3D model viewer component using Plotly.
"""

import plotly.graph_objects as go
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from climbframe.placement import EditorState
from climbframe.viz.viz3d import create_lattice_figure


def render_3d_model(state: EditorState, height: int = 600) -> go.Figure:
    """
    Create a 3D figure of the editor state.

    Draws the structure, highlights the selected pipe and adds the
    ghost pipe while a placement is in progress.
    """
    return create_lattice_figure(
        state.structure,
        session=state.session,
        selected_pipe_id=state.selected_pipe_id,
        height=height,
    )
