# climbframe/viz/viz3d.py
"""
3D VISUALIZATION: Interactive Climbing-Frame Viewer
===================================================

PURPOSE:
--------
Draw a structure with Plotly:
- pipes as line segments (selected pipe highlighted)
- connection nodes as markers colored by connector type
- the ghost pipe previewing the current placement

Coordinates are converted from grid units to metres so the axes read
in real-world sizes.

CONNECTOR COLORS:
-----------------
    free anchor (0/1)   neutral grey, translucent
    two-way (2)         green
    three-way (3)       amber
    four-way+ (>=4)     red
"""

from typing import Dict, List, Optional, Sequence

import plotly.graph_objects as go

from ..graph import ConnectorKind, connection_nodes
from ..lattice.grid import GridPoint, units_to_meters
from ..model import Pipe
from ..placement import PlacementSession, ghost_pipe

CONNECTOR_COLORS: Dict[ConnectorKind, str] = {
    ConnectorKind.FREE: '#9aa5b1',
    ConnectorKind.TWO_WAY: '#28a745',
    ConnectorKind.THREE_WAY: '#ffc107',
    ConnectorKind.FOUR_WAY: '#dc3545',
}

CONNECTOR_LABELS: Dict[ConnectorKind, str] = {
    ConnectorKind.FREE: 'Free anchor',
    ConnectorKind.TWO_WAY: 'Two-way',
    ConnectorKind.THREE_WAY: 'Three-way',
    ConnectorKind.FOUR_WAY: 'Four-way',
}

PIPE_COLOR = '#2c7be5'
SELECTED_COLOR = '#ff6b00'
GHOST_COLOR = '#6c757d'


def _segment_coords(segments: Sequence[Sequence[GridPoint]]):
    """Flatten (a, b) segments into x/y/z lists with None breaks, in metres."""
    xs, ys, zs = [], [], []
    for a, b in segments:
        am, bm = units_to_meters(a), units_to_meters(b)
        xs.extend([am[0], bm[0], None])
        ys.extend([am[1], bm[1], None])
        zs.extend([am[2], bm[2], None])
    return xs, ys, zs


def create_lattice_figure(
    structure: Sequence[Pipe],
    session: Optional[PlacementSession] = None,
    selected_pipe_id: Optional[str] = None,
    title: Optional[str] = None,
    height: int = 600,
) -> go.Figure:
    """
    Create a Plotly figure for a pipe structure.

    Parameters:
    -----------
    structure : Sequence[Pipe]
        Pipes to draw
    session : Optional[PlacementSession]
        Current placement session (draws the anchor and ghost pipe)
    selected_pipe_id : Optional[str]
        Pipe to highlight
    title : Optional[str]
        Figure title
    height : int
        Figure height in pixels

    Returns:
    --------
    go.Figure
        Each pipe trace carries its id in `customdata`; each node marker
        carries its grid point, so a front end can map clicks back to
        pick results.
    """
    fig = go.Figure()

    # =========================================================================
    # PIPES
    # =========================================================================
    plain = [p for p in structure if p.id != selected_pipe_id]
    selected = [p for p in structure if p.id == selected_pipe_id]

    for pipe in plain:
        xs, ys, zs = _segment_coords([pipe.endpoints])
        fig.add_trace(go.Scatter3d(
            x=xs, y=ys, z=zs,
            mode='lines',
            line=dict(color=PIPE_COLOR, width=8),
            name=f'Pipe {pipe.length_cm} cm',
            showlegend=False,
            customdata=[pipe.id] * len(xs),
            hovertext=f"{pipe.length_cm} cm pipe {pipe.axis.upper()} from {pipe.start}",
            hoverinfo='text',
        ))

    for pipe in selected:
        xs, ys, zs = _segment_coords([pipe.endpoints])
        fig.add_trace(go.Scatter3d(
            x=xs, y=ys, z=zs,
            mode='lines',
            line=dict(color=SELECTED_COLOR, width=12),
            name='Selected',
            customdata=[pipe.id] * len(xs),
            hovertext=f"Selected: {pipe.length_cm} cm pipe",
            hoverinfo='text',
        ))

    # =========================================================================
    # CONNECTION NODES (one trace per connector type)
    # =========================================================================
    nodes = connection_nodes(structure)
    for kind, color in CONNECTOR_COLORS.items():
        group = [n for n in nodes if n.kind is kind]
        if not group:
            continue
        coords = [units_to_meters(n.point) for n in group]
        free = kind is ConnectorKind.FREE
        fig.add_trace(go.Scatter3d(
            x=[c[0] for c in coords],
            y=[c[1] for c in coords],
            z=[c[2] for c in coords],
            mode='markers',
            marker=dict(
                size=5 if free else 7,
                color=color,
                opacity=0.6 if free else 1.0,
                line=dict(width=1, color='black'),
            ),
            name=CONNECTOR_LABELS[kind],
            customdata=[list(n.point) for n in group],
            text=[f"{n.point} degree {n.degree}" for n in group],
            hoverinfo='text',
        ))

    # =========================================================================
    # PLACEMENT PREVIEW
    # =========================================================================
    if session is not None and session.anchor is not None:
        am = units_to_meters(session.anchor)
        fig.add_trace(go.Scatter3d(
            x=[am[0]], y=[am[1]], z=[am[2]],
            mode='markers',
            marker=dict(size=10, color=GHOST_COLOR, symbol='diamond-open'),
            name='Anchor',
            hoverinfo='skip',
        ))

    ghost = ghost_pipe(session)
    if ghost is not None:
        xs, ys, zs = _segment_coords([ghost])
        fig.add_trace(go.Scatter3d(
            x=xs, y=ys, z=zs,
            mode='lines',
            line=dict(color=GHOST_COLOR, width=8, dash='dash'),
            opacity=0.6,
            name=f'Preview {session.direction.label}',
            hoverinfo='skip',
        ))

    # =========================================================================
    # LAYOUT
    # =========================================================================
    points: List[GridPoint] = [n.point for n in nodes]
    if ghost is not None:
        points.extend(ghost)
    meters = [units_to_meters(p) for p in points]
    all_x = [m[0] for m in meters]
    all_y = [m[1] for m in meters]
    all_z = [m[2] for m in meters]

    pad = 0.2
    fig.update_layout(
        title=dict(text=title, font=dict(size=16)) if title else None,
        scene=dict(
            xaxis=dict(title='X (m)', range=[min(all_x) - pad, max(all_x) + pad]),
            yaxis=dict(title='Y (m)', range=[min(all_y) - pad, max(all_y) + pad]),
            zaxis=dict(title='Z (m)', range=[min(min(all_z), 0.0) - pad, max(all_z) + pad]),
            aspectmode='data',
            camera=dict(eye=dict(x=1.5, y=1.5, z=1.0)),
        ),
        legend=dict(x=0.02, y=0.98),
        margin=dict(l=0, r=0, t=40 if title else 0, b=0),
        height=height,
    )

    return fig


def plot_lattice_3d(
    structure: Sequence[Pipe],
    title: str = "Climbing Frame",
    outpath: Optional[str] = None,
    show: bool = True,
    **kwargs
) -> go.Figure:
    """
    Create and optionally display/save a structure figure.

    Parameters:
    -----------
    outpath : Optional[str]
        If provided, save as HTML file
    show : bool
        Whether to display the figure
    **kwargs:
        Passed on to create_lattice_figure()
    """
    fig = create_lattice_figure(structure, title=title, **kwargs)

    if outpath:
        import os
        os.makedirs(os.path.dirname(outpath) if os.path.dirname(outpath) else '.', exist_ok=True)
        fig.write_html(outpath)
        print(f"3D visualization saved to: {outpath}")

    if show:
        fig.show()

    return fig
