# climbframe/viz - Visualization Tools
"""
VIZ: Drawing, Picking and Snapshot Export
=========================================

This package provides the presentation side of the engine:
- viz3d: interactive 3D view of a structure (Plotly)
- pick: screen click -> anchor / pipe hit (numpy ray casting)
- snapshot: annotated PNG with parts counts (matplotlib)
"""

from .viz3d import create_lattice_figure, plot_lattice_3d, CONNECTOR_COLORS
from .pick import Camera, PickHit, screen_ray, pick, pick_plane_point, event_for_hit
from .snapshot import render_snapshot, snapshot_filename

__all__ = [
    'create_lattice_figure',
    'plot_lattice_3d',
    'CONNECTOR_COLORS',
    'Camera',
    'PickHit',
    'screen_ray',
    'pick',
    'pick_plane_point',
    'event_for_hit',
    'render_snapshot',
    'snapshot_filename',
]
