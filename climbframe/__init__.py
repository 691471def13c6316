# climbframe - Pipe-and-Connector Climbing Frame Builder
"""
CLIMBFRAME: Lattice Engine for Pipe Climbing Frames
===================================================

This package provides:
- Integer lattice geometry (10 cm grid units)
- Pipe model and the connection graph (node degrees, connector types,
  bill of materials)
- An interactive placement state machine (anchor -> direction -> commit)
- Procedural generators (budgeted box frames, fixed tiered scaffold)
- Presentation helpers (Plotly view, ray picking, PNG snapshot)

ARCHITECTURE:
-------------
    lattice/        Grid points, directions, unit conversion
    model.py        Pipe and Structure helpers
    graph.py        Degrees, connector classification, parts summary
    placement.py    EditorState + pure transition(state, event)
    generative/     build_structure_by_counts, build_tiered_scaffold
    viz/            viz3d (Plotly), pick (numpy), snapshot (matplotlib)
"""

from .model import Pipe, make_pipe
from .graph import node_degrees, parts_summary, PartsSummary, ConnectorKind
from .placement import EditorState, transition

__version__ = "0.1.0"
