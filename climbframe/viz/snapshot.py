# climbframe/viz/snapshot.py
"""
SNAPSHOT EXPORT: Annotated PNG of a Structure
=============================================

PURPOSE:
--------
Produce a shareable image of the current build:
- an isometric drawing of the pipes and connectors
- a title bar
- a parts panel (pipe and connector counts)
- a timestamp

Export is best-effort. If the figure cannot be drawn or encoded the
failure is logged and `render_snapshot` returns None instead of raising,
so the editor keeps working.
"""

import logging
from datetime import datetime
from io import BytesIO
from typing import List, Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from ..graph import ConnectorKind, PartsSummary, connection_nodes, parts_summary
from ..lattice.grid import units_to_meters
from ..model import Pipe
from .viz3d import CONNECTOR_COLORS, PIPE_COLOR

log = logging.getLogger(__name__)

DEFAULT_TITLE = "ClimbFrame 3D Builder"


def snapshot_filename(now: Optional[datetime] = None, prefix: str = "ClimbFrame") -> str:
    """File name like 'ClimbFrame-2026-10-18T14-53-02-123456.png'."""
    now = now or datetime.now()
    stamp = now.isoformat().replace(':', '-').replace('.', '-')
    return f"{prefix}-{stamp}.png"


def parts_lines(summary: PartsSummary) -> List[str]:
    """Text rows of the parts panel."""
    return [
        f"20 cm pipes: {summary.pipe_20cm}",
        f"40 cm pipes: {summary.pipe_40cm}",
        f"Two-way connectors: {summary.connectors_2}",
        f"Three-way connectors: {summary.connectors_3}",
        f"Four-way connectors: {summary.connectors_4}",
    ]


def _draw_structure(ax, structure: Sequence[Pipe]) -> None:
    for pipe in structure:
        a = units_to_meters(pipe.start)
        b = units_to_meters(pipe.end)
        ax.plot([a[0], b[0]], [a[1], b[1]], [a[2], b[2]], color=PIPE_COLOR, linewidth=3)

    nodes = connection_nodes(structure)
    for kind, color in CONNECTOR_COLORS.items():
        group = [units_to_meters(n.point) for n in nodes if n.kind is kind]
        if not group:
            continue
        free = kind is ConnectorKind.FREE
        ax.scatter(
            [g[0] for g in group], [g[1] for g in group], [g[2] for g in group],
            color=color, s=18 if free else 30, alpha=0.6 if free else 1.0,
            edgecolors='black', linewidths=0.5, depthshade=False,
        )

    # Equal-looking axes around the structure
    points = [units_to_meters(n.point) for n in nodes]
    mins = [min(p[i] for p in points) for i in range(3)]
    maxs = [max(p[i] for p in points) for i in range(3)]
    span = max(max(maxs[i] - mins[i] for i in range(3)), 0.4)
    centers = [(maxs[i] + mins[i]) / 2 for i in range(3)]
    ax.set_xlim(centers[0] - span / 2, centers[0] + span / 2)
    ax.set_ylim(centers[1] - span / 2, centers[1] + span / 2)
    ax.set_zlim(min(mins[2], 0.0), min(mins[2], 0.0) + span)
    ax.set_xlabel('X (m)')
    ax.set_ylabel('Y (m)')
    ax.set_zlabel('Z (m)')
    ax.view_init(elev=25, azim=-50)


def render_snapshot(
    structure: Sequence[Pipe],
    summary: Optional[PartsSummary] = None,
    title: str = DEFAULT_TITLE,
    now: Optional[datetime] = None,
    width_px: int = 1200,
    height_px: int = 800,
    dpi: int = 100,
) -> Optional[bytes]:
    """
    Render the structure with a title bar, parts panel and timestamp.

    Parameters:
    -----------
    structure : Sequence[Pipe]
        Pipes to draw
    summary : Optional[PartsSummary]
        Counts for the parts panel (computed from `structure` if omitted)
    title : str
        Text of the title bar
    now : Optional[datetime]
        Timestamp to print (defaults to the current time)

    Returns:
    --------
    Optional[bytes]
        PNG bytes, or None if the image could not be produced
    """
    summary = summary if summary is not None else parts_summary(structure)
    now = now or datetime.now()

    fig = None
    try:
        fig = plt.figure(figsize=(width_px / dpi, height_px / dpi), dpi=dpi, facecolor='#f4f7fb')
        ax = fig.add_axes([0.0, 0.0, 1.0, 0.9], projection='3d')
        ax.set_facecolor('#f4f7fb')
        _draw_structure(ax, structure)

        # Title bar
        fig.add_artist(Rectangle(
            (0.0, 0.92), 1.0, 0.08, transform=fig.transFigure,
            facecolor='white', alpha=0.9, edgecolor='none',
        ))
        fig.text(0.02, 0.96, title, fontsize=20, fontweight='bold',
                 color='#111827', va='center')

        # Parts panel (top right)
        panel_x, panel_y = 0.72, 0.62
        fig.add_artist(Rectangle(
            (panel_x, panel_y), 0.26, 0.27, transform=fig.transFigure,
            facecolor='white', alpha=0.92, edgecolor=(0, 0, 0, 0.08),
        ))
        for i, line in enumerate(parts_lines(summary)):
            fig.text(panel_x + 0.015, panel_y + 0.235 - i * 0.042, line,
                     fontsize=12, color='#111827', va='center')
        fig.text(panel_x + 0.015, panel_y + 0.02, now.strftime('%Y-%m-%d %H:%M:%S'),
                 fontsize=9, color='#6b7280', va='center')

        buffer = BytesIO()
        fig.savefig(buffer, format='png', dpi=dpi, facecolor=fig.get_facecolor())
        return buffer.getvalue()
    except Exception:
        log.warning("Snapshot export failed", exc_info=True)
        return None
    finally:
        if fig is not None:
            plt.close(fig)
