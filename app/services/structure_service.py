# app/services/structure_service.py
"""
Structure service: generation requests and derived tables for the UI.
"""

import logging
import sys
from pathlib import Path
from typing import Any, List, Tuple

import pandas as pd

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from climbframe.generative import (
    build_structure_by_counts,
    build_tiered_scaffold,
    clamp_count,
    plan_budget,
    MAX_PIPE_COUNT,
    FrameBudget,
)
from climbframe.graph import connection_nodes, parts_summary, PartsSummary
from climbframe.model import Pipe

log = logging.getLogger(__name__)


class StructureService:
    """Service for generating structures and tabulating them."""

    @staticmethod
    def generate_frames(count_20cm: Any, count_40cm: Any) -> Tuple[List[Pipe], FrameBudget]:
        """
        Build box frames from a parts budget.

        Counts are clamped to 0..MAX_PIPE_COUNT here, at the input
        boundary.
        """
        c20 = min(clamp_count(count_20cm), MAX_PIPE_COUNT)
        c40 = min(clamp_count(count_40cm), MAX_PIPE_COUNT)
        budget = plan_budget(c20, c40)
        pipes = build_structure_by_counts(c20, c40)
        log.info("Frame request %d x 20cm, %d x 40cm -> %d boxes", c20, c40, budget.boxes)
        return pipes, budget

    @staticmethod
    def generate_scaffold() -> List[Pipe]:
        return build_tiered_scaffold()

    @staticmethod
    def summary(structure) -> PartsSummary:
        return parts_summary(structure)

    @staticmethod
    def pipes_table(structure) -> pd.DataFrame:
        """One row per pipe, for the data view."""
        rows = [
            {
                'id': p.id,
                'length_cm': p.length_cm,
                'axis': p.axis.upper(),
                'start': str(p.start),
                'end': str(p.end),
            }
            for p in structure
        ]
        return pd.DataFrame(rows, columns=['id', 'length_cm', 'axis', 'start', 'end'])

    @staticmethod
    def nodes_table(structure) -> pd.DataFrame:
        """One row per connection node with its degree and connector type."""
        rows = [
            {
                'x': n.point[0],
                'y': n.point[1],
                'z': n.point[2],
                'degree': n.degree,
                'connector': n.kind.value,
            }
            for n in connection_nodes(structure)
        ]
        return pd.DataFrame(rows, columns=['x', 'y', 'z', 'degree', 'connector'])
