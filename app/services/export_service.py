# app/services/export_service.py
"""
Export service: handles file exports (PNG snapshot, CSV, JSON, text).
"""

import csv
import io
import json
from datetime import datetime
from typing import List, Optional
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from climbframe.exports import bom_csv, model_dict
from climbframe.graph import PartsSummary, parts_summary
from climbframe.model import Pipe
from climbframe.viz.snapshot import render_snapshot, snapshot_filename


class ExportService:
    """Service for exporting a structure to various formats."""

    @staticmethod
    def generate_snapshot(
        structure: List[Pipe],
        title: str,
        now: Optional[datetime] = None,
        width_px: int = 1200,
        height_px: int = 800,
        dpi: int = 100,
    ) -> Optional[bytes]:
        """
        Annotated PNG of the structure, or None if rendering failed.

        Returns None instead of raising; the caller simply hides the
        download button.
        """
        return render_snapshot(
            structure,
            summary=parts_summary(structure),
            title=title,
            now=now,
            width_px=width_px,
            height_px=height_px,
            dpi=dpi,
        )

    @staticmethod
    def snapshot_filename(now: Optional[datetime] = None) -> str:
        return snapshot_filename(now)

    @staticmethod
    def generate_bom_csv(structure: List[Pipe]) -> str:
        """
        Generate a CSV bill of materials.

        Returns CSV content as a string: one row per part type.
        """
        return bom_csv(structure)

    @staticmethod
    def generate_cutlist_csv(structure: List[Pipe]) -> str:
        """CSV with one row per pipe, sorted by length then id."""
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(['pipe_id', 'length_cm', 'axis', 'start_x', 'start_y', 'start_z',
                         'end_x', 'end_y', 'end_z'])
        for p in sorted(structure, key=lambda p: (p.length_units, p.id)):
            writer.writerow([p.id, p.length_cm, p.axis, *p.start, *p.end])
        return output.getvalue()

    @staticmethod
    def generate_model_json(structure: List[Pipe]) -> str:
        """
        Generate JSON model data for interchange.

        Returns JSON content as a string.
        """
        return json.dumps(model_dict(structure), indent=2)

    @staticmethod
    def generate_summary_text(summary: PartsSummary) -> str:
        """Generate a text summary of the parts list."""
        lines = [
            "CLIMBING FRAME PARTS LIST",
            "=" * 40,
            "",
            "PIPES",
            f"  20 cm:         {summary.pipe_20cm}",
            f"  40 cm:         {summary.pipe_40cm}",
            f"  Total length:  {(summary.pipe_20cm * 20 + summary.pipe_40cm * 40) / 100:.1f} m",
            "",
            "CONNECTORS",
            f"  Two-way:       {summary.connectors_2}",
            f"  Three-way:     {summary.connectors_3}",
            f"  Four-way:      {summary.connectors_4}",
            f"  Total:         {summary.total_connectors}",
        ]
        return "\n".join(lines)
