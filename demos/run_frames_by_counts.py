#!/usr/bin/env python3
"""
RUN_FRAMES_BY_COUNTS: Build Box Frames from a Parts Budget
==========================================================

This demo shows the budgeted generator end to end:
1. Pick a parts budget (20 cm and 40 cm pipe counts)
2. Plan how many complete 40 cm boxes it buys
3. Build the structure
4. Count connectors (bill of materials)
5. Save a 3D view and an annotated PNG snapshot

Run with:
    python demos/run_frames_by_counts.py [count_20cm] [count_40cm]

Outputs:
    artifacts/frames_3d.html       - Interactive 3D visualization
    artifacts/frames_snapshot.png  - Snapshot with parts panel
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from climbframe.generative import build_structure_by_counts, plan_budget, grid_dims
from climbframe.graph import parts_summary
from climbframe.viz import plot_lattice_3d, render_snapshot


def print_header(text: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {text}")
    print("=" * 70)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    count_20cm = sys.argv[1] if len(sys.argv) > 1 else 24
    count_40cm = sys.argv[2] if len(sys.argv) > 2 else 24

    print_header("BOX FRAMES FROM A PARTS BUDGET")

    # =========================================================================
    # STEP 1: PLAN
    # =========================================================================
    print_header("STEP 1: Budget")

    budget = plan_budget(count_20cm, count_40cm)
    print(f"""
    20 cm pipes:     {budget.count_20cm}
    40 cm pipes:     {budget.count_40cm}
    Edge capacity:   {budget.edge_capacity} (one 40 cm or two 20 cm per edge)
    Complete boxes:  {budget.boxes}
    Box grid:        {' x '.join(str(n) for n in grid_dims(budget.boxes))}
    """)

    if budget.boxes == 0:
        print("    Not enough pipes for a single box (12 edges needed).")
        return

    # =========================================================================
    # STEP 2: BUILD
    # =========================================================================
    print_header("STEP 2: Build")

    pipes = build_structure_by_counts(budget.count_20cm, budget.count_40cm)
    summary = parts_summary(pipes)

    print(f"""
    Pipes placed:    {len(pipes)}
      20 cm:         {summary.pipe_20cm}
      40 cm:         {summary.pipe_40cm}

    Connectors:
      Two-way:       {summary.connectors_2}
      Three-way:     {summary.connectors_3}
      Four-way:      {summary.connectors_4}
    """)

    # =========================================================================
    # STEP 3: OUTPUTS
    # =========================================================================
    print_header("STEP 3: Outputs")

    os.makedirs("artifacts", exist_ok=True)
    plot_lattice_3d(
        pipes,
        title=f"{budget.boxes} box frame(s)",
        outpath="artifacts/frames_3d.html",
        show=False,
    )

    png = render_snapshot(pipes, summary=summary, now=datetime.now())
    if png is None:
        print("Snapshot failed (see log)")
    else:
        with open("artifacts/frames_snapshot.png", "wb") as f:
            f.write(png)
        print("Snapshot saved to: artifacts/frames_snapshot.png")


if __name__ == "__main__":
    main()
