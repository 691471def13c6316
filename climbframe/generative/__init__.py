# climbframe/generative - Structure Generators
"""
GENERATIVE: Procedural Climbing-Frame Generators
================================================

This package synthesizes complete pipe lists. Both generators return a
new structure meant to REPLACE the current one.

Available Generators:
---------------------
- frames:   as many complete 40 cm box frames as a parts budget allows
- scaffold: a fixed three-tier scaffold (no budget)

USAGE:
------
    from climbframe.generative import build_structure_by_counts, build_tiered_scaffold

    pipes = build_structure_by_counts(count_20cm=24, count_40cm=12)
    tiers = build_tiered_scaffold()
"""

from .frames import (
    build_structure_by_counts,
    plan_budget,
    clamp_count,
    MAX_PIPE_COUNT,
    FrameBudget,
    box_origins,
    box_edges,
    grid_dims,
)
from .scaffold import build_tiered_scaffold, Tier, DEFAULT_TIERS

__all__ = [
    'build_structure_by_counts',
    'plan_budget',
    'clamp_count',
    'MAX_PIPE_COUNT',
    'FrameBudget',
    'box_origins',
    'box_edges',
    'grid_dims',
    'build_tiered_scaffold',
    'Tier',
    'DEFAULT_TIERS',
]
