# File: tests/test_frames_generator.py
"""
Test the budgeted box-frame generator.

One box needs 12 edges of 40 cm; an edge is one 40 cm pipe or two 20 cm
pipes. 40 cm pipes are used first.
"""

import pytest

from climbframe.generative import (
    build_structure_by_counts,
    plan_budget,
    clamp_count,
    grid_dims,
    box_origins,
    box_edges,
)
from climbframe.graph import parts_summary
from climbframe.model import same_segment


def test_clamp_count():
    """
    Negative, non-numeric and missing inputs become 0.
    """
    assert clamp_count(7) == 7
    assert clamp_count("12") == 12
    assert clamp_count(3.9) == 3
    assert clamp_count(-5) == 0
    assert clamp_count("abc") == 0
    assert clamp_count(None) == 0
    assert clamp_count(float('inf')) == 0


def test_plan_budget():
    budget = plan_budget(10, 8)

    assert budget.edge_capacity == 13
    assert budget.boxes == 1
    assert budget.edges_40 == 8
    assert budget.edge_pairs_20 == 4


def test_not_enough_for_one_box():
    """
    20 x 20 cm makes only 10 edges, so nothing is built.
    """
    assert build_structure_by_counts(20, 0) == []
    assert build_structure_by_counts(0, 11) == []
    assert build_structure_by_counts(-4, "x") == []

    print("✓ Short budget yields an empty structure")


def test_one_box_from_short_pipes():
    """
    24 x 20 cm builds one box with every edge split in two.
    """
    pipes = build_structure_by_counts(24, 0)

    assert len(pipes) == 24
    assert all(p.length_units == 2 for p in pipes)

    summary = parts_summary(pipes)
    assert summary.connectors_3 == 8   # corners
    assert summary.connectors_2 == 12  # edge midpoints


def test_two_boxes_from_long_pipes():
    """
    24 x 40 cm builds two separate boxes side by side along X.
    """
    pipes = build_structure_by_counts(0, 24)

    assert len(pipes) == 24
    assert all(p.length_units == 4 for p in pipes)
    assert box_origins(2) == [(0, 0, 0), (8, 0, 0)]

    starts = {p.start for p in pipes}
    assert (0, 0, 0) in starts
    assert (8, 0, 0) in starts
    assert parts_summary(pipes).connectors_3 == 16

    print("✓ Two boxes from 24 long pipes")


def test_long_pipes_used_first():
    pipes = build_structure_by_counts(10, 8)
    summary = parts_summary(pipes)

    assert summary.pipe_40cm == 8
    assert summary.pipe_20cm == 8
    # The first edges of the box are the 40 cm ones
    assert [p.length_units for p in pipes[:8]] == [4] * 8


def test_grid_dims_exact_cube_root():
    """
    27 boxes fit a 3x3x3 grid; 28 need a 4x4 footprint.
    """
    assert grid_dims(1) == (1, 1, 1)
    assert grid_dims(8) == (2, 2, 2)
    assert grid_dims(27) == (3, 3, 3)
    assert grid_dims(28) == (4, 4, 2)


def test_box_origins_raster_order():
    origins = box_origins(5)

    assert origins == [(0, 0, 0), (8, 0, 0), (0, 8, 0), (8, 8, 0), (0, 0, 8)]


def test_box_edges_cover_a_cube():
    edges = box_edges((0, 0, 0))

    assert len(edges) == 12
    assert len(set(edges)) == 12
    assert sum(1 for _, axis in edges if axis == 'z') == 4


def test_no_duplicate_segments():
    pipes = build_structure_by_counts(30, 40)
    for i, a in enumerate(pipes):
        for b in pipes[i + 1:]:
            assert not same_segment(a, b)


def test_deterministic_ids():
    a = build_structure_by_counts(0, 12)
    b = build_structure_by_counts(0, 12)

    assert a == b
    assert a[0].id == 'frame-0000'
    assert a[-1].id == 'frame-0011'


@pytest.mark.parametrize("c20,c40,expected_boxes", [
    (0, 12, 1),
    (24, 6, 1),
    (48, 0, 2),
    (0, 96, 8),
])
def test_box_count(c20, c40, expected_boxes):
    pipes = build_structure_by_counts(c20, c40)
    summary = parts_summary(pipes)

    # Every box has eight three-way corners
    assert summary.connectors_3 == 8 * expected_boxes
