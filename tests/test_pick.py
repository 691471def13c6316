# File: tests/test_pick.py
"""
Test ray picking: anchors before pipes, plane snapping, hit -> event.
"""

import numpy as np
import pytest

from climbframe.model import Pipe
from climbframe.placement import SelectAnchor, PickPipe, PickEmpty
from climbframe.viz.pick import (
    Camera,
    Ray,
    PickHit,
    screen_ray,
    ray_segment_distance,
    pick,
    pick_plane_point,
    event_for_hit,
)


def _pipe(pid, start, axis, length=4):
    return Pipe(id=pid, start=start, axis=axis, length_units=length)


def test_screen_ray_center_looks_at_target():
    camera = Camera(eye=(1.0, 0.0, 0.0), target=(0.0, 0.0, 0.0))
    ray = screen_ray(camera, 0.0, 0.0)

    assert np.allclose(ray.origin, [1.0, 0.0, 0.0])
    assert np.allclose(ray.direction, [-1.0, 0.0, 0.0])


def test_ray_segment_distance():
    ray = Ray(origin=np.array([0.2, -1.0, 0.05]), direction=np.array([0.0, 1.0, 0.0]))
    gap, t = ray_segment_distance(ray, np.array([0.0, 0.0, 0.0]), np.array([0.4, 0.0, 0.0]))

    assert gap == pytest.approx(0.05)
    assert t == pytest.approx(1.0)


def test_pick_pipe():
    """
    A ray through the middle of a pipe hits that pipe.
    """
    structure = (_pipe('a', (0, 0, 0), 'x'),)
    camera = Camera(eye=(0.2, -1.0, 0.0), target=(0.2, 0.0, 0.0))
    hit = pick(structure, screen_ray(camera, 0.0, 0.0))

    assert hit is not None
    assert hit.kind == 'pipe'
    assert hit.pipe_id == 'a'
    assert hit.distance == pytest.approx(1.0)

    print("✓ Pipe picked")


def test_anchor_wins_over_nearer_pipe():
    """
    Anchors take priority along the ray even behind a pipe.
    """
    structure = (
        _pipe('front', (-2, -2, 0), 'x'),
        _pipe('stub', (0, 0, 0), 'z', 2),
    )
    camera = Camera(eye=(0.0, -1.0, 0.0), target=(0.0, 0.0, 0.0))
    hit = pick(structure, screen_ray(camera, 0.0, 0.0))

    assert hit.kind == 'anchor'
    assert hit.point == (0, 0, 0)


def test_pick_miss():
    structure = (_pipe('a', (0, 0, 0), 'x'),)
    camera = Camera(eye=(0.2, -1.0, 0.0), target=(0.2, 0.0, 0.0))

    assert pick(structure, screen_ray(camera, 0.9, 0.9)) is None


def test_pick_plane_point_snaps():
    """
    Clicking empty space on the XY plane gives the nearest lattice point.
    """
    down = Ray(origin=np.array([0.31, 0.19, 1.0]), direction=np.array([0.0, 0.0, -1.0]))
    assert pick_plane_point(down, 'XY') == (3, 2, 0)

    side = Ray(origin=np.array([0.1, -1.0, 0.3]), direction=np.array([0.0, 1.0, 0.0]))
    assert pick_plane_point(side, 'XZ', level_units=2) == (1, 2, 3)


def test_pick_plane_point_misses():
    up = Ray(origin=np.array([0.0, 0.0, 1.0]), direction=np.array([0.0, 0.0, 1.0]))
    flat = Ray(origin=np.array([0.0, 0.0, 1.0]), direction=np.array([1.0, 0.0, 0.0]))

    assert pick_plane_point(up, 'XY') is None
    assert pick_plane_point(flat, 'XY') is None
    with pytest.raises(ValueError):
        pick_plane_point(up, 'XW')


def test_event_for_hit():
    assert event_for_hit(PickHit(kind='anchor', distance=1.0, point=(4, 0, 0))) == SelectAnchor(point=(4, 0, 0))
    assert event_for_hit(PickHit(kind='pipe', distance=1.0, pipe_id='a')) == PickPipe(pipe_id='a')
    assert isinstance(event_for_hit(None), PickEmpty)
