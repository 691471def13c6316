# climbframe/viz/pick.py
"""
PICKING: From a Screen Click to an Anchor or a Pipe
===================================================

PURPOSE:
--------
A click on the 3D view arrives as a normalized screen coordinate
(ndc_x, ndc_y in [-1, 1], y up). This module turns it into a ray through
a simple pinhole camera and intersects that ray with the structure:

- anchors are spheres around every connection node
- pipes are cylinders of radius PIPE_RADIUS_M around their axis

Anchors win over pipes anywhere along the ray, so clicking a joint that
sits in front of (or behind) a pipe always starts a placement there.

All geometry here is in metres, the same frame the viewer draws in.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from ..graph import connection_nodes
from ..lattice.grid import (
    GridPoint,
    PIPE_RADIUS_M,
    UNIT_M,
    meters_to_units,
    snap_to_grid,
    units_to_meters,
)
from ..model import Pipe
from ..placement import Event, PickEmpty, PickPipe, SelectAnchor

# Anchor spheres are drawn slightly larger on real connectors
CONNECTOR_RADIUS_M = PIPE_RADIUS_M * 1.2
FREE_ANCHOR_RADIUS_M = PIPE_RADIUS_M * 0.9

_PLANE_NORMALS = {
    'XY': np.array([0.0, 0.0, 1.0]),
    'XZ': np.array([0.0, 1.0, 0.0]),
    'YZ': np.array([1.0, 0.0, 0.0]),
}


@dataclass(frozen=True)
class Camera:
    """
    Perspective camera looking from `eye` at `target`.

    Parameters:
    -----------
    eye, target : Tuple[float, float, float]
        Positions in metres
    up : Tuple[float, float, float]
        Approximate up vector (z-up by default)
    fov_deg : float
        Vertical field of view in degrees
    aspect : float
        Viewport width / height
    """
    eye: Tuple[float, float, float] = (1.2, 1.2, 1.2)
    target: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    up: Tuple[float, float, float] = (0.0, 0.0, 1.0)
    fov_deg: float = 60.0
    aspect: float = 1.0


@dataclass(frozen=True)
class Ray:
    origin: np.ndarray
    direction: np.ndarray  # unit length


@dataclass(frozen=True)
class PickHit:
    """
    Result of a pick.

    kind is 'anchor' (with `point`) or 'pipe' (with `pipe_id`);
    `distance` is measured along the ray in metres.
    """
    kind: str
    distance: float
    point: Optional[GridPoint] = None
    pipe_id: Optional[str] = None


def _normalize(v: np.ndarray) -> np.ndarray:
    n = np.linalg.norm(v)
    if n < 1e-12:
        raise ValueError("Cannot normalize a zero-length vector")
    return v / n


def screen_ray(camera: Camera, ndc_x: float, ndc_y: float) -> Ray:
    """Ray from the camera eye through a normalized screen coordinate."""
    eye = np.asarray(camera.eye, dtype=float)
    forward = _normalize(np.asarray(camera.target, dtype=float) - eye)
    right = _normalize(np.cross(forward, np.asarray(camera.up, dtype=float)))
    true_up = np.cross(right, forward)

    half_h = math.tan(math.radians(camera.fov_deg) / 2)
    half_w = half_h * camera.aspect
    direction = forward + ndc_x * half_w * right + ndc_y * half_h * true_up
    return Ray(origin=eye, direction=_normalize(direction))


def ray_sphere_distance(ray: Ray, center: np.ndarray, radius: float) -> Optional[float]:
    """Distance along the ray to the first hit on a sphere, or None."""
    oc = center - ray.origin
    t = float(np.dot(oc, ray.direction))
    d2 = float(np.dot(oc, oc)) - t * t
    r2 = radius * radius
    if d2 > r2:
        return None
    t_hit = t - math.sqrt(r2 - d2)
    if t_hit < 0:
        # Origin inside the sphere, or sphere behind the camera
        t_hit = t + math.sqrt(r2 - d2)
    return t_hit if t_hit >= 0 else None


def ray_segment_distance(ray: Ray, a: np.ndarray, b: np.ndarray) -> Tuple[float, float]:
    """
    Closest approach between the ray and segment a-b.

    Returns:
    --------
    (gap, t)
        gap : shortest distance between ray and segment
        t   : distance along the ray to the closest point
    """
    u = ray.direction
    v = b - a
    w = ray.origin - a
    uv = float(np.dot(u, v))
    vv = float(np.dot(v, v))
    uw = float(np.dot(u, w))
    vw = float(np.dot(v, w))
    denom = vv - uv * uv

    if vv < 1e-12 or denom < 1e-12:
        # Degenerate or parallel: start from the segment start
        s = 0.0
    else:
        s = float(np.clip((vw - uv * uw) / denom, 0.0, 1.0))

    # Closest point on the ray (t >= 0) to that segment point
    seg_pt = a + s * v
    t = max(0.0, float(np.dot(seg_pt - ray.origin, u)))
    if t == 0.0 and vv >= 1e-12:
        # Ray origin is the closest ray point; re-project it onto the segment
        s = float(np.clip(vw / vv, 0.0, 1.0))
        seg_pt = a + s * v
    ray_pt = ray.origin + t * u
    gap = float(np.linalg.norm(seg_pt - ray_pt))
    return gap, t


def pick(
    structure: Sequence[Pipe],
    ray: Ray,
    pipe_radius: float = PIPE_RADIUS_M,
) -> Optional[PickHit]:
    """
    Intersect a ray with the anchors and pipes of a structure.

    Returns the nearest anchor hit if any anchor is hit, otherwise the
    nearest pipe hit, otherwise None.
    """
    best_anchor: Optional[PickHit] = None
    for node in connection_nodes(structure):
        radius = CONNECTOR_RADIUS_M if node.degree >= 2 else FREE_ANCHOR_RADIUS_M
        center = np.asarray(units_to_meters(node.point))
        t = ray_sphere_distance(ray, center, radius)
        if t is not None and (best_anchor is None or t < best_anchor.distance):
            best_anchor = PickHit(kind='anchor', distance=t, point=node.point)
    if best_anchor is not None:
        return best_anchor

    best_pipe: Optional[PickHit] = None
    for pipe in structure:
        a = np.asarray(units_to_meters(pipe.start))
        b = np.asarray(units_to_meters(pipe.end))
        gap, t = ray_segment_distance(ray, a, b)
        if gap <= pipe_radius and (best_pipe is None or t < best_pipe.distance):
            best_pipe = PickHit(kind='pipe', distance=t, pipe_id=pipe.id)
    return best_pipe


def pick_plane_point(ray: Ray, plane: str = 'XY', level_units: int = 0) -> Optional[GridPoint]:
    """
    Where the ray crosses a construction plane, snapped to the lattice.

    Parameters:
    -----------
    plane : str
        'XY' (z = level), 'XZ' (y = level) or 'YZ' (x = level)
    level_units : int
        Plane offset in grid units

    Returns None when the ray is parallel to the plane or points away.
    """
    if plane not in _PLANE_NORMALS:
        raise ValueError(f"Unknown plane: {plane}")
    normal = _PLANE_NORMALS[plane]
    denom = float(np.dot(ray.direction, normal))
    if abs(denom) < 1e-12:
        return None
    t = (level_units * UNIT_M - float(np.dot(ray.origin, normal))) / denom
    if t < 0:
        return None
    hit = ray.origin + t * ray.direction
    return snap_to_grid(meters_to_units(hit))


def event_for_hit(hit: Optional[PickHit]) -> Event:
    """Placement event for a pick result."""
    if hit is None:
        return PickEmpty()
    if hit.kind == 'anchor':
        return SelectAnchor(point=hit.point)
    return PickPipe(pipe_id=hit.pipe_id)
