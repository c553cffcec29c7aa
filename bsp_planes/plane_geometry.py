"""
Plane geometry: intersections and three-point generation for BSP planes.

All functions return the NaN sentinel (see ``vector.NAN_VECTOR``) instead of
raising when the query has no unique answer, e.g. parallel planes or a ray
running parallel to a plane. Callers test results with ``vec_is_nan``.

Planes use the Quake convention ``normal · X = distance``.
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, Union

from .vector import (
    NAN_VECTOR, ZERO_VECTOR, Plane, Ray, Vec3,
    vec_cross, vec_dot, vec_is_nan, vec_mul,
)

DEFAULT_POINT_SCALE = 16.0

ThreePoints = Tuple[Vec3, Vec3, Vec3]


def _div(num: float, denom: float) -> float:
    """Float division that yields NaN instead of raising on a zero denominator."""
    if denom == 0:
        return math.nan
    return num / denom


# ─── Intersections ────────────────────────────────────────────────────────────

def intersect_planes(p1: Plane, p2: Plane, p3: Plane) -> Vec3:
    """Point where three planes meet, or NaN if any two are parallel.

    Cramer's rule on the 3×3 system of normals. A determinant of exactly
    zero means the normals are linearly dependent.
    """
    a = p1.normal
    b = p2.normal
    c = p3.normal

    part_x = b[1] * c[2] - b[2] * c[1]
    part_y = b[2] * c[0] - b[0] * c[2]
    part_z = b[0] * c[1] - b[1] * c[0]
    det = a[0] * part_x + a[1] * part_y + a[2] * part_z
    if det == 0:
        return NAN_VECTOR

    d1, d2, d3 = p1.distance, p2.distance, p3.distance
    return (
        (d1 * part_x + d2 * (c[1] * a[2] - c[2] * a[1]) + d3 * (a[1] * b[2] - a[2] * b[1])) / det,
        (d1 * part_y + d2 * (a[0] * c[2] - a[2] * c[0]) + d3 * (b[0] * a[2] - b[2] * a[0])) / det,
        (d1 * part_z + d2 * (c[0] * a[1] - c[1] * a[0]) + d3 * (a[0] * b[1] - a[1] * b[0])) / det,
    )


def intersect_ray(plane: Plane, ray: Ray) -> Vec3:
    """Point where a ray crosses a plane.

    Returns NaN when the plane lies behind the ray origin, or when the ray
    is parallel to the plane without lying in it, and for a zero normal.
    A ray starting on the plane hits at its own origin (t == 0).
    """
    normal = plane.normal
    if normal == ZERO_VECTOR:
        return NAN_VECTOR
    facing = vec_dot(normal, ray.direction)
    offset = plane.distance - vec_dot(normal, ray.origin)
    if facing == 0:
        return ray.origin if offset == 0 else NAN_VECTOR

    t = offset / facing
    if t < 0:
        return NAN_VECTOR
    return ray.point_at(t)


class Axis(Enum):
    X = 0
    Y = 1
    Z = 2


def _dominant_axis(v: Vec3) -> Axis:
    """Axis of the largest component. Ties go to X, then Y."""
    if v[0] >= v[1] and v[0] >= v[2]:
        return Axis.X
    if v[1] >= v[0] and v[1] >= v[2]:
        return Axis.Y
    return Axis.Z


def _line_origin_x0(a: Vec3, da: float, b: Vec3, db: float) -> Vec3:
    denom = a[1] * b[2] - b[1] * a[2]
    return (0.0,
            _div(da * b[2] - db * a[2], denom),
            _div(a[1] * db - b[1] * da, denom))

def _line_origin_y0(a: Vec3, da: float, b: Vec3, db: float) -> Vec3:
    denom = a[0] * b[2] - b[0] * a[2]
    return (_div(da * b[2] - db * a[2], denom),
            0.0,
            _div(a[0] * db - b[0] * da, denom))

def _line_origin_z0(a: Vec3, da: float, b: Vec3, db: float) -> Vec3:
    denom = a[0] * b[1] - b[0] * a[1]
    return (_div(da * b[1] - db * a[1], denom),
            _div(a[0] * db - b[0] * da, denom),
            0.0)


# Zero the coordinate along which the line runs most steeply; the 2×2
# system for the other two coordinates is then best conditioned. The origin
# satisfies n · X = D for both planes, the same convention as intersect_planes.
_LINE_ORIGIN_SOLVERS: Dict[Axis, Callable[[Vec3, float, Vec3, float], Vec3]] = {
    Axis.X: _line_origin_x0,
    Axis.Y: _line_origin_y0,
    Axis.Z: _line_origin_z0,
}


def intersect_plane_line(p1: Plane, p2: Plane) -> Ray:
    """Line where two planes meet, as a Ray along n1 × n2.

    Parallel or identical planes, and normals with NaN components, give a
    Ray whose origin and direction are both NaN.
    """
    direction = vec_cross(p1.normal, p2.normal)
    if direction == ZERO_VECTOR or vec_is_nan(direction):
        return Ray(NAN_VECTOR, NAN_VECTOR)

    axis = _dominant_axis(vec_mul(direction, direction))
    origin = _LINE_ORIGIN_SOLVERS[axis](p1.normal, p1.distance, p2.normal, p2.distance)
    return Ray(origin, direction)


def intersect(p1: Plane, other: Union[Plane, Ray],
              third: Optional[Plane] = None) -> Union[Vec3, Ray]:
    """Intersect a plane with another plane, a ray, or two more planes.

    - ``intersect(plane, plane, plane)`` → point (Vec3)
    - ``intersect(plane, ray)``          → point (Vec3)
    - ``intersect(plane, plane)``        → line (Ray)
    """
    if not isinstance(p1, Plane):
        raise TypeError(f"Expected a Plane, got {type(p1).__name__}")
    if third is not None:
        if not isinstance(other, Plane) or not isinstance(third, Plane):
            raise TypeError("Three-way intersection needs three planes")
        return intersect_planes(p1, other, third)
    if isinstance(other, Ray):
        return intersect_ray(p1, other)
    if isinstance(other, Plane):
        return intersect_plane_line(p1, other)
    raise TypeError(f"Cannot intersect a Plane with {type(other).__name__}")


# ─── Three-point generation ───────────────────────────────────────────────────

class PlaneAlignment(Enum):
    """How a plane sits relative to the coordinate axes.

    Decided purely by which normal components are exactly zero.
    """
    PARALLEL_YZ = "yz"    # normal along X only
    PARALLEL_XZ = "xz"    # normal along Y only
    PARALLEL_XY = "xy"    # normal along Z only
    PARALLEL_X = "x"      # normal.x == 0, plane contains the X direction
    PARALLEL_Y = "y"
    PARALLEL_Z = "z"
    OBLIQUE = "oblique"

    @classmethod
    def of(cls, normal: Vec3) -> PlaneAlignment:
        x, y, z = normal
        if y == 0 and z == 0:
            return cls.PARALLEL_YZ
        if x == 0 and z == 0:
            return cls.PARALLEL_XZ
        if x == 0 and y == 0:
            return cls.PARALLEL_XY
        if x == 0:
            return cls.PARALLEL_X
        if y == 0:
            return cls.PARALLEL_Y
        if z == 0:
            return cls.PARALLEL_Z
        return cls.OBLIQUE


def _points_yz(n: Vec3, d: float, s: float) -> ThreePoints:
    x = _div(d, n[0])
    return ((x, -s, s), (x, 0.0, 0.0), (x, s, s))

def _points_xz(n: Vec3, d: float, s: float) -> ThreePoints:
    y = _div(d, n[1])
    return ((s, y, -s), (0.0, y, 0.0), (s, y, s))

def _points_xy(n: Vec3, d: float, s: float) -> ThreePoints:
    z = _div(d, n[2])
    return ((-s, s, z), (0.0, 0.0, z), (s, s, z))

def _points_x(n: Vec3, d: float, s: float) -> ThreePoints:
    ss = s * s
    z = _div(-(ss * n[1] - d), n[2])
    return ((-s, ss, z), (0.0, 0.0, _div(d, n[2])), (s, ss, z))

def _points_y(n: Vec3, d: float, s: float) -> ThreePoints:
    ss = s * s
    x = _div(-(ss * n[2] - d), n[0])
    return ((x, -s, ss), (_div(d, n[0]), 0.0, 0.0), (x, s, ss))

def _points_z(n: Vec3, d: float, s: float) -> ThreePoints:
    ss = s * s
    y = _div(-(ss * n[0] - d), n[1])
    return ((ss, y, -s), (0.0, _div(d, n[1]), 0.0), (ss, y, s))

def _points_oblique(n: Vec3, d: float, s: float) -> ThreePoints:
    ss = s * s
    return (
        (-s, ss, _div(-(-s * n[0] + ss * n[1] - d), n[2])),
        (0.0, 0.0, _div(d, n[2])),
        (s, ss, _div(-(s * n[0] + ss * n[1] - d), n[2])),
    )


# alignment → (builder, index of the normal component that decides winding)
_THREE_POINT_BUILDERS: Dict[PlaneAlignment, Tuple[Callable[[Vec3, float, float], ThreePoints], int]] = {
    PlaneAlignment.PARALLEL_YZ: (_points_yz, 0),
    PlaneAlignment.PARALLEL_XZ: (_points_xz, 1),
    PlaneAlignment.PARALLEL_XY: (_points_xy, 2),
    PlaneAlignment.PARALLEL_X: (_points_x, 2),
    PlaneAlignment.PARALLEL_Y: (_points_y, 0),
    PlaneAlignment.PARALLEL_Z: (_points_z, 1),
    PlaneAlignment.OBLIQUE: (_points_oblique, 2),
}


def generate_three_points(plane: Plane, scalar: float = DEFAULT_POINT_SCALE) -> ThreePoints:
    """Three non-collinear points on the plane, ``scalar`` units apart.

    The points come out in the winding order map editors expect for a
    brush side facing along the plane normal: when the deciding normal
    component is positive the order is reversed.

    Raises ValueError if scalar is zero.
    """
    if scalar == 0:
        raise ValueError("scalar must be nonzero")

    normal = plane.normal
    build, winding_axis = _THREE_POINT_BUILDERS[PlaneAlignment.of(normal)]
    p0, p1, p2 = build(normal, plane.distance, scalar)
    if normal[winding_axis] > 0:
        return (p2, p1, p0)
    return (p0, p1, p2)
