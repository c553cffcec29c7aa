"""
Value types shared by the plane geometry and lump codec modules.

Vectors are plain 3-tuples of floats. Planes follow the Quake convention
used by every BSP format: a point X lies on the plane when

    normal · X = distance

which differs in the sign of the distance term from the
"Ax + By + Cz + D = 0" form used by most engine math libraries.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

Vec3 = Tuple[float, float, float]

# Scalar width for bulk (numpy) plane data. Python floats are always 64-bit.
SCALAR_DTYPE = np.float64

NAN_VECTOR: Vec3 = (math.nan, math.nan, math.nan)
ZERO_VECTOR: Vec3 = (0.0, 0.0, 0.0)

# ─── Vec3 arithmetic ──────────────────────────────────────────────────────────

def vec_add(a: Vec3, b: Vec3) -> Vec3:
    ax, ay, az = a
    bx, by, bz = b
    return (ax + bx, ay + by, az + bz)

def vec_sub(a: Vec3, b: Vec3) -> Vec3:
    ax, ay, az = a
    bx, by, bz = b
    return (ax - bx, ay - by, az - bz)

def vec_scale(v: Vec3, factor: float) -> Vec3:
    x, y, z = v
    return (x * factor, y * factor, z * factor)

def vec_mul(a: Vec3, b: Vec3) -> Vec3:
    """Component-wise product."""
    ax, ay, az = a
    bx, by, bz = b
    return (ax * bx, ay * by, az * bz)

def vec_dot(a: Vec3, b: Vec3) -> float:
    ax, ay, az = a
    bx, by, bz = b
    return ax * bx + ay * by + az * bz

def vec_cross(a: Vec3, b: Vec3) -> Vec3:
    ax, ay, az = a
    bx, by, bz = b
    return (ay * bz - az * by,
            az * bx - ax * bz,
            ax * by - ay * bx)

def vec_length(v: Vec3) -> float:
    return math.sqrt(vec_dot(v, v))

def vec_is_nan(v: Vec3) -> bool:
    """True if any component is NaN (the degenerate-result sentinel)."""
    return math.isnan(v[0]) or math.isnan(v[1]) or math.isnan(v[2])


# ─── Plane / Ray ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Plane:
    """A plane defined by normal · point = distance.

    The normal does not need to be unit length. A zero normal is allowed
    but every geometric query on it yields NaN.
    """
    normal: Vec3
    distance: float

    def intersect(self, other, third: Plane | None = None):
        """See :func:`bsp_planes.plane_geometry.intersect`."""
        from .plane_geometry import intersect
        return intersect(self, other, third)

    def generate_three_points(self, scalar: float = 16.0) -> Tuple[Vec3, Vec3, Vec3]:
        from .plane_geometry import generate_three_points
        return generate_three_points(self, scalar)

    def signed_distance(self, point: Vec3) -> float:
        from .plane_distance import signed_distance
        return signed_distance(self, point)

    def is_positive_side(self, point: Vec3) -> bool:
        from .plane_distance import is_positive_side
        return is_positive_side(self, point)

    def contains(self, point: Vec3) -> bool:
        from .plane_distance import contains
        return contains(self, point)


@dataclass(frozen=True)
class Ray:
    """A half-line starting at origin. Direction need not be normalized.

    Also used for the (infinite) line where two planes meet.
    """
    origin: Vec3
    direction: Vec3

    def point_at(self, t: float) -> Vec3:
        return vec_add(self.origin, vec_scale(self.direction, t))

    def intersect(self, plane: Plane) -> Vec3:
        from .plane_geometry import intersect_ray
        return intersect_ray(plane, self)

    @property
    def is_degenerate(self) -> bool:
        return vec_is_nan(self.origin) or vec_is_nan(self.direction)
