"""
Distance and side tests for planes read from BSP files.

Quake-derived formats store planes as "Ax + By + Cz = D", while most engine
math libraries use "Ax + By + Cz + D = 0". The distance term has the
opposite sign, so a generic plane distance function gives wrong answers on
BSP planes.
"""
from __future__ import annotations

import math

from .vector import Plane, Vec3, vec_dot, vec_length

# Absolute tolerance (world units) for a point to count as lying on a plane.
CONTAINS_EPSILON = 0.001


def signed_distance(plane: Plane, point: Vec3) -> float:
    """Signed distance from plane to point, positive on the normal side.

    NaN for a plane with a zero normal.
    """
    length = vec_length(plane.normal)
    if length == 0:
        return math.nan
    return (vec_dot(plane.normal, point) - plane.distance) / length


def is_positive_side(plane: Plane, point: Vec3) -> bool:
    return signed_distance(plane, point) > 0


def contains(plane: Plane, point: Vec3) -> bool:
    """True if point is within CONTAINS_EPSILON of the plane."""
    return abs(signed_distance(plane, point)) < CONTAINS_EPSILON
