"""
bsp_planes: plane geometry and planes-lump decoding for BSP map files.

Usage:
    from bsp_planes import MapType, decode_planes, intersect_planes

    planes = decode_planes(lump_bytes, MapType.SOURCE20)
    corner = intersect_planes(planes[0], planes[1], planes[2])
"""
from .map_type import LUMP_INDICES, RECORD_SIZES, MapType
from .plane_distance import CONTAINS_EPSILON, contains, is_positive_side, signed_distance
from .plane_geometry import (
    DEFAULT_POINT_SCALE, PlaneAlignment, generate_three_points, intersect,
    intersect_plane_line, intersect_planes, intersect_ray,
)
from .plane_lump import (
    NullInputError, PlaneLumpError, PlaneType, UnsupportedFormatError,
    decode_plane_types, decode_planes, decode_planes_array, encode_planes,
    lump_index, planes_to_array, record_size,
)
from .vector import NAN_VECTOR, SCALAR_DTYPE, Plane, Ray, Vec3, vec_is_nan

__version__ = "0.1.0"
