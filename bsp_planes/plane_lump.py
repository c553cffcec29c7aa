"""
Planes lump codec: decode and encode the planes lump of a BSP file.

Works on the raw lump bytes only; locating the lump inside a BSP file is up
to the caller (see ``lump_index`` for the header slot per format).

Record layout (little-endian):
    offset  0  float32  normal.x
    offset  4  float32  normal.y
    offset  8  float32  normal.z
    offset 12  float32  distance
    offset 16  int32    type        (20-byte formats only)

Records are returned in file order. Other lumps reference planes by index,
so the list must never be sorted or deduplicated.
"""
from __future__ import annotations

import struct
from enum import IntEnum
from typing import List, Optional, Sequence

import numpy as np

from .map_type import (
    LUMP_INDICES, NO_LUMP, PLANE_RECORD_LARGE, PLANE_RECORD_SMALL,
    RECORD_SIZES, MapType,
)
from .vector import SCALAR_DTYPE, Plane, Vec3

_RECORD_FORMATS = {
    PLANE_RECORD_LARGE: '<4f4x',
    PLANE_RECORD_SMALL: '<4f',
}
_TYPE_FORMAT = '<16xi'


class PlaneLumpError(Exception):
    """Base class for planes lump errors."""
    pass


class NullInputError(PlaneLumpError, TypeError):
    """Raised when the lump data is None."""
    pass


class UnsupportedFormatError(PlaneLumpError, ValueError):
    """Raised for a map type without a known planes lump layout."""

    def __init__(self, map_type):
        self.map_type = map_type
        super().__init__(
            f"Map type {map_type} doesn't use a plane lump or the lump is unknown")


class PlaneType(IntEnum):
    """Axial classification stored in the type field of 20-byte records."""
    X = 0       # normal is exactly ±X
    Y = 1
    Z = 2
    ANY_X = 3   # normal points mostly along X
    ANY_Y = 4
    ANY_Z = 5

    @classmethod
    def from_normal(cls, normal: Vec3) -> PlaneType:
        """Classify a normal the way Quake-family map compilers do."""
        if normal[0] in (1.0, -1.0):
            return cls.X
        if normal[1] in (1.0, -1.0):
            return cls.Y
        if normal[2] in (1.0, -1.0):
            return cls.Z
        ax, ay, az = abs(normal[0]), abs(normal[1]), abs(normal[2])
        if ax >= ay and ax >= az:
            return cls.ANY_X
        if ay >= ax and ay >= az:
            return cls.ANY_Y
        return cls.ANY_Z


# ─── Format tables ────────────────────────────────────────────────────────────

def record_size(map_type: MapType) -> int:
    """Bytes per plane record for a map type (16 or 20)."""
    try:
        return RECORD_SIZES[map_type]
    except KeyError:
        raise UnsupportedFormatError(map_type) from None


def lump_index(map_type: MapType, strict: bool = False) -> int:
    """Header slot of the planes lump for a map type.

    Returns -1 for formats without a known planes lump, or raises
    UnsupportedFormatError if strict is set.
    """
    index = LUMP_INDICES.get(map_type, NO_LUMP)
    if index == NO_LUMP and strict:
        raise UnsupportedFormatError(map_type)
    return index


def _records(data, map_type: MapType):
    """Validate input and return (record size, whole-record view of data)."""
    if data is None:
        raise NullInputError("Plane lump data is None")
    size = record_size(map_type)
    count = len(data) // size
    # A trailing partial record is padding or truncation; ignore it.
    return size, memoryview(data)[:count * size]


# ─── Decoding ─────────────────────────────────────────────────────────────────

def decode_planes(data, map_type: MapType, version: int = 0) -> List[Plane]:
    """Decode a planes lump into Plane objects, in file order.

    ``data`` may be any bytes-like object. ``version`` is the lump version
    from the file header; no known format changes the plane layout by
    version, so it is currently ignored.

    Raises NullInputError if data is None and UnsupportedFormatError if the
    map type has no planes lump layout.
    """
    size, view = _records(data, map_type)
    return [
        Plane(normal=(nx, ny, nz), distance=dist)
        for nx, ny, nz, dist in struct.iter_unpack(_RECORD_FORMATS[size], view)
    ]


def decode_plane_types(data, map_type: MapType) -> List[Optional[int]]:
    """Read the type field of each record.

    16-byte formats have no type field; their entries are None.
    """
    size, view = _records(data, map_type)
    count = len(view) // size
    if size == PLANE_RECORD_SMALL:
        return [None] * count
    return [struct.unpack_from(_TYPE_FORMAT, view, i * size)[0] for i in range(count)]


def decode_planes_array(data, map_type: MapType, version: int = 0) -> np.ndarray:
    """Decode a planes lump into an (N, 4) array of nx, ny, nz, distance.

    Same errors and truncation rules as decode_planes; version is ignored.
    """
    size, view = _records(data, map_type)
    count = len(view) // size
    if count == 0:
        return np.empty((0, 4), dtype=SCALAR_DTYPE)
    floats = np.frombuffer(view, dtype='<f4', count=count * size // 4)
    return floats.reshape(count, size // 4)[:, :4].astype(SCALAR_DTYPE)


def planes_to_array(planes: Sequence[Plane]) -> np.ndarray:
    """Pack decoded planes into an (N, 4) array of nx, ny, nz, distance."""
    rows = [(p.normal[0], p.normal[1], p.normal[2], p.distance) for p in planes]
    return np.array(rows, dtype=SCALAR_DTYPE).reshape(len(rows), 4)


# ─── Encoding ─────────────────────────────────────────────────────────────────

def encode_planes(planes: Sequence[Plane], map_type: MapType,
                  plane_types: Optional[Sequence[int]] = None) -> bytes:
    """Encode planes into a planes lump for a map type.

    For 20-byte formats the type field comes from ``plane_types`` when given,
    otherwise from ``PlaneType.from_normal``. Values are stored as float32,
    so they round-trip only to single precision.
    """
    size = record_size(map_type)
    if plane_types is not None and len(plane_types) != len(planes):
        raise ValueError(
            f"Got {len(plane_types)} plane types for {len(planes)} planes")

    out = bytearray(size * len(planes))
    for i, plane in enumerate(planes):
        ofs = i * size
        nx, ny, nz = plane.normal
        struct.pack_into('<4f', out, ofs, nx, ny, nz, plane.distance)
        if size == PLANE_RECORD_LARGE:
            if plane_types is not None:
                ptype = int(plane_types[i])
            else:
                ptype = int(PlaneType.from_normal(plane.normal))
            struct.pack_into('<i', out, ofs + 16, ptype)
    return bytes(out)
