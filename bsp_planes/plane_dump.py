#!/usr/bin/env python3
"""
bsp-plane-dump: print the planes stored in a BSP planes lump.

Reads either a raw lump file or a byte range of a larger file (for example a
whole BSP, given the lump offset and length from its header).

Usage:
    bsp-plane-dump planes.lmp --map-type source20
    bsp-plane-dump map.bsp --map-type quake --offset 1234 --length 4000 --points
    bsp-plane-dump planes.lmp --map-type cod4 --npy planes.npy
    bsp-plane-dump --list-types
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np

from .map_type import MapType
from .plane_geometry import DEFAULT_POINT_SCALE, generate_three_points
from .plane_lump import (
    PlaneLumpError, decode_plane_types, decode_planes, lump_index,
    planes_to_array, record_size,
)


def _fmt_vec(v) -> str:
    return f"({v[0]:g} {v[1]:g} {v[2]:g})"


def read_lump_bytes(path: Path, offset: int = 0, length: Optional[int] = None) -> bytes:
    """Read ``length`` bytes at ``offset`` (the rest of the file if None)."""
    with open(path, 'rb') as f:
        f.seek(offset)
        return f.read() if length is None else f.read(length)


def print_type_table() -> None:
    print(f"{'Map type':<32} | {'Record':<6} | {'Lump':<4}")
    print("-" * 48)
    for map_type in MapType:
        index = lump_index(map_type)
        try:
            size = str(record_size(map_type))
        except PlaneLumpError:
            size = "-"
        print(f"{map_type.name:<32} | {size:<6} | {index if index >= 0 else '-':<4}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Decode and print the planes lump of a BSP file.")
    parser.add_argument('lump', nargs='?', type=str, default=None,
                        help='File holding the planes lump (raw lump or whole BSP)')
    parser.add_argument('--map-type', '-t', type=str, default=None,
                        help='Map format, e.g. quake, quake3, source20, cod4')
    parser.add_argument('--offset', type=int, default=0,
                        help='Byte offset of the lump inside the file (default: 0)')
    parser.add_argument('--length', type=int, default=None,
                        help='Lump length in bytes (default: to end of file)')
    parser.add_argument('--version', type=int, default=0,
                        help='Lump version from the BSP header (default: 0)')
    parser.add_argument('--points', action='store_true',
                        help='Also print three points on each plane')
    parser.add_argument('--scalar', type=float, default=DEFAULT_POINT_SCALE,
                        help=f'Spacing of generated points (default: {DEFAULT_POINT_SCALE:g})')
    parser.add_argument('--npy', type=str, default=None,
                        help='Save an (N, 4) array of nx, ny, nz, dist to this .npy file')
    parser.add_argument('--list-types', action='store_true',
                        help='List known map types with record size and lump index')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Print lump details before the planes')
    args = parser.parse_args(argv)

    if args.list_types:
        print_type_table()
        return 0

    if args.lump is None or args.map_type is None:
        parser.error("a lump file and --map-type are required")

    try:
        map_type = MapType.from_name(args.map_type)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.scalar == 0:
        print("ERROR: --scalar must be nonzero", file=sys.stderr)
        return 1

    lump_path = Path(args.lump).resolve()
    if not lump_path.exists():
        print(f"ERROR: Lump file not found: {lump_path}", file=sys.stderr)
        return 1

    try:
        data = read_lump_bytes(lump_path, args.offset, args.length)
        planes = decode_planes(data, map_type, args.version)
        plane_types = decode_plane_types(data, map_type)
    except (PlaneLumpError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        size = record_size(map_type)
        print(f"  Lump:   {lump_path} @ {args.offset}, {len(data)} bytes", flush=True)
        print(f"  Format: {map_type.name}, {size}-byte records, "
              f"header slot {lump_index(map_type)}", flush=True)
        if len(data) % size:
            print(f"  Ignoring {len(data) % size} trailing bytes", flush=True)

    for i, (plane, ptype) in enumerate(zip(planes, plane_types)):
        type_str = '-' if ptype is None else str(ptype)
        print(f"{i:<6} {_fmt_vec(plane.normal):<32} {plane.distance:<12g} {type_str}")
        if args.points:
            for point in generate_three_points(plane, args.scalar):
                print(f"         {_fmt_vec(point)}")

    if args.npy:
        np.save(args.npy, planes_to_array(planes))
        if args.verbose:
            print(f"  Saved {len(planes)} planes to {args.npy}", flush=True)

    print(f"{len(planes)} planes")
    return 0


if __name__ == "__main__":
    sys.exit(main())
