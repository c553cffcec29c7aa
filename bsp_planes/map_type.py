"""
BSP map format variants and their planes-lump layout.

Two tables describe each format's planes lump:

    RECORD_SIZES   MapType → bytes per plane record (20 or 16)
    LUMP_INDICES   MapType → index of the planes lump in the file header

A format missing from a table does not have a planes lump we know how to
read. New formats must be added here explicitly.

Record layouts (little-endian float32):
    20 bytes: normal.x, normal.y, normal.z, distance, int32 type
              (Quake, Quake 2, Source and their derivatives)
    16 bytes: normal.x, normal.y, normal.z, distance
              (Quake 3 derivatives and Call of Duty)
"""
from __future__ import annotations

from enum import Enum
from typing import Dict


class MapType(Enum):
    """Game engine / file format revision that produced a BSP."""
    UNDEFINED = "undefined"

    QUAKE = "quake"
    QUAKE2 = "quake2"
    QUAKE3 = "quake3"
    DAIKATANA = "daikatana"
    SIN = "sin"
    SOF = "sof"
    NIGHTFIRE = "nightfire"

    SOURCE17 = "source17"
    SOURCE18 = "source18"
    SOURCE19 = "source19"
    SOURCE20 = "source20"
    SOURCE21 = "source21"
    SOURCE22 = "source22"
    SOURCE23 = "source23"
    SOURCE27 = "source27"
    L4D2 = "l4d2"
    DMOMAM = "dmomam"
    VINDICTUS = "vindictus"
    TACTICAL_INTERVENTION_ENCRYPTED = "tacticalinterventionencrypted"
    TITANFALL = "titanfall"

    STEF2 = "stef2"
    STEF2_DEMO = "stef2demo"
    MOHAA = "mohaa"
    RAVEN = "raven"
    FAKK = "fakk"
    COD = "cod"
    COD2 = "cod2"
    COD4 = "cod4"

    @classmethod
    def from_name(cls, name: str) -> MapType:
        """Look up a map type by name, ignoring case, '_' and '-'.

        >>> MapType.from_name("Source-20")
        <MapType.SOURCE20: 'source20'>
        """
        key = name.strip().lower().replace('_', '').replace('-', '')
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unknown map type: {name!r}")


PLANE_RECORD_LARGE = 20
PLANE_RECORD_SMALL = 16

RECORD_SIZES: Dict[MapType, int] = {
    MapType.QUAKE: PLANE_RECORD_LARGE,
    MapType.NIGHTFIRE: PLANE_RECORD_LARGE,
    MapType.SIN: PLANE_RECORD_LARGE,
    MapType.SOF: PLANE_RECORD_LARGE,
    MapType.SOURCE17: PLANE_RECORD_LARGE,
    MapType.SOURCE18: PLANE_RECORD_LARGE,
    MapType.SOURCE19: PLANE_RECORD_LARGE,
    MapType.SOURCE20: PLANE_RECORD_LARGE,
    MapType.SOURCE21: PLANE_RECORD_LARGE,
    MapType.SOURCE22: PLANE_RECORD_LARGE,
    MapType.SOURCE23: PLANE_RECORD_LARGE,
    MapType.SOURCE27: PLANE_RECORD_LARGE,
    MapType.L4D2: PLANE_RECORD_LARGE,
    MapType.DMOMAM: PLANE_RECORD_LARGE,
    MapType.VINDICTUS: PLANE_RECORD_LARGE,
    MapType.QUAKE2: PLANE_RECORD_LARGE,
    MapType.DAIKATANA: PLANE_RECORD_LARGE,
    MapType.TACTICAL_INTERVENTION_ENCRYPTED: PLANE_RECORD_LARGE,

    MapType.STEF2: PLANE_RECORD_SMALL,
    MapType.MOHAA: PLANE_RECORD_SMALL,
    MapType.STEF2_DEMO: PLANE_RECORD_SMALL,
    MapType.RAVEN: PLANE_RECORD_SMALL,
    MapType.QUAKE3: PLANE_RECORD_SMALL,
    MapType.FAKK: PLANE_RECORD_SMALL,
    MapType.COD: PLANE_RECORD_SMALL,
    MapType.COD2: PLANE_RECORD_SMALL,
    MapType.COD4: PLANE_RECORD_SMALL,
}

LUMP_INDICES: Dict[MapType, int] = {
    MapType.FAKK: 1,
    MapType.MOHAA: 1,
    MapType.STEF2: 1,
    MapType.STEF2_DEMO: 1,
    MapType.QUAKE: 1,
    MapType.QUAKE2: 1,
    MapType.SIN: 1,
    MapType.DAIKATANA: 1,
    MapType.SOF: 1,
    MapType.NIGHTFIRE: 1,
    MapType.VINDICTUS: 1,
    MapType.TACTICAL_INTERVENTION_ENCRYPTED: 1,
    MapType.SOURCE17: 1,
    MapType.SOURCE18: 1,
    MapType.SOURCE19: 1,
    MapType.SOURCE20: 1,
    MapType.SOURCE21: 1,
    MapType.SOURCE22: 1,
    MapType.SOURCE23: 1,
    MapType.SOURCE27: 1,
    MapType.L4D2: 1,
    MapType.DMOMAM: 1,

    MapType.COD: 2,
    MapType.RAVEN: 2,
    MapType.QUAKE3: 2,

    MapType.COD4: 4,
    MapType.COD2: 4,
}

# Returned by lump_index() for formats without a known planes lump.
NO_LUMP = -1
