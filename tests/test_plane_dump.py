from __future__ import annotations

import numpy as np
import pytest

from bsp_planes.map_type import MapType
from bsp_planes.plane_dump import main, read_lump_bytes
from bsp_planes.plane_lump import encode_planes
from bsp_planes.vector import Plane

PLANES = [
    Plane((0.0, 0.0, 1.0), 64.0),
    Plane((1.0, 0.0, 0.0), -8.0),
]


@pytest.fixture
def quake_lump(tmp_path):
    path = tmp_path / "planes.lmp"
    path.write_bytes(encode_planes(PLANES, MapType.QUAKE))
    return path


def test_dump_prints_planes(quake_lump, capsys):
    assert main([str(quake_lump), "--map-type", "quake"]) == 0
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert lines[0].startswith("0 ")
    assert "(0 0 1)" in lines[0]
    assert "64" in lines[0]
    assert lines[0].rstrip().endswith("2")
    assert "(1 0 0)" in lines[1]
    assert lines[-1] == "2 planes"


def test_dump_points_and_verbose(quake_lump, capsys):
    assert main([str(quake_lump), "-t", "quake", "--points", "--scalar", "8", "-v"]) == 0
    out = capsys.readouterr().out
    assert "20-byte records" in out
    assert "header slot 1" in out
    assert "(8 8 64)" in out
    assert "(-8 8 64)" in out


def test_dump_byte_range_of_larger_file(tmp_path, capsys):
    path = tmp_path / "map.bsp"
    lump = encode_planes(PLANES, MapType.QUAKE3)
    path.write_bytes(b'\xaa' * 100 + lump + b'\xbb' * 50)
    assert read_lump_bytes(path, 100, len(lump)) == lump
    assert main([str(path), "-t", "quake3", "--offset", "100", "--length", str(len(lump))]) == 0
    out = capsys.readouterr().out
    assert "(0 0 1)" in out
    assert out.splitlines()[-1] == "2 planes"


def test_dump_saves_npy(quake_lump, tmp_path, capsys):
    out_path = tmp_path / "planes.npy"
    assert main([str(quake_lump), "-t", "quake", "--npy", str(out_path)]) == 0
    arr = np.load(out_path)
    np.testing.assert_array_equal(arr, [[0.0, 0.0, 1.0, 64.0], [1.0, 0.0, 0.0, -8.0]])


def test_dump_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.lmp"), "-t", "quake"]) == 1
    assert "ERROR: Lump file not found" in capsys.readouterr().err


def test_dump_unknown_map_type(quake_lump, capsys):
    assert main([str(quake_lump), "-t", "doom3"]) == 1
    assert "ERROR" in capsys.readouterr().err


def test_dump_unsupported_map_type(quake_lump, capsys):
    assert main([str(quake_lump), "-t", "titanfall"]) == 1
    assert "doesn't use a plane lump" in capsys.readouterr().err


def test_dump_requires_lump_and_type(capsys):
    with pytest.raises(SystemExit):
        main(["--map-type", "quake"])


def test_list_types(capsys):
    assert main(["--list-types"]) == 0
    out = capsys.readouterr().out
    cod4 = next(line for line in out.splitlines() if line.startswith("COD4 "))
    assert "16" in cod4 and "4" in cod4
    titanfall = next(line for line in out.splitlines() if line.startswith("TITANFALL "))
    assert "-" in titanfall
