"""
Shared fixtures: synthetic NTv2 files and a grid-shift datum built from one.
"""

import struct
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pytest

from projcore.core.datum import Datum, read_ntv2
from projcore.core.datum.grid import Grid
from projcore.models.ellipsoid import Ellipsoid

# Synthetic grid: 0E..2E, 40N..42N in half-degree cells (arc-seconds, positive west)
SOUTH_LAT = 40 * 3600.0
NORTH_LAT = 42 * 3600.0
EAST_LONG = -2 * 3600.0
WEST_LONG = 0.0
CELL = 1800.0

ShiftFunction = Callable[[float, float], Tuple[float, float]]


def linear_shift(lon_deg: float, lat_deg: float) -> Tuple[float, float]:
    """(lat shift, lon shift) in arc-seconds; lon shift is positive west."""
    return 1.5 + 0.1 * (lat_deg - 40.0), -2.0 + 0.2 * lon_deg


def _field(label: str, value: bytes) -> bytes:
    return label.encode("ascii").ljust(8) + value.ljust(8, b"\0")


def _subfile(
    name: str,
    order: str,
    bounds: Tuple[float, float, float, float],
    cell: float,
    shift: ShiftFunction,
    count: Optional[int] = None,
) -> bytes:
    s_lat, n_lat, e_long, w_long = bounds
    rows = int(round((n_lat - s_lat) / cell)) + 1
    cols = int(round((w_long - e_long) / cell)) + 1

    def dbl(value: float) -> bytes:
        return struct.pack(order + "d", value)

    header = b"".join(
        [
            _field("SUB_NAME", name.encode("ascii")),
            _field("PARENT", b"NONE"),
            _field("CREATED", b"20240101"),
            _field("UPDATED", b"20240101"),
            _field("S_LAT", dbl(s_lat)),
            _field("N_LAT", dbl(n_lat)),
            _field("E_LONG", dbl(e_long)),
            _field("W_LONG", dbl(w_long)),
            _field("LAT_INC", dbl(cell)),
            _field("LONG_INC", dbl(cell)),
            _field("GS_COUNT", struct.pack(order + "i", rows * cols if count is None else count)),
        ]
    )
    assert len(header) == 176

    # Rows run south to north, records within a row run east to west
    records = []
    for row in range(rows):
        lat_deg = (s_lat + row * cell) / 3600.0
        for col in range(cols):
            lon_deg = -(e_long + col * cell) / 3600.0
            dlat, dlon = shift(lon_deg, lat_deg)
            records.append((dlat, dlon, 0.01, 0.01))
    payload = np.asarray(records, dtype=order + "f4").tobytes()
    return header + payload


def build_ntv2(
    subgrids: Sequence[Dict[str, object]],
    order: str = "<",
    gs_type: bytes = b"SECONDS",
) -> bytes:
    """
    Assemble an NTv2 file in memory.

    Each subgrid is a dict with ``name``, ``bounds`` (s_lat, n_lat, e_long,
    w_long in arc-seconds), ``cell`` and ``shift``; ``count`` overrides the
    GS_COUNT field.
    """

    def num(value: int) -> bytes:
        return struct.pack(order + "i", value)

    overview = b"".join(
        [
            _field("NUM_OREC", num(11)),
            _field("NUM_SREC", num(11)),
            _field("NUM_FILE", num(len(subgrids))),
            _field("GS_TYPE", gs_type),
            _field("VERSION", b"NTv2.0"),
            _field("SYSTEM_F", b"TEST"),
            _field("SYSTEM_T", b"WGS84"),
            _field("MAJOR_F", struct.pack(order + "d", 6378388.0)),
            _field("MINOR_F", struct.pack(order + "d", 6356911.946)),
            _field("MAJOR_T", struct.pack(order + "d", 6378137.0)),
            _field("MINOR_T", struct.pack(order + "d", 6356752.314)),
        ]
    )
    assert len(overview) == 176

    parts: List[bytes] = [overview]
    for sub in subgrids:
        parts.append(
            _subfile(
                str(sub["name"]),
                order,
                sub["bounds"],  # type: ignore[arg-type]
                float(sub["cell"]),  # type: ignore[arg-type]
                sub.get("shift", linear_shift),  # type: ignore[arg-type]
                sub.get("count"),  # type: ignore[arg-type]
            )
        )
    parts.append(_field("END", b""))
    return b"".join(parts)


DEFAULT_SUBGRID = {
    "name": "TEST",
    "bounds": (SOUTH_LAT, NORTH_LAT, EAST_LONG, WEST_LONG),
    "cell": CELL,
}


@pytest.fixture
def ntv2_builder():
    """The in-memory NTv2 writer."""
    return build_ntv2


@pytest.fixture
def ntv2_bytes() -> bytes:
    """A single-subfile little-endian NTv2 file with a linear shift field."""
    return build_ntv2([DEFAULT_SUBGRID])


@pytest.fixture
def synthetic_grid(ntv2_bytes: bytes) -> Grid:
    """The decoded synthetic grid."""
    return read_ntv2(ntv2_bytes, name="synthetic.gsb")


@pytest.fixture
def grid_datum(synthetic_grid: Grid) -> Datum:
    """A grid-shift datum on the International ellipsoid."""
    return Datum("synthetic", Ellipsoid.INTERNATIONAL, grids=[synthetic_grid])


@pytest.fixture
def default_subgrid() -> Dict[str, object]:
    """Description of the synthetic subfile, for building variants."""
    return dict(DEFAULT_SUBGRID)
